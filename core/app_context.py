"""Application context: settings plus the shared gateways built from them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from config import Settings, get_settings
from infrastructure.auth_gateway import AuthGateway
from ui.incremental_list import SEARCH_FIELDS, IncrementalList, SearchDebouncer
from ui.settings import JsonFileStorage, TablePreferencesRepository


def _default_preferences_repository(settings: Settings) -> TablePreferencesRepository:
    return TablePreferencesRepository(JsonFileStorage(settings.table_preferences_path))


class AppContext:
    """Holds the settings and lazily creates the auth gateway and preference store."""

    def __init__(
        self,
        settings: Settings,
        *,
        auth_gateway: AuthGateway | None = None,
        preferences_repository: TablePreferencesRepository | None = None,
    ) -> None:
        self._settings = settings
        self._auth_gateway = auth_gateway
        self._preferences_repository = preferences_repository

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def auth_gateway(self) -> AuthGateway:
        if self._auth_gateway is None:
            self._auth_gateway = AuthGateway(self._settings)
        return self._auth_gateway

    @property
    def preferences_repository(self) -> TablePreferencesRepository:
        if self._preferences_repository is None:
            self._preferences_repository = _default_preferences_repository(self._settings)
        return self._preferences_repository

    def override(
        self,
        *,
        settings: Settings | None = None,
        auth_gateway: AuthGateway | None = None,
        preferences_repository: TablePreferencesRepository | None = None,
    ) -> "AppContext":
        """New context with the given pieces replaced.

        Gateways already built for the current settings are carried over;
        a new ``settings`` object drops them so they are rebuilt from it.
        """
        keep = settings is None or settings is self._settings
        return AppContext(
            settings or self._settings,
            auth_gateway=auth_gateway or (self._auth_gateway if keep else None),
            preferences_repository=preferences_repository
            or (self._preferences_repository if keep else None),
        )

    def incremental_list(self, entity: str, items: Sequence[Any] = ()) -> IncrementalList:
        """Searchable list of ``entity`` rows revealed in configured batches."""
        return IncrementalList(
            items,
            SEARCH_FIELDS[entity],
            batch_size=self._settings.table_batch_size,
            load_more_threshold=self._settings.load_more_threshold_px,
        )

    def search_debouncer(self, callback: Callable[[str], Any]) -> SearchDebouncer:
        return SearchDebouncer(callback, delay_ms=self._settings.search_debounce_ms)


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Return the process-wide application context, creating it on first use."""

    global _app_context
    if _app_context is None:
        _app_context = AppContext(get_settings())
    return _app_context


__all__ = ["AppContext", "get_app_context"]
