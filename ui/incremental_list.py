"""Client-side search over a loaded list with incremental reveal of rows."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Sequence

DEFAULT_BATCH_SIZE = 30
DEFAULT_LOAD_MORE_THRESHOLD = 2160

SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    "companies": ("name", "city", "country", "comment"),
    "collaborations": (
        "company_name",
        "project_name",
        "person_name",
        "responsible",
        "comment",
        "type",
    ),
    "projects": ("name",),
    "people": ("name", "email", "phone", "function"),
    "contacts": ("name", "email", "phone", "function"),
    "users": ("full_name", "email"),
}


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        if name in item:
            return item[name]
        head, *rest = name.split("_")
        return item.get(head + "".join(part.title() for part in rest))
    return getattr(item, name, None)


def matches(item: Any, query: str, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match against any of ``fields``."""
    needle = query.strip().lower()
    if not needle:
        return True
    for name in fields:
        value = _field(item, name)
        if value is not None and needle in str(value).lower():
            return True
    return False


class IncrementalList:
    """Filtered view over ``items`` that grows by ``batch_size`` rows at a time."""

    def __init__(
        self,
        items: Sequence[Any] = (),
        search_fields: Iterable[str] = (),
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        load_more_threshold: int = DEFAULT_LOAD_MORE_THRESHOLD,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._items = list(items)
        self._fields = tuple(search_fields)
        self.batch_size = batch_size
        self.load_more_threshold = load_more_threshold
        self._query = ""
        self._filtered = list(self._items)
        self.visible_count = batch_size

    @property
    def query(self) -> str:
        return self._query

    def set_items(self, items: Sequence[Any]) -> None:
        self._items = list(items)
        self._refilter()

    def set_query(self, query: str | None) -> None:
        self._query = query or ""
        self._refilter()

    def _refilter(self) -> None:
        self._filtered = [
            item for item in self._items if matches(item, self._query, self._fields)
        ]
        self.visible_count = self.batch_size

    @property
    def filtered(self) -> list[Any]:
        return list(self._filtered)

    @property
    def total_count(self) -> int:
        return len(self._filtered)

    @property
    def visible(self) -> list[Any]:
        return self._filtered[: self.visible_count]

    @property
    def has_more(self) -> bool:
        return self.visible_count < len(self._filtered)

    def load_more(self) -> None:
        if not self.has_more:
            return
        self.visible_count = min(self.visible_count + self.batch_size, len(self._filtered))

    def on_scroll(self, distance_from_bottom: float) -> bool:
        """Reveal the next batch when the viewer is close to the end.

        Returns ``True`` when more rows were revealed.
        """
        if distance_from_bottom < self.load_more_threshold and self.has_more:
            self.load_more()
            return True
        return False


class SearchDebouncer:
    """Delays ``callback`` until no new query arrived for ``delay_ms``."""

    def __init__(self, callback: Callable[[str], Any], delay_ms: int = 300) -> None:
        self._callback = callback
        self._delay = delay_ms / 1000
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: str | None = None

    def submit(self, query: str) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = query
            self._timer = threading.Timer(self._delay, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Deliver the pending query right away."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            query, self._pending = self._pending, None
        if query is not None:
            self._callback(query)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
