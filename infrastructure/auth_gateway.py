from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionIdentity:
    """User behind a valid session cookie."""

    id: str
    email: str | None = None
    name: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "SessionIdentity | None":
        user = payload.get("user") if isinstance(payload, dict) else None
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return cls(id=str(user["id"]), email=user.get("email"), name=user.get("name"))


@dataclass
class AuthGateway:
    """Client for the external session endpoint of the auth provider."""

    settings: Settings
    _session: requests.Session = field(default_factory=requests.Session, init=False, repr=False)

    @property
    def session_url(self) -> str:
        return f"{self.settings.auth_base_url}{self.settings.auth_session_path}"

    def get_session(self, cookie: str | None) -> SessionIdentity | None:
        """Return the identity for ``cookie`` or ``None`` when there is no session."""

        if not cookie:
            return None
        try:
            response = self._session.get(
                self.session_url,
                headers={"cookie": cookie},
                timeout=self.settings.auth_timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Session lookup failed: %s", exc)
            return None
        if response.status_code != 200:
            logger.debug("Session lookup answered %s", response.status_code)
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Session endpoint returned invalid JSON")
            return None
        if not payload:
            return None
        return SessionIdentity.from_payload(payload)
