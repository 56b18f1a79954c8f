import os
import signal
import sys
import tempfile
from pathlib import Path

import pytest

# Force tests to use in-memory SQLite by default to avoid touching any real DB.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="cdb-test-logs-"))
os.environ.setdefault("ALLOWED_EMAIL_DOMAINS", "example.org")

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.db import Base, engine, get_session, is_memory_database  # noqa: E402
from app.models import AppUser, UserRole  # noqa: E402
from core.app_context import get_app_context  # noqa: E402
from infrastructure.auth_gateway import SessionIdentity  # noqa: E402
from ui.settings import MemoryStorage, TablePreferencesRepository  # noqa: E402

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TIMEOUT", "60"))

ADMIN_COOKIE = "session=admin"
OBSERVER_COOKIE = "session=observer"
STRANGER_COOKIE = "session=stranger"


@pytest.fixture(autouse=True)
def watchdog():
    """Fail a test if it hangs longer than the timeout."""
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    def handler(signum, frame):  # pragma: no cover - timeout handler
        pytest.fail("Test timeout exceeded", pytrace=False)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(_TEST_TIMEOUT)
    try:
        yield
    finally:
        signal.alarm(0)


def pytest_runtest_logstart(nodeid, location):
    print(f"-- START {nodeid}")


def pytest_runtest_logfinish(nodeid, location):
    print(f"-- FINISH {nodeid}")


class FakeAuthGateway:
    """Maps cookie headers to identities instead of calling the provider."""

    def __init__(self, sessions: dict[str, SessionIdentity] | None = None):
        self.sessions = dict(sessions or {})
        self.calls: list[str | None] = []

    def get_session(self, cookie):
        self.calls.append(cookie)
        return self.sessions.get(cookie or "")


@pytest.fixture()
def db_session():
    # Safety guard: never run tests against a non in-memory DB.
    if not is_memory_database(engine.url):
        raise RuntimeError("Refusing to run tests on a non in-memory database")

    Base.metadata.create_all(engine)
    session = Session(bind=engine)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture()
def auth_gateway():
    return FakeAuthGateway(
        {
            ADMIN_COOKIE: SessionIdentity("admin-1", "admin@example.org", "Ada Admin"),
            OBSERVER_COOKIE: SessionIdentity("observer-1", "olga@example.org", "Olga Observer"),
            STRANGER_COOKIE: SessionIdentity("stranger-1", "who@elsewhere.com", "Stranger"),
        }
    )


@pytest.fixture()
def preferences_storage():
    return MemoryStorage()


@pytest.fixture()
def web_app(db_session, auth_gateway, preferences_storage):
    from app.main import create_app

    context = get_app_context().override(
        auth_gateway=auth_gateway,
        preferences_repository=TablePreferencesRepository(preferences_storage),
    )
    application = create_app(context)

    def override_get_session():
        sess = Session(bind=engine)
        try:
            yield sess
        finally:
            sess.close()

    application.dependency_overrides[get_session] = override_get_session
    return application


@pytest.fixture()
def seeded_users(db_session):
    db_session.add_all(
        [
            AppUser(
                id="admin-1",
                full_name="Ada Admin",
                email="admin@example.org",
                role=UserRole.ADMINISTRATOR,
            ),
            AppUser(
                id="observer-1",
                full_name="Olga Observer",
                email="olga@example.org",
                role=UserRole.OBSERVER,
            ),
        ]
    )
    db_session.commit()


@pytest.fixture()
def anonymous_client(web_app):
    with TestClient(web_app) as client:
        yield client


@pytest.fixture()
def client(web_app, seeded_users):
    """Client signed in as the administrator."""
    with TestClient(web_app, headers={"cookie": ADMIN_COOKIE}) as client:
        yield client


@pytest.fixture()
def observer_client(web_app, seeded_users):
    with TestClient(web_app, headers={"cookie": OBSERVER_COOKIE}) as client:
        yield client
