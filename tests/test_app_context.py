from config import Settings
from core.app_context import AppContext
from ui.settings import MemoryStorage, TablePreferencesRepository


def _settings(tmp_path, **kwargs):
    return Settings(
        log_dir=str(tmp_path),
        table_preferences_path=str(tmp_path / "prefs.json"),
        **kwargs,
    )


def test_incremental_list_uses_configured_batch_and_threshold(tmp_path):
    context = AppContext(_settings(tmp_path, table_batch_size=5, load_more_threshold_px=100))
    rows = [{"name": f"Company {i}"} for i in range(12)]

    view = context.incremental_list("companies", rows)

    assert view.batch_size == 5
    assert view.load_more_threshold == 100
    assert len(view.visible) == 5
    assert not view.on_scroll(150)
    assert view.on_scroll(50)
    assert len(view.visible) == 10


def test_search_debouncer_uses_configured_delay(tmp_path):
    received = []
    context = AppContext(_settings(tmp_path, search_debounce_ms=40))

    debouncer = context.search_debouncer(received.append)
    debouncer.submit("acme")
    debouncer.flush()

    assert debouncer._delay == 0.04
    assert received == ["acme"]


def test_dependencies_are_built_once(tmp_path):
    context = AppContext(_settings(tmp_path))

    assert context.preferences_repository is context.preferences_repository
    assert context.auth_gateway is context.auth_gateway


def test_override_replaces_only_given_dependencies(tmp_path):
    context = AppContext(_settings(tmp_path))
    gateway = context.auth_gateway
    repository = TablePreferencesRepository(MemoryStorage())

    overridden = context.override(preferences_repository=repository)

    assert overridden.preferences_repository is repository
    assert overridden.auth_gateway is gateway
    assert context.preferences_repository is not repository


def test_override_with_new_settings_rebuilds_gateways(tmp_path):
    context = AppContext(_settings(tmp_path))
    gateway = context.auth_gateway
    settings = _settings(tmp_path, auth_timeout_seconds=1.0)

    overridden = context.override(settings=settings)

    assert overridden.settings is settings
    assert overridden.auth_gateway is not gateway
