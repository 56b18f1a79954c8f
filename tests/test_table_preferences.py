import json

import pytest

from ui.settings import (
    APP_STORAGE_KEY,
    JsonFileStorage,
    MemoryStorage,
    TablePreferences,
    TablePreferencesRepository,
)
from ui.table_columns import (
    default_preferences,
    is_column_visible,
    required_columns,
    toggle_sort,
    update_visible_columns,
    with_required_columns,
)


@pytest.fixture()
def defaults():
    return TablePreferences(["name", "city"], "name", "asc")


def test_get_returns_defaults_when_never_written(defaults):
    repo = TablePreferencesRepository(MemoryStorage())
    assert repo.get("companies", defaults) == defaults


def test_get_returns_defaults_without_storage(defaults):
    repo = TablePreferencesRepository(None)
    repo.set("companies", TablePreferences(["name"], "city", "desc"))
    assert not repo.available
    assert repo.get("companies", defaults) == defaults


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"'])
def test_broken_storage_falls_back_to_defaults(defaults, raw):
    repo = TablePreferencesRepository(MemoryStorage({APP_STORAGE_KEY: raw}))
    assert repo.get("companies", defaults) == defaults


@pytest.mark.parametrize(
    "stored, expected",
    [
        ({"sortDirection": "up"}, TablePreferences(["name", "city"], "name", "asc")),
        ({"sortField": 7, "sortDirection": "desc"}, TablePreferences(["name", "city"], "name", "desc")),
        ({"visibleColumns": "name"}, TablePreferences(["name", "city"], "name", "asc")),
        ({"visibleColumns": ["zip", None]}, TablePreferences(["name", "city"], "name", "asc")),
        ({"visibleColumns": ["zip"], "extra": 1}, TablePreferences(["zip"], "name", "asc")),
    ],
)
def test_invalid_stored_fields_keep_defaults(defaults, stored, expected):
    storage = MemoryStorage({APP_STORAGE_KEY: json.dumps({"companies": stored})})
    repo = TablePreferencesRepository(storage)
    assert repo.get("companies", defaults) == expected


def test_set_then_get(defaults):
    storage = MemoryStorage()
    repo = TablePreferencesRepository(storage)
    prefs = TablePreferences(["name", "country"], "country", "desc")
    repo.set("companies", prefs)

    assert repo.get("companies", defaults) == prefs
    stored = json.loads(storage.items[APP_STORAGE_KEY])
    assert stored["companies"] == {
        "visibleColumns": ["name", "country"],
        "sortField": "country",
        "sortDirection": "desc",
    }


def test_partial_record_is_merged_over_defaults(defaults):
    storage = MemoryStorage({APP_STORAGE_KEY: json.dumps({"companies": {"sortDirection": "desc"}})})
    repo = TablePreferencesRepository(storage)

    prefs = repo.get("companies", defaults)

    assert prefs.visible_columns == ["name", "city"]
    assert prefs.sort_field == "name"
    assert prefs.sort_direction == "desc"


def test_set_keeps_other_tables(defaults):
    storage = MemoryStorage()
    repo = TablePreferencesRepository(storage)
    repo.set("companies", TablePreferences(["name"], "name", "asc"))
    repo.set("projects", TablePreferences(["name", "frGoal"], "frGoal", "desc"))

    data = json.loads(storage.items[APP_STORAGE_KEY])
    assert set(data) == {"companies", "projects"}


def test_clear_and_clear_all(defaults):
    storage = MemoryStorage()
    repo = TablePreferencesRepository(storage)
    repo.set("companies", TablePreferences(["name"], "city", "desc"))
    repo.set("projects", TablePreferences(["name"], "name", "desc"))

    repo.clear("companies")
    assert repo.get("companies", defaults) == defaults
    assert repo.get("projects", defaults).sort_direction == "desc"

    repo.clear_all()
    assert APP_STORAGE_KEY not in storage.items


def test_json_file_storage_round_trip(tmp_path, defaults):
    path = tmp_path / "nested" / "prefs.json"
    repo = TablePreferencesRepository(JsonFileStorage(path))
    repo.set("people", TablePreferences(["name", "email"], "email", "asc"))

    reopened = TablePreferencesRepository(JsonFileStorage(path))
    assert reopened.get("people", defaults).visible_columns == ["name", "email"]
    assert APP_STORAGE_KEY in json.loads(path.read_text(encoding="utf-8"))


def test_unreadable_file_is_ignored(tmp_path, defaults):
    path = tmp_path / "prefs.json"
    path.write_text("garbage", encoding="utf-8")
    repo = TablePreferencesRepository(JsonFileStorage(path))
    assert repo.get("people", defaults) == defaults


@pytest.mark.parametrize(
    "requested",
    [[], ["city"], ["name", "city"], ["city", "name"], ["name", "name"]],
)
def test_update_visible_columns_always_contains_required(requested):
    assert "name" in update_visible_columns(requested, "name")


def test_update_visible_columns_prepends_missing_required():
    assert update_visible_columns(["city", "zip"], "name") == ["name", "city", "zip"]
    assert update_visible_columns(["city", "name"], "name") == ["city", "name"]


def test_toggle_sort_twice_returns_to_start():
    prefs = TablePreferences(["name"], "name", "asc")
    once = toggle_sort(prefs, "name")
    assert once.sort_direction == "desc"
    assert toggle_sort(once, "name") == prefs


def test_toggle_sort_new_field_resets_direction():
    prefs = TablePreferences(["name"], "name", "desc")
    assert toggle_sort(prefs, "city") == TablePreferences(["name"], "city", "asc")


def test_default_preferences_are_copies():
    prefs = default_preferences("companies")
    prefs.visible_columns.append("zip")
    assert "zip" not in default_preferences("companies").visible_columns
    assert is_column_visible(default_preferences("companies"), "name")


def test_required_columns_of_collaborations():
    assert required_columns("collaborations-projects") == ["companyName"]
    assert required_columns("collaborations-companies") == ["projectName"]
    assert required_columns("collaborations-users") == ["projectName", "companyName"]


@pytest.mark.parametrize(
    "requested, expected",
    [
        (["priority"], ["projectName", "companyName", "priority"]),
        (["companyName", "status"], ["projectName", "companyName", "status"]),
        (["status", "projectName"], ["companyName", "status", "projectName"]),
        (["projectName", "companyName"], ["projectName", "companyName"]),
    ],
)
def test_every_required_column_is_kept(requested, expected):
    assert with_required_columns("collaborations-users", requested) == expected


def test_single_required_column():
    assert with_required_columns("companies", ["city"]) == ["name", "city"]
    assert with_required_columns("users", []) == ["fullName"]
