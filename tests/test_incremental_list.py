from types import SimpleNamespace

import pytest

from ui.incremental_list import SEARCH_FIELDS, IncrementalList, SearchDebouncer, matches


def companies(count):
    return [
        {"name": f"Company {i}", "city": "Zagreb" if i % 2 else "Split", "country": "HR"}
        for i in range(count)
    ]


def test_empty_query_returns_everything():
    items = companies(5)
    view = IncrementalList(items, SEARCH_FIELDS["companies"])
    assert view.filtered == items
    view.set_query("   ")
    assert view.filtered == items


def test_filter_is_case_insensitive_across_fields():
    view = IncrementalList(companies(10), SEARCH_FIELDS["companies"])
    view.set_query("zAGreb")
    assert view.total_count == 5
    view.set_query("company 7")
    assert [item["name"] for item in view.filtered] == ["Company 7"]


def test_visible_grows_in_batches():
    view = IncrementalList(companies(75), SEARCH_FIELDS["companies"], batch_size=30)
    assert len(view.visible) == 30
    assert view.has_more

    view.load_more()
    assert view.visible_count == 60
    view.load_more()
    assert view.visible_count == 75
    assert not view.has_more


def test_load_more_never_exceeds_filtered_length():
    view = IncrementalList(companies(45), SEARCH_FIELDS["companies"], batch_size=30)
    for _ in range(5):
        view.load_more()
        assert view.visible_count <= view.total_count
    assert view.visible_count == 45

    view.load_more()
    assert view.visible_count == 45


def test_query_change_resets_visible_count():
    view = IncrementalList(companies(90), SEARCH_FIELDS["companies"], batch_size=30)
    view.load_more()
    assert view.visible_count == 60
    view.set_query("split")
    assert view.visible_count == 30


def test_empty_collection():
    view = IncrementalList([], SEARCH_FIELDS["companies"])
    assert view.filtered == []
    assert view.visible == []
    assert not view.has_more
    view.load_more()
    assert view.visible == []


def test_on_scroll_uses_threshold():
    view = IncrementalList(companies(70), SEARCH_FIELDS["companies"], batch_size=30)
    assert view.on_scroll(5000) is False
    assert view.visible_count == 30
    assert view.on_scroll(2000) is True
    assert view.visible_count == 60


def test_objects_and_camel_case_mappings():
    collaboration = SimpleNamespace(
        company_name="Acme", project_name="Expo", person_name=None,
        responsible="Ivan", comment=None, type="financial",
    )
    assert matches(collaboration, "expo", SEARCH_FIELDS["collaborations"])
    assert matches({"companyName": "Acme"}, "acm", SEARCH_FIELDS["collaborations"])
    assert not matches({"fullName": "Ana"}, "bob", SEARCH_FIELDS["users"])


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        IncrementalList([], (), batch_size=0)


def test_debouncer_delivers_latest_query_on_flush():
    received = []
    debouncer = SearchDebouncer(received.append, delay_ms=10_000)
    debouncer.submit("a")
    debouncer.submit("ac")
    debouncer.submit("acme")
    assert received == []

    debouncer.flush()
    assert received == ["acme"]
    debouncer.flush()
    assert received == ["acme"]


def test_debouncer_cancel_drops_pending_query():
    received = []
    debouncer = SearchDebouncer(received.append, delay_ms=10_000)
    debouncer.submit("acme")
    debouncer.cancel()
    debouncer.flush()
    assert received == []
