from types import SimpleNamespace

import pytest

from app.services.collaboration_status import (
    priority_rank,
    status_color,
    status_rank,
    status_text,
)


def make(**flags):
    base = {"contacted": False, "letter": False, "meeting": None, "successful": None}
    base.update(flags)
    return SimpleNamespace(**base)


def test_priority_rank_is_ordered():
    assert priority_rank("low") < priority_rank("medium") < priority_rank("high")


@pytest.mark.parametrize("value", ["", "urgent", None, 5, "lowest"])
def test_unknown_priority_ranks_below_low(value):
    assert priority_rank(value) < priority_rank("low")


def test_priority_rank_ignores_case_and_spaces():
    assert priority_rank(" High ") == priority_rank("high") == 3


@pytest.mark.parametrize(
    "flags",
    [
        {},
        {"contacted": True},
        {"letter": True, "meeting": True},
        {"contacted": True, "letter": True, "meeting": False},
    ],
)
def test_successful_dominates_status_text(flags):
    record = make(successful=True, **flags)
    assert status_text(record) == "Successful"
    assert status_color(record) == "green"


def test_status_text_labels():
    assert status_text(make(successful=False, contacted=True)) == "Failed"
    assert status_text(make(contacted=True)) == "Contacted"
    assert status_text(make()) == "Not contacted"
    assert status_text(None) == "Unknown"
    assert status_color(None) == "gray"


def test_status_text_reads_mappings():
    assert status_text({"contacted": True, "successful": None}) == "Contacted"


def test_status_rank_orders_progress():
    ranks = [
        status_rank(make()),
        status_rank(make(contacted=True)),
        status_rank(make(contacted=True, letter=True)),
        status_rank(make(contacted=True, letter=True, meeting=True)),
        status_rank(make(contacted=True, successful=True)),
    ]
    assert ranks == [0, 1, 2, 3, 4]


def test_status_rank_and_text_use_different_precedence():
    record = make(meeting=True)
    assert status_rank(record) == 3
    assert status_text(record) == "Not contacted"
