"""Status and priority derivation for collaboration records.

``status_text`` and ``status_rank`` use different precedence: the label only
reflects the outcome and the contact flag, while the rank also orders meetings
above letters. Keep them apart until the intended behaviour is confirmed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

SUCCESSFUL = "Successful"
FAILED = "Failed"
CONTACTED = "Contacted"
NOT_CONTACTED = "Not contacted"
UNKNOWN = "Unknown"

STATUS_COLORS = {
    SUCCESSFUL: "green",
    FAILED: "red",
    CONTACTED: "amber",
    NOT_CONTACTED: "gray",
    UNKNOWN: "gray",
}

PRIORITY_RANKS = {"high": 3, "medium": 2, "low": 1}


def _flag(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def status_text(record: Any) -> str:
    """Human readable status; the outcome dominates the contact state."""

    if record is None:
        return UNKNOWN
    successful = _flag(record, "successful")
    if successful is True:
        return SUCCESSFUL
    if successful is False:
        return FAILED
    if _flag(record, "contacted"):
        return CONTACTED
    return NOT_CONTACTED


def status_color(record: Any) -> str:
    return STATUS_COLORS[status_text(record)]


def status_rank(record: Any) -> int:
    """Sort rank: successful > meeting > letter > contacted > nothing."""

    if record is None:
        return 0
    if _flag(record, "successful"):
        return 4
    if _flag(record, "meeting"):
        return 3
    if _flag(record, "letter"):
        return 2
    if _flag(record, "contacted"):
        return 1
    return 0


def priority_rank(priority: Any) -> int:
    if not isinstance(priority, str):
        return 0
    return PRIORITY_RANKS.get(priority.strip().lower(), 0)
