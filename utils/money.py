"""Formatting helpers for amounts, dates and company websites."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

_TWO_PLACES = Decimal("0.01")
EMPTY_PLACEHOLDER = "—"

# Projects created before the euro changeover are displayed in kuna.
EURO_CHANGEOVER = datetime(2023, 1, 1)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _to_datetime(value: date | datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text or text == "null":
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def _group_thousands(amount: Decimal) -> str:
    return f"{amount:,.2f}".replace(",", "\u202f")


def format_eur(value: Any) -> str:
    """Format a value in euros, e.g. ``€1 234.50``."""

    amount = _to_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return f"€{_group_thousands(amount)}"


def format_hrk(value: Any) -> str:
    """Format a value in kuna using the Croatian separators, e.g. ``1.234,50 kn``."""

    amount = _to_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    formatted = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{formatted} kn"


def format_amount(amount: Any, project_created_at: date | datetime | str | None) -> str:
    """Format a collaboration amount in the currency of its project."""

    if not amount:
        return EMPTY_PLACEHOLDER
    created = _to_datetime(project_created_at)
    if created is not None and created < EURO_CHANGEOVER:
        return format_hrk(amount)
    return format_eur(amount)


def format_date(value: date | datetime | str | None) -> str:
    """Format a date as ``d.m.yyyy.`` or return a dash for empty input."""

    parsed = _to_datetime(value)
    if parsed is None:
        return EMPTY_PLACEHOLDER
    return f"{parsed.day}.{parsed.month}.{parsed.year}."


def format_url(url: str | None) -> dict[str, str] | None:
    """Split a stored website into a display label and a clickable link."""

    if not url or url == "null":
        return None
    if url.startswith(("http://", "https://")):
        link = url
        label = url.split("://", 1)[1]
    else:
        link = f"https://{url}"
        label = url
    if label.startswith("www."):
        label = label[len("www."):]
    return {"label": label, "link": link}
