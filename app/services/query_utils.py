"""Utility helpers for building filtered SQLAlchemy queries."""

from typing import Iterable

from sqlalchemy import Select, String, cast, or_
from sqlalchemy.sql.elements import ColumnElement


def build_or_condition(
    columns: Iterable[ColumnElement], value: str
) -> ColumnElement | None:
    """Build a case-insensitive ``column LIKE %value%`` condition joined by ``OR``.

    Returns ``None`` when the search text is blank or no columns are given.
    """
    text = (value or "").strip()
    if not text:
        return None
    pattern = f"%{text}%"
    conditions = [cast(column, String).ilike(pattern) for column in columns]
    if not conditions:
        return None
    return or_(*conditions)


def apply_search(
    query: Select, columns: Iterable[ColumnElement], search_text: str | None
) -> Select:
    """Apply substring search across ``columns`` to a select statement."""
    condition = build_or_condition(columns, search_text or "")
    if condition is not None:
        query = query.where(condition)
    return query
