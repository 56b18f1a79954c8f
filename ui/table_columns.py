"""Column definitions of the list tables and helpers working on them."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Iterable

from app.services.collaboration_status import priority_rank, status_rank
from ui.settings import TablePreferences


@dataclass(frozen=True)
class TableColumn:
    id: str
    label: str
    sortable: bool = True
    center: bool = False


COMPANY_COLUMNS = (
    TableColumn("id", "ID", center=True),
    TableColumn("name", "Name"),
    TableColumn("url", "Website"),
    TableColumn("address", "Address"),
    TableColumn("city", "City"),
    TableColumn("zip", "ZIP Code", center=True),
    TableColumn("country", "Country"),
    TableColumn("phone", "Phone", sortable=False),
    TableColumn("budgeting_month", "Budgeting Month"),
    TableColumn("comment", "Comment"),
)

PROJECT_COLUMNS = (
    TableColumn("id", "ID", center=True),
    TableColumn("name", "Name"),
    TableColumn("frGoal", "FR Goal"),
    TableColumn("created_at", "Created", center=True),
    TableColumn("updated_at", "Last update", center=True),
)

PERSON_COLUMNS = (
    TableColumn("id", "ID", center=True),
    TableColumn("companyId", "Company ID", center=True),
    TableColumn("companyName", "Company"),
    TableColumn("name", "Name"),
    TableColumn("email", "Email"),
    TableColumn("phone", "Phone"),
    TableColumn("function", "Function"),
    TableColumn("createdAt", "Created"),
)

CONTACT_COLUMNS = (
    TableColumn("id", "ID", center=True),
    TableColumn("name", "Name"),
    TableColumn("email", "Email"),
    TableColumn("phone", "Phone"),
    TableColumn("function", "Function", center=True),
    TableColumn("createdAt", "Created", center=True),
)

COLLABORATION_COLUMNS = (
    TableColumn("id", "ID", center=True),
    TableColumn("projectName", "Project"),
    TableColumn("companyName", "Company"),
    TableColumn("type", "Type", center=True),
    TableColumn("responsible", "Responsible", center=True),
    TableColumn("priority", "Priority", center=True),
    TableColumn("contactName", "Contact", center=True),
    TableColumn("status", "Status", center=True),
    TableColumn("progress", "Progress"),
    TableColumn("comment", "Comment"),
    TableColumn("amount", "Amount"),
    TableColumn("contactInFuture", "Future Contact", center=True),
    TableColumn("createdAt", "Created", center=True),
    TableColumn("updatedAt", "Last update", center=True),
)

USER_COLUMNS = (
    TableColumn("fullName", "Full Name"),
    TableColumn("email", "Email"),
    TableColumn("role", "Role"),
    TableColumn("description", "Description"),
    TableColumn("isLocked", "Locked"),
    TableColumn("lastLogin", "Last Login"),
    TableColumn("createdAt", "Created At"),
    TableColumn("updatedAt", "Updated At"),
)

TABLE_COLUMNS: dict[str, tuple[TableColumn, ...]] = {
    "companies": COMPANY_COLUMNS,
    "projects": PROJECT_COLUMNS,
    "people": PERSON_COLUMNS,
    "contacts": CONTACT_COLUMNS,
    "users": USER_COLUMNS,
    "collaborations-companies": COLLABORATION_COLUMNS,
    "collaborations-projects": COLLABORATION_COLUMNS,
    "collaborations-users": COLLABORATION_COLUMNS,
}

_COLLABORATION_DEFAULT_TAIL = ["priority", "contactName", "status", "progress", "comment"]

DEFAULT_PREFERENCES: dict[str, TablePreferences] = {
    "companies": TablePreferences(
        ["name", "url", "budgeting_month", "city", "comment"], "name", "asc"
    ),
    "projects": TablePreferences(["name", "frGoal", "created_at"], "name", "asc"),
    "people": TablePreferences(["name", "companyName", "email", "phone", "function"], "name", "asc"),
    "contacts": TablePreferences(["name", "email", "phone", "function"], "name", "asc"),
    "users": TablePreferences(["fullName", "email", "role", "lastLogin"], "fullName", "asc"),
    "collaborations-companies": TablePreferences(
        ["projectName", *_COLLABORATION_DEFAULT_TAIL, "contactInFuture"], "priority", "desc"
    ),
    "collaborations-projects": TablePreferences(
        ["companyName", *_COLLABORATION_DEFAULT_TAIL, "amount"], "priority", "desc"
    ),
    "collaborations-users": TablePreferences(
        ["projectName", "companyName", *_COLLABORATION_DEFAULT_TAIL], "priority", "desc"
    ),
}

# columns that stay visible whatever the saved selection
REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "companies": ("name",),
    "projects": ("name",),
    "people": ("name",),
    "contacts": ("name",),
    "users": ("fullName",),
    "collaborations-companies": ("projectName",),
    "collaborations-projects": ("companyName",),
    "collaborations-users": ("projectName", "companyName"),
}

_ALIASES = {"contactName": "personName"}


def default_preferences(table_id: str) -> TablePreferences:
    prefs = DEFAULT_PREFERENCES[table_id]
    return replace(prefs, visible_columns=list(prefs.visible_columns))


def required_columns(table_id: str) -> list[str]:
    return list(REQUIRED_COLUMNS[table_id])


def update_visible_columns(requested: Iterable[str], required_column: str | None) -> list[str]:
    """Return ``requested`` with ``required_column`` in front when it is missing.

    Entries already present are left untouched, duplicates included.
    """
    columns = list(requested)
    if required_column and required_column not in columns:
        columns.insert(0, required_column)
    return columns


def with_required_columns(table_id: str, requested: Iterable[str]) -> list[str]:
    """Apply :func:`update_visible_columns` for every required column of the table."""
    columns = list(requested)
    for column_id in reversed(REQUIRED_COLUMNS[table_id]):
        columns = update_visible_columns(columns, column_id)
    return columns


def toggle_sort(preferences: TablePreferences, field: str) -> TablePreferences:
    if preferences.sort_field == field:
        direction = "desc" if preferences.sort_direction == "asc" else "asc"
        return replace(preferences, sort_direction=direction)
    return replace(preferences, sort_field=field, sort_direction="asc")


def is_column_visible(preferences: TablePreferences, column_id: str) -> bool:
    return column_id in preferences.visible_columns


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def row_value(row: Any, column_id: str) -> Any:
    """Read a column from a mapping or an object, by camel or snake case name."""
    key = _ALIASES.get(column_id, column_id)
    for candidate in dict.fromkeys((key, _snake(key), _camel(key))):
        if isinstance(row, Mapping):
            if candidate in row:
                return row[candidate]
        elif hasattr(row, candidate):
            return getattr(row, candidate)
    return None


def _sort_value(row: Any, field: str) -> Any:
    if field == "priority":
        return priority_rank(row_value(row, "priority"))
    if field in ("status", "progress"):
        return status_rank(row)
    value = row_value(row, field)
    if isinstance(value, str):
        value = value.strip().lower()
        return value or None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time())
    return value


def sort_rows(rows: Iterable[Any], preferences: TablePreferences) -> list[Any]:
    """Sort rows by the preferred column; empty values always go last."""
    rows = list(rows)
    field = preferences.sort_field
    if not field:
        return rows
    keyed = [(_sort_value(row, field), row) for row in rows]
    filled = [item for item in keyed if item[0] is not None]
    empty = [row for value, row in keyed if value is None]
    filled.sort(key=lambda item: item[0], reverse=preferences.sort_direction == "desc")
    return [row for _, row in filled] + empty
