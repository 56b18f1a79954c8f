from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ui.settings import TablePreferences
from ui.table_columns import (
    TABLE_COLUMNS,
    default_preferences,
    with_required_columns,
)
from ..schemas import TablePreferencesBody
from ..services.errors import NotFoundError
from .deps import get_context

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _check_table(table_id: str) -> None:
    if table_id not in TABLE_COLUMNS:
        raise NotFoundError(f"Unknown table: {table_id}")


@router.get("/{table_id}", response_model=TablePreferencesBody)
def read_preferences(table_id: str, context: AppContext = Depends(get_context)):
    _check_table(table_id)
    prefs = context.preferences_repository.get(table_id, default_preferences(table_id))
    prefs.visible_columns = with_required_columns(table_id, prefs.visible_columns)
    return TablePreferencesBody.model_validate(prefs)


@router.put("/{table_id}", response_model=TablePreferencesBody)
def save_preferences(
    table_id: str,
    body: TablePreferencesBody,
    context: AppContext = Depends(get_context),
):
    _check_table(table_id)
    prefs = TablePreferences(
        visible_columns=with_required_columns(table_id, body.visible_columns),
        sort_field=body.sort_field,
        sort_direction=body.sort_direction,
    )
    context.preferences_repository.set(table_id, prefs)
    return TablePreferencesBody.model_validate(prefs)


@router.delete("/{table_id}")
def reset_preferences(table_id: str, context: AppContext = Depends(get_context)):
    _check_table(table_id)
    context.preferences_repository.clear(table_id)
    return {"message": "Preferences reset"}
