from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_session
from ..models import AppUser
from ..schemas import AddedByUser, UserCreate, UserRead, UserUpdate
from ..services.user_service import (
    create_user,
    delete_user,
    get_user,
    list_users,
    resolve_added_by,
    update_user,
)
from .deps import require_admin

router = APIRouter(prefix="/users", tags=["users"])


def _to_read(session: Session, user: AppUser) -> UserRead:
    data = UserRead.model_validate(user)
    if user.added_by:
        added_by = resolve_added_by(session, user)
        # adder account deleted since
        data.added_by_user = (
            AddedByUser.model_validate(added_by)
            if added_by is not None
            else AddedByUser(id=user.added_by)
        )
    return data


@router.get("", response_model=list[UserRead])
def read_users(session: Session = Depends(get_session)):
    return [_to_read(session, user) for user in list_users(session)]


@router.post("", response_model=UserRead, status_code=201)
def add_user(
    user_in: UserCreate,
    session: Session = Depends(get_session),
    current_user: AppUser = Depends(require_admin),
):
    user = create_user(session, added_by=current_user.id, **user_in.model_dump())
    return _to_read(session, user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: str, session: Session = Depends(get_session)):
    return _to_read(session, get_user(session, user_id))


@router.put("/{user_id}", response_model=UserRead)
def edit_user(
    user_id: str,
    user_in: UserUpdate,
    session: Session = Depends(get_session),
    current_user: AppUser = Depends(require_admin),
):
    user = update_user(session, user_id, **user_in.model_dump(exclude_unset=True))
    return _to_read(session, user)


@router.delete("/{user_id}")
def remove_user(
    user_id: str,
    session: Session = Depends(get_session),
    current_user: AppUser = Depends(require_admin),
):
    delete_user(session, user_id)
    return {"message": "User deleted successfully"}
