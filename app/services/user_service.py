import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import AppUser, UserRole, utcnow
from .errors import ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

USER_ALLOWED_FIELDS = {"full_name", "email", "role", "description", "is_locked"}


def list_users(session: Session) -> list[AppUser]:
    return list(session.scalars(select(AppUser).order_by(AppUser.created_at.desc())))


def get_user(session: Session, user_id: str) -> AppUser:
    user = session.get(AppUser, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(session: Session, email: str) -> AppUser | None:
    return session.scalars(select(AppUser).where(AppUser.email == email)).first()


def resolve_added_by(session: Session, user: AppUser) -> AppUser | None:
    """The user who added ``user``, if that account still exists."""
    if not user.added_by:
        return None
    return session.get(AppUser, user.added_by)


def create_user(session: Session, *, added_by: str | None = None, **kwargs) -> AppUser:
    data = {k: v for k, v in kwargs.items() if k in USER_ALLOWED_FIELDS}
    now = utcnow()
    user = AppUser(
        id=str(uuid.uuid4()),
        created_at=now,
        updated_at=now,
        added_by=added_by,
        last_login=None,
        **data,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(f"User with email {data.get('email')} already exists") from exc
    session.refresh(user)
    logger.info("👤 Created user %s (%s) added by %s", user.email, user.role, added_by)
    return user


def update_user(session: Session, user_id: str, **kwargs) -> AppUser:
    user = get_user(session, user_id)
    updates = {k: v for k, v in kwargs.items() if k in USER_ALLOWED_FIELDS}
    if not updates:
        raise ValidationError("No fields to update")
    if updates.get("is_locked") and user.role == UserRole.ADMINISTRATOR:
        raise ForbiddenError("Cannot lock administrator accounts")
    for key, value in updates.items():
        setattr(user, key, value)
    user.updated_at = utcnow()
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(f"User with email {updates.get('email')} already exists") from exc
    session.refresh(user)
    logger.info("✏️ Updated user %s: %s", user.id, sorted(updates))
    return user


def delete_user(session: Session, user_id: str) -> None:
    user = get_user(session, user_id)
    session.delete(user)
    session.commit()
    logger.info("Deleted user %s", user_id)
