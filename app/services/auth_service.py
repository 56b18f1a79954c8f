"""Login-time authorization against the local user table.

An identity coming from the external session provider is admitted when a local
unlocked account exists for its email. First-time logins are provisioned
automatically: the very first account becomes an Administrator, and emails
from an allowed domain become Observers.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import AppUser, UserRole, utcnow

logger = logging.getLogger(__name__)

NO_EMAIL_ERROR = "No email provided by authentication provider."
LOCKED_ERROR = "Your account has been locked. Please contact support for assistance."
NO_ACCESS_ERROR = (
    "Account with email {email} does not have access to CDB. Please login using "
    "a valid account or contact support if you believe this is an error."
)


@dataclass
class AuthorizationResult:
    authorized: bool
    error: Optional[str] = None
    user: Optional[AppUser] = None


def _email_allowed(email: str, allowed_domains: Iterable[str]) -> bool:
    email = email.lower()
    return any(
        domain and email.endswith(f"@{domain.lower()}") for domain in allowed_domains
    )


def sync_user_id_and_login(
    session: Session, user: AppUser, new_id: str, now: datetime
) -> AppUser:
    """Move ``user`` to ``new_id`` and stamp the login time in one transaction.

    Back-references in ``added_by`` follow the id change.
    """
    old_id = user.id
    try:
        if old_id != new_id:
            session.expunge(user)
            session.execute(
                update(AppUser)
                .where(AppUser.added_by == old_id)
                .values(added_by=new_id)
                .execution_options(synchronize_session=False)
            )
            session.execute(
                update(AppUser)
                .where(AppUser.id == old_id)
                .values(id=new_id, updated_at=now)
                .execution_options(synchronize_session=False)
            )
        session.execute(
            update(AppUser)
            .where(AppUser.id == new_id)
            .values(last_login=now)
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to sync user %s -> %s", old_id, new_id)
        raise
    if old_id != new_id:
        logger.info("🔑 Reassigned user %s from id %s to %s", user.email, old_id, new_id)
    return session.get(AppUser, new_id)


def check_and_create_user(
    session: Session,
    identity,
    allowed_domains: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> AuthorizationResult:
    """Decide whether ``identity`` (``id``, ``email``, ``name``) may use the app."""
    email = (getattr(identity, "email", None) or "").strip()
    if not email:
        return AuthorizationResult(False, NO_EMAIL_ERROR)
    now = now or utcnow()
    new_id = identity.id

    user = session.scalars(select(AppUser).where(AppUser.email == email)).first()
    if user is not None:
        if user.is_locked:
            logger.warning("🔒 Locked account %s tried to sign in", email)
            return AuthorizationResult(False, LOCKED_ERROR)
        return AuthorizationResult(True, user=sync_user_id_and_login(session, user, new_id, now))

    total_users = session.scalar(select(func.count()).select_from(AppUser))
    if total_users == 0:
        role = UserRole.ADMINISTRATOR
    elif _email_allowed(email, allowed_domains):
        role = UserRole.OBSERVER
    else:
        logger.info("Rejected sign-in for %s", email)
        return AuthorizationResult(False, NO_ACCESS_ERROR.format(email=email))

    user = AppUser(
        id=new_id,
        full_name=getattr(identity, "name", None) or "",
        email=email,
        role=role,
        description=None,
        is_locked=False,
        created_at=now,
        updated_at=now,
        added_by=None,
        last_login=now,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # another request provisioned the same email first
        session.rollback()
        existing = session.scalars(select(AppUser).where(AppUser.email == email)).first()
        if existing is None or existing.is_locked:
            raise
        return AuthorizationResult(
            True, user=sync_user_id_and_login(session, existing, new_id, now)
        )
    session.refresh(user)
    logger.info("👤 Provisioned %s as %s", email, role)
    return AuthorizationResult(True, user=user)
