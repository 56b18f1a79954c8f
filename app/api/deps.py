from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.app_context import AppContext
from infrastructure.auth_gateway import SessionIdentity
from ..db import get_session
from ..models import AppUser, UserRole
from ..services.errors import ForbiddenError


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_current_identity(request: Request) -> SessionIdentity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return identity


def require_user(
    identity: SessionIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
) -> AppUser:
    """Local account behind the session; it must exist and be unlocked."""
    user = session.get(AppUser, identity.id)
    if user is None and identity.email:
        user = session.scalars(select(AppUser).where(AppUser.email == identity.email)).first()
    if user is None:
        raise ForbiddenError("Account does not have access to CDB")
    if user.is_locked:
        raise ForbiddenError("Your account has been locked. Please contact support for assistance.")
    return user


def require_admin(user: AppUser = Depends(require_user)) -> AppUser:
    if user.role != UserRole.ADMINISTRATOR:
        raise ForbiddenError("Administrator role required")
    return user
