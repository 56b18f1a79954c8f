import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.app_context import AppContext
from ..db import get_session
from ..schemas import AuthorizationCheck, AuthorizationResponse
from ..services.auth_service import check_and_create_user
from .deps import get_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/check-authorization",
    response_model=AuthorizationResponse,
    response_model_exclude_none=True,
)
def check_authorization(
    body: AuthorizationCheck,
    session: Session = Depends(get_session),
    context: AppContext = Depends(get_context),
):
    if not body.id or not body.email:
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    try:
        result = check_and_create_user(
            session, body, context.settings.allowed_email_domains
        )
    except SQLAlchemyError:
        logger.exception("Authorization check failed for %s", body.email)
        return JSONResponse(
            status_code=500, content={"error": "Failed to check authorization"}
        )
    if not result.authorized:
        return JSONResponse(
            status_code=403, content={"authorized": False, "error": result.error}
        )
    return {"authorized": True}
