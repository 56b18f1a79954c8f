from fastapi import APIRouter, Depends

from .auth import router as auth_router
from .collaborations import router as collaborations_router
from .companies import router as companies_router
from .contacts import contacts_router, people_router
from .deps import require_user
from .preferences import router as preferences_router
from .projects import router as projects_router
from .users import router as users_router

router = APIRouter()
router.include_router(auth_router)

protected = [Depends(require_user)]
router.include_router(companies_router, dependencies=protected)
router.include_router(contacts_router, dependencies=protected)
router.include_router(people_router, dependencies=protected)
router.include_router(projects_router, dependencies=protected)
router.include_router(collaborations_router, dependencies=protected)
router.include_router(users_router, dependencies=protected)
router.include_router(preferences_router, dependencies=protected)


@router.get("/status")
def status():
    return {"status": "ok"}
