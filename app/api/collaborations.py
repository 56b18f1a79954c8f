from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_session
from ..schemas import (
    BulkCollaborationCreate,
    BulkCollaborationResult,
    CollaborationCopyRequest,
    CollaborationCopyResult,
    CollaborationCreate,
    CollaborationRead,
    CollaborationUpdate,
)
from ..services.collaboration_service import (
    bulk_create_collaborations,
    copy_collaborations,
    create_collaboration,
    delete_collaboration,
    get_collaboration,
    list_collaborations,
    list_responsible,
    update_collaboration,
)

router = APIRouter(prefix="/collaborations", tags=["collaborations"])


@router.get("", response_model=list[CollaborationRead])
def read_collaborations(
    project_id: int | None = Query(None),
    company_id: int | None = Query(None),
    q: str | None = Query(None),
    session: Session = Depends(get_session),
):
    return list_collaborations(
        session, project_id=project_id, company_id=company_id, search_text=q
    )


@router.post("", response_model=CollaborationRead, status_code=201)
def add_collaboration(
    collaboration_in: CollaborationCreate, session: Session = Depends(get_session)
):
    return create_collaboration(session, **collaboration_in.model_dump())


@router.post("/bulk", response_model=BulkCollaborationResult, status_code=201)
def add_collaborations_bulk(
    bulk_in: BulkCollaborationCreate, session: Session = Depends(get_session)
):
    fields = bulk_in.model_dump(exclude={"company_ids", "project_id"})
    created, skipped = bulk_create_collaborations(
        session, bulk_in.company_ids, bulk_in.project_id, **fields
    )
    message = None
    if skipped:
        message = (
            f"Created {len(created)} collaboration(s). Skipped 1 or more companies "
            "that already had collaborations on this project."
        )
    return {"collaborations": created, "skipped_companies": skipped, "message": message}


@router.post("/copy", response_model=CollaborationCopyResult)
def copy_project_collaborations(
    copy_in: CollaborationCopyRequest, session: Session = Depends(get_session)
):
    flags = copy_in.model_dump(exclude={"source_project_id", "project_id"})
    return copy_collaborations(
        session, copy_in.source_project_id, copy_in.project_id, **flags
    )


@router.get("/responsible", response_model=list[str])
def read_responsible(session: Session = Depends(get_session)):
    return list_responsible(session)


@router.get("/{collaboration_id}", response_model=CollaborationRead)
def read_collaboration(collaboration_id: int, session: Session = Depends(get_session)):
    return get_collaboration(session, collaboration_id)


@router.put("/{collaboration_id}", response_model=CollaborationRead)
def edit_collaboration(
    collaboration_id: int,
    collaboration_in: CollaborationUpdate,
    session: Session = Depends(get_session),
):
    return update_collaboration(
        session, collaboration_id, **collaboration_in.model_dump(exclude_unset=True)
    )


@router.delete("/{collaboration_id}")
def remove_collaboration(collaboration_id: int, session: Session = Depends(get_session)):
    delete_collaboration(session, collaboration_id)
    return {"message": "Collaboration deleted successfully"}
