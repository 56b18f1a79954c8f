from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_session
from ..schemas import FundraisingSummary, ProjectCreate, ProjectRead, ProjectUpdate
from ..services.project_service import (
    create_project,
    delete_project,
    get_fundraising_summary,
    get_project,
    list_projects,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectRead])
def read_projects(q: str | None = Query(None), session: Session = Depends(get_session)):
    return list_projects(session, search_text=q)


@router.post("", response_model=ProjectRead, status_code=201)
def add_project(project_in: ProjectCreate, session: Session = Depends(get_session)):
    return create_project(session, **project_in.model_dump())


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(project_id: int, session: Session = Depends(get_session)):
    return get_project(session, project_id)


@router.get("/{project_id}/fundraising", response_model=FundraisingSummary)
def read_fundraising(project_id: int, session: Session = Depends(get_session)):
    return get_fundraising_summary(session, project_id)


@router.put("/{project_id}", response_model=ProjectRead)
def edit_project(
    project_id: int,
    project_in: ProjectUpdate,
    session: Session = Depends(get_session),
):
    return update_project(session, project_id, **project_in.model_dump(exclude_unset=True))


@router.delete("/{project_id}")
def remove_project(project_id: int, session: Session = Depends(get_session)):
    delete_project(session, project_id)
    return {"message": "Project deleted successfully"}
