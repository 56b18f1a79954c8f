import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from utils.money import format_amount
from ..models import Collaboration, Project
from .errors import NotFoundError, ValidationError
from .query_utils import apply_search

logger = logging.getLogger(__name__)

PROJECT_ALLOWED_FIELDS = {"name", "fr_goal"}


def list_projects(session: Session, search_text: str | None = None) -> list[Project]:
    """Newest projects first, undated ones last."""
    query = apply_search(select(Project), (Project.name,), search_text)
    query = query.order_by(Project.created_at.is_(None), Project.created_at.desc())
    return list(session.scalars(query))


def get_project(session: Session, project_id: int) -> Project:
    project = session.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def create_project(session: Session, **kwargs) -> Project:
    data = {k: v for k, v in kwargs.items() if k in PROJECT_ALLOWED_FIELDS}
    project = Project(**data)
    session.add(project)
    session.commit()
    session.refresh(project)
    logger.info("Created project #%s %r", project.id, project.name)
    return project


def update_project(session: Session, project_id: int, **kwargs) -> Project:
    project = get_project(session, project_id)
    updates = {k: v for k, v in kwargs.items() if k in PROJECT_ALLOWED_FIELDS}
    if not updates:
        raise ValidationError("No fields to update")
    for key, value in updates.items():
        setattr(project, key, value)
    session.commit()
    session.refresh(project)
    logger.info("✏️ Updated project #%s: %s", project.id, sorted(updates))
    return project


def delete_project(session: Session, project_id: int) -> None:
    project = get_project(session, project_id)
    session.delete(project)
    session.commit()
    logger.info("Deleted project #%s with its collaborations", project_id)


def get_fundraising_summary(session: Session, project_id: int) -> dict:
    """Goal, raised amount and progress of a project's fundraising.

    Every collaboration amount on the project counts towards the raised total.
    """
    project = get_project(session, project_id)
    amounts = session.scalars(
        select(Collaboration.amount).where(
            Collaboration.project_id == project_id,
            Collaboration.amount.is_not(None),
        )
    )
    raised = float(sum(amounts))
    goal = project.fr_goal
    if goal:
        remaining = max(0.0, goal - raised)
        progress = raised / goal * 100
    else:
        remaining = None
        progress = 0.0
    return {
        "project_id": project.id,
        "goal": goal,
        "raised": raised,
        "remaining": remaining,
        "progress": progress,
        "goal_display": format_amount(goal, project.created_at),
        "raised_display": format_amount(raised, project.created_at),
        "remaining_display": format_amount(remaining, project.created_at),
    }
