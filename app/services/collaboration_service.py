import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..models import Collaboration, Company, Person, Priority, Project
from .errors import ConflictError, NotFoundError, ValidationError
from .query_utils import apply_search

logger = logging.getLogger(__name__)

COLLABORATION_FIELDS = {
    "company_id",
    "project_id",
    "person_id",
    "responsible",
    "comment",
    "contacted",
    "successful",
    "letter",
    "meeting",
    "priority",
    "amount",
    "contact_in_future",
    "type",
}

COLLABORATION_SEARCH_COLUMNS = (
    Company.name,
    Project.name,
    Person.name,
    Collaboration.responsible,
    Collaboration.comment,
    Collaboration.type,
)


def _base_query():
    return (
        select(Collaboration)
        .join(Collaboration.company)
        .join(Collaboration.project)
        .outerjoin(Collaboration.person)
        .options(
            joinedload(Collaboration.company),
            joinedload(Collaboration.project),
            joinedload(Collaboration.person),
        )
    )


def _check_references(session: Session, data: dict) -> None:
    if "company_id" in data and session.get(Company, data["company_id"]) is None:
        raise ValidationError(f"Company id={data['company_id']} does not exist")
    if "project_id" in data and session.get(Project, data["project_id"]) is None:
        raise ValidationError(f"Project id={data['project_id']} does not exist")
    if data.get("person_id") is not None and session.get(Person, data["person_id"]) is None:
        raise ValidationError(f"Contact id={data['person_id']} does not exist")


def list_collaborations(
    session: Session,
    *,
    project_id: int | None = None,
    company_id: int | None = None,
    search_text: str | None = None,
) -> list[Collaboration]:
    """Most recently touched collaborations first."""
    query = _base_query()
    if project_id is not None:
        query = query.where(Collaboration.project_id == project_id)
    if company_id is not None:
        query = query.where(Collaboration.company_id == company_id)
    query = apply_search(query, COLLABORATION_SEARCH_COLUMNS, search_text)
    query = query.order_by(
        Collaboration.updated_at.desc(), Collaboration.created_at.desc()
    )
    return list(session.scalars(query).unique())


def get_collaboration(session: Session, collaboration_id: int) -> Collaboration:
    collaboration = session.get(Collaboration, collaboration_id)
    if collaboration is None:
        raise NotFoundError("Collaboration not found")
    return collaboration


def create_collaboration(session: Session, **kwargs) -> Collaboration:
    data = {k: v for k, v in kwargs.items() if k in COLLABORATION_FIELDS}
    _check_references(session, data)
    collaboration = Collaboration(**data)
    session.add(collaboration)
    session.commit()
    session.refresh(collaboration)
    logger.info(
        "🤝 Created collaboration #%s: company #%s on project #%s",
        collaboration.id,
        collaboration.company_id,
        collaboration.project_id,
    )
    return collaboration


def update_collaboration(session: Session, collaboration_id: int, **kwargs) -> Collaboration:
    collaboration = get_collaboration(session, collaboration_id)
    updates = {k: v for k, v in kwargs.items() if k in COLLABORATION_FIELDS}
    if not updates:
        raise ValidationError("No fields to update")
    _check_references(session, updates)
    for key, value in updates.items():
        setattr(collaboration, key, value)
    session.commit()
    session.refresh(collaboration)
    logger.info("✏️ Updated collaboration #%s: %s", collaboration.id, sorted(updates))
    return collaboration


def delete_collaboration(session: Session, collaboration_id: int) -> None:
    collaboration = get_collaboration(session, collaboration_id)
    session.delete(collaboration)
    session.commit()
    logger.info("Deleted collaboration #%s", collaboration_id)


def _company_ids_on_project(session: Session, project_id: int) -> set[int]:
    return set(
        session.scalars(
            select(Collaboration.company_id).where(Collaboration.project_id == project_id)
        )
    )


def _company_names(session: Session, company_ids) -> list[str]:
    if not company_ids:
        return []
    names = session.scalars(
        select(Company.name).where(Company.id.in_(company_ids)).order_by(Company.name)
    )
    return [name or "Unknown" for name in names]


def bulk_create_collaborations(
    session: Session, company_ids: list[int], project_id: int, **fields
) -> tuple[list[Collaboration], list[str]]:
    """Create one collaboration per company, skipping companies already on the project.

    Returns the created collaborations and the names of skipped companies.
    Raises :class:`ConflictError` when every company is already linked.
    """
    if not company_ids:
        raise ValidationError("At least one company is required")
    if session.get(Project, project_id) is None:
        raise ValidationError(f"Project id={project_id} does not exist")

    existing = _company_ids_on_project(session, project_id)
    new_ids = [cid for cid in dict.fromkeys(company_ids) if cid not in existing]
    if not new_ids:
        raise ConflictError(
            "All selected companies already have collaborations for this project",
            existing=True,
            existing_companies=_company_names(session, company_ids),
        )

    known = set(session.scalars(select(Company.id).where(Company.id.in_(new_ids))))
    missing = [cid for cid in new_ids if cid not in known]
    if missing:
        raise ValidationError(f"Unknown company ids: {missing}")

    data = {k: v for k, v in fields.items() if k in COLLABORATION_FIELDS}
    data.pop("company_id", None)
    data.pop("project_id", None)
    if data.get("person_id") is not None and session.get(Person, data["person_id"]) is None:
        raise ValidationError(f"Contact id={data['person_id']} does not exist")

    created = [
        Collaboration(company_id=cid, project_id=project_id, **data) for cid in new_ids
    ]
    session.add_all(created)
    session.commit()
    for collaboration in created:
        session.refresh(collaboration)

    skipped = _company_names(session, existing.intersection(company_ids))
    logger.info(
        "🤝 Bulk created %d collaborations on project #%s (skipped %d)",
        len(created),
        project_id,
        len(skipped),
    )
    return created, skipped


def copy_collaborations(
    session: Session,
    source_project_id: int,
    target_project_id: int,
    *,
    copy_company: bool = True,
    copy_contact_person: bool = False,
    copy_type: bool = False,
    copy_priority: bool = False,
    copy_contact_in_future: bool = False,
    copy_responsible: bool = False,
    copy_comment: bool = False,
    copy_progress: bool = False,
    copy_status: bool = False,
    copy_amount: bool = False,
) -> dict:
    """Copy collaborations of one project onto another.

    Companies that already collaborate on the target project are skipped.
    Fields that are not copied are reset: progress flags to false/null and
    priority to low.
    """
    if source_project_id == target_project_id:
        raise ValidationError("Source and target projects must be different")
    if session.get(Project, target_project_id) is None:
        raise NotFoundError("Target project not found")

    source = list(
        session.scalars(
            select(Collaboration).where(Collaboration.project_id == source_project_id)
        )
    )
    if not source:
        raise NotFoundError("No collaborations found in source project")

    existing = _company_ids_on_project(session, target_project_id)
    to_copy = [c for c in source if c.company_id not in existing]
    if not to_copy:
        raise ValidationError(
            "All companies from source project already have collaborations in target project"
        )
    if not copy_company:
        # a collaboration cannot exist without its company
        logger.warning("Copy requested without company; companies are always copied")

    created = []
    for original in to_copy:
        created.append(
            Collaboration(
                company_id=original.company_id,
                project_id=target_project_id,
                person_id=original.person_id if copy_contact_person else None,
                responsible=original.responsible if copy_responsible else None,
                comment=original.comment if copy_comment else None,
                contacted=original.contacted if copy_progress else False,
                letter=original.letter if copy_progress else False,
                meeting=original.meeting if copy_progress else None,
                successful=original.successful if copy_status else None,
                priority=original.priority if copy_priority else Priority.LOW,
                amount=original.amount if copy_amount else None,
                contact_in_future=original.contact_in_future if copy_contact_in_future else None,
                type=original.type if copy_type else None,
            )
        )
    session.add_all(created)
    session.commit()
    for collaboration in created:
        session.refresh(collaboration)

    skipped = len(source) - len(to_copy)
    if skipped:
        message = (
            f"Created {len(created)} collaborations. Skipped {skipped} duplicate companies."
        )
    else:
        message = f"Successfully created {len(created)} collaborations."
    logger.info(
        "📋 Copied %d collaborations from project #%s to #%s (skipped %d)",
        len(created),
        source_project_id,
        target_project_id,
        skipped,
    )
    return {
        "success": True,
        "created": len(created),
        "skipped": skipped,
        "source_project_id": source_project_id,
        "target_project_id": target_project_id,
        "message": message,
        "collaborations": created,
    }


def list_responsible(session: Session) -> list[str]:
    """Distinct non-empty responsible names, alphabetically."""
    query = (
        select(Collaboration.responsible)
        .distinct()
        .where(Collaboration.responsible.is_not(None), Collaboration.responsible != "")
        .order_by(Collaboration.responsible)
    )
    return list(session.scalars(query))
