"""Contacts (people) attached to companies."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..models import Company, Person
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PERSON_ALLOWED_FIELDS = {"name", "email", "phone", "company_id", "function"}


def _clean(data: dict) -> dict:
    return {
        key: (value if value != "" else None)
        for key, value in data.items()
        if key in PERSON_ALLOWED_FIELDS
    }


def _ensure_company(session: Session, company_id: int) -> None:
    if session.get(Company, company_id) is None:
        raise ValidationError(f"Company id={company_id} does not exist")


def list_people_for_company(session: Session, company_id: int) -> list[Person]:
    query = (
        select(Person)
        .options(joinedload(Person.company))
        .where(Person.company_id == company_id)
        .order_by(Person.name)
    )
    return list(session.scalars(query))


def get_person(session: Session, person_id: int) -> Person:
    person = session.get(Person, person_id)
    if person is None:
        raise NotFoundError("Contact not found")
    return person


def create_person(session: Session, **kwargs) -> Person:
    data = _clean(kwargs)
    _ensure_company(session, data["company_id"])
    person = Person(**data)
    session.add(person)
    session.commit()
    session.refresh(person)
    logger.info("Created contact #%s for company #%s", person.id, person.company_id)
    return person


def update_person(session: Session, person_id: int, **kwargs) -> Person:
    person = get_person(session, person_id)
    updates = _clean(kwargs)
    if not updates:
        raise ValidationError("No fields to update")
    if "company_id" in updates:
        _ensure_company(session, updates["company_id"])
    for key, value in updates.items():
        setattr(person, key, value)
    session.commit()
    session.refresh(person)
    logger.info("✏️ Updated contact #%s: %s", person.id, sorted(updates))
    return person


def delete_person(session: Session, person_id: int) -> None:
    person = get_person(session, person_id)
    session.delete(person)
    session.commit()
    logger.info("Deleted contact #%s", person_id)
