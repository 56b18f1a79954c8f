"""Contacts of a company; served under both ``/contacts`` and ``/people``."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_session
from ..schemas import PersonCreate, PersonRead, PersonUpdate
from ..services.errors import ValidationError
from ..services.person_service import (
    create_person,
    delete_person,
    get_person,
    list_people_for_company,
    update_person,
)


def build_router(prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=list[PersonRead])
    def read_people(
        company_id: int | None = Query(None, alias="companyId"),
        session: Session = Depends(get_session),
    ):
        if company_id is None:
            raise ValidationError("Filter required: Please provide companyId parameter")
        return list_people_for_company(session, company_id)

    @router.get("/company/{company_id}", response_model=list[PersonRead])
    def read_company_people(company_id: int, session: Session = Depends(get_session)):
        return list_people_for_company(session, company_id)

    @router.post("", response_model=PersonRead, status_code=201)
    def add_person(person_in: PersonCreate, session: Session = Depends(get_session)):
        return create_person(session, **person_in.model_dump())

    @router.get("/{person_id}", response_model=PersonRead)
    def read_person(person_id: int, session: Session = Depends(get_session)):
        return get_person(session, person_id)

    @router.put("/{person_id}", response_model=PersonRead)
    def edit_person(
        person_id: int,
        person_in: PersonUpdate,
        session: Session = Depends(get_session),
    ):
        return update_person(session, person_id, **person_in.model_dump(exclude_unset=True))

    @router.delete("/{person_id}")
    def remove_person(person_id: int, session: Session = Depends(get_session)):
        delete_person(session, person_id)
        return {"message": "Contact deleted successfully"}

    return router


contacts_router = build_router("/contacts", "contacts")
people_router = build_router("/people", "people")
