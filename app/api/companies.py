from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_session
from ..schemas import CompanyCreate, CompanyRead, CompanyUpdate
from ..services.company_service import (
    create_company,
    delete_company,
    get_company,
    list_companies,
    update_company,
)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyRead])
def read_companies(
    q: str | None = Query(None, description="Search in name, city, country and comment"),
    session: Session = Depends(get_session),
):
    return list_companies(session, search_text=q)


@router.post("", response_model=CompanyRead, status_code=201)
def add_company(company_in: CompanyCreate, session: Session = Depends(get_session)):
    return create_company(session, **company_in.model_dump())


@router.get("/{company_id}", response_model=CompanyRead)
def read_company(company_id: int, session: Session = Depends(get_session)):
    return get_company(session, company_id)


@router.put("/{company_id}", response_model=CompanyRead)
def edit_company(
    company_id: int,
    company_in: CompanyUpdate,
    session: Session = Depends(get_session),
):
    return update_company(session, company_id, **company_in.model_dump(exclude_unset=True))


@router.delete("/{company_id}")
def remove_company(company_id: int, session: Session = Depends(get_session)):
    delete_company(session, company_id)
    return {"message": "Company deleted successfully"}
