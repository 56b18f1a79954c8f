import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Company
from .errors import NotFoundError, ValidationError
from .query_utils import apply_search

logger = logging.getLogger(__name__)

COMPANY_ALLOWED_FIELDS = {
    "name",
    "url",
    "address",
    "city",
    "zip",
    "country",
    "phone",
    "budgeting_month",
    "comment",
}

COMPANY_SEARCH_COLUMNS = (Company.name, Company.city, Company.country, Company.comment)


def _clean(data: dict) -> dict:
    """Keep known fields, storing blank strings as NULL."""
    return {
        key: (value if value != "" else None)
        for key, value in data.items()
        if key in COMPANY_ALLOWED_FIELDS
    }


def list_companies(session: Session, search_text: str | None = None) -> list[Company]:
    query = apply_search(select(Company), COMPANY_SEARCH_COLUMNS, search_text)
    return list(session.scalars(query.order_by(Company.name)))


def get_company(session: Session, company_id: int) -> Company:
    company = session.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found")
    return company


def create_company(session: Session, **kwargs) -> Company:
    company = Company(**_clean(kwargs))
    session.add(company)
    session.commit()
    session.refresh(company)
    logger.info("Created company #%s %r", company.id, company.name)
    return company


def update_company(session: Session, company_id: int, **kwargs) -> Company:
    company = get_company(session, company_id)
    updates = _clean(kwargs)
    if not updates:
        raise ValidationError("No fields to update")
    for key, value in updates.items():
        setattr(company, key, value)
    session.commit()
    session.refresh(company)
    logger.info("✏️ Updated company #%s: %s", company.id, sorted(updates))
    return company


def delete_company(session: Session, company_id: int) -> None:
    company = get_company(session, company_id)
    session.delete(company)
    session.commit()
    logger.info("Deleted company #%s with its contacts and collaborations", company_id)
