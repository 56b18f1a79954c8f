from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    and_,
    exists,
)
from sqlalchemy.orm import column_property, relationship

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRole:
    ADMINISTRATOR = "Administrator"
    PROJECT_RESPONSIBLE = "Project responsible"
    PROJECT_TEAM_MEMBER = "Project team member"
    OBSERVER = "Observer"

    ALL = (ADMINISTRATOR, PROJECT_RESPONSIBLE, PROJECT_TEAM_MEMBER, OBSERVER)


class Priority:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CollaborationType:
    FINANCIAL = "financial"
    MATERIAL = "material"
    EDUCATIONAL = "educational"


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, index=True)
    url = Column(String)
    address = Column(String)
    city = Column(String)
    zip = Column(String)
    country = Column(String)
    phone = Column(String)
    budgeting_month = Column(String)
    comment = Column(Text)

    people = relationship(
        "Person", back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )
    collaborations = relationship(
        "Collaboration", back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    name = Column(String)
    fr_goal = Column(Float, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    collaborations = relationship(
        "Collaboration", back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String, index=True)
    email = Column(String)
    phone = Column(String)
    company_id = Column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    function = Column(String)
    created_at = Column(DateTime, default=utcnow)

    company = relationship("Company", back_populates="people")
    collaborations = relationship(
        "Collaboration", back_populates="person", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def company_name(self) -> str | None:
        return self.company.name if self.company else None


class Collaboration(Base):
    __tablename__ = "collaborations"
    __table_args__ = (
        Index("idx_collaborations_company_contact_future", "company_id", "contact_in_future"),
    )

    id = Column(Integer, primary_key=True)
    company_id = Column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    person_id = Column(
        Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=True, index=True
    )
    responsible = Column(String)
    comment = Column(Text)
    contacted = Column(Boolean, nullable=False, default=False)
    successful = Column(Boolean, nullable=True)
    letter = Column(Boolean, nullable=False, default=False)
    meeting = Column(Boolean, nullable=True)
    priority = Column(String, nullable=False, default=Priority.LOW)
    amount = Column(Float, nullable=True)
    contact_in_future = Column(Boolean, nullable=True)
    type = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, index=True)

    company = relationship("Company", back_populates="collaborations")
    project = relationship("Project", back_populates="collaborations")
    person = relationship("Person", back_populates="collaborations")

    @property
    def company_name(self) -> str | None:
        return self.company.name if self.company else None

    @property
    def project_name(self) -> str | None:
        return self.project.name if self.project else None

    @property
    def person_name(self) -> str | None:
        return self.person.name if self.person else None


Company.has_do_not_contact = column_property(
    exists().where(
        and_(
            Collaboration.company_id == Company.id,
            Collaboration.contact_in_future == False,  # noqa: E712
        )
    ).correlate_except(Collaboration)
)


class AppUser(Base):
    __tablename__ = "app_users"

    id = Column(String, primary_key=True)
    full_name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False, unique=True)
    role = Column(String, nullable=False)
    description = Column(Text)
    is_locked = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    added_by = Column(String, nullable=True)
    last_login = Column(DateTime, nullable=True, index=True)
