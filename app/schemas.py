import re
from datetime import datetime
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from utils.money import format_url
from .services.collaboration_status import status_color, status_text

BUDGETING_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

PriorityValue = Literal["low", "medium", "high"]
CollaborationTypeValue = Literal["financial", "material", "educational"]
RoleValue = Literal[
    "Administrator", "Project responsible", "Project team member", "Observer"
]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str | None, *, allow_blank: bool) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value and allow_blank:
        return value
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email address")
    return value


def _check_month(value: str | None) -> str | None:
    if value and value not in BUDGETING_MONTHS:
        raise ValueError(f"Budgeting month must be one of: {', '.join(BUDGETING_MONTHS)}")
    return value


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


def _not_null(value):
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# ──────────────────────────── Companies ─────────────────────────────


class CompanyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    url: str = Field("", max_length=200)
    address: str = Field("", max_length=200)
    city: str = Field("", max_length=100)
    zip: str = Field("", max_length=20)
    country: str = Field("", max_length=100)
    phone: str = Field("", max_length=50)
    budgeting_month: str = Field("", max_length=50)
    comment: str = Field("", max_length=500)

    validate_month = field_validator("budgeting_month")(_check_month)


class CompanyUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    url: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    zip: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    budgeting_month: str | None = Field(None, max_length=50)
    comment: str | None = Field(None, max_length=500)

    reject_null = field_validator("name")(_not_null)
    validate_month = field_validator("budgeting_month")(_check_month)


class CompanyRead(CamelModel):
    id: int
    name: str = ""
    url: str = ""
    address: str = ""
    city: str = ""
    zip: str = ""
    country: str = ""
    phone: str = ""
    budgeting_month: str = ""
    comment: str = ""
    has_do_not_contact: bool = False

    @field_validator(
        "name",
        "url",
        "address",
        "city",
        "zip",
        "country",
        "phone",
        "budgeting_month",
        "comment",
        mode="before",
    )
    @classmethod
    def empty_string_for_null(cls, value):
        return "" if value is None else value

    @field_validator("has_do_not_contact", mode="before")
    @classmethod
    def false_for_null(cls, value):
        return bool(value)

    @computed_field
    @property
    def website(self) -> dict[str, str] | None:
        return format_url(self.url)


# ──────────────────────────── People ─────────────────────────────


class PersonCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    company_id: int = Field(gt=0)
    function: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value, allow_blank=True)


class PersonUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    email: str | None = None
    phone: str | None = None
    company_id: int | None = Field(None, gt=0)
    function: str | None = None

    reject_null = field_validator("name", "company_id")(_not_null)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value, allow_blank=True)


class PersonRead(CamelModel):
    id: int
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company_id: int
    function: str | None = None
    created_at: datetime | None = None
    company_name: str | None = None


# ──────────────────────────── Projects ─────────────────────────────


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    fr_goal: float | None = Field(None, ge=0)


class ProjectUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    fr_goal: float | None = Field(None, ge=0)

    reject_null = field_validator("name")(_not_null)


class ProjectRead(CamelModel):
    id: int
    name: str = ""
    fr_goal: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("name", mode="before")
    @classmethod
    def empty_string_for_null(cls, value):
        return "" if value is None else value


class FundraisingSummary(CamelModel):
    project_id: int
    goal: float | None = None
    raised: float = 0.0
    remaining: float | None = None
    progress: float = 0.0
    goal_display: str
    raised_display: str
    remaining_display: str


# ──────────────────────────── Collaborations ─────────────────────────────


class CollaborationFields(CamelModel):
    person_id: int | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("personId", "contactId", "person_id"),
    )
    responsible: str = Field(min_length=1)
    comment: str | None = None
    contacted: bool = False
    letter: bool = False
    meeting: bool | None = None
    successful: bool | None = None
    priority: PriorityValue = "low"
    amount: float | None = Field(None, gt=0)
    contact_in_future: bool | None = None
    type: CollaborationTypeValue | None = None

    normalize_priority = field_validator("priority", mode="before")(_lower)
    normalize_type = field_validator("type", mode="before")(_lower)


class CollaborationCreate(CollaborationFields):
    company_id: int = Field(gt=0)
    project_id: int = Field(gt=0)


class CollaborationUpdate(CamelModel):
    company_id: int | None = Field(None, gt=0)
    project_id: int | None = Field(None, gt=0)
    person_id: int | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("personId", "contactId", "person_id"),
    )
    responsible: str | None = Field(None, min_length=1)
    comment: str | None = None
    contacted: bool | None = None
    letter: bool | None = None
    meeting: bool | None = None
    successful: bool | None = None
    priority: PriorityValue | None = None
    amount: float | None = Field(None, gt=0)
    contact_in_future: bool | None = None
    type: CollaborationTypeValue | None = None

    reject_null = field_validator(
        "company_id", "project_id", "responsible", "contacted", "letter", "priority"
    )(_not_null)
    normalize_priority = field_validator("priority", mode="before")(_lower)
    normalize_type = field_validator("type", mode="before")(_lower)


class CollaborationRead(CamelModel):
    id: int
    company_id: int
    project_id: int
    person_id: int | None = None
    responsible: str | None = None
    comment: str | None = None
    contacted: bool = False
    letter: bool = False
    meeting: bool | None = None
    successful: bool | None = None
    priority: str | None = None
    amount: float | None = None
    contact_in_future: bool | None = None
    type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    company_name: str | None = None
    project_name: str | None = None
    person_name: str | None = None

    @computed_field
    @property
    def status(self) -> str:
        return status_text(self)

    @computed_field
    @property
    def status_color(self) -> str:
        return status_color(self)


class BulkCollaborationCreate(CollaborationFields):
    company_ids: list[int] = Field(min_length=1)
    project_id: int = Field(gt=0)


class BulkCollaborationResult(CamelModel):
    collaborations: list[CollaborationRead]
    skipped_companies: list[str] = Field(default_factory=list)
    message: str | None = None


class CollaborationCopyRequest(CamelModel):
    source_project_id: int = Field(gt=0)
    project_id: int = Field(gt=0)
    copy_company: bool = True
    copy_contact_person: bool = False
    copy_type: bool = False
    copy_priority: bool = False
    copy_contact_in_future: bool = False
    copy_responsible: bool = False
    copy_comment: bool = False
    copy_progress: bool = False
    copy_status: bool = False
    copy_amount: bool = False


class CollaborationCopyResult(CamelModel):
    success: bool = True
    created: int
    skipped: int
    source_project_id: int
    target_project_id: int
    message: str
    collaborations: list[CollaborationRead]


# ──────────────────────────── Users ─────────────────────────────


class UserCreate(CamelModel):
    full_name: str = Field(min_length=1, max_length=100)
    email: str
    role: RoleValue
    description: str | None = Field(None, max_length=500)
    is_locked: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value, allow_blank=False)


class UserUpdate(CamelModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = None
    role: RoleValue | None = None
    description: str | None = Field(None, max_length=500)
    is_locked: bool | None = None

    reject_null = field_validator("full_name", "email", "role", "is_locked")(_not_null)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value, allow_blank=False)


class AddedByUser(CamelModel):
    id: str
    full_name: str | None = None
    email: str | None = None


class UserRead(CamelModel):
    id: str
    full_name: str
    email: str
    role: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    added_by: str | None = None
    added_by_user: AddedByUser | None = None
    last_login: datetime | None = None
    is_locked: bool = False


# ──────────────────────────── Auth ─────────────────────────────


class AuthorizationCheck(CamelModel):
    id: str | None = None
    email: str | None = None
    name: str | None = None


class AuthorizationResponse(CamelModel):
    authorized: bool
    error: str | None = None


# ──────────────────────────── Table preferences ─────────────────────────────


class TablePreferencesBody(CamelModel):
    visible_columns: list[str] = Field(default_factory=list)
    sort_field: str | None = None
    sort_direction: Literal["asc", "desc"] = "asc"
