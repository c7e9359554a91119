"""Explicit update schemas.

Each schema lists only the fields a caller may change on an existing row.
Ownership keys, soft-delete markers and RFI numbers are not among them.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from rfi_tracker.models.contact import StakeholderRole
from rfi_tracker.models.rfi import RFIStatus, Priority
from rfi_tracker.models.user import Role

PROJECT_STATUSES = ("ACTIVE", "ON_HOLD", "COMPLETED", "ARCHIVED")


def _required_text(value: Optional[str], field: str) -> Optional[str]:
    if value is None:
        raise ValueError(f"{field} cannot be null")
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be blank")
    return value


class UpdateSchema(BaseModel):
    """Base for update payloads: unknown keys are rejected, enums dump as plain values."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class ClientUpdate(UpdateSchema):
    """Mutable client fields."""

    name: Optional[str] = Field(None, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, "name")


class ProjectUpdate(UpdateSchema):
    """Mutable project fields. ``manager_id`` may be cleared with an explicit null."""

    name: Optional[str] = Field(None, max_length=255)
    project_number: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    status: Optional[str] = None
    manager_id: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, "name")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in PROJECT_STATUSES:
            raise ValueError(f"status must be one of {', '.join(PROJECT_STATUSES)}")
        return v


class RFIUpdate(UpdateSchema):
    """Mutable RFI fields."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[RFIStatus] = None
    priority: Optional[Priority] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _required_text(v, "title")


class ContactUpdate(UpdateSchema):
    """Mutable contact fields."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=255)
    role: Optional[StakeholderRole] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, "name")


class UserUpdate(UpdateSchema):
    """Mutable staff user fields."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, "name")
