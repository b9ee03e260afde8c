"""Institution schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from achievehub.utils.validators import validate_email_domain


def _clean_domain(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().lower().lstrip("@")
    if not validate_email_domain(v):
        raise ValueError("Email domain must look like 'utech.edu'")
    return v


class InstitutionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email_domain: str = Field(..., min_length=1, max_length=255)

    @field_validator("email_domain")
    @classmethod
    def clean_domain(cls, v):
        return _clean_domain(v)


class InstitutionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email_domain: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator("email_domain")
    @classmethod
    def clean_domain(cls, v):
        return _clean_domain(v)


class InstitutionResponse(BaseModel):
    id: UUID
    name: str
    email_domain: str
    created_at: datetime

    class Config:
        from_attributes = True


class InstitutionWithCounts(InstitutionResponse):
    student_count: int = 0
    admin_count: int = 0
