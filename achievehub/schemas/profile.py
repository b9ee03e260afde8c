"""Profile and user-management schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from achievehub.config import settings
from achievehub.utils.constants import Role


class InstitutionBrief(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    """Profile as returned to clients (never includes the password hash)."""

    id: UUID
    email: str
    full_name: str
    role: Role
    is_active: bool
    institution_id: Optional[UUID] = None
    institution_name: Optional[str] = None
    institutions: List[InstitutionBrief] = []
    created_at: datetime

    @classmethod
    def from_profile(cls, profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            role=Role(profile.role),
            is_active=profile.is_active,
            institution_id=profile.institution_id,
            institution_name=profile.institution_name,
            institutions=[InstitutionBrief.model_validate(i) for i in profile.admin_institutions],
            created_at=profile.created_at,
        )


class UserCreate(BaseModel):
    """Super-admin creates an account directly."""

    email: EmailStr
    password: str
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.STUDENT
    institution_id: Optional[UUID] = None
    institution_ids: List[UUID] = []

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
            )
        return v


class UserUpdate(BaseModel):
    """Only provided fields are changed; linkage is re-derived from the role."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    institution_id: Optional[UUID] = None
    institution_ids: Optional[List[UUID]] = None
    is_active: Optional[bool] = None


class UsersResponse(BaseModel):
    total: int
    users: List[ProfileResponse]
