"""Authentication schemas."""

from __future__ import annotations  # Enable forward references

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from achievehub.config import settings
from achievehub.schemas.profile import ProfileResponse
from achievehub.utils.constants import INSTITUTION_ROLES, SELF_REGISTER_ROLES, Role


class RegisterRequest(BaseModel):
    """Register request schema."""

    email: EmailStr
    password: str
    confirm_password: str
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role
    institution_id: Optional[UUID] = None

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill in all required fields")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
            )
        return v

    @field_validator("role")
    @classmethod
    def self_register_role(cls, v: Role) -> Role:
        if v not in SELF_REGISTER_ROLES:
            raise ValueError("This role cannot be chosen at registration")
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if self.role in INSTITUTION_ROLES and self.institution_id is None:
            raise ValueError("Please select your institution")
        return self


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    """Tokens plus the authenticated profile."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    redirect_to: str
    user: ProfileResponse


class LandingResponse(BaseModel):
    """Where a client should send the user after sign-in."""

    role: Role
    redirect_to: str
