"""Pydantic schemas for user and authentication operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from assetflow.core.constants import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)


# ============================================================
# Requests
# ============================================================


class NewUserRequest(BaseModel):
    """Fields shared by registration and invitation."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class RegisterRequest(NewUserRequest):
    """Schema for self-service registration."""


class InviteRequest(NewUserRequest):
    """Schema for an admin inviting an employee."""


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Email is required")
        return v


# ============================================================
# Responses
# ============================================================


class OrganizationSummary(BaseModel):
    """Organization fields embedded in user payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class UserSummary(BaseModel):
    """Public user fields; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class UserResponse(UserSummary):
    """User as listed to organization admins."""

    created_at: datetime


class UserProfile(UserSummary):
    """The caller's own profile, with organization."""

    organization_id: int
    organization: OrganizationSummary | None = None
    created_at: datetime


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    user: UserSummary
    token: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    user: UserProfile
    token: str


class InviteResponse(BaseModel):
    message: str = "User invited successfully"
    user: UserSummary
