"""Request/response bodies for the /auth routes."""

from typing import Literal, Optional

from pydantic import Field

from kazi.schemas.common import CamelModel, NonEmptyStr
from kazi.schemas.user import UserRead


class SignUpRequest(CamelModel):
    name: NonEmptyStr
    phone: NonEmptyStr
    location: NonEmptyStr
    password: str = Field(..., min_length=1)
    role: Literal["employee", "employer"]
    specialization: Optional[str] = None
    job_type: Optional[str] = None


class SignInRequest(CamelModel):
    phone: NonEmptyStr
    password: str = Field(..., min_length=1)


class CheckPhoneRequest(CamelModel):
    phone: Optional[str] = None


class PhoneExistsResponse(CamelModel):
    exists: bool


class ProfileUpdate(CamelModel):
    """Partial update. role and phone are deliberately absent."""
    name: Optional[NonEmptyStr] = None
    location: Optional[NonEmptyStr] = None
    specialization: Optional[str] = None
    job_type: Optional[str] = None


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    user: UserRead
