"""User and authentication Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    username: str = Field(..., min_length=1, max_length=32, pattern=r"^[A-Za-z0-9_]+$")
    password: str = Field(..., min_length=8, max_length=72)
    email: str = Field("", max_length=254)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ForgotPasswordRequest(BaseModel):
    username: str


class ResetPasswordRequest(BaseModel):
    """Password change authorized by a reset token instead of the old password."""

    reset_token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=72)


class ProfileUpdate(BaseModel):
    email: str = Field("", max_length=254)
    about: str = Field("", max_length=4000)


class UserResponse(BaseModel):
    """Public profile. Email is only filled in for the user themself."""

    id: int
    username: str
    about: str
    karma: int
    is_banned: bool
    is_superadmin: bool
    created_date: int
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)
