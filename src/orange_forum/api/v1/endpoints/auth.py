# src/orange_forum/api/v1/endpoints/auth.py
"""Authentication endpoints: signup, login and password reset."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from orange_forum.core.errors import (
    FeatureDisabledError,
    IncorrectPasswordError,
    UserNotFoundError,
)
from orange_forum.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
)
from orange_forum.services import user_service

from ..dependencies import ForumConfigDep, SessionDep, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

# (username, email, token) -> None. Delivery itself lives outside the core.
ResetMailer = Callable[[str, str, str], None]


def log_reset_mailer(username: str, email: str, token: str) -> None:
    """Default mailer: records that a token was issued without sending anything."""
    logger.info("Password reset requested for %s (mail configured: %s)", username, bool(email))


def get_reset_mailer() -> ResetMailer:
    return log_reset_mailer


ResetMailerDep = Annotated[ResetMailer, Depends(get_reset_mailer)]


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: SessionDep, config: ForumConfigDep) -> UserResponse:
    """Create an account unless signups are disabled."""
    if config.signup_disabled:
        raise FeatureDisabledError("Signups are disabled.")
    user = user_service.create_user(db, payload.username, payload.password, payload.email)
    response = UserResponse.model_validate(user)
    response.email = user.email
    return response


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username and password for a bearer token."""
    try:
        user = user_service.verify_credentials(db, payload.username, payload.password)
    except UserNotFoundError as err:
        # Same answer for unknown users and bad passwords.
        raise IncorrectPasswordError() from err
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is banned")
    return LoginResponse(access_token=create_access_token(user.id))


@router.post("/forgot", status_code=status.HTTP_202_ACCEPTED)
def forgot_password(
    payload: ForgotPasswordRequest,
    db: SessionDep,
    mailer: ResetMailerDep,
) -> dict[str, str]:
    """Issue a reset token and hand it to the mailer.

    The response is the same whether or not the user exists.
    """
    if user_service.probe_user(db, payload.username):
        token = user_service.create_reset_token(db, payload.username)
        mailer(payload.username, user_service.read_user_email(db, payload.username), token)
    return {"status": "accepted"}


@router.post("/reset")
def reset_password(payload: ResetPasswordRequest, db: SessionDep) -> dict[str, str]:
    """Set a new password using a reset token."""
    username = user_service.read_user_name_by_token(db, payload.reset_token)
    user_service.update_user_passwd(db, username, payload.password)
    return {"status": "updated"}
