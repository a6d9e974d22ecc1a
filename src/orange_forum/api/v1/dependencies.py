"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from orange_forum.core.settings import settings
from orange_forum.db.session import get_db
from orange_forum.models import User
from orange_forum.services.config_service import ForumConfig, load_forum_config

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication; anonymous requests are allowed through.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Create a signed JWT whose subject is the user id."""
    minutes = expires_minutes or settings.access_token_expire_minutes
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(UTC) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the authenticated user, or None for anonymous requests.

    Raises:
        HTTPException: If a token is presented but invalid, or the user is banned.
    """
    if credentials is None:
        return None
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        user_id = int(payload.get("sub", ""))
    except (JWTError, ValueError) as err:
        raise _unauthorized() from err

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is banned")
    return user


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> User:
    """Return the authenticated user or fail with 401."""
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_forum_config(request: Request, db: SessionDep) -> ForumConfig:
    """Return the forum settings snapshot held by the application.

    The snapshot is loaded on first use and replaced by
    :func:`reload_forum_config` after settings change.
    """
    config = getattr(request.app.state, "forum_config", None)
    if config is None:
        config = reload_forum_config(request, db)
    return config


def reload_forum_config(request: Request, db: Session) -> ForumConfig:
    config = load_forum_config(db)
    request.app.state.forum_config = config
    logger.debug("Loaded forum settings snapshot")
    return config


ForumConfigDep = Annotated[ForumConfig, Depends(get_forum_config)]


@dataclass
class ApiRequestContext:
    """Request context for JSON clients: CSRF echo and no flash storage."""

    csrf_token: str
    user_id: int | None
    pending_msg: str = ""

    def flash_msg(self) -> str:
        msg, self.pending_msg = self.pending_msg, ""
        return msg


def get_request_context(request: Request, user: OptionalUserDep) -> ApiRequestContext:
    csrf = request.headers.get("X-CSRF-Token") or secrets.token_urlsafe(32)
    return ApiRequestContext(csrf_token=csrf, user_id=user.id if user else None)


RequestContextDep = Annotated[ApiRequestContext, Depends(get_request_context)]
