# src/orange_forum/api/v1/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from orange_forum.schemas.user import ProfileUpdate, UserResponse
from orange_forum.services import user_service
from orange_forum.services.role_service import Privilege, require_privilege

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_me(current_user: CurrentUserDep) -> UserResponse:
    response = UserResponse.model_validate(current_user)
    response.email = current_user.email
    return response


@router.put("/me", response_model=UserResponse)
def update_me(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserResponse:
    user_service.update_user_profile(db, current_user.username, payload.email, payload.about)
    db.refresh(current_user)
    response = UserResponse.model_validate(current_user)
    response.email = current_user.email
    return response


@router.get("/{username}", response_model=UserResponse)
def read_profile(username: str, db: SessionDep, viewer: OptionalUserDep) -> UserResponse:
    """Public profile; super admins also see the email."""
    user = user_service.read_user(db, username)
    response = UserResponse.model_validate(user)
    if viewer is None or (viewer.id != user.id and not viewer.is_superadmin):
        response.email = None
    return response


@router.post("/{username}/ban")
def ban(username: str, current_user: CurrentUserDep, db: SessionDep) -> dict[str, str]:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    user_service.ban_user(db, username)
    return {"status": "banned"}


@router.post("/{username}/unban")
def unban(username: str, current_user: CurrentUserDep, db: SessionDep) -> dict[str, str]:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    user_service.unban_user(db, username)
    return {"status": "unbanned"}
