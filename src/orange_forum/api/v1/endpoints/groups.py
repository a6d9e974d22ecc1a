# src/orange_forum/api/v1/endpoints/groups.py
"""Group-related endpoints for the Orange Forum API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Response, status

from orange_forum.core.errors import FeatureDisabledError
from orange_forum.models import Group, Topic
from orange_forum.schemas.content import TopicCreate, TopicResponse
from orange_forum.schemas.group import GroupCreate, GroupResponse, GroupRoles, GroupUpdate
from orange_forum.services import group_service, role_service, subscription_service, topic_service
from orange_forum.services.role_service import Privilege, require_privilege

from ..dependencies import CurrentUserDep, ForumConfigDep, OptionalUserDep, SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=list[GroupResponse])
def list_groups(db: SessionDep) -> list[Group]:
    """List open groups."""
    return list(group_service.read_groups(db))


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(group_id: int, db: SessionDep) -> Group:
    return group_service.read_group(db, group_id)


@router.post("/", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    config: ForumConfigDep,
) -> Group:
    """Create a group; its creator becomes the first group admin."""
    if config.group_creation_disabled and not current_user.is_superadmin:
        raise FeatureDisabledError("Group creation is disabled.")
    group = group_service.create_group(db, payload.name, payload.description, payload.header_msg)
    role_service.create_admin(db, current_user.username, group.id)
    return group


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: int,
    payload: GroupUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Group:
    require_privilege(db, current_user, Privilege.GROUP_ADMIN, group_id=group_id)
    # Pinning a group affects the site index, so only super admins may do it.
    if payload.is_sticky is not None:
        require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    group_service.update_group(db, group_id, payload.name, payload.description, payload.header_msg)
    if payload.is_sticky is not None:
        group_service.set_group_sticky(db, group_id, payload.is_sticky)
    if payload.is_private is not None:
        group_service.set_group_private(db, group_id, payload.is_private)
    group = group_service.read_group(db, group_id)
    db.refresh(group)
    return group


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_group(group_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Soft-delete the group; topics and roles are kept."""
    require_privilege(db, current_user, Privilege.GROUP_ADMIN, group_id=group_id)
    group_service.delete_group(db, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{group_id}/undelete", response_model=GroupResponse)
def undelete_group(group_id: int, current_user: CurrentUserDep, db: SessionDep) -> Group:
    require_privilege(db, current_user, Privilege.GROUP_ADMIN, group_id=group_id)
    group_service.undelete_group(db, group_id)
    group = group_service.read_group(db, group_id)
    db.refresh(group)
    return group


@router.get("/{group_id}/roles", response_model=GroupRoles)
def get_roles(group_id: int, db: SessionDep) -> GroupRoles:
    group_service.read_group(db, group_id)
    return GroupRoles(
        admins=role_service.read_admins(db, group_id),
        mods=role_service.read_mods(db, group_id),
    )


@router.put("/{group_id}/roles", response_model=GroupRoles)
def replace_roles(
    group_id: int,
    payload: GroupRoles,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> GroupRoles:
    """Replace the admin and mod lists. Unknown usernames are skipped."""
    require_privilege(db, current_user, Privilege.GROUP_ADMIN, group_id=group_id)
    group_service.read_group(db, group_id)
    role_service.replace_roles(db, group_id, payload.admins, payload.mods)
    return get_roles(group_id, db)


@router.get("/{group_id}/topics", response_model=list[TopicResponse])
def list_topics(
    group_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
    before: int | None = Query(None, description="Created-date cursor from the previous page"),
    include_deleted: bool = False,
) -> list[Topic]:
    group_service.read_group(db, group_id)
    if include_deleted:
        require_privilege(db, viewer, Privilege.GROUP_MOD, group_id=group_id)
    return list(topic_service.read_group_topics(
        db, group_id, before=before, include_deleted=include_deleted
    ))


@router.post(
    "/{group_id}/topics",
    response_model=TopicResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_topic(
    group_id: int,
    payload: TopicCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Topic:
    return topic_service.create_topic(db, current_user.id, group_id, payload.title, payload.content)


@router.post("/{group_id}/subscription", status_code=status.HTTP_201_CREATED)
def subscribe(
    group_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    config: ForumConfigDep,
) -> dict[str, str]:
    subscription_service.subscribe_group(db, config, current_user.id, group_id)
    return {"status": "subscribed"}


@router.delete(
    "/{group_id}/subscription",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def unsubscribe(group_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    subscription_service.unsubscribe_group(db, current_user.id, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
