# src/orange_forum/api/v1/endpoints/site.py
"""Site-wide endpoints: settings, extra notes, common page data and stats."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response, status

from orange_forum.models import ExtraNote
from orange_forum.schemas.site import (
    CommonDataResponse,
    ConfigResponse,
    ConfigUpdate,
    NoteCreate,
    NoteResponse,
)
from orange_forum.services import common_service, config_service, note_service
from orange_forum.services.config_service import BOOLEAN_KEYS, ConfigKey, encode_flag
from orange_forum.services.role_service import Privilege, require_privilege

from ..dependencies import (
    CurrentUserDep,
    ForumConfigDep,
    RequestContextDep,
    SessionDep,
    reload_forum_config,
)

router = APIRouter(prefix="/site", tags=["site"])


@router.get("/config", response_model=ConfigResponse)
def read_config(current_user: CurrentUserDep, db: SessionDep) -> dict[str, Any]:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    return config_service.config_all_vals(db)


@router.put("/config", response_model=ConfigResponse)
def update_config(
    payload: ConfigUpdate,
    request: Request,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Write the given settings and refresh the application's snapshot."""
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    values: dict[str, str] = {}
    for name, value in payload.model_dump(exclude_none=True).items():
        key = ConfigKey(name)
        values[key.value] = encode_flag(value) if key in BOOLEAN_KEYS else str(value)
    if values:
        config_service.write_configs(db, values)
        reload_forum_config(request, db)
    return config_service.config_all_vals(db)


@router.get("/common", response_model=CommonDataResponse)
def common_data(
    ctx: RequestContextDep,
    db: SessionDep,
    config: ForumConfigDep,
) -> common_service.CommonData:
    return common_service.read_common_data(db, ctx, config)


@router.get("/stats")
def stats(db: SessionDep) -> dict[str, int]:
    return {
        "users": common_service.num_users(db),
        "groups": common_service.num_groups(db),
        "topics": common_service.num_topics(db),
        "comments": common_service.num_comments(db),
    }


@router.get("/notes", response_model=list[NoteResponse])
def list_notes(db: SessionDep) -> list[ExtraNote]:
    return list(note_service.read_extra_notes(db))


@router.get("/notes/{note_id}", response_model=NoteResponse)
def get_note(note_id: int, db: SessionDep) -> ExtraNote:
    return note_service.read_extra_note(db, note_id)


@router.post("/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(payload: NoteCreate, current_user: CurrentUserDep, db: SessionDep) -> ExtraNote:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    return note_service.create_extra_note(db, payload.name, payload.url, payload.content)


@router.put("/notes/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: int,
    payload: NoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ExtraNote:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    note_service.update_extra_note(db, note_id, payload.name, payload.url, payload.content)
    note = note_service.read_extra_note(db, note_id)
    db.refresh(note)
    return note


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_note(note_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    require_privilege(db, current_user, Privilege.SUPER_ADMIN)
    note_service.delete_extra_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
