"""Extra notes: static content blocks linked from every page."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from orange_forum.core.errors import NoteNotFoundError, ValidationFailureError
from orange_forum.db.session import best_effort, guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import ExtraNote


@dataclass(frozen=True, slots=True)
class NoteLink:
    """Id and name of a note, enough to render a link to it."""

    id: int
    name: str


@guard_store
def create_extra_note(db: Session, name: str, url: str = "", content: str = "") -> ExtraNote:
    if not name:
        raise ValidationFailureError("Note name cannot be empty.")
    now = now_epoch()
    with unit_of_work(db):
        note = ExtraNote(name=name, url=url, content=content, created_date=now, updated_date=now)
        db.add(note)
        db.flush()
    return note


@guard_store
def read_extra_notes(db: Session) -> Sequence[ExtraNote]:
    return db.scalars(select(ExtraNote).order_by(ExtraNote.id)).all()


@guard_store
def read_extra_note(db: Session, note_id: int) -> ExtraNote:
    note = db.get(ExtraNote, note_id)
    if note is None:
        raise NoteNotFoundError()
    return note


@best_effort([])
def read_extra_notes_short(db: Session) -> list[NoteLink]:
    rows = db.execute(select(ExtraNote.id, ExtraNote.name).order_by(ExtraNote.id)).all()
    return [NoteLink(id=note_id, name=name) for note_id, name in rows]


@guard_store
def update_extra_note(db: Session, note_id: int, name: str, url: str, content: str) -> None:
    if not name:
        raise ValidationFailureError("Note name cannot be empty.")
    with unit_of_work(db):
        result = db.execute(
            update(ExtraNote)
            .where(ExtraNote.id == note_id)
            .values(name=name, url=url, content=content, updated_date=now_epoch())
        )
        if result.rowcount == 0:
            raise NoteNotFoundError()


@guard_store
def delete_extra_note(db: Session, note_id: int) -> None:
    """Remove the note permanently."""
    with unit_of_work(db):
        result = db.execute(delete(ExtraNote).where(ExtraNote.id == note_id))
        if result.rowcount == 0:
            raise NoteNotFoundError()
