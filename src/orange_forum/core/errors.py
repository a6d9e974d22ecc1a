"""Typed failures raised by the forum core.

Every error carries a short ``kind`` string so callers (the HTTP layer, a
template renderer, a CLI) can pick a message or status code without matching
on exception classes.
"""

from __future__ import annotations


class ForumError(RuntimeError):
    """Base class for all failures surfaced by the forum core."""

    kind = "internal"
    default_message = "Internal error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        """Return the human-readable message."""
        return str(self)


class NotFoundError(ForumError):
    kind = "not_found"
    default_message = "Not found."


class UserNotFoundError(NotFoundError):
    default_message = "Username not found."


class GroupNotFoundError(NotFoundError):
    default_message = "Group not found."


class TopicNotFoundError(NotFoundError):
    default_message = "Topic not found."


class CommentNotFoundError(NotFoundError):
    default_message = "Comment not found."


class NoteNotFoundError(NotFoundError):
    default_message = "No note with that ID found"


class AlreadyExistsError(ForumError):
    kind = "already_exists"
    default_message = "Already exists."


class UserAlreadyExistsError(AlreadyExistsError):
    default_message = "Username already exists."


class GroupAlreadyExistsError(AlreadyExistsError):
    default_message = "Group already exists."


class AlreadyVotedError(AlreadyExistsError):
    default_message = "You have already voted on this."


class InvalidCredentialError(ForumError):
    kind = "invalid_credential"
    default_message = "Invalid credentials."


class IncorrectPasswordError(InvalidCredentialError):
    default_message = "Incorrect username/password."


class InvalidOrExpiredTokenError(ForumError):
    kind = "invalid_token"
    default_message = "Invalid/Expired reset token."


class ValidationFailureError(ForumError):
    kind = "validation_failure"
    default_message = "Invalid input."


class PermissionDeniedError(ForumError):
    kind = "permission_denied"
    default_message = "You do not have permission to do that."


class FeatureDisabledError(ForumError):
    kind = "feature_disabled"
    default_message = "This feature is disabled."


class StoreError(ForumError):
    """Unclassified data-store failure."""

    kind = "internal"
    default_message = "Data store failure."


__all__ = [
    "ForumError",
    "NotFoundError",
    "UserNotFoundError",
    "GroupNotFoundError",
    "TopicNotFoundError",
    "CommentNotFoundError",
    "NoteNotFoundError",
    "AlreadyExistsError",
    "UserAlreadyExistsError",
    "GroupAlreadyExistsError",
    "AlreadyVotedError",
    "InvalidCredentialError",
    "IncorrectPasswordError",
    "InvalidOrExpiredTokenError",
    "ValidationFailureError",
    "PermissionDeniedError",
    "FeatureDisabledError",
    "StoreError",
]
