"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .content import (
    CommentCreate,
    CommentNodeResponse,
    CommentResponse,
    CommentUpdate,
    TopicCreate,
    TopicResponse,
    TopicUpdate,
)
from .group import GroupCreate, GroupResponse, GroupRoles, GroupUpdate
from .site import CommonDataResponse, ConfigResponse, ConfigUpdate, NoteCreate, NoteResponse
from .user import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
)
from .vote import VoteCreate, VoteResponse

__all__ = [
    "CommentCreate", "CommentNodeResponse", "CommentResponse", "CommentUpdate",
    "TopicCreate", "TopicResponse", "TopicUpdate",
    "GroupCreate", "GroupResponse", "GroupRoles", "GroupUpdate",
    "CommonDataResponse", "ConfigResponse", "ConfigUpdate", "NoteCreate", "NoteResponse",
    "ForgotPasswordRequest", "LoginRequest", "LoginResponse", "ProfileUpdate",
    "ResetPasswordRequest", "SignupRequest", "UserResponse",
    "VoteCreate", "VoteResponse",
]
