"""Group-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class GroupCreate(BaseModel):
    """Schema for creating a new group."""

    name: str = Field(..., min_length=1, max_length=64)
    description: str = ""
    header_msg: str = ""


class GroupUpdate(GroupCreate):
    is_sticky: bool | None = None
    is_private: bool | None = None


class GroupResponse(BaseModel):
    """Schema for group information returned by the API."""

    id: int
    name: str
    description: str
    header_msg: str
    is_sticky: bool
    is_private: bool
    is_closed: bool
    created_date: int
    updated_date: int

    model_config = ConfigDict(from_attributes=True)


class GroupRoles(BaseModel):
    admins: list[str]
    mods: list[str]
