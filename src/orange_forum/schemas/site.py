"""Site-level Pydantic schemas: settings, extra notes, common page data."""

from pydantic import BaseModel, ConfigDict, Field


class ConfigResponse(BaseModel):
    forum_name: str
    header_msg: str
    signup_disabled: bool
    group_creation_disabled: bool
    image_upload_enabled: bool
    file_upload_enabled: bool
    allow_group_subscription: bool
    allow_topic_subscription: bool
    data_dir: str
    default_from_mail: str
    smtp_host: str
    smtp_port: str
    smtp_user: str
    smtp_pass: str


class ConfigUpdate(BaseModel):
    """Partial settings update; omitted fields keep their stored value."""

    forum_name: str | None = None
    header_msg: str | None = None
    signup_disabled: bool | None = None
    group_creation_disabled: bool | None = None
    image_upload_enabled: bool | None = None
    file_upload_enabled: bool | None = None
    allow_group_subscription: bool | None = None
    allow_topic_subscription: bool | None = None
    data_dir: str | None = None
    default_from_mail: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = Field(None, ge=1, le=65535)
    smtp_user: str | None = None
    smtp_pass: str | None = None


class NoteCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    url: str = ""
    content: str = ""


class NoteResponse(BaseModel):
    id: int
    name: str
    url: str
    content: str
    created_date: int
    updated_date: int

    model_config = ConfigDict(from_attributes=True)


class NoteLinkResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CommonDataResponse(BaseModel):
    csrf: str
    msg: str
    username: str
    karma: int
    forum_name: str
    extra_notes_short: list[NoteLinkResponse]

    model_config = ConfigDict(from_attributes=True)
