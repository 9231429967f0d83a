from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from chatroom.core.config import settings
from chatroom.core.timeutil import ensure_utc

AttachmentType = Literal["image", "file", "gif"]


class MessageRecord(BaseModel):
    id: int
    content: str = ""
    username: str
    user_id: int = Field(alias="userId")
    attachment_url: Optional[str] = Field(default=None, alias="attachmentUrl")
    attachment_type: Optional[AttachmentType] = Field(default=None, alias="attachmentType")
    attachment_name: Optional[str] = Field(default=None, alias="attachmentName")
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class MessageCreate(BaseModel):
    content: str = Field(default="", max_length=settings.MESSAGE_MAX_LENGTH)
    username: str = Field(min_length=1)
    user_id: int = Field(alias="userId", ge=1)
    attachment_url: Optional[str] = Field(default=None, alias="attachmentUrl")
    attachment_type: Optional[AttachmentType] = Field(default=None, alias="attachmentType")
    attachment_name: Optional[str] = Field(default=None, alias="attachmentName")

    model_config = {"populate_by_name": True}

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, value):
        return "" if value is None else value

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_url and self.attachment_type and self.attachment_name)

    @model_validator(mode="after")
    def require_content_or_attachment(self) -> "MessageCreate":
        parts = (self.attachment_url, self.attachment_type, self.attachment_name)
        if any(parts) and not all(parts):
            raise ValueError("Attachment needs a url, a type and a name")
        if not self.content.strip() and not self.has_attachment:
            raise ValueError("Message must have either text content or an attachment")
        return self


class MessageUpdate(BaseModel):
    # Checked by the endpoint so a missing id gets its own error message
    user_id: Optional[int] = Field(default=None, alias="userId")
    content: str = Field(min_length=1, max_length=settings.MESSAGE_MAX_LENGTH)

    model_config = {"populate_by_name": True}
