import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

EMPTY_STATE_MESSAGE = "You have no feedback pages yet. Create your first one to start collecting feedback."


class PageCreateRequest(BaseModel):
    title: str
    description: str | None = None
    # Derived from the title when omitted; still editable by the client
    slug: str | None = Field(default=None, max_length=255)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class PageActivationRequest(BaseModel):
    is_active: bool


class PageResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None
    slug: str
    is_active: bool
    public_url: str = ""
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PageListResponse(BaseModel):
    items: list[PageResponse]
    total: int
    empty_state: str | None = None


class SlugPreviewResponse(BaseModel):
    title: str
    slug: str


class PublicPageResponse(BaseModel):
    """What anonymous visitors see. Internal identifiers stay private."""

    title: str
    description: str | None
    slug: str

    model_config = {"from_attributes": True}
