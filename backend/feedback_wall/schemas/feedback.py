import uuid
from datetime import datetime

from pydantic import BaseModel, field_validator

from feedback_wall.schemas.feedback_page import PageResponse


class FeedbackSubmitRequest(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter your feedback")
        return v


class FeedbackSubmitResponse(BaseModel):
    status: str = "received"
    message: str = "Thank you for your feedback!"


class FeedbackResponse(BaseModel):
    id: uuid.UUID
    ordinal: int
    message: str
    created_at: datetime


class FeedbackReviewResponse(BaseModel):
    page: PageResponse
    items: list[FeedbackResponse]
    total: int
