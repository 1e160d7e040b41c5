from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.api.deps import get_caller
from feedback_wall.core.policies import Caller
from feedback_wall.database import get_db
from feedback_wall.schemas.feedback import FeedbackSubmitRequest, FeedbackSubmitResponse
from feedback_wall.schemas.feedback_page import PublicPageResponse
from feedback_wall.services.feedback import FeedbackService
from feedback_wall.services.feedback_page import FeedbackPageService

router = APIRouter(prefix="/public/pages", tags=["Public Feedback"])


@router.get("/{slug}", response_model=PublicPageResponse)
async def get_public_page(
    slug: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Title and description of an active page. No login required."""
    page = await FeedbackPageService.get_public(db, caller, slug)
    return PublicPageResponse.model_validate(page)


@router.post("/{slug}/feedback", response_model=FeedbackSubmitResponse, status_code=201)
async def submit_feedback(
    slug: str,
    body: FeedbackSubmitRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Submit an anonymous message to an active page."""
    await FeedbackService.submit(db, caller, slug, body.message)
    return FeedbackSubmitResponse()
