import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.api.deps import get_current_user
from feedback_wall.core.policies import Caller
from feedback_wall.core.slug import derive_slug
from feedback_wall.database import get_db
from feedback_wall.models.feedback_page import FeedbackPage
from feedback_wall.schemas.feedback import FeedbackResponse, FeedbackReviewResponse
from feedback_wall.schemas.feedback_page import (
    EMPTY_STATE_MESSAGE,
    PageActivationRequest,
    PageCreateRequest,
    PageListResponse,
    PageResponse,
    SlugPreviewResponse,
)
from feedback_wall.services.feedback import FeedbackService, with_ordinals
from feedback_wall.services.feedback_page import FeedbackPageService, public_url_for

router = APIRouter(prefix="/pages", tags=["Feedback Pages"])


def _to_response(page: FeedbackPage) -> PageResponse:
    data = PageResponse.model_validate(page)
    data.public_url = public_url_for(page.slug)
    return data


@router.get("/", response_model=PageListResponse)
async def list_pages(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """List the caller's feedback pages (newest first)."""
    pages, total = await FeedbackPageService.list_owned(db, caller)
    return PageListResponse(
        items=[_to_response(p) for p in pages],
        total=total,
        empty_state=EMPTY_STATE_MESSAGE if total == 0 else None,
    )


@router.get("/slug", response_model=SlugPreviewResponse)
async def preview_slug(
    title: str = Query(default=""),
    _caller: Caller = Depends(get_current_user),
):
    """Slug the create form should prefill for a title."""
    return SlugPreviewResponse(title=title, slug=derive_slug(title))


@router.post("/", response_model=PageResponse, status_code=201)
async def create_page(
    body: PageCreateRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Create a feedback page owned by the caller."""
    page = await FeedbackPageService.create(
        db=db,
        caller=caller,
        title=body.title,
        description=body.description,
        slug=body.slug,
    )
    return _to_response(page)


@router.patch("/{page_id}", response_model=PageResponse)
async def set_page_activation(
    page_id: uuid.UUID,
    body: PageActivationRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Open or close a page for public submissions. Owner only."""
    page = await FeedbackPageService.set_active(db, caller, page_id, body.is_active)
    return _to_response(page)


@router.delete("/{page_id}", status_code=204)
async def delete_page(
    page_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Delete a page and all of its feedback. Owner only."""
    await FeedbackPageService.delete(db, caller, page_id)


@router.get("/{page_id}/feedback", response_model=FeedbackReviewResponse)
async def review_feedback(
    page_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Feedback received by one of the caller's pages, newest first."""
    page = await FeedbackPageService.get_owned(db, caller, page_id)
    items = await FeedbackService.list_for_page(db, caller, page.id)
    return FeedbackReviewResponse(
        page=_to_response(page),
        items=[
            FeedbackResponse(
                id=fb.id,
                ordinal=ordinal,
                message=fb.message,
                created_at=fb.created_at,
            )
            for ordinal, fb in with_ordinals(items)
        ],
        total=len(items),
    )
