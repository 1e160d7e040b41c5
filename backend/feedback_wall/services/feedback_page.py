import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.config import get_settings
from feedback_wall.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from feedback_wall.core.policies import (
    Caller,
    page_delete_allowed,
    page_insert_allowed,
    page_read_clause,
    page_update_allowed,
    page_write_clause,
)
from feedback_wall.core.slug import derive_slug
from feedback_wall.models.feedback_page import FeedbackPage

logger = logging.getLogger(__name__)

PAGE_NOT_FOUND = "Feedback page not found"


def public_url_for(slug: str) -> str:
    return f"{get_settings().PUBLIC_BASE_URL}/feedback/{slug}"


class FeedbackPageService:
    @staticmethod
    async def list_owned(db: AsyncSession, caller: Caller) -> tuple[list[FeedbackPage], int]:
        """Pages owned by the caller, newest first."""
        # The read rule also admits other owners' active pages; this view only lists the caller's
        conditions = [page_read_clause(caller), FeedbackPage.user_id == caller.user_id]

        count_stmt = select(func.count(FeedbackPage.id)).where(*conditions)
        total = (await db.execute(count_stmt)).scalar() or 0

        stmt = (
            select(FeedbackPage)
            .where(*conditions)
            .order_by(FeedbackPage.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all()), total

    @staticmethod
    async def create(
        db: AsyncSession,
        caller: Caller,
        title: str,
        description: str | None = None,
        slug: str | None = None,
    ) -> FeedbackPage:
        """Create a page owned by the caller. The slug must be unused store-wide."""
        slug = derive_slug(slug if slug and slug.strip() else title)
        if not slug:
            raise BadRequestError("Slug is required")

        page = FeedbackPage(
            user_id=caller.user_id,
            title=title,
            description=description,
            slug=slug,
        )
        if not page_insert_allowed(caller, page):
            raise ForbiddenError("Failed to create feedback page")

        db.add(page)
        try:
            await db.commit()
            await db.refresh(page)
        except IntegrityError:
            await db.rollback()
            logger.info("Rejected feedback page create: slug %r already taken", slug)
            raise ConflictError("Failed to create feedback page")

        logger.info("Created feedback page %s (%s)", page.id, page.slug)
        return page

    @staticmethod
    async def get_owned(db: AsyncSession, caller: Caller, page_id: uuid.UUID) -> FeedbackPage:
        """Fetch a page by id only if the caller owns it; anything else is not found."""
        result = await db.execute(
            select(FeedbackPage).where(
                page_read_clause(caller),
                FeedbackPage.id == page_id,
                FeedbackPage.user_id == caller.user_id,
            )
        )
        page = result.scalar_one_or_none()
        if page is None:
            raise NotFoundError(PAGE_NOT_FOUND)
        return page

    @staticmethod
    async def get_public(db: AsyncSession, caller: Caller, slug: str) -> FeedbackPage:
        """Resolve an active page by slug. Missing and inactive pages look the same."""
        result = await db.execute(
            select(FeedbackPage).where(
                page_read_clause(caller),
                FeedbackPage.slug == slug,
                FeedbackPage.is_active.is_(True),
            )
        )
        page = result.scalar_one_or_none()
        if page is None:
            raise NotFoundError(PAGE_NOT_FOUND)
        return page

    @staticmethod
    async def set_active(
        db: AsyncSession, caller: Caller, page_id: uuid.UUID, is_active: bool
    ) -> FeedbackPage:
        result = await db.execute(
            select(FeedbackPage).where(
                page_write_clause(caller), FeedbackPage.id == page_id
            )
        )
        page = result.scalar_one_or_none()
        if page is None or not page_update_allowed(caller, page):
            raise NotFoundError(PAGE_NOT_FOUND)

        page.is_active = is_active
        await db.commit()
        await db.refresh(page)
        logger.info("Feedback page %s is_active=%s", page.id, is_active)
        return page

    @staticmethod
    async def delete(db: AsyncSession, caller: Caller, page_id: uuid.UUID) -> None:
        """Delete a page; its feedback goes with it and the slug becomes free."""
        result = await db.execute(
            select(FeedbackPage).where(
                page_write_clause(caller), FeedbackPage.id == page_id
            )
        )
        page = result.scalar_one_or_none()
        if page is None or not page_delete_allowed(caller, page):
            raise NotFoundError(PAGE_NOT_FOUND)

        await db.delete(page)
        await db.commit()
        logger.info("Deleted feedback page %s (%s)", page_id, page.slug)
