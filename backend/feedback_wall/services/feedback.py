import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.core.exceptions import NotFoundError
from feedback_wall.core.policies import (
    Caller,
    feedback_insert_allowed,
    feedback_read_clause,
)
from feedback_wall.models.feedback import Feedback
from feedback_wall.services.feedback_page import PAGE_NOT_FOUND, FeedbackPageService

logger = logging.getLogger(__name__)


def with_ordinals(items: list[Feedback]) -> list[tuple[int, Feedback]]:
    """Label newest-first items so the newest gets ``len(items)`` and the oldest 1."""
    total = len(items)
    return [(total - index, item) for index, item in enumerate(items)]


class FeedbackService:
    @staticmethod
    async def list_for_page(
        db: AsyncSession, caller: Caller, page_id: uuid.UUID
    ) -> list[Feedback]:
        """All readable feedback for one page, newest first."""
        stmt = (
            select(Feedback)
            .where(
                feedback_read_clause(caller),
                Feedback.feedback_page_id == page_id,
            )
            .order_by(Feedback.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def submit(db: AsyncSession, caller: Caller, slug: str, message: str) -> None:
        """Store an anonymous message against the active page with this slug.

        ``message`` is expected to be stripped and non-empty already. Nothing
        about the caller is written to the row.
        """
        page = await FeedbackPageService.get_public(db, caller, slug)
        if not feedback_insert_allowed(caller, page):
            raise NotFoundError(PAGE_NOT_FOUND)

        db.add(Feedback(message=message, feedback_page_id=page.id))
        await db.commit()
        logger.info("Accepted feedback for page %s", page.slug)
