import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.core.exceptions import ForbiddenError, UnauthorizedError
from feedback_wall.core.policies import (
    Caller,
    profile_insert_allowed,
    profile_read_clause,
    profile_update_allowed,
)
from feedback_wall.models.identity import DEFAULT_DISPLAY_NAME
from feedback_wall.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    @staticmethod
    async def get_own(db: AsyncSession, caller: Caller) -> Profile:
        """The caller's profile, created on the spot if it has gone missing."""
        if not caller.is_authenticated:
            raise UnauthorizedError()

        result = await db.execute(select(Profile).where(profile_read_clause(caller)))
        profile = result.scalar_one_or_none()
        if profile is not None:
            return profile

        if not profile_insert_allowed(caller, caller.user_id):
            raise ForbiddenError()
        profile = Profile(
            user_id=caller.user_id,
            display_name=DEFAULT_DISPLAY_NAME,
            email=caller.email,
        )
        db.add(profile)
        try:
            await db.commit()
        except IntegrityError:
            # A concurrent request recreated it first
            await db.rollback()
            result = await db.execute(select(Profile).where(profile_read_clause(caller)))
            return result.scalar_one()
        await db.refresh(profile)
        logger.info("Recreated missing profile for %s", caller.user_id)
        return profile

    @staticmethod
    async def update_own(
        db: AsyncSession, caller: Caller, display_name: str | None = None
    ) -> Profile:
        profile = await ProfileService.get_own(db, caller)
        if not profile_update_allowed(caller, profile):
            raise ForbiddenError()

        if display_name is not None:
            profile.display_name = display_name.strip() or DEFAULT_DISPLAY_NAME

        await db.commit()
        await db.refresh(profile)
        return profile
