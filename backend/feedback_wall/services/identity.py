import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.core.exceptions import UnauthorizedError
from feedback_wall.models.identity import Identity

logger = logging.getLogger(__name__)


class IdentityService:
    @staticmethod
    async def resolve(db: AsyncSession, claims: dict) -> Identity:
        """Return the identity named by verified token claims, provisioning it on first sight."""
        try:
            user_id = uuid.UUID(str(claims["sub"]))
        except (KeyError, ValueError):
            raise UnauthorizedError("Invalid or expired token")

        identity = await db.get(Identity, user_id)
        if identity is not None:
            return identity

        metadata = claims.get("user_metadata")
        identity = Identity(
            id=user_id,
            email=claims.get("email"),
            raw_user_meta_data=metadata if isinstance(metadata, dict) else {},
        )
        db.add(identity)
        try:
            await db.commit()
        except IntegrityError:
            # Another request provisioned the same identity first
            await db.rollback()
            result = await db.execute(select(Identity).where(Identity.id == user_id))
            return result.scalar_one()

        logger.info("Provisioned identity %s", user_id)
        return identity
