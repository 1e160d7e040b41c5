import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import PyJWTError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.core.exceptions import UnauthorizedError
from feedback_wall.core.policies import ANONYMOUS, Caller
from feedback_wall.core.security import decode_token
from feedback_wall.database import get_db
from feedback_wall.services.identity import IdentityService

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """Resolve the request's caller; anonymous when no usable token is sent."""
    if credentials is None:
        return ANONYMOUS

    try:
        payload = decode_token(credentials.credentials)
    except PyJWTError as e:
        logger.debug("Ignoring invalid bearer token: %s", e)
        return ANONYMOUS

    try:
        identity = await IdentityService.resolve(db, payload)
    except UnauthorizedError:
        return ANONYMOUS
    return Caller(user_id=identity.id, email=identity.email)


async def get_current_user(caller: Caller = Depends(get_caller)) -> Caller:
    """Require an authenticated caller."""
    if not caller.is_authenticated:
        raise UnauthorizedError("Not authenticated")
    return caller
