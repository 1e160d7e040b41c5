from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.api.deps import get_current_user
from feedback_wall.core.policies import Caller
from feedback_wall.database import get_db
from feedback_wall.schemas.profile import ProfileResponse, ProfileUpdateRequest
from feedback_wall.services.profile import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/", response_model=ProfileResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Get the current caller's profile."""
    return await ProfileService.get_own(db, caller)


@router.patch("/", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    """Change the caller's display name."""
    return await ProfileService.update_own(db, caller, display_name=body.display_name)
