from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_wall.api.deps import get_caller
from feedback_wall.config import get_settings
from feedback_wall.core.policies import Caller
from feedback_wall.database import get_db
from feedback_wall.schemas.dashboard import DashboardLinks, DashboardResponse
from feedback_wall.services.profile import ProfileService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Landing data for signed-in users; everyone else is sent to sign in."""
    settings = get_settings()
    if not caller.is_authenticated:
        return RedirectResponse(settings.SIGN_IN_URL, status_code=307)

    profile = await ProfileService.get_own(db, caller)
    return DashboardResponse(
        user_id=caller.user_id,
        email=caller.email,
        display_name=profile.display_name,
        links=DashboardLinks(
            pages_url="/api/v1/pages/",
            sign_out_url=settings.SIGN_OUT_URL,
        ),
    )
