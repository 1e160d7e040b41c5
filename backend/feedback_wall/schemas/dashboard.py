import uuid

from pydantic import BaseModel


class DashboardLinks(BaseModel):
    pages_url: str
    sign_out_url: str


class DashboardResponse(BaseModel):
    user_id: uuid.UUID
    email: str | None
    display_name: str | None
    links: DashboardLinks
