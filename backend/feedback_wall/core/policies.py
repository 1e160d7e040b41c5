"""Row access policies for profiles, feedback pages and feedback.

Each rule exists twice: as a predicate over an already loaded row, and as a SQL
clause that restricts a query to the rows the caller may see. The services
layer filters every query with the clause form and checks writes with the
predicate form, so authorization is decided per request against the caller's
identity and never cached.

    Collection      Read                         Insert           Update  Delete
    profiles        owner                        owner (self)     owner   -
    feedback_pages  owner, or anyone if active   owner (self)     owner   owner
    feedback        anyone if page active        anyone if page   -       -
                                                 active
"""
import uuid
from dataclasses import dataclass

from sqlalchemy import ColumnElement, false, or_, select

from feedback_wall.models.feedback import Feedback
from feedback_wall.models.feedback_page import FeedbackPage
from feedback_wall.models.profile import Profile


@dataclass(frozen=True)
class Caller:
    """Identity a request runs as. ``user_id`` is None for anonymous callers."""

    user_id: uuid.UUID | None = None
    email: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = Caller()


def _is_owner(caller: Caller, owner_id: uuid.UUID | None) -> bool:
    return caller.is_authenticated and owner_id == caller.user_id


# --- profiles ---------------------------------------------------------------

def profile_read_allowed(caller: Caller, profile: Profile) -> bool:
    return _is_owner(caller, profile.user_id)


def profile_insert_allowed(caller: Caller, user_id: uuid.UUID) -> bool:
    return _is_owner(caller, user_id)


def profile_update_allowed(caller: Caller, profile: Profile) -> bool:
    return _is_owner(caller, profile.user_id)


def profile_read_clause(caller: Caller) -> ColumnElement[bool]:
    if not caller.is_authenticated:
        return false()
    return Profile.user_id == caller.user_id


# --- feedback pages ---------------------------------------------------------

def page_read_allowed(caller: Caller, page: FeedbackPage) -> bool:
    return page.is_active or _is_owner(caller, page.user_id)


def page_insert_allowed(caller: Caller, page: FeedbackPage) -> bool:
    return _is_owner(caller, page.user_id)


def page_update_allowed(caller: Caller, page: FeedbackPage) -> bool:
    return _is_owner(caller, page.user_id)


def page_delete_allowed(caller: Caller, page: FeedbackPage) -> bool:
    return _is_owner(caller, page.user_id)


def page_read_clause(caller: Caller) -> ColumnElement[bool]:
    active = FeedbackPage.is_active.is_(True)
    if not caller.is_authenticated:
        return active
    return or_(active, FeedbackPage.user_id == caller.user_id)


def page_write_clause(caller: Caller) -> ColumnElement[bool]:
    """Rows the caller may update or delete."""
    if not caller.is_authenticated:
        return false()
    return FeedbackPage.user_id == caller.user_id


# --- feedback ---------------------------------------------------------------

def feedback_read_allowed(caller: Caller, page: FeedbackPage) -> bool:
    # Owners get no extra access: an inactive page hides its feedback from everyone
    return bool(page.is_active)


def feedback_insert_allowed(caller: Caller, page: FeedbackPage | None) -> bool:
    # Anonymous and authenticated callers are treated alike
    return page is not None and page.is_active


def feedback_read_clause(caller: Caller) -> ColumnElement[bool]:
    active_pages = select(FeedbackPage.id).where(FeedbackPage.is_active.is_(True))
    return Feedback.feedback_page_id.in_(active_pages)
