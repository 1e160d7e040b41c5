import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String, Uuid, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_wall.database import Base

DEFAULT_DISPLAY_NAME = "Anonymous"


class Identity(Base):
    """Local mirror of an identity issued by the external provider.

    Holds no credentials. Rows are keyed by the provider's user id (token
    ``sub``) and inserted the first time a valid token for that id is seen.
    """

    __tablename__ = "identities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    raw_user_meta_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    profile = relationship(
        "Profile",
        back_populates="identity",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    feedback_pages = relationship(
        "FeedbackPage",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Identity {self.email or self.id}>"


def display_name_from_metadata(meta: dict | None) -> str:
    # Token metadata is client-shaped; anything but a mapping of strings is ignored
    if not isinstance(meta, dict):
        return DEFAULT_DISPLAY_NAME
    for key in ("display_name", "full_name"):
        value = meta.get(key)
        if isinstance(value, str) and value:
            return value
    return DEFAULT_DISPLAY_NAME


@event.listens_for(Identity, "after_insert")
def create_profile_for_new_identity(mapper, connection, target: Identity) -> None:
    """Provision exactly one profile for every newly inserted identity."""
    from feedback_wall.models.profile import Profile

    now = datetime.now(timezone.utc)
    connection.execute(
        Profile.__table__.insert().values(
            id=uuid.uuid4(),
            user_id=target.id,
            display_name=display_name_from_metadata(target.raw_user_meta_data),
            email=target.email,
            created_at=now,
            updated_at=now,
        )
    )
