import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_wall.database import Base

DEFAULT_PAGE_TITLE = "My Feedback Page"


class FeedbackPage(Base):
    __tablename__ = "feedback_pages"
    __table_args__ = (Index("idx_feedback_pages_user", "user_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        Text, nullable=False, default=DEFAULT_PAGE_TITLE, server_default=DEFAULT_PAGE_TITLE
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Unique store-wide, not per owner
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    owner = relationship("Identity", back_populates="feedback_pages")
    feedback = relationship(
        "Feedback",
        back_populates="feedback_page",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<FeedbackPage {self.slug}>"
