"""Article ORM — top-level content item and owner of its comments.

Invariants:
    - sequence is globally unique and assigned by the sequence allocator
    - author_id is the author's identity key (display name resolved via relationship)
    - comments ordered by their within-article sequence
    - never deleted

Design Decisions:
    - author stored as key, not display name: ownership checks don't depend on a mutable field
    - selectin loading for author and comments: async sessions cannot lazy-load
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from townsquare.db.base import Base


class Article(Base):
    """Article aggregate root — owns its comments."""
    __tablename__ = "articles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    sequence: Mapped[int] = mapped_column(
        Integer, nullable=False, unique=True, index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("identities.id"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author: Mapped["Identity"] = relationship("Identity", lazy="selectin")
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="article",
        order_by="Comment.sequence", lazy="selectin",
    )
