"""Comment ORM — reply scoped to exactly one article.

Invariants:
    - (article_id, sequence) is unique; sequences collide freely across articles
    - sequence = max(existing in article) + 1 at insert time
    - author_id is the commenter's identity key
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from townsquare.db.base import Base


class Comment(Base):
    """Comment entity — numbered within its article."""
    __tablename__ = "comments"
    __table_args__ = (
        UniqueConstraint("article_id", "sequence", name="uq_comments_article_sequence"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    article_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("articles.id"), nullable=False,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("identities.id"), nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    article: Mapped["Article"] = relationship(
        "Article", back_populates="comments",
    )
    author: Mapped["Identity"] = relationship("Identity", lazy="selectin")
