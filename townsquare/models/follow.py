"""Follow ORM — directed edge of the following relation.

Invariants:
    - (follower_id, followee_id) is the primary key: no duplicate edges
    - follower_id != followee_id (check constraint): no self-follow
    - no acyclicity assumed; A→B and B→A may both exist
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from townsquare.db.base import Base


class Follow(Base):
    """Edge follower → followee."""
    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
    )

    follower_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("identities.id"), primary_key=True,
    )
    followee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("identities.id"), primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
