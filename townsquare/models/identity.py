"""Identity ORM — a registered participant addressed by display name and stable key.

Invariants:
    - id (UUID) is the stable key; display_name is unique
    - credential_hash never leaves the shell
    - exactly one ProfileDetail per Identity (profile_details.identity_id is unique)

Design Decisions:
    - Following set stored as Follow rows, not an array column: set add/remove
      become single-row atomic statements
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from townsquare.db.base import Base


class Identity(Base):
    """Identity entity — owner of articles, comments and a following set."""
    __tablename__ = "identities"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    display_name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    credential_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    profile: Mapped["ProfileDetail"] = relationship(
        "ProfileDetail", back_populates="identity",
        uselist=False, lazy="selectin",
    )
