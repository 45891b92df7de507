"""ProfileDetail ORM — contact and presentation fields of an Identity.

Invariants:
    - One-to-one with Identity (unique identity_id)
    - Created in the same transaction as its Identity
    - email is unique across profiles
"""

import uuid
from datetime import date

from sqlalchemy import String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from townsquare.core.enforce_profile import DEFAULT_AVATAR, DEFAULT_HEADLINE
from townsquare.db.base import Base


class ProfileDetail(Base):
    """Profile fields, plain CRUD."""
    __tablename__ = "profile_details"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    identity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("identities.id"),
        nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    zipcode: Mapped[str] = mapped_column(String(10), nullable=False)
    headline: Mapped[str] = mapped_column(
        String(500), nullable=False, default=DEFAULT_HEADLINE,
    )
    avatar: Mapped[str] = mapped_column(
        String(1000), nullable=False, default=DEFAULT_AVATAR,
    )

    identity: Mapped["Identity"] = relationship(
        "Identity", back_populates="profile",
    )
