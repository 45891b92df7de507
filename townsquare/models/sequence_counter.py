"""SequenceCounter ORM — named monotonic counter row.

Invariants:
    - name is the primary key; value only ever increases
    - rows are created lazily by the first allocation (upsert)
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from townsquare.db.base import Base


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
