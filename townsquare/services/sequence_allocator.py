"""Sequence Allocator — atomic, named, monotonic counters.

Invariants:
    - allocate(name) returns counter+1 and persists it in ONE statement (upsert ... returning)
    - Counters start at 0; the first allocation of a name returns 1
    - N concurrent allocations for a name yield N distinct consecutive integers
    - Allocation joins the caller's transaction: a rolled-back creation also rolls back its sequence

Design Decisions:
    - Store-side increment-and-fetch, never application-level locking
    - No commit here: the caller commits the dependent entity with the sequence
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.infrastructure.database import dialect_insert
from townsquare.models.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)


class SequenceAllocator:
    """Allocates values from named counters inside the caller's transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def allocate(self, name: str) -> int:
        """Atomically increment and return the named counter."""
        stmt = dialect_insert(self.db, SequenceCounter).values(name=name, value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[SequenceCounter.name],
            set_={"value": SequenceCounter.value + 1},
        ).returning(SequenceCounter.value)
        result = await self.db.execute(stmt)
        value = result.scalar_one()
        logger.debug(f"Allocated {name} sequence {value}", extra={"counter": name})
        return value
