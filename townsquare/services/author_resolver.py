"""Author Resolver — display name → stable identity key.

Invariants:
    - Pure read: never mutates the store
    - Unknown display name resolves to None (callers decide NotFound vs Forbidden)
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.core.domain_types import IdentityKey
from townsquare.models.identity import Identity


class AuthorResolver:
    """Resolves display names against the identities table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, display_name: str) -> IdentityKey | None:
        result = await self.db.execute(
            select(Identity.id).where(Identity.display_name == display_name),
        )
        key = result.scalar_one_or_none()
        return IdentityKey(key) if key is not None else None
