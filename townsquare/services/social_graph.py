"""Social Graph Store — per-identity following sets with idempotent mutation.

Invariants:
    - follow is insert-or-ignore: following twice equals following once
    - unfollow of a non-followed identity raises ValidationError("not following")
    - self-follow rejected before touching the store
    - following sets are returned as display names

Design Decisions:
    - Atomic set add via INSERT .. ON CONFLICT DO NOTHING on the (follower, followee) key
    - Atomic set remove via DELETE; "not following" detected from the affected row count,
      so two concurrent unfollows cannot both succeed
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.core.domain_types import IdentityKey
from townsquare.core.enforce_graph import check_not_self, following_names
from townsquare.core.errors import ErrorContext, NotFoundError, ValidationError
from townsquare.core.repository_protocols import AuthorResolver
from townsquare.infrastructure.database import dialect_insert
from townsquare.models.follow import Follow
from townsquare.models.identity import Identity

logger = logging.getLogger(__name__)


class SocialGraph:
    """Directed follows relation between identities."""

    def __init__(self, db: AsyncSession, resolver: AuthorResolver):
        self.db = db
        self.resolver = resolver

    async def get_following(self, identity_key: IdentityKey) -> set[str]:
        """Display names of everyone `identity_key` follows."""
        await self._require_identity(identity_key)
        result = await self.db.execute(
            select(Identity.display_name)
            .join(Follow, Follow.followee_id == Identity.id)
            .where(Follow.follower_id == identity_key),
        )
        return following_names(result.all())

    async def follow(self, follower_key: IdentityKey, target_name: str) -> set[str]:
        target_key = await self._resolve_target(target_name)
        check_not_self(follower_key, target_key)
        await self._require_identity(follower_key)

        stmt = dialect_insert(self.db, Follow).values(
            follower_id=follower_key, followee_id=target_key,
        ).on_conflict_do_nothing(
            index_elements=[Follow.follower_id, Follow.followee_id],
        )
        await self.db.execute(stmt)
        await self.db.commit()
        logger.info(
            f"Now following {target_name}", extra={"identity_key": follower_key},
        )
        return await self.get_following(follower_key)

    async def unfollow(self, follower_key: IdentityKey, target_name: str) -> set[str]:
        target_key = await self._resolve_target(target_name)
        await self._require_identity(follower_key)

        result = await self.db.execute(
            delete(Follow)
            .where(Follow.follower_id == follower_key)
            .where(Follow.followee_id == target_key),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ValidationError(
                "not following", field="user",
                context=ErrorContext(identity_key=str(follower_key)),
            )
        await self.db.commit()
        logger.info(
            f"Stopped following {target_name}", extra={"identity_key": follower_key},
        )
        return await self.get_following(follower_key)

    async def _resolve_target(self, target_name: str) -> IdentityKey:
        target_key = await self.resolver.resolve(target_name)
        if target_key is None:
            raise NotFoundError("Identity", target_name)
        return target_key

    async def _require_identity(self, identity_key: IdentityKey) -> None:
        result = await self.db.execute(
            select(Identity.id).where(Identity.id == identity_key),
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Identity", str(identity_key))
