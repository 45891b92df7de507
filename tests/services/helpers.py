"""Shared builders for service and route tests."""

from datetime import date

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.infrastructure.tokens import ACCESS_TOKEN_COOKIE, create_access_token
from townsquare.services.author_resolver import AuthorResolver
from townsquare.services.content_store import ContentStore
from townsquare.services.identity_registry import IdentityRegistry
from townsquare.services.sequence_allocator import SequenceAllocator


def make_content_store(db: AsyncSession, max_comment_attempts: int = 5) -> ContentStore:
    return ContentStore(
        db, SequenceAllocator(db), AuthorResolver(db),
        max_comment_attempts=max_comment_attempts,
    )


async def register_identity(db: AsyncSession, name: str, suffix: str = "0"):
    """Register `name` with valid profile fields; returns the Identity."""
    return await IdentityRegistry(db).register(
        name, f"{name}-pw", f"{name}@example.com", date(1990, 1, 1),
        f"555000000{suffix}", "77005",
    )


def login_as(client: AsyncClient, identity) -> None:
    """Attach a valid access_token cookie for `identity` to the client."""
    client.cookies.set(
        ACCESS_TOKEN_COOKIE,
        create_access_token(identity.id, identity.display_name),
    )
