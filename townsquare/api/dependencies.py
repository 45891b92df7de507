"""API Dependencies — authenticated identity and per-request service wiring.

Invariants:
    - Every service instance is bound to the request's AsyncSession
    - get_current_identity raises UnauthenticatedError when the cookie is missing or invalid

Design Decisions:
    - Services built through Depends so tests can override get_db once for all routes
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.config import get_settings
from townsquare.core.domain_types import CurrentIdentity
from townsquare.core.errors import UnauthenticatedError
from townsquare.infrastructure.database import get_db
from townsquare.infrastructure.tokens import ACCESS_TOKEN_COOKIE, decode_access_token
from townsquare.services.author_resolver import AuthorResolver
from townsquare.services.content_store import ContentStore
from townsquare.services.identity_registry import IdentityRegistry
from townsquare.services.sequence_allocator import SequenceAllocator
from townsquare.services.social_graph import SocialGraph


async def get_current_identity(request: Request) -> CurrentIdentity:
    """Verified caller from the access_token cookie."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise UnauthenticatedError()
    return decode_access_token(token)


def get_content_store(db: AsyncSession = Depends(get_db)) -> ContentStore:
    return ContentStore(
        db,
        SequenceAllocator(db),
        AuthorResolver(db),
        max_comment_attempts=get_settings().comment_append_max_attempts,
    )


def get_social_graph(db: AsyncSession = Depends(get_db)) -> SocialGraph:
    return SocialGraph(db, AuthorResolver(db))


def get_identity_registry(db: AsyncSession = Depends(get_db)) -> IdentityRegistry:
    return IdentityRegistry(db)


def get_author_resolver(db: AsyncSession = Depends(get_db)) -> AuthorResolver:
    return AuthorResolver(db)
