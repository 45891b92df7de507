"""Following Routes — read and mutate the caller's following set.

Invariants:
    - PUT is idempotent (already following → 200 with unchanged set)
    - DELETE of a non-followed user → 400 "not following"
    - Following lists are sorted display names
"""

from fastapi import APIRouter, Depends

from townsquare.api.dependencies import (
    get_author_resolver, get_current_identity, get_social_graph,
)
from townsquare.core.domain_types import CurrentIdentity
from townsquare.core.errors import NotFoundError
from townsquare.schemas.social import FollowingResponse
from townsquare.services.author_resolver import AuthorResolver
from townsquare.services.social_graph import SocialGraph

router = APIRouter(prefix="/api/v1/following", tags=["following"])


def _response(username: str, following: set[str]) -> FollowingResponse:
    return FollowingResponse(username=username, following=sorted(following))


@router.get("", response_model=FollowingResponse)
async def get_own_following(
    identity: CurrentIdentity = Depends(get_current_identity),
    graph: SocialGraph = Depends(get_social_graph),
):
    following = await graph.get_following(identity.key)
    return _response(identity.display_name, following)


@router.get("/{user}", response_model=FollowingResponse)
async def get_following(
    user: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    graph: SocialGraph = Depends(get_social_graph),
    resolver: AuthorResolver = Depends(get_author_resolver),
):
    """Following set of any identity, by display name."""
    key = await resolver.resolve(user)
    if key is None:
        raise NotFoundError("Identity", user)
    return _response(user, await graph.get_following(key))


@router.put("/{user}", response_model=FollowingResponse)
async def follow(
    user: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    graph: SocialGraph = Depends(get_social_graph),
):
    following = await graph.follow(identity.key, user)
    return _response(identity.display_name, following)


@router.delete("/{user}", response_model=FollowingResponse)
async def unfollow(
    user: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    graph: SocialGraph = Depends(get_social_graph),
):
    following = await graph.unfollow(identity.key, user)
    return _response(identity.display_name, following)
