"""Profile Routes — headline, email and password of the caller.

Invariants:
    - GET without a user reads the caller's own profile
    - PUT always targets the caller (identity key from the session cookie)
"""

from fastapi import APIRouter, Depends

from townsquare.api.dependencies import get_current_identity, get_identity_registry
from townsquare.core.domain_types import CurrentIdentity
from townsquare.schemas.social import (
    EmailResponse, EmailUpdate, HeadlineResponse, HeadlineUpdate, PasswordUpdate,
)
from townsquare.services.identity_registry import IdentityRegistry

router = APIRouter(prefix="/api/v1", tags=["profile"])


@router.get("/headline", response_model=HeadlineResponse)
@router.get("/headline/{user}", response_model=HeadlineResponse)
async def get_headline(
    user: str | None = None,
    identity: CurrentIdentity = Depends(get_current_identity),
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    username = user or identity.display_name
    return HeadlineResponse(
        username=username, headline=await registry.get_headline(username),
    )


@router.put("/headline", response_model=HeadlineResponse)
async def update_headline(
    body: HeadlineUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    headline = await registry.update_headline(identity.key, body.headline)
    return HeadlineResponse(username=identity.display_name, headline=headline)


@router.get("/email", response_model=EmailResponse)
@router.get("/email/{user}", response_model=EmailResponse)
async def get_email(
    user: str | None = None,
    identity: CurrentIdentity = Depends(get_current_identity),
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    username = user or identity.display_name
    return EmailResponse(username=username, email=await registry.get_email(username))


@router.put("/email", response_model=EmailResponse)
async def update_email(
    body: EmailUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    email = await registry.update_email(identity.key, body.email)
    return EmailResponse(username=identity.display_name, email=email)


@router.put("/password")
async def change_password(
    body: PasswordUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    await registry.change_password(identity.key, body.password)
    return {"result": "Password updated successfully"}
