"""Auth Routes — registration, login and logout for the identity cookie.

Invariants:
    - register creates Identity + ProfileDetail atomically (IdentityRegistry)
    - login sets an http-only access_token cookie carrying the identity key and name
    - logout requires a valid session and clears the cookie

Design Decisions:
    - Stateless JWT cookie instead of server-side sessions: no cross-request in-process state
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from townsquare.api.dependencies import get_current_identity, get_identity_registry
from townsquare.config import get_settings
from townsquare.core.domain_types import CurrentIdentity
from townsquare.infrastructure.tokens import ACCESS_TOKEN_COOKIE, create_access_token
from townsquare.schemas.identity import AuthResponse, LoginRequest, RegisterRequest
from townsquare.services.identity_registry import IdentityRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    body: RegisterRequest,
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    """Create a new identity and its profile."""
    identity = await registry.register(
        body.username, body.password, body.email,
        body.dob, body.phone, body.zipcode,
    )
    return AuthResponse(username=identity.display_name)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    registry: IdentityRegistry = Depends(get_identity_registry),
):
    """Verify credentials and attach the identity cookie."""
    identity = await registry.authenticate(body.username, body.password)
    settings = get_settings()
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        create_access_token(identity.id, identity.display_name),
        max_age=settings.jwt_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("Login", extra={"identity_key": identity.id})
    return AuthResponse(username=identity.display_name)


@router.put("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    identity: CurrentIdentity = Depends(get_current_identity),
):
    """Clear the identity cookie."""
    response.delete_cookie(ACCESS_TOKEN_COOKIE, httponly=True)
    logger.info("Logout", extra={"identity_key": identity.key})
    return {"result": "success"}
