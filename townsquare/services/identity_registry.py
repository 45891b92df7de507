"""Identity Registry — registration, credential checks, and profile field CRUD.

Invariants:
    - Identity and its ProfileDetail are created in ONE commit (never one without the other)
    - Display names and emails are unique; duplicates are ValidationErrors, not StoreErrors
    - Credentials are stored hashed only; authenticate() never reveals which half failed

Design Decisions:
    - Uniqueness pre-checked for friendly errors; the unique indexes still catch races,
      surfaced as the same ValidationError
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.core.domain_types import IdentityKey
from townsquare.core.enforce_content import require_text
from townsquare.core.enforce_profile import (
    validate_display_name, validate_email, validate_phone, validate_zipcode,
)
from townsquare.core.errors import (
    NotFoundError, UnauthenticatedError, ValidationError,
)
from townsquare.infrastructure.credentials import hash_credential, verify_credential
from townsquare.models.identity import Identity
from townsquare.models.profile_detail import ProfileDetail

logger = logging.getLogger(__name__)


class IdentityRegistry:
    """Identity lifecycle and ProfileDetail access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(
        self,
        display_name: str,
        password: str,
        email: str,
        dob: date,
        phone: str,
        zipcode: str,
    ) -> Identity:
        display_name = validate_display_name(display_name)
        require_text(password, "password")
        email = validate_email(email)
        phone = validate_phone(phone)
        zipcode = validate_zipcode(zipcode)
        if dob is None:
            raise ValidationError("dob is required", field="dob")

        if await self._find_by_name(display_name) is not None:
            raise ValidationError("Username already exists", field="username")
        if await self._email_taken(email):
            raise ValidationError("Email already registered", field="email")

        identity = Identity(
            display_name=display_name, credential_hash=hash_credential(password),
        )
        identity.profile = ProfileDetail(
            email=email, dob=dob, phone=phone, zipcode=zipcode,
        )
        self.db.add(identity)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ValidationError("Username or email already exists", field="username")
        logger.info(
            f"Registered {display_name}", extra={"identity_key": identity.id},
        )
        return identity

    async def authenticate(self, display_name: str, password: str) -> Identity:
        identity = await self._find_by_name(display_name or "")
        if identity is None or not verify_credential(password or "", identity.credential_hash):
            raise UnauthenticatedError("Invalid username or password")
        return identity

    async def get_headline(self, display_name: str) -> str:
        return (await self._profile_by_name(display_name)).headline

    async def update_headline(self, identity_key: IdentityKey, headline: str) -> str:
        require_text(headline, "headline")
        profile = await self._profile_by_key(identity_key)
        profile.headline = headline
        await self.db.commit()
        return profile.headline

    async def get_email(self, display_name: str) -> str:
        return (await self._profile_by_name(display_name)).email

    async def update_email(self, identity_key: IdentityKey, email: str) -> str:
        email = validate_email(email)
        profile = await self._profile_by_key(identity_key)
        if profile.email != email and await self._email_taken(email):
            raise ValidationError("Email already registered", field="email")
        profile.email = email
        await self.db.commit()
        return profile.email

    async def change_password(self, identity_key: IdentityKey, password: str) -> None:
        require_text(password, "password")
        identity = await self.db.get(Identity, identity_key)
        if identity is None:
            raise NotFoundError("Identity", str(identity_key))
        identity.credential_hash = hash_credential(password)
        await self.db.commit()
        logger.info("Password changed", extra={"identity_key": identity_key})

    async def _find_by_name(self, display_name: str) -> Identity | None:
        result = await self.db.execute(
            select(Identity).where(Identity.display_name == display_name),
        )
        return result.scalar_one_or_none()

    async def _email_taken(self, email: str) -> bool:
        result = await self.db.execute(
            select(ProfileDetail.id).where(ProfileDetail.email == email),
        )
        return result.scalar_one_or_none() is not None

    async def _profile_by_name(self, display_name: str) -> ProfileDetail:
        result = await self.db.execute(
            select(ProfileDetail)
            .join(Identity, Identity.id == ProfileDetail.identity_id)
            .where(Identity.display_name == display_name),
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Identity", display_name)
        return profile

    async def _profile_by_key(self, identity_key: IdentityKey) -> ProfileDetail:
        result = await self.db.execute(
            select(ProfileDetail).where(ProfileDetail.identity_id == identity_key),
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Profile", str(identity_key))
        return profile
