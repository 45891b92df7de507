"""Credential Hashing — bcrypt hashes for stored passwords.

Invariants:
    - Only the bcrypt hash (salt and cost embedded) is ever persisted
    - verify_credential returns False for a malformed stored hash, never raises

Design Decisions:
    - Cost factor from settings so tests can run at the bcrypt minimum
    - Input capped at bcrypt's 72-byte limit on both hash and verify
"""

import bcrypt

from townsquare.config import get_settings

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_credential(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().credential_hash_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_credential(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), stored.encode("utf-8"))
    except ValueError:
        return False
