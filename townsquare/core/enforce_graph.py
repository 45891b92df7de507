"""Follow Graph Enforcement — rules for mutating the directed follows relation.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - An identity never follows itself
"""

from townsquare.core.domain_types import IdentityKey
from townsquare.core.errors import ErrorContext, ValidationError


def check_not_self(follower_key: IdentityKey, target_key: IdentityKey) -> None:
    """Reject self-follow."""
    if follower_key == target_key:
        raise ValidationError(
            "cannot follow yourself", field="user",
            context=ErrorContext(identity_key=str(follower_key)),
        )


def following_names(rows) -> set[str]:
    """Collapse (display_name,) rows into the following set."""
    return {name for (name,) in rows}
