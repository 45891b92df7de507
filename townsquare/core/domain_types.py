"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - IdentityKey wraps UUID — never use a bare UUID for an identity in domain logic
    - ArticleSequence is global; CommentSequence is scoped to its owning article
    - NEW_COMMENT is the only non-integer comment reference

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, NewType, Union
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

IdentityKey = NewType("IdentityKey", UUID)
ArticleSequence = NewType("ArticleSequence", int)
CommentSequence = NewType("CommentSequence", int)


# ─── Comment References ──────────────────────────────────────────

NEW_COMMENT = "new"
LEGACY_NEW_COMMENT = -1   # wire value used by older clients

CommentRef = Union[CommentSequence, Literal["new"], None]


# ─── Enums ───────────────────────────────────────────────────────

class CounterName(str, Enum):
    """Named sequence series handed out by the allocator."""
    ARTICLE = "article"


@dataclass(frozen=True)
class CurrentIdentity:
    """Verified caller attached to a request by the authentication shell."""
    key: IdentityKey
    display_name: str
