"""Content Rule Enforcement — validates article/comment input and authorship.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise the matching TownsquareError on violation, return normally on success
    - Ownership compares stable identity keys, never display names

Design Decisions:
    - Raise (not return error dicts): callers are request handlers, and the global
      error handler already maps TownsquareError → status code
    - parse_article_filter keeps the single-path-parameter lookup of older clients:
      anything that parses as an integer is a sequence, everything else an author
"""

import re
from uuid import UUID

from townsquare.core.domain_types import (
    ArticleSequence, CommentRef, CommentSequence, IdentityKey,
    LEGACY_NEW_COMMENT, NEW_COMMENT,
)
from townsquare.core.errors import ErrorContext, ForbiddenError, ValidationError

NUMERIC_FILTER = re.compile(r"-?[0-9]+")
MAX_SEQUENCE = 2**31 - 1   # sequence columns are 32-bit INTEGER


def require_text(text: str | None, field: str = "text") -> str:
    """Reject missing, empty, or whitespace-only text."""
    if text is None or not text.strip():
        raise ValidationError(f"{field} is required", field=field)
    return text


def parse_article_filter(
    raw: str | None,
) -> tuple[ArticleSequence | None, str | None]:
    """Split a free-form lookup into (sequence, author_name).

    Only plain ASCII digits (optionally signed) count as a sequence; "1_0",
    " 7 " and other forms int() would accept are author names.
    """
    if raw is None or raw == "":
        return None, None
    if NUMERIC_FILTER.fullmatch(raw):
        return ArticleSequence(int(raw)), None
    return None, raw


def sequence_in_range(value: int) -> bool:
    """True when `value` can name a stored article or comment."""
    return 1 <= value <= MAX_SEQUENCE


def normalize_comment_ref(ref: object) -> CommentRef:
    """Coerce a comment reference into None, NEW_COMMENT, or a sequence."""
    if ref is None:
        return None
    if isinstance(ref, bool):
        raise ValidationError("comment reference must be an integer or 'new'", field="commentId")
    if ref == NEW_COMMENT or ref == LEGACY_NEW_COMMENT:
        return NEW_COMMENT
    if isinstance(ref, int):
        return CommentSequence(ref)
    if isinstance(ref, str):
        if not NUMERIC_FILTER.fullmatch(ref):
            raise ValidationError(
                f"invalid comment reference '{ref}'", field="commentId",
            )
        return normalize_comment_ref(int(ref))
    raise ValidationError("comment reference must be an integer or 'new'", field="commentId")


def check_article_owner(
    author_key: UUID | None, editor_key: IdentityKey, sequence: int,
) -> None:
    """Only the article's author may edit it or its comments."""
    if author_key is None or author_key != editor_key:
        raise ForbiddenError(
            "Article", str(sequence),
            ErrorContext(identity_key=str(editor_key), article_sequence=sequence),
        )


def check_comment_owner(
    author_key: UUID, editor_key: IdentityKey, sequence: int, comment_sequence: int,
) -> None:
    if author_key != editor_key:
        raise ForbiddenError(
            "Comment", f"{sequence}/{comment_sequence}",
            ErrorContext(identity_key=str(editor_key), article_sequence=sequence),
        )
