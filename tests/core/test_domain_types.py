"""Domain Types — verifies identity wrappers and comment reference constants.

Tests:
    - NewType wrappers are transparent at runtime
    - CounterName serializes to its string value
    - CurrentIdentity is immutable
"""

import dataclasses
from uuid import uuid4

import pytest

from townsquare.core.domain_types import (
    ArticleSequence, CounterName, CurrentIdentity, IdentityKey,
    LEGACY_NEW_COMMENT, NEW_COMMENT,
)


def test_identity_key_wraps_uuid():
    uid = uuid4()
    assert IdentityKey(uid) == uid


def test_article_sequence_is_int():
    assert ArticleSequence(3) + 1 == 4


def test_counter_name_is_string_enum():
    assert CounterName.ARTICLE == "article"
    assert CounterName.ARTICLE.value == "article"


def test_comment_reference_constants():
    assert NEW_COMMENT == "new"
    assert LEGACY_NEW_COMMENT == -1


def test_current_identity_is_frozen():
    identity = CurrentIdentity(key=IdentityKey(uuid4()), display_name="bob")
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.display_name = "carol"
