"""Graph Enforcement — self-follow rejection and following-set shaping."""

from uuid import uuid4

import pytest

from townsquare.core.enforce_graph import check_not_self, following_names
from townsquare.core.errors import ValidationError


def test_check_not_self_rejects_same_key():
    key = uuid4()
    with pytest.raises(ValidationError) as exc:
        check_not_self(key, key)
    assert exc.value.message == "cannot follow yourself"


def test_check_not_self_allows_other_key():
    check_not_self(uuid4(), uuid4())


def test_following_names_deduplicates_rows():
    assert following_names([("bob",), ("carol",), ("bob",)]) == {"bob", "carol"}


def test_following_names_empty():
    assert following_names([]) == set()
