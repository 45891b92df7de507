"""Error Hierarchy — status mapping and REST envelope shape."""

from townsquare.core.errors import (
    ConflictError, ErrorContext, ForbiddenError, NotFoundError, StoreError,
    UnauthenticatedError, ValidationError,
)


def test_status_mapping():
    assert ValidationError("x").http_status == 400
    assert UnauthenticatedError().http_status == 401
    assert ForbiddenError("Article", "1").http_status == 403
    assert NotFoundError("Article", "1").http_status == 404
    assert ConflictError("x").http_status == 500
    assert StoreError("x", "commit").http_status == 500


def test_to_response_envelope():
    err = NotFoundError(
        "Article", "9", ErrorContext(identity_key="k1", article_sequence=9),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Article '9' not found"
    assert body["category"] == "resource_not_found"
    assert body["context"]["article_sequence"] == 9
    assert body["context"]["identity_key"] == "k1"


def test_user_message_overrides_internal_message():
    err = StoreError(
        "deadlock on counters", "execute",
        ErrorContext(user_message="Please retry"),
    )
    assert err.to_response()["error"]["message"] == "Please retry"
    assert "deadlock" in err.message
