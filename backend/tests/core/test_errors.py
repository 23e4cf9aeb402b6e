"""Error Hierarchy — each error kind maps to a fixed code, category and status.

Tests:
    - Status codes: 400, 401, 403, 404, 409, 503
    - to_response() envelope shape and user_message override
    - Context ids surfaced in the envelope
"""

import pytest

from person_api.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, ErrorCategory,
    ErrorContext, ForbiddenError, InvalidUploadError, PersonApiError,
    ResourceNotFoundError,
)


@pytest.mark.parametrize("error,status,code", [
    (InvalidUploadError("too small"), 400, "INVALID_UPLOAD"),
    (AuthenticationError(), 401, "AUTHENTICATION_FAILED"),
    (ForbiddenError(), 403, "FORBIDDEN"),
    (ResourceNotFoundError("Person", 1), 404, "RESOURCE_NOT_FOUND"),
    (ConflictError(), 409, "EMAIL_ALREADY_REGISTERED"),
    (DatabaseError("boom", "commit"), 503, "DATABASE_ERROR"),
])
def test_error_kinds_have_distinct_stable_signals(error, status, code):
    assert isinstance(error, PersonApiError)
    assert error.http_status == status
    assert error.code == code


def test_not_found_message():
    error = ResourceNotFoundError("Person", 12)
    assert error.message == "Person not found"
    assert error.resource_id == 12
    assert error.category == ErrorCategory.RESOURCE_NOT_FOUND


def test_conflict_default_message():
    assert ConflictError().message == "Email already registered"


def test_to_response_envelope():
    error = ForbiddenError(context=ErrorContext(person_id=1, caller_id=2))
    body = error.to_response()["error"]
    assert body["code"] == "FORBIDDEN"
    assert body["category"] == "forbidden"
    assert body["severity"] == "warning"
    assert body["context"] == {"person_id": 1, "caller_id": 2}
    assert "timestamp" in body


def test_user_message_overrides_internal_message():
    error = DatabaseError(
        "deadlock detected", "commit",
        ErrorContext(user_message="Please retry later"),
    )
    assert error.to_response()["error"]["message"] == "Please retry later"
