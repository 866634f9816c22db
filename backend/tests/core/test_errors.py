"""Error Hierarchy — response envelopes and status codes.

Tests cover:
    - FailedValidationError renders {"FieldErrors": ...} with 422
    - Request errors render {"Error": message}
    - Infrastructure errors never leak their internal message
    - Sentinel domain errors are distinct classes
"""

from userapi.core.errors import (
    SERVER_ERROR_MESSAGE, DatabaseError, ErrorContext, FailedValidationError,
    InvalidAuthenticationTokenError, NotPermittedError, UserApiError, UserExistsError, UserNotFoundError,
)


def test_failed_validation_envelope():
    err = FailedValidationError({"email": "Email is required"})
    assert err.http_status == 422
    assert err.to_response() == {"FieldErrors": {"email": "Email is required"}}


def test_database_error_hides_details():
    err = DatabaseError("connection refused to 10.0.0.5", "execute")
    assert err.http_status == 500
    assert err.to_response() == {"Error": SERVER_ERROR_MESSAGE}
    assert "10.0.0.5" in err.message


def test_invalid_token_carries_challenge_header():
    assert InvalidAuthenticationTokenError().headers() == {
        "WWW-Authenticate": "Bearer", "Vary": "Authorization",
    }


def test_sentinels_are_distinct():
    assert not issubclass(UserExistsError, UserNotFoundError)
    assert not issubclass(UserNotFoundError, UserExistsError)
    assert issubclass(UserExistsError, UserApiError)
    assert UserNotFoundError().http_status == 404
    assert UserExistsError().http_status == 409


def test_not_permitted_keeps_actor_context():
    err = NotPermittedError(ErrorContext(user_id="actor-1"))
    assert err.http_status == 403
    assert err.context.user_id == "actor-1"
    assert err.to_response() == {
        "Error": "Your user account doesn't have permission to access this resource",
    }
