from app.core.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)


def test_error_statuses():
    assert ValidationError().status_code == 400
    assert ConflictError().status_code == 400
    assert AuthenticationError().status_code == 401
    assert NotFoundError().status_code == 404
    assert UpstreamError().status_code == 502


def test_internal_error_hides_details():
    error = InternalError()

    assert error.status_code == 500
    assert error.message == "Server error"


def test_status_override_is_per_instance():
    login_failure = AuthenticationError("Invalid credentials", status_code=400)

    assert login_failure.status_code == 400
    assert AuthenticationError().status_code == 401
