"""Error hierarchy — status codes, codes and the response envelope."""

from gym_tracker.core.errors import (
    ConflictError, DatabaseError, ForbiddenError, InternalError, NotFoundError,
    UnauthorizedError, ValidationError,
)


def test_http_statuses():
    assert ValidationError("bad").http_status == 400
    assert UnauthorizedError().http_status == 401
    assert ForbiddenError().http_status == 403
    assert NotFoundError("Exercise").http_status == 404
    assert ConflictError("dup").http_status == 409
    assert InternalError().http_status == 500
    assert DatabaseError("down", "execute").http_status == 503


def test_not_found_message_names_the_resource():
    assert NotFoundError("Workout").message == "Workout not found"


def test_envelope_shape():
    body = ConflictError("Email already registered").to_response()
    assert body["success"] is False
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["message"] == "Email already registered"
    assert body["error"]["category"] == "conflict"
    assert body["error"]["severity"] == "error"
    assert "timestamp" in body["error"]
    assert "details" not in body["error"]


def test_validation_error_reports_its_field():
    body = ValidationError("must be positive", field="height_cm").to_response()
    assert body["error"]["details"] == [
        {"field": "height_cm", "message": "must be positive", "type": "value_error"},
    ]
    assert "details" not in ValidationError("bad").to_response()["error"]


def test_internal_error_is_generic():
    body = InternalError().to_response()
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert body["error"]["message"] == "An unexpected error occurred"
    assert body["error"]["severity"] == "critical"
