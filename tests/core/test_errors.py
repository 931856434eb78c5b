"""Error Hierarchy — verifies status codes and the REST error envelope."""

from aquatour.core.errors import (
    AuthenticationError, ConflictError, CRMError, DatabaseError, ForbiddenError,
    NotFoundError, ValidationError,
)


def test_status_codes():
    assert ValidationError("x").http_status == 400
    assert AuthenticationError().http_status == 401
    assert ForbiddenError("x").http_status == 403
    assert NotFoundError("Client", 1).http_status == 404
    assert ConflictError("x").http_status == 409
    assert DatabaseError("x", "query").http_status == 500


def test_all_errors_share_base():
    for error in (ValidationError("x"), NotFoundError("Client", 1), ConflictError("x")):
        assert isinstance(error, CRMError)


def test_envelope_is_not_ok():
    response = NotFoundError("Client", 9).to_response()
    assert response["ok"] is False
    assert response["error"] == "Client '9' not found"
    assert response["code"] == "RESOURCE_NOT_FOUND"
    assert "timestamp" in response


def test_conflict_payload_included():
    conflict = {"table": "clients", "displayName": "Client"}
    response = ConflictError("dup", conflict=conflict).to_response()
    assert response["conflict"] == conflict


def test_validation_fields_included():
    response = ValidationError("bad", fields=["email"]).to_response()
    assert response["fields"] == ["email"]


def test_database_error_hides_internals():
    error = DatabaseError("Database operation failed", "commit")
    assert error.message == "Database commit failed: Database operation failed"
