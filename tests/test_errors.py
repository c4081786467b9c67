"""Tests for error handling and custom exceptions."""

import pytest
from flask import Blueprint

from watchlist_api.exceptions import (
    AuthenticationError,
    DatabaseError,
    PermissionDenied,
    ResourceNotFound,
    ValidationError,
    WatchlistError,
)
from watchlist_api.main import create_app


@pytest.fixture
def error_client(settings):
    """App with routes that raise each exception type."""
    error_bp = Blueprint("error_test_routes", __name__)

    @error_bp.route("/test/validation")
    def raise_validation():
        raise ValidationError("Invalid name", details={"field": "name"})

    @error_bp.route("/test/authentication")
    def raise_authentication():
        raise AuthenticationError("Invalid token")

    @error_bp.route("/test/permission")
    def raise_permission():
        raise PermissionDenied("You are not allowed to invite users to this watchlist")

    @error_bp.route("/test/not-found")
    def raise_not_found():
        raise ResourceNotFound("Watchlist not found", details={"id": "123"})

    @error_bp.route("/test/database")
    def raise_database():
        raise DatabaseError("Could not open database")

    @error_bp.route("/test/internal")
    def raise_internal():
        raise RuntimeError("Something went wrong")

    app = create_app(settings)
    app.config["TESTING"] = True
    app.register_blueprint(error_bp)
    return app.test_client()


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_with_message(self):
        error = WatchlistError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"

    def test_base_error_with_details(self):
        details = {"watchlist_id": "123", "reason": "not found"}
        error = WatchlistError("Not found", details=details)
        assert error.details == details

    def test_base_error_without_details(self):
        """Base exception should have empty details dict by default."""
        assert WatchlistError("Test").details == {}

    @pytest.mark.parametrize(
        "cls",
        [ResourceNotFound, ValidationError, AuthenticationError, PermissionDenied, DatabaseError],
    )
    def test_subclasses_inherit_base(self, cls):
        assert issubclass(cls, WatchlistError)


class TestErrorHandlers:
    """Errors render as plain text with the mapped status code."""

    @pytest.mark.parametrize(
        "path, status, message",
        [
            ("/test/validation", 400, "Invalid name"),
            ("/test/authentication", 401, "Invalid token"),
            ("/test/permission", 403, "You are not allowed to invite users to this watchlist"),
            ("/test/not-found", 404, "Watchlist not found"),
            ("/test/database", 500, "Could not open database"),
        ],
    )
    def test_status_and_plain_text_body(self, error_client, path, status, message):
        response = error_client.get(path)

        assert response.status_code == status
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True) == message

    def test_details_not_leaked_in_body(self, error_client):
        response = error_client.get("/test/not-found")
        assert "123" not in response.get_data(as_text=True)

    def test_internal_server_error_handler(self, error_client):
        """Unexpected exceptions should return a generic 500 message."""
        response = error_client.get("/test/internal")

        assert response.status_code == 500
        assert response.get_data(as_text=True) == "An internal error occurred"

    def test_unknown_route_still_404(self, error_client):
        """HTTP errors from routing are not turned into 500s."""
        response = error_client.get("/does-not-exist")
        assert response.status_code == 404
