"""Shared test fixtures for watchlist-api."""

import sqlite3

import pytest

from watchlist_api.config import Settings
from watchlist_api.db import database_path, get_core, init_db
from watchlist_api.main import create_app

DEFAULT_PASSWORD = "Aa1@aaaa"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh temp-file database.

    Uses bcrypt work factor 4 for fast hashing.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        bcrypt_work_factor=4,
    )


@pytest.fixture
def app(settings):
    """Create the Flask app bound to the test settings."""
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def core(settings):
    """Atomic Core against an initialized test database (commits on exit)."""
    init_db(settings.database_url)
    with get_core(settings.database_url, atomic=True) as core:
        yield core


@pytest.fixture
def test_db(settings):
    """Raw connection to the initialized test database for direct inspection."""
    init_db(settings.database_url)
    db = sqlite3.connect(str(database_path(settings.database_url)))
    db.row_factory = sqlite3.Row
    yield db
    db.close()


@pytest.fixture
def register(client):
    """Register a user through the API.

    Returns a callable: register("alice") -> response.
    Email defaults to <username>@example.com.
    """
    def _register(username, email=None, password=DEFAULT_PASSWORD, confirm=None):
        return client.post(
            "/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
                "confirmPassword": password if confirm is None else confirm,
            },
        )

    return _register


@pytest.fixture
def login(client):
    """Log a user in. Returns a callable: login("alice") -> response."""
    def _login(username, password=DEFAULT_PASSWORD, email=None):
        return client.post(
            "/auth/login",
            json={"email": email or f"{username}@example.com", "password": password},
        )

    return _login


@pytest.fixture
def auth_headers(register, login):
    """Register and log in a user, returning its Authorization header.

    Returns a callable: auth_headers("alice") -> {"Authorization": "Bearer ..."}.
    """
    def _auth_headers(username):
        response = register(username)
        assert response.status_code == 201, response.get_data(as_text=True)
        token = login(username).get_json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def create_watchlist(client):
    """Create a watchlist. Returns a callable: create_watchlist(headers, "Movies") -> id."""
    def _create_watchlist(headers, name="Movies"):
        response = client.post("/watchlists", json={"name": name}, headers=headers)
        assert response.status_code == 201, response.get_data(as_text=True)
        return response.get_json()["watchlistId"]

    return _create_watchlist
