"""Tests for auth service module.

Tests password policy, hashing, user creation and credential verification.
"""

import pytest

from watchlist_api.auth import service
from watchlist_api.auth.schemas import UserCreate
from watchlist_api.exceptions import ValidationError


def make_user_create(password="Aa1@aaaa", confirm=None, username="alice", email="alice@example.com"):
    return UserCreate(
        username=username,
        email=email,
        password=password,
        confirmPassword=password if confirm is None else confirm,
    )


# ============================================================================
# Password Hashing and Verification Tests
# ============================================================================


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_bcrypt_string(self):
        hashed = service.hash_password("Aa1@aaaa", 4)
        assert isinstance(hashed, str)
        assert len(hashed) == 60
        assert hashed.startswith("$2b$04$")

    def test_hash_password_different_hashes(self):
        """Same password should produce different hashes (due to salt)."""
        assert service.hash_password("Aa1@aaaa", 4) != service.hash_password("Aa1@aaaa", 4)

    def test_verify_password_valid(self):
        hashed = service.hash_password("Aa1@aaaa", 4)
        assert service.verify_password("Aa1@aaaa", hashed) is True

    def test_verify_password_invalid(self):
        hashed = service.hash_password("Aa1@aaaa", 4)
        assert service.verify_password("Bb2@bbbb", hashed) is False

    def test_verify_password_empty_string(self):
        hashed = service.hash_password("Aa1@aaaa", 4)
        assert service.verify_password("", hashed) is False

    def test_verify_password_malformed_hash(self):
        assert service.verify_password("Aa1@aaaa", "not-a-hash") is False


# ============================================================================
# Password Policy Tests
# ============================================================================


class TestPrepareUser:
    """Tests for the validate-and-hash factory."""

    def test_returns_hashed_new_user(self, settings):
        new_user = service.prepare_user(make_user_create(), settings)

        assert new_user.username == "alice"
        assert new_user.email == "alice@example.com"
        assert new_user.password_hash != "Aa1@aaaa"
        assert service.verify_password("Aa1@aaaa", new_user.password_hash)

    def test_uses_configured_work_factor(self, settings):
        new_user = service.prepare_user(make_user_create(), settings)
        assert new_user.password_hash.startswith("$2b$04$")

    def test_missing_password(self, settings):
        data = UserCreate(username="alice", email="alice@example.com")
        with pytest.raises(ValidationError) as exc_info:
            service.prepare_user(data, settings)
        assert exc_info.value.message == "Password is required"

    @pytest.mark.parametrize(
        "password",
        [
            "AA1@AAAA",   # no lowercase
            "aa1@aaaa",   # no uppercase
            "Aaa@aaaa",   # no digit
            "Aa1aaaaa",   # no symbol
            "Aa1@aaa",    # 7 characters
            "Aa1@aaa a",  # character outside allowed set
            "Aa1@aaaa\n",  # trailing newline
            "Aa\u0661@aaaa",  # non-ASCII digit
        ],
    )
    def test_weak_password(self, settings, password):
        with pytest.raises(ValidationError) as exc_info:
            service.prepare_user(make_user_create(password=password), settings)
        assert exc_info.value.message == settings.password_regex_error_message

    def test_password_over_bcrypt_limit(self, settings):
        password = "Aa1@" + "a" * 70
        with pytest.raises(ValidationError) as exc_info:
            service.prepare_user(make_user_create(password=password), settings)
        assert exc_info.value.message == "Password is too long, maximum 72 bytes"

    def test_mismatched_confirmation(self, settings):
        with pytest.raises(ValidationError) as exc_info:
            service.prepare_user(make_user_create(confirm="Aa1@aaab"), settings)
        assert exc_info.value.message == "Passwords do not match"

    def test_policy_checked_before_confirmation(self, settings):
        """A weak password reports the policy even if confirmation also differs."""
        with pytest.raises(ValidationError) as exc_info:
            service.prepare_user(make_user_create(password="weak", confirm="other"), settings)
        assert exc_info.value.message == settings.password_regex_error_message

    def test_custom_policy_regex(self, settings):
        settings.password_regex = r"^.{4,}$"
        new_user = service.prepare_user(make_user_create(password="abcd"), settings)
        assert service.verify_password("abcd", new_user.password_hash)


# ============================================================================
# User CRUD Operations Tests
# ============================================================================


class TestCreateUser:
    """Tests for create_user()."""

    def test_create_user_returns_user_response(self, core, settings):
        user = service.create_user(core, make_user_create(), settings)

        assert user.id is not None
        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert user.owned_watchlists == []
        assert not hasattr(user, "password_hash")

    def test_create_user_stores_hash_only(self, core, settings):
        user = service.create_user(core, make_user_create(), settings)

        row = core.user.get_by_id(user.id)
        assert row["password_hash"].startswith("$2b$")
        assert row["password_hash"] != "Aa1@aaaa"

    def test_duplicate_username(self, core, settings):
        service.create_user(core, make_user_create(), settings)
        with pytest.raises(ValidationError) as exc_info:
            service.create_user(core, make_user_create(email="other@example.com"), settings)
        assert exc_info.value.message == "Username is already in use"

    def test_duplicate_email(self, core, settings):
        service.create_user(core, make_user_create(), settings)
        with pytest.raises(ValidationError) as exc_info:
            service.create_user(core, make_user_create(username="alice2"), settings)
        assert exc_info.value.message == "Email is already in use"


class TestVerifyCredentials:
    """Tests for verify_credentials()."""

    def test_valid_credentials(self, core, settings):
        created = service.create_user(core, make_user_create(), settings)
        user = service.verify_credentials(core, "alice@example.com", "Aa1@aaaa")

        assert user is not None
        assert user.id == created.id

    def test_wrong_password(self, core, settings):
        service.create_user(core, make_user_create(), settings)
        assert service.verify_credentials(core, "alice@example.com", "Bb2@bbbb") is None

    def test_unknown_email(self, core, settings):
        assert service.verify_credentials(core, "nobody@example.com", "Aa1@aaaa") is None

    def test_get_user_by_id_includes_owned_watchlists(self, core, settings):
        user = service.create_user(core, make_user_create(), settings)
        watchlist_id = core.watchlist.create("Movies", user.id)

        fetched = service.get_user_by_id(core, user.id)
        assert fetched.owned_watchlists == [watchlist_id]

    def test_get_user_by_id_missing(self, core):
        assert service.get_user_by_id(core, "550e8400-e29b-41d4-a716-446655440000") is None
