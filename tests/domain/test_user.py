"""Domain tests for User and Session aggregates."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from storefront.identity.events import AdminGranted, SessionEnded, UserRegistered
from storefront.identity.passwords import hash_password, verify_password
from storefront.identity.session import Session
from storefront.identity.user import User


class TestUser:
    def test_register_normalizes_email(self):
        user = User.register(email="  Jane@Example.COM ", first_name="Jane")
        assert user.email == "jane@example.com"
        assert user.is_admin is False
        assert isinstance(user._events[0], UserRegistered)

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc:
            User.register(email="jane.example.com")
        assert "email" in exc.value.messages

    def test_external_profile(self):
        user = User.from_external_profile(external_id="sub-123", email="ext@example.com", first_name="Ext")
        assert user.external_id == "sub-123"
        assert user._events[0].via_external_provider is True

    def test_display_name(self):
        assert User.register(email="a@example.com", first_name="Ada", last_name="L").display_name == "Ada L"
        assert User.register(email="a@example.com").display_name == "a@example.com"

    def test_grant_admin_once(self):
        user = User.register(email="a@example.com")
        user.grant_admin()
        user.grant_admin()
        assert user.is_admin is True
        assert len([e for e in user._events if isinstance(e, AdminGranted)]) == 1


class TestPasswords:
    def test_round_trip(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong", hashed)

    def test_missing_hash(self):
        assert not verify_password("anything", None)

    def test_garbage_hash(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestSession:
    def test_open_session(self):
        session = Session.open(user_id="user-001", ttl_hours=24)
        assert len(session.id) > 20
        assert session.is_active()

    def test_expired(self):
        session = Session.open(user_id="user-001", ttl_hours=24)
        assert not session.is_active(at=datetime.now(UTC) + timedelta(hours=25))

    def test_revoke(self):
        session = Session.open(user_id="user-001", ttl_hours=24)
        session.revoke()
        session.revoke()
        assert not session.is_active()
        assert len([e for e in session._events if isinstance(e, SessionEnded)]) == 1
