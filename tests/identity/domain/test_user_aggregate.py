"""Tests for the User aggregate."""

import pytest
from identity.user.events import UserDeleted, UserProfileUpdated, UserProvisioned
from identity.user.user import User, UserRole
from protean.exceptions import ValidationError


def _provision(**overrides):
    data = {
        "user_id": "auth-123",
        "name": "Jane Doe",
        "username": "janed",
        "email": "Jane.Doe@Example.com",
    }
    data.update(overrides)
    return User.provision(**data)


class TestProvision:
    def test_id_matches_identity(self):
        user = _provision()
        assert user.id == "auth-123"

    def test_email_is_normalised(self):
        assert _provision().email == "jane.doe@example.com"

    def test_defaults_to_user_role(self):
        user = _provision()
        assert user.role == UserRole.USER.value
        assert user.is_admin is False

    def test_admin_role(self):
        assert _provision(role="admin").is_admin is True

    def test_raises_user_provisioned(self):
        user = _provision()
        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserProvisioned)
        assert event.user_id == "auth-123"
        assert event.username == "janed"

    def test_rejects_malformed_email(self):
        with pytest.raises(ValidationError) as exc:
            _provision(email="not-an-email")
        assert "email" in exc.value.messages

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            _provision(role="superuser")

    def test_username_required(self):
        with pytest.raises(ValidationError):
            User(id="x", name="No Username", email="x@example.com")


class TestUpdateProfile:
    def test_only_given_fields_change(self):
        user = _provision(phone_number="555-0000", address="1 Road")
        user._events.clear()

        user.update_profile(name="Jane Smith")

        assert user.name == "Jane Smith"
        assert user.phone_number == "555-0000"
        assert user.address == "1 Road"

    def test_none_clears_a_field(self):
        user = _provision(comments="VIP")
        user.update_profile(comments=None)
        assert user.comments is None

    def test_raises_event_with_changed_fields(self):
        user = _provision()
        user._events.clear()

        user.update_profile(name="Jane Smith", role="admin")

        event = user._events[-1]
        assert isinstance(event, UserProfileUpdated)
        assert event.changed_fields == "name,role"
        assert event.role == "admin"

    def test_no_changes_raises_no_event(self):
        user = _provision()
        user._events.clear()
        user.update_profile()
        assert user._events == []


def test_mark_deleted_raises_event():
    user = _provision()
    user._events.clear()
    user.mark_deleted()
    assert isinstance(user._events[-1], UserDeleted)
    assert user._events[-1].email == "jane.doe@example.com"
