"""Tests for user provisioning against the auth service."""

import pytest
from identity.user.errors import ProfileCreationFailed, ProvisioningRaceDetected, UserAlreadyExists
from identity.user.provisioning import ProvisionUser, UserProvisioner, find_user_by
from identity.user.user import User
from protean import current_domain
from protean.exceptions import ValidationError

PROFILE = {
    "email": "jane@example.com",
    "password": "secret-pass",
    "name": "Jane Doe",
    "username": "janed",
}


def _existing_user(user_id="existing-1", email="taken@example.com", username="taken"):
    user = User.provision(user_id=user_id, name="Someone", username=username, email=email)
    current_domain.repository_for(User).add(user)
    return user


class FlakyProvisioner(UserProvisioner):
    """Fails the first ``failures`` profile inserts with a constraint violation."""

    def __init__(self, failures, before_failure=None, **kwargs):
        super().__init__(**kwargs)
        self.failures = failures
        self.before_failure = before_failure
        self.inserts = 0

    def _store_profile(self, user):
        self.inserts += 1
        if self.inserts <= self.failures:
            if self.before_failure:
                self.before_failure(user)
            raise ValidationError({"email": ["User with email is already present."]})
        super()._store_profile(user)


class TestHappyPath:
    def test_identity_and_profile_share_id(self, auth, sleep):
        user = UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

        identity = auth.find_identity_by_email("jane@example.com")
        assert identity is not None
        assert user.id == identity.id
        assert current_domain.repository_for(User).get(user.id).username == "janed"
        assert sleep.delays == []

    def test_email_is_normalised_before_checks(self, auth, sleep):
        user = UserProvisioner(auth=auth, sleep=sleep).provision(**dict(PROFILE, email="  Jane@Example.COM "))
        assert user.email == "jane@example.com"

    def test_process_command_returns_user_id(self, auth):
        user_id = current_domain.process(
            ProvisionUser(**PROFILE, address="1 Road", phone_number="555-1234"),
            asynchronous=False,
        )

        user = current_domain.repository_for(User).get(user_id)
        assert user.address == "1 Road"
        assert user.role == "user"
        assert auth.find_identity_by_email("jane@example.com").id == user_id


class TestPreChecks:
    def test_taken_email_creates_nothing(self, auth, sleep):
        _existing_user(email="jane@example.com")

        with pytest.raises(UserAlreadyExists) as exc:
            UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

        assert "email" in exc.value.messages
        assert auth.list_identities() == []

    def test_taken_username_creates_nothing(self, auth, sleep):
        _existing_user(username="janed")

        with pytest.raises(UserAlreadyExists) as exc:
            UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

        assert "username" in exc.value.messages
        assert auth.list_identities() == []

    def test_failing_existence_check_counts_as_absent(self, auth, sleep, monkeypatch):
        def broken_lookup(field, value):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr("identity.user.provisioning.find_user_by", broken_lookup)

        user = UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)
        assert user.username == "janed"


class TestOrphanedIdentity:
    def test_orphan_is_adopted(self, auth, sleep):
        orphan = auth.add_identity("jane@example.com")

        user = UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

        assert user.id == orphan.id
        assert len(auth.list_identities()) == 1

    def test_already_registered_maps_to_user_exists(self, auth, sleep):
        auth.add_identity("jane@example.com")
        auth.configure(lookup_error="timeout")

        with pytest.raises(UserAlreadyExists):
            UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

    def test_other_sign_up_errors_fail_without_side_effects(self, auth, sleep):
        auth.configure(sign_up_error="Service unavailable")

        with pytest.raises(ProfileCreationFailed) as exc:
            UserProvisioner(auth=auth, sleep=sleep).provision(**PROFILE)

        assert "Service unavailable" in str(exc.value.messages)
        assert find_user_by("email", "jane@example.com") is None


class TestRetries:
    def test_constraint_violation_is_retried_with_backoff(self, auth, sleep):
        provisioner = FlakyProvisioner(failures=1, auth=auth, sleep=sleep)

        user = provisioner.provision(**PROFILE)

        assert provisioner.inserts == 2
        assert sleep.delays == [1.0]
        assert current_domain.repository_for(User).get(user.id) is not None

    def test_backoff_doubles(self, auth, sleep):
        provisioner = FlakyProvisioner(failures=2, auth=auth, sleep=sleep, backoff_seconds=0.5)

        provisioner.provision(**PROFILE)

        assert sleep.delays == [0.5, 1.0]

    def test_exhausted_attempts_clean_up_identity(self, auth, sleep):
        provisioner = FlakyProvisioner(failures=3, auth=auth, sleep=sleep)

        with pytest.raises(ProfileCreationFailed) as exc:
            provisioner.provision(**PROFILE)

        assert provisioner.inserts == 3
        assert sleep.delays == [1.0, 2.0]
        assert "after 3 attempt(s)" in str(exc.value.messages)
        assert auth.list_identities() == []
        assert len(auth.deleted_ids) == 1

    def test_cleanup_failure_still_reports_profile_failure(self, auth, sleep):
        auth.configure(delete_error="Admin API unavailable")
        provisioner = FlakyProvisioner(failures=3, auth=auth, sleep=sleep)

        with pytest.raises(ProfileCreationFailed):
            provisioner.provision(**PROFILE)

        assert len(auth.list_identities()) == 1

    def test_own_profile_found_on_retry(self, auth, sleep):
        def lost_acknowledgement(user):
            current_domain.repository_for(User).add(user)

        provisioner = FlakyProvisioner(failures=1, before_failure=lost_acknowledgement, auth=auth, sleep=sleep)

        user = provisioner.provision(**PROFILE)

        assert provisioner.inserts == 1
        assert current_domain.repository_for(User).get(user.id).email == "jane@example.com"

    def test_concurrent_registration_aborts_and_cleans_up(self, auth, sleep):
        def competitor_wins(user):
            _existing_user(user_id="competitor", email="jane@example.com", username="other")

        provisioner = FlakyProvisioner(failures=1, before_failure=competitor_wins, auth=auth, sleep=sleep)

        with pytest.raises(ProvisioningRaceDetected) as exc:
            provisioner.provision(**PROFILE)

        assert "email" in exc.value.messages
        assert auth.list_identities() == []
        assert find_user_by("email", "jane@example.com").id == "competitor"

    def test_unexpected_failure_is_not_retried(self, auth, sleep):
        class BrokenStore(UserProvisioner):
            def _store_profile(self, user):
                raise RuntimeError("connection reset")

        with pytest.raises(ProfileCreationFailed):
            BrokenStore(auth=auth, sleep=sleep).provision(**PROFILE)

        assert sleep.delays == []
        assert auth.list_identities() == []

    def test_invalid_profile_is_not_retried(self, auth, sleep):
        with pytest.raises(ProfileCreationFailed):
            UserProvisioner(auth=auth, sleep=sleep).provision(**dict(PROFILE, role="superuser"))

        assert sleep.delays == []
        assert auth.list_identities() == []
