"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.user.provisioning import find_user_by
from identity.user.user import User
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured provisioning errors."""
    return {"exc": None}


@given(parsers.cfparse('a user "{email}" with username "{username}"'))
def existing_user(email, username):
    user = User.provision(user_id=f"existing-{username}", name="Existing", username=username, email=email)
    current_domain.repository_for(User).add(user)


@then(parsers.cfparse('a profile exists for "{email}"'))
def profile_exists(email):
    assert find_user_by("email", email) is not None


@pytest.fixture()
def failures():
    """Number of profile inserts that should fail (overridden by a Given step)."""
    return 0
