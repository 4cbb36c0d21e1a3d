"""Provisioning failures.

All of them are ValidationErrors so the HTTP layer reports them as 400s
with a field -> messages payload.
"""

from protean.exceptions import ValidationError


class UserAlreadyExists(ValidationError):
    """Email or username is taken; nothing was created."""


class ProvisioningRaceDetected(ValidationError):
    """A conflicting profile appeared while ours was being created."""


class ProfileCreationFailed(ValidationError):
    """The profile could not be stored; the new identity was cleaned up."""
