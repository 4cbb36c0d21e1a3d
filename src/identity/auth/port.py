"""Authentication service port (abstract interface).

The storefront does not own credentials: sign-up, sign-in and identity
deletion all happen in a hosted authentication service. This port is the
only way the identity domain talks to it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthIdentity:
    """An identity record held by the authentication service."""

    id: str
    email: str
    metadata: dict = field(default_factory=dict)


class AuthServiceError(Exception):
    """Raised when the authentication service rejects a request."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class AuthService(ABC):
    """Abstract authentication service interface."""

    @abstractmethod
    def sign_up(self, email: str, password: str, metadata: dict | None = None) -> AuthIdentity:
        """Create a new identity. Raises AuthServiceError if the email is registered."""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthIdentity:
        """Verify credentials. Raises AuthServiceError on bad credentials."""
        ...

    @abstractmethod
    def list_identities(self) -> list[AuthIdentity]:
        """Return every identity (admin access)."""
        ...

    @abstractmethod
    def find_identity_by_email(self, email: str) -> AuthIdentity | None:
        """Return the identity registered under ``email``, if any."""
        ...

    @abstractmethod
    def delete_identity(self, identity_id: str) -> None:
        """Delete an identity (admin access). Raises AuthServiceError on failure."""
        ...
