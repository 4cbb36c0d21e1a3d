"""In-memory authentication service for development and testing.

Behaves like the hosted service's admin API closely enough for provisioning:
duplicate emails are rejected on sign-up, identities can be listed and
deleted, and individual operations can be made to fail on demand.
"""

from uuid import uuid4

from identity.auth.port import AuthIdentity, AuthService, AuthServiceError

ALREADY_REGISTERED = "User already registered"
INVALID_CREDENTIALS = "Invalid login credentials"


class FakeAuthService(AuthService):
    def __init__(self) -> None:
        self.identities: dict[str, AuthIdentity] = {}
        self.passwords: dict[str, str] = {}
        self.sign_up_error: str | None = None
        self.delete_error: str | None = None
        self.lookup_error: str | None = None
        self.deleted_ids: list[str] = []

    def configure(
        self,
        sign_up_error: str | None = None,
        delete_error: str | None = None,
        lookup_error: str | None = None,
    ) -> None:
        """Make the next calls of the given kind fail with the given message."""
        self.sign_up_error = sign_up_error
        self.delete_error = delete_error
        self.lookup_error = lookup_error

    def sign_up(self, email: str, password: str, metadata: dict | None = None) -> AuthIdentity:
        if self.sign_up_error:
            raise AuthServiceError(self.sign_up_error)
        if self._by_email(email):
            raise AuthServiceError(ALREADY_REGISTERED, code="user_already_exists")

        identity = AuthIdentity(id=str(uuid4()), email=email, metadata=dict(metadata or {}))
        self.identities[identity.id] = identity
        self.passwords[identity.id] = password
        return identity

    def sign_in(self, email: str, password: str) -> AuthIdentity:
        identity = self._by_email(email)
        if identity is None or self.passwords.get(identity.id) != password:
            raise AuthServiceError(INVALID_CREDENTIALS, code="invalid_credentials")
        return identity

    def list_identities(self) -> list[AuthIdentity]:
        if self.lookup_error:
            raise AuthServiceError(self.lookup_error)
        return list(self.identities.values())

    def find_identity_by_email(self, email: str) -> AuthIdentity | None:
        if self.lookup_error:
            raise AuthServiceError(self.lookup_error)
        return self._by_email(email)

    def delete_identity(self, identity_id: str) -> None:
        if self.delete_error:
            raise AuthServiceError(self.delete_error)
        if identity_id not in self.identities:
            raise AuthServiceError(f"Identity {identity_id} not found", code="user_not_found")

        del self.identities[identity_id]
        self.passwords.pop(identity_id, None)
        self.deleted_ids.append(identity_id)

    def add_identity(self, email: str, password: str = "secret-password") -> AuthIdentity:
        """Register an identity directly, bypassing failure injection (test setup)."""
        identity = AuthIdentity(id=str(uuid4()), email=email)
        self.identities[identity.id] = identity
        self.passwords[identity.id] = password
        return identity

    def _by_email(self, email: str) -> AuthIdentity | None:
        wanted = email.lower()
        return next((i for i in self.identities.values() if i.email.lower() == wanted), None)
