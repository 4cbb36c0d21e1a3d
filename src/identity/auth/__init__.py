"""Authentication service factory.

Provides get_auth_service() / set_auth_service() to swap implementations:
FakeAuthService by default, a hosted-service client in deployments.
"""

from identity.auth.fake_adapter import FakeAuthService
from identity.auth.port import AuthService

_current_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Return the current auth service. Defaults to FakeAuthService."""
    global _current_service
    if _current_service is None:
        _current_service = FakeAuthService()
    return _current_service


def set_auth_service(service: AuthService) -> None:
    """Override the active auth service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_auth_service() -> None:
    """Reset to default auth service."""
    global _current_service
    _current_service = None
