"""Read-side helpers for user profiles."""

from protean.utils.globals import current_domain

from identity.user.user import User


def list_users() -> list[User]:
    """All profiles, newest first (admin listing)."""
    return current_domain.repository_for(User)._dao.query.order_by("-created_at").all().items


def get_user(user_id) -> User:
    return current_domain.repository_for(User).get(user_id)
