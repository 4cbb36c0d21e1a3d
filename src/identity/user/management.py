"""Admin-side user management: profile edits and account removal."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.auth import get_auth_service
from identity.auth.port import AuthServiceError
from identity.domain import identity
from identity.user.user import User, UserRole

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=150)
    address: Text()
    phone_number: String(max_length=30)
    profile_image: String(max_length=500)
    role: String(choices=UserRole)
    comments: Text()


@identity.command(part_of="User")
class DeleteUser:
    """Remove a user's profile and the auth identity behind it."""

    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        # Only fields present on the command are changed
        changes = {
            field: getattr(command, field)
            for field in ("name", "address", "phone_number", "profile_image", "role", "comments")
            if getattr(command, field) is not None
        }
        user.update_profile(**changes)
        repo.add(user)

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.mark_deleted()
        repo._dao.delete(user)

        try:
            get_auth_service().delete_identity(str(user.id))
        except AuthServiceError as exc:
            if exc.code != "user_not_found":
                logger.error("Identity removal failed", user_id=str(user.id), error=exc.message)
                raise
            logger.warning("Identity already absent", user_id=str(user.id))

        logger.info("User deleted", user_id=str(user.id))
