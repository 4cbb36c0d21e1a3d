"""Sign-in: verify credentials with the auth service and load the profile."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.auth import get_auth_service
from identity.auth.port import AuthServiceError
from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class AuthenticateUser:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class AuthenticateUserHandler:
    @handle(AuthenticateUser)
    def authenticate(self, command):
        try:
            auth_identity = get_auth_service().sign_in(command.email.strip().lower(), command.password)
        except AuthServiceError as exc:
            logger.info("Sign-in rejected", email=command.email)
            raise ValidationError({"credentials": ["Invalid email or password"]}) from exc

        user = current_domain.repository_for(User).get(auth_identity.id)
        logger.info("User signed in", user_id=str(user.id))
        return str(user.id)
