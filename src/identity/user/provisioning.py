"""User provisioning: pair a new auth-service identity with a User profile.

The identity lives in the hosted authentication service and the profile in
our own store, so there is no shared transaction. The provisioner keeps the
two in step instead:

1. Refuse up front when the email or username is already taken.
2. Adopt an identity left behind by an earlier failed attempt.
3. Sign the identity up, then insert the profile with bounded retries.
4. Before each retry, look again: our own profile may have landed after
   all, or a concurrent registration may have claimed the email/username.
5. When every attempt fails, delete the identity so no orphan remains.
"""

import time

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from identity.auth import get_auth_service
from identity.auth.port import AuthService, AuthServiceError
from identity.domain import identity
from identity.user.errors import ProfileCreationFailed, ProvisioningRaceDetected, UserAlreadyExists
from identity.user.user import User, UserRole
from shared.config import PROVISIONING_BACKOFF_SECONDS, PROVISIONING_MAX_ATTEMPTS

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class ProvisionUser:
    """Register a new user: auth identity plus storefront profile."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    name: String(required=True, max_length=150)
    username: String(required=True, max_length=50)
    address: Text()
    phone_number: String(max_length=30)
    profile_image: String(max_length=500)
    role: String(choices=UserRole, default=UserRole.USER.value)
    comments: Text()


def find_user_by(field, value):
    """Return the first User whose ``field`` equals ``value``, or None."""
    results = current_domain.repository_for(User)._dao.query.filter(**{field: value}).all().items
    return results[0] if results else None


class UserProvisioner:
    def __init__(
        self,
        auth: AuthService | None = None,
        sleep=time.sleep,
        max_attempts: int = PROVISIONING_MAX_ATTEMPTS,
        backoff_seconds: float = PROVISIONING_BACKOFF_SECONDS,
    ) -> None:
        self.auth = auth or get_auth_service()
        self.sleep = sleep
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds

    def provision(self, email, password, name, username, **profile) -> User:
        email = email.strip().lower()

        if self._lookup("email", email) is not None:
            raise UserAlreadyExists({"email": [f"A user with email {email} already exists"]})
        if self._lookup("username", username) is not None:
            raise UserAlreadyExists({"username": [f"Username {username} is already taken"]})

        orphan = self._find_identity(email)
        if orphan is not None:
            if self._lookup("id", orphan.id) is not None:
                raise UserAlreadyExists({"email": [f"A user with email {email} already exists"]})
            logger.warning("Adopting orphaned identity", identity_id=orphan.id, email=email)
            return self._insert_with_retries(orphan.id, email, name, username, profile)

        try:
            auth_identity = self.auth.sign_up(email, password, metadata={"name": name, "username": username})
        except AuthServiceError as exc:
            if exc.code == "user_already_exists" or "already registered" in exc.message.lower():
                raise UserAlreadyExists({"email": [f"A user with email {email} already exists"]}) from exc
            logger.error("Identity sign-up failed", email=email, error=exc.message)
            raise ProfileCreationFailed({"auth": [f"Could not create identity: {exc.message}"]}) from exc

        logger.info("Identity created", identity_id=auth_identity.id, email=email)
        return self._insert_with_retries(auth_identity.id, email, name, username, profile)

    def _insert_with_retries(self, user_id, email, name, username, profile) -> User:
        last_error = None
        attempts = 0

        for attempt in range(1, self.max_attempts + 1):
            attempts = attempt
            if attempt > 1:
                existing = self._resolve_conflicts(user_id, email, username)
                if existing is not None:
                    logger.info("Profile found on retry", user_id=user_id, attempt=attempt)
                    return existing

            try:
                user = User.provision(user_id=user_id, name=name, username=username, email=email, **profile)
            except ValidationError as exc:
                last_error = exc
                logger.error("Profile rejected", user_id=user_id, errors=exc.messages)
                break

            try:
                self._store_profile(user)
            except ValidationError as exc:
                # Unique-constraint violations may clear once a concurrent write settles
                last_error = exc
                logger.warning("Profile insert conflicted", user_id=user_id, attempt=attempt, errors=exc.messages)
                if attempt < self.max_attempts:
                    self.sleep(self.backoff_seconds * 2 ** (attempt - 1))
                continue
            except Exception as exc:
                last_error = exc
                logger.error("Profile insert failed", user_id=user_id, attempt=attempt, error=str(exc))
                break

            logger.info("User provisioned", user_id=user_id, username=username, attempts=attempt)
            return user

        self._cleanup_identity(user_id)
        raise ProfileCreationFailed(
            {"profile": [f"Profile creation failed after {attempts} attempt(s): {last_error}"]}
        ) from last_error

    def _resolve_conflicts(self, user_id, email, username) -> User | None:
        ours = self._lookup("id", user_id)
        if ours is not None:
            return ours

        for field, value in (("email", email), ("username", username)):
            other = self._lookup(field, value)
            if other is not None and other.id != user_id:
                logger.warning("Provisioning race detected", user_id=user_id, field=field, other_id=other.id)
                self._cleanup_identity(user_id)
                raise ProvisioningRaceDetected(
                    {field: [f"Another user registered with this {field} while the account was being created"]}
                )
        return None

    def _store_profile(self, user: User) -> None:
        current_domain.repository_for(User).add(user)

    def _cleanup_identity(self, user_id) -> None:
        try:
            self.auth.delete_identity(user_id)
        except AuthServiceError as exc:
            logger.error("Orphaned identity cleanup failed", identity_id=user_id, error=exc.message)
        else:
            logger.info("Orphaned identity removed", identity_id=user_id)

    def _lookup(self, field, value) -> User | None:
        # A failing existence check counts as "absent"
        try:
            return find_user_by(field, value)
        except Exception as exc:
            logger.warning("User existence check failed", field=field, error=str(exc))
            return None

    def _find_identity(self, email):
        try:
            return self.auth.find_identity_by_email(email)
        except AuthServiceError as exc:
            logger.warning("Identity lookup failed", email=email, error=exc.message)
            return None


@identity.command_handler(part_of=User)
class ProvisionUserHandler:
    @handle(ProvisionUser)
    def provision_user(self, command):
        user = UserProvisioner().provision(
            email=command.email,
            password=command.password,
            name=command.name,
            username=command.username,
            address=command.address,
            phone_number=command.phone_number,
            profile_image=command.profile_image,
            role=command.role,
            comments=command.comments,
        )
        return str(user.id)
