"""Development seed accounts: one regular user and one admin."""

import structlog
from protean import handle
from protean.fields import Boolean

from identity.domain import identity
from identity.user.provisioning import UserProvisioner, find_user_by
from identity.user.user import User, UserRole

logger = structlog.get_logger(__name__)

SEED_USERS = [
    {
        "name": "Regular User",
        "address": "123 Main St",
        "username": "user",
        "password": "1234567890",
        "email": "user@pourhouse.test",
        "phone_number": "555-1234",
        "role": UserRole.USER.value,
    },
    {
        "name": "Admin Account",
        "address": "Admin St",
        "username": "admin",
        "password": "0987654321",
        "email": "admin@pourhouse.test",
        "phone_number": "555-0000",
        "role": UserRole.ADMIN.value,
    },
]


@identity.command(part_of="User")
class SeedUsers:
    include_admin: Boolean(default=True)


@identity.command_handler(part_of=User)
class SeedUsersHandler:
    @handle(SeedUsers)
    def seed_users(self, command):
        provisioner = UserProvisioner()
        created = []
        for data in SEED_USERS:
            if data["role"] == UserRole.ADMIN.value and not command.include_admin:
                continue
            if find_user_by("username", data["username"]) is not None:
                logger.info("Seed user already present", username=data["username"])
                continue

            profile = dict(data)
            user = provisioner.provision(
                email=profile.pop("email"),
                password=profile.pop("password"),
                name=profile.pop("name"),
                username=profile.pop("username"),
                **profile,
            )
            created.append(str(user.id))

        return created
