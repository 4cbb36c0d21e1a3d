"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserProvisioned:
    """A profile was created and paired with an auth-service identity."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    role: String(required=True)
    provisioned_at: DateTime(required=True)


@identity.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_fields: String(required=True)
    role: String()


@identity.event(part_of="User")
class UserDeleted:
    """A user's profile and identity were removed by an admin."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
