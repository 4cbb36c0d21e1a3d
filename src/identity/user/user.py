"""User aggregate: the storefront profile paired with an auth-service identity."""

import re
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from identity.domain import identity

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@identity.aggregate
class User:
    """A registered storefront user.

    The aggregate id is the id of the identity held by the authentication
    service, so a profile can always be traced back to its credentials.
    Email and username are unique across all profiles.
    """

    name: String(required=True, max_length=150)
    address: Text()
    username: String(required=True, max_length=50, unique=True)
    email: String(required=True, max_length=254, unique=True)
    phone_number: String(max_length=30)
    profile_image: String(max_length=500)
    role: String(choices=UserRole, default=UserRole.USER.value)
    comments: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Invalid email address format"]})

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def provision(
        cls,
        user_id,
        name,
        username,
        email,
        address=None,
        phone_number=None,
        profile_image=None,
        role=UserRole.USER.value,
        comments=None,
    ):
        from identity.user.events import UserProvisioned

        now = datetime.now()
        user = cls(
            id=user_id,
            name=name,
            username=username,
            email=email.lower(),
            address=address,
            phone_number=phone_number,
            profile_image=profile_image,
            role=role,
            comments=comments,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserProvisioned(
                user_id=user.id,
                username=user.username,
                email=user.email,
                role=user.role,
                provisioned_at=now,
            )
        )
        return user

    def update_profile(
        self,
        name=_UNSET,
        address=_UNSET,
        phone_number=_UNSET,
        profile_image=_UNSET,
        role=_UNSET,
        comments=_UNSET,
    ):
        from identity.user.events import UserProfileUpdated

        changes = {
            "name": name,
            "address": address,
            "phone_number": phone_number,
            "profile_image": profile_image,
            "role": role,
            "comments": comments,
        }
        changed = [field for field, value in changes.items() if value is not _UNSET]
        for field in changed:
            setattr(self, field, changes[field])

        if not changed:
            return

        self.updated_at = datetime.now()
        self.raise_(
            UserProfileUpdated(
                user_id=self.id,
                changed_fields=",".join(changed),
                role=self.role,
            )
        )

    def mark_deleted(self):
        from identity.user.events import UserDeleted

        self.raise_(UserDeleted(user_id=self.id, email=self.email))
