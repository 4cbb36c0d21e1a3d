"""SupportTicket aggregate (CQRS).

Users open tickets and may edit or withdraw them while they are still open.
Admins move tickets between statuses freely and answer them; answering a
ticket resolves it.

Statuses: open, in_progress, resolved, closed.
"""

from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from support.domain import support
from support.ticket.events import (
    TicketEdited,
    TicketOpened,
    TicketResponded,
    TicketStatusChanged,
    TicketWithdrawn,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class TicketStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@support.aggregate
class SupportTicket:
    user_id = Identifier(required=True)
    subject = String(required=True, max_length=200)
    category = String(required=True, max_length=50)
    priority = String(choices=TicketPriority, default=TicketPriority.MEDIUM.value)
    description = Text(required=True)
    status = String(choices=TicketStatus, default=TicketStatus.OPEN.value)
    admin_response = Text()
    created_at = DateTime()
    updated_at = DateTime()
    resolved_at = DateTime()

    @invariant.post
    def subject_must_not_be_blank(self):
        if self.subject is not None and not self.subject.strip():
            raise ValidationError({"subject": ["Subject cannot be empty"]})

    @classmethod
    def open(cls, user_id, subject, category, description, priority=TicketPriority.MEDIUM.value):
        now = datetime.now()
        ticket = cls(
            user_id=user_id,
            subject=subject,
            category=category,
            description=description,
            priority=priority,
            status=TicketStatus.OPEN.value,
            created_at=now,
            updated_at=now,
        )
        ticket.raise_(
            TicketOpened(
                ticket_id=str(ticket.id),
                user_id=str(user_id),
                subject=subject,
                category=category,
                priority=priority,
                opened_at=now,
            )
        )
        return ticket

    def _assert_owner_can_change(self, user_id, action):
        if str(self.user_id) != str(user_id):
            raise ValidationError({"user_id": [f"Only the ticket owner can {action} this ticket"]})
        if TicketStatus(self.status) != TicketStatus.OPEN:
            raise ValidationError({"status": [f"Cannot {action} a ticket that is no longer open"]})

    def edit(self, user_id, subject=_UNSET, category=_UNSET, priority=_UNSET, description=_UNSET):
        self._assert_owner_can_change(user_id, "edit")

        if subject is not _UNSET:
            self.subject = subject
        if category is not _UNSET:
            self.category = category
        if priority is not _UNSET:
            self.priority = priority
        if description is not _UNSET:
            self.description = description

        self.updated_at = datetime.now()
        self.raise_(TicketEdited(ticket_id=str(self.id), user_id=str(user_id)))

    def withdraw(self, user_id):
        self._assert_owner_can_change(user_id, "withdraw")
        self.raise_(TicketWithdrawn(ticket_id=str(self.id), user_id=str(user_id)))

    def change_status(self, new_status):
        new_status = TicketStatus(new_status).value
        previous_status = self.status
        now = datetime.now()

        self.status = new_status
        self.updated_at = now
        if new_status in (TicketStatus.RESOLVED.value, TicketStatus.CLOSED.value):
            self.resolved_at = self.resolved_at or now
        else:
            self.resolved_at = None

        self.raise_(
            TicketStatusChanged(
                ticket_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status,
                changed_at=now,
            )
        )

    def respond(self, response):
        if not response or not response.strip():
            raise ValidationError({"admin_response": ["Response cannot be empty"]})

        now = datetime.now()
        self.admin_response = response
        self.status = TicketStatus.RESOLVED.value
        self.resolved_at = now
        self.updated_at = now
        self.raise_(TicketResponded(ticket_id=str(self.id), user_id=str(self.user_id), responded_at=now))

    def to_summary(self) -> dict:
        return {
            "ticket_id": str(self.id),
            "user_id": str(self.user_id),
            "subject": self.subject,
            "category": self.category,
            "priority": self.priority,
            "description": self.description,
            "status": self.status,
            "admin_response": self.admin_response,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
        }
