"""Domain events for the SupportTicket aggregate."""

from protean.fields import DateTime, Identifier, String

from support.domain import support


@support.event(part_of="SupportTicket")
class TicketOpened:
    """A user raised a new support ticket."""

    __version__ = 1

    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)
    subject = String(required=True)
    category = String(required=True)
    priority = String(required=True)
    opened_at = DateTime(required=True)


@support.event(part_of="SupportTicket")
class TicketEdited:
    __version__ = 1

    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)


@support.event(part_of="SupportTicket")
class TicketWithdrawn:
    """The owner withdrew an open ticket."""

    __version__ = 1

    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)


@support.event(part_of="SupportTicket")
class TicketStatusChanged:
    __version__ = 1

    ticket_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@support.event(part_of="SupportTicket")
class TicketResponded:
    """An admin answered the ticket, resolving it."""

    __version__ = 1

    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)
    responded_at = DateTime(required=True)
