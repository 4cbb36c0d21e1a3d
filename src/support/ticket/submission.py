"""User-side ticket commands: open, edit, withdraw."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from support.domain import support
from support.ticket.ticket import _UNSET, SupportTicket, TicketPriority


@support.command(part_of="SupportTicket")
class OpenTicket:
    user_id = Identifier(required=True)
    subject = String(required=True, max_length=200)
    category = String(required=True, max_length=50)
    priority = String(choices=TicketPriority, default=TicketPriority.MEDIUM.value)
    description = Text(required=True)


@support.command(part_of="SupportTicket")
class EditTicket:
    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match the ticket owner
    subject = String(max_length=200)
    category = String(max_length=50)
    priority = String(choices=TicketPriority)
    description = Text()


@support.command(part_of="SupportTicket")
class WithdrawTicket:
    ticket_id = Identifier(required=True)
    user_id = Identifier(required=True)


@support.command_handler(part_of=SupportTicket)
class TicketSubmissionHandler:
    @handle(OpenTicket)
    def open_ticket(self, command):
        ticket = SupportTicket.open(
            user_id=command.user_id,
            subject=command.subject,
            category=command.category,
            description=command.description,
            priority=command.priority,
        )
        current_domain.repository_for(SupportTicket).add(ticket)
        return str(ticket.id)

    @handle(EditTicket)
    def edit_ticket(self, command):
        repo = current_domain.repository_for(SupportTicket)
        ticket = repo.get(command.ticket_id)

        kwargs = {}
        for field in ("subject", "category", "priority", "description"):
            value = getattr(command, field)
            kwargs[field] = _UNSET if value is None else value

        ticket.edit(command.user_id, **kwargs)
        repo.add(ticket)

    @handle(WithdrawTicket)
    def withdraw_ticket(self, command):
        repo = current_domain.repository_for(SupportTicket)
        ticket = repo.get(command.ticket_id)
        ticket.withdraw(command.user_id)
        repo._dao.delete(ticket)
