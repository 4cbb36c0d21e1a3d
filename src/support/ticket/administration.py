"""Admin-side ticket commands: status changes and responses."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from support.domain import support
from support.ticket.ticket import SupportTicket, TicketStatus

logger = structlog.get_logger(__name__)


@support.command(part_of="SupportTicket")
class UpdateTicketStatus:
    ticket_id = Identifier(required=True)
    status = String(required=True, choices=TicketStatus)


@support.command(part_of="SupportTicket")
class RespondToTicket:
    ticket_id = Identifier(required=True)
    response = Text(required=True)


@support.command_handler(part_of=SupportTicket)
class TicketAdministrationHandler:
    @handle(UpdateTicketStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(SupportTicket)
        ticket = repo.get(command.ticket_id)
        ticket.change_status(command.status)
        repo.add(ticket)
        logger.info("Ticket status changed", ticket_id=str(ticket.id), status=ticket.status)

    @handle(RespondToTicket)
    def respond(self, command):
        repo = current_domain.repository_for(SupportTicket)
        ticket = repo.get(command.ticket_id)
        ticket.respond(command.response)
        repo.add(ticket)
        logger.info("Ticket answered", ticket_id=str(ticket.id))
