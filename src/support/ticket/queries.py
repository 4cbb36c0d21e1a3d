"""Read-side helpers for support tickets."""

from protean.utils.globals import current_domain

from support.ticket.ticket import SupportTicket, TicketStatus


def _tickets():
    return current_domain.repository_for(SupportTicket)._dao.query


def tickets_for_user(user_id) -> list[SupportTicket]:
    return _tickets().filter(user_id=str(user_id)).order_by("-created_at").all().items


def all_tickets(status=None) -> list[SupportTicket]:
    query = _tickets()
    if status:
        query = query.filter(status=TicketStatus(status).value)
    return query.order_by("-created_at").all().items


def ticket_counts() -> dict[str, int]:
    """Number of tickets in each status, every status present."""
    counts = {status.value: 0 for status in TicketStatus}
    for ticket in _tickets().all().items:
        counts[ticket.status] += 1
    return counts


def ticket_by_id(ticket_id) -> SupportTicket:
    return current_domain.repository_for(SupportTicket).get(ticket_id)
