"""Tests for the SupportTicket aggregate."""

import pytest
from protean.exceptions import ValidationError
from support.ticket.events import TicketEdited, TicketOpened, TicketResponded, TicketStatusChanged, TicketWithdrawn
from support.ticket.ticket import SupportTicket, TicketStatus


def _ticket(**overrides):
    defaults = {
        "user_id": "user-001",
        "subject": "Order arrived late",
        "category": "delivery",
        "description": "Booked for 14:00, arrived at 17:30.",
    }
    defaults.update(overrides)
    return SupportTicket.open(**defaults)


class TestOpen:
    def test_new_ticket_is_open(self):
        ticket = _ticket()

        assert ticket.status == TicketStatus.OPEN.value
        assert ticket.priority == "medium"
        assert ticket.resolved_at is None
        assert isinstance(ticket._events[-1], TicketOpened)

    def test_blank_subject(self):
        with pytest.raises(ValidationError):
            _ticket(subject="   ")

    def test_unknown_priority(self):
        with pytest.raises(ValidationError):
            _ticket(priority="whenever")


class TestOwnerChanges:
    def test_owner_edits_open_ticket(self):
        ticket = _ticket()

        ticket.edit("user-001", priority="high", description="Still waiting on a reply.")

        assert ticket.priority == "high"
        assert ticket.subject == "Order arrived late"
        assert isinstance(ticket._events[-1], TicketEdited)

    def test_other_users_cannot_edit(self):
        with pytest.raises(ValidationError) as exc:
            _ticket().edit("user-999", subject="Hijacked")

        assert "user_id" in exc.value.messages

    def test_cannot_edit_once_in_progress(self):
        ticket = _ticket()
        ticket.change_status("in_progress")

        with pytest.raises(ValidationError) as exc:
            ticket.edit("user-001", subject="Too late")

        assert exc.value.messages["status"] == ["Cannot edit a ticket that is no longer open"]

    def test_withdraw(self):
        ticket = _ticket()

        ticket.withdraw("user-001")

        assert isinstance(ticket._events[-1], TicketWithdrawn)

    def test_cannot_withdraw_resolved_ticket(self):
        ticket = _ticket()
        ticket.respond("Refund issued.")

        with pytest.raises(ValidationError):
            ticket.withdraw("user-001")


class TestAdminChanges:
    def test_resolving_sets_resolved_at(self):
        ticket = _ticket()

        ticket.change_status("resolved")

        assert ticket.resolved_at is not None
        assert isinstance(ticket._events[-1], TicketStatusChanged)

    def test_reopening_clears_resolved_at(self):
        ticket = _ticket()
        ticket.change_status("closed")

        ticket.change_status("open")

        assert ticket.resolved_at is None

    def test_respond_resolves(self):
        ticket = _ticket()

        ticket.respond("Sorry about that, a refund is on its way.")

        assert ticket.status == "resolved"
        assert ticket.admin_response.startswith("Sorry")
        assert isinstance(ticket._events[-1], TicketResponded)

    def test_empty_response(self):
        with pytest.raises(ValidationError):
            _ticket().respond("  ")
