"""FastAPI endpoints for the Support domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from support.api.schemas import (
    EditTicketRequest,
    OpenTicketRequest,
    RespondToTicketRequest,
    StatusResponse,
    TicketIdResponse,
    TicketResponse,
    UpdateTicketStatusRequest,
    WithdrawTicketRequest,
)
from support.ticket import queries
from support.ticket.administration import RespondToTicket, UpdateTicketStatus
from support.ticket.submission import EditTicket, OpenTicket, WithdrawTicket

router = APIRouter(prefix="/tickets", tags=["support"])


@router.post("", status_code=201, response_model=TicketIdResponse)
async def open_ticket(body: OpenTicketRequest) -> TicketIdResponse:
    command = OpenTicket(
        user_id=body.user_id,
        subject=body.subject,
        category=body.category,
        priority=body.priority,
        description=body.description,
    )
    result = current_domain.process(command, asynchronous=False)
    return TicketIdResponse(ticket_id=result)


@router.get("", response_model=list[TicketResponse])
async def list_tickets(status: str | None = None, user_id: str | None = None) -> list[TicketResponse]:
    tickets = queries.tickets_for_user(user_id) if user_id else queries.all_tickets(status)
    return [TicketResponse(**ticket.to_summary()) for ticket in tickets]


@router.get("/counts", response_model=dict[str, int])
async def ticket_counts() -> dict[str, int]:
    return queries.ticket_counts()


@router.get("/{ticket_id}", response_model=TicketResponse)
async def ticket_detail(ticket_id: str) -> TicketResponse:
    return TicketResponse(**queries.ticket_by_id(ticket_id).to_summary())


@router.put("/{ticket_id}", response_model=StatusResponse)
async def edit_ticket(ticket_id: str, body: EditTicketRequest) -> StatusResponse:
    command = EditTicket(
        ticket_id=ticket_id,
        user_id=body.user_id,
        subject=body.subject,
        category=body.category,
        priority=body.priority,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.post("/{ticket_id}/withdraw", response_model=StatusResponse)
async def withdraw_ticket(ticket_id: str, body: WithdrawTicketRequest) -> StatusResponse:
    current_domain.process(WithdrawTicket(ticket_id=ticket_id, user_id=body.user_id), asynchronous=False)
    return StatusResponse()


@router.put("/{ticket_id}/status", response_model=StatusResponse)
async def update_ticket_status(ticket_id: str, body: UpdateTicketStatusRequest) -> StatusResponse:
    current_domain.process(UpdateTicketStatus(ticket_id=ticket_id, status=body.status), asynchronous=False)
    return StatusResponse()


@router.post("/{ticket_id}/response", response_model=StatusResponse)
async def respond_to_ticket(ticket_id: str, body: RespondToTicketRequest) -> StatusResponse:
    current_domain.process(RespondToTicket(ticket_id=ticket_id, response=body.response), asynchronous=False)
    return StatusResponse()
