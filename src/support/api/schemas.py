"""Pydantic request/response schemas for the Support API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class OpenTicketRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
                    "subject": "Order arrived late",
                    "category": "delivery",
                    "priority": "high",
                    "description": "My order was booked for 14:00 and arrived at 17:30.",
                }
            ]
        }
    }

    user_id: str
    subject: str = Field(..., max_length=200)
    category: str = Field(..., max_length=50)
    priority: str = Field("medium", max_length=10)
    description: str


class EditTicketRequest(BaseModel):
    user_id: str
    subject: str | None = Field(None, max_length=200)
    category: str | None = Field(None, max_length=50)
    priority: str | None = Field(None, max_length=10)
    description: str | None = None


class WithdrawTicketRequest(BaseModel):
    user_id: str


class UpdateTicketStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "in_progress"}]}}

    status: str = Field(..., max_length=20)


class RespondToTicketRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"response": "Sorry about that, a refund is on its way."}]}}

    response: str


# --- Response Schemas ---


class TicketIdResponse(BaseModel):
    ticket_id: str


class TicketResponse(BaseModel):
    ticket_id: str
    user_id: str
    subject: str
    category: str
    priority: str
    description: str
    status: str
    admin_response: str | None = None
    created_at: str | None = None
    resolved_at: str | None = None


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
