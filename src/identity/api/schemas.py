"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                    "name": "Jane Doe",
                    "username": "janed",
                    "address": "12 Harbour Road",
                    "phone_number": "555-0123",
                    "role": "user",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., max_length=150)
    username: str = Field(..., max_length=50)
    address: str | None = None
    phone_number: str | None = Field(None, max_length=30)
    profile_image: str | None = Field(None, max_length=500)
    role: str = Field("user", max_length=10)
    comments: str | None = None


class UpdateUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Jane Smith", "phone_number": "555-0456", "role": "admin"}]}
    }

    name: str | None = Field(None, max_length=150)
    address: str | None = None
    phone_number: str | None = Field(None, max_length=30)
    profile_image: str | None = Field(None, max_length=500)
    role: str | None = Field(None, max_length=10)
    comments: str | None = None


class SignInRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "secret"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


# --- Response Schemas ---


class UserIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    user_id: str


class UserResponse(BaseModel):
    id: str
    name: str
    username: str
    email: str
    address: str | None = None
    phone_number: str | None = None
    profile_image: str | None = None
    role: str
    comments: str | None = None


class SeedUsersResponse(BaseModel):
    created: list[str]


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
