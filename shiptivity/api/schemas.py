"""API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    status: str  # backlog | in-progress | complete
    priority: int


class ClientUpdateRequest(BaseModel):
    """Body of PUT /api/v1/clients/{id}.

    Fields are left untyped so malformed values reach the API's own
    validation and come back as a 400 error body instead of a 422.
    """

    model_config = ConfigDict(extra="ignore")

    status: Any = None
    priority: Any = None


class ErrorResponse(BaseModel):
    message: str
    long_message: str


class InfoResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "shiptivity-api"
    version: str | None = None
    database: str = "ok"  # ok | error
    clients: int | None = None  # Number of stored clients, None if the store failed
    database_error: str | None = None
