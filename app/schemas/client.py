"""
Pydantic v2 schemas for the Clients page.

Write schemas mirror the client form; ``ClientSummary`` is the nested
representation embedded in contract and task rows.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    """Payload for ``POST /api/clients``."""

    first_name: str = Field(..., min_length=1, max_length=100, description="Nombre")
    last_name: str = Field(..., min_length=1, max_length=100, description="Apellido")
    ci: str = Field(..., min_length=1, max_length=30, description="Carné de identidad")
    address: str | None = Field(default=None, max_length=300, description="Dirección")
    email: str | None = Field(default=None, max_length=200, description="Correo electrónico")
    phone: str = Field(..., min_length=1, max_length=50, description="Teléfono")
    is_active: bool = Field(default=True, description="Cliente activo")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "María",
                "last_name": "González",
                "ci": "85010112345",
                "address": "Calle 23 #456, Vedado",
                "email": "maria@example.com",
                "phone": "+53 5 1234567",
                "is_active": True,
            }
        }
    )


class ClientUpdate(BaseModel):
    """Partial update for ``PUT /api/clients/{id}``; omitted fields are kept."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    ci: str | None = Field(default=None, min_length=1, max_length=30)
    address: str | None = Field(default=None, max_length=300)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    is_active: bool | None = None


class ClientResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    ci: str
    address: str | None = None
    email: str | None = None
    phone: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientSummary(BaseModel):
    """Client fields shown next to a contract or task."""

    id: int
    first_name: str
    last_name: str
    ci: str
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ClientOption(BaseModel):
    """Entry of the active-client selector in the contract form."""

    id: int
    first_name: str
    last_name: str
    ci: str

    model_config = ConfigDict(from_attributes=True)
