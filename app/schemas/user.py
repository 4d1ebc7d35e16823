"""
Pydantic v2 schemas for staff account (user management) endpoints.

Separates write schemas (``UserCreate``, ``UserUpdate``) from the read
schema (``UserResponse``) so password material never appears in a
response.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.utils.constants import ROLE_COLORS, ROLE_LABELS, ROLES

Role = Literal["admin", "reception", "warehouse"]


class UserCreate(BaseModel):
    """Payload for creating a staff account (``POST /api/users``, admin only)."""

    email: str = Field(..., min_length=3, max_length=200, description="Correo electrónico de inicio de sesión")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Contraseña en texto plano; se almacenará hasheada con bcrypt",
    )
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: Role = Field(default="reception", description=f"Valores permitidos: {ROLES}")
    is_active: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "almacen@optica.local",
                "password": "Almacen2026!",
                "first_name": "Jorge",
                "last_name": "Pérez",
                "role": "warehouse",
            }
        }
    )


class UserUpdate(BaseModel):
    """Partial update (``PUT /api/users/{id}``); omit ``password`` to keep it."""

    email: str | None = Field(default=None, min_length=3, max_length=200)
    password: str | None = Field(default=None, min_length=8, max_length=128)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    role: Role | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def role_label(self) -> str:
        return ROLE_LABELS.get(self.role, self.role)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def role_color(self) -> str:
        return ROLE_COLORS.get(self.role, "gray")
