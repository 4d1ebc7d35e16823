"""
Pydantic v2 schemas for the authentication endpoints.

Covers the login request payload, the JWT token response, and the
session representation returned by ``GET /api/auth/me``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Payload documented for ``POST /api/auth/login``.

    The endpoint itself reads the OAuth2 form (``username`` carries the
    email) so the Swagger "Authorize" button works.
    """

    email: str = Field(
        ...,
        min_length=3,
        max_length=200,
        description="Correo electrónico del usuario",
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Contraseña en texto plano (solo sobre HTTPS)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "recepcion@optica.local",
                "password": "secret1234",
            }
        }
    )


class TokenResponse(BaseModel):
    """Response body returned after a successful authentication."""

    access_token: str = Field(..., description="JWT de acceso firmado con HS256")
    token_type: str = Field(default="bearer", description="Tipo de token OAuth2")


class SessionUserResponse(BaseModel):
    """Current session user: identity plus the role that gates the UI.

    Attributes:
        id: Database primary key.
        email: Login email.
        first_name: Given name.
        last_name: Family name.
        role: One of ``constants.ROLES``.
        is_active: Whether the account is currently active.
    """

    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
