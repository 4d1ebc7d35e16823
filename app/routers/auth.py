"""
Authentication router for the Óptica console API.

Mounts under ``/api/auth`` (prefix set in ``main.py``).

Endpoints:
    POST /login   — Authenticate with email + password, receive JWT.
    POST /refresh — Exchange a valid token for a new one (extend session).
    GET  /me      — Return the current session user (id, role).
    POST /logout  — Revoke the token used for the request.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.auth import SessionUserResponse, TokenResponse
from app.schemas.common import MessageResponse
from app.services.auth_service import (
    authenticate_user,
    get_current_user,
    get_token_payload,
    sign_out,
)
from app.utils.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _token_for(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "email": user.email, "role": user.role}
    )


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Iniciar sesión",
    description=(
        "Autentica al usuario con su correo y contraseña (campo ``username`` del "
        "formulario OAuth2) y retorna un JWT de acceso válido por el tiempo "
        "configurado en ``JWT_EXPIRATION_MINUTES`` (default 8 h)."
    ),
    responses={
        200: {"description": "Autenticación exitosa; se incluye el token JWT."},
        401: {"description": "Credenciales incorrectas o cuenta inactiva."},
        422: {"description": "Cuerpo de la solicitud inválido."},
    },
)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """Authenticate a staff member and issue a JWT access token.

    The OAuth2 form keeps the Swagger UI "Authorize" button working; its
    ``username`` field carries the email.

    Raises:
        HTTPException 401: If credentials are invalid or the account is inactive.
    """
    user = authenticate_user(db, form_data.username, form_data.password)

    if user is None:
        logger.warning("Failed login attempt for email='%s'", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas o cuenta inactiva",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("Successful login for email='%s' role='%s'", user.email, user.role)
    return TokenResponse(access_token=_token_for(user))


# ---------------------------------------------------------------------------
# POST /refresh
# ---------------------------------------------------------------------------


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Renovar token",
    description=(
        "Emite un nuevo JWT a partir de un token válido (no expirado ni revocado). "
        "Permite extender la sesión sin re-autenticación."
    ),
    responses={
        200: {"description": "Token renovado exitosamente."},
        401: {"description": "Token inválido, expirado o revocado."},
    },
)
def refresh_token(
    current_user: Annotated[User, Depends(get_current_user)],
) -> TokenResponse:
    logger.info("Token refreshed for email='%s'", current_user.email)
    return TokenResponse(access_token=_token_for(current_user))


# ---------------------------------------------------------------------------
# GET /me
# ---------------------------------------------------------------------------


@router.get(
    "/me",
    response_model=SessionUserResponse,
    summary="Usuario de la sesión",
    description=(
        "Retorna el usuario identificado por el JWT en la cabecera "
        "``Authorization: Bearer <token>``. El rol determina qué acciones "
        "muestra la interfaz."
    ),
    responses={
        200: {"description": "Usuario autenticado."},
        401: {"description": "Token ausente, inválido o expirado."},
    },
)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> SessionUserResponse:
    return SessionUserResponse.model_validate(current_user)


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Cerrar sesión",
    description=(
        "Revoca el token usado en la solicitud. Cualquier uso posterior del "
        "mismo token responde 401."
    ),
    responses={
        200: {"description": "Sesión cerrada."},
        401: {"description": "Token ausente, inválido o ya revocado."},
    },
)
def logout(
    payload: Annotated[dict, Depends(get_token_payload)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """Sign the caller out by revoking the current token's ``jti``.

    Args:
        payload: Decoded claims of the bearer token.
        current_user: Authenticated user guard.
    """
    sign_out(payload, current_user)
    return MessageResponse(message="Sesión cerrada")
