"""
Users (staff accounts) router.

Mounts under ``/api/users`` (prefix set in ``main.py``).

Restricted to the ``admin`` role.  Accounts are soft-deleted and an
administrator cannot deactivate their own account.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user import User
from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services import user_service
from app.services.auth_service import get_gateway, require_role
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Usuarios"])

_admin = require_role("admin")

UserId = Annotated[int, Path(description="ID del usuario.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[UserResponse],
    summary="Tabla de usuarios",
    description="``search`` busca por nombre, apellidos o correo; ``role`` filtra por rol.",
    responses={403: {"description": "Solo administradores."}},
)
def list_users(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
    role: Annotated[
        Literal["admin", "reception", "warehouse"] | None,
        Query(description="Rol exacto."),
    ] = None,
) -> TableResponse:
    return user_service.list_users(gateway, params, role)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Detalle de usuario",
    responses={
        403: {"description": "Solo administradores."},
        404: {"description": "Usuario no encontrado."},
    },
)
def get_user(
    user_id: UserId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(gateway, user_id))


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear usuario",
    responses={
        403: {"description": "Solo administradores."},
        409: {"description": "El correo ya está registrado."},
    },
)
def create_user(
    body: UserCreate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.create_user(gateway, body))


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Actualizar usuario",
    responses={
        400: {"description": "Un administrador no puede desactivarse a sí mismo."},
        403: {"description": "Solo administradores."},
        404: {"description": "Usuario no encontrado."},
        409: {"description": "El correo ya está registrado."},
    },
)
def update_user(
    user_id: UserId,
    body: UserUpdate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.update_user(gateway, user_id, body))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Desactivar usuario",
    responses={
        400: {"description": "Un administrador no puede desactivarse a sí mismo."},
        403: {"description": "Solo administradores."},
        404: {"description": "Usuario no encontrado."},
    },
)
def delete_user(
    user_id: UserId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
) -> MessageResponse:
    user_service.delete_user(gateway, user_id)
    return MessageResponse(message=f"Usuario {user_id} desactivado")


@router.post(
    "/{user_id}/toggle",
    response_model=UserResponse,
    summary="Activar / desactivar usuario",
    responses={
        400: {"description": "Un administrador no puede desactivarse a sí mismo."},
        403: {"description": "Solo administradores."},
    },
)
def toggle_user(
    user_id: UserId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_admin)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.toggle_active(gateway, user_id))
