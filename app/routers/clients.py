"""
Clients router.

Mounts under ``/api/clients`` (prefix set in ``main.py``).

Reading is open to every role; creating, editing and deactivating
clients requires ``admin`` or ``reception``.

Endpoints
---------
GET    /                    — Searchable / sortable / paginated client table.
GET    /{client_id}         — One client.
POST   /                    — Create a client.
PUT    /{client_id}         — Partial update.
DELETE /{client_id}         — Soft delete (``is_active = False``).
POST   /{client_id}/toggle  — Flip ``is_active``.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user import User
from app.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.services import client_service
from app.services.auth_service import get_gateway, require_role
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Clientes"])

_managers = require_role("admin", "reception")

ClientId = Annotated[int, Path(description="ID del cliente.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[ClientResponse],
    summary="Tabla de clientes",
    description=(
        "Retorna la tabla de clientes ordenada por fecha de registro (más recientes "
        "primero). ``search`` busca en nombre, apellidos, CI y correo sin distinguir "
        "mayúsculas ni tildes."
    ),
    responses={
        200: {"description": "Página solicitada de la tabla."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_clients(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    active: Annotated[
        bool | None,
        Query(description="Filtrar por estado activo / inactivo."),
    ] = None,
) -> TableResponse:
    logger.debug("GET /clients search=%r active=%s", params.search, active)
    return client_service.list_clients(gateway, params, active)


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Detalle de cliente",
    responses={404: {"description": "Cliente no encontrado."}},
)
def get_client(
    client_id: ClientId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ClientResponse:
    return ClientResponse.model_validate(client_service.get_client(gateway, client_id))


@router.post(
    "/",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear cliente",
    responses={
        201: {"description": "Cliente creado."},
        403: {"description": "Rol sin permiso para gestionar clientes."},
        422: {"description": "Datos del formulario inválidos."},
    },
)
def create_client(
    body: ClientCreate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> ClientResponse:
    return ClientResponse.model_validate(client_service.create_client(gateway, body))


@router.put(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Actualizar cliente",
    responses={
        403: {"description": "Rol sin permiso para gestionar clientes."},
        404: {"description": "Cliente no encontrado."},
    },
)
def update_client(
    client_id: ClientId,
    body: ClientUpdate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> ClientResponse:
    return ClientResponse.model_validate(
        client_service.update_client(gateway, client_id, body)
    )


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Desactivar cliente",
    description="Baja lógica: el cliente queda inactivo y conserva sus contratos.",
    responses={
        403: {"description": "Rol sin permiso para gestionar clientes."},
        404: {"description": "Cliente no encontrado."},
    },
)
def delete_client(
    client_id: ClientId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> MessageResponse:
    client_service.delete_client(gateway, client_id)
    return MessageResponse(message=f"Cliente {client_id} desactivado")


@router.post(
    "/{client_id}/toggle",
    response_model=ClientResponse,
    summary="Activar / desactivar cliente",
    responses={
        403: {"description": "Rol sin permiso para gestionar clientes."},
        404: {"description": "Cliente no encontrado."},
    },
)
def toggle_client(
    client_id: ClientId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> ClientResponse:
    return ClientResponse.model_validate(client_service.toggle_active(gateway, client_id))
