"""
Frames (armaduras) router.

Mounts under ``/api/frames`` (prefix set in ``main.py``).

Every role can browse the catalogue; ``admin`` and ``warehouse`` manage
it.  Frames are hard-deleted.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user import User
from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.schemas.inventory import (
    FrameCreate,
    FrameResponse,
    FrameUpdate,
    StockAdjust,
    StockFilter,
)
from app.services import inventory_service
from app.services.auth_service import get_gateway, require_role
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Armaduras"])

_managers = require_role("admin", "warehouse")

FrameId = Annotated[int, Path(description="ID de la armadura.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[FrameResponse],
    summary="Tabla de armaduras",
    description=(
        "``search`` busca por nombre, marca o modelo. ``stock`` filtra por "
        "disponibilidad: ``available`` (> 0), ``low`` (1 a 5), ``out`` (0)."
    ),
    responses={401: {"description": "Token JWT ausente o inválido."}},
)
def list_frames(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    stock: Annotated[StockFilter, Query(description="Filtro de stock.")] = "all",
) -> TableResponse:
    return inventory_service.list_frames(gateway, params, stock)


@router.get(
    "/{frame_id}",
    response_model=FrameResponse,
    summary="Detalle de armadura",
    responses={404: {"description": "Armadura no encontrada."}},
)
def get_frame(
    frame_id: FrameId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> FrameResponse:
    return FrameResponse.model_validate(inventory_service.get_frame(gateway, frame_id))


@router.post(
    "/",
    response_model=FrameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear armadura",
    responses={403: {"description": "Rol sin permiso para gestionar inventario."}},
)
def create_frame(
    body: FrameCreate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> FrameResponse:
    return FrameResponse.model_validate(inventory_service.create_frame(gateway, body))


@router.put(
    "/{frame_id}",
    response_model=FrameResponse,
    summary="Actualizar armadura",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Armadura no encontrada."},
    },
)
def update_frame(
    frame_id: FrameId,
    body: FrameUpdate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> FrameResponse:
    return FrameResponse.model_validate(
        inventory_service.update_frame(gateway, frame_id, body)
    )


@router.delete(
    "/{frame_id}",
    response_model=MessageResponse,
    summary="Eliminar armadura",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Armadura no encontrada."},
    },
)
def delete_frame(
    frame_id: FrameId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> MessageResponse:
    inventory_service.delete_frame(gateway, frame_id)
    return MessageResponse(message=f"Armadura {frame_id} eliminada")


@router.post(
    "/{frame_id}/stock",
    response_model=FrameResponse,
    summary="Ajustar stock",
    description="Suma ``delta`` al stock actual; el resultado nunca baja de 0.",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Armadura no encontrada."},
    },
)
def adjust_frame_stock(
    frame_id: FrameId,
    body: StockAdjust,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> FrameResponse:
    return FrameResponse.model_validate(
        inventory_service.adjust_stock(gateway, "frames", frame_id, body.delta)
    )
