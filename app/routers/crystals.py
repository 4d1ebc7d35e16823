"""
Crystals (lentes) router.

Mounts under ``/api/crystals`` (prefix set in ``main.py``).

Same access rules as frames: every role reads, ``admin`` and
``warehouse`` manage, deletes are physical.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user import User
from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.schemas.inventory import (
    CrystalCreate,
    CrystalResponse,
    CrystalUpdate,
    StockAdjust,
    StockFilter,
)
from app.services import inventory_service
from app.services.auth_service import get_gateway, require_role
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Cristales"])

_managers = require_role("admin", "warehouse")

CrystalId = Annotated[int, Path(description="ID del cristal.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[CrystalResponse],
    summary="Tabla de cristales",
    description=(
        "``search`` busca por tipo, material o tratamiento. ``material`` filtra por "
        "material exacto; ``stock`` por disponibilidad (stock bajo: 1 a 10)."
    ),
    responses={401: {"description": "Token JWT ausente o inválido."}},
)
def list_crystals(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    material: Annotated[
        Literal["organico", "mineral", "policarbonato", "trivex"] | None,
        Query(description="Material del cristal."),
    ] = None,
    stock: Annotated[StockFilter, Query(description="Filtro de stock.")] = "all",
) -> TableResponse:
    return inventory_service.list_crystals(gateway, params, material, stock)


@router.get(
    "/{crystal_id}",
    response_model=CrystalResponse,
    summary="Detalle de cristal",
    responses={404: {"description": "Cristal no encontrado."}},
)
def get_crystal(
    crystal_id: CrystalId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> CrystalResponse:
    return CrystalResponse.model_validate(inventory_service.get_crystal(gateway, crystal_id))


@router.post(
    "/",
    response_model=CrystalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear cristal",
    responses={403: {"description": "Rol sin permiso para gestionar inventario."}},
)
def create_crystal(
    body: CrystalCreate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> CrystalResponse:
    return CrystalResponse.model_validate(inventory_service.create_crystal(gateway, body))


@router.put(
    "/{crystal_id}",
    response_model=CrystalResponse,
    summary="Actualizar cristal",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Cristal no encontrado."},
    },
)
def update_crystal(
    crystal_id: CrystalId,
    body: CrystalUpdate,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> CrystalResponse:
    return CrystalResponse.model_validate(
        inventory_service.update_crystal(gateway, crystal_id, body)
    )


@router.delete(
    "/{crystal_id}",
    response_model=MessageResponse,
    summary="Eliminar cristal",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Cristal no encontrado."},
    },
)
def delete_crystal(
    crystal_id: CrystalId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> MessageResponse:
    inventory_service.delete_crystal(gateway, crystal_id)
    return MessageResponse(message=f"Cristal {crystal_id} eliminado")


@router.post(
    "/{crystal_id}/stock",
    response_model=CrystalResponse,
    summary="Ajustar stock",
    description="Suma ``delta`` al stock actual; el resultado nunca baja de 0.",
    responses={
        403: {"description": "Rol sin permiso para gestionar inventario."},
        404: {"description": "Cristal no encontrado."},
    },
)
def adjust_crystal_stock(
    crystal_id: CrystalId,
    body: StockAdjust,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    _user: Annotated[User, Depends(_managers)],
) -> CrystalResponse:
    return CrystalResponse.model_validate(
        inventory_service.adjust_stock(gateway, "crystals", crystal_id, body.delta)
    )
