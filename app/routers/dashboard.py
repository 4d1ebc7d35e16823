"""
Dashboard router.

Mounts under ``/api/dashboard`` (prefix set in ``main.py``).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from app.schemas.dashboard import DashboardResponse
from app.services import dashboard_service
from app.services.auth_service import get_gateway
from app.services.gateway import DataGateway

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/",
    response_model=DashboardResponse,
    summary="Resumen del panel",
    description=(
        "Totales de clientes y contratos, contratos pendientes (ni entregados ni "
        "finalizados), contratos en garantía y los 5 contratos más recientes."
    ),
    responses={401: {"description": "Token JWT ausente o inválido."}},
)
def get_dashboard(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> DashboardResponse:
    return dashboard_service.get_dashboard(gateway)
