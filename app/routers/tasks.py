"""
Production tasks router.

Mounts under ``/api/tasks`` (prefix set in ``main.py``).

Every role can manage tasks.  Steps are toggled one at a time and in any
order.

Endpoints
---------
GET    /                          — Task table joined with contract and client.
GET    /contract-options          — Contracts currently in production.
GET    /{task_id}                 — One task.
POST   /                          — Create from a draft.
PUT    /{task_id}                 — Replace from a draft.
DELETE /{task_id}                 — Hard delete.
POST   /{task_id}/steps/{step}    — Flip one step.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query, status

from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.schemas.task import ProductionContractOption, TaskDraft, TaskWithContract
from app.services import task_service
from app.services.auth_service import get_gateway
from app.services.gateway import DataGateway
from app.services.table_service import table_params
from app.utils.task_progress import TaskStep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tareas"])

TaskId = Annotated[int, Path(description="ID de la tarea.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[TaskWithContract],
    summary="Tabla de tareas de producción",
    description=(
        "Tareas con su contrato y cliente, ordenadas por fecha asignada descendente. "
        "``progress``: ``pending`` (sin terminar), ``in_progress`` (empezadas), "
        "``completed`` (6 de 6)."
    ),
    responses={401: {"description": "Token JWT ausente o inválido."}},
)
def list_tasks(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    progress: Annotated[
        Literal["all", "pending", "in_progress", "completed"],
        Query(description="Filtro de progreso."),
    ] = "all",
) -> TableResponse:
    return task_service.list_tasks(gateway, params, progress)


@router.get(
    "/contract-options",
    response_model=list[ProductionContractOption],
    summary="Contratos en producción",
    description=(
        "Contratos en estado ``Entregado a Producción``, ``Revisión por Calidad`` o "
        "``Entregado a Producción Retrabajo``, seleccionables en el formulario."
    ),
)
def list_contract_options(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> list[ProductionContractOption]:
    return task_service.production_contracts(gateway)


@router.get(
    "/{task_id}",
    response_model=TaskWithContract,
    summary="Detalle de tarea",
    responses={404: {"description": "Tarea no encontrada."}},
)
def get_task(
    task_id: TaskId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> TaskWithContract:
    return TaskWithContract.model_validate(task_service.get_task(gateway, task_id))


@router.post(
    "/",
    response_model=TaskWithContract,
    status_code=status.HTTP_201_CREATED,
    summary="Crear tarea",
    responses={
        404: {"description": "Contrato no encontrado."},
        422: {"description": "Formulario inválido."},
    },
)
def create_task(
    body: TaskDraft,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> TaskWithContract:
    return TaskWithContract.model_validate(task_service.create_task(gateway, body))


@router.put(
    "/{task_id}",
    response_model=TaskWithContract,
    summary="Actualizar tarea",
    responses={404: {"description": "Tarea o contrato no encontrado."}},
)
def update_task(
    task_id: TaskId,
    body: TaskDraft,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> TaskWithContract:
    return TaskWithContract.model_validate(task_service.update_task(gateway, task_id, body))


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Eliminar tarea",
    responses={404: {"description": "Tarea no encontrada."}},
)
def delete_task(
    task_id: TaskId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> MessageResponse:
    task_service.delete_task(gateway, task_id)
    return MessageResponse(message=f"Tarea {task_id} eliminada")


@router.post(
    "/{task_id}/steps/{step}",
    response_model=TaskWithContract,
    summary="Marcar / desmarcar paso",
    description="Invierte un único paso de producción; no exige orden entre pasos.",
    responses={
        404: {"description": "Tarea no encontrada."},
        422: {"description": "Paso desconocido."},
    },
)
def toggle_task_step(
    task_id: TaskId,
    step: Annotated[TaskStep, Path(description="Paso de producción.")],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> TaskWithContract:
    return TaskWithContract.model_validate(task_service.toggle_step(gateway, task_id, step))
