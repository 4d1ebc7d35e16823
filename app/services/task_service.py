"""
Tasks page business logic.

Task rows carry six independent step flags.  The page lists tasks joined
with their contract and the contract's client, filters them by progress
bucket, and lets the workshop tick any step in any order.
"""

from __future__ import annotations

import logging
from typing import Any

from app.models.task import Task
from app.schemas.common import TableParams, TableResponse
from app.schemas.task import ProductionContractOption, TaskDraft, TaskWithContract
from app.services.gateway import DataGateway
from app.services.table_service import TableSpec, render_table
from app.utils.constants import PRODUCTION_STATUSES
from app.utils.table_engine import ColumnDef, text_search
from app.utils.task_progress import (
    STEP_GETTERS,
    StepSet,
    TaskStep,
    matches_progress_filter,
    progress,
    toggled,
)

logger = logging.getLogger(__name__)

COLLECTION = "tasks"
_JOINS = ("contract", "contract.client")


def _client(task: Task):
    contract = task.contract
    return contract.client if contract is not None else None


def _client_name(task: Task) -> str | None:
    client = _client(task)
    return f"{client.first_name} {client.last_name}" if client is not None else None


def _percentage(task: Task) -> float:
    return progress(StepSet.from_task(task)).percentage


TASKS_TABLE: TableSpec[Task] = TableSpec(
    collection=COLLECTION,
    title="Tareas de producción",
    columns=[
        ColumnDef("contract_id", "Contrato", filterable=False),
        ColumnDef("client", "Cliente", accessor=_client_name),
        ColumnDef(
            "frame",
            "Armadura",
            accessor=lambda t: t.contract.frame if t.contract is not None else None,
        ),
        ColumnDef("assigned_date", "Fecha asignada", filterable=False),
        ColumnDef(
            "progress",
            "Progreso",
            accessor=_percentage,
            filter_fn=matches_progress_filter,
        ),
        ColumnDef("notes", "Notas", sortable=False),
    ],
    fetch=lambda gateway: gateway.select(COLLECTION, joins=_JOINS),
    global_filter_fn=text_search(
        lambda t: _client(t).first_name if _client(t) else None,
        lambda t: _client(t).last_name if _client(t) else None,
        lambda t: _client(t).ci if _client(t) else None,
        lambda t: t.contract.frame if t.contract is not None else None,
    ),
    empty_message="No hay tareas de producción",
    search_placeholder="Buscar por cliente, CI o armadura...",
)


def task_filters(progress_filter: str = "all") -> dict[str, Any]:
    return {"progress": None if progress_filter == "all" else progress_filter}


def list_tasks(
    gateway: DataGateway,
    params: TableParams,
    progress_filter: str = "all",
) -> TableResponse:
    """Return the rendered tasks table.

    Args:
        gateway: Gateway bound to the caller.
        params: Search, sort and pagination state.
        progress_filter: ``all``, ``pending`` (not finished), ``in_progress``
            or ``completed``.
    """
    return render_table(
        TASKS_TABLE,
        gateway,
        params,
        TaskWithContract.model_validate,
        task_filters(progress_filter),
    )


def get_task(gateway: DataGateway, task_id: int) -> Task:
    return gateway.get(COLLECTION, task_id, joins=_JOINS)


def create_task(gateway: DataGateway, draft: TaskDraft) -> Task:
    payload = draft.to_payload()
    gateway.get("contracts", payload["contract_id"])
    task = gateway.insert(COLLECTION, payload)
    logger.info("Task created id=%s contract_id=%s", task.id, task.contract_id)
    return get_task(gateway, task.id)


def update_task(gateway: DataGateway, task_id: int, draft: TaskDraft) -> Task:
    payload = draft.to_payload()
    gateway.get("contracts", payload["contract_id"])
    gateway.update(COLLECTION, task_id, payload)
    return get_task(gateway, task_id)


def delete_task(gateway: DataGateway, task_id: int) -> None:
    gateway.delete(COLLECTION, task_id)


def toggle_step(gateway: DataGateway, task_id: int, step: TaskStep) -> Task:
    """Flip one production step and persist only that flag.

    Steps are independent: nothing requires ``measure`` before ``cut``.
    """
    task = get_task(gateway, task_id)
    steps = toggled(StepSet.from_task(task), step)
    value = STEP_GETTERS[step](steps)
    gateway.update(COLLECTION, task_id, {step.value: value})
    logger.info("Task id=%s step '%s' -> %s", task_id, step.value, value)
    return get_task(gateway, task_id)


def production_contracts(gateway: DataGateway) -> list[ProductionContractOption]:
    """Contracts that can receive a task (currently in the workshop)."""
    contracts = gateway.select(
        "contracts",
        in_={"status": PRODUCTION_STATUSES},
        joins=("client",),
    )
    return [ProductionContractOption.model_validate(c) for c in contracts]
