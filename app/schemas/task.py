"""
Pydantic v2 schemas for the production Tasks page.

Task rows are returned with their progress already derived (completed
steps, percentage, colour band) and with the joined contract and client.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.schemas.client import ClientSummary
from app.utils.task_progress import (
    STEP_GETTERS,
    STEP_LABELS,
    StepSet,
    band_color,
    progress_bucket,
    progress,
)


class TaskDraft(BaseModel):
    """Task form as submitted by ``POST`` / ``PUT /api/tasks``."""

    contract_id: str = Field(..., description="ID del contrato (texto del selector)")
    assigned_date: date = Field(default_factory=date.today, description="Fecha asignada")
    measure: bool = False
    mark: bool = False
    cut: bool = False
    bevel: bool = False
    mount: bool = False
    quality_check: bool = False
    notes: str = Field(default="", max_length=1000)

    @field_validator("contract_id")
    @classmethod
    def _contract_is_id(cls, value: str) -> str:
        if not value.strip().isdigit():
            raise ValueError("Seleccione un contrato")
        return value

    def to_payload(self) -> dict[str, Any]:
        return {
            "contract_id": int(self.contract_id),
            "assigned_date": self.assigned_date,
            "measure": self.measure,
            "mark": self.mark,
            "cut": self.cut,
            "bevel": self.bevel,
            "mount": self.mount,
            "quality_check": self.quality_check,
            "notes": self.notes.strip() or None,
        }


class StepState(BaseModel):
    key: str
    label: str
    done: bool


class ContractSummary(BaseModel):
    """Contract fields shown on a task card."""

    id: int
    status: str
    frame: str | None = None
    total: float
    client: ClientSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    id: int
    contract_id: int
    assigned_date: date
    measure: bool
    mark: bool
    cut: bool
    bevel: bool
    mount: bool
    quality_check: bool
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def _steps(self) -> StepSet:
        return StepSet.from_task(self)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completed_steps(self) -> int:
        return progress(self._steps()).completed

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_steps(self) -> int:
        return progress(self._steps()).total

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> float:
        return round(progress(self._steps()).percentage, 2)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_color(self) -> str:
        return band_color(progress(self._steps()).percentage)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_status(self) -> str:
        return progress_bucket(progress(self._steps()).percentage)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def steps(self) -> list[StepState]:
        current = self._steps()
        return [
            StepState(key=step.value, label=STEP_LABELS[step], done=getter(current))
            for step, getter in STEP_GETTERS.items()
        ]


class TaskWithContract(TaskResponse):
    """Task row joined with its contract and the contract's client."""

    contract: ContractSummary | None = None


class ProductionContractOption(BaseModel):
    """Contract selectable in the task form (production statuses only)."""

    id: int
    status: str
    frame: str | None = None
    client: ClientSummary | None = None

    model_config = ConfigDict(from_attributes=True)
