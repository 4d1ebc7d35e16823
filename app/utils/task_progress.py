"""
Production task progress helpers.

A task carries six independent step flags.  ``StepSet`` is the value object
for those flags and the ``STEP_GETTERS`` / ``STEP_SETTERS`` tables map each
``TaskStep`` to an explicit accessor and mutator, so no code ever indexes a
task by a step name string.

Steps are NOT sequential: any step can be ticked in any order.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.utils.constants import PROGRESS_BAND_FLOOR, PROGRESS_BANDS


class TaskStep(str, Enum):
    MEASURE = "measure"
    MARK = "mark"
    CUT = "cut"
    BEVEL = "bevel"
    MOUNT = "mount"
    QUALITY_CHECK = "quality_check"


STEP_LABELS: dict[TaskStep, str] = {
    TaskStep.MEASURE: "Medición",
    TaskStep.MARK: "Marcado",
    TaskStep.CUT: "Corte",
    TaskStep.BEVEL: "Biselado",
    TaskStep.MOUNT: "Montaje",
    TaskStep.QUALITY_CHECK: "Control",
}

TOTAL_STEPS = len(TaskStep)


@dataclass(frozen=True)
class StepSet:
    measure: bool = False
    mark: bool = False
    cut: bool = False
    bevel: bool = False
    mount: bool = False
    quality_check: bool = False

    @classmethod
    def from_task(cls, task: Any) -> "StepSet":
        """Build from any object (ORM row or schema) exposing the six flags."""
        return cls(
            measure=bool(task.measure),
            mark=bool(task.mark),
            cut=bool(task.cut),
            bevel=bool(task.bevel),
            mount=bool(task.mount),
            quality_check=bool(task.quality_check),
        )


STEP_GETTERS: dict[TaskStep, Callable[[StepSet], bool]] = {
    TaskStep.MEASURE: lambda s: s.measure,
    TaskStep.MARK: lambda s: s.mark,
    TaskStep.CUT: lambda s: s.cut,
    TaskStep.BEVEL: lambda s: s.bevel,
    TaskStep.MOUNT: lambda s: s.mount,
    TaskStep.QUALITY_CHECK: lambda s: s.quality_check,
}

STEP_SETTERS: dict[TaskStep, Callable[[StepSet, bool], StepSet]] = {
    TaskStep.MEASURE: lambda s, v: dataclasses.replace(s, measure=v),
    TaskStep.MARK: lambda s, v: dataclasses.replace(s, mark=v),
    TaskStep.CUT: lambda s, v: dataclasses.replace(s, cut=v),
    TaskStep.BEVEL: lambda s, v: dataclasses.replace(s, bevel=v),
    TaskStep.MOUNT: lambda s, v: dataclasses.replace(s, mount=v),
    TaskStep.QUALITY_CHECK: lambda s, v: dataclasses.replace(s, quality_check=v),
}


@dataclass(frozen=True)
class TaskProgress:
    completed: int
    total: int
    percentage: float


def progress(steps: StepSet) -> TaskProgress:
    completed = sum(1 for getter in STEP_GETTERS.values() if getter(steps))
    return TaskProgress(
        completed=completed,
        total=TOTAL_STEPS,
        percentage=completed / TOTAL_STEPS * 100,
    )


def band_color(percentage: float) -> str:
    """Colour band for a completion percentage (lower bounds inclusive)."""
    for lower_bound, color in PROGRESS_BANDS:
        if percentage >= lower_bound:
            return color
    return PROGRESS_BAND_FLOOR


def toggled(steps: StepSet, step: TaskStep) -> StepSet:
    """Return *steps* with exactly one flag flipped."""
    return STEP_SETTERS[step](steps, not STEP_GETTERS[step](steps))


def progress_bucket(percentage: float) -> str:
    if percentage >= 100:
        return "completed"
    if percentage > 0:
        return "in_progress"
    return "pending"


def matches_progress_filter(percentage: float, progress_filter: str) -> bool:
    """Task-list filter: ``pending`` is anything not finished (including started)."""
    if progress_filter == "pending":
        return percentage < 100
    if progress_filter == "in_progress":
        return 0 < percentage < 100
    if progress_filter == "completed":
        return percentage == 100
    return True
