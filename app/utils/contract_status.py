"""
Contract status progression helpers.

The catalog in ``constants.CONTRACT_STATUSES`` is the only source of order.
Status strings are free-form in the database, so every lookup here fails
soft: an unknown value simply has no successor and a neutral colour.
"""

from __future__ import annotations

from app.utils.constants import (
    CONTRACT_STATUS_COLORS,
    CONTRACT_STATUSES,
    DEFAULT_STATUS_COLOR,
)


def status_index(status: str | None) -> int | None:
    """Catalog position of *status*, or ``None`` when it is not in the catalog."""
    try:
        return CONTRACT_STATUSES.index(status)  # type: ignore[arg-type]
    except ValueError:
        return None


def next_status(current: str | None) -> str | None:
    """Return the status immediately after *current*.

    ``None`` for the terminal status ("Finalizado") and for any value that
    is not part of the catalog.
    """
    index = status_index(current)
    if index is None or index == len(CONTRACT_STATUSES) - 1:
        return None
    return CONTRACT_STATUSES[index + 1]


def status_color(status: str | None) -> str:
    return CONTRACT_STATUS_COLORS.get(status or "", DEFAULT_STATUS_COLOR)


def is_terminal(status: str | None) -> bool:
    return status == CONTRACT_STATUSES[-1]
