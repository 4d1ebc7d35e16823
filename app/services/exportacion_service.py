"""
Export service layer.

Exports any console table to ``.xlsx`` with exactly the rows the page
would show before pagination: the same fetch, column filters, global
search and sort run through the table engine, and every matching row is
written (no page slice).

Supported tables
----------------
``clients``, ``contracts``, ``frames``, ``crystals``, ``tasks``, ``users``.
"""

from __future__ import annotations

import logging
from typing import Any

from app.exporters.excel_exporter import ExcelExporter
from app.schemas.common import TableParams
from app.services.client_service import CLIENTS_TABLE, client_filters
from app.services.contract_service import CONTRACTS_TABLE
from app.services.gateway import DataGateway
from app.services.inventory_service import (
    CRYSTALS_TABLE,
    FRAMES_TABLE,
    crystal_filters,
    frame_filters,
)
from app.services.table_service import TableSpec, build_engine
from app.services.task_service import TASKS_TABLE, task_filters
from app.services.user_service import USERS_TABLE

logger = logging.getLogger(__name__)

EXPORTABLE_TABLES: dict[str, TableSpec[Any]] = {
    spec.collection: spec
    for spec in (
        CLIENTS_TABLE,
        CONTRACTS_TABLE,
        FRAMES_TABLE,
        CRYSTALS_TABLE,
        TASKS_TABLE,
        USERS_TABLE,
    )
}


def table_filters(
    table: str,
    *,
    active: bool | None = None,
    status: str | None = None,
    material: str | None = None,
    stock: str = "all",
    progress: str = "all",
    role: str | None = None,
) -> dict[str, Any]:
    """Column filters of *table*, built the same way as its list endpoint.

    Filters that do not belong to *table* are ignored.
    """
    if table == "clients":
        return client_filters(active)
    if table == "contracts":
        return {"status": status}
    if table == "frames":
        return frame_filters(stock)
    if table == "crystals":
        return crystal_filters(material, stock)
    if table == "tasks":
        return task_filters(progress)
    if table == "users":
        return {"role": role}
    return {}


def export_excel(
    gateway: DataGateway,
    table: str,
    params: TableParams,
    column_filters: dict[str, Any] | None = None,
) -> bytes:
    """Build the ``.xlsx`` file for one table.

    Unlike the list endpoints, a read failure is not swallowed here: an
    export of an empty table because the store was unreachable would be
    misleading, so the ``GatewayError`` propagates to the caller.

    Args:
        gateway: Gateway bound to the caller (read permissions apply).
        table: Key of ``EXPORTABLE_TABLES``.
        params: Search and sort state; pagination is ignored.
        column_filters: Column id to filter value.

    Returns:
        Raw bytes of the workbook.

    Raises:
        KeyError: If *table* is not exportable.
    """
    spec = EXPORTABLE_TABLES[table]
    rows = spec.fetch(gateway)
    engine = build_engine(spec, rows, params, column_filters)
    sorted_rows = engine.get_sorted_rows()

    headers = [c.header for c in spec.columns]
    data = [list(engine.row_cells(row).values()) for row in sorted_rows]
    numeric_cols = {
        i for i, c in enumerate(spec.columns) if c.id in {"total", "price"}
    }

    filters = {}
    if params.search:
        filters["Búsqueda"] = params.search
    for column_id, value in (column_filters or {}).items():
        if value not in (None, ""):
            filters[column_id] = str(value)

    logger.info("export_excel table=%s rows=%d", table, len(data))
    return (
        ExcelExporter(title=spec.title, filters=filters)
        .add_header()
        .add_summary({"Registros": len(data)})
        .add_data_table(headers, data, numeric_cols=numeric_cols)
        .finalize()
    )
