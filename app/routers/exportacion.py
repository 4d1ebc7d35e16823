"""
Exportación router.

Mounts under ``/api/exportar`` (prefix set in ``main.py``).

Streams an ``.xlsx`` file with every row of a console table that matches
the given search, sort and page filters (pagination is ignored).  Each
table honours the same filters as its list endpoint; the others are
ignored.  Read permissions are those of the underlying collection, so
only admins can export users.

The ``Content-Disposition`` header uses ``attachment; filename=...`` so
browsers prompt a download rather than displaying the file inline.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from app.schemas.common import TableParams
from app.schemas.inventory import StockFilter
from app.services import exportacion_service
from app.services.auth_service import get_gateway
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exportación"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _validate_table(table: str) -> str:
    """Return the lower-cased table key or raise 400 if it is not exportable."""
    key = table.lower()
    if key not in exportacion_service.EXPORTABLE_TABLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Tabla '{table}' no soportada. "
                f"Valores válidos: {sorted(exportacion_service.EXPORTABLE_TABLES)}."
            ),
        )
    return key


def _make_filename(table: str) -> str:
    """e.g. ``"optica_clients_2026-10-19.xlsx"``."""
    return f"optica_{table}_{date.today().isoformat()}.xlsx"


@router.get(
    "/excel",
    summary="Exportar tabla a Excel (.xlsx)",
    description=(
        "Genera y descarga un archivo Excel con todas las filas de la tabla que "
        "coinciden con la búsqueda y los filtros de la página, en el orden "
        "solicitado."
    ),
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Archivo Excel generado exitosamente.",
            "content": {_XLSX_MEDIA_TYPE: {}},
        },
        400: {"description": "Tabla no válida."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permiso de lectura sobre la tabla."},
    },
)
def export_excel(
    table: Annotated[
        str,
        Query(description="Tabla: clients, contracts, frames, crystals, tasks, users."),
    ],
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    active: Annotated[bool | None, Query(description="Clientes: activo / inactivo.")] = None,
    status_filter: Annotated[
        str | None,
        Query(alias="status", description="Contratos: estado exacto.", max_length=50),
    ] = None,
    material: Annotated[
        Literal["organico", "mineral", "policarbonato", "trivex"] | None,
        Query(description="Cristales: material."),
    ] = None,
    stock: Annotated[StockFilter, Query(description="Armaduras y cristales: stock.")] = "all",
    progress: Annotated[
        Literal["all", "pending", "in_progress", "completed"],
        Query(description="Tareas: progreso."),
    ] = "all",
    role: Annotated[
        Literal["admin", "reception", "warehouse"] | None,
        Query(description="Usuarios: rol exacto."),
    ] = None,
) -> StreamingResponse:
    """Generate and stream the Excel file for one table.

    Raises:
        HTTPException 400: If the table name is invalid.
        GatewayError: Propagated (403 / 503) through the app exception handler.
    """
    key = _validate_table(table)
    logger.info("GET /exportar/excel table=%s search=%r", key, params.search)

    column_filters = exportacion_service.table_filters(
        key,
        active=active,
        status=status_filter,
        material=material,
        stock=stock,
        progress=progress,
        role=role,
    )
    file_bytes = exportacion_service.export_excel(gateway, key, params, column_filters)

    headers = {
        "Content-Disposition": f'attachment; filename="{_make_filename(key)}"',
        "Content-Length": str(len(file_bytes)),
    }
    return StreamingResponse(io.BytesIO(file_bytes), media_type=_XLSX_MEDIA_TYPE, headers=headers)
