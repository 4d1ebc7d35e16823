"""
Shared Pydantic v2 schemas reused across every page module.

Provides the table request parameters, the generic table response
envelope, and the message response so that each domain module can compose
them without duplicating field definitions.
"""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

RowT = TypeVar("RowT")


class TableParams(BaseModel):
    """Search, sort and pagination parameters for table endpoints.

    Attributes:
        search: Free-text search; empty means no filter.
        sorting: Ordered ``(column_id, direction)`` pairs.
        page_index: 0-based page index (clamped by the engine).
        page_size: Number of rows per page.
    """

    search: str = Field(default="", description="Texto libre de búsqueda.")
    sorting: list[tuple[str, Literal["asc", "desc"]]] = Field(
        default_factory=list,
        description="Orden: lista de pares (columna, dirección).",
    )
    page_index: int = Field(default=0, ge=0, description="Página (base 0).")
    page_size: int = Field(default=10, ge=1, description="Registros por página.")


class ColumnHeader(BaseModel):
    id: str
    header: str
    sortable: bool
    sort_direction: Literal["asc", "desc"] | None = None


class SortEntry(BaseModel):
    column: str
    direction: Literal["asc", "desc"]


class TableResponse(BaseModel, Generic[RowT]):
    """Rendered table view returned by every list endpoint.

    Attributes:
        headers: Column headers with their current sort indicator.
        rows: Rows of the requested page.
        total: Number of rows matching search and filters.
        page_index: Effective (clamped) page index.
        page_size: Rows per page.
        page_count: ``ceil(total / page_size)``.
        show_pagination: ``False`` for zero or one page.
        can_previous_page / can_next_page: Navigation availability.
        empty_message: Set only when no row matches search and filters.
        summary: "Mostrando a a b de N resultados" when paginated.
        page_label: "Página x de y" when paginated.
        search_placeholder: Placeholder for the search box.
        sorting: Effective sort state.
        can_manage: Whether the caller's role may edit this collection
                    (presentation hint only; the gateway enforces it).
    """

    headers: list[ColumnHeader]
    rows: list[RowT]
    total: int
    page_index: int
    page_size: int
    page_count: int
    show_pagination: bool
    can_previous_page: bool
    can_next_page: bool
    empty_message: str | None = None
    summary: str | None = None
    page_label: str | None = None
    search_placeholder: str
    sorting: list[SortEntry] = Field(default_factory=list)
    can_manage: bool = False


class MessageResponse(BaseModel):
    """Generic message envelope for operations that do not return a resource.

    Attributes:
        message: Short human-readable result summary.
        detail: Optional extended information.
    """

    message: str = Field(..., description="Resumen del resultado de la operación.")
    detail: str | None = Field(
        default=None,
        description="Información adicional (contexto de error, sugerencia, etc.).",
    )
