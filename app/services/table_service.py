"""
Glue between page controllers and the table engine.

Each page module declares a ``TableSpec`` (collection, columns, search
predicate, fetch function).  ``render_table`` then runs the common list
flow used by every page:

    fetch rows via gateway -> engine(filters, search, sort, page) -> TableResponse

Store failures never break a page: a ``StoreError`` raised while fetching
is logged and the table renders empty.  Other gateway errors, such as
``PermissionDenied``, propagate to the exception handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Generic, TypeVar

from fastapi import Query

from app.config import get_settings
from app.schemas.common import ColumnHeader, SortEntry, TableParams, TableResponse
from app.services.gateway import DataGateway, StoreError, can_manage
from app.utils.constants import EMPTY_MESSAGE, SEARCH_PLACEHOLDER
from app.utils.table_engine import ColumnDef, TableEngine, parse_sort_spec

logger = logging.getLogger(__name__)

settings = get_settings()

T = TypeVar("T")

_SORT_PATTERN = r"^[a-z_]+(:(asc|desc))?(,[a-z_]+(:(asc|desc))?)*$"


@dataclass(frozen=True)
class TableSpec(Generic[T]):
    """Declarative description of one page's table.

    Attributes:
        collection: Gateway collection name.
        title: Human title (used for exports).
        columns: Column definitions.
        fetch: ``gateway -> rows``; the page's query (filters, joins, order).
        global_filter_fn: Page-specific multi-field search predicate.
        empty_message: Message when nothing matches.
        search_placeholder: Search box placeholder.
    """

    collection: str
    title: str
    columns: list[ColumnDef[T]]
    fetch: Callable[[DataGateway], list[T]]
    global_filter_fn: Callable[[T, str], bool] | None = None
    empty_message: str = EMPTY_MESSAGE
    search_placeholder: str = SEARCH_PLACEHOLDER


# ---------------------------------------------------------------------------
# Shared dependency: table params from the query string
# ---------------------------------------------------------------------------


def table_params(
    search: Annotated[
        str,
        Query(description="Texto libre de búsqueda.", max_length=200),
    ] = "",
    sort: Annotated[
        str | None,
        Query(
            description="Orden, ej. 'total:desc,created_at:asc'.",
            pattern=_SORT_PATTERN,
        ),
    ] = None,
    page_index: Annotated[int, Query(description="Página (base 0).", ge=0)] = 0,
    page_size: Annotated[
        int | None,
        Query(
            description=f"Registros por página (máx. {settings.MAX_PAGE_SIZE}).",
            ge=1,
            le=settings.MAX_PAGE_SIZE,
        ),
    ] = None,
) -> TableParams:
    """Assemble ``TableParams`` from URL query strings."""
    return TableParams(
        search=search,
        sorting=parse_sort_spec(sort),
        page_index=page_index,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
    )


# ---------------------------------------------------------------------------
# Flow helpers
# ---------------------------------------------------------------------------


def fetch_rows(spec: TableSpec[T], gateway: DataGateway) -> list[T]:
    try:
        return spec.fetch(gateway)
    except StoreError:
        logger.exception("Error fetching %s; rendering empty table", spec.collection)
        return []


def build_engine(
    spec: TableSpec[T],
    rows: list[T],
    params: TableParams,
    column_filters: Mapping[str, Any] | None = None,
) -> TableEngine[T]:
    engine = TableEngine(
        spec.columns,
        rows,
        page_size=params.page_size,
        global_filter_fn=spec.global_filter_fn,
        empty_message=spec.empty_message,
        search_placeholder=spec.search_placeholder,
    )
    for column_id, value in (column_filters or {}).items():
        engine.set_filter(column_id, value)
    engine.set_global_search(params.search)
    engine.set_sorting(params.sorting)
    # Last, so the index is clamped against the filtered page count
    engine.set_page(params.page_index)
    return engine


def render_table(
    spec: TableSpec[T],
    gateway: DataGateway,
    params: TableParams,
    serialize: Callable[[T], Any],
    column_filters: Mapping[str, Any] | None = None,
) -> TableResponse:
    """Run the standard list flow and build the response envelope."""
    rows = fetch_rows(spec, gateway)
    view = build_engine(spec, rows, params, column_filters).render()

    actor_role = gateway.actor.role if gateway.actor is not None else None
    logger.debug(
        "render_table %s: fetched=%d total=%d page=%d/%d",
        spec.collection, len(rows), view.total, view.page_index, view.page_count,
    )

    return TableResponse(
        headers=[
            ColumnHeader(
                id=h.id,
                header=h.header,
                sortable=h.sortable,
                sort_direction=h.sort_direction,
            )
            for h in view.headers
        ],
        rows=[serialize(r) for r in view.rows],
        total=view.total,
        page_index=view.page_index,
        page_size=view.page_size,
        page_count=view.page_count,
        show_pagination=view.show_pagination,
        can_previous_page=view.can_previous_page,
        can_next_page=view.can_next_page,
        empty_message=view.empty_message,
        summary=view.summary,
        page_label=view.page_label,
        search_placeholder=view.search_placeholder,
        sorting=[SortEntry(column=c, direction=d) for c, d in view.sorting],
        can_manage=gateway.actor is None or can_manage(actor_role, spec.collection),
    )
