"""
Searchable table engine shared by every list page of the console.

``TableEngine`` takes an arbitrary row collection plus ``ColumnDef``
definitions and produces a deterministic window of visible rows from the
current sort, filter, and pagination state.  It never inspects business
fields directly: everything it knows about a row comes from the column
accessors or from the caller-supplied global search predicate.

Pipeline (recomputed from scratch on every read)::

    rows -> column filters -> global search -> sort -> page slice

Design notes
------------
- Sorting is stable and multi-pass (least significant column first), so
  ties keep the order they had in the filtered set.
- ``None`` values always sort last, whatever the direction.
- Text comparison, both for sorting and for the default substring
  predicate, is case-insensitive and accent-insensitive (``fold_text``).
- Changing a filter, the global search, or the page size resets the page
  index to 0.  Replacing the rows (``set_rows``) does not.
"""

from __future__ import annotations

import logging
import math
import unicodedata
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from app.utils.constants import EMPTY_MESSAGE, SEARCH_PLACEHOLDER

logger = logging.getLogger(__name__)

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]
SortState = list[tuple[str, SortDirection]]

_DIRECTIONS: tuple[str, ...] = ("asc", "desc")

# none -> asc -> desc -> none
_TOGGLE_CYCLE: dict[str | None, str | None] = {
    None: "asc",
    "asc": "desc",
    "desc": None,
}


# ---------------------------------------------------------------------------
# Text helpers and predicates
# ---------------------------------------------------------------------------


def fold_text(value: Any) -> str:
    """Return *value* as lower-case text with diacritics removed.

    ``"María"`` and ``"MARIA"`` both fold to ``"maria"``.  ``None`` folds to
    the empty string.
    """
    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFKD", str(value))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def includes_text(cell: Any, needle: Any) -> bool:
    """Default column predicate: folded substring match."""
    return fold_text(needle) in fold_text(cell)


def equals_value(cell: Any, needle: Any) -> bool:
    """Exact-match predicate for enumerated columns (status, role, material)."""
    return cell == needle


def text_search(*accessors: Callable[[Any], Any]) -> Callable[[Any, str], bool]:
    """Build a global search predicate over several row fields.

    Page controllers use this to reproduce their own multi-field search
    (e.g. first name OR last name OR CI) instead of the per-column default.

    Example::

        search = text_search(
            lambda c: c.first_name,
            lambda c: c.last_name,
            lambda c: c.ci,
        )
    """

    def _predicate(row: Any, text: str) -> bool:
        needle = fold_text(text)
        return any(needle in fold_text(accessor(row)) for accessor in accessors)

    return _predicate


def parse_sort_spec(spec: str | None) -> SortState:
    """Parse ``"total:desc,created_at"`` into ``[("total", "desc"), ("created_at", "asc")]``.

    Raises:
        ValueError: If a direction other than ``asc`` / ``desc`` is given.
    """
    sorting: SortState = []
    if not spec:
        return sorting
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        column_id, _, direction = part.partition(":")
        direction = direction or "asc"
        if direction not in _DIRECTIONS:
            raise ValueError(f"Dirección de orden inválida: '{direction}'")
        sorting.append((column_id, direction))  # type: ignore[arg-type]
    return sorting


def _sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return fold_text(value)
    if isinstance(value, bool):
        return int(value)
    return value


# ---------------------------------------------------------------------------
# Column and view types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnDef(Generic[T]):
    """Declarative mapping from a row to one displayed cell.

    Attributes:
        id: Column identifier; unique within one table.
        header: Header label shown to the user.
        accessor: Extraction function.  When omitted the value is read from
            the row by ``id`` (mapping key or attribute).
        sortable: Whether sort toggles are honoured.
        filterable: Whether column filters and the default global search
            look at this column.
        filter_fn: ``(cell_value, filter_value) -> bool``.
    """

    id: str
    header: str
    accessor: Callable[[T], Any] | None = None
    sortable: bool = True
    filterable: bool = True
    filter_fn: Callable[[Any, Any], bool] = includes_text

    def value(self, row: T) -> Any:
        if self.accessor is not None:
            return self.accessor(row)
        if isinstance(row, Mapping):
            return row.get(self.id)
        return getattr(row, self.id, None)


@dataclass(frozen=True)
class HeaderView:
    id: str
    header: str
    sortable: bool
    sort_direction: SortDirection | None


@dataclass(frozen=True)
class TableView(Generic[T]):
    """Snapshot of what the table shows right now.

    ``empty_message`` is only set once loading has finished and no row
    matches the search and filters; ``summary`` and ``page_label`` only when
    pagination controls are shown (more than one page).
    """

    headers: list[HeaderView]
    rows: list[T]
    total: int
    page_index: int
    page_size: int
    page_count: int
    loading: bool
    show_pagination: bool
    can_previous_page: bool
    can_next_page: bool
    search_placeholder: str
    sorting: SortState = field(default_factory=list)
    empty_message: str | None = None
    summary: str | None = None
    page_label: str | None = None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class TableEngine(Generic[T]):
    """Sort / filter / paginate an in-memory row collection.

    Args:
        columns: Column definitions; ids must be unique.
        rows: Initial row collection (copied).
        page_size: Rows per page, must be positive.
        global_filter_fn: Optional ``(row, text) -> bool`` used for the free
            text search.  Defaults to a folded substring match over every
            filterable column.
        empty_message: Message shown when nothing matches.
        search_placeholder: Placeholder for the search box.
        loading: Initial loading flag.

    Raises:
        ValueError: Duplicate column ids or a non-positive page size.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDef[T]],
        rows: Iterable[T] = (),
        *,
        page_size: int = 10,
        global_filter_fn: Callable[[T, str], bool] | None = None,
        empty_message: str = EMPTY_MESSAGE,
        search_placeholder: str = SEARCH_PLACEHOLDER,
        loading: bool = False,
    ) -> None:
        ids = [c.id for c in columns]
        duplicated = sorted({i for i in ids if ids.count(i) > 1})
        if duplicated:
            raise ValueError(f"Columnas duplicadas: {duplicated}")
        if page_size <= 0:
            raise ValueError("page_size debe ser mayor que 0")

        self._columns: dict[str, ColumnDef[T]] = {c.id: c for c in columns}
        self._rows: list[T] = list(rows)
        self._sorting: SortState = []
        self._column_filters: dict[str, Any] = {}
        self._global_filter: str = ""
        self._global_filter_fn = global_filter_fn
        self._page_index = 0
        self._page_size = page_size
        self.empty_message = empty_message
        self.search_placeholder = search_placeholder
        self.loading = loading

    # -----------------------------------------------------------------------
    # State accessors
    # -----------------------------------------------------------------------

    @property
    def columns(self) -> list[ColumnDef[T]]:
        return list(self._columns.values())

    @property
    def rows(self) -> list[T]:
        return list(self._rows)

    @property
    def sorting(self) -> SortState:
        return list(self._sorting)

    @property
    def column_filters(self) -> dict[str, Any]:
        return dict(self._column_filters)

    @property
    def global_filter(self) -> str:
        return self._global_filter

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_size(self) -> int:
        return self._page_size

    def set_rows(self, rows: Iterable[T]) -> None:
        """Replace the row collection, keeping sort, filters and page index."""
        self._rows = list(rows)

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    # -----------------------------------------------------------------------
    # Sorting
    # -----------------------------------------------------------------------

    def get_sort_direction(self, column_id: str) -> SortDirection | None:
        for sorted_id, direction in self._sorting:
            if sorted_id == column_id:
                return direction
        return None

    def set_sort(
        self,
        column_id: str,
        direction: SortDirection | None,
        *,
        multi: bool = False,
    ) -> None:
        """Set (or clear, with ``None``) the sort direction of one column.

        Without ``multi`` any other column's sort is dropped.  Unknown and
        non-sortable columns are ignored.

        Raises:
            ValueError: If *direction* is not ``"asc"``, ``"desc"`` or ``None``.
        """
        column = self._columns.get(column_id)
        if column is None or not column.sortable:
            logger.debug("set_sort ignored for column '%s'", column_id)
            return
        if direction is not None and direction not in _DIRECTIONS:
            raise ValueError(f"Dirección de orden inválida: '{direction}'")

        if multi:
            sorting = list(self._sorting)
        else:
            sorting = [entry for entry in self._sorting if entry[0] == column_id]

        position = next(
            (i for i, (sorted_id, _) in enumerate(sorting) if sorted_id == column_id),
            None,
        )
        if direction is None:
            if position is not None:
                del sorting[position]
        elif position is None:
            sorting.append((column_id, direction))
        else:
            sorting[position] = (column_id, direction)
        self._sorting = sorting

    def toggle_sort(self, column_id: str, *, multi: bool = False) -> None:
        """Advance one column through none -> asc -> desc -> none."""
        next_direction = _TOGGLE_CYCLE[self.get_sort_direction(column_id)]
        self.set_sort(column_id, next_direction, multi=multi)  # type: ignore[arg-type]

    def set_sorting(self, sorting: Iterable[tuple[str, SortDirection]]) -> None:
        """Replace the whole sort state; ineligible columns are skipped."""
        self._sorting = []
        for column_id, direction in sorting:
            self.set_sort(column_id, direction, multi=True)

    def clear_sort(self) -> None:
        self._sorting = []

    # -----------------------------------------------------------------------
    # Filtering
    # -----------------------------------------------------------------------

    def set_filter(self, column_id: str, value: Any) -> None:
        """Set a column filter; ``None`` or ``""`` removes it."""
        column = self._columns.get(column_id)
        if column is None or not column.filterable:
            logger.debug("set_filter ignored for column '%s'", column_id)
            return
        if value is None or value == "":
            self._column_filters.pop(column_id, None)
        else:
            self._column_filters[column_id] = value
        self._page_index = 0

    def set_global_search(self, text: str | None) -> None:
        self._global_filter = text or ""
        self._page_index = 0

    def _default_global_filter(self, row: T, text: str) -> bool:
        needle = fold_text(text)
        return any(
            needle in fold_text(column.value(row))
            for column in self._columns.values()
            if column.filterable
        )

    def get_filtered_rows(self) -> list[T]:
        rows = self._rows
        for column_id, value in self._column_filters.items():
            column = self._columns[column_id]
            rows = [r for r in rows if column.filter_fn(column.value(r), value)]
        if self._global_filter:
            predicate = self._global_filter_fn or self._default_global_filter
            rows = [r for r in rows if predicate(r, self._global_filter)]
        return rows

    def get_sorted_rows(self) -> list[T]:
        """Filtered rows in sort order (insertion order when unsorted)."""
        rows = self.get_filtered_rows()
        for column_id, direction in reversed(self._sorting):
            column = self._columns[column_id]
            present = [r for r in rows if column.value(r) is not None]
            missing = [r for r in rows if column.value(r) is None]
            present.sort(
                key=lambda r: _sort_key(column.value(r)),
                reverse=direction == "desc",
            )
            rows = present + missing
        return rows

    # -----------------------------------------------------------------------
    # Pagination
    # -----------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.get_filtered_rows()) / self._page_size)

    def can_previous_page(self) -> bool:
        return self._page_index > 0

    def can_next_page(self) -> bool:
        return self._page_index < self.page_count - 1

    def set_page(self, index: int) -> None:
        """Move to *index*, clamped to ``[0, page_count - 1]``."""
        last = max(self.page_count - 1, 0)
        self._page_index = min(max(index, 0), last)

    def next_page(self) -> None:
        if self.can_next_page():
            self._page_index += 1

    def previous_page(self) -> None:
        if self.can_previous_page():
            self._page_index -= 1

    def first_page(self) -> None:
        self._page_index = 0

    def last_page(self) -> None:
        self.set_page(self.page_count - 1)

    def set_page_size(self, size: int) -> None:
        if size <= 0:
            raise ValueError("page_size debe ser mayor que 0")
        self._page_size = size
        self._page_index = 0

    def get_visible_rows(self) -> list[T]:
        """Rows of the current page; empty when the page is out of range."""
        start = self._page_index * self._page_size
        return self.get_sorted_rows()[start:start + self._page_size]

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------

    def row_cells(self, row: T) -> dict[str, Any]:
        return {column_id: column.value(row) for column_id, column in self._columns.items()}

    def render(self) -> TableView[T]:
        headers = [
            HeaderView(
                id=c.id,
                header=c.header,
                sortable=c.sortable,
                sort_direction=self.get_sort_direction(c.id),
            )
            for c in self._columns.values()
        ]

        if self.loading:
            return TableView(
                headers=headers,
                rows=[],
                total=0,
                page_index=self._page_index,
                page_size=self._page_size,
                page_count=0,
                loading=True,
                show_pagination=False,
                can_previous_page=False,
                can_next_page=False,
                search_placeholder=self.search_placeholder,
                sorting=self.sorting,
            )

        total = len(self.get_filtered_rows())
        page_count = math.ceil(total / self._page_size)
        visible = self.get_visible_rows()
        show_pagination = page_count > 1

        summary = page_label = None
        if show_pagination:
            range_start = self._page_index * self._page_size + 1
            range_end = min((self._page_index + 1) * self._page_size, total)
            summary = f"Mostrando {range_start} a {range_end} de {total} resultados"
            page_label = f"Página {self._page_index + 1} de {page_count}"

        return TableView(
            headers=headers,
            rows=visible,
            total=total,
            page_index=self._page_index,
            page_size=self._page_size,
            page_count=page_count,
            loading=False,
            show_pagination=show_pagination,
            can_previous_page=self._page_index > 0,
            can_next_page=self._page_index < page_count - 1,
            search_placeholder=self.search_placeholder,
            sorting=self.sorting,
            empty_message=self.empty_message if total == 0 else None,
            summary=summary,
            page_label=page_label,
        )
