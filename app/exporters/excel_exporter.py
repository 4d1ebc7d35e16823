"""
Excel export helper wrapping xlsxwriter.

``ExcelExporter`` builds a single-sheet workbook in memory: a branded
title block, the active search / filter labels, a record counter and the
table itself.  The caller streams the returned bytes.

Usage example::

    exporter = ExcelExporter(title="Contratos", filters={"Estado": "Encargado"})
    exporter.add_header()
    exporter.add_summary({"Registros": 42})
    exporter.add_data_table(headers, rows, numeric_cols={6})
    file_bytes = exporter.finalize()
"""

from __future__ import annotations

import io
from datetime import date, datetime, timezone
from typing import Any, Sequence

import xlsxwriter

from app.config import get_settings

_COLOR_PRIMARY = "#0E7490"
_COLOR_SUBHEADER_BG = "#164E63"
_COLOR_WHITE = "#FFFFFF"
_COLOR_LIGHT_GREY = "#F3F4F6"
_COLOR_BORDER = "#E5E7EB"

_MAX_COL_WIDTH = 60
_MIN_COL_WIDTH = 8


def _cell_value(value: Any) -> Any:
    """Coerce ORM values to something xlsxwriter writes natively."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Sí" if value else "No"
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, (int, float, str)):
        return value
    return str(value)


class ExcelExporter:
    """Stateful workbook builder for console table exports.

    Args:
        title: Table title, e.g. ``"Clientes"``.
        filters: Applied filter labels shown under the title.
        sheet_name: Worksheet tab name.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        sheet_name: str = "Datos",
    ) -> None:
        self._title = title
        self._filters = filters or {}

        self._buffer = io.BytesIO()
        self._workbook = xlsxwriter.Workbook(self._buffer, {"in_memory": True})
        self._worksheet = self._workbook.add_worksheet(sheet_name)

        self._current_row = 0
        self._num_cols = 1
        self._formats = self._build_formats()

    def _build_formats(self) -> dict[str, Any]:
        wb = self._workbook
        base_cell = {
            "font_size": 9,
            "font_color": "#111827",
            "valign": "vcenter",
            "border": 1,
            "border_color": _COLOR_BORDER,
        }
        return {
            "title": wb.add_format({
                "bold": True,
                "font_size": 16,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_PRIMARY,
                "align": "center",
                "valign": "vcenter",
            }),
            "subtitle": wb.add_format({
                "font_size": 10,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SUBHEADER_BG,
                "align": "center",
                "valign": "vcenter",
            }),
            "filter_key": wb.add_format({
                "bold": True,
                "font_size": 9,
                "bg_color": "#E5E7EB",
                "align": "right",
            }),
            "filter_value": wb.add_format({"font_size": 9, "bg_color": "#F9FAFB"}),
            "summary_label": wb.add_format({
                "bold": True,
                "font_size": 10,
                "bg_color": "#ECFEFF",
                "align": "center",
                "border": 1,
                "border_color": "#A5F3FC",
            }),
            "summary_value": wb.add_format({
                "bold": True,
                "font_size": 12,
                "font_color": _COLOR_PRIMARY,
                "bg_color": "#ECFEFF",
                "align": "center",
                "border": 1,
                "border_color": "#A5F3FC",
            }),
            "col_header": wb.add_format({
                "bold": True,
                "font_size": 10,
                "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SUBHEADER_BG,
                "align": "center",
                "valign": "vcenter",
                "border": 1,
                "text_wrap": True,
            }),
            "text": wb.add_format({**base_cell, "bg_color": _COLOR_WHITE}),
            "text_alt": wb.add_format({**base_cell, "bg_color": _COLOR_LIGHT_GREY}),
            "number": wb.add_format({
                **base_cell, "bg_color": _COLOR_WHITE, "align": "right", "num_format": "#,##0.00",
            }),
            "number_alt": wb.add_format({
                **base_cell, "bg_color": _COLOR_LIGHT_GREY, "align": "right", "num_format": "#,##0.00",
            }),
        }

    def add_header(self) -> "ExcelExporter":
        """Write the title, generation timestamp and one row per filter."""
        ws = self._worksheet
        last_col = max(self._num_cols, 6) - 1

        ws.set_row(self._current_row, 32)
        ws.merge_range(
            self._current_row, 0, self._current_row, last_col,
            f"{get_settings().APP_NAME}: {self._title}",
            self._formats["title"],
        )
        self._current_row += 1

        generated = datetime.now(timezone.utc).strftime("%d/%m/%Y %H:%M UTC")
        ws.merge_range(
            self._current_row, 0, self._current_row, last_col,
            f"Generado: {generated}",
            self._formats["subtitle"],
        )
        self._current_row += 1

        for key, value in self._filters.items():
            ws.write(self._current_row, 0, key, self._formats["filter_key"])
            ws.merge_range(
                self._current_row, 1, self._current_row, last_col,
                value,
                self._formats["filter_value"],
            )
            self._current_row += 1

        self._current_row += 1
        return self

    def add_summary(self, values: dict[str, Any]) -> "ExcelExporter":
        """Write labelled counters side by side (label row above value row)."""
        ws = self._worksheet
        for col, (label, value) in enumerate(values.items()):
            ws.write(self._current_row, col, label, self._formats["summary_label"])
            ws.write(self._current_row + 1, col, value, self._formats["summary_value"])
        self._current_row += 3
        return self

    def add_data_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        numeric_cols: set[int] | None = None,
    ) -> "ExcelExporter":
        """Write the table with alternating row shading and auto-sized columns.

        Args:
            headers: Column header labels.
            rows: Cell values, one sequence per row.
            numeric_cols: Zero-based indices written with the money format.
        """
        ws = self._worksheet
        numeric_cols = numeric_cols or set()
        self._num_cols = len(headers)

        widths = [len(str(h)) for h in headers]
        for col, header in enumerate(headers):
            ws.write(self._current_row, col, header, self._formats["col_header"])
        self._current_row += 1

        for index, row in enumerate(rows):
            alt = "_alt" if index % 2 == 1 else ""
            for col, raw in enumerate(row):
                value = _cell_value(raw)
                kind = "number" if col in numeric_cols and value != "" else "text"
                ws.write(self._current_row, col, value, self._formats[kind + alt])
                widths[col] = min(_MAX_COL_WIDTH, max(widths[col], len(str(value))))
            self._current_row += 1

        for col, width in enumerate(widths):
            ws.set_column(col, col, max(width + 2, _MIN_COL_WIDTH))
        return self

    def finalize(self) -> bytes:
        """Close the workbook and return the ``.xlsx`` bytes."""
        self._workbook.close()
        self._buffer.seek(0)
        return self._buffer.read()
