"""Excel output: one worksheet holding the header and one row per record."""

# Module responsibilities:
# - Serialize a Table into an openpyxl workbook with type-tagged cells.
# - Expose stream / bytes / file entry points; file writes replace the target atomically.

from __future__ import annotations

import datetime as dt
import io
import re
from pathlib import Path
from typing import Any, Iterable, Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .coercion import Cell, CellKind
from .schema import ExportOptions
from .table import Table, build_export_table
from .utils.log import get_logger
from .utils.paths import PathLike, atomic_write
from .utils.text import xml_safe

logger = get_logger("excel_writer")

MAX_SHEET_TITLE = 31
_INVALID_TITLE_CHARS = re.compile(r"[\\*?:/\[\]]")


def sheet_title(title: str) -> str:
    """Trim a title to a name Excel accepts for a worksheet."""

    cleaned = _INVALID_TITLE_CHARS.sub("", title).strip("'").strip()
    return cleaned[:MAX_SHEET_TITLE] or "Sheet1"


def _native_value(cell: Cell, field: str = "") -> Any:
    if cell.kind is CellKind.EMPTY:
        return None
    if cell.kind is CellKind.DATE:
        value = cell.value
        if isinstance(value, dt.datetime) and value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value
    if cell.kind is CellKind.STRING:
        return xml_safe(cell.text, field=field)
    return cell.value


def _write_rows(ws: Worksheet, table: Table) -> int:
    names = table.header
    row_idx = 1
    for row in table.rows:
        for col_idx, cell in enumerate(row, start=1):
            field = names[col_idx - 1] if col_idx <= len(names) else ""
            target = ws.cell(row=row_idx, column=col_idx, value=_native_value(cell, field))
            if cell.kind is CellKind.STRING:
                # Text such as "=SUM(A1)" stays literal text, never a formula.
                target.data_type = "s"
        row_idx += 1
    return row_idx - 1


def write_workbook(table: Table) -> Workbook:
    """Build an in-memory workbook for *table*."""

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title(table.title)
    written = _write_rows(ws, table)
    logger.info(
        "Workbook assembled",
        extra={"sheet": ws.title, "rows": written, "columns": table.column_count},
    )
    return wb


def to_excel_stream(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> io.BytesIO:
    """Render *items* as an .xlsx package in memory, rewound to position 0."""

    wb = write_workbook(build_export_table(items, record_type, options))
    stream = io.BytesIO()
    try:
        wb.save(stream)
    finally:
        wb.close()
    stream.seek(0)
    return stream


def to_excel_bytes(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> bytes:
    return to_excel_stream(items, record_type, options=options).getvalue()


def save_as_excel(
    items: Iterable[Any],
    record_type: type,
    path: PathLike,
    *,
    options: Optional[ExportOptions] = None,
) -> Path:
    """Write *items* to an .xlsx file at *path*, overwriting any existing file.

    Returns:
        The absolute path written.
    """

    wb = write_workbook(build_export_table(items, record_type, options))
    try:
        target = atomic_write(path, wb.save)
    finally:
        wb.close()
    logger.info("Excel workbook saved", extra={"output": str(target)})
    return target
