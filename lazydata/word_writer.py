"""Word output: a title paragraph followed by one plain-text table."""

# Module responsibilities:
# - Render records into a python-docx Document (header row + data rows, fixed layout).
# - Expose stream / bytes / file entry points mirroring the Excel writer.

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from docx import Document

from .fields import FieldDescriptor, catalog
from .schema import ExportOptions
from .table import table_title
from .utils.log import get_logger
from .utils.paths import PathLike, atomic_write
from .utils.text import xml_safe

logger = get_logger("word_writer")


def display_text(value: Any, field: str = "") -> str:
    """Plain-text rendering used by the Word and PDF tables."""

    return "" if value is None else xml_safe(str(value), field=field)


def _table_rows(
    items: Iterable[Any], fields: Sequence[FieldDescriptor], include_header: bool
) -> List[List[str]]:
    rows: List[List[str]] = []
    if include_header:
        rows.append([field.name for field in fields])
    for item in items:
        rows.append([display_text(field.get(item), field.name) for field in fields])
    return rows


def build_document(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
):  # type: ignore[no-untyped-def]
    """Assemble a python-docx Document for *items*."""

    options = options or ExportOptions()
    fields = catalog(record_type)
    title = options.title if options.title is not None else table_title(record_type)
    rows = _table_rows(items, fields, options.include_header)

    document = Document()
    document.add_paragraph(title)
    if fields:
        table = document.add_table(rows=0, cols=len(fields))
        table.autofit = False
        for values in rows:
            cells = table.add_row().cells
            for cell, text in zip(cells, values):
                cell.text = text

    logger.info(
        "Word document assembled",
        extra={"title": title, "rows": len(rows), "columns": len(fields)},
    )
    return document


def to_word_stream(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> io.BytesIO:
    """Render *items* as a .docx package in memory, rewound to position 0."""

    stream = io.BytesIO()
    build_document(items, record_type, options=options).save(stream)
    stream.seek(0)
    return stream


def to_word_bytes(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> bytes:
    return to_word_stream(items, record_type, options=options).getvalue()


def save_as_word(
    items: Iterable[Any],
    record_type: type,
    path: PathLike,
    *,
    options: Optional[ExportOptions] = None,
) -> Path:
    """Write *items* to a .docx file at *path*, overwriting any existing file."""

    document = build_document(items, record_type, options=options)
    target = atomic_write(path, document.save)
    logger.info("Word document saved", extra={"output": str(target)})
    return target
