"""Excel input: rebuild typed records from the first worksheet of a workbook."""

# Module responsibilities:
# - Load workbooks from streams, bytes or paths via openpyxl (read-only, cached values).
# - Convert the first worksheet into a Table and hand it to the header-driven importer.
# - Emit structured logs for traceability.

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Any, BinaryIO, List, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .coercion import cell_from_native
from .errors import MalformedDocumentError
from .table import Table, parse_table, table_title
from .utils.log import get_logger

logger = get_logger("excel_reader")

Source = Union[BinaryIO, Path, str]


def read_sheet_table(source: Source, title: str = "") -> Table:
    """Read the first worksheet of a workbook into a Table.

    Every row up to the sheet dimension is kept, blank ones included, since a
    record whose fields are all empty is exported as a blank row.

    Raises:
        MalformedDocumentError: When the payload is not a workbook or has no worksheet.
    """

    try:
        wb = load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
        raise MalformedDocumentError(f"Not a readable Excel workbook: {exc}") from exc

    try:
        if not wb.worksheets:
            raise MalformedDocumentError("Workbook contains no worksheet")
        ws = wb.worksheets[0]
        rows = []
        for raw_values in ws.iter_rows(values_only=True):
            rows.append(tuple(cell_from_native(value) for value in raw_values))
        sheet_name = ws.title
    finally:
        wb.close()

    logger.info(
        "Worksheet loaded",
        extra={"sheet": sheet_name, "rows": len(rows)},
    )
    return Table(title=title or sheet_name, rows=tuple(rows))


def from_excel_stream(stream: BinaryIO, record_type: type, skip_header: bool = True) -> List[Any]:
    """Parse an .xlsx stream into records of *record_type*.

    Args:
        stream: Readable binary stream positioned at the start of the package.
        record_type: Dataclass, pydantic model or registered type to build.
        skip_header: Skip row 0 after using it as the column header.

    Returns:
        One record per data row, in sheet order.

    Raises:
        MalformedDocumentError: When the stream holds no readable worksheet.
        CoercionError: When a cell cannot be converted to its field type.
    """

    table = read_sheet_table(stream, table_title(record_type))
    records = parse_table(table, record_type, skip_header=skip_header)
    logger.info(
        "Records imported",
        extra={"record_type": record_type.__name__, "records": len(records)},
    )
    return records


def from_excel_bytes(data: bytes, record_type: type, skip_header: bool = True) -> List[Any]:
    return from_excel_stream(io.BytesIO(data), record_type, skip_header=skip_header)


def from_excel_file(path: Union[Path, str], record_type: type, skip_header: bool = True) -> List[Any]:
    """Parse an .xlsx file on disk into records of *record_type*.

    Raises:
        FileNotFoundError: When the workbook does not exist.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source workbook not found: {path}")

    logger.info("Reading Excel workbook", extra={"path": str(path)})
    with path.open("rb") as fh:
        return from_excel_stream(fh, record_type, skip_header=skip_header)
