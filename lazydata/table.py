"""Tabular export/import: records <-> header + data rows of tagged cells."""

# Module responsibilities:
# - Assemble a Table (header row + one row per record) from a typed collection.
# - Map a Table's header row onto record fields by name and rebuild typed records.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .coercion import Cell, decode, encode
from .errors import CoercionError
from .fields import FieldDescriptor, build_record, catalog
from .pluralize import pluralize
from .schema import ExportOptions

Row = Tuple[Cell, ...]


@dataclass(frozen=True)
class Table:
    """Ordered rows of tagged cells; row 0 is the header unless suppressed."""

    title: str
    rows: Tuple[Row, ...]
    has_header: bool = True

    @property
    def header(self) -> Tuple[str, ...]:
        if not self.has_header or not self.rows:
            return ()
        return tuple(cell.text for cell in self.rows[0])

    @property
    def data_rows(self) -> Tuple[Row, ...]:
        return self.rows[1:] if self.has_header else self.rows

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def texts(self) -> List[List[str]]:
        """Textual form of every row, header included."""

        return [[cell.text for cell in row] for row in self.rows]


def table_title(record_type: type) -> str:
    return pluralize(record_type.__name__)


def build_table(
    items: Iterable[Any],
    record_type: type,
    *,
    include_header: bool = True,
    title: Optional[str] = None,
) -> Table:
    """Snapshot *items* into a Table whose columns follow *record_type*'s fields.

    Args:
        items: Records to export, in output order.
        record_type: Type whose field catalog defines the columns.
        include_header: Emit the field-name header as row 0.
        title: Sheet/document title; defaults to the pluralized type name.

    Returns:
        A Table with ``len(items) + 1`` rows when the header is included.
    """

    fields = catalog(record_type)
    rows: List[Row] = []
    if include_header:
        rows.append(tuple(Cell.header(field.name) for field in fields))
    for item in items:
        rows.append(tuple(encode(field.get(item)) for field in fields))
    return Table(
        title=title if title is not None else table_title(record_type),
        rows=tuple(rows),
        has_header=include_header,
    )


def build_export_table(
    items: Iterable[Any], record_type: type, options: Optional[ExportOptions] = None
) -> Table:
    """build_table() driven by the writers' ExportOptions."""

    options = options or ExportOptions()
    return build_table(
        items, record_type, include_header=options.include_header, title=options.title
    )


def header_mapping(
    header: Sequence[Optional[str]], fields: Sequence[FieldDescriptor]
) -> Dict[int, FieldDescriptor]:
    """Map column indexes to fields by case-insensitive header name.

    Columns with no matching field are left out; the first field whose name
    matches wins.
    """

    mapping: Dict[int, FieldDescriptor] = {}
    for index, text in enumerate(header):
        if text is None:
            continue
        wanted = text.strip().casefold()
        if not wanted:
            continue
        for field in fields:
            if field.name.casefold() == wanted:
                mapping[index] = field
                break
    return mapping


def parse_table(table: Table, record_type: type, skip_header: bool = True) -> List[Any]:
    """Rebuild typed records from a Table.

    Row 0 is always read as the header. With ``skip_header`` False it is also
    decoded as a data row.

    Raises:
        CoercionError: On the first cell that cannot be decoded; nothing is
            returned for the rows already processed.
    """

    fields = catalog(record_type)
    if not table.rows:
        return []

    mapping = header_mapping([cell.text for cell in table.rows[0]], fields)
    start = 1 if skip_header else 0

    records: List[Any] = []
    for row_index in range(start, len(table.rows)):
        row = table.rows[row_index]
        values: Dict[str, Any] = {}
        for column, field in mapping.items():
            text = row[column].text if column < len(row) else ""
            try:
                values[field.name] = decode(text, field)
            except CoercionError as exc:
                raise exc.at(row_index, column) from exc
        records.append(build_record(record_type, values, fields))
    return records
