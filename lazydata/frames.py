"""pandas interop: records <-> DataFrame through the same table mapping."""

from __future__ import annotations

from typing import Any, Iterable, List

import pandas as pd

from .coercion import Cell, CellKind, encode
from .fields import catalog
from .table import Table, parse_table, table_title


def to_dataframe(items: Iterable[Any], record_type: type) -> pd.DataFrame:
    """Return a DataFrame with one column per field, in declaration order."""

    fields = catalog(record_type)
    columns = [field.name for field in fields]
    data = [[field.get(item) for field in fields] for item in items]
    return pd.DataFrame(data, columns=columns)


def _frame_cell(value: Any) -> Cell:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return Cell(CellKind.EMPTY)
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    return encode(value)


def from_dataframe(df: pd.DataFrame, record_type: type) -> List[Any]:
    """Build records from a DataFrame, matching columns to fields by name.

    NaN/NaT cells count as empty and decode to the field's zero value.
    """

    header = tuple(Cell.header(str(column)) for column in df.columns)
    body = df.astype(object)
    rows = [header]
    for values in body.itertuples(index=False, name=None):
        rows.append(tuple(_frame_cell(value) for value in values))
    table = Table(title=table_title(record_type), rows=tuple(rows))
    return parse_table(table, record_type, skip_header=True)
