"""`lazydata` exports record collections to Excel/Word/PDF and reads Excel back into records."""

# Module responsibilities:
# - Re-export the document entry points, table mapping and coercion helpers as a stable API surface.
# - Provide the package version.

from __future__ import annotations

from .coercion import Cell, CellKind, decode, encode, from_serial, to_serial
from .config import load_options
from .errors import (
    CoercionError,
    ConfigError,
    LazyDataError,
    MalformedDocumentError,
    UnsupportedFieldError,
)
from .excel_reader import from_excel_bytes, from_excel_file, from_excel_stream
from .excel_writer import save_as_excel, to_excel_bytes, to_excel_stream
from .fields import FieldDescriptor, FieldKind, catalog, register_record, unregister_record
from .frames import from_dataframe, to_dataframe
from .layout import ColumnLayout, estimate_column_widths
from .pdf_writer import save_as_pdf, to_pdf_bytes, to_pdf_stream
from .pluralize import pluralize
from .schema import ExportOptions, PdfOptions
from .table import Table, build_table, parse_table
from .word_writer import save_as_word, to_word_bytes, to_word_stream

__all__ = [
    "Cell",
    "CellKind",
    "ColumnLayout",
    "CoercionError",
    "ConfigError",
    "ExportOptions",
    "FieldDescriptor",
    "FieldKind",
    "LazyDataError",
    "MalformedDocumentError",
    "PdfOptions",
    "Table",
    "UnsupportedFieldError",
    "build_table",
    "catalog",
    "decode",
    "encode",
    "estimate_column_widths",
    "from_dataframe",
    "from_excel_bytes",
    "from_excel_file",
    "from_excel_stream",
    "from_serial",
    "load_options",
    "parse_table",
    "pluralize",
    "register_record",
    "save_as_excel",
    "save_as_pdf",
    "save_as_word",
    "to_dataframe",
    "to_excel_bytes",
    "to_excel_stream",
    "to_pdf_bytes",
    "to_pdf_stream",
    "to_serial",
    "to_word_bytes",
    "to_word_stream",
    "unregister_record",
]

__version__ = "0.1.0"
