"""Custom exceptions used across lazydata."""

from __future__ import annotations

from typing import Optional


class LazyDataError(Exception):
    """Base error for the library."""


class ConfigError(LazyDataError):
    """Export options file is missing keys or structurally invalid."""


class MalformedDocumentError(LazyDataError):
    """Raised when an input document has no readable worksheet or table."""


class UnsupportedFieldError(LazyDataError, TypeError):
    """Raised when a record type or field type has no defined coercion."""


class CoercionError(LazyDataError, ValueError):
    """Raised when a cell's text cannot be parsed into the target field type.

    ``row`` and ``column`` are 0-based table coordinates and are filled in by
    the table importer; they stay ``None`` when the value was decoded on its own.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        text: Optional[str] = None,
        row: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.text = text
        self.row = row
        self.column = column

    def at(self, row: int, column: int) -> "CoercionError":
        """Return a copy of this error annotated with its table position."""

        message = f"{self.args[0]} (row {row}, column {column})"
        located = CoercionError(
            message, field=self.field, text=self.text, row=row, column=column
        )
        return located
