"""Value coercion between typed field values and tagged table cells."""

# Module responsibilities:
# - Encode field values into tagged Cells with a culture-invariant textual form.
# - Decode cell text back into the declared field type, failing loudly on bad input.
# - Convert datetimes to and from spreadsheet day-count serials (epoch 1899-12-30).

from __future__ import annotations

import datetime as dt
import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from .errors import CoercionError, UnsupportedFieldError
from .fields import FieldDescriptor, FieldKind

SERIAL_EPOCH = dt.datetime(1899, 12, 30)
MS_PER_DAY = 86_400_000
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_INTEGRAL_TEXT = re.compile(r"([+-]?[0-9]+)\.0*")


class CellKind(str, Enum):
    """Type tag carried by every table cell."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    STRING = "string"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single tagged value within a table."""

    kind: CellKind
    value: Any = None

    @property
    def text(self) -> str:
        """Canonical textual form; DATE cells render as day-count serials."""

        if self.kind is CellKind.EMPTY or self.value is None:
            return ""
        if self.kind is CellKind.INTEGER:
            return str(int(self.value))
        if self.kind is CellKind.FLOAT:
            return format_number(self.value)
        if self.kind is CellKind.BOOLEAN:
            return "1" if self.value else "0"
        if self.kind is CellKind.DATE:
            return format_number(to_serial(self.value))
        return str(self.value)

    @classmethod
    def header(cls, name: str) -> "Cell":
        return cls(CellKind.STRING, name)


EMPTY_CELL = Cell(CellKind.EMPTY)


def format_number(value: Any) -> str:
    """Format a real number with ``.`` as radix point and no exponent or grouping."""

    if isinstance(value, Decimal):
        text = format(value, "f")
    else:
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            return repr(number)
        if number.is_integer() and abs(number) < 1e16:
            return str(int(number))
        text = repr(number)
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def to_serial(value: dt.date) -> float:
    """Return the day-count serial of a date or datetime.

    Times of day become the fractional part. Before the epoch the integer part
    counts days backwards while the fraction still measures time forward from
    midnight, so 1899-12-29 06:00 is ``-1.25``.
    """

    if not isinstance(value, dt.datetime):
        value = dt.datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    delta = value - SERIAL_EPOCH
    total_ms = (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds / 1000
    if total_ms >= 0:
        return total_ms / MS_PER_DAY
    fraction_ms = total_ms % MS_PER_DAY
    days = (total_ms - fraction_ms) / MS_PER_DAY
    return days - fraction_ms / MS_PER_DAY


def from_serial(serial: float) -> dt.datetime:
    """Inverse of :func:`to_serial`, rounded to the nearest millisecond."""

    if math.isnan(serial) or math.isinf(serial):
        raise ValueError(f"Invalid day-count serial: {serial}")
    days = math.trunc(serial)
    fraction_ms = round(abs(serial - days) * MS_PER_DAY)
    return SERIAL_EPOCH + dt.timedelta(days=days, milliseconds=fraction_ms)


def encode(value: Any) -> Cell:
    """Tag a field value for a table cell."""

    if value is None:
        return EMPTY_CELL
    if isinstance(value, bool):
        return Cell(CellKind.BOOLEAN, value)
    if isinstance(value, numbers.Integral) and not isinstance(value, Enum):
        return Cell(CellKind.INTEGER, int(value))
    if isinstance(value, Decimal):
        return Cell(CellKind.FLOAT, value)
    if isinstance(value, numbers.Real) and not isinstance(value, Enum):
        return Cell(CellKind.FLOAT, float(value))
    if isinstance(value, dt.date):
        return Cell(CellKind.DATE, value)
    return Cell(CellKind.STRING, str(value))


def _parse_integer(text: str, field: FieldDescriptor) -> int:
    if _INTEGER_TEXT.fullmatch(text):
        return int(text)
    # Spreadsheets hand back whole numbers as "3.0"; accept them when integral.
    whole = _INTEGRAL_TEXT.fullmatch(text)
    if whole:
        return int(whole.group(1))
    raise _coercion_error(text, field)


def _parse_decimal(text: str, field: FieldDescriptor) -> Decimal:
    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise _coercion_error(text, field) from exc
    if number.is_nan():
        raise _coercion_error(text, field)
    return number


def _coercion_error(text: str, field: FieldDescriptor) -> CoercionError:
    return CoercionError(
        f"Cannot convert {text!r} to {field.kind.value} for field '{field.name}'",
        field=field.name,
        text=text,
    )


def decode(text: str, field: FieldDescriptor) -> Any:
    """Convert cell text into a value of the field's declared type.

    Raises:
        CoercionError: When a numeric or date cell does not parse.
        UnsupportedFieldError: When the field type has no defined coercion.
    """

    if text is None or not text.strip():
        return field.zero()
    stripped = text.strip()

    if field.kind is FieldKind.STRING:
        return text
    if field.kind is FieldKind.BOOLEAN:
        return stripped == "1" or stripped.lower() == "true"
    if field.kind is FieldKind.INTEGER:
        return _parse_integer(stripped, field)
    if field.kind is FieldKind.FLOAT:
        number = _parse_decimal(stripped, field)
        if isinstance(field.python_type, type) and issubclass(field.python_type, Decimal):
            return number
        return float(number)
    if field.kind is FieldKind.DATE:
        try:
            moment = from_serial(float(_parse_decimal(stripped, field)))
        except (ValueError, OverflowError) as exc:
            raise _coercion_error(text, field) from exc
        if isinstance(field.python_type, type) and not issubclass(field.python_type, dt.datetime):
            return moment.date()
        return moment
    raise UnsupportedFieldError(
        f"Field '{field.name}' has type {field.python_type!r}, which cannot be read from a cell"
    )


def cell_from_native(raw: Any) -> Cell:
    """Tag a value read back from a document; bare times sit on the epoch day."""

    if isinstance(raw, dt.time):
        raw = dt.datetime.combine(SERIAL_EPOCH.date(), raw)
    return encode(raw)


def decode_value(raw: Any, field: FieldDescriptor) -> Any:
    """Decode a native value read from a document (number, bool, datetime, str or None)."""

    return decode(cell_from_native(raw).text, field)
