"""Column width heuristic for the PDF table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from .coercion import encode
from .fields import FieldDescriptor, FieldKind

WIDTH_PER_CHAR = 10
CONTENT_WIDTH_PER_CHAR = 8
COMPACT_CONTENT_LIMIT = 720


@dataclass(frozen=True)
class ColumnLayout:
    """Per-column widths (points) plus the compact/wide page verdict."""

    widths: Dict[str, float]
    content_width: float
    has_items: bool
    compact: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compact", self.content_width <= COMPACT_CONTENT_LIMIT)

    def is_flexible(self, name: str) -> bool:
        """True when the column shares the leftover width instead of a fixed size."""

        return not self.has_items or self.widths.get(name, 0) == 0


def estimate_column_widths(fields: Sequence[FieldDescriptor], items: Sequence[Any]) -> ColumnLayout:
    """Estimate column widths from the longest encoded value in each column.

    String fields always get width 0 so they flex with the page.
    """

    widths: Dict[str, float] = {}
    content_width = 0
    for descriptor in fields:
        max_length = 0
        if descriptor.kind is not FieldKind.STRING:
            for item in items:
                max_length = max(max_length, len(encode(descriptor.get(item)).text))
        content_width += max_length * CONTENT_WIDTH_PER_CHAR
        widths[descriptor.name] = max_length * WIDTH_PER_CHAR
    return ColumnLayout(widths=widths, content_width=content_width, has_items=bool(items))
