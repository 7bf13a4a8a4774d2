"""Text clean-up shared by the document writers."""

from __future__ import annotations

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from .log import get_logger

logger = get_logger("utils.text")


def xml_safe(text: str, *, field: str = "") -> str:
    """Strip control characters that OOXML and PDF text cannot carry.

    A warning is logged whenever something is removed, since the written
    document then no longer matches the record exactly.
    """

    cleaned, removed = ILLEGAL_CHARACTERS_RE.subn("", text)
    if removed:
        logger.warning(
            "Removed illegal control characters from text",
            extra={"field": field, "removed": removed},
        )
    return cleaned
