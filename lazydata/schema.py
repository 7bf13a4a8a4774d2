"""Typed option containers for document export."""

# Module responsibilities:
# - Provide strongly typed configuration containers for export behaviours.
# - Define the YAML payload schema that load_options() validates against.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NotRequired, Optional, TypedDict


class PdfConfig(TypedDict, total=False):
    """Schema for the ``pdf`` section of an export options YAML payload."""

    margin_horizontal: float
    margin_vertical: float
    title_font_size: float
    header_font_size: float
    cell_font_size: float
    footer_font_size: float
    apply_page_size: bool


class ExportConfig(TypedDict):
    """Schema for export options YAML payloads."""

    title: NotRequired[str]
    include_header: NotRequired[bool]
    pdf: NotRequired[PdfConfig]


@dataclass(frozen=True)
class PdfOptions:
    """Page geometry and typography of generated PDFs (sizes in points)."""

    margin_horizontal: float = 15
    margin_vertical: float = 20
    title_font_size: float = 14
    header_font_size: float = 11
    cell_font_size: float = 10
    footer_font_size: float = 8
    # When False the page is always A4 and the compact/wide verdict is informational.
    apply_page_size: bool = False


@dataclass(frozen=True)
class ExportOptions:
    """Options shared by the Excel, Word and PDF writers."""

    title: Optional[str] = None
    include_header: bool = True
    pdf: PdfOptions = field(default_factory=PdfOptions)
