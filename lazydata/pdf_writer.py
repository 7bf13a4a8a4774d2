"""PDF output: titled, bordered table with a page-number footer."""

# Module responsibilities:
# - Lay out records as a reportlab table sized by the column width heuristic.
# - Draw the pluralized title header and a "{current} / {total}" footer on every page.
# - Configure the PDF engine once per process on first use.

from __future__ import annotations

import io
from functools import partial
from pathlib import Path
from typing import Any, BinaryIO, Iterable, List, Optional, Sequence, Tuple, Union
from xml.sax.saxutils import escape

from reportlab import rl_config
from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A3, A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .fields import FieldDescriptor, catalog
from .layout import ColumnLayout, estimate_column_widths
from .schema import ExportOptions, PdfOptions
from .table import table_title
from .utils.log import get_logger
from .utils.paths import PathLike, atomic_write
from .word_writer import display_text

logger = get_logger("pdf_writer")

HEADER_BAND = 30
FOOTER_BAND = 20
MIN_FLEXIBLE_WIDTH = 40
HEADER_PADDING = 5
CELL_PADDING = 2

_ENGINE_CONFIGURED = False


def _configure_engine() -> None:
    """Put reportlab into reproducible-output mode; runs once per process."""
    global _ENGINE_CONFIGURED
    if _ENGINE_CONFIGURED:
        return
    rl_config.invariant = 1
    _ENGINE_CONFIGURED = True
    logger.info("PDF engine configured", extra={"invariant": True})


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output until the total page count is known."""

    def __init__(self, *args: Any, footer_font_size: float = 8, footer_y: float = 10, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._footer_font_size = footer_font_size
        self._footer_y = footer_y
        self._saved_page_states: List[dict] = []

    def showPage(self) -> None:  # noqa: N802 - reportlab API
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_page_number(total)
            super().showPage()
        super().save()

    def _draw_page_number(self, total: int) -> None:
        width = self._pagesize[0]
        self.setFont("Helvetica", self._footer_font_size)
        self.drawCentredString(width / 2, self._footer_y, f"{self._pageNumber} / {total}")


def page_size_for(layout: ColumnLayout, options: PdfOptions) -> Tuple[float, float]:
    """A4 unless page sizing is enabled and the content is too wide for it."""

    if options.apply_page_size and not layout.compact:
        return A3
    return A4


def _minimum_width(field: FieldDescriptor, options: PdfOptions, include_header: bool) -> float:
    """Narrowest width that still fits the header name and one glyph of cell text."""

    minimum = options.cell_font_size + 2 * CELL_PADDING
    if include_header:
        header = stringWidth(field.name, "Helvetica-Bold", options.header_font_size)
        minimum = max(minimum, header + 2 * HEADER_PADDING)
    return minimum


def column_widths(
    fields: Sequence[FieldDescriptor],
    layout: ColumnLayout,
    available: float,
    options: Optional[PdfOptions] = None,
    include_header: bool = True,
) -> List[float]:
    """Resolve fixed and flexible columns into absolute widths that fit *available*.

    The layout estimate sizes fixed columns, but no column ends up narrower than
    its header name plus padding. Fixed columns that overflow only give up the
    width above that floor.
    """

    options = options or PdfOptions()
    minimum = {field.name: _minimum_width(field, options, include_header) for field in fields}
    fixed = {
        field.name: max(float(layout.widths[field.name]), minimum[field.name])
        for field in fields
        if not layout.is_flexible(field.name)
    }
    flexible = [field for field in fields if layout.is_flexible(field.name)]
    reserved = sum(max(MIN_FLEXIBLE_WIDTH, minimum[field.name]) for field in flexible)
    fixed_total = sum(fixed.values())
    if fixed and fixed_total > available - reserved:
        floor = sum(minimum[name] for name in fixed)
        excess = fixed_total - floor
        budget = max(available - reserved - floor, 0)
        factor = budget / excess if excess else 0
        fixed = {
            name: minimum[name] + (width - minimum[name]) * factor for name, width in fixed.items()
        }
        fixed_total = sum(fixed.values())
    share = (available - fixed_total) / len(flexible) if flexible else 0
    return [max(fixed.get(field.name, share), minimum[field.name]) for field in fields]


def _styles(options: PdfOptions) -> Tuple[ParagraphStyle, ParagraphStyle]:
    header_style = ParagraphStyle(
        "LazyDataHeader",
        fontName="Helvetica-Bold",
        fontSize=options.header_font_size,
        leading=options.header_font_size * 1.2,
        alignment=TA_LEFT,
    )
    cell_style = ParagraphStyle(
        "LazyDataCell",
        fontName="Helvetica",
        fontSize=options.cell_font_size,
        leading=options.cell_font_size * 1.2,
        alignment=TA_LEFT,
    )
    return header_style, cell_style


def _table_style(include_header: bool) -> TableStyle:
    commands: List[tuple] = [
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("TOPPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("BOTTOMPADDING", (0, 0), (-1, -1), CELL_PADDING),
    ]
    if include_header:
        commands.extend(
            [
                ("BOX", (0, 0), (-1, 0), 1, colors.black),
                ("LINEAFTER", (0, 0), (-1, 0), 1, colors.black),
                ("LEFTPADDING", (0, 0), (-1, 0), HEADER_PADDING),
                ("RIGHTPADDING", (0, 0), (-1, 0), HEADER_PADDING),
                ("TOPPADDING", (0, 0), (-1, 0), HEADER_PADDING),
                ("BOTTOMPADDING", (0, 0), (-1, 0), HEADER_PADDING),
            ]
        )
    return TableStyle(commands)


def _render(
    items: Sequence[Any],
    record_type: type,
    target: Union[BinaryIO, str],
    options: ExportOptions,
) -> int:
    _configure_engine()
    pdf = options.pdf
    fields = catalog(record_type)
    title = options.title if options.title is not None else table_title(record_type)
    layout = estimate_column_widths(fields, items)
    page_size = page_size_for(layout, pdf)

    doc = SimpleDocTemplate(
        target,
        pagesize=page_size,
        leftMargin=pdf.margin_horizontal,
        rightMargin=pdf.margin_horizontal,
        topMargin=pdf.margin_vertical + HEADER_BAND,
        bottomMargin=pdf.margin_vertical + FOOTER_BAND,
        title=title,
    )

    header_style, cell_style = _styles(pdf)
    rows: List[List[Paragraph]] = []
    if options.include_header:
        rows.append([Paragraph(escape(field.name), header_style) for field in fields])
    for item in items:
        rows.append(
            [
                Paragraph(escape(display_text(field.get(item), field.name)), cell_style)
                for field in fields
            ]
        )

    story = []
    if fields and rows:
        widths = column_widths(fields, layout, doc.width, pdf, options.include_header)
        pdf_table = Table(
            rows,
            colWidths=widths,
            repeatRows=1 if options.include_header else 0,
            hAlign="CENTER",
        )
        pdf_table.setStyle(_table_style(options.include_header))
        story.append(pdf_table)
    else:
        # An empty story renders no page at all.
        story.append(Spacer(1, 1))

    page_width, page_height = page_size

    def _draw_title(pdf_canvas: canvas.Canvas, _doc: SimpleDocTemplate) -> None:
        pdf_canvas.saveState()
        pdf_canvas.setFont("Helvetica", pdf.title_font_size)
        baseline = page_height - pdf.margin_vertical - HEADER_BAND / 2 - pdf.title_font_size / 3
        pdf_canvas.drawCentredString(page_width / 2, baseline, title)
        pdf_canvas.restoreState()

    canvasmaker = partial(
        _NumberedCanvas,
        footer_font_size=pdf.footer_font_size,
        footer_y=pdf.margin_vertical + FOOTER_BAND / 2 - pdf.footer_font_size / 3,
    )
    doc.build(story, onFirstPage=_draw_title, onLaterPages=_draw_title, canvasmaker=canvasmaker)

    logger.info(
        "PDF rendered",
        extra={
            "title": title,
            "rows": len(rows),
            "columns": len(fields),
            "compact": layout.compact,
            "page_size": "A3" if page_size == A3 else "A4",
            "pages": doc.page,
        },
    )
    return doc.page


def to_pdf_stream(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> io.BytesIO:
    """Render *items* as a PDF in memory, rewound to position 0."""

    stream = io.BytesIO()
    _render(list(items), record_type, stream, options or ExportOptions())
    stream.seek(0)
    return stream


def to_pdf_bytes(
    items: Iterable[Any], record_type: type, *, options: Optional[ExportOptions] = None
) -> bytes:
    return to_pdf_stream(items, record_type, options=options).getvalue()


def save_as_pdf(
    items: Iterable[Any],
    record_type: type,
    path: PathLike,
    *,
    options: Optional[ExportOptions] = None,
) -> Path:
    """Write *items* to a PDF file at *path*, overwriting any existing file."""

    snapshot = list(items)
    resolved = options or ExportOptions()
    target = atomic_write(path, lambda fh: _render(snapshot, record_type, fh, resolved))
    logger.info("PDF saved", extra={"output": str(target)})
    return target
