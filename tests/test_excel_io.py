"""Unit tests for Excel export and import."""

# Module responsibilities:
# - Validate round trips through streams, bytes and files.
# - Assert cell type tagging and header-driven mapping on real workbooks.
# - Cover defensive behaviour for missing files, malformed payloads and bad cells.

from __future__ import annotations

import io
import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

from lazydata.errors import CoercionError, MalformedDocumentError
from lazydata.excel_reader import from_excel_bytes, from_excel_file, from_excel_stream
from lazydata.excel_writer import save_as_excel, sheet_title, to_excel_bytes, to_excel_stream
from lazydata.schema import ExportOptions
from sample_records import Invoice, Item, Order, Tag


def _workbook_bytes(rows: list[list[object]], title: str = "Sheet") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_save_and_read_file_round_trip(tmp_path: Path, orders) -> None:
    target = tmp_path / "nested" / "orders.xlsx"
    written = save_as_excel(orders, Order, target)

    assert written == target.resolve()
    assert target.exists()
    assert from_excel_file(target, Order) == orders
    assert list(tmp_path.joinpath("nested").iterdir()) == [target]


def test_item_scenario_through_bytes(items) -> None:
    payload = to_excel_bytes(items, Item)
    assert from_excel_bytes(payload, Item) == items

    wb = load_workbook(io.BytesIO(payload))
    ws = wb.active
    assert ws.title == "Items"
    assert [cell.value for cell in ws[1]] == ["Name", "Qty"]
    assert ws["A2"].value == "Pen"
    assert ws["B2"].value == 3
    assert ws.max_row == 3


def test_cells_keep_their_type_tags(orders) -> None:
    wb = load_workbook(to_excel_stream(orders, Order))
    ws = wb.active
    assert ws["A2"].data_type == "n"
    assert ws["C2"].data_type == "n"
    assert ws["D2"].value is True
    assert ws["D2"].data_type == "b"
    assert ws["E2"].is_date
    assert ws["E2"].value == datetime(2024, 2, 29, 13, 45, 30)
    assert ws["F3"].value is None


def test_stream_is_rewound(items) -> None:
    stream = to_excel_stream(items, Item)
    assert stream.tell() == 0
    assert from_excel_stream(stream, Item) == items


def test_decimal_and_date_fields_round_trip() -> None:
    invoices = [
        Invoice(number=1, amount=Decimal("1250.75"), issued_on=date(2023, 1, 1)),
        Invoice(number=2, amount=Decimal("0.5"), issued_on=date(1999, 12, 31)),
    ]
    assert from_excel_bytes(to_excel_bytes(invoices, Invoice), Invoice) == invoices


def test_formula_like_text_stays_literal() -> None:
    rows = [Item(Name="=1+1", Qty=2)]
    assert from_excel_bytes(to_excel_bytes(rows, Item), Item) == rows


def test_save_overwrites_existing_file(tmp_path: Path, items) -> None:
    target = tmp_path / "items.xlsx"
    target.write_bytes(b"stale content")
    save_as_excel(items, Item, target)
    assert from_excel_file(target, Item) == items


def test_empty_collection_writes_header_only(tmp_path: Path) -> None:
    target = save_as_excel([], Item, tmp_path / "empty.xlsx")
    ws = load_workbook(target).active
    assert [cell.value for cell in ws[1]] == ["Name", "Qty"]
    assert from_excel_file(target, Item) == []


def test_options_override_title_and_header(items) -> None:
    payload = to_excel_bytes(items, Item, options=ExportOptions(title="Stock/2024", include_header=False))
    ws = load_workbook(io.BytesIO(payload)).active
    assert ws.title == "Stock2024"
    assert ws["A1"].value == "Pen"


def test_sheet_title_is_trimmed() -> None:
    assert len(sheet_title("X" * 40)) == 31
    assert sheet_title("[a]:b?") == "ab"
    assert sheet_title("???") == "Sheet1"


def test_reordered_and_unknown_columns_map_by_header() -> None:
    payload = _workbook_bytes([["Qty", "Nickname", "name"], [5, "inky", "Ink"], [None, None, "Eraser"]])
    assert from_excel_bytes(payload, Item) == [Item(Name="Ink", Qty=5), Item(Name="Eraser", Qty=0)]


def test_records_with_empty_fields_roundtrip() -> None:
    tags = [Tag("a"), Tag(""), Tag("b")]
    assert from_excel_bytes(to_excel_bytes(tags, Tag), Tag) == tags


def test_blank_rows_become_zero_valued_records() -> None:
    payload = _workbook_bytes([["Name", "Qty"], ["Pen", 1], [None, None], ["Ink", 2]])
    assert from_excel_bytes(payload, Item) == [
        Item(Name="Pen", Qty=1),
        Item(Name="", Qty=0),
        Item(Name="Ink", Qty=2),
    ]


def test_bad_cell_aborts_import() -> None:
    payload = _workbook_bytes([["Name", "Qty"], ["Pen", 1], ["Ink", "lots"]])
    with pytest.raises(CoercionError):
        from_excel_bytes(payload, Item)


def test_malformed_payload_raises() -> None:
    with pytest.raises(MalformedDocumentError):
        from_excel_bytes(b"definitely not a workbook", Item)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        from_excel_file(tmp_path / "missing.xlsx", Item)


def test_stripped_control_characters_are_logged(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(logging.getLogger("lazydata"), "propagate", True)
    with caplog.at_level(logging.WARNING):
        payload = to_excel_bytes([Item(Name="bell\x07", Qty=1)], Item)

    assert from_excel_bytes(payload, Item) == [Item(Name="bell", Qty=1)]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert warnings
    assert warnings[0].field == "Name"
