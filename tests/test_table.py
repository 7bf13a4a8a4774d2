"""Table assembly and header-driven import."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from lazydata.coercion import Cell, CellKind, encode
from lazydata.errors import CoercionError, UnsupportedFieldError
from lazydata.schema import ExportOptions
from lazydata.table import Table, build_export_table, build_table, header_mapping, parse_table
from lazydata.fields import catalog
from sample_records import Contact, Invoice, Item, Order, Tag, Tagged


def _table(*rows: list) -> Table:
    return Table(
        title="Test",
        rows=tuple(tuple(value if isinstance(value, Cell) else encode(value) for value in row) for row in rows),
    )


def test_item_scenario_rows_and_reimport(items) -> None:
    table = build_table(items, Item)

    assert table.title == "Items"
    assert table.texts() == [["Name", "Qty"], ["Pen", "3"], ["Book", "1"]]
    assert all(cell.kind is CellKind.STRING for cell in table.rows[0])
    assert parse_table(table, Item, skip_header=True) == items


def test_row_and_column_counts(orders) -> None:
    table = build_table(orders, Order)
    assert len(table.rows) == len(orders) + 1
    assert {len(row) for row in table.rows} == {len(catalog(Order))}
    assert table.header == ("order_id", "customer", "total", "paid", "placed_at", "notes")
    assert len(table.data_rows) == len(orders)


def test_empty_collection_yields_header_only() -> None:
    table = build_table([], Item)
    assert len(table.rows) == 1
    assert table.data_rows == ()
    assert parse_table(table, Item) == []


def test_header_can_be_suppressed(items) -> None:
    table = build_table(items, Item, include_header=False, title="Stock")
    assert table.title == "Stock"
    assert table.header == ()
    assert len(table.rows) == 2


def test_build_export_table_applies_options(items) -> None:
    table = build_export_table(items, Item, ExportOptions(title="Inventory", include_header=False))
    assert table.title == "Inventory"
    assert not table.has_header


def test_round_trip_all_supported_kinds(orders) -> None:
    assert parse_table(build_table(orders, Order), Order) == orders

    invoices = [Invoice(number=7, amount=Decimal("1250.75"), issued_on=date(2023, 1, 1))]
    assert parse_table(build_table(invoices, Invoice), Invoice) == invoices


def test_columns_map_by_name_not_position() -> None:
    table = _table(["Qty", "Name"], [3, "Pen"], [1, "Book"])
    assert parse_table(table, Item) == [Item(Name="Pen", Qty=3), Item(Name="Book", Qty=1)]


def test_unmatched_columns_and_fields() -> None:
    table = _table(["NAME", "Nickname"], ["Grace", "Amazing Grace"], ["Edsger", "EWD"])
    contacts = parse_table(table, Contact)
    assert contacts == [
        Contact(name="Grace", city="Unknown", age=0),
        Contact(name="Edsger", city="Unknown", age=0),
    ]


def test_header_mapping_is_case_insensitive_and_trimmed() -> None:
    mapping = header_mapping([" qty ", None, "name", "extra"], catalog(Item))
    assert {index: field.name for index, field in mapping.items()} == {0: "Qty", 2: "Name"}


def test_short_rows_leave_missing_cells_empty() -> None:
    table = _table(["Name", "Qty"], ["Pen"])
    assert parse_table(table, Item) == [Item(Name="Pen", Qty=0)]


def test_coercion_failure_aborts_with_position() -> None:
    table = _table(["Name", "Qty"], ["Pen", 3], ["Book", "many"])
    with pytest.raises(CoercionError) as excinfo:
        parse_table(table, Item)
    assert excinfo.value.row == 2
    assert excinfo.value.column == 1
    assert excinfo.value.field == "Qty"


def test_skip_header_false_decodes_header_row() -> None:
    tags = parse_table(_table(["label"], ["urgent"]), Tag, skip_header=False)
    assert tags == [Tag(label="label"), Tag(label="urgent")]

    with pytest.raises(CoercionError) as excinfo:
        parse_table(_table(["Name", "Qty"], ["Pen", 3]), Item, skip_header=False)
    assert excinfo.value.row == 0


def test_unsupported_field_column_raises() -> None:
    table = _table(["title", "tags"], ["post", "a,b"])
    with pytest.raises(UnsupportedFieldError):
        parse_table(table, Tagged)

    untouched = parse_table(_table(["title"], ["post"]), Tagged)
    assert untouched == [Tagged(title="post", tags=[])]


def test_empty_table_parses_to_nothing() -> None:
    assert parse_table(Table(title="Items", rows=()), Item) == []
