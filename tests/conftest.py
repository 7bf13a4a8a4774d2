from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent
for entry in (ROOT, TESTS):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

# Keep log files out of the home directory; must happen before lazydata configures logging.
os.environ.setdefault("LAZYDATA_LOG_DIR", tempfile.mkdtemp(prefix="lazydata-logs-"))

from sample_records import Item, Order  # noqa: E402


@pytest.fixture
def items() -> list[Item]:
    return [Item(Name="Pen", Qty=3), Item(Name="Book", Qty=1)]


@pytest.fixture
def orders() -> list[Order]:
    from datetime import datetime

    return [
        Order(
            order_id=1001,
            customer="Ada Lovelace",
            total=19.99,
            paid=True,
            placed_at=datetime(2024, 2, 29, 13, 45, 30),
            notes="gift wrap",
        ),
        Order(
            order_id=1002,
            customer="Alan Turing",
            total=1250.5,
            paid=False,
            placed_at=datetime(1999, 12, 31, 23, 59, 59),
            notes=None,
        ),
    ]
