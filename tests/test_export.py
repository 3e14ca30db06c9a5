"""Tests for the CSV export of priced holdings."""
from __future__ import annotations

import csv
import io
from datetime import date

from clearvest.calculation.fee_calculator import price_holdings
from clearvest.models import RawHolding
from clearvest.sources.export import (
    EXPORT_COLUMNS,
    export_filename,
    export_priced_holdings_to_csv,
    render_export_csv,
)


def _rows(text: str):
    return list(csv.reader(io.StringIO(text)))


def test_export_layout_and_formatting():
    priced = price_holdings([
        RawHolding("VWCE", 10000, "Interactive Brokers"),
        RawHolding("VWCE", 1234.5, "BUX"),
    ])

    rows = _rows(render_export_csv(priced))

    assert rows[0] == EXPORT_COLUMNS
    assert rows[1] == [
        "VWCE", "10000", "Interactive Brokers", "0.220", "0.020", "2.00", "0.00", "26.00", "0.260", "Hold",
    ]
    assert rows[2][1] == "1234.5"
    assert rows[2][6] == "35.88"


def test_suggestions_with_commas_are_quoted():
    priced = price_holdings([RawHolding("Fund, Class A", 5000, "Vanguard")])

    text = render_export_csv(priced)

    assert '"Fund, Class A"' in text
    assert _rows(text)[1][0] == "Fund, Class A"


def test_export_to_file(tmp_path):
    target = tmp_path / "out.csv"
    export_priced_holdings_to_csv(price_holdings([RawHolding("AAPL", 500, "Robinhood")]), target)

    rows = _rows(target.read_text(encoding="utf-8"))
    assert len(rows) == 2
    assert rows[1][0] == "AAPL"


def test_export_filename_uses_iso_date():
    assert export_filename("clearvest-portfolio-analysis", date(2024, 3, 7)) == (
        "clearvest-portfolio-analysis-2024-03-07.csv"
    )
    assert export_filename("x").startswith("x-")
