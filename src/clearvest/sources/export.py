"""CSV export of priced holdings."""
from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from ..models import PricedHolding

EXPORT_COLUMNS = [
    "Asset",
    "Amount (€)",
    "Broker",
    "TER (%)",
    "FX Markup (%)",
    "Trading Fee (€)",
    "Platform Fee (€)",
    "Est. Annual Cost (€)",
    "Cost (%)",
    "Suggestion",
]


def _format_amount(amount: float) -> str:
    amount = float(amount)
    return str(int(amount)) if amount.is_integer() else repr(amount)


def _export_row(holding: PricedHolding) -> List[str]:
    return [
        holding.symbol,
        _format_amount(holding.amount),
        holding.broker_name,
        f"{holding.expense_ratio * 100:.3f}",
        f"{holding.fx_markup_rate * 100:.3f}",
        f"{holding.trading_fee_amount:.2f}",
        f"{holding.platform_fee_annual:.2f}",
        f"{holding.total_annual_cost:.2f}",
        f"{holding.cost_percent:.3f}",
        holding.suggestion,
    ]


def export_priced_holdings(holdings: Iterable[PricedHolding], handle: TextIO) -> None:
    """Write the analysis table to an open text handle."""
    writer = csv.writer(handle, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for holding in holdings:
        writer.writerow(_export_row(holding))


def render_export_csv(holdings: Iterable[PricedHolding]) -> str:
    buffer = io.StringIO()
    export_priced_holdings(holdings, buffer)
    return buffer.getvalue()


def export_priced_holdings_to_csv(holdings: Iterable[PricedHolding], path: Path) -> None:
    """Write the analysis table to a CSV file."""
    with path.open("w", encoding="utf-8", newline="") as handle:
        export_priced_holdings(holdings, handle)


def export_filename(basename: str, today: Optional[date] = None) -> str:
    """``<basename>-YYYY-MM-DD.csv`` for the given (default: current) date."""
    today = today or date.today()
    return f"{basename}-{today.isoformat()}.csv"
