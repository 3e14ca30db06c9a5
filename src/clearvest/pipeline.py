"""Pipeline utilities tying ingestion, pricing and aggregation together."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .calculation.fee_calculator import price_holdings
from .calculation.portfolio_summary import (
    costs_by_broker,
    fee_breakdown,
    fee_forecast,
    optimization_suggestions,
    summarize_portfolio,
)
from .config_loader import Settings
from .market_data import enrich_with_market_data, fetch_market_price
from .models import FeeBreakdown, ForecastPoint, OptimizationSuggestion, PortfolioSummary, PricedHolding, RawHolding
from .sources.csv_upload import parse_portfolio_csv


@dataclass(frozen=True)
class PortfolioReport:
    holdings: List[PricedHolding]
    summary: PortfolioSummary
    breakdown: FeeBreakdown
    broker_costs: Dict[str, float]
    suggestions: List[OptimizationSuggestion]
    forecast: List[ForecastPoint]


def load_holdings_from_csv(path: Path) -> List[RawHolding]:
    """Parse a portfolio CSV file from disk."""

    return parse_portfolio_csv(path.read_bytes())


def analyze_portfolio(
    raw: Sequence[RawHolding],
    settings: Optional[Settings] = None,
    market_data: bool = False,
) -> PortfolioReport:
    """Price the holdings and compute every aggregate the UI shows."""

    settings = settings or Settings()
    priced = price_holdings(raw)
    if market_data:
        priced = enrich_with_market_data(
            priced,
            fetch=lambda symbol: fetch_market_price(
                symbol, base_url=settings.market_data_url, timeout=settings.market_data_timeout
            ),
            max_workers=settings.market_data_workers,
        )

    summary = summarize_portfolio(priced, settings.optimized_cost_rate)
    return PortfolioReport(
        holdings=priced,
        summary=summary,
        breakdown=fee_breakdown(priced),
        broker_costs=costs_by_broker(priced),
        suggestions=optimization_suggestions(priced, settings.optimized_cost_rate),
        forecast=fee_forecast(
            summary.total_value,
            summary.average_cost_percent / 100,
            settings.optimized_cost_rate,
            years=settings.forecast_years,
            growth_rate=settings.growth_rate,
        ),
    )


def generate_report(report: PortfolioReport) -> Dict[str, Any]:
    """Convert a report into plain dictionaries ready for JSON export."""

    return {
        "holdings": [asdict(holding) for holding in report.holdings],
        "summary": asdict(report.summary),
        "breakdown": asdict(report.breakdown),
        "broker_costs": dict(report.broker_costs),
        "suggestions": [asdict(suggestion) for suggestion in report.suggestions],
        "forecast": [asdict(point) for point in report.forecast],
    }
