"""Fee calculation and portfolio aggregation."""

from .fee_calculator import price_holding, price_holdings, suggest
from .portfolio_summary import (
    costs_by_broker,
    fee_breakdown,
    fee_forecast,
    optimization_suggestions,
    potential_savings,
    summarize_portfolio,
)

__all__ = [
    "price_holding",
    "price_holdings",
    "suggest",
    "costs_by_broker",
    "fee_breakdown",
    "fee_forecast",
    "optimization_suggestions",
    "potential_savings",
    "summarize_portfolio",
]
