"""Portfolio-level aggregates over priced holdings.

Totals, fee breakdown per category, per-broker costs, potential savings and
the long-term forecast that compares current fees against an optimized rate.
Savings assume every holding with a non-"Hold" suggestion could be brought
down to ``optimized_cost_rate`` of its amount per year.
"""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from ..models import FeeBreakdown, ForecastPoint, OptimizationSuggestion, PortfolioSummary, PricedHolding
from ..reference_data import HOLD

OPTIMIZED_COST_RATE = 0.003
GROWTH_RATE = 0.07
FORECAST_YEARS = 30


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def potential_savings(holdings: Sequence[PricedHolding], optimized_cost_rate: float = OPTIMIZED_COST_RATE) -> float:
    return sum(
        holding.total_annual_cost - holding.amount * optimized_cost_rate
        for holding in holdings
        if holding.suggestion != HOLD
    )


def summarize_portfolio(
    holdings: Sequence[PricedHolding],
    optimized_cost_rate: float = OPTIMIZED_COST_RATE,
) -> PortfolioSummary:
    """Aggregate headline figures for the summary cards."""
    total_value = sum(holding.amount for holding in holdings)
    total_cost = sum(holding.total_annual_cost for holding in holdings)
    average_cost_percent = total_cost / total_value * 100 if total_value > 0 else 0.0

    return PortfolioSummary(
        total_value=total_value,
        total_cost=total_cost,
        average_cost_percent=average_cost_percent,
        potential_savings=potential_savings(holdings, optimized_cost_rate),
        asset_count=len(holdings),
        broker_count=len({holding.broker_name for holding in holdings}),
    )


def fee_breakdown(holdings: Sequence[PricedHolding]) -> FeeBreakdown:
    return FeeBreakdown(
        ter_fees=sum(h.amount * h.expense_ratio for h in holdings),
        trading_fees=sum(h.trading_fee_amount for h in holdings),
        fx_fees=sum(h.amount * h.fx_markup_rate for h in holdings),
        platform_fees=sum(h.platform_fee_annual for h in holdings),
    )


def costs_by_broker(holdings: Sequence[PricedHolding]) -> Dict[str, float]:
    """Total annual cost per broker as entered, highest first."""
    totals: Dict[str, float] = {}
    for holding in holdings:
        totals[holding.broker_name] = totals.get(holding.broker_name, 0.0) + holding.total_annual_cost
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def average_expense_ratio(holdings: Sequence[PricedHolding]) -> float:
    if not holdings:
        return 0.0
    return sum(holding.expense_ratio for holding in holdings) / len(holdings)


def _priority(cost_percent: float) -> str:
    if cost_percent > 1.0:
        return "HIGH"
    if cost_percent > 0.5:
        return "MEDIUM"
    return "LOW"


def optimization_suggestions(
    holdings: Sequence[PricedHolding],
    optimized_cost_rate: float = OPTIMIZED_COST_RATE,
) -> List[OptimizationSuggestion]:
    """One entry per holding worth acting on, largest saving first."""
    suggestions = [
        OptimizationSuggestion(
            symbol=holding.symbol,
            current_cost=holding.total_annual_cost,
            suggested_alternative=holding.suggestion,
            potential_saving=holding.total_annual_cost - holding.amount * optimized_cost_rate,
            reason=(
                f"{holding.symbol} costs {holding.cost_percent:.2f}% per year "
                f"(TER {holding.expense_ratio * 100:.2f}%)"
            ),
            priority=_priority(holding.cost_percent),
        )
        for holding in holdings
        if holding.suggestion != HOLD
    ]
    suggestions.sort(key=lambda s: s.potential_saving, reverse=True)
    return suggestions


def fee_forecast(
    initial_amount: float,
    current_fee_rate: float,
    optimized_fee_rate: float = OPTIMIZED_COST_RATE,
    years: int = FORECAST_YEARS,
    growth_rate: float = GROWTH_RATE,
) -> List[ForecastPoint]:
    """Project portfolio value under current and optimized fees.

    Fee rates are fractions (0.012 for 1.2%). Each year the value grows by
    ``1 + growth_rate - fee_rate``.
    """
    points: List[ForecastPoint] = []
    current = optimized = float(initial_amount)
    for year in range(years + 1):
        points.append(ForecastPoint(
            year=year,
            current=_round_half_up(current),
            optimized=_round_half_up(optimized),
            difference=_round_half_up(optimized - current),
        ))
        current *= 1 + growth_rate - current_fee_rate
        optimized *= 1 + growth_rate - optimized_fee_rate
    return points
