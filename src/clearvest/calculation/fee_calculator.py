"""Deterministic annual cost calculator for portfolio holdings.

Prices each (symbol, amount, broker) holding using the static reference
tables: fund TER, broker FX markup, the flat trading fee and the annualized
platform fee. The result carries a suggestion drawn from a fixed vocabulary.

The calculator performs no I/O and keeps no state; the same input always
yields the same output.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from ..models import AssetClass, PricedHolding, RawHolding
from ..reference_data import (
    ETF_HIGH_COST,
    ETF_HIGH_TER,
    FUND_HIGH_COST,
    FUND_HIGH_TER,
    HOLD,
    SUGGESTION_OVERRIDES,
    get_asset_profile,
    get_broker_profile,
)

logger = logging.getLogger(__name__)

HIGH_COST_PERCENT = 1.0  # total annual cost above 1% of the holding
HIGH_TER = 0.008  # fund management fee above 0.8%
MONTHS_PER_YEAR = 12


def suggest(symbol: str, expense_ratio: float, asset_class: AssetClass, cost_percent: float) -> str:
    """Pick an optimization suggestion; the first matching rule wins.

    Stocks never trigger the cost or TER rules since they have no management fee
    to replace, so an expensive stock position still reads "Hold".
    """
    override = SUGGESTION_OVERRIDES.get(symbol)
    if override is not None:
        return override

    if cost_percent > HIGH_COST_PERCENT:
        if asset_class == AssetClass.ETF:
            return ETF_HIGH_COST
        if asset_class == AssetClass.FUND:
            return FUND_HIGH_COST
    elif expense_ratio > HIGH_TER:
        if asset_class == AssetClass.ETF:
            return ETF_HIGH_TER
        if asset_class == AssetClass.FUND:
            return FUND_HIGH_TER

    return HOLD


def price_holding(holding: RawHolding) -> PricedHolding:
    """Compute every annual fee component of a single holding.

    ``holding.amount`` must be positive; producers guarantee it.
    """
    broker = get_broker_profile(holding.broker_name)
    asset = get_asset_profile(holding.symbol)

    ter_cost = holding.amount * asset.expense_ratio
    fx_cost = holding.amount * broker.fx_markup_rate
    platform_fee_annual = broker.monthly_platform_fee * MONTHS_PER_YEAR

    total_annual_cost = ter_cost + fx_cost + broker.trading_fee_amount + platform_fee_annual
    cost_percent = total_annual_cost / holding.amount * 100

    return PricedHolding(
        symbol=holding.symbol,
        amount=holding.amount,
        broker_name=holding.broker_name,
        expense_ratio=asset.expense_ratio,
        asset_class=asset.asset_class,
        fx_markup_rate=broker.fx_markup_rate,
        trading_fee_amount=broker.trading_fee_amount,
        platform_fee_annual=platform_fee_annual,
        total_annual_cost=total_annual_cost,
        cost_percent=cost_percent,
        suggestion=suggest(holding.symbol, asset.expense_ratio, asset.asset_class, cost_percent),
        total_value=holding.amount,
    )


def price_holdings(holdings: Iterable[RawHolding]) -> List[PricedHolding]:
    """Price every holding, preserving input order."""
    priced = [price_holding(holding) for holding in holdings]
    logger.debug(f"Priced {len(priced)} holdings")
    return priced
