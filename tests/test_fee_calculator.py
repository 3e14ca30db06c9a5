"""Tests for the deterministic holding fee calculator."""
from __future__ import annotations

from dataclasses import asdict

import pytest

from clearvest.calculation.fee_calculator import price_holding, price_holdings, suggest
from clearvest.models import AssetClass, RawHolding
from clearvest.reference_data import (
    DEFAULT_BROKER,
    ETF_HIGH_COST,
    ETF_HIGH_TER,
    FUND_HIGH_COST,
    FUND_HIGH_TER,
    HOLD,
    SUGGESTION_OVERRIDES,
)


MIXED_PORTFOLIO = [
    RawHolding("VWCE", 10000, "Interactive Brokers"),
    RawHolding("FCNTX", 10000, "DEGIRO"),
    RawHolding("AAPL", 2500.5, "eToro"),
    RawHolding("ZZZZ", 1200, "Nonexistent Bank"),
    RawHolding("Global Mutual Fund", 7000, "bux"),
    RawHolding("iShares Tech UCITS", 3000, "Scalable Capital"),
]


def test_vwce_at_interactive_brokers():
    holding = price_holding(RawHolding("VWCE", 10000, "Interactive Brokers"))

    assert holding.expense_ratio == 0.0022
    assert holding.asset_class == AssetClass.ETF
    assert holding.fx_markup_rate == 0.0002
    assert holding.trading_fee_amount == 2.00
    assert holding.platform_fee_annual == 0
    assert holding.total_annual_cost == pytest.approx(26.00)
    assert holding.cost_percent == pytest.approx(0.26)
    assert holding.suggestion == HOLD


def test_fcntx_override_beats_high_cost_rule():
    holding = price_holding(RawHolding("FCNTX", 10000, "DEGIRO"))

    assert holding.expense_ratio == 0.0082
    assert holding.asset_class == AssetClass.FUND
    assert holding.total_annual_cost == pytest.approx(109.0)
    assert holding.cost_percent == pytest.approx(1.09)
    assert holding.suggestion == "Switch to VFIAX (TER 0.40%)"
    assert holding.suggestion != FUND_HIGH_COST


@pytest.mark.parametrize("broker", ["degiro", "DEGIRO", "Degiro", "  DeGiRo "])
def test_broker_lookup_is_case_insensitive(broker):
    holding = price_holding(RawHolding("VWCE", 1000, broker))

    assert holding.fx_markup_rate == 0.0025
    assert holding.trading_fee_amount == 2.00
    assert holding.broker_name == broker


def test_unknown_broker_uses_default_profile():
    holding = price_holding(RawHolding("VWCE", 10000, "Nonexistent Bank"))

    assert holding.fx_markup_rate == DEFAULT_BROKER.fx_markup_rate
    assert holding.trading_fee_amount == DEFAULT_BROKER.trading_fee_amount
    assert holding.platform_fee_annual == 0


def test_unknown_symbol_defaults_to_stock():
    holding = price_holding(RawHolding("ZZZZ", 5000, "Trade Republic"))

    assert holding.asset_class == AssetClass.STOCK
    assert holding.expense_ratio == 0.0


def test_symbol_lookup_is_case_sensitive():
    # "vwce" is not an exact match and contains no ETF or fund pattern
    holding = price_holding(RawHolding("vwce", 5000, "Trade Republic"))

    assert holding.asset_class == AssetClass.STOCK
    assert holding.expense_ratio == 0.0


def test_platform_fee_is_annualized():
    holding = price_holding(RawHolding("VWCE", 10000, "BUX"))

    assert holding.platform_fee_annual == pytest.approx(2.99 * 12)
    assert holding.total_annual_cost == pytest.approx(10000 * 0.0022 + 10000 * 0.005 + 0 + 35.88)


def test_expensive_stock_still_holds():
    # 5 EUR/month inactivity fee on a small stock position: cost far above 1%
    holding = price_holding(RawHolding("ZZZZ", 1000, "eToro"))

    assert holding.cost_percent > 1.0
    assert holding.suggestion == HOLD


def test_unknown_etf_with_high_cost_gets_switch_suggestion():
    holding = price_holding(RawHolding("iShares Tech UCITS", 1000, "eToro"))

    assert holding.asset_class == AssetClass.ETF
    assert holding.expense_ratio == 0.003
    assert holding.cost_percent > 1.0
    assert holding.suggestion == ETF_HIGH_COST


def test_unknown_fund_with_high_cost_gets_generic_fund_suggestion():
    holding = price_holding(RawHolding("Global Mutual", 10000, "Interactive Brokers"))

    assert holding.asset_class == AssetClass.FUND
    assert holding.total_annual_cost == pytest.approx(124.0)
    assert holding.suggestion == FUND_HIGH_COST


@pytest.mark.parametrize("symbol", sorted(SUGGESTION_OVERRIDES))
def test_override_applies_regardless_of_cost(symbol):
    cheap = price_holding(RawHolding(symbol, 5_000_000, "Interactive Brokers"))
    pricey = price_holding(RawHolding(symbol, 100, "eToro"))

    assert cheap.suggestion == SUGGESTION_OVERRIDES[symbol]
    assert pricey.suggestion == SUGGESTION_OVERRIDES[symbol]


def test_suggest_high_ter_rules():
    assert suggest("SOMEETF", 0.009, AssetClass.ETF, 0.95) == ETF_HIGH_TER
    assert suggest("SOMEFUND", 0.009, AssetClass.FUND, 0.95) == FUND_HIGH_TER
    assert suggest("SOMESTOCK", 0.009, AssetClass.STOCK, 0.95) == HOLD
    assert suggest("SOMEETF", 0.008, AssetClass.ETF, 0.95) == HOLD


def test_suggest_high_cost_takes_precedence_over_high_ter():
    assert suggest("SOMEETF", 0.009, AssetClass.ETF, 1.5) == ETF_HIGH_COST
    assert suggest("SOMEFUND", 0.009, AssetClass.FUND, 1.5) == FUND_HIGH_COST
    # exactly 1% is not above the threshold
    assert suggest("SOMEFUND", 0.001, AssetClass.FUND, 1.0) == HOLD


def test_price_holdings_preserves_order_and_identity():
    priced = price_holdings(MIXED_PORTFOLIO)

    assert len(priced) == len(MIXED_PORTFOLIO)
    for raw, holding in zip(MIXED_PORTFOLIO, priced):
        assert (holding.symbol, holding.amount, holding.broker_name) == (raw.symbol, raw.amount, raw.broker_name)
        assert holding.total_value == raw.amount
        assert holding.market_price is None


def test_total_cost_is_sum_of_components():
    for holding in price_holdings(MIXED_PORTFOLIO):
        components = (
            holding.amount * holding.expense_ratio
            + holding.amount * holding.fx_markup_rate
            + holding.trading_fee_amount
            + holding.platform_fee_annual
        )
        assert holding.total_annual_cost == pytest.approx(components, rel=1e-9)
        assert holding.cost_percent == holding.total_annual_cost / holding.amount * 100


def test_pricing_is_idempotent():
    first = [asdict(holding) for holding in price_holdings(MIXED_PORTFOLIO)]
    second = [asdict(holding) for holding in price_holdings(MIXED_PORTFOLIO)]

    assert first == second


def test_empty_portfolio():
    assert price_holdings([]) == []
