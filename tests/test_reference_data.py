"""Tests for the static broker and asset reference tables."""
from __future__ import annotations

import pytest

from clearvest.models import AssetClass
from clearvest.reference_data import (
    ASSET_FEES,
    BROKER_FEES,
    DEFAULT_ASSET_FEES,
    DEFAULT_BROKER,
    SUGGESTION_OVERRIDES,
    classify_symbol,
    get_asset_profile,
    get_broker_profile,
    list_brokers,
)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        BROKER_FEES["new broker"] = DEFAULT_BROKER  # type: ignore[index]
    with pytest.raises(TypeError):
        ASSET_FEES["NEW"] = DEFAULT_ASSET_FEES[AssetClass.ETF]  # type: ignore[index]


def test_fallbacks_are_not_keys_of_the_primary_tables():
    assert "default" not in BROKER_FEES
    assert all(not symbol.startswith("DEFAULT") for symbol in ASSET_FEES)
    assert all(not symbol.startswith("DEFAULT") for symbol in SUGGESTION_OVERRIDES)


def test_broker_named_like_a_sentinel_is_just_unknown():
    assert get_broker_profile("DEFAULT") is DEFAULT_BROKER
    assert get_broker_profile("Other") is DEFAULT_BROKER


def test_degiro_spellings_share_one_profile():
    assert get_broker_profile("Degiro") is get_broker_profile("DEGIRO")


def test_every_generator_broker_is_known():
    from clearvest.generator import BROKER_POOL

    for name in BROKER_POOL:
        assert get_broker_profile(name) is not DEFAULT_BROKER


def test_list_brokers_excludes_fallback():
    names = [profile.name for profile in list_brokers()]

    assert "Other" not in names
    assert len(names) == len(set(names)) == 11


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("Vanguard FTSE All-World", AssetClass.ETF),
        ("spdr gold", AssetClass.ETF),
        ("Amundi Index MSCI", AssetClass.ETF),
        ("My ETF", AssetClass.ETF),
        ("Carmignac SICAV", AssetClass.FUND),
        ("Growth Fund Class A", AssetClass.FUND),
        ("mutual income", AssetClass.FUND),
        ("ZZZZ", AssetClass.STOCK),
        ("ASML", AssetClass.STOCK),
    ],
)
def test_classify_symbol(symbol, expected):
    assert classify_symbol(symbol) == expected


def test_etf_patterns_win_over_fund_patterns():
    assert classify_symbol("Vanguard Index Fund") == AssetClass.ETF


def test_unknown_symbols_get_class_defaults():
    assert get_asset_profile("ZZZZ").expense_ratio == 0.0
    assert get_asset_profile("Some UCITS").expense_ratio == 0.003
    assert get_asset_profile("Some Fund").expense_ratio == 0.012


def test_known_symbols_use_exact_table_values():
    assert get_asset_profile("TRET.L").expense_ratio == 0.0015
    assert get_asset_profile("VTSMX").asset_class == AssetClass.FUND
    assert get_asset_profile("BRK.B").asset_class == AssetClass.STOCK
