"""Static fee reference data: broker schedules, asset TERs and replacement hints.

Rates are 2024 European retail figures. Lookups are two-tier: an exact match
in the primary table, otherwise a designated default record that lives
outside the table so no real broker or symbol can collide with it.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .models import AssetClass, AssetFeeProfile, BrokerFeeProfile

ETF = AssetClass.ETF
STOCK = AssetClass.STOCK
FUND = AssetClass.FUND


# ========================================================================================
# BROKERS
# ========================================================================================

_BROKERS: List[BrokerFeeProfile] = [
    BrokerFeeProfile("DEGIRO", fx_markup_rate=0.0025, trading_fee_amount=2.00, monthly_platform_fee=0,
                     min_ter=0.0007, max_ter=0.0150),
    BrokerFeeProfile("BUX", fx_markup_rate=0.0050, trading_fee_amount=0, monthly_platform_fee=2.99,
                     min_ter=0.0025, max_ter=0.0075),
    BrokerFeeProfile("Trade Republic", fx_markup_rate=0.0015, trading_fee_amount=1.00, monthly_platform_fee=0,
                     min_ter=0.0007, max_ter=0.0070),
    BrokerFeeProfile("Interactive Brokers", fx_markup_rate=0.0002, trading_fee_amount=2.00, monthly_platform_fee=0,
                     min_ter=0.0007, max_ter=0.0150),
    BrokerFeeProfile("Robinhood", fx_markup_rate=0.0030, trading_fee_amount=0, monthly_platform_fee=0,
                     min_ter=0.0000, max_ter=0.0100),
    BrokerFeeProfile("Vanguard", fx_markup_rate=0.0015, trading_fee_amount=0, monthly_platform_fee=0,
                     min_ter=0.0003, max_ter=0.0080),
    BrokerFeeProfile("Fidelity", fx_markup_rate=0.0020, trading_fee_amount=0, monthly_platform_fee=0,
                     min_ter=0.0000, max_ter=0.0090),
    BrokerFeeProfile("Charles Schwab", fx_markup_rate=0.0018, trading_fee_amount=0, monthly_platform_fee=0,
                     min_ter=0.0003, max_ter=0.0085),
    # eToro's monthly charge is an inactivity fee
    BrokerFeeProfile("eToro", fx_markup_rate=0.0050, trading_fee_amount=0, monthly_platform_fee=5.00,
                     min_ter=0.0000, max_ter=0.0120),
    BrokerFeeProfile("Saxo Bank", fx_markup_rate=0.0025, trading_fee_amount=3.00, monthly_platform_fee=0,
                     min_ter=0.0005, max_ter=0.0150),
    BrokerFeeProfile("Scalable Capital", fx_markup_rate=0.0020, trading_fee_amount=0.99, monthly_platform_fee=2.99,
                     min_ter=0.0007, max_ter=0.0080),
]

# Keyed by lower-cased name so lookups are case-insensitive.
BROKER_FEES: Mapping[str, BrokerFeeProfile] = MappingProxyType(
    {broker.name.lower(): broker for broker in _BROKERS}
)

# Conservative estimate for brokers we know nothing about.
DEFAULT_BROKER = BrokerFeeProfile(
    "Other", fx_markup_rate=0.0020, trading_fee_amount=5.00, monthly_platform_fee=0,
    min_ter=0.0020, max_ter=0.0150,
)


# ========================================================================================
# ASSETS
# ========================================================================================

_ASSET_TABLE: Dict[str, Tuple[float, AssetClass]] = {
    # European and global ETFs
    "VWCE": (0.0022, ETF),    # Vanguard FTSE All-World
    "IWDA": (0.0020, ETF),    # iShares Core MSCI World
    "EUNL": (0.0020, ETF),    # iShares Core MSCI World
    "VUSA": (0.0007, ETF),    # Vanguard S&P 500
    "CSPX": (0.0007, ETF),    # iShares Core S&P 500
    "MEUD": (0.0012, ETF),    # Amundi MSCI Europe
    "VEUR": (0.0012, ETF),    # Vanguard FTSE Europe
    "IEMA": (0.0018, ETF),    # iShares Core MSCI EM
    "VFEM": (0.0022, ETF),    # Vanguard FTSE Emerging Markets
    "AGGH": (0.0010, ETF),    # iShares Core Global Aggregate Bond
    "IUSQ": (0.0007, ETF),    # iShares Core MSCI World Quality
    "HMWO": (0.0015, ETF),    # iShares Edge MSCI World Momentum
    "SAWD": (0.0019, ETF),    # SPDR ACWI
    "DBXW": (0.0019, ETF),    # Xtrackers MSCI World
    "XDWD": (0.0019, ETF),    # Xtrackers MSCI World
    "TRET.L": (0.0015, ETF),  # Xtrackers II Global Real Estate

    # Individual stocks carry no management fee
    "AAPL": (0.0, STOCK),
    "MSFT": (0.0, STOCK),
    "GOOGL": (0.0, STOCK),
    "AMZN": (0.0, STOCK),
    "TSLA": (0.0, STOCK),
    "FB": (0.0, STOCK),
    "NVDA": (0.0, STOCK),
    "BRK.B": (0.0, STOCK),
    "JPM": (0.0, STOCK),
    "JNJ": (0.0, STOCK),
    "V": (0.0, STOCK),
    "PG": (0.0, STOCK),
    "UNH": (0.0, STOCK),
    "HD": (0.0, STOCK),
    "BAC": (0.0, STOCK),
    "MA": (0.0, STOCK),
    "DIS": (0.0, STOCK),
    "PYPL": (0.0, STOCK),
    "CMCSA": (0.0, STOCK),
    "XOM": (0.0, STOCK),

    # Mutual funds
    "FCNTX": (0.0082, FUND),  # Fidelity Contrafund
    "PRGFX": (0.0065, FUND),  # T. Rowe Price Growth Stock
    "VFIAX": (0.0040, FUND),  # Vanguard 500 Index Admiral
    "VTSMX": (0.0140, FUND),  # Vanguard Total Stock Market
    "VTSAX": (0.0030, FUND),  # Vanguard Total Stock Market Admiral
    "VTIAX": (0.0011, FUND),  # Vanguard Total International Stock
    "AGTHX": (0.0068, FUND),  # American Funds Growth Fund of America
    "AIVSX": (0.0075, FUND),  # American Funds Investment Company of America
    "ANCFX": (0.0095, FUND),  # American Funds Fundamental Investors
    "CWGIX": (0.0110, FUND),  # American Funds Capital World Growth & Income
}

ASSET_FEES: Mapping[str, AssetFeeProfile] = MappingProxyType(
    {symbol: AssetFeeProfile(ter, asset_class) for symbol, (ter, asset_class) in _ASSET_TABLE.items()}
)

DEFAULT_ASSET_FEES: Mapping[AssetClass, AssetFeeProfile] = MappingProxyType({
    ETF: AssetFeeProfile(0.0030, ETF),
    STOCK: AssetFeeProfile(0.0, STOCK),
    FUND: AssetFeeProfile(0.0120, FUND),
})

# Substrings hinting at the asset class of a symbol missing from ASSET_FEES.
ETF_PATTERNS: Tuple[str, ...] = ("ETF", "UCITS", "Index", "SPDR", "iShares", "Vanguard")
FUND_PATTERNS: Tuple[str, ...] = ("Fund", "Mutual", "FCP", "SICAV", "OEF", "Class")


# ========================================================================================
# SUGGESTIONS
# ========================================================================================

HOLD = "Hold"
ETF_HIGH_COST = "Switch to VWCE (TER 0.22%)"
FUND_HIGH_COST = "Consider switching to a low-cost ETF like VWCE (TER 0.22%)"
ETF_HIGH_TER = "Consider VWCE (TER 0.22%)"
FUND_HIGH_TER = "Consider low-cost ETF alternative"

SUGGESTION_OVERRIDES: Mapping[str, str] = MappingProxyType({
    "FCNTX": "Switch to VFIAX (TER 0.40%)",
    "PRGFX": "Switch to VWCE (TER 0.22%)",
    "VTSMX": "Switch to VUSA (TER 0.07%)",
    "AGTHX": "Switch to VWCE (TER 0.22%)",
    "AIVSX": "Switch to IWDA (TER 0.20%)",
    "ANCFX": "Switch to VWCE (TER 0.22%)",
    "CWGIX": "Switch to VWCE (TER 0.22%)",
})


# ========================================================================================
# LOOKUPS
# ========================================================================================

def get_broker_profile(name: str) -> BrokerFeeProfile:
    """Case-insensitive broker lookup, falling back to DEFAULT_BROKER."""
    return BROKER_FEES.get(name.strip().lower(), DEFAULT_BROKER)


def _matches_any(symbol: str, patterns: Tuple[str, ...]) -> bool:
    upper = symbol.upper()
    return any(pattern.upper() in upper for pattern in patterns)


def classify_symbol(symbol: str) -> AssetClass:
    """Guess the asset class of an unknown symbol from its name."""
    if _matches_any(symbol, ETF_PATTERNS):
        return ETF
    if _matches_any(symbol, FUND_PATTERNS):
        return FUND
    return STOCK


def get_asset_profile(symbol: str) -> AssetFeeProfile:
    """Exact, case-sensitive symbol lookup; unknown symbols get their class default."""
    profile = ASSET_FEES.get(symbol)
    if profile is not None:
        return profile
    return DEFAULT_ASSET_FEES[classify_symbol(symbol)]


def list_brokers() -> List[BrokerFeeProfile]:
    return list(BROKER_FEES.values())
