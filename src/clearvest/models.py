"""Data models for portfolio fee analysis."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AssetClass(str, Enum):
    """Classification used to pick a default expense ratio and suggestion."""

    ETF = "ETF"
    STOCK = "STOCK"
    FUND = "FUND"


@dataclass(frozen=True)
class RawHolding:
    """A single holding as entered by the user or produced by the generator."""

    symbol: str
    amount: float  # EUR, always > 0
    broker_name: str


@dataclass(frozen=True)
class PricedHolding:
    """A holding with every annual fee component resolved."""

    symbol: str
    amount: float
    broker_name: str
    expense_ratio: float
    asset_class: AssetClass
    fx_markup_rate: float
    trading_fee_amount: float
    platform_fee_annual: float
    total_annual_cost: float
    cost_percent: float
    suggestion: str
    total_value: float
    market_price: Optional[float] = None


@dataclass(frozen=True)
class BrokerFeeProfile:
    """Fee schedule of a broker or platform."""

    name: str
    fx_markup_rate: float
    trading_fee_amount: float
    monthly_platform_fee: float
    # Plausible TER range of assets offered on the platform; informational only.
    min_ter: float
    max_ter: float


@dataclass(frozen=True)
class AssetFeeProfile:
    """Expense ratio and classification of a known asset."""

    expense_ratio: float
    asset_class: AssetClass


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: float
    total_cost: float
    average_cost_percent: float
    potential_savings: float
    asset_count: int
    broker_count: int


@dataclass(frozen=True)
class FeeBreakdown:
    ter_fees: float
    trading_fees: float
    fx_fees: float
    platform_fees: float


@dataclass(frozen=True)
class OptimizationSuggestion:
    symbol: str
    current_cost: float
    suggested_alternative: str
    potential_saving: float
    reason: str
    priority: str  # "HIGH", "MEDIUM", "LOW"


@dataclass(frozen=True)
class ForecastPoint:
    year: int
    current: int
    optimized: int
    difference: int


@dataclass(frozen=True)
class MarketQuote:
    price: float
    currency: str
    last_updated: str  # ISO timestamp


@dataclass(frozen=True)
class AdvisorResponse:
    content: str
    suggestions: List[str] = field(default_factory=list)
