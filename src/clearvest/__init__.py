"""clearvest package."""

from .calculation import price_holdings
from .generator import generate_sample_portfolio
from .models import AssetClass, PricedHolding, RawHolding
from .pipeline import analyze_portfolio, generate_report
from .sources.csv_upload import parse_portfolio_csv

__all__ = [
    "AssetClass",
    "PricedHolding",
    "RawHolding",
    "analyze_portfolio",
    "generate_report",
    "generate_sample_portfolio",
    "parse_portfolio_csv",
    "price_holdings",
]
