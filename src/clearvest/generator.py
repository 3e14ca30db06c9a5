"""Synthetic sample portfolios for demos and tests.

Portfolios hold 10-15 positions split roughly 60/30/10 between ETFs, stocks
and mutual funds. Brokers cluster around two primary platforms the way real
investors tend to concentrate their accounts.
"""
from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Sequence, Tuple

from .models import RawHolding

logger = logging.getLogger(__name__)

ETF_POOL: Tuple[str, ...] = (
    "VWCE", "IWDA", "EUNL", "VUSA", "CSPX", "MEUD", "VEUR", "IEMA", "VFEM", "AGGH",
    "IUSQ", "HMWO", "SAWD", "DBXW", "XDWD",
)
STOCK_POOL: Tuple[str, ...] = (
    "AAPL", "MSFT", "AMZN", "GOOGL", "FB", "TSLA", "NVDA", "BRK.B", "JPM", "JNJ",
    "V", "PG", "UNH", "HD", "BAC", "MA", "DIS", "PYPL", "CMCSA", "XOM",
)
FUND_POOL: Tuple[str, ...] = (
    "FCNTX", "VFIAX", "PRGFX", "VTSAX", "VTIAX", "AGTHX", "AIVSX", "VTSMX", "ANCFX", "CWGIX",
)
BROKER_POOL: Tuple[str, ...] = (
    "Interactive Brokers", "Degiro", "Robinhood", "Trade Republic", "Vanguard",
    "Fidelity", "Charles Schwab", "eToro", "Saxo Bank", "Scalable Capital",
)

MIN_HOLDINGS = 10
MAX_HOLDINGS = 15
ETF_SHARE = 0.6
STOCK_SHARE = 0.3

# EUR ranges per asset class
ETF_AMOUNT_RANGE = (5000, 30000)
STOCK_AMOUNT_RANGE = (2000, 15000)
FUND_AMOUNT_RANGE = (3000, 20000)

# 40% primary broker, 30% secondary, 30% any broker from the pool
PRIMARY_BROKER_CUTOFF = 0.4
SECONDARY_BROKER_CUTOFF = 0.7


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _draw_symbols(rng: random.Random, pool: Sequence[str], count: int) -> List[str]:
    if count > len(pool):
        logger.warning(f"Requested {count} symbols from a pool of {len(pool)}; drawing {len(pool)}")
        count = len(pool)
    return list(rng.sample(list(pool), count))


def _draw_amount(rng: random.Random, bounds: Tuple[int, int]) -> float:
    low, high = bounds
    return float(_round_half_up(low + rng.random() * (high - low)))


def _assign_brokers(rng: random.Random, count: int) -> List[str]:
    primary = rng.choice(BROKER_POOL)
    secondary = rng.choice(BROKER_POOL)  # may coincide with primary

    brokers: List[str] = []
    for _ in range(count):
        roll = rng.random()
        if roll < PRIMARY_BROKER_CUTOFF:
            brokers.append(primary)
        elif roll < SECONDARY_BROKER_CUTOFF:
            brokers.append(secondary)
        else:
            brokers.append(rng.choice(BROKER_POOL))
    return brokers


def generate_sample_portfolio(rng: Optional[random.Random] = None) -> List[RawHolding]:
    """Generate a random but realistic list of raw holdings.

    Args:
        rng: Randomness source exposing ``randint``, ``sample``, ``random`` and
            ``choice``. Pass a seeded ``random.Random`` for reproducible output.

    Returns:
        ETFs first, then stocks, then funds. Symbols are unique and every
        amount is a positive whole number of euros.
    """
    rng = rng or random.Random()

    size = rng.randint(MIN_HOLDINGS, MAX_HOLDINGS)
    etf_count = _round_half_up(size * ETF_SHARE)
    stock_count = _round_half_up(size * STOCK_SHARE)
    fund_count = max(0, size - etf_count - stock_count)

    selections = [
        (_draw_symbols(rng, ETF_POOL, etf_count), ETF_AMOUNT_RANGE),
        (_draw_symbols(rng, STOCK_POOL, stock_count), STOCK_AMOUNT_RANGE),
        (_draw_symbols(rng, FUND_POOL, fund_count), FUND_AMOUNT_RANGE),
    ]
    total = sum(len(symbols) for symbols, _ in selections)
    brokers = _assign_brokers(rng, total)

    portfolio: List[RawHolding] = []
    for symbols, bounds in selections:
        for symbol in symbols:
            portfolio.append(RawHolding(
                symbol=symbol,
                amount=_draw_amount(rng, bounds),
                broker_name=brokers[len(portfolio)],
            ))

    logger.debug(f"Generated sample portfolio with {len(portfolio)} holdings")
    return portfolio
