"""Best-effort market price enrichment.

Prices come from the public Yahoo Finance chart endpoint. Nothing in the fee
calculation depends on them: a symbol whose quote cannot be fetched keeps its
book value.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

import requests

from .errors import MarketDataError
from .models import MarketQuote, PricedHolding

logger = logging.getLogger(__name__)

YAHOO_FINANCE_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
DEFAULT_TIMEOUT = 10.0
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "application/json",
}

QuoteFetcher = Callable[[str], MarketQuote]


def fetch_market_price(
    symbol: str,
    session: Optional[requests.Session] = None,
    base_url: str = YAHOO_FINANCE_CHART_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> MarketQuote:
    """Fetch the latest regular-market price for ``symbol``.

    Raises:
        MarketDataError: on network/HTTP failure or an unexpected payload.
    """
    http = session or requests
    try:
        response = http.get(
            f"{base_url}{symbol}",
            params={"interval": "1d"},
            headers=DEFAULT_HEADERS,
            timeout=timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise MarketDataError(f"Failed to fetch market price for {symbol}: {exc}") from exc

    try:
        meta = payload["chart"]["result"][0]["meta"]
        price = float(meta["regularMarketPrice"])
        currency = str(meta.get("currency", ""))
        last_updated = datetime.fromtimestamp(int(meta["regularMarketTime"]), tz=timezone.utc).isoformat()
    except (KeyError, IndexError, TypeError, ValueError, OverflowError, OSError) as exc:
        raise MarketDataError(f"Invalid market data response for {symbol}") from exc

    return MarketQuote(price=price, currency=currency, last_updated=last_updated)


def _enrich_one(holding: PricedHolding, fetch: QuoteFetcher) -> PricedHolding:
    try:
        quote = fetch(holding.symbol)
    except MarketDataError as exc:
        logger.debug(f"Keeping book value for {holding.symbol}: {exc}")
        return holding
    return replace(holding, market_price=quote.price, total_value=holding.amount * quote.price)


def enrich_with_market_data(
    holdings: Sequence[PricedHolding],
    fetch: QuoteFetcher = fetch_market_price,
    max_workers: int = 4,
) -> List[PricedHolding]:
    """Attach market prices where available, one independent fetch per holding.

    A failed fetch leaves that holding unchanged; the batch never fails.
    """
    if not holdings:
        return []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        enriched = list(pool.map(lambda holding: _enrich_one(holding, fetch), holdings))

    found = sum(1 for holding in enriched if holding.market_price is not None)
    if found < len(enriched):
        logger.warning(f"Market data unavailable for {len(enriched) - found} of {len(enriched)} holdings")
    return enriched
