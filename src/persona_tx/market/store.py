"""
In-memory ticker cache.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .models import MarketTicker, PriceFeed

logger = logging.getLogger(__name__)


class TickerStore:
    """Latest ticker per ``token/currency``."""

    def __init__(self):
        self._tickers: Dict[str, MarketTicker] = {}

    def update(self, ticker: MarketTicker) -> None:
        self._tickers[ticker.id] = ticker

    def get(self, token: str, currency: str) -> Optional[MarketTicker]:
        return self._tickers.get(f"{token}/{currency.upper()}")

    def all(self) -> List[MarketTicker]:
        return list(self._tickers.values())

    def __len__(self) -> int:
        return len(self._tickers)

    async def refresh(self, feed: PriceFeed, token: str) -> int:
        """
        Pull the latest tickers for ``token`` from ``feed``.

        A feed answering ``None`` leaves the store unchanged; feed exceptions
        propagate to the caller.

        Returns:
            Number of tickers stored
        """
        tickers = await feed.fetch_ticker(token)
        if not tickers:
            logger.debug("No market data for %s", token)
            return 0
        for ticker in tickers:
            self.update(ticker)
        return len(tickers)


__all__ = ["TickerStore"]
