"""
Market data collaborator types for wallet hosts.
"""

from .models import MarketTicker, HistoricalSeries, HistoryWindow, PriceFeed
from .transform import transform_market_response, transform_historical_response, tickers_by_id
from .store import TickerStore

__all__ = [
    "MarketTicker",
    "HistoricalSeries",
    "HistoryWindow",
    "PriceFeed",
    "transform_market_response",
    "transform_historical_response",
    "tickers_by_id",
    "TickerStore",
]
