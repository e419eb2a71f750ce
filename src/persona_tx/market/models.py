"""
Market data types consumed by the wallet host.

The transaction core does not fetch prices; these types describe what a
price feed returns so hosts can plug any provider in.
"""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class MarketTicker(BaseModel):
    """Latest price of a token in one currency."""
    token: str
    currency: str
    price: float
    date: Optional[datetime] = None
    change24h: Optional[float] = None

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def id(self) -> str:
        return f"{self.token}/{self.currency}"


class HistoricalSeries(BaseModel):
    """Chart-ready price series."""
    labels: List[str] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)
    min: Optional[float] = None
    max: Optional[float] = None

    model_config = {"frozen": True}


class HistoryWindow(Enum):
    """History presets: (points, resolution, label format)."""
    DAY = (24, "hour", "%H:%M")
    WEEK = (7, "day", "%a")
    MONTH = (30, "day", "%d")
    QUARTER = (120, "day", "%d.%m")
    YEAR = (365, "day", "%d.%m")

    def __init__(self, limit: int, resolution: str, date_format: str):
        self.limit = limit
        self.resolution = resolution
        self.date_format = date_format

    @classmethod
    def parse(cls, name: str) -> HistoryWindow:
        """Look a window up by case-insensitive name ("day", "Week", ...)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown history window: {name}")


@runtime_checkable
class PriceFeed(Protocol):
    """Price provider interface; transport is up to the implementation."""

    async def fetch_ticker(self, token: str) -> Optional[List[MarketTicker]]:
        """Latest tickers for ``token``, one per quoted currency."""
        ...

    async def fetch_history(self, token: str, currency: str,
                            window: HistoryWindow) -> Optional[HistoricalSeries]:
        """Price history of ``token`` in ``currency`` over ``window``."""
        ...


__all__ = ["MarketTicker", "HistoricalSeries", "HistoryWindow", "PriceFeed"]
