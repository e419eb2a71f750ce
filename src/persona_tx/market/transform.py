"""
Provider response transformers.

Pure functions turning raw price-provider payloads into MarketTicker and
HistoricalSeries values.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .models import HistoricalSeries, MarketTicker


def transform_market_response(market_data: Mapping[str, Any], token: str,
                              currencies: Optional[Iterable[str]] = None) -> List[MarketTicker]:
    """
    Normalize a market data payload into tickers.

    Args:
        market_data: Payload with ``current_price`` (per currency),
            ``last_updated`` and ``price_change_percentage_24h``
        token: Token symbol the payload describes
        currencies: Currencies to keep (defaults to every quoted one)

    Returns:
        One ticker per currency that has a price
    """
    prices = market_data.get("current_price") or {}
    wanted = [c.lower() for c in currencies] if currencies is not None else list(prices)

    tickers = []
    for currency in wanted:
        price = prices.get(currency)
        if price is None:
            continue
        tickers.append(MarketTicker(
            token=token,
            currency=currency.upper(),
            price=price,
            date=market_data.get("last_updated"),
            change24h=market_data.get("price_change_percentage_24h"),
        ))
    return tickers


def transform_historical_response(points: Iterable[Mapping[str, Any]], date_format: str) -> HistoricalSeries:
    """
    Prepare historical data points for charts.

    Args:
        points: Items with ``time`` (unix seconds) and ``close``
        date_format: strftime format for the labels (UTC)

    Returns:
        Series with labels, values and their bounds
    """
    labels: List[str] = []
    values: List[float] = []
    for point in points:
        moment = datetime.fromtimestamp(point["time"], tz=timezone.utc)
        labels.append(moment.strftime(date_format))
        values.append(point["close"])

    return HistoricalSeries(
        labels=labels,
        values=values,
        min=min(values) if values else None,
        max=max(values) if values else None,
    )


def tickers_by_id(tickers: Iterable[MarketTicker]) -> Dict[str, MarketTicker]:
    """Index tickers by ``token/currency``."""
    return {ticker.id: ticker for ticker in tickers}


__all__ = ["transform_market_response", "transform_historical_response", "tickers_by_id"]
