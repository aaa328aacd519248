"""Per-SKU stock allocation from a raw inventory response."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from reorder.core.config import DEFAULT_ALLOCATION_PRIORITY


@dataclass(frozen=True, slots=True)
class StockQuote:
    """Resolved availability for one SKU."""

    sku: str
    total: float
    allocation: str | None
    stock: float

    @property
    def available(self) -> bool:
        return self.stock > 0


def _quantity(stock_data: dict[str, Any], key: str) -> float:
    value = stock_data.get(key)
    if value is None:
        return 0
    return float(value)


def allocate(
    stock_response: dict[str, Any],
    priority: Sequence[str] = DEFAULT_ALLOCATION_PRIORITY,
) -> list[StockQuote]:
    """Resolve each SKU in the response to a stock quote.

    SKUs with no positive total get a zero quote without an allocation.
    Otherwise the first source in ``priority`` holding positive stock wins;
    SKUs with a positive total but no positive source are dropped.
    """
    quotes: list[StockQuote] = []

    for entry in stock_response.get("skus", []):
        for sku, stock_data in entry.items():
            total = _quantity(stock_data, "total")
            if total <= 0:
                quotes.append(StockQuote(sku=sku, total=total, allocation=None, stock=0))
                continue

            for source in priority:
                qty = _quantity(stock_data, source)
                if qty > 0:
                    quotes.append(
                        StockQuote(sku=sku, total=total, allocation=source, stock=qty)
                    )
                    break

    return quotes


def available_quotes(quotes: list[StockQuote]) -> list[StockQuote]:
    return [quote for quote in quotes if quote.available]
