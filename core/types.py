"""
Core Module - Shared Types.

============================================================
RESPONSIBILITY
============================================================
Vocabulary shared by the bias scorecard and the event
sentiment analyzer.

Both components answer the same question ("is currency X
bullish or bearish right now") at different grain, so both
classify into the same MarketDirection values.

============================================================
"""

from enum import Enum
from typing import Any, List

from .exceptions import UnsupportedCurrency


class Currency(str, Enum):
    """
    Supported currencies.

    Extend by adding members; order is the enumeration order
    used by batch operations.
    """

    EUR = "EUR"
    USD = "USD"
    JPY = "JPY"
    GBP = "GBP"

    @classmethod
    def all_currencies(cls) -> List["Currency"]:
        """Return all currencies in enumeration order."""
        return list(cls)

    @classmethod
    def parse(cls, value: Any) -> "Currency":
        """
        Parse a currency from an enum member or a code string.

        Codes are matched case-insensitively.

        Raises:
            UnsupportedCurrency: If the value is not a supported currency
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedCurrency(value)


class MarketDirection(str, Enum):
    """Directional classification shared by bias and sentiment."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def from_thresholds(
        cls,
        value: float,
        bullish_at: float,
        bearish_at: float,
    ) -> "MarketDirection":
        """
        Classify a value against inclusive thresholds.

        BULLISH if value >= bullish_at, BEARISH if value <= bearish_at,
        NEUTRAL otherwise.
        """
        if value >= bullish_at:
            return cls.BULLISH
        if value <= bearish_at:
            return cls.BEARISH
        return cls.NEUTRAL
