"""
Core Module Package.

This package contains the infrastructure components that
the scoring packages depend on.

Components:
- clock: Unified time abstraction
- exceptions: Custom exception hierarchy
- types: Currency and direction vocabulary
"""

from .clock import ClockFactory, ClockProtocol, MockClock, SystemClock, to_iso8601
from .exceptions import (
    ClientInputError,
    ConfigurationError,
    InvalidConfigError,
    InvalidObservation,
    SentimentEngineError,
    Severity,
    UnsupportedCurrency,
)
from .types import Currency, MarketDirection


__all__ = [
    # Clock
    "ClockFactory",
    "ClockProtocol",
    "MockClock",
    "SystemClock",
    "to_iso8601",

    # Exceptions
    "SentimentEngineError",
    "Severity",
    "ConfigurationError",
    "InvalidConfigError",
    "ClientInputError",
    "UnsupportedCurrency",
    "InvalidObservation",

    # Types
    "Currency",
    "MarketDirection",
]
