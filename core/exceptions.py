"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines all custom exceptions for the sentiment engine.

- Provides clear exception hierarchy
- Separates caller mistakes from configuration problems
- Includes context for debugging

============================================================
EXCEPTION HIERARCHY
============================================================
SentimentEngineError (base)
├── ConfigurationError
│   └── InvalidConfigError
└── ClientInputError
    ├── UnsupportedCurrency
    └── InvalidObservation

ClientInputError subclasses are 4xx-equivalent: the caller
sent something the engine does not accept. Anything else
escaping the engine is a programming defect.

============================================================
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# SEVERITY LEVELS
# ============================================================

class Severity(Enum):
    """Exception severity levels for logging."""

    LOW = "low"
    """Minor issue, informational."""

    MEDIUM = "medium"
    """Moderate issue, requires attention."""

    HIGH = "high"
    """Serious issue, the engine cannot start or serve."""


# ============================================================
# BASE EXCEPTION
# ============================================================

class SentimentEngineError(Exception):
    """
    Base exception for all sentiment engine errors.

    All exceptions carry:
    - severity: for logging
    - context: for debugging
    - timestamp: when the error occurred
    """

    default_severity: Severity = Severity.MEDIUM

    def __init__(
        self,
        message: str,
        severity: Optional[Severity] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)

        self.message = message
        self.severity = severity or self.default_severity
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging/responses."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_log_format(self) -> str:
        """Format exception for structured logging."""
        ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        line = f"[{self.severity.value.upper()}] {type(self).__name__}: {self.message}"
        if ctx_str:
            line += f" | {ctx_str}"
        return line


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(SentimentEngineError):
    """Error in configuration."""

    default_severity = Severity.HIGH

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if config_key:
            context["config_key"] = config_key
        if actual_value is not None:
            context["actual_value"] = str(actual_value)[:100]

        super().__init__(message, context=context, **kwargs)


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for {key}: {reason}",
            config_key=key,
            actual_value=value,
            context={"reason": reason},
        )


# ============================================================
# CLIENT INPUT ERRORS
# ============================================================

class ClientInputError(SentimentEngineError):
    """Caller supplied input the engine does not accept."""

    default_severity = Severity.LOW


class UnsupportedCurrency(ClientInputError):
    """Currency is outside the fixed supported set."""

    def __init__(self, currency: Any):
        super().__init__(
            message=f"Unsupported currency: {currency}",
            context={"currency": str(currency)[:20]},
        )
        self.currency = currency


class InvalidObservation(ClientInputError):
    """Event observation is structurally malformed."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        context: Dict[str, Any] = {}
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)[:100]

        super().__init__(message, context=context)
        self.field = field
