"""
Event Sentiment - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the event sentiment analyzer.

- EconomicEventObservation: one economic event (input)
- StepOutcome: contribution of one analysis step
- SentimentResult: directional judgment with rationale (output)

============================================================
DESIGN PRINCIPLES
============================================================
- All types are immutable
- Event category is an explicit tag; title matching happens
  at the ingestion boundary, never inside the analyzer
- Serialization matches the dashboard wire format (camelCase)

============================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from core.exceptions import InvalidObservation
from core.types import Currency, MarketDirection


# ============================================================
# ENUMS
# ============================================================


class EventCategory(str, Enum):
    """Category of an economic event."""

    INTEREST_RATE = "INTEREST_RATE"
    UNEMPLOYMENT_CLAIMS = "UNEMPLOYMENT_CLAIMS"
    NON_FARM_PAYROLLS = "NON_FARM_PAYROLLS"
    EMPLOYMENT = "EMPLOYMENT"
    INFLATION = "INFLATION"
    GDP = "GDP"
    OTHER = "OTHER"

    @property
    def is_labor_release(self) -> bool:
        """Labor releases with a dedicated scoring rule."""
        return self in (EventCategory.UNEMPLOYMENT_CLAIMS, EventCategory.NON_FARM_PAYROLLS)


class PolicyTone(str, Enum):
    """Qualitative tone of a policy statement."""

    HAWKISH = "HAWKISH"
    DOVISH = "DOVISH"
    NEUTRAL = "NEUTRAL"


class MarketSurprise(str, Enum):
    """Magnitude of the market surprise."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AnalysisStep(str, Enum):
    """Analysis steps in evaluation order."""

    CENTRAL_BANK_POLICY = "central_bank_policy"
    VOTE_SPLIT = "vote_split"
    POLICY_TRAJECTORY = "policy_trajectory"
    LABOR_MARKET = "labor_market"


# ============================================================
# INPUT DATA CONTRACTS
# ============================================================


@dataclass(frozen=True)
class VoteSplit:
    """
    Committee vote split of a rate decision.

    Pattern text is "hike-cut-hold", e.g. "0-5-4".
    """

    hike: int
    cut: int
    hold: int

    def __post_init__(self) -> None:
        for name in ("hike", "cut", "hold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidObservation(
                    f"Vote count '{name}' must be a non-negative integer",
                    field="votingPattern",
                    value=value,
                )

    @property
    def total(self) -> int:
        return self.hike + self.cut + self.hold

    @property
    def cut_share_pct(self) -> float:
        """Percentage of members voting to cut (0 when nobody voted)."""
        if self.total == 0:
            return 0.0
        return self.cut / self.total * 100

    def to_pattern(self) -> str:
        return f"{self.hike}-{self.cut}-{self.hold}"


@dataclass(frozen=True)
class EconomicEventObservation:
    """
    A single economic event observation.

    Read-only, one-shot input for the analyzer. Only title and
    currency are required; every other field is optional and
    steps whose fields are missing are skipped.
    """

    title: str
    currency: Optional[Currency]
    category: EventCategory = EventCategory.OTHER

    # Released values
    actual: Optional[float] = None
    expected: Optional[float] = None
    previous: Optional[float] = None

    # Structured extras
    vote_split: Optional[VoteSplit] = None
    policy_tone: Optional[PolicyTone] = None
    policy_change: Optional[str] = None
    market_surprise: Optional[MarketSurprise] = None

    # Raw type tag as received from the source
    event_type: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize currency and category given as strings."""
        if isinstance(self.currency, str) and not self.currency.strip():
            object.__setattr__(self, "currency", None)
        if isinstance(self.currency, str) and not isinstance(self.currency, Currency):
            object.__setattr__(self, "currency", Currency.parse(self.currency))
        if isinstance(self.category, str) and not isinstance(self.category, EventCategory):
            try:
                object.__setattr__(self, "category", EventCategory(self.category.strip().upper()))
            except ValueError:
                raise InvalidObservation(
                    f"Unknown event category: {self.category}",
                    field="category",
                    value=self.category,
                )

    @property
    def has_rate_change_values(self) -> bool:
        """Actual and previous are both present."""
        return self.actual is not None and self.previous is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the observation wire format."""
        additional: Dict[str, Any] = {}
        if self.vote_split is not None:
            additional["votingPattern"] = self.vote_split.to_pattern()
        if self.policy_tone is not None:
            additional["speechTone"] = self.policy_tone.value
        if self.policy_change is not None:
            additional["policyChange"] = self.policy_change
        if self.market_surprise is not None:
            additional["marketSurprise"] = self.market_surprise.value

        data: Dict[str, Any] = {
            "title": self.title,
            "currency": self.currency.value if self.currency else None,
            "category": self.category.value,
            "eventType": self.event_type,
            "actualValue": self.actual,
            "expectedValue": self.expected,
            "previousValue": self.previous,
        }
        if additional:
            data["additionalData"] = additional
        return data


# ============================================================
# OUTPUT DATA CONTRACTS
# ============================================================


@dataclass(frozen=True)
class StepOutcome:
    """
    Contribution of one analysis step.

    confidence is None for steps that do not carry a confidence
    opinion; the analyzer then leaves its running maximum alone.
    """

    step: AnalysisStep
    score: int = 0
    confidence: Optional[int] = None
    reasoning: Tuple[str, ...] = ()
    factors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SentimentResult:
    """
    Output of the event sentiment analyzer.

    ============================================================
    OUTPUT GUARANTEES
    ============================================================
    - sentiment: BULLISH if score >= 20, BEARISH if <= -20
    - confidence: integer within [60, 95]
    - reasoning / economic_factors: in step evaluation order

    ============================================================
    """

    sentiment: MarketDirection
    confidence: int
    reasoning: Tuple[str, ...] = ()
    economic_factors: Tuple[str, ...] = ()

    # Additive score behind the classification
    score: int = 0

    @property
    def is_bullish(self) -> bool:
        return self.sentiment == MarketDirection.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.sentiment == MarketDirection.BEARISH

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dashboard wire format."""
        return {
            "sentiment": self.sentiment.value,
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
            "economicFactors": list(self.economic_factors),
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentimentResult":
        return cls(
            sentiment=MarketDirection(data["sentiment"]),
            confidence=int(data["confidence"]),
            reasoning=tuple(data.get("reasoning", ())),
            economic_factors=tuple(data.get("economicFactors", ())),
            score=int(data.get("score", 0)),
        )
