"""
Bias Scorecard - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the currency bias scorecard.

A scorecard holds ten weighted pillar scores for one
currency and the bias derived from them.

============================================================
DESIGN PRINCIPLES
============================================================
- Scorecards are immutable values
- The store replaces a scorecard as a whole on every commit
- Readers can never mutate committed state
- Serialization matches the dashboard wire format (camelCase)

============================================================
BIAS PILLARS
============================================================
Ten macro dimensions, scored -2 (strongly bearish) to
+2 (strongly bullish):

POLICY, INFLATION, GROWTH, LABOR, EXTERNAL, TERMS_OF_TRADE,
FISCAL, POLITICS, FINANCIAL_CONDITIONS, VALUATION

============================================================
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.clock import from_iso8601, to_iso8601
from core.types import Currency, MarketDirection


INITIAL_RATIONALE = "init"
UPDATED_RATIONALE = "updated"


# ============================================================
# ENUMS
# ============================================================


class BiasPillar(str, Enum):
    """The ten macro dimensions of a currency scorecard."""

    POLICY = "POLICY"
    INFLATION = "INFLATION"
    GROWTH = "GROWTH"
    LABOR = "LABOR"
    EXTERNAL = "EXTERNAL"
    TERMS_OF_TRADE = "TERMS_OF_TRADE"
    FISCAL = "FISCAL"
    POLITICS = "POLITICS"
    FINANCIAL_CONDITIONS = "FINANCIAL_CONDITIONS"
    VALUATION = "VALUATION"

    @classmethod
    def all_pillars(cls) -> List["BiasPillar"]:
        """Return all pillars in scorecard order."""
        return list(cls)

    @classmethod
    def parse(cls, value: Any) -> Optional["BiasPillar"]:
        """
        Parse a pillar from an enum member or a name.

        Names match case-insensitively; "terms-of-trade" is
        accepted for TERMS_OF_TRADE.

        Returns:
            The pillar, or None for an unknown name
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            return None


# ============================================================
# PILLAR SCORE
# ============================================================


@dataclass(frozen=True)
class PillarScore:
    """
    Score for a single pillar.

    score: -2.0 to +2.0
    weight: fixed share of the weighted bias, copied from config
    """

    pillar: BiasPillar
    score: float
    weight: float
    rationale: str = INITIAL_RATIONALE

    @property
    def weighted_contribution(self) -> float:
        """Contribution of this pillar to the weighted bias score."""
        return self.score * self.weight

    def with_score(self, score: float, rationale: str = UPDATED_RATIONALE) -> "PillarScore":
        """Return a copy with a new score and rationale; weight is kept."""
        return replace(self, score=score, rationale=rationale)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pillar": self.pillar.value,
            "score": self.score,
            "weight": self.weight,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PillarScore":
        return cls(
            pillar=BiasPillar(data["pillar"]),
            score=float(data["score"]),
            weight=float(data["weight"]),
            rationale=data.get("rationale", INITIAL_RATIONALE),
        )


# ============================================================
# CURRENCY SCORECARD
# ============================================================


@dataclass(frozen=True)
class CurrencyScorecard:
    """
    Complete bias scorecard for one currency.

    ============================================================
    OUTPUT GUARANTEES
    ============================================================
    - pillars: exactly ten, one per BiasPillar, in pillar order
    - weighted_bias_score: round(sum(score * weight), 2)
    - bias: derived from weighted_bias_score only
    - updated_at: time of the last recompute (UTC)

    ============================================================
    """

    currency: Currency
    pillars: Tuple[PillarScore, ...]
    weighted_bias_score: float
    bias: MarketDirection
    updated_at: datetime

    def __post_init__(self) -> None:
        """Enforce one pillar score per pillar, in pillar order."""
        order = tuple(p.pillar for p in self.pillars)
        if order != tuple(BiasPillar.all_pillars()):
            raise ValueError(
                f"Scorecard for {self.currency.value} must hold every pillar exactly once "
                f"in order, got {[p.value for p in order]}"
            )

    def get_pillar(self, pillar: BiasPillar) -> PillarScore:
        """Get the score for a specific pillar."""
        for pillar_score in self.pillars:
            if pillar_score.pillar == pillar:
                return pillar_score
        raise KeyError(pillar)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dashboard wire format."""
        return {
            "currency": self.currency.value,
            "pillars": [p.to_dict() for p in self.pillars],
            "weightedBiasScore": self.weighted_bias_score,
            "bias": self.bias.value,
            "updatedAt": to_iso8601(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurrencyScorecard":
        return cls(
            currency=Currency.parse(data["currency"]),
            pillars=tuple(PillarScore.from_dict(p) for p in data["pillars"]),
            weighted_bias_score=float(data["weightedBiasScore"]),
            bias=MarketDirection(data["bias"]),
            updated_at=from_iso8601(data["updatedAt"]),
        )
