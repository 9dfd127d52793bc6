"""
Event Sentiment - Analyzer.

============================================================
PURPOSE
============================================================
The EventSentimentAnalyzer turns one economic event
observation into a directional sentiment for its currency.

It orchestrates:
1. Input validation
2. Step analyzers, in fixed order
3. Score and confidence aggregation
4. Classification and confidence clamp

============================================================
DESIGN PRINCIPLES
============================================================
- Stateless: safe to share between threads and requests
- Deterministic: same observation = same result
- Delegates scoring rules to individual step analyzers
- Reads the explicit event category only

============================================================
USAGE
============================================================
    from event_sentiment import EventSentimentAnalyzer
    from event_sentiment import EconomicEventObservation, EventCategory

    analyzer = EventSentimentAnalyzer()

    observation = EconomicEventObservation(
        title="BOE Interest Rate Decision",
        currency="GBP",
        category=EventCategory.INTEREST_RATE,
        actual=4.0,
        expected=4.0,
        previous=4.25,
    )

    result = analyzer.analyze(observation)

    print(result.sentiment.value)   # BEARISH
    print(result.confidence)        # 85

============================================================
"""

import logging
from typing import List, Optional

from core.exceptions import InvalidObservation
from core.types import MarketDirection

from .analyzers import (
    BaseStepAnalyzer,
    CentralBankPolicyAnalyzer,
    VoteSplitAnalyzer,
    PolicyTrajectoryAnalyzer,
    LaborMarketAnalyzer,
)
from .config import SentimentAnalyzerConfig
from .types import EconomicEventObservation, SentimentResult, StepOutcome


logger = logging.getLogger(__name__)


class EventSentimentAnalyzer:
    """
    Main orchestrator for event sentiment analysis.

    ============================================================
    AGGREGATION
    ============================================================
    - score: sum of step scores, starting at 0
    - confidence: running maximum of step confidences,
      starting at 50, clamped to [60, 95] at the end
    - reasoning / factors: concatenated in step order

    ============================================================
    """

    def __init__(self, config: Optional[SentimentAnalyzerConfig] = None):
        """
        Initialize the analyzer.

        Args:
            config: Scoring configuration. Uses defaults if not provided.
        """
        self.config = config or SentimentAnalyzerConfig()

        self._steps: List[BaseStepAnalyzer] = [
            CentralBankPolicyAnalyzer(self.config),
            VoteSplitAnalyzer(self.config),
            PolicyTrajectoryAnalyzer(self.config),
            LaborMarketAnalyzer(self.config),
        ]

    def analyze(self, observation: EconomicEventObservation) -> SentimentResult:
        """
        Analyze one observation.

        Args:
            observation: Economic event observation

        Returns:
            SentimentResult with sentiment, confidence and rationale

        Raises:
            InvalidObservation: If title or currency is missing
        """
        outcomes = self.explain(observation)

        score = 0
        confidence = self.config.base_confidence
        reasoning: List[str] = []
        factors: List[str] = []

        for outcome in outcomes:
            score += outcome.score
            if outcome.confidence is not None:
                confidence = max(confidence, outcome.confidence)
            reasoning.extend(outcome.reasoning)
            factors.extend(outcome.factors)

        result = SentimentResult(
            sentiment=classify_sentiment(score, self.config),
            confidence=clamp_confidence(confidence, self.config),
            reasoning=tuple(reasoning),
            economic_factors=tuple(factors),
            score=score,
        )

        logger.debug(
            f"Analyzed '{observation.title}' ({observation.currency.value}): "
            f"score={score} sentiment={result.sentiment.value} "
            f"confidence={result.confidence}"
        )
        return result

    def explain(self, observation: EconomicEventObservation) -> List[StepOutcome]:
        """
        Run every applicable step and return the individual outcomes.

        Useful to see which step contributed what.
        """
        self._validate_observation(observation)
        return [
            step.analyze(observation)
            for step in self._steps
            if step.applies(observation)
        ]

    def _validate_observation(self, observation: EconomicEventObservation) -> None:
        if observation is None:
            raise InvalidObservation("Observation is required")

        if not isinstance(observation.title, str) or not observation.title.strip():
            raise InvalidObservation("Event title is required", field="title")

        if observation.currency is None:
            raise InvalidObservation("Event currency is required", field="currency")


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def analyze_event(
    observation: EconomicEventObservation,
    config: Optional[SentimentAnalyzerConfig] = None,
) -> SentimentResult:
    """
    Convenience function to analyze one observation.

    For repeated analysis, prefer a shared EventSentimentAnalyzer.
    """
    return EventSentimentAnalyzer(config=config).analyze(observation)


def classify_sentiment(
    score: int,
    config: Optional[SentimentAnalyzerConfig] = None,
) -> MarketDirection:
    """BULLISH if score >= 20, BEARISH if <= -20, NEUTRAL otherwise."""
    config = config or SentimentAnalyzerConfig()
    return MarketDirection.from_thresholds(
        score,
        bullish_at=config.bullish_score_threshold,
        bearish_at=config.bearish_score_threshold,
    )


def clamp_confidence(
    confidence: int,
    config: Optional[SentimentAnalyzerConfig] = None,
) -> int:
    """Clamp confidence to [60, 95]."""
    config = config or SentimentAnalyzerConfig()
    return max(config.min_confidence, min(config.max_confidence, int(confidence)))


def format_sentiment_summary(result: SentimentResult) -> str:
    """
    Format a human-readable sentiment summary.

    Useful for logging and dashboards.
    """
    lines = [
        "=" * 50,
        "EVENT SENTIMENT SUMMARY",
        "=" * 50,
        f"Sentiment: {result.sentiment.value}",
        f"Confidence: {result.confidence}%",
        f"Score: {result.score:+d}",
        "-" * 50,
        "Reasoning:",
    ]

    for line in result.reasoning:
        lines.append(f"  - {line}")

    if result.economic_factors:
        lines.append("Economic factors:")
        for factor in result.economic_factors:
            lines.append(f"  - {factor}")

    lines.append("=" * 50)
    return "\n".join(lines)
