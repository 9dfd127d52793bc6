"""
Event Sentiment - Package.

============================================================
PURPOSE
============================================================
Scores a single economic event (rate decision, labor
release) into BULLISH / BEARISH / NEUTRAL for its currency,
with a confidence and human-readable rationale.

============================================================
ANALYSIS STEPS
============================================================
1. Central-bank policy (rate change and surprise)
2. Committee vote split
3. Policy trajectory
4. Labor market (claims, NFP)

Classification: BULLISH at score >= 20, BEARISH at <= -20.
Confidence: running max of step confidences, in [60, 95].

============================================================
USAGE
============================================================
    from event_sentiment import EventSentimentAnalyzer, observation_from_dict

    observation = observation_from_dict({
        "title": "BOE Interest Rate Decision",
        "currency": "GBP",
        "eventType": "INTEREST_RATE",
        "actualValue": 4.0,
        "expectedValue": 4.0,
        "previousValue": 4.25,
        "additionalData": {"votingPattern": "0-5-4"},
    })

    result = EventSentimentAnalyzer().analyze(observation)
    print(result.to_dict())

============================================================
"""

from .types import (
    EventCategory,
    PolicyTone,
    MarketSurprise,
    AnalysisStep,
    VoteSplit,
    EconomicEventObservation,
    StepOutcome,
    SentimentResult,
)

from .config import (
    SentimentAnalyzerConfig,
    get_default_config,
)

from .analyzers import (
    BaseStepAnalyzer,
    CentralBankPolicyAnalyzer,
    VoteSplitAnalyzer,
    PolicyTrajectoryAnalyzer,
    LaborMarketAnalyzer,
)

from .engine import (
    EventSentimentAnalyzer,
    analyze_event,
    classify_sentiment,
    clamp_confidence,
    format_sentiment_summary,
)

from .ingestion import (
    resolve_event_category,
    parse_vote_split,
    observation_from_dict,
)


__all__ = [
    # Types
    "EventCategory",
    "PolicyTone",
    "MarketSurprise",
    "AnalysisStep",
    "VoteSplit",
    "EconomicEventObservation",
    "StepOutcome",
    "SentimentResult",

    # Configuration
    "SentimentAnalyzerConfig",
    "get_default_config",

    # Analyzers
    "BaseStepAnalyzer",
    "CentralBankPolicyAnalyzer",
    "VoteSplitAnalyzer",
    "PolicyTrajectoryAnalyzer",
    "LaborMarketAnalyzer",

    # Engine
    "EventSentimentAnalyzer",
    "analyze_event",
    "classify_sentiment",
    "clamp_confidence",
    "format_sentiment_summary",

    # Ingestion
    "resolve_event_category",
    "parse_vote_split",
    "observation_from_dict",
]
