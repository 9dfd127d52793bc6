"""
Event Sentiment - Configuration.

============================================================
PURPOSE
============================================================
Every score weight and threshold used by the analysis
steps, in one immutable place.

============================================================
SCORE RATIONALE
============================================================
Scores live in an additive integer space:
- A rate cut (-30) outweighs a rate hike (+25)
- A committee cut majority (-35) is the strongest single
  signal of the model
- A split committee reads slightly bearish (-10)

Classification: BULLISH at >= 20, BEARISH at <= -20.

============================================================
CONFIDENCE RATIONALE
============================================================
Confidence is the running maximum of step confidences,
starting at 50, clamped to [60, 95] at the end.

============================================================
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

from core.exceptions import InvalidConfigError


@dataclass(frozen=True)
class SentimentAnalyzerConfig:
    """Configuration for the event sentiment analyzer."""

    # --------------------------------------------------------
    # Classification and confidence bounds
    # --------------------------------------------------------
    bullish_score_threshold: int = 20         # BULLISH if score >= 20
    bearish_score_threshold: int = -20        # BEARISH if score <= -20
    base_confidence: int = 50
    min_confidence: int = 60
    max_confidence: int = 95

    # --------------------------------------------------------
    # Step 1: central-bank policy
    # --------------------------------------------------------
    policy_step_confidence: int = 70
    rate_hike_score: int = 25
    rate_cut_score: int = -30
    rate_cut_confidence: int = 85
    policy_surprise_threshold: float = 0.1    # |actual - expected| > 0.1
    policy_surprise_score: int = 15
    policy_surprise_confidence_boost: int = 10

    # --------------------------------------------------------
    # Step 2: committee vote split
    # --------------------------------------------------------
    vote_step_confidence: int = 80
    cut_majority_score: int = -35
    hike_majority_score: int = 30
    majority_confidence: int = 90
    split_vote_max_gap: int = 1               # |cut - hike| <= 1
    split_vote_score: int = -10
    split_vote_confidence: int = 70
    dovish_share_threshold_pct: float = 40.0  # cut share > 40%

    # --------------------------------------------------------
    # Step 3: policy trajectory
    # --------------------------------------------------------
    easing_trajectory_score: int = -25
    tightening_trajectory_score: int = 20
    trajectory_surprise_threshold: float = 0.1
    trajectory_surprise_score: int = 10

    # --------------------------------------------------------
    # Step 4: labor market
    # --------------------------------------------------------
    claims_miss_score: int = -15
    claims_deterioration_pct: float = 5.0     # claims > 5% above expected
    claims_deterioration_score: int = -10
    claims_beat_score: int = 10
    nfp_surprise_threshold: float = 50_000.0  # jobs vs expected
    nfp_miss_score: int = -25
    nfp_beat_score: int = 20

    def __post_init__(self) -> None:
        if self.bearish_score_threshold >= self.bullish_score_threshold:
            raise InvalidConfigError(
                "bearish_score_threshold",
                self.bearish_score_threshold,
                "must be below bullish_score_threshold",
            )
        if self.min_confidence > self.max_confidence:
            raise InvalidConfigError(
                "min_confidence",
                self.min_confidence,
                "must not exceed max_confidence",
            )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def get_default_config() -> SentimentAnalyzerConfig:
    """Return the default analyzer configuration."""
    return SentimentAnalyzerConfig()
