"""
Bias Scorecard - Package.

============================================================
PURPOSE
============================================================
Holds a weighted macro scorecard per currency and derives
a directional bias from it.

============================================================
SCORING
============================================================
Each of ten pillars is scored -2..+2 and carries a fixed
weight (weights sum to 1.0):

    weightedBiasScore = round(sum(score * weight), 2)

Classification:
- BULLISH: weightedBiasScore >= 0.6
- BEARISH: weightedBiasScore <= -0.6
- NEUTRAL: otherwise

============================================================
USAGE
============================================================
    from bias_scorecard import BiasScorecardStore

    store = BiasScorecardStore()

    store.update_pillars("USD", {"POLICY": 2, "LABOR": 2})
    scorecard = store.get_scorecard("USD")

    print(scorecard.weighted_bias_score)   # 0.6
    print(scorecard.bias.value)            # BULLISH

============================================================
"""

from .types import (
    BiasPillar,
    PillarScore,
    CurrencyScorecard,
    INITIAL_RATIONALE,
    UPDATED_RATIONALE,
)

from .config import (
    PillarWeights,
    BiasThresholds,
    BiasScorecardConfig,
    get_default_config,
    get_config,
    set_config,
)

from .store import (
    BiasScorecardStore,
    compute_weighted_bias_score,
    classify_bias,
)

from .scheduler import RecomputeScheduler


__all__ = [
    # Types
    "BiasPillar",
    "PillarScore",
    "CurrencyScorecard",
    "INITIAL_RATIONALE",
    "UPDATED_RATIONALE",

    # Configuration
    "PillarWeights",
    "BiasThresholds",
    "BiasScorecardConfig",
    "get_default_config",
    "get_config",
    "set_config",

    # Store
    "BiasScorecardStore",
    "compute_weighted_bias_score",
    "classify_bias",

    # Scheduler
    "RecomputeScheduler",
]
