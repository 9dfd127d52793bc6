"""
Event Sentiment - Step Analyzers.

============================================================
PURPOSE
============================================================
One analyzer per analysis step. Each analyzer:
1. Decides whether it applies to an observation
2. Applies fixed, threshold-based scoring rules
3. Returns a StepOutcome with score, confidence and rationale

============================================================
DESIGN PRINCIPLES
============================================================
- Pure functions: same input = same output
- No shared state between calls
- Missing optional fields skip a rule, never fail
- Rationale strings are appended in rule order

============================================================
STEP ORDER
============================================================
1. Central-bank policy  (INTEREST_RATE events)
2. Committee vote split (vote split present)
3. Policy trajectory    (INTEREST_RATE, actual + previous)
4. Labor market         (claims / payroll releases)

Steps 1 and 3 both score the expectation surprise of the
same rate decision; both contributions apply.

============================================================
"""

from abc import ABC, abstractmethod
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from .config import SentimentAnalyzerConfig
from .types import (
    AnalysisStep,
    EconomicEventObservation,
    EventCategory,
    StepOutcome,
)


def _fmt(value: float) -> str:
    """Render a released value the way calendars print it (4.0 -> 4)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _fmt_pct(value: float) -> str:
    """Whole-number percentage, halves rounded up."""
    return str(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# ============================================================
# BASE ANALYZER
# ============================================================


class BaseStepAnalyzer(ABC):
    """Abstract base class for analysis steps."""

    def __init__(self, config: Optional[SentimentAnalyzerConfig] = None):
        self.config = config or SentimentAnalyzerConfig()

    @property
    @abstractmethod
    def step(self) -> AnalysisStep:
        """Return the step this analyzer implements."""
        pass

    @abstractmethod
    def applies(self, observation: EconomicEventObservation) -> bool:
        """Check whether this step runs for the observation."""
        pass

    @abstractmethod
    def analyze(self, observation: EconomicEventObservation) -> StepOutcome:
        """Score the observation."""
        pass


# ============================================================
# STEP 1: CENTRAL-BANK POLICY
# ============================================================


class CentralBankPolicyAnalyzer(BaseStepAnalyzer):
    """
    Score a rate decision against the previous rate and
    against market expectations.

    - Hike: +25
    - Cut: -30, confidence 85
    - |actual - expected| > 0.1: +/-15, confidence +10
    """

    @property
    def step(self) -> AnalysisStep:
        return AnalysisStep.CENTRAL_BANK_POLICY

    def applies(self, observation: EconomicEventObservation) -> bool:
        return observation.category == EventCategory.INTEREST_RATE

    def analyze(self, observation: EconomicEventObservation) -> StepOutcome:
        cfg = self.config
        score = 0
        confidence = cfg.policy_step_confidence
        reasoning: List[str] = []
        factors: List[str] = []

        if observation.has_rate_change_values:
            actual = observation.actual
            previous = observation.previous
            rate_change = actual - previous

            if rate_change > 0:
                score += cfg.rate_hike_score
                reasoning.append(
                    f"Rate increase from {_fmt(previous)}% to {_fmt(actual)}% - Hawkish policy"
                )
                factors.append("Monetary tightening cycle")
            elif rate_change < 0:
                score += cfg.rate_cut_score
                reasoning.append(
                    f"Rate CUT from {_fmt(previous)}% to {_fmt(actual)}% - Major dovish shift"
                )
                factors.append("Monetary easing - Economic concerns")
                confidence = cfg.rate_cut_confidence

            if observation.expected is not None:
                surprise = actual - observation.expected
                if abs(surprise) > cfg.policy_surprise_threshold:
                    if surprise > 0:
                        score += cfg.policy_surprise_score
                        reasoning.append("More hawkish than market expected")
                    else:
                        score -= cfg.policy_surprise_score
                        reasoning.append("More dovish than market expected")
                    confidence += cfg.policy_surprise_confidence_boost

        return StepOutcome(
            step=self.step,
            score=score,
            confidence=confidence,
            reasoning=tuple(reasoning),
            factors=tuple(factors),
        )


# ============================================================
# STEP 2: COMMITTEE VOTE SPLIT
# ============================================================


class VoteSplitAnalyzer(BaseStepAnalyzer):
    """
    Score the committee vote split of a rate decision.

    - Cut votes strictly largest: -35, confidence 90
    - Hike votes strictly largest: +30, confidence 90
    - Otherwise |cut - hike| <= 1: -10, confidence 70
    - Cut share > 40%: extra rationale line only
    """

    @property
    def step(self) -> AnalysisStep:
        return AnalysisStep.VOTE_SPLIT

    def applies(self, observation: EconomicEventObservation) -> bool:
        return observation.vote_split is not None

    def analyze(self, observation: EconomicEventObservation) -> StepOutcome:
        cfg = self.config
        votes = observation.vote_split
        score = 0
        confidence = cfg.vote_step_confidence
        reasoning: List[str] = []

        if votes.cut > votes.hold and votes.cut > votes.hike:
            score += cfg.cut_majority_score
            reasoning.append(
                f"Dovish majority: {votes.cut}/{votes.total} members voted for rate cuts"
            )
            reasoning.append("Central bank committee shows concern about economic outlook")
            confidence = cfg.majority_confidence
        elif votes.hike > votes.hold and votes.hike > votes.cut:
            score += cfg.hike_majority_score
            reasoning.append(
                f"Hawkish majority: {votes.hike}/{votes.total} members voted for rate hikes"
            )
            reasoning.append("Central bank committee shows inflation concerns")
            confidence = cfg.majority_confidence
        elif abs(votes.cut - votes.hike) <= cfg.split_vote_max_gap:
            score += cfg.split_vote_score
            reasoning.append("Split committee decision shows policy uncertainty")
            reasoning.append("Market may anticipate more dovish moves ahead")
            confidence = cfg.split_vote_confidence

        if votes.cut_share_pct > cfg.dovish_share_threshold_pct:
            reasoning.append(
                f"{_fmt_pct(votes.cut_share_pct)}% of committee favors easing - "
                f"significant dovish sentiment"
            )

        return StepOutcome(
            step=self.step,
            score=score,
            confidence=confidence,
            reasoning=tuple(reasoning),
        )


# ============================================================
# STEP 3: POLICY TRAJECTORY
# ============================================================


class PolicyTrajectoryAnalyzer(BaseStepAnalyzer):
    """
    Score the direction of the rate path.

    - Easing: -25
    - Tightening: +20
    - |actual - expected| > 0.1: +/-10
    """

    @property
    def step(self) -> AnalysisStep:
        return AnalysisStep.POLICY_TRAJECTORY

    def applies(self, observation: EconomicEventObservation) -> bool:
        return (
            observation.category == EventCategory.INTEREST_RATE
            and observation.has_rate_change_values
        )

    def analyze(self, observation: EconomicEventObservation) -> StepOutcome:
        cfg = self.config
        actual = observation.actual
        previous = observation.previous
        score = 0
        reasoning: List[str] = []

        trajectory = actual - previous
        if trajectory < 0:
            score += cfg.easing_trajectory_score
            reasoning.append(f"Policy easing trajectory: {_fmt(previous)}% -> {_fmt(actual)}%")
            reasoning.append("Central bank pivoting to support economic growth")
        elif trajectory > 0:
            score += cfg.tightening_trajectory_score
            reasoning.append(f"Policy tightening trajectory: {_fmt(previous)}% -> {_fmt(actual)}%")
            reasoning.append("Central bank maintaining inflation fight")

        expected = observation.expected
        if expected is not None and abs(actual - expected) > cfg.trajectory_surprise_threshold:
            surprise = "hawkish" if actual > expected else "dovish"
            if surprise == "hawkish":
                score += cfg.trajectory_surprise_score
            else:
                score -= cfg.trajectory_surprise_score
            reasoning.append(f"{surprise} surprise vs market expectations ({_fmt(expected)}%)")

        return StepOutcome(step=self.step, score=score, reasoning=tuple(reasoning))


# ============================================================
# STEP 4: LABOR MARKET
# ============================================================


class LaborMarketAnalyzer(BaseStepAnalyzer):
    """
    Score labor releases against expectations.

    Unemployment claims (higher is worse):
    - actual > expected: -15, another -10 when more than 5% above
    - actual < expected: +10

    Non-farm payrolls:
    - more than 50,000 below expected: -25
    - more than 50,000 above expected: +20
    """

    @property
    def step(self) -> AnalysisStep:
        return AnalysisStep.LABOR_MARKET

    def applies(self, observation: EconomicEventObservation) -> bool:
        return observation.category.is_labor_release

    def analyze(self, observation: EconomicEventObservation) -> StepOutcome:
        score = 0
        reasoning: List[str] = []
        factors: List[str] = []

        if observation.actual is not None and observation.expected is not None:
            if observation.category == EventCategory.UNEMPLOYMENT_CLAIMS:
                score = self._score_claims(observation, reasoning, factors)
            elif observation.category == EventCategory.NON_FARM_PAYROLLS:
                score = self._score_payrolls(observation, reasoning, factors)

        return StepOutcome(
            step=self.step,
            score=score,
            reasoning=tuple(reasoning),
            factors=tuple(factors),
        )

    def _score_claims(
        self,
        observation: EconomicEventObservation,
        reasoning: List[str],
        factors: List[str],
    ) -> int:
        cfg = self.config
        actual = observation.actual
        expected = observation.expected
        difference = actual - expected
        score = 0

        if difference > 0:
            score += cfg.claims_miss_score
            reasoning.append(
                f"Unemployment claims rose to {_fmt(actual)}K vs {_fmt(expected)}K expected"
            )
            if expected != 0 and difference / expected * 100 > cfg.claims_deterioration_pct:
                score += cfg.claims_deterioration_score
                reasoning.append("Significant labor market deterioration")
                factors.append("Rising unemployment trend")
        elif difference < 0:
            score += cfg.claims_beat_score
            reasoning.append(
                f"Unemployment claims improved to {_fmt(actual)}K vs {_fmt(expected)}K expected"
            )
            factors.append("Strengthening labor market")

        return score

    def _score_payrolls(
        self,
        observation: EconomicEventObservation,
        reasoning: List[str],
        factors: List[str],
    ) -> int:
        cfg = self.config
        actual = observation.actual
        expected = observation.expected
        difference = actual - expected

        if difference < -cfg.nfp_surprise_threshold:
            reasoning.append(f"Major NFP miss: {_fmt(actual)} vs {_fmt(expected)} expected")
            factors.append("Significant job creation slowdown")
            return cfg.nfp_miss_score
        if difference > cfg.nfp_surprise_threshold:
            reasoning.append(f"Strong NFP beat: {_fmt(actual)} vs {_fmt(expected)} expected")
            factors.append("Robust job creation")
            return cfg.nfp_beat_score

        return 0
