"""
Tests for the Event Sentiment Analyzer.

============================================================
PURPOSE
============================================================
Verify the step scoring rules, aggregation, classification,
confidence handling and the result wire format.

TEST PRINCIPLES:
- Deterministic: same observation = same result
- Rationale order follows step order
- Missing optional data skips a step

============================================================
"""

import json
import pytest

from core.exceptions import InvalidConfigError, InvalidObservation, UnsupportedCurrency
from core.types import Currency, MarketDirection
from event_sentiment import (
    AnalysisStep,
    CentralBankPolicyAnalyzer,
    EconomicEventObservation,
    EventCategory,
    EventSentimentAnalyzer,
    LaborMarketAnalyzer,
    PolicyTrajectoryAnalyzer,
    SentimentAnalyzerConfig,
    SentimentResult,
    VoteSplit,
    VoteSplitAnalyzer,
    analyze_event,
    clamp_confidence,
    classify_sentiment,
    format_sentiment_summary,
)


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def analyzer():
    return EventSentimentAnalyzer()


def rate_decision(actual, previous, expected=None, votes=None, currency="GBP"):
    return EconomicEventObservation(
        title="BOE Interest Rate Decision",
        currency=currency,
        category=EventCategory.INTEREST_RATE,
        actual=actual,
        expected=expected,
        previous=previous,
        vote_split=votes,
    )


def claims(actual, expected, previous=None):
    return EconomicEventObservation(
        title="US Unemployment Claims",
        currency="USD",
        category=EventCategory.UNEMPLOYMENT_CLAIMS,
        actual=actual,
        expected=expected,
        previous=previous,
    )


def payrolls(actual, expected):
    return EconomicEventObservation(
        title="US Non-Farm Payrolls",
        currency="USD",
        category=EventCategory.NON_FARM_PAYROLLS,
        actual=actual,
        expected=expected,
    )


# ============================================================
# REFERENCE SCENARIOS
# ============================================================

class TestReferenceScenarios:
    """End-to-end scenarios with known outcomes."""

    def test_boe_cut_majority_vote(self, analyzer):
        observation = rate_decision(5.25, 5.25, expected=5.25, votes=VoteSplit(hike=0, cut=5, hold=4))

        result = analyzer.analyze(observation)

        assert result.score == -35
        assert result.sentiment == MarketDirection.BEARISH
        assert result.confidence >= 90
        assert result.reasoning == (
            "Dovish majority: 5/9 members voted for rate cuts",
            "Central bank committee shows concern about economic outlook",
            "56% of committee favors easing - significant dovish sentiment",
        )
        assert result.economic_factors == ()

    def test_unemployment_claims_small_miss(self, analyzer):
        result = analyzer.analyze(claims(226, 221, previous=220))

        assert result.score == -15
        assert result.sentiment == MarketDirection.NEUTRAL
        assert result.confidence == 60
        assert result.reasoning == ("Unemployment claims rose to 226K vs 221K expected",)
        assert result.economic_factors == ()

    def test_nfp_major_miss(self, analyzer):
        result = analyzer.analyze(payrolls(100000, 160000))

        assert result.score == -25
        assert result.sentiment == MarketDirection.BEARISH
        assert any("job creation slowdown" in f for f in result.economic_factors)
        assert result.reasoning == ("Major NFP miss: 100000 vs 160000 expected",)
        assert result.is_bearish

    def test_rate_cut_in_line_with_expectations(self, analyzer):
        result = analyzer.analyze(rate_decision(4.00, 4.25, expected=4.00))

        assert result.score == -55
        assert result.sentiment == MarketDirection.BEARISH
        assert result.confidence == 85
        assert result.reasoning == (
            "Rate CUT from 4.25% to 4% - Major dovish shift",
            "Policy easing trajectory: 4.25% -> 4%",
            "Central bank pivoting to support economic growth",
        )
        assert result.economic_factors == ("Monetary easing - Economic concerns",)


# ============================================================
# STEP 1: CENTRAL-BANK POLICY
# ============================================================

class TestCentralBankPolicy:
    """Tests for the rate-decision step."""

    def test_rate_hike(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(5.25, 5.0))

        assert outcome.step == AnalysisStep.CENTRAL_BANK_POLICY
        assert outcome.score == 25
        assert outcome.confidence == 70
        assert outcome.reasoning == ("Rate increase from 5% to 5.25% - Hawkish policy",)
        assert outcome.factors == ("Monetary tightening cycle",)

    def test_rate_cut_raises_confidence(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(4.0, 4.25))

        assert outcome.score == -30
        assert outcome.confidence == 85

    def test_dovish_surprise(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(4.0, 4.25, expected=4.25))

        assert outcome.score == -45
        assert outcome.confidence == 95
        assert "More dovish than market expected" in outcome.reasoning

    def test_hawkish_surprise(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(5.5, 5.0, expected=5.25))

        assert outcome.score == 40
        assert outcome.confidence == 80
        assert outcome.reasoning[-1] == "More hawkish than market expected"

    def test_small_deviation_is_not_a_surprise(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(5.25, 5.0, expected=5.2))

        assert outcome.score == 25
        assert outcome.confidence == 70

    def test_hold_without_surprise(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(5.0, 5.0, expected=5.0))

        assert outcome.score == 0
        assert outcome.confidence == 70
        assert outcome.reasoning == ()

    def test_missing_previous_skips_rules(self):
        outcome = CentralBankPolicyAnalyzer().analyze(rate_decision(5.0, None, expected=4.0))

        assert outcome.score == 0
        assert outcome.reasoning == ()

    def test_applies_to_rate_decisions_only(self):
        step = CentralBankPolicyAnalyzer()

        assert step.applies(rate_decision(5.0, 5.0))
        assert not step.applies(claims(230, 220))


# ============================================================
# STEP 2: VOTE SPLIT
# ============================================================

class TestVoteSplit:
    """Tests for the committee vote step."""

    def _analyze(self, hike, cut, hold):
        observation = rate_decision(5.0, 5.0, votes=VoteSplit(hike=hike, cut=cut, hold=hold))
        return VoteSplitAnalyzer().analyze(observation)

    def test_hike_majority(self):
        outcome = self._analyze(5, 0, 4)

        assert outcome.score == 30
        assert outcome.confidence == 90
        assert outcome.reasoning == (
            "Hawkish majority: 5/9 members voted for rate hikes",
            "Central bank committee shows inflation concerns",
        )

    def test_split_committee(self):
        outcome = self._analyze(2, 3, 4)

        assert outcome.score == -10
        assert outcome.confidence == 70
        assert outcome.reasoning == (
            "Split committee decision shows policy uncertainty",
            "Market may anticipate more dovish moves ahead",
        )

    def test_hold_majority_with_wide_gap(self):
        outcome = self._analyze(0, 3, 6)

        assert outcome.score == 0
        assert outcome.confidence == 80
        assert outcome.reasoning == ()

    def test_dovish_share_line_rounds_half_up(self):
        outcome = self._analyze(3, 5, 0)

        assert outcome.reasoning[-1] == (
            "63% of committee favors easing - significant dovish sentiment"
        )

    def test_exactly_forty_percent_adds_no_line(self):
        outcome = self._analyze(1, 2, 2)

        assert outcome.reasoning == (
            "Split committee decision shows policy uncertainty",
            "Market may anticipate more dovish moves ahead",
        )

    def test_empty_committee(self):
        outcome = self._analyze(0, 0, 0)

        assert outcome.score == -10
        assert len(outcome.reasoning) == 2

    def test_applies_only_with_votes(self):
        step = VoteSplitAnalyzer()

        assert step.applies(rate_decision(5.0, 5.0, votes=VoteSplit(0, 5, 4)))
        assert not step.applies(rate_decision(5.0, 5.0))

    def test_negative_votes_rejected(self):
        with pytest.raises(InvalidObservation):
            VoteSplit(hike=-1, cut=5, hold=4)


# ============================================================
# STEP 3: POLICY TRAJECTORY
# ============================================================

class TestPolicyTrajectory:
    """Tests for the rate-path step."""

    def test_tightening(self):
        outcome = PolicyTrajectoryAnalyzer().analyze(rate_decision(5.25, 5.0))

        assert outcome.score == 20
        assert outcome.confidence is None
        assert outcome.reasoning == (
            "Policy tightening trajectory: 5% -> 5.25%",
            "Central bank maintaining inflation fight",
        )

    def test_easing_with_dovish_surprise(self):
        outcome = PolicyTrajectoryAnalyzer().analyze(rate_decision(4.0, 4.25, expected=4.25))

        assert outcome.score == -35
        assert outcome.reasoning[-1] == "dovish surprise vs market expectations (4.25%)"

    def test_hawkish_surprise_on_hold(self):
        outcome = PolicyTrajectoryAnalyzer().analyze(rate_decision(5.0, 5.0, expected=4.75))

        assert outcome.score == 10
        assert outcome.reasoning == ("hawkish surprise vs market expectations (4.75%)",)

    def test_requires_actual_and_previous(self):
        step = PolicyTrajectoryAnalyzer()

        assert not step.applies(rate_decision(5.0, None))
        assert step.applies(rate_decision(5.0, 4.75))


# ============================================================
# STEP 4: LABOR MARKET
# ============================================================

class TestLaborMarket:
    """Tests for the labor release step."""

    def test_claims_significant_deterioration(self):
        outcome = LaborMarketAnalyzer().analyze(claims(240, 220))

        assert outcome.score == -25
        assert outcome.reasoning == (
            "Unemployment claims rose to 240K vs 220K expected",
            "Significant labor market deterioration",
        )
        assert outcome.factors == ("Rising unemployment trend",)

    def test_claims_improvement(self):
        outcome = LaborMarketAnalyzer().analyze(claims(210, 220))

        assert outcome.score == 10
        assert outcome.reasoning == ("Unemployment claims improved to 210K vs 220K expected",)
        assert outcome.factors == ("Strengthening labor market",)

    def test_claims_in_line(self):
        outcome = LaborMarketAnalyzer().analyze(claims(220, 220))

        assert outcome.score == 0
        assert outcome.reasoning == ()

    def test_claims_without_expectation(self):
        outcome = LaborMarketAnalyzer().analyze(claims(230, None))

        assert outcome.score == 0

    def test_nfp_beat(self):
        outcome = LaborMarketAnalyzer().analyze(payrolls(250000, 180000))

        assert outcome.score == 20
        assert outcome.reasoning == ("Strong NFP beat: 250000 vs 180000 expected",)
        assert outcome.factors == ("Robust job creation",)

    def test_nfp_within_threshold(self):
        outcome = LaborMarketAnalyzer().analyze(payrolls(150000, 180000))

        assert outcome.score == 0

    def test_nfp_exactly_at_threshold(self):
        outcome = LaborMarketAnalyzer().analyze(payrolls(130000, 180000))

        assert outcome.score == 0

    def test_applies_to_labor_releases(self):
        step = LaborMarketAnalyzer()

        assert step.applies(claims(230, 220))
        assert step.applies(payrolls(200000, 180000))
        assert not step.applies(rate_decision(5.0, 5.0))


# ============================================================
# AGGREGATION
# ============================================================

class TestAggregation:
    """Tests for score and confidence aggregation."""

    def test_steps_run_in_order(self, analyzer):
        observation = rate_decision(4.0, 4.25, expected=4.25, votes=VoteSplit(0, 5, 4))

        outcomes = analyzer.explain(observation)

        assert [o.step for o in outcomes] == [
            AnalysisStep.CENTRAL_BANK_POLICY,
            AnalysisStep.VOTE_SPLIT,
            AnalysisStep.POLICY_TRAJECTORY,
        ]

    def test_reasoning_in_step_order(self, analyzer):
        observation = rate_decision(4.0, 4.25, expected=4.25, votes=VoteSplit(0, 5, 4))

        result = analyzer.analyze(observation)

        assert result.score == -30 - 15 - 35 - 25 - 10
        assert result.confidence == 95
        assert result.reasoning == (
            "Rate CUT from 4.25% to 4% - Major dovish shift",
            "More dovish than market expected",
            "Dovish majority: 5/9 members voted for rate cuts",
            "Central bank committee shows concern about economic outlook",
            "56% of committee favors easing - significant dovish sentiment",
            "Policy easing trajectory: 4.25% -> 4%",
            "Central bank pivoting to support economic growth",
            "dovish surprise vs market expectations (4.25%)",
        )

    def test_rate_hike_is_bullish(self, analyzer):
        result = analyzer.analyze(rate_decision(5.25, 5.0, expected=5.25))

        assert result.score == 45
        assert result.sentiment == MarketDirection.BULLISH
        assert result.is_bullish
        assert result.confidence == 70

    def test_uncategorized_event_is_neutral(self, analyzer):
        observation = EconomicEventObservation(
            title="Eurozone Flash PMI",
            currency="EUR",
            actual=51.2,
            expected=50.0,
        )

        result = analyzer.analyze(observation)

        assert result.score == 0
        assert result.sentiment == MarketDirection.NEUTRAL
        assert result.confidence == 60
        assert result.reasoning == ()

    def test_title_alone_does_not_trigger_steps(self, analyzer):
        observation = EconomicEventObservation(
            title="US Unemployment Claims",
            currency="USD",
            actual=260,
            expected=220,
        )

        assert analyzer.analyze(observation).score == 0

    def test_analysis_is_deterministic(self, analyzer):
        observation = claims(240, 220)

        assert analyzer.analyze(observation) == analyzer.analyze(observation)

    def test_analyze_event_helper(self):
        result = analyze_event(payrolls(100000, 160000))

        assert result.sentiment == MarketDirection.BEARISH

    def test_custom_config(self):
        config = SentimentAnalyzerConfig(bearish_score_threshold=-10)
        result = EventSentimentAnalyzer(config).analyze(claims(226, 221))

        assert result.sentiment == MarketDirection.BEARISH


class TestValidation:
    """Tests for required observation fields."""

    def test_missing_title(self, analyzer):
        observation = EconomicEventObservation(title="  ", currency="USD")

        with pytest.raises(InvalidObservation) as exc_info:
            analyzer.analyze(observation)

        assert exc_info.value.field == "title"

    def test_missing_currency(self, analyzer):
        observation = EconomicEventObservation(title="US CPI", currency=None)

        with pytest.raises(InvalidObservation) as exc_info:
            analyzer.analyze(observation)

        assert exc_info.value.field == "currency"

    @pytest.mark.parametrize("currency", ["", "   "])
    def test_blank_currency_is_missing(self, analyzer, currency):
        observation = EconomicEventObservation(title="US CPI", currency=currency)

        with pytest.raises(InvalidObservation) as exc_info:
            analyzer.analyze(observation)

        assert exc_info.value.field == "currency"

    def test_non_string_title(self, analyzer):
        observation = EconomicEventObservation(title=42, currency="USD")

        with pytest.raises(InvalidObservation) as exc_info:
            analyzer.analyze(observation)

        assert exc_info.value.field == "title"

    def test_none_observation(self, analyzer):
        with pytest.raises(InvalidObservation):
            analyzer.analyze(None)

    def test_unknown_currency(self):
        with pytest.raises(UnsupportedCurrency):
            EconomicEventObservation(title="SNB Rate Decision", currency="CHF")

    def test_unknown_category(self):
        with pytest.raises(InvalidObservation):
            EconomicEventObservation(title="US CPI", currency="USD", category="WEATHER")

    def test_string_category_normalized(self):
        observation = EconomicEventObservation(title="US CPI", currency="usd", category="inflation")

        assert observation.category == EventCategory.INFLATION
        assert observation.currency == Currency.USD


# ============================================================
# CLASSIFICATION & OUTPUT
# ============================================================

class TestClassification:
    """Tests for thresholds and confidence clamping."""

    @pytest.mark.parametrize("score,expected", [
        (20, MarketDirection.BULLISH),
        (19, MarketDirection.NEUTRAL),
        (-19, MarketDirection.NEUTRAL),
        (-20, MarketDirection.BEARISH),
        (0, MarketDirection.NEUTRAL),
    ])
    def test_classify_sentiment(self, score, expected):
        assert classify_sentiment(score) == expected

    @pytest.mark.parametrize("confidence,expected", [
        (50, 60),
        (60, 60),
        (85, 85),
        (105, 95),
    ])
    def test_clamp_confidence(self, confidence, expected):
        assert clamp_confidence(confidence) == expected

    def test_invalid_thresholds_rejected(self):
        with pytest.raises(InvalidConfigError):
            SentimentAnalyzerConfig(bullish_score_threshold=-30)


class TestResultSerialization:
    """Tests for the result wire format."""

    def test_to_dict(self, analyzer):
        data = analyzer.analyze(payrolls(100000, 160000)).to_dict()

        assert data == {
            "sentiment": "BEARISH",
            "confidence": 60,
            "reasoning": ["Major NFP miss: 100000 vs 160000 expected"],
            "economicFactors": ["Significant job creation slowdown"],
            "score": -25,
        }

    def test_round_trip_preserves_order(self, analyzer):
        observation = rate_decision(4.0, 4.25, expected=4.25, votes=VoteSplit(0, 5, 4))
        result = analyzer.analyze(observation)

        wire = json.loads(json.dumps(result.to_dict()))

        assert SentimentResult.from_dict(wire) == result
        assert wire["reasoning"] == list(result.reasoning)

    def test_summary_lists_reasoning(self, analyzer):
        summary = format_sentiment_summary(analyzer.analyze(claims(240, 220)))

        assert "Sentiment: BEARISH" in summary
        assert "Score: -25" in summary
        assert "  - Significant labor market deterioration" in summary
        assert "  - Rising unemployment trend" in summary
