"""
Tests for Bias Scorecard configuration loading and validation.
"""

import pytest

from bias_scorecard import (
    BiasPillar,
    BiasScorecardConfig,
    BiasScorecardStore,
    BiasThresholds,
    PillarWeights,
    get_config,
    set_config,
)
from core.exceptions import ConfigurationError, InvalidConfigError


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture(autouse=True)
def reset_global_config():
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def clean_env(monkeypatch):
    for pillar in BiasPillar.all_pillars():
        monkeypatch.delenv(f"BIAS_WEIGHT_{pillar.value}", raising=False)
    for name in ("BIAS_BULLISH_THRESHOLD", "BIAS_BEARISH_THRESHOLD", "BIAS_RECOMPUTE_INTERVAL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================
# WEIGHTS
# ============================================================

class TestPillarWeights:
    """Tests for the weight table and its sum invariant."""

    def test_default_weights(self):
        weights = PillarWeights()

        assert weights.to_dict() == {
            "POLICY": 0.25,
            "INFLATION": 0.15,
            "GROWTH": 0.15,
            "LABOR": 0.05,
            "EXTERNAL": 0.10,
            "TERMS_OF_TRADE": 0.10,
            "FISCAL": 0.05,
            "POLITICS": 0.05,
            "FINANCIAL_CONDITIONS": 0.05,
            "VALUATION": 0.05,
        }
        assert weights.total() == pytest.approx(1.0, abs=0.001)

    def test_default_table_sums_to_one(self):
        assert sum(PillarWeights().to_dict().values()) == pytest.approx(1.0, abs=0.001)

    def test_sum_must_be_one(self):
        with pytest.raises(InvalidConfigError):
            PillarWeights(policy=0.30)

    def test_rebalanced_table_accepted(self):
        weights = PillarWeights(policy=0.20, valuation=0.10)

        assert weights.get_weight(BiasPillar.POLICY) == 0.20

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigError):
            PillarWeights(policy=-0.25, inflation=0.65)

    def test_from_mapping(self):
        weights = PillarWeights.from_mapping({"policy": 0.20, "GROWTH": 0.20})

        assert weights.get_weight(BiasPillar.POLICY) == 0.20
        assert weights.get_weight(BiasPillar.GROWTH) == 0.20

    def test_from_mapping_unknown_pillar(self):
        with pytest.raises(InvalidConfigError):
            PillarWeights.from_mapping({"MOOD": 0.1})

    def test_from_mapping_non_number(self):
        with pytest.raises(InvalidConfigError):
            PillarWeights.from_mapping({"POLICY": "a lot"})

    def test_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PillarWeights(labor=0.5)

        assert exc_info.value.context["config_key"] == "weights"


# ============================================================
# THRESHOLDS & MAIN CONFIG
# ============================================================

class TestBiasScorecardConfig:
    """Tests for the master configuration."""

    def test_defaults(self):
        config = BiasScorecardConfig()

        assert config.thresholds.bullish_at == 0.6
        assert config.thresholds.bearish_at == -0.6
        assert config.min_score == -2.0
        assert config.max_score == 2.0
        assert config.recompute_interval_seconds == 300.0

    def test_defaults_construct(self):
        config = BiasScorecardConfig()

        assert config.weights == PillarWeights()
        assert BiasScorecardStore(config=config).get_scorecard("USD").weighted_bias_score == 0.0

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(InvalidConfigError):
            BiasThresholds(bullish_at=-0.5, bearish_at=0.5)

    def test_non_positive_interval_rejected(self):
        with pytest.raises(InvalidConfigError):
            BiasScorecardConfig(recompute_interval_seconds=0)

    def test_to_dict(self):
        data = BiasScorecardConfig().to_dict()

        assert data["weights"]["POLICY"] == 0.25
        assert data["thresholds"] == {"bullish_at": 0.6, "bearish_at": -0.6}
        assert data["recompute_interval_seconds"] == 300.0


class TestFromEnv:
    """Tests for environment loading."""

    def test_defaults_without_env(self, clean_env):
        assert BiasScorecardConfig.from_env() == BiasScorecardConfig()

    def test_env_overrides(self, clean_env):
        clean_env.setenv("BIAS_WEIGHT_POLICY", "0.20")
        clean_env.setenv("BIAS_WEIGHT_VALUATION", "0.10")
        clean_env.setenv("BIAS_BULLISH_THRESHOLD", "0.8")
        clean_env.setenv("BIAS_RECOMPUTE_INTERVAL_SECONDS", "60")

        config = BiasScorecardConfig.from_env()

        assert config.weights.policy == 0.20
        assert config.thresholds.bullish_at == 0.8
        assert config.recompute_interval_seconds == 60.0

    def test_env_bad_number(self, clean_env):
        clean_env.setenv("BIAS_BULLISH_THRESHOLD", "high")

        with pytest.raises(InvalidConfigError):
            BiasScorecardConfig.from_env()

    def test_env_weights_must_sum(self, clean_env):
        clean_env.setenv("BIAS_WEIGHT_POLICY", "0.9")

        with pytest.raises(InvalidConfigError):
            BiasScorecardConfig.from_env()

    def test_get_config_caches(self, clean_env):
        first = get_config()

        assert get_config() is first

    def test_set_config(self):
        custom = BiasScorecardConfig(recompute_interval_seconds=10)
        set_config(custom)

        assert get_config() is custom


class TestFromYaml:
    """Tests for YAML loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "scorecard.yaml"
        path.write_text(
            "weights:\n"
            "  POLICY: 0.20\n"
            "  VALUATION: 0.10\n"
            "thresholds:\n"
            "  bullish: 0.7\n"
            "  bearish: -0.7\n"
            "recompute_interval_seconds: 120\n"
        )

        config = BiasScorecardConfig.from_yaml(path)

        assert config.weights.policy == 0.20
        assert config.thresholds.bullish_at == 0.7
        assert config.thresholds.bearish_at == -0.7
        assert config.recompute_interval_seconds == 120.0

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        config = BiasScorecardConfig.from_yaml(tmp_path / "missing.yaml")

        assert config == BiasScorecardConfig()

    def test_invalid_weights_raise(self, tmp_path):
        path = tmp_path / "scorecard.yaml"
        path.write_text("weights:\n  POLICY: 0.9\n")

        with pytest.raises(InvalidConfigError):
            BiasScorecardConfig.from_yaml(path)

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "scorecard.yaml"
        path.write_text("")

        assert BiasScorecardConfig.from_yaml(path) == BiasScorecardConfig()

    @pytest.mark.parametrize("content", [
        "thresholds:\n  bullish: high\n",
        "thresholds:\n  bearish: [1, 2]\n",
        "recompute_interval_seconds: soon\n",
        "thresholds: 0.6\n",
        "weights: [0.25, 0.75]\n",
        "- just\n- a list\n",
    ])
    def test_malformed_values_raise(self, tmp_path, content):
        path = tmp_path / "scorecard.yaml"
        path.write_text(content)

        with pytest.raises(InvalidConfigError):
            BiasScorecardConfig.from_yaml(path)

    def test_non_numeric_threshold_names_key(self, tmp_path):
        path = tmp_path / "scorecard.yaml"
        path.write_text("thresholds:\n  bullish: high\n")

        with pytest.raises(InvalidConfigError) as exc_info:
            BiasScorecardConfig.from_yaml(path)

        assert exc_info.value.context["config_key"] == "thresholds.bullish"
