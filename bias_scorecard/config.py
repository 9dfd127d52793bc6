"""
Bias Scorecard - Configuration.

============================================================
PURPOSE
============================================================
Pillar weights, bias thresholds and refresh settings for
the currency bias scorecard.

Configuration can be loaded from:
- Default values
- Environment variables
- YAML config file

============================================================
WEIGHT INVARIANT
============================================================
The ten pillar weights MUST sum to 1.0 (tolerance 0.001).
An edited weight table that breaks the invariant is
rejected with InvalidConfigError. Weights are never
renormalized behind the caller's back.

============================================================
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from core.exceptions import InvalidConfigError
from .types import BiasPillar


logger = logging.getLogger(__name__)


WEIGHT_SUM_TOLERANCE = 0.001


# =============================================================
# PILLAR WEIGHTS
# =============================================================


@dataclass(frozen=True)
class PillarWeights:
    """
    Fixed weight of each pillar in the weighted bias score.

    Policy dominates; labor, politics and financial conditions
    are tie-breakers.
    """

    policy: float = 0.25
    inflation: float = 0.15
    growth: float = 0.15
    labor: float = 0.05
    external: float = 0.10
    terms_of_trade: float = 0.10
    fiscal: float = 0.05
    politics: float = 0.05
    financial_conditions: float = 0.05
    valuation: float = 0.05

    def __post_init__(self) -> None:
        """Validate each weight and the sum invariant."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(f"weights.{f.name}", value, "weight must be within [0, 1]")

        total = self.total()
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise InvalidConfigError("weights", total, "pillar weights must sum to 1.0")

    def total(self) -> float:
        """Get sum of all weights."""
        return sum(getattr(self, f.name) for f in fields(self))

    def get_weight(self, pillar: BiasPillar) -> float:
        """Get weight for a specific pillar."""
        return getattr(self, pillar.value.lower())

    def to_dict(self) -> Dict[str, float]:
        """Weights keyed by pillar name."""
        return {pillar.value: self.get_weight(pillar) for pillar in BiasPillar.all_pillars()}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PillarWeights":
        """
        Build weights from a pillar-name mapping.

        Pillars not named keep their default weight. Unknown
        names are rejected so typos cannot pass unnoticed.
        """
        kwargs: Dict[str, float] = {}
        for key, value in mapping.items():
            pillar = BiasPillar.parse(key)
            if pillar is None:
                raise InvalidConfigError(f"weights.{key}", value, "unknown pillar")
            try:
                kwargs[pillar.value.lower()] = float(value)
            except (TypeError, ValueError):
                raise InvalidConfigError(f"weights.{key}", value, "weight must be a number")
        return cls(**kwargs)


# =============================================================
# BIAS THRESHOLDS
# =============================================================


@dataclass(frozen=True)
class BiasThresholds:
    """
    Thresholds for classifying the weighted bias score.

    - BULLISH: score >= bullish_at
    - BEARISH: score <= bearish_at
    - NEUTRAL: otherwise
    """

    bullish_at: float = 0.6
    bearish_at: float = -0.6

    def __post_init__(self) -> None:
        if self.bearish_at >= self.bullish_at:
            raise InvalidConfigError(
                "thresholds.bearish_at", self.bearish_at, "must be below bullish_at"
            )

    def to_dict(self) -> Dict[str, float]:
        return {
            "bullish_at": self.bullish_at,
            "bearish_at": self.bearish_at,
        }


# =============================================================
# MAIN CONFIGURATION
# =============================================================


@dataclass(frozen=True)
class BiasScorecardConfig:
    """Master configuration for the bias scorecard store."""

    weights: PillarWeights = field(default_factory=PillarWeights)
    thresholds: BiasThresholds = field(default_factory=BiasThresholds)

    # Accepted pillar score range (inclusive)
    min_score: float = -2.0
    max_score: float = 2.0

    # Rounding applied to the weighted bias score
    score_decimals: int = 2

    # Periodic recompute interval
    recompute_interval_seconds: float = 300.0   # 5 minutes

    def __post_init__(self) -> None:
        if self.min_score >= self.max_score:
            raise InvalidConfigError("min_score", self.min_score, "must be below max_score")
        if self.recompute_interval_seconds <= 0:
            raise InvalidConfigError(
                "recompute_interval_seconds",
                self.recompute_interval_seconds,
                "must be positive",
            )

    @classmethod
    def from_env(cls) -> "BiasScorecardConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - BIAS_WEIGHT_<PILLAR> (e.g. BIAS_WEIGHT_POLICY)
        - BIAS_BULLISH_THRESHOLD
        - BIAS_BEARISH_THRESHOLD
        - BIAS_RECOMPUTE_INTERVAL_SECONDS
        """
        weight_overrides: Dict[str, str] = {}
        for pillar in BiasPillar.all_pillars():
            raw = os.getenv(f"BIAS_WEIGHT_{pillar.value}")
            if raw:
                weight_overrides[pillar.value] = raw

        defaults = BiasThresholds()
        thresholds = BiasThresholds(
            bullish_at=_env_float("BIAS_BULLISH_THRESHOLD", defaults.bullish_at),
            bearish_at=_env_float("BIAS_BEARISH_THRESHOLD", defaults.bearish_at),
        )

        return cls(
            weights=PillarWeights.from_mapping(weight_overrides),
            thresholds=thresholds,
            recompute_interval_seconds=_env_float(
                "BIAS_RECOMPUTE_INTERVAL_SECONDS",
                cls.recompute_interval_seconds,
            ),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BiasScorecardConfig":
        """
        Load configuration from YAML file.

        Expected layout:

            weights:
              POLICY: 0.25
              ...
            thresholds:
              bullish: 0.6
              bearish: -0.6
            recompute_interval_seconds: 300

        An unreadable file falls back to defaults. A readable file
        with invalid values raises InvalidConfigError.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load YAML config from {path}: {e}")
            return cls()

        if not isinstance(data, Mapping):
            raise InvalidConfigError("yaml", data, "document must be a mapping")

        kwargs: Dict[str, Any] = {}

        if "weights" in data:
            weights = data["weights"] or {}
            if not isinstance(weights, Mapping):
                raise InvalidConfigError("weights", weights, "must be a mapping")
            kwargs["weights"] = PillarWeights.from_mapping(weights)

        if "thresholds" in data:
            t = data["thresholds"] or {}
            if not isinstance(t, Mapping):
                raise InvalidConfigError("thresholds", t, "must be a mapping")
            defaults = BiasThresholds()
            kwargs["thresholds"] = BiasThresholds(
                bullish_at=_yaml_float("thresholds.bullish", t.get("bullish", defaults.bullish_at)),
                bearish_at=_yaml_float("thresholds.bearish", t.get("bearish", defaults.bearish_at)),
            )

        if "recompute_interval_seconds" in data:
            kwargs["recompute_interval_seconds"] = _yaml_float(
                "recompute_interval_seconds", data["recompute_interval_seconds"]
            )

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": self.weights.to_dict(),
            "thresholds": self.thresholds.to_dict(),
            "min_score": self.min_score,
            "max_score": self.max_score,
            "score_decimals": self.score_decimals,
            "recompute_interval_seconds": self.recompute_interval_seconds,
        }


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidConfigError(name, raw, "must be a number")


def _yaml_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidConfigError(key, value, "must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidConfigError(key, value, "must be a number")


# =============================================================
# GLOBAL CONFIG SINGLETON
# =============================================================


_default_config: Optional[BiasScorecardConfig] = None


def get_default_config() -> BiasScorecardConfig:
    """Return the built-in configuration."""
    return BiasScorecardConfig()


def get_config() -> BiasScorecardConfig:
    """Get the global scorecard configuration (loaded from env once)."""
    global _default_config
    if _default_config is None:
        _default_config = BiasScorecardConfig.from_env()
    return _default_config


def set_config(config: Optional[BiasScorecardConfig]) -> None:
    """Set the global scorecard configuration (None resets it)."""
    global _default_config
    _default_config = config
