"""
Bias Scorecard - Store.

============================================================
PURPOSE
============================================================
The BiasScorecardStore owns one CurrencyScorecard per
supported currency for the lifetime of the process.

It:
1. Creates every scorecard at startup (all pillars neutral)
2. Applies partial pillar updates
3. Recomputes weighted bias score, bias and timestamp
4. Notifies listeners of every committed scorecard

============================================================
CONCURRENCY
============================================================
- Every mutation of a currency's scorecard runs under that
  currency's lock (read-modify-write is atomic per currency)
- Committed scorecards are immutable; reads return the
  latest committed value without locking
- Listeners are called after the lock is released

============================================================
INPUT TOLERANCE
============================================================
Malformed pillar values (non-numeric, bool, NaN/inf, out of
[-2, +2]) and unknown pillar names are skipped silently.
The pillar keeps its previous score and rationale.

============================================================
"""

import logging
import math
import numbers
import threading
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from core.clock import ClockFactory, ClockProtocol
from core.exceptions import UnsupportedCurrency
from core.types import Currency, MarketDirection

from .config import BiasScorecardConfig, BiasThresholds
from .types import (
    BiasPillar,
    CurrencyScorecard,
    INITIAL_RATIONALE,
    PillarScore,
    UPDATED_RATIONALE,
)


logger = logging.getLogger(__name__)


ScorecardListener = Callable[[CurrencyScorecard], None]


# ============================================================
# SCORING FUNCTIONS
# ============================================================


def compute_weighted_bias_score(pillars: Iterable[PillarScore], decimals: int = 2) -> float:
    """
    Sum of score * weight across pillars, rounded half up.

    Rounds the exact binary value of the sum, so 0.5949999... gives
    0.59 even though its shortest repr is 0.595.

    Args:
        pillars: Pillar scores of one scorecard
        decimals: Decimal places to keep

    Returns:
        Rounded weighted bias score
    """
    total = sum(p.weighted_contribution for p in pillars)
    quantum = Decimal(1).scaleb(-decimals)
    rounded = float(Decimal(total).quantize(quantum, rounding=ROUND_HALF_UP))
    # Avoid emitting -0.0
    return rounded if rounded != 0 else 0.0


def classify_bias(
    weighted_bias_score: float,
    thresholds: Optional[BiasThresholds] = None,
) -> MarketDirection:
    """
    Classify a weighted bias score.

    BULLISH if >= 0.6, BEARISH if <= -0.6, NEUTRAL otherwise
    (default thresholds).
    """
    thresholds = thresholds or BiasThresholds()
    return MarketDirection.from_thresholds(
        weighted_bias_score,
        bullish_at=thresholds.bullish_at,
        bearish_at=thresholds.bearish_at,
    )


# ============================================================
# STORE
# ============================================================


class BiasScorecardStore:
    """
    In-memory store of currency bias scorecards.

    ============================================================
    OPERATIONS
    ============================================================
    - get_scorecard(currency)
    - get_all_scorecards()
    - update_pillars(currency, pillar_scores)
    - update_pillars(None, pillar_scores)   (every currency)
    - recompute_all()

    ============================================================
    """

    def __init__(
        self,
        config: Optional[BiasScorecardConfig] = None,
        clock: Optional[ClockProtocol] = None,
        currencies: Optional[Sequence[Any]] = None,
    ):
        """
        Initialize the store with neutral scorecards.

        Args:
            config: Weights and thresholds. Uses defaults if not provided.
            clock: Clock for updatedAt. Uses the global clock if not provided.
            currencies: Supported currencies. Defaults to every Currency.
        """
        self.config = config or BiasScorecardConfig()
        self._clock = clock or ClockFactory.get_clock()

        if currencies is None:
            currencies = Currency.all_currencies()
        self._currencies: Tuple[Currency, ...] = tuple(
            dict.fromkeys(Currency.parse(c) for c in currencies)
        )

        self._locks: Dict[Currency, threading.Lock] = {
            c: threading.Lock() for c in self._currencies
        }
        self._scorecards: Dict[Currency, CurrencyScorecard] = {
            c: self._initial_scorecard(c) for c in self._currencies
        }

        self._listeners: List[ScorecardListener] = []
        self._listeners_lock = threading.Lock()

        logger.info(
            f"BiasScorecardStore initialized for {[c.value for c in self._currencies]}"
        )

    # --------------------------------------------------------
    # READS
    # --------------------------------------------------------

    @property
    def supported_currencies(self) -> Tuple[Currency, ...]:
        return self._currencies

    def get_scorecard(self, currency: Any) -> CurrencyScorecard:
        """
        Get the latest committed scorecard for a currency.

        Raises:
            UnsupportedCurrency: If the currency is not supported
        """
        return self._scorecards[self._resolve_currency(currency)]

    def get_all_scorecards(self) -> List[CurrencyScorecard]:
        """Get every scorecard in enumeration order."""
        return [self._scorecards[c] for c in self._currencies]

    # --------------------------------------------------------
    # MUTATIONS
    # --------------------------------------------------------

    def update_pillars(
        self,
        currency: Optional[Any],
        pillar_scores: Optional[Mapping[Any, Any]] = None,
    ) -> List[CurrencyScorecard]:
        """
        Apply a partial pillar update and recompute.

        Args:
            currency: Target currency, or None for every supported currency
            pillar_scores: Pillar name -> score in [-2, +2]. Partial maps
                are allowed; invalid entries are skipped.

        Returns:
            Committed scorecards, in enumeration order

        Raises:
            UnsupportedCurrency: If the currency is not supported
        """
        if currency is None:
            targets: Sequence[Currency] = self._currencies
        else:
            targets = [self._resolve_currency(currency)]

        accepted = self._accept_pillar_scores(pillar_scores or {})

        committed: List[CurrencyScorecard] = []
        for target in targets:
            with self._locks[target]:
                current = self._scorecards[target]
                pillars = tuple(
                    p.with_score(accepted[p.pillar], UPDATED_RATIONALE)
                    if p.pillar in accepted else p
                    for p in current.pillars
                )
                scorecard = self._recompute(target, pillars)
                self._scorecards[target] = scorecard
            committed.append(scorecard)

            logger.debug(
                f"Scorecard {target.value} updated: "
                f"pillars={[p.value for p in accepted]} "
                f"weighted={scorecard.weighted_bias_score} bias={scorecard.bias.value}"
            )

        self._notify(committed)
        return committed

    def recompute_all(self) -> List[CurrencyScorecard]:
        """
        Recompute derived fields of every scorecard.

        Raw pillar inputs are unchanged, so repeated calls yield the
        same weighted score and bias.
        """
        committed: List[CurrencyScorecard] = []
        for currency in self._currencies:
            with self._locks[currency]:
                scorecard = self._recompute(currency, self._scorecards[currency].pillars)
                self._scorecards[currency] = scorecard
            committed.append(scorecard)

        self._notify(committed)
        return committed

    # --------------------------------------------------------
    # LISTENERS
    # --------------------------------------------------------

    def subscribe(self, listener: ScorecardListener) -> None:
        """Register a listener called with every committed scorecard."""
        with self._listeners_lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ScorecardListener) -> None:
        """Remove a previously registered listener."""
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # --------------------------------------------------------
    # INTERNALS
    # --------------------------------------------------------

    def _resolve_currency(self, currency: Any) -> Currency:
        resolved = Currency.parse(currency)
        if resolved not in self._scorecards:
            raise UnsupportedCurrency(currency)
        return resolved

    def _initial_scorecard(self, currency: Currency) -> CurrencyScorecard:
        weights = self.config.weights
        pillars = tuple(
            PillarScore(
                pillar=pillar,
                score=0.0,
                weight=weights.get_weight(pillar),
                rationale=INITIAL_RATIONALE,
            )
            for pillar in BiasPillar.all_pillars()
        )
        return self._recompute(currency, pillars)

    def _recompute(
        self,
        currency: Currency,
        pillars: Tuple[PillarScore, ...],
    ) -> CurrencyScorecard:
        weighted = compute_weighted_bias_score(pillars, self.config.score_decimals)
        return CurrencyScorecard(
            currency=currency,
            pillars=pillars,
            weighted_bias_score=weighted,
            bias=classify_bias(weighted, self.config.thresholds),
            updated_at=self._clock.now(),
        )

    def _accept_pillar_scores(self, pillar_scores: Mapping[Any, Any]) -> Dict[BiasPillar, float]:
        accepted: Dict[BiasPillar, float] = {}
        for key, value in pillar_scores.items():
            pillar = BiasPillar.parse(key)
            if pillar is None:
                logger.debug(f"Ignoring unknown pillar {key!r}")
                continue
            if not self._is_valid_score(value):
                logger.debug(f"Ignoring invalid score for {pillar.value}: {value!r}")
                continue
            accepted[pillar] = float(value)
        return accepted

    def _is_valid_score(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
        value = float(value)
        if not math.isfinite(value):
            return False
        return self.config.min_score <= value <= self.config.max_score

    def _notify(self, scorecards: List[CurrencyScorecard]) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            for scorecard in scorecards:
                try:
                    listener(scorecard)
                except Exception as e:
                    logger.error(
                        f"Scorecard listener {listener!r} failed for "
                        f"{scorecard.currency.value}: {e}"
                    )
