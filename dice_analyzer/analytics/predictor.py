# Hybrid scoring forecast for the next round's KECIL/BESAR class.
#
# Four signals, each with a fixed weight, feed two running scores:
#   * numeric trend over the recent window        (25%)
#   * state2 dominance over the recent window     (30%)
#   * transitions out of the last state, full log (25%)
#   * distance of mean roll2 from the centre      (20%)
# The scores are normalised into an integer percent split summing to 100.
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from dice_analyzer.analytics.markov import build_matrix, transition_probability
from dice_analyzer.analytics.stats import mean, percent, round_half_up
from dice_analyzer.analytics.trend import TrendAggregate, aggregate_trend
from dice_analyzer.analytics.window import (
    DEFAULT_WINDOW, last_state, recent_window, state_dominance,
)
from dice_analyzer.core.states import Binary, State

logger = logging.getLogger(__name__)

MIN_ROUNDS = 5

TREND_WEIGHT = 0.25
TREND_BIAS = 0.6
STATE_WEIGHT = 0.30
TRANSITION_WEIGHT = 0.25
CENTER_WEIGHT = 0.20

CENTER = 30
MAX_DISTANCE = 24

NOT_ENOUGH_DATA = f"not enough data (minimum {MIN_ROUNDS} rounds)"


class PredictionInvariantError(RuntimeError):
    """Both scores ended at zero, so no split can be formed."""


@dataclass
class Reasoning:
    trend_direction: TrendAggregate
    state_dominance: dict[State, int]
    last_state: State | None
    state_transition_prob: dict[State, int] | None
    avg_roll2: float

    def to_dict(self) -> dict:
        return {
            'trend_direction': self.trend_direction.to_dict(),
            'state_dominance': {s.value: n for s, n in self.state_dominance.items()},
            'last_state': self.last_state.value if self.last_state else None,
            'state_transition_prob': (
                {s.value: p for s, p in self.state_transition_prob.items()}
                if self.state_transition_prob is not None else None
            ),
            'avg_roll2': self.avg_roll2,
        }


@dataclass
class Forecast:
    can_predict: bool
    kecil: int | None = None
    besar: int | None = None
    reason: str | None = None
    reasoning: Reasoning | None = field(default=None)

    @property
    def recommendation(self) -> Binary | None:
        if not self.can_predict:
            return None
        return Binary.KECIL if self.kecil > self.besar else Binary.BESAR

    @property
    def confidence(self) -> int | None:
        if not self.can_predict:
            return None
        return max(self.kecil, self.besar)

    def to_dict(self) -> dict:
        if not self.can_predict:
            return {'can_predict': False, 'reason': self.reason}
        return {
            'can_predict': True,
            'kecil': self.kecil,
            'besar': self.besar,
            'recommendation': self.recommendation.value,
            'confidence': self.confidence,
            'reasoning': self.reasoning.to_dict(),
        }


def _sum_of(d: dict, *keys) -> float:
    return sum(d.get(k) or 0 for k in keys)


def predict_next_outcome(log: Sequence, window_size: int = DEFAULT_WINDOW) -> Forecast:
    if len(log) < MIN_ROUNDS:
        return Forecast(can_predict=False, reason=NOT_ENOUGH_DATA)

    window = recent_window(log, window_size)
    trend_agg = aggregate_trend(window)
    state_dom = state_dominance(window)
    last = last_state(log)
    trans_prob = transition_probability(build_matrix(log), last)
    avg_roll2 = mean(r.roll2 for r in log)

    kecil_score = 0.0
    besar_score = 0.0

    # trend: strictly more downs than ups leans kecil, everything else besar
    if trend_agg.down_count > trend_agg.up_count:
        kecil_score += TREND_WEIGHT * TREND_BIAS
    else:
        besar_score += TREND_WEIGHT * TREND_BIAS

    total_states = sum(state_dom.values())
    if total_states:
        low_mid = _sum_of(state_dom, State.LOW, State.MID) / total_states
        high_extreme = _sum_of(state_dom, State.HIGH, State.EXTREME) / total_states
    else:
        low_mid = high_extreme = 0.0
    kecil_score += STATE_WEIGHT * low_mid
    besar_score += STATE_WEIGHT * high_extreme

    if trans_prob is not None:
        kecil_score += TRANSITION_WEIGHT * _sum_of(trans_prob, State.LOW, State.MID) / 100
        besar_score += TRANSITION_WEIGHT * _sum_of(trans_prob, State.HIGH, State.EXTREME) / 100

    # not clamped: goes negative past MAX_DISTANCE
    distance = abs(avg_roll2 - CENTER)
    closeness = CENTER_WEIGHT * (1 - distance / MAX_DISTANCE)
    if avg_roll2 < CENTER:
        kecil_score += closeness
    else:
        besar_score += closeness

    total = kecil_score + besar_score
    if total == 0:
        logger.error("zero total score for %d rounds (kecil=%s besar=%s)", len(log), kecil_score, besar_score)
        raise PredictionInvariantError("kecil and besar scores are both zero")

    kecil = percent(kecil_score, total)
    logger.debug("scores kecil=%.4f besar=%.4f -> %d/%d", kecil_score, besar_score, kecil, 100 - kecil)
    return Forecast(
        can_predict=True,
        kecil=kecil,
        besar=100 - kecil,
        reasoning=Reasoning(
            trend_direction=trend_agg,
            state_dominance=state_dom,
            last_state=last,
            state_transition_prob=trans_prob,
            avg_roll2=round_half_up(avg_roll2, 1),
        ),
    )
