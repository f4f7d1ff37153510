from typing import Sequence

from dice_analyzer.analytics.stats import mean, round_half_up
from dice_analyzer.analytics.trend import aggregate_trend, dominant_trend
from dice_analyzer.core.states import STATES, Binary, State

DEFAULT_WINDOW = 20


def recent_window(log: Sequence, size: int = DEFAULT_WINDOW) -> list:
    return list(log[-size:])


def classification_frequency(window: Sequence) -> dict[Binary, int]:
    out = {Binary.KECIL: 0, Binary.BESAR: 0}
    for r in window:
        if r.classification == Binary.KECIL:
            out[Binary.KECIL] += 1
        else:
            out[Binary.BESAR] += 1
    return out


def state_dominance(window: Sequence) -> dict[State, int]:
    # second roll only; always zero-filled, even for an empty window
    out = {s: 0 for s in STATES}
    for r in window:
        if r.state2 in out:
            out[r.state2] += 1
    return out


def last_state(log: Sequence) -> State | None:
    if not log:
        return None
    return log[-1].state2


def summary_stats(log: Sequence, size: int = DEFAULT_WINDOW) -> dict:
    if not log:
        return {'total': 0, 'avg_roll1': 0.0, 'avg_roll2': 0.0, 'trend_dominant': None}
    return {
        'total': len(log),
        'avg_roll1': round_half_up(mean(r.roll1 for r in log), 1),
        'avg_roll2': round_half_up(mean(r.roll2 for r in log), 1),
        'trend_dominant': dominant_trend(aggregate_trend(recent_window(log, size))),
    }
