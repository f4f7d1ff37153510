from dataclasses import dataclass
from typing import Sequence

from dice_analyzer.core.states import Direction


@dataclass(frozen=True)
class TrendAggregate:
    up_count: int
    down_count: int
    stable_count: int

    def to_dict(self) -> dict:
        return {
            'up_count': self.up_count,
            'down_count': self.down_count,
            'stable_count': self.stable_count,
        }


def aggregate_trend(window: Sequence) -> TrendAggregate | None:
    if not window:
        return None
    up = down = stable = 0
    for r in window:
        d = r.trend.direction
        if d == Direction.UP:
            up += 1
        elif d == Direction.DOWN:
            down += 1
        else:
            stable += 1
    return TrendAggregate(up, down, stable)


def dominant_trend(agg: TrendAggregate | None) -> Direction | None:
    """Direction that strictly beats both others; any tie falls back to stable."""
    if agg is None:
        return None
    if agg.up_count > agg.down_count and agg.up_count > agg.stable_count:
        return Direction.UP
    if agg.down_count > agg.up_count and agg.down_count > agg.stable_count:
        return Direction.DOWN
    return Direction.STABLE
