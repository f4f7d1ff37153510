from math import floor
from typing import Iterable


def round_half_up(x: float, ndigits: int = 0) -> float:
    # half-up (not banker's) so 12.5 -> 13 and 27.25 -> 27.3
    m = 10 ** ndigits
    return floor(x * m + 0.5) / m


def percent(count: float, total: float) -> int:
    return int(round_half_up(count / total * 100))


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
