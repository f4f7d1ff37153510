from dataclasses import dataclass
from enum import Enum


class State(str, Enum):
    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"
    EXTREME = "EXTREME"
    UNKNOWN = "UNKNOWN"


class Binary(str, Enum):
    KECIL = "KECIL"
    BESAR = "BESAR"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


# Real buckets only, in matrix order.
STATES = (State.LOW, State.MID, State.HIGH, State.EXTREME)

# (state, lo, hi) inclusive bands over the valid roll range
_BANDS = (
    (State.LOW, 6, 18),
    (State.MID, 19, 31),
    (State.HIGH, 32, 43),
    (State.EXTREME, 44, 54),
)

KECIL_MAX = 31


@dataclass(frozen=True)
class Trend:
    direction: Direction
    diff: int


def classify_state(roll: int) -> State:
    for state, lo, hi in _BANDS:
        if lo <= roll <= hi:
            return state
    return State.UNKNOWN


def classify_binary(roll: int) -> Binary:
    return Binary.KECIL if roll <= KECIL_MAX else Binary.BESAR


def compute_trend(roll1: int, roll2: int) -> Trend:
    diff = roll2 - roll1
    if diff > 0:
        return Trend(Direction.UP, diff)
    if diff < 0:
        return Trend(Direction.DOWN, diff)
    return Trend(Direction.STABLE, diff)
