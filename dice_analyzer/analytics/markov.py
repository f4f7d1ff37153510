import logging
from typing import Sequence

from dice_analyzer.analytics.stats import percent
from dice_analyzer.core.states import STATES, State

logger = logging.getLogger(__name__)

Matrix = dict[State, dict[State, int]]


def empty_matrix() -> Matrix:
    return {a: {b: 0 for b in STATES} for a in STATES}


def build_matrix(log: Sequence) -> Matrix | None:
    """Count state2(round i-1) -> state1(round i) over the whole log.

    Returns None with fewer than two rounds.
    """
    if len(log) < 2:
        return None
    C = empty_matrix()
    for i in range(1, len(log)):
        src = log[i - 1].state2
        dst = log[i].state1
        if src not in C or dst not in C[src]:
            logger.warning("skipping transition %s -> %s at round %d", src, dst, i)
            continue
        C[src][dst] += 1
    return C


def transition_probability(matrix: Matrix | None, from_state: State | None) -> dict[State, int] | None:
    if matrix is None or from_state not in matrix:
        return None
    row = matrix[from_state]
    total = sum(row.values())
    if total == 0:
        return None
    # each cell rounds on its own; rows may sum to 99 or 101
    return {to: percent(n, total) for to, n in row.items()}


def transition_table(matrix: Matrix | None) -> dict[State, dict[State, int] | None] | None:
    if matrix is None:
        return None
    return {s: transition_probability(matrix, s) for s in STATES}
