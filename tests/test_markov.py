from dice_analyzer.analytics.markov import (
    build_matrix, empty_matrix, transition_probability, transition_table,
)
from dice_analyzer.core.states import STATES, State

from conftest import make_log


def test_matrix_uses_state2_to_next_state1():
    # state2: LOW, HIGH, HIGH ; state1: LOW, MID, HIGH
    log = make_log((10, 10), (20, 40), (40, 40))
    C = build_matrix(log)
    assert C[State.LOW][State.MID] == 1
    assert C[State.HIGH][State.HIGH] == 1
    assert sum(n for row in C.values() for n in row.values()) == 2
    assert set(C) == set(STATES)

def test_matrix_needs_two_rounds():
    assert build_matrix([]) is None
    assert build_matrix(make_log((10, 20))) is None

def test_probability_rounds_each_cell():
    C = empty_matrix()
    C[State.LOW][State.LOW] = 1
    C[State.LOW][State.MID] = 3
    assert transition_probability(C, State.LOW) == {
        State.LOW: 25, State.MID: 75, State.HIGH: 0, State.EXTREME: 0,
    }

def test_probability_row_is_not_corrected():
    C = empty_matrix()
    C[State.MID][State.LOW] = C[State.MID][State.MID] = C[State.MID][State.HIGH] = 1
    p = transition_probability(C, State.MID)
    assert p[State.LOW] == p[State.MID] == p[State.HIGH] == 33
    assert sum(p.values()) == 99

def test_probability_rounds_half_up():
    C = empty_matrix()
    C[State.HIGH][State.LOW] = 1
    C[State.HIGH][State.EXTREME] = 7
    p = transition_probability(C, State.HIGH)
    assert p[State.LOW] == 13 and p[State.EXTREME] == 88

def test_probability_empty_row_or_matrix():
    C = empty_matrix()
    assert transition_probability(C, State.LOW) is None
    assert transition_probability(None, State.LOW) is None
    assert transition_probability(C, None) is None

def test_table_has_row_per_state():
    t = transition_table(build_matrix(make_log((10, 10), (20, 40), (40, 40))))
    assert t[State.LOW][State.MID] == 100
    assert t[State.MID] is None
    assert transition_table(None) is None
