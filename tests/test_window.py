from dice_analyzer.analytics.markov import build_matrix
from dice_analyzer.analytics.window import (
    classification_frequency, last_state, recent_window, state_dominance, summary_stats,
)
from dice_analyzer.core.states import Binary, Direction, State

from conftest import make_log


def test_window_keeps_order_and_size():
    log = make_log(*[(10 + i, 20) for i in range(25)])
    w = recent_window(log, 20)
    assert len(w) == 20 and w[0] is log[5] and w[-1] is log[-1]
    assert recent_window(log[:3], 20) == log[:3]

def test_empty_log():
    assert classification_frequency([]) == {Binary.KECIL: 0, Binary.BESAR: 0}
    assert state_dominance([]) == {State.LOW: 0, State.MID: 0, State.HIGH: 0, State.EXTREME: 0}
    assert last_state([]) is None

def test_dominance_counts_second_roll_only():
    log = make_log((50, 10), (50, 20), (10, 40))
    assert state_dominance(log) == {State.LOW: 1, State.MID: 1, State.HIGH: 1, State.EXTREME: 0}
    assert classification_frequency(log) == {Binary.KECIL: 2, Binary.BESAR: 1}
    assert last_state(log) == State.HIGH

def test_21st_round_drops_out_of_window_not_matrix():
    log = make_log((10, 50), *[(20, 20)] * 20)
    w = recent_window(log)
    assert state_dominance(w)[State.EXTREME] == 0
    assert state_dominance(w)[State.MID] == 20
    assert classification_frequency(w) == {Binary.KECIL: 20, Binary.BESAR: 0}
    C = build_matrix(log)
    assert C[State.EXTREME][State.MID] == 1
    assert C[State.MID][State.MID] == 19

def test_summary_stats():
    assert summary_stats([])['total'] == 0
    s = summary_stats(make_log((10, 20), (11, 21), (12, 23), (13, 21)))
    assert s['total'] == 4
    assert s['avg_roll1'] == 11.5
    assert s['avg_roll2'] == 21.3
    assert s['trend_dominant'] == Direction.UP
