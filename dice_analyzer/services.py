import logging
from typing import Optional

from sqlmodel import Session

from dice_analyzer.analytics.markov import build_matrix, transition_probability, transition_table
from dice_analyzer.analytics.predictor import Forecast, predict_next_outcome as _predict
from dice_analyzer.analytics.trend import TrendAggregate, aggregate_trend, dominant_trend
from dice_analyzer.analytics.window import (
    classification_frequency, last_state, recent_window, state_dominance, summary_stats,
)
from dice_analyzer.config import settings
from dice_analyzer.core.states import Binary, Direction, State, classify_binary, classify_state
from dice_analyzer.db.crud import (
    all_rounds, create_prediction, delete_all, history, insert_round, insert_rounds,
    pending_prediction_for, resolve_prediction,
)
from dice_analyzer.db.models import Prediction, Round

logger = logging.getLogger(__name__)


# Log access


def get_game_log(session: Session) -> list[Round]:
    return all_rounds(session)


def append_round(session: Session, roll1: int, roll2: int) -> Round:
    r = insert_round(session, Round.from_rolls(roll1, roll2))
    logger.info("round %s stored: %d/%d %s", r.id, r.roll1, r.roll2, r.classification.value)
    return r


def _resolve_pending(session: Session, first_new: Round, rounds_before: int) -> Optional[Prediction]:
    # only the forecast made for exactly this round is scored against it
    pred = pending_prediction_for(session, rounds_before)
    if pred is None:
        return None
    resolved = resolve_prediction(session, pred, first_new)
    logger.info("prediction %s resolved: correct=%s", resolved.id, resolved.correct)
    return resolved


def ingest_round(session: Session, roll1: int, roll2: int) -> tuple[Round, Optional[Prediction]]:
    rounds_before = len(get_game_log(session))
    out = append_round(session, roll1, roll2)
    return out, _resolve_pending(session, out, rounds_before)


def ingest_bulk(session: Session, pairs: list[tuple[int, int]]) -> tuple[list[Round], Optional[Prediction]]:
    rounds_before = len(get_game_log(session))
    rows = insert_rounds(session, [Round.from_rolls(a, b) for a, b in pairs])
    logger.info("bulk stored %d rounds", len(rows))
    resolved = _resolve_pending(session, rows[0], rounds_before) if rows else None
    return rows, resolved


def clear_log(session: Session) -> int:
    n = delete_all(session)
    logger.info("cleared %d rounds", n)
    return n


# Classification


def get_state(roll: int) -> State:
    return classify_state(roll)


def get_classification(roll: int) -> Binary:
    return classify_binary(roll)


# Trend


def analyze_trend_direction(session: Session) -> TrendAggregate | None:
    return aggregate_trend(recent_window(get_game_log(session), settings.window))


def get_trend_dominant(session: Session) -> Direction | None:
    return dominant_trend(analyze_trend_direction(session))


# Transitions


def build_transition_matrix(session: Session):
    return build_matrix(get_game_log(session))


def get_state_transition_probability(session: Session, from_state: State):
    return transition_probability(build_transition_matrix(session), from_state)


def get_transition_table(session: Session):
    matrix = build_transition_matrix(session)
    return matrix, transition_table(matrix)


# Window


def get_classification_frequency(session: Session) -> dict[Binary, int]:
    return classification_frequency(recent_window(get_game_log(session), settings.window))


def get_state_dominance(session: Session) -> dict[State, int]:
    return state_dominance(recent_window(get_game_log(session), settings.window))


def get_last_state(session: Session) -> State | None:
    return last_state(get_game_log(session))


def get_summary_stats(session: Session) -> dict:
    return summary_stats(get_game_log(session), settings.window)


# Prediction


def predict_next_outcome(session: Session) -> Forecast:
    return _predict(get_game_log(session), settings.window)


def record_prediction(session: Session, forecast: Forecast, rounds_seen: int) -> Prediction:
    return create_prediction(session, forecast.recommendation, forecast.kecil, forecast.besar, rounds_seen)


def get_history(session: Session, limit: int = 50):
    return [p.to_dict() for p in history(session, limit=limit)]


def get_summary(session: Session):
    rows = history(session, limit=100000)
    wins = sum(1 for r in rows if r.correct is True)
    losses = sum(1 for r in rows if r.correct is False)
    total = wins + losses
    winrate = (wins / total) if total else 0.0
    return {'wins': wins, 'losses': losses, 'total': total, 'winrate': winrate}
