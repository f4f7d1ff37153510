import logging

from fastapi import APIRouter, Depends, HTTPException, Header
from sqlmodel import Session

from dice_analyzer.analytics.predictor import PredictionInvariantError
from dice_analyzer.api.schemas import (
    BulkIn, HistoryOut, IngestIn, PredictOut, StatsOut, SummaryOut, TrendSummaryOut, WindowOut,
)
from dice_analyzer.config import settings
from dice_analyzer.core.states import STATES, State
from dice_analyzer.core.validation import ROLL_MAX, ROLL_MIN, is_valid_roll
from dice_analyzer.db.base import get_session
from dice_analyzer import services

logger = logging.getLogger(__name__)

router = APIRouter()

ROLL_ERROR = f"rolls must be {ROLL_MIN}..{ROLL_MAX}"


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def _by_value(d: dict) -> dict:
    return {k.value: v for k, v in d.items()}


def _parse_state(name: str) -> State:
    try:
        s = State(name.upper())
    except ValueError:
        raise HTTPException(404, detail=f"unknown state {name!r}") from None
    if s not in STATES:
        raise HTTPException(404, detail=f"unknown state {name!r}")
    return s


@router.post('/rounds')
async def ingest(data: IngestIn, session: Session = Depends(get_session), ok=Depends(_auth)):
    for r in (data.roll1, data.roll2):
        if not is_valid_roll(r):
            raise HTTPException(400, detail=ROLL_ERROR)
    r, resolved = services.ingest_round(session, data.roll1, data.roll2)
    return {
        'stored_round': r.to_dict(),
        'resolved_prediction': resolved.to_dict() if resolved else None,
    }


@router.post('/rounds/bulk')
async def ingest_bulk(data: BulkIn, session: Session = Depends(get_session), ok=Depends(_auth)):
    # all-or-nothing: check every pair before storing any
    for i, (a, b) in enumerate(data.pairs):
        if not (is_valid_roll(a) and is_valid_roll(b)):
            raise HTTPException(400, detail=f"pair {i}: {ROLL_ERROR}")
    rows, resolved = services.ingest_bulk(session, data.pairs)
    return {
        'stored': len(rows),
        'total': len(services.get_game_log(session)),
        'resolved_prediction': resolved.to_dict() if resolved else None,
    }


@router.get('/rounds')
async def rounds(session: Session = Depends(get_session)):
    return [r.to_dict() for r in services.get_game_log(session)]


@router.delete('/rounds')
async def clear(session: Session = Depends(get_session), ok=Depends(_auth)):
    return {'deleted': services.clear_log(session)}


@router.get('/classify/{roll}')
async def classify(roll: int):
    return {
        'roll': roll,
        'state': services.get_state(roll).value,
        'classification': services.get_classification(roll).value,
    }


@router.get('/trend', response_model=TrendSummaryOut)
async def trend(session: Session = Depends(get_session)):
    agg = services.analyze_trend_direction(session)
    dom = services.get_trend_dominant(session)
    return {
        'aggregate': agg.to_dict() if agg else None,
        'dominant': dom.value if dom else None,
    }


@router.get('/transitions')
async def transitions(session: Session = Depends(get_session)):
    matrix, table = services.get_transition_table(session)
    if matrix is None:
        return {'counts': None, 'probabilities': None}
    return {
        'counts': {a.value: _by_value(row) for a, row in matrix.items()},
        'probabilities': {a.value: (_by_value(row) if row else None) for a, row in table.items()},
    }


@router.get('/transitions/{state}')
async def transition_from(state: str, session: Session = Depends(get_session)):
    s = _parse_state(state)
    prob = services.get_state_transition_probability(session, s)
    return {'from_state': s.value, 'probabilities': _by_value(prob) if prob else None}


@router.get('/window', response_model=WindowOut)
async def window(session: Session = Depends(get_session)):
    last = services.get_last_state(session)
    return {
        'window': settings.window,
        'classification_frequency': _by_value(services.get_classification_frequency(session)),
        'state_dominance': _by_value(services.get_state_dominance(session)),
        'last_state': State(last).value if last else None,
    }


@router.get('/stats', response_model=StatsOut)
async def stats(session: Session = Depends(get_session)):
    out = services.get_summary_stats(session)
    dom = out['trend_dominant']
    return {**out, 'trend_dominant': dom.value if dom else None}


@router.get('/predict', response_model=PredictOut)
async def predict(session: Session = Depends(get_session)):
    try:
        forecast = services.predict_next_outcome(session)
    except PredictionInvariantError as e:
        raise HTTPException(500, detail=str(e))
    out = forecast.to_dict()
    if forecast.can_predict:
        rounds_seen = len(services.get_game_log(session))
        out['prediction_id'] = services.record_prediction(session, forecast, rounds_seen).id
    return out


@router.get('/history', response_model=HistoryOut)
async def prediction_history(limit: int = 50, session: Session = Depends(get_session)):
    return {'items': services.get_history(session, limit=limit)}


@router.get('/summary', response_model=SummaryOut)
async def summary(session: Session = Depends(get_session)):
    return services.get_summary(session)
