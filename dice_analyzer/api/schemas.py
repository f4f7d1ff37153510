from pydantic import BaseModel, Field
from typing import Optional


class IngestIn(BaseModel):
    roll1: int = Field(ge=6, le=54)
    roll2: int = Field(ge=6, le=54)


class BulkIn(BaseModel):
    pairs: list[tuple[int, int]]


class TrendOut(BaseModel):
    up_count: int
    down_count: int
    stable_count: int


class TrendSummaryOut(BaseModel):
    aggregate: Optional[TrendOut]
    dominant: Optional[str]


class WindowOut(BaseModel):
    window: int
    classification_frequency: dict[str, int]
    state_dominance: dict[str, int]
    last_state: Optional[str]


class StatsOut(BaseModel):
    total: int
    avg_roll1: float
    avg_roll2: float
    trend_dominant: Optional[str]


class PredictOut(BaseModel):
    prediction_id: Optional[int] = None
    can_predict: bool
    reason: Optional[str] = None
    kecil: Optional[int] = None
    besar: Optional[int] = None
    recommendation: Optional[str] = None
    confidence: Optional[int] = None
    reasoning: Optional[dict] = None


class PredictionItem(BaseModel):
    id: int
    label_pred: str
    p_kecil: int
    p_besar: int
    rounds_seen: int
    actual_label: str | None
    correct: bool | None
    ts: str
    resolved_ts: str | None


class HistoryOut(BaseModel):
    items: list[PredictionItem]


class SummaryOut(BaseModel):
    wins: int
    losses: int
    total: int
    winrate: float
