from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

from dice_analyzer.core.states import (
    Binary, Direction, State, Trend, classify_binary, classify_state, compute_trend,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Round(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    ts: datetime = Field(default_factory=_utcnow, index=True)
    roll1: int
    roll2: int
    state1: State = State.UNKNOWN
    state2: State = State.UNKNOWN
    trend_direction: Direction = Direction.STABLE
    trend_diff: int = 0
    classification: Binary = Field(default=Binary.KECIL, index=True)

    def compute(self):
        self.state1 = classify_state(self.roll1)
        self.state2 = classify_state(self.roll2)
        t = compute_trend(self.roll1, self.roll2)
        self.trend_direction = t.direction
        self.trend_diff = t.diff
        self.classification = classify_binary(self.roll2)

    @classmethod
    def from_rolls(cls, roll1: int, roll2: int) -> "Round":
        r = cls(roll1=roll1, roll2=roll2)
        r.compute()
        return r

    @property
    def trend(self) -> Trend:
        return Trend(Direction(self.trend_direction), self.trend_diff)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'ts': self.ts.isoformat() if self.ts else None,
            'roll1': self.roll1,
            'roll2': self.roll2,
            'state1': State(self.state1).value,
            'state2': State(self.state2).value,
            'trend': {'direction': Direction(self.trend_direction).value, 'diff': self.trend_diff},
            'classification': Binary(self.classification).value,
        }


class Prediction(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    label_pred: Binary
    p_kecil: int
    p_besar: int
    rounds_seen: int = 0
    algo: str = "hybrid"
    version: str = "1.0.0"
    ts: datetime = Field(default_factory=_utcnow, index=True)
    # Resolution fields (link to actual outcome)
    round_id: int | None = None
    actual_label: Binary | None = None
    correct: bool | None = None
    resolved_ts: datetime | None = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'label_pred': Binary(self.label_pred).value,
            'p_kecil': self.p_kecil,
            'p_besar': self.p_besar,
            'rounds_seen': self.rounds_seen,
            'actual_label': Binary(self.actual_label).value if self.actual_label else None,
            'correct': self.correct,
            'ts': self.ts.isoformat(),
            'resolved_ts': self.resolved_ts.isoformat() if self.resolved_ts else None,
        }
