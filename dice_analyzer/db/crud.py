from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session, select

from dice_analyzer.db.models import Round, Prediction


def insert_round(session: Session, r: Round) -> Round:
    r.compute()
    session.add(r)
    session.commit()
    session.refresh(r)
    return r


def insert_rounds(session: Session, rows: list[Round]) -> list[Round]:
    for r in rows:
        r.compute()
        session.add(r)
    session.commit()
    for r in rows:
        session.refresh(r)
    return rows


def all_rounds(session: Session) -> list[Round]:
    return list(session.exec(select(Round).order_by(Round.id)).all())


def delete_all(session: Session) -> int:
    rounds = session.exec(select(Round)).all()
    preds = session.exec(select(Prediction)).all()
    for row in (*rounds, *preds):
        session.delete(row)
    session.commit()
    return len(rounds)


# Prediction helpers


def create_prediction(session: Session, label_pred: str, p_kecil: int, p_besar: int, rounds_seen: int) -> Prediction:
    # a new forecast supersedes any still pending
    for old in session.exec(select(Prediction).where(Prediction.correct.is_(None))).all():
        session.delete(old)
    pred = Prediction(label_pred=label_pred, p_kecil=p_kecil, p_besar=p_besar, rounds_seen=rounds_seen)
    session.add(pred)
    session.commit()
    session.refresh(pred)
    return pred


def pending_prediction_for(session: Session, rounds_seen: int) -> Optional[Prediction]:
    """Unresolved forecast made when the log held exactly `rounds_seen` rounds."""
    return session.exec(
        select(Prediction)
        .where(Prediction.correct.is_(None))
        .where(Prediction.rounds_seen == rounds_seen)
        .order_by(Prediction.id.desc())
        .limit(1)
    ).first()


def resolve_prediction(session: Session, pred: Prediction, round_obj: Round) -> Prediction:
    pred.round_id = round_obj.id
    pred.actual_label = round_obj.classification
    pred.correct = (pred.label_pred == round_obj.classification)
    pred.resolved_ts = datetime.now(timezone.utc)
    session.add(pred)
    session.commit()
    session.refresh(pred)
    return pred


def history(session: Session, limit: int = 50) -> list[Prediction]:
    return list(session.exec(select(Prediction).order_by(Prediction.id.desc()).limit(limit)).all())
