import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from dice_analyzer.api.main import app
from dice_analyzer.db import models  # noqa: F401
from dice_analyzer.db.base import get_session
from dice_analyzer.db.models import Round


def make_log(*pairs):
    return [Round.from_rolls(a, b) for a, b in pairs]


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()
