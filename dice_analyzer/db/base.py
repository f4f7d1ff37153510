import logging
import os

from sqlmodel import SQLModel, create_engine, Session

from dice_analyzer.config import settings

logger = logging.getLogger(__name__)

# SQLite needs the data directory to exist
if settings.db_dsn.startswith("sqlite"):
    os.makedirs("data", exist_ok=True)

engine = create_engine(settings.db_dsn, echo=False)

def init_db():
    # import models so SQLModel registers the tables
    from dice_analyzer.db import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
    logger.info("database ready at %s", settings.db_dsn)

# FastAPI dependency: generator yielding one session per request
def get_session():
    with Session(engine) as session:
        yield session
