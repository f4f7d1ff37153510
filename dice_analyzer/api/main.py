import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from dice_analyzer.api.routes import router
from dice_analyzer.config import settings
from dice_analyzer.core.states import STATES
from dice_analyzer.db.base import get_session, init_db
from dice_analyzer import services

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "ui" / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    yield

app = FastAPI(title="Dice Round Analyzer", lifespan=lifespan)
app.include_router(router)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

@app.get("/")
def home():
    return {"ok": True, "app": "Dice Round Analyzer"}

@app.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, session: Session = Depends(get_session)):
    matrix, table = services.get_transition_table(session)
    return templates.TemplateResponse(request, "dashboard.html", {
        "rounds": services.get_game_log(session),
        "stats": services.get_summary_stats(session),
        "trend": services.analyze_trend_direction(session),
        "window": settings.window,
        "states": STATES,
        "table": table,
        "forecast": services.predict_next_outcome(session),
    })
