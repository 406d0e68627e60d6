from fastapi import FastAPI, Request, Query, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from datetime import datetime
from typing import Any, Dict, Optional
import logging

from weekfit.api.dependencies import get_current_user
from weekfit.events.web_observers import start as start_event_observers, get_events as get_web_events
from weekfit.utilities.config import STATIC_DIR, TEMPLATES_DIR
from weekfit.utilities.constants import (
    FEATURES, PRICING_PLANS, TESTIMONIALS, QUESTIONS, DAYS, DAY_LABELS, SLOT_LABELS, SHOPPING_CATEGORIES
)

# Routers
from weekfit.api.api_ai import router as ai_router
from weekfit.api.routes import assistant, auth, challenges, dashboard, menu, progress, questionnaire

# Logging
logger = logging.getLogger("weekfit_app")

# Initialize FastAPI app
app = FastAPI(title="WeekFit")

# Browser clients call the JSON endpoints from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(ai_router)
app.include_router(questionnaire.router)
app.include_router(dashboard.router)
app.include_router(menu.router)
app.include_router(challenges.router)
app.include_router(progress.router)
app.include_router(auth.router)
app.include_router(assistant.router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for dashboard notifications when the app starts."""
    try:
        start_event_observers()
        logger.info("Web observers for WeekFit events started")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to start web observers: %s", e)


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def landing_page(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "features": FEATURES,
            "plans": PRICING_PLANS,
            "testimonials": TESTIMONIALS,
            "time": _ts(),
        }
    )


@app.get("/questionnaire", response_class=HTMLResponse)
def questionnaire_page(request: Request):
    return templates.TemplateResponse(
        request,
        "questionnaire.html",
        {"questions": QUESTIONS, "time": _ts()}
    )


@app.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(request: Request):
    # Data is loaded client-side from /api/dashboard with the stored bearer token
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "days": DAYS,
            "day_labels": DAY_LABELS,
            "slot_labels": SLOT_LABELS,
            "categories": SHOPPING_CATEGORIES,
            "time": _ts(),
        }
    )


# -------------------- API: marketing + notifications --------------------
@app.get("/api/marketing")
def api_marketing():
    return {"features": FEATURES, "pricing": PRICING_PLANS, "testimonials": TESTIMONIALS}


@app.get("/api/notifications")
def api_notifications(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    user: Optional[Dict[str, Any]] = Depends(get_current_user),
):
    """
    Toast notifications for the dashboard (challenges, achievements, menus, progress).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from the response.
        3. Subsequent polls: /api/notifications?since=<next_cursor>
    """
    return get_web_events(since, user["id"] if user else "")
