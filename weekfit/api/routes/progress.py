import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from weekfit.api.dependencies import Backend, get_backend, require_user
from weekfit.domain.ProgressEntry import ProgressEntry
from weekfit.events.event_helpers import publish_progress_recorded
from weekfit.utilities.statistics import ProgressStats
from weekfit.utilities.validators import ProgressInput

router = APIRouter(prefix="/api/progress", tags=["progress"])
logger = logging.getLogger(__name__)


@router.get("")
def get_progress(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    entries = backend.progress.history(user["id"])
    return {"entries": [e.to_dict() for e in entries], "stats": ProgressStats(entries).generate_report()}


@router.post("")
def add_progress(payload: ProgressInput,
                 user: Dict[str, Any] = Depends(require_user),
                 backend: Backend = Depends(get_backend)):
    entry = ProgressEntry(user_id=user["id"], **payload.model_dump())
    if not entry.has_measurements():
        raise HTTPException(status_code=400, detail="Enter at least one measurement")
    entry = backend.progress.add(entry)
    publish_progress_recorded(user["id"], entry.recorded_date.isoformat(), entry.weight)
    logger.info("Recorded progress for %s on %s", user["id"], entry.recorded_date)
    return {"entry": entry.to_dict()}
