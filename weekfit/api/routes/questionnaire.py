import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from weekfit.api.dependencies import Backend, get_backend, get_current_user
from weekfit.domain.Questionnaire import Questionnaire
from weekfit.events.event_helpers import publish_menu_generated
from weekfit.infra.Menu_Repository import current_week_start
from weekfit.logic.menu.generator import generate_weekly_menu
from weekfit.utilities.constants import QUESTIONS
from weekfit.utilities.validators import QuestionnaireInput

router = APIRouter(prefix="/api/questionnaire", tags=["questionnaire"])
logger = logging.getLogger(__name__)


@router.get("")
def get_questionnaire():
    return {"questions": QUESTIONS, "count": len(QUESTIONS)}


@router.post("/submit")
def submit_questionnaire(payload: QuestionnaireInput,
                         user: Optional[Dict[str, Any]] = Depends(get_current_user),
                         backend: Backend = Depends(get_backend)):
    """Final step: store the answers and generate the first menu. Requires login; nothing is saved otherwise."""
    if not user:
        raise HTTPException(status_code=401, detail={
            "message": "Log in to generate your personalised menu",
            "login_required": True,
        })
    try:
        answers = Questionnaire.replay(payload.model_dump()).answers()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    backend.profiles.save_preferences(user, answers.to_dict())
    menu = generate_weekly_menu(answers, user_id=user["id"], week_start=current_week_start())
    menu = backend.menus.save(menu)
    publish_menu_generated(user["id"], menu.week_start, "heuristic")
    logger.info("Generated questionnaire menu for %s", user["id"])
    return {"menu": menu.to_dict(), "redirect": "/dashboard"}
