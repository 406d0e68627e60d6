import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from weekfit.api.api_ai import request_weekly_menu, ai_error_response
from weekfit.api.dependencies import Backend, get_backend, get_ai_gateway, require_user
from weekfit.domain.Questionnaire import QuestionnaireAnswers
from weekfit.events.event_helpers import publish_menu_generated
from weekfit.infra.ai_gateway import AIGateway, AIServiceError
from weekfit.infra.Menu_Repository import current_week_start
from weekfit.infra.pdf_utils import generate_pdf_for_menu
from weekfit.logic.menu.ai_import import menu_from_ai
from weekfit.logic.menu.generator import regenerate_meal
from weekfit.logic.recipes.builder import recipe_for_meal
from weekfit.utilities.validators import RegenerateMealInput, GenerateWeeklyMenuInput

router = APIRouter(prefix="/api", tags=["menu"])
logger = logging.getLogger(__name__)


@router.get("/menu")
def get_menu(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    return {"menu": backend.menus.latest(user["id"]).to_dict()}


@router.post("/menu/regenerate")
def regenerate(payload: RegenerateMealInput,
               user: Dict[str, Any] = Depends(require_user),
               backend: Backend = Depends(get_backend)):
    """Swap one meal; answers come from the stored preferences, else from the menu itself."""
    menu = backend.menus.latest(user["id"])
    stored = backend.profiles.get_preferences(user["id"])
    answers = QuestionnaireAnswers.from_dict(stored or menu.ai_preferences)
    try:
        changed = regenerate_meal(menu, payload.day, payload.slot, answers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if changed:
        menu = backend.menus.save(menu)
        logger.info("Regenerated %s/%s for %s", payload.day, payload.slot, user["id"])
    return {"changed": changed, "menu": menu.to_dict()}


@router.get("/menu/recipes")
def menu_recipes(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    menu = backend.menus.latest(user["id"])
    recipes = []
    for day in menu.days():
        for slot in menu.slots(day):
            name = menu.get_meal(day, slot)
            if name:
                recipes.append({"day": day, "slot": slot, "recipe": recipe_for_meal(name, slot).to_dict()})
    return {"recipes": recipes}


@router.get("/menu/pdf")
def export_pdf(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    menu = backend.menus.latest(user["id"])
    pdf_bytes = generate_pdf_for_menu(menu)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=weekfit_menu_{menu.week_start}.pdf"},
    )


@router.post("/menu/ai")
def generate_ai_menu(body: GenerateWeeklyMenuInput,
                     user: Dict[str, Any] = Depends(require_user),
                     backend: Backend = Depends(get_backend),
                     gateway: AIGateway = Depends(get_ai_gateway)):
    """Ask the AI gateway for a weekly menu and store it as the user's current menu."""
    try:
        data = request_weekly_menu(gateway, body)
    except AIServiceError as e:
        return ai_error_response(e)
    try:
        menu = menu_from_ai(data, user["id"], current_week_start())
    except ValueError as e:
        logger.warning("Unusable AI menu for %s: %s", user["id"], e)
        raise HTTPException(status_code=500, detail=str(e))
    menu = backend.menus.save(menu)
    publish_menu_generated(user["id"], menu.week_start, "ai")
    return {"menu": menu.to_dict(), "tips": menu.ai_preferences.get("tips", [])}


@router.get("/shopping-list")
def shopping_list(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    menu = backend.menus.latest(user["id"])
    return {
        "week_start": menu.week_start,
        "shopping_list": menu.shopping_list,
        "total_items": menu.shopping_item_count(),
    }


@router.get("/recipe")
def recipe_detail(meal: str = Query(..., min_length=1), slot: str = Query(default="")):
    try:
        recipe = recipe_for_meal(meal, slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"recipe": recipe.to_dict()}
