import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from weekfit.api.dependencies import get_ai_gateway
from weekfit.infra.ai_gateway import AIGateway, AIServiceError
from weekfit.utilities.constants import (
    RECIPE_SYSTEM_PROMPT, RECIPE_JSON_FORMAT, WEEKLY_MENU_SYSTEM_PROMPT, WEEKLY_MENU_JSON_FORMAT
)
from weekfit.utilities.validators import GenerateRecipeInput, GenerateWeeklyMenuInput

logger = logging.getLogger(__name__)

NO_RESTRICTIONS = "no specific restrictions"


# === Prompt builders ===
def build_recipe_prompt(body: GenerateRecipeInput) -> str:
    return (
        f"Create a {body.mealType or 'healthy'} recipe considering:\n"
        f"- Goal: {body.dietGoal or 'maintenance'}\n"
        f"- Preferences/Restrictions: {body.preferences or NO_RESTRICTIONS}\n\n"
        "Response format:" + RECIPE_JSON_FORMAT
    )


def build_weekly_menu_prompt(body: GenerateWeeklyMenuInput) -> str:
    return (
        "Create a complete weekly menu (7 days) considering:\n"
        f"- Goal: {body.dietGoal or 'maintenance'}\n"
        f"- Budget: {body.budget or 'moderate'}\n"
        f"- Available time: {body.timeAvailable or 'medium'}\n"
        f"- Preferences/Restrictions: {body.preferences or NO_RESTRICTIONS}\n\n"
        "Response format:" + WEEKLY_MENU_JSON_FORMAT
    )


def request_recipe(gateway: AIGateway, body: GenerateRecipeInput) -> Dict[str, Any]:
    logger.info("Generating AI recipe for %s / %s", body.mealType, body.dietGoal)
    return gateway.complete_json(RECIPE_SYSTEM_PROMPT, build_recipe_prompt(body))


def request_weekly_menu(gateway: AIGateway, body: GenerateWeeklyMenuInput) -> Dict[str, Any]:
    logger.info("Generating AI weekly menu for %s", body.dietGoal)
    return gateway.complete_json(WEEKLY_MENU_SYSTEM_PROMPT, build_weekly_menu_prompt(body))


def ai_error_response(e: AIServiceError) -> JSONResponse:
    return JSONResponse(status_code=e.status_code, content={"error": e.message})


# === FastAPI Endpoints ===
router = APIRouter(prefix="/api", tags=["ai"])


@router.post("/generate-recipe")
def generate_recipe(body: GenerateRecipeInput, gateway: AIGateway = Depends(get_ai_gateway)):
    try:
        recipe = request_recipe(gateway, body)
    except AIServiceError as e:
        return ai_error_response(e)
    return {"recipe": recipe}


@router.post("/generate-weekly-menu")
def generate_weekly_menu(body: GenerateWeeklyMenuInput, gateway: AIGateway = Depends(get_ai_gateway)):
    try:
        return request_weekly_menu(gateway, body)
    except AIServiceError as e:
        return ai_error_response(e)
