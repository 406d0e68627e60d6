from fastapi import APIRouter, HTTPException

from weekfit.logic.recipes.assistant import suggest_recipes
from weekfit.utilities.validators import RecipeAssistantInput

router = APIRouter(prefix="/api", tags=["assistant"])


@router.post("/recipe-assistant")
def recipe_assistant(payload: RecipeAssistantInput):
    """Recipe ideas for the comma-separated ingredients the user has at home."""
    try:
        recipes = suggest_recipes(payload.ingredients)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"recipes": [r.to_dict() for r in recipes]}
