from fastapi import APIRouter, Form

from cookbot.core.config import get_settings
from cookbot.db.store import get_store
from cookbot.schemas.recipe import AISuggestion, Recipe, RecipeDraft
from cookbot.schemas.result import Err, Ok
from cookbot.services import recipe_actions
from cookbot.services.ai_gateway_factory import get_ai_gateway

router = APIRouter(prefix="/actions")


@router.post("/create-recipe", response_model=Ok[Recipe] | Err)
async def create_recipe_action(
    title: str = Form(default=""),
    ingredients: str = Form(default=""),
    instructions: str = Form(default=""),
    notes: str = Form(default=""),
) -> Ok[Recipe] | Err:
    settings = get_settings()
    draft = RecipeDraft(
        title=title, ingredients=ingredients, instructions=instructions, notes=notes
    )
    return recipe_actions.create_recipe(
        draft, user_id=settings.default_user_id, store=get_store(settings)
    )


@router.post("/generate-ai-suggestion", response_model=Ok[AISuggestion] | Err)
async def generate_ai_suggestion_action(
    ai_prompt: str = Form(default="", alias="aiPrompt"),
    recipe_id: str = Form(default="", alias="recipeId"),
) -> Ok[AISuggestion] | Err:
    settings = get_settings()
    return recipe_actions.generate_ai_suggestion(
        ai_prompt,
        recipe_id=recipe_id,
        gateway=get_ai_gateway(settings),
        store=get_store(settings),
    )
