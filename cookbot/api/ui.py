from pathlib import Path
from typing import Any

from fastapi import APIRouter, Form, Request
from fastapi.templating import Jinja2Templates

from cookbot.core.config import get_settings
from cookbot.db.store import get_store
from cookbot.schemas.recipe import RecipeDraft
from cookbot.schemas.result import Err, Ok
from cookbot.services import recipe_actions
from cookbot.services.ai_gateway_factory import get_ai_gateway

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _render_page(
    request: Request,
    *,
    create_result: Ok | Err | None = None,
    ai_result: Ok | Err | None = None,
    selected_recipe_id: str = "",
) -> Any:
    # Always re-read after a mutation so the page reflects the new state.
    listing = recipe_actions.list_recipes(get_store(get_settings()))
    recipes = (listing.data or []) if listing.success else []
    if not selected_recipe_id and recipes:
        selected_recipe_id = recipes[0].id

    ai_response = ""
    if ai_result is not None and ai_result.success and ai_result.data is not None:
        ai_response = ai_result.data.ai_suggestions

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "recipes": recipes,
            "list_message": None if listing.success else listing.message,
            "create_result": create_result,
            "ai_result": ai_result,
            "ai_response": ai_response,
            "selected_recipe_id": selected_recipe_id,
        },
    )


@router.get("/")
async def index_page(request: Request) -> Any:
    return _render_page(request)


@router.post("/ui/recipes")
async def create_recipe_from_form(
    request: Request,
    title: str = Form(default=""),
    ingredients: str = Form(default=""),
    instructions: str = Form(default=""),
    notes: str = Form(default=""),
) -> Any:
    settings = get_settings()
    result = recipe_actions.create_recipe(
        RecipeDraft(title=title, ingredients=ingredients, instructions=instructions, notes=notes),
        user_id=settings.default_user_id,
        store=get_store(settings),
    )
    return _render_page(request, create_result=result)


@router.post("/ui/ai-suggestion")
async def generate_ai_suggestion_from_form(
    request: Request,
    ai_prompt: str = Form(default="", alias="aiPrompt"),
    recipe_id: str = Form(default="", alias="recipeId"),
) -> Any:
    settings = get_settings()
    result = recipe_actions.generate_ai_suggestion(
        ai_prompt,
        recipe_id=recipe_id,
        gateway=get_ai_gateway(settings),
        store=get_store(settings),
    )
    return _render_page(request, ai_result=result, selected_recipe_id=recipe_id)
