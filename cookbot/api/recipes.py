from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from cookbot.core.config import get_settings
from cookbot.core.errors import ValidationError
from cookbot.db.store import get_store
from cookbot.schemas.recipe import Recipe, RecipeCreateRequest
from cookbot.services import recipe_actions

router = APIRouter()


@router.get("/recipes", response_model=list[Recipe])
async def list_recipes() -> list[Recipe] | JSONResponse:
    result = recipe_actions.list_recipes(get_store(get_settings()))
    if not result.success:
        return JSONResponse(
            status_code=500,
            content={"message": result.message, "error": result.error},
        )
    return result.data or []


@router.post("/recipes", response_model=Recipe, status_code=201)
async def create_recipe(body: dict[str, Any] = Body()) -> Recipe | JSONResponse:
    try:
        payload = RecipeCreateRequest.model_validate(body)
    except PydanticValidationError:
        return JSONResponse(status_code=400, content={"message": "Invalid recipe payload"})

    draft = payload.to_draft()
    try:
        recipe_actions.validate_recipe_draft(draft, payload.user_id)
    except ValidationError:
        return JSONResponse(status_code=400, content={"message": "Missing required fields"})

    result = recipe_actions.create_recipe(
        draft, user_id=payload.user_id, store=get_store(get_settings())
    )
    if not result.success:
        return JSONResponse(
            status_code=500,
            content={"message": result.message, "error": result.error},
        )
    return result.data
