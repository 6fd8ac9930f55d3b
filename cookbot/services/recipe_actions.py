"""Mutation and listing handlers shared by the HTTP, form-action and UI routes.

Every handler returns an ``Ok`` or ``Err`` envelope. Validation, persistence
and AI gateway failures are converted to ``Err`` here and never propagate to
the caller.
"""

import logging

from cookbot.core.errors import (
    AIGatewayError,
    PersistenceError,
    RecipeNotFoundError,
    ValidationError,
)
from cookbot.db.store import RecipeStore
from cookbot.schemas.recipe import AISuggestion, Recipe, RecipeDraft
from cookbot.schemas.result import Err, Ok
from cookbot.services.ai_gateway_base import AISuggestionGateway

logger = logging.getLogger(__name__)

CHEF_INSTRUCTIONS = (
    "You are an expert chef and a creative kitchen assistant. "
    "Answer recipe questions and suggest variations."
)

_REQUIRED_RECIPE_FIELDS = ("title", "ingredients", "instructions")

recipe_action_counters = {
    "create_success": 0,
    "create_failure": 0,
    "suggestion_success": 0,
    "suggestion_failure": 0,
}


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_recipe_draft(draft: RecipeDraft, user_id: str | None) -> None:
    missing = [name for name in _REQUIRED_RECIPE_FIELDS if _is_blank(getattr(draft, name))]
    if _is_blank(user_id):
        missing.append("userId")
    if missing:
        raise ValidationError(
            f"Missing required fields to create recipe: {', '.join(missing)}",
            fields=missing,
        )


def create_recipe(
    draft: RecipeDraft, *, user_id: str | None, store: RecipeStore
) -> Ok[Recipe] | Err:
    try:
        validate_recipe_draft(draft, user_id)
    except ValidationError as exc:
        logger.info(
            "create_recipe",
            extra={"outcome": "invalid", "missing_fields": exc.fields},
        )
        return Err(message=str(exc))

    try:
        recipe = store.create_recipe(
            user_id=user_id or "",
            title=draft.title or "",
            ingredients=draft.ingredients or "",
            instructions=draft.instructions or "",
            notes=None if _is_blank(draft.notes) else draft.notes,
        )
    except PersistenceError as exc:
        recipe_action_counters["create_failure"] += 1
        logger.warning(
            "create_recipe",
            extra={
                "outcome": "failure",
                "error_class": exc.__class__.__name__,
                "error": str(exc),
            },
        )
        return Err(message="Failed to create recipe", error=str(exc))

    recipe_action_counters["create_success"] += 1
    logger.info("create_recipe", extra={"outcome": "success", "recipe_id": recipe.id})
    return Ok(message="Recipe created successfully!", data=recipe)


def generate_ai_suggestion(
    prompt: str | None,
    *,
    recipe_id: str | None,
    gateway: AISuggestionGateway,
    store: RecipeStore,
) -> Ok[AISuggestion] | Err:
    has_recipe_id = not _is_blank(recipe_id)
    if _is_blank(prompt):
        logger.info("generate_ai_suggestion", extra={"outcome": "invalid"})
        return Err(message="AI prompt cannot be empty")

    try:
        suggestion = gateway.generate([CHEF_INSTRUCTIONS, prompt or ""])
        if has_recipe_id and suggestion:
            store.update_recipe(recipe_id or "", ai_suggestions=suggestion)
    except (AIGatewayError, PersistenceError) as exc:
        recipe_action_counters["suggestion_failure"] += 1
        extra = {
            "outcome": "failure",
            "has_recipe_id": has_recipe_id,
            "error_class": getattr(exc, "error_class", exc.__class__.__name__),
        }
        if isinstance(exc, RecipeNotFoundError):
            extra["recipe_id"] = exc.recipe_id
        logger.warning("generate_ai_suggestion", extra=extra)
        return Err(message="Failed to generate AI suggestion", error=str(exc))

    recipe_action_counters["suggestion_success"] += 1
    logger.info(
        "generate_ai_suggestion",
        extra={
            "outcome": "success",
            "has_recipe_id": has_recipe_id,
            "prompt_length": len(prompt or ""),
            "persisted": has_recipe_id and bool(suggestion),
        },
    )
    return Ok(
        message="AI suggestions generated!",
        data=AISuggestion(
            recipe_id=recipe_id if has_recipe_id else None,
            ai_suggestions=suggestion,
        ),
    )


def list_recipes(store: RecipeStore) -> Ok[list[Recipe]] | Err:
    try:
        recipes = store.list_recipes()
    except PersistenceError as exc:
        logger.warning(
            "list_recipes",
            extra={
                "outcome": "failure",
                "error_class": exc.__class__.__name__,
                "error": str(exc),
            },
        )
        return Err(message="Failed to fetch recipes", error=str(exc))
    return Ok(message="Recipes fetched", data=recipes)
