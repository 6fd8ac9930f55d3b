from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, validate_by_name=True)


class User(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime


class Recipe(CamelModel):
    id: str
    user_id: str
    title: str
    ingredients: str
    instructions: str
    notes: str | None = None
    ai_suggestions: str | None = None
    created_at: datetime


class RecipeDraft(CamelModel):
    """Recipe fields as submitted, before validation."""

    title: str | None = None
    ingredients: str | None = None
    instructions: str | None = None
    notes: str | None = None


class RecipeCreateRequest(RecipeDraft):
    model_config = ConfigDict(extra="ignore")

    user_id: str | None = None

    def to_draft(self) -> RecipeDraft:
        return RecipeDraft(
            title=self.title,
            ingredients=self.ingredients,
            instructions=self.instructions,
            notes=self.notes,
        )


class AISuggestion(CamelModel):
    recipe_id: str | None = None
    ai_suggestions: str
