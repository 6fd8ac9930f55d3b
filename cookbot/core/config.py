import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

DEFAULT_USER_ID = "91dedc7f-6bc7-42e1-a4fa-5633268069f8"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_timeout_seconds: float = Field(default=20.0, gt=0)
    database_path: str = "data/recipes.db"
    default_user_id: str = DEFAULT_USER_ID
    default_user_email: str = "test@test.com"
    default_user_name: str = "test"

    @model_validator(mode="after")
    def _validate_openai(self) -> "Settings":
        if not self.openai_api_key or not self.openai_api_key.strip():
            raise ValueError("OPENAI_API_KEY is required")
        return self


@lru_cache
def get_settings() -> Settings:
    raw = {
        "openai_api_key": os.getenv("OPENAI_API_KEY"),
        "openai_model": os.getenv("OPENAI_MODEL", "gpt-4.1-mini"),
        "openai_timeout_seconds": os.getenv("OPENAI_TIMEOUT_SECONDS", "20.0"),
        "database_path": os.getenv("RECIPE_DB_PATH", "data/recipes.db"),
        "default_user_id": os.getenv("COOKBOT_USER_ID", DEFAULT_USER_ID),
        "default_user_email": os.getenv("COOKBOT_USER_EMAIL", "test@test.com"),
        "default_user_name": os.getenv("COOKBOT_USER_NAME", "test"),
    }
    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
