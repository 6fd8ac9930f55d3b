class CookBotError(Exception):
    """Base class for failures caught at the handler boundary."""


class ValidationError(CookBotError):
    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class PersistenceError(CookBotError):
    pass


class RecipeNotFoundError(PersistenceError):
    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id


class AIGatewayError(CookBotError):
    def __init__(self, error_class: str, message: str) -> None:
        super().__init__(message)
        self.error_class = error_class
