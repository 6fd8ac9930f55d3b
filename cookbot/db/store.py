import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, Protocol
from uuid import uuid4

from cookbot.core.config import Settings
from cookbot.core.errors import PersistenceError, RecipeNotFoundError
from cookbot.db.sqlite import get_conn
from cookbot.schemas.recipe import Recipe, User

_RECIPE_COLUMNS = (
    "id, user_id, title, ingredients, instructions, notes, ai_suggestions, created_at"
)
_UPDATABLE_RECIPE_FIELDS = frozenset(
    {"title", "ingredients", "instructions", "notes", "ai_suggestions"}
)


class RecipeStore(Protocol):
    def create_user(
        self, email: str, name: str, user_id: str | None = None, created_at: datetime | None = None
    ) -> User: ...

    def find_user_by_email(self, email: str) -> User | None: ...

    def get_user(self, user_id: str) -> User | None: ...

    def create_recipe(
        self,
        user_id: str,
        title: str,
        ingredients: str,
        instructions: str,
        notes: str | None = None,
    ) -> Recipe: ...

    def get_recipe(self, recipe_id: str) -> Recipe | None: ...

    def update_recipe(self, recipe_id: str, **changes: str | None) -> Recipe: ...

    def list_recipes(self) -> list[Recipe]: ...


class SqliteRecipeStore:
    """Users and Recipes backed by a single SQLite file.

    Every call opens its own connection and commits before returning, so a
    single insert or update is atomic and no connection outlives the request.
    Any ``sqlite3.Error`` is re-raised as ``PersistenceError``.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = get_conn(self._db_path)
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        finally:
            conn.close()

    def create_user(
        self, email: str, name: str, user_id: str | None = None, created_at: datetime | None = None
    ) -> User:
        user = User(
            id=user_id or str(uuid4()),
            email=email,
            name=name,
            created_at=created_at or datetime.now(UTC),
        )
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO users (id, email, name, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (user.id, user.email, user.name, user.created_at.isoformat()),
            )
        return user

    def find_user_by_email(self, email: str) -> User | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT id, email, name, created_at FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None:
            return None
        return User.model_validate(dict(row))

    def get_user(self, user_id: str) -> User | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT id, email, name, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            return None
        return User.model_validate(dict(row))

    def create_recipe(
        self,
        user_id: str,
        title: str,
        ingredients: str,
        instructions: str,
        notes: str | None = None,
    ) -> Recipe:
        recipe = Recipe(
            id=str(uuid4()),
            user_id=user_id,
            title=title,
            ingredients=ingredients,
            instructions=instructions,
            notes=notes,
            ai_suggestions=None,
            created_at=datetime.now(UTC),
        )
        with self._transaction() as conn:
            conn.execute(
                f"""
                INSERT INTO recipes ({_RECIPE_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    recipe.id,
                    recipe.user_id,
                    recipe.title,
                    recipe.ingredients,
                    recipe.instructions,
                    recipe.notes,
                    recipe.ai_suggestions,
                    recipe.created_at.isoformat(),
                ),
            )
        return recipe

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        with self._transaction() as conn:
            row = conn.execute(
                f"SELECT {_RECIPE_COLUMNS} FROM recipes WHERE id = ?",
                (recipe_id,),
            ).fetchone()
        if row is None:
            return None
        return self._to_recipe(row)

    def update_recipe(self, recipe_id: str, **changes: str | None) -> Recipe:
        unknown = set(changes) - _UPDATABLE_RECIPE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update recipe fields: {', '.join(sorted(unknown))}")

        with self._transaction() as conn:
            if changes:
                assignments = ", ".join(f"{column} = ?" for column in changes)
                cursor = conn.execute(
                    f"UPDATE recipes SET {assignments} WHERE id = ?",
                    (*changes.values(), recipe_id),
                )
                if cursor.rowcount == 0:
                    raise RecipeNotFoundError(recipe_id)
            row = conn.execute(
                f"SELECT {_RECIPE_COLUMNS} FROM recipes WHERE id = ?",
                (recipe_id,),
            ).fetchone()

        if row is None:
            raise RecipeNotFoundError(recipe_id)
        return self._to_recipe(row)

    def list_recipes(self) -> list[Recipe]:
        with self._transaction() as conn:
            rows = conn.execute(
                f"""
                SELECT {_RECIPE_COLUMNS}
                FROM recipes
                ORDER BY created_at DESC, rowid DESC
                """
            ).fetchall()
        return [self._to_recipe(row) for row in rows]

    @staticmethod
    def _to_recipe(row: Any) -> Recipe:
        return Recipe.model_validate(dict(row))


def get_store(settings: Settings) -> SqliteRecipeStore:
    return SqliteRecipeStore(settings.database_path)
