import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure project root is importable when pytest is invoked from non-root directories.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    from cookbot.core.config import get_settings

    # Keep tests deterministic regardless of caller shell environment.
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("RECIPE_DB_PATH", str(tmp_path / "recipes.db"))
    for name in (
        "OPENAI_MODEL",
        "OPENAI_TIMEOUT_SECONDS",
        "COOKBOT_USER_ID",
        "COOKBOT_USER_EMAIL",
        "COOKBOT_USER_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    from cookbot.core.config import get_settings
    from cookbot.db.seed import seed_default_user
    from cookbot.db.sqlite import init_db
    from cookbot.db.store import get_store

    settings = get_settings()
    init_db(settings.database_path)
    recipe_store = get_store(settings)
    seed_default_user(recipe_store, settings)
    return recipe_store

