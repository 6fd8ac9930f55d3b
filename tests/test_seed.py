import pytest

from cookbot.core.config import DEFAULT_USER_ID, get_settings
from cookbot.db.seed import seed_default_user
from cookbot.db.sqlite import init_db
from cookbot.db.store import get_store


def test_seed_default_user_is_idempotent() -> None:
    settings = get_settings()
    init_db(settings.database_path)
    store = get_store(settings)

    first = seed_default_user(store, settings)
    second = seed_default_user(store, settings)

    assert first.id == DEFAULT_USER_ID
    assert first.email == "test@test.com"
    assert second == first


def test_seed_uses_configured_user(monkeypatch) -> None:
    monkeypatch.setenv("COOKBOT_USER_ID", "chef-1")
    monkeypatch.setenv("COOKBOT_USER_EMAIL", "chef@example.com")
    monkeypatch.setenv("COOKBOT_USER_NAME", "Chef")
    get_settings.cache_clear()
    settings = get_settings()
    init_db(settings.database_path)
    store = get_store(settings)

    user = seed_default_user(store, settings)

    assert (user.id, user.email, user.name) == ("chef-1", "chef@example.com", "Chef")
    assert store.find_user_by_email("chef@example.com") == user


def test_seed_rejects_existing_email_under_other_id() -> None:
    settings = get_settings()
    init_db(settings.database_path)
    store = get_store(settings)
    store.create_user(email=settings.default_user_email, name="test", user_id="seeded-earlier")

    with pytest.raises(RuntimeError, match="Invalid configuration.*seeded-earlier"):
        seed_default_user(store, settings)


def test_seed_rejects_existing_id_under_other_email() -> None:
    settings = get_settings()
    init_db(settings.database_path)
    store = get_store(settings)
    store.create_user(email="someone@example.com", name="someone", user_id=DEFAULT_USER_ID)

    with pytest.raises(RuntimeError, match="Invalid configuration.*someone@example.com"):
        seed_default_user(store, settings)
