import logging

from cookbot.core.config import Settings, get_settings
from cookbot.db.sqlite import init_db
from cookbot.db.store import RecipeStore, get_store
from cookbot.schemas.recipe import User

logger = logging.getLogger(__name__)


def seed_default_user(store: RecipeStore, settings: Settings) -> User:
    """Create the user that form submissions are attributed to, unless present.

    The stored user must match both the configured id and email; form
    submissions reference ``settings.default_user_id`` directly.
    """
    existing = store.find_user_by_email(settings.default_user_email)
    if existing is not None:
        if existing.id != settings.default_user_id:
            raise RuntimeError(
                "Invalid configuration: user "
                f"{settings.default_user_email} already exists with id {existing.id}, "
                f"not COOKBOT_USER_ID={settings.default_user_id}"
            )
        logger.info("seed_default_user", extra={"outcome": "exists"})
        return existing

    by_id = store.get_user(settings.default_user_id)
    if by_id is not None:
        raise RuntimeError(
            "Invalid configuration: user id "
            f"{settings.default_user_id} already belongs to {by_id.email}, "
            f"not COOKBOT_USER_EMAIL={settings.default_user_email}"
        )

    user = store.create_user(
        email=settings.default_user_email,
        name=settings.default_user_name,
        user_id=settings.default_user_id,
    )
    logger.info("seed_default_user", extra={"outcome": "created"})
    return user


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = get_settings()
    init_db(settings.database_path)
    user = seed_default_user(get_store(settings), settings)
    print(f"Default user {user.email} ({user.id}) is ready.")


if __name__ == "__main__":
    main()
