from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from cookbot.api.actions import router as actions_router
from cookbot.api.recipes import router as recipes_router
from cookbot.api.ui import router as ui_router
from cookbot.core.config import get_settings
from cookbot.db.seed import seed_default_user
from cookbot.db.sqlite import init_db
from cookbot.db.store import get_store
from cookbot.services.ai_gateway_factory import get_ai_gateway

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    get_ai_gateway(settings)
    init_db(settings.database_path)
    seed_default_user(get_store(settings), settings)
    yield


app = FastAPI(title="CookBot", version="0.1.0", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(ui_router)
app.include_router(actions_router)
app.include_router(recipes_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
