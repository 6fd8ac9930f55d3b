import asyncio

import httpx

from cookbot.core.errors import AIGatewayError
from cookbot.main import app


class FakeGateway:
    def __init__(self, response: str | Exception) -> None:
        self._response = response

    def generate(self, _prompt_parts):
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def test_index_renders_forms_and_empty_list(store) -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/")
        assert resp.status_code == 200
        assert "Add New Recipe" in resp.text
        assert "Ask the AI Chef" in resp.text
        assert "No recipes saved yet. Add one!" in resp.text

    asyncio.run(run())


def test_ui_create_recipe_shows_message_and_refreshed_list(store) -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                "/ui/recipes",
                data={
                    "title": "Mole Poblano",
                    "ingredients": "chiles, chocolate",
                    "instructions": "toast, blend, simmer",
                },
            )
        assert resp.status_code == 200
        assert "Recipe created successfully!" in resp.text
        assert "status-ok" in resp.text
        assert "<h3>Mole Poblano</h3>" in resp.text

    asyncio.run(run())


def test_ui_create_recipe_failure_shows_message_only(store) -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post("/ui/recipes", data={"title": "No body"})
        assert resp.status_code == 200
        assert "Missing required fields to create recipe" in resp.text
        assert "status-err" in resp.text
        assert "No recipes saved yet. Add one!" in resp.text

    asyncio.run(run())


def test_ui_ai_suggestion_shows_response_and_stored_suggestion(monkeypatch, store) -> None:
    monkeypatch.setattr(
        "cookbot.api.ui.get_ai_gateway", lambda _settings=None: FakeGateway("Use oat milk.")
    )

    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            await client.post(
                "/ui/recipes",
                data={"title": "Pancakes", "ingredients": "flour, milk", "instructions": "mix, fry"},
            )
            recipe_id = store.list_recipes()[0].id
            resp = await client.post(
                "/ui/ai-suggestion",
                data={"aiPrompt": "Make it vegan", "recipeId": recipe_id},
            )
        assert resp.status_code == 200
        assert "AI suggestions generated!" in resp.text
        assert "AI Chef Response:" in resp.text
        assert "AI Suggestion for this recipe:" in resp.text
        assert f'<option value="{recipe_id}" selected>' in resp.text

    asyncio.run(run())


def test_ui_ai_suggestion_failure_hides_error_detail(monkeypatch, store) -> None:
    monkeypatch.setattr(
        "cookbot.api.ui.get_ai_gateway",
        lambda _settings=None: FakeGateway(AIGatewayError("quota", "quota exceeded for key")),
    )

    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post("/ui/ai-suggestion", data={"aiPrompt": "Hi", "recipeId": ""})
        assert resp.status_code == 200
        assert "Failed to generate AI suggestion" in resp.text
        assert "quota exceeded for key" not in resp.text
        assert "AI Chef Response:" not in resp.text

    asyncio.run(run())


def test_ui_selects_newest_recipe_by_default(store) -> None:
    async def run() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            for title in ("Older Dish", "Newer Dish"):
                await client.post(
                    "/ui/recipes",
                    data={"title": title, "ingredients": "a", "instructions": "b"},
                )
            newest = store.list_recipes()[0]
            page = await client.get("/")
        assert newest.title == "Newer Dish"
        assert f'<option value="{newest.id}" selected>' in page.text
        assert page.text.index("<h3>Newer Dish</h3>") < page.text.index("<h3>Older Dish</h3>")

    asyncio.run(run())
