from cookbot.core.config import Settings, get_settings
from cookbot.services.ai_gateway_base import AISuggestionGateway
from cookbot.services.ai_gateway_openai import OpenAISuggestionGateway


def get_ai_gateway(settings: Settings | None = None) -> AISuggestionGateway:
    config = settings or get_settings()
    return OpenAISuggestionGateway(
        api_key=config.openai_api_key or "",
        model=config.openai_model,
        timeout_seconds=config.openai_timeout_seconds,
    )
