import logging
from collections.abc import Sequence
from typing import Any

from cookbot.core.errors import AIGatewayError

logger = logging.getLogger(__name__)

openai_suggestion_counters = {
    "success": 0,
    "failure": 0,
}


class OpenAISuggestionGateway:
    """Free-text suggestions from the OpenAI Responses API.

    The first prompt part is sent as the system message and the remaining parts
    as the content of a single user message. Exactly one request is made per
    call; failures are raised as ``AIGatewayError`` without retrying.
    """

    _MAX_OUTPUT_TOKENS = 800

    def __init__(
        self, api_key: str, model: str, timeout_seconds: float = 20.0, client: Any | None = None
    ) -> None:
        self._model = model
        self._timeout_seconds = timeout_seconds
        if client is not None:
            self._client = client
            return

        try:
            from openai import OpenAI  # type: ignore[import-not-found]
        except ModuleNotFoundError as exc:
            raise RuntimeError("openai package is required for AI suggestions") from exc

        # One HTTP request per generate() call.
        self._client = OpenAI(api_key=api_key, max_retries=0)

    def generate(self, prompt_parts: Sequence[str]) -> str:
        if len(prompt_parts) < 2:
            raise ValueError("prompt_parts needs a system part and at least one user part")

        system_text, *user_parts = prompt_parts
        request_kwargs = {
            "model": self._model,
            "input": [
                {"role": "system", "content": [{"type": "input_text", "text": system_text}]},
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": part} for part in user_parts],
                },
            ],
            "max_output_tokens": self._MAX_OUTPUT_TOKENS,
            "timeout": self._timeout_seconds,
        }

        try:
            response = self._client.responses.create(**request_kwargs)
        except Exception as exc:
            error_class = self._classify_api_error(exc)
            self._record_failure(error_class)
            raise AIGatewayError(error_class, f"OpenAI API request failed ({error_class})") from exc

        try:
            text = self._extract_output_text(response)
        except AIGatewayError as exc:
            self._record_failure(exc.error_class)
            raise

        openai_suggestion_counters["success"] += 1
        logger.info(
            "openai_suggestion_generation",
            extra={
                "outcome": "success",
                "model": self._model,
                "output_length": len(text),
            },
        )
        return text

    def _record_failure(self, error_class: str) -> None:
        openai_suggestion_counters["failure"] += 1
        logger.warning(
            "openai_suggestion_generation",
            extra={
                "outcome": "failure",
                "model": self._model,
                "error_class": error_class,
            },
        )

    @staticmethod
    def _classify_api_error(exc: Exception) -> str:
        error_name = exc.__class__.__name__
        if error_name == "APITimeoutError":
            return "timeout"
        if error_name == "APIConnectionError":
            return "transport"
        if error_name == "RateLimitError":
            return "rate_limit"
        if error_name == "InternalServerError":
            return "server_error"

        status_code = getattr(exc, "status_code", None)
        if status_code is None:
            response = getattr(exc, "response", None)
            status_code = getattr(response, "status_code", None)
        if isinstance(status_code, int):
            if status_code == 429:
                return "rate_limit"
            if status_code >= 500:
                return "server_error"

        return "api_error"

    @staticmethod
    def _extract_output_text(response: Any) -> str:
        output_text = getattr(response, "output_text", None)
        if output_text is None and isinstance(response, dict):
            output_text = response.get("output_text")

        if not isinstance(output_text, str):
            raise AIGatewayError(
                "invalid_model_output", "OpenAI response did not include output_text"
            )
        return output_text.strip()
