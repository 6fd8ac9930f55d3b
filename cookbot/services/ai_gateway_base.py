from collections.abc import Sequence
from typing import Protocol


class AISuggestionGateway(Protocol):
    def generate(self, prompt_parts: Sequence[str]) -> str: ...
