# src/ai_line_review/providers/base.py
from abc import ABC, abstractmethod


class ProviderError(Exception):
    """Raised when a backend answers with a payload that has no usable text."""
    pass


class LLMProvider(ABC):
    name: str = "custom"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send prompt to the LLM and return its raw text answer."""
        pass
