# src/ai_line_review/providers/__init__.py
from ai_line_review.config import Settings
from .base import LLMProvider, ProviderError
from .gemini import GeminiProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider


def get_provider(settings: Settings, name: str | None = None) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    name = name or settings.default_provider
    if name == "gemini" and settings.gemini_api_key:
        return GeminiProvider(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
        )
    elif name == "openai" and settings.openai_api_key:
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.temperature,
            max_tokens=settings.max_output_tokens,
        )
    elif name == "ollama" and settings.ollama_endpoint:
        return OllamaProvider(
            endpoint=settings.ollama_endpoint,
            model=settings.ollama_model,
            temperature=settings.temperature,
            num_predict=settings.max_output_tokens,
        )
    return None


__all__ = [
    "LLMProvider",
    "ProviderError",
    "GeminiProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "get_provider",
]
