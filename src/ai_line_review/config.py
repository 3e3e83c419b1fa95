# src/ai_line_review/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # LLM Providers
    default_provider: str = "gemini"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    openai_base_url: str | None = None
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    ollama_endpoint: str = "http://localhost:11434"
    ollama_model: str = "codellama"

    # Generation
    temperature: float = 0.3
    max_output_tokens: int = 1500

    # Review run
    max_concurrency: int = 1
    cache_ttl_seconds: float = 300.0
    review_timeout: float | None = None
