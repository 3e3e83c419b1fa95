# src/ai_line_review/providers/openai.py
import logging
from openai import AsyncOpenAI
from .base import LLMProvider, ProviderError


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a senior code reviewer. Provide concise, actionable feedback on code changes. Focus only on real issues."


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions, or any endpoint speaking the same API via base_url."""
    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        base_url: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def generate(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if not response.choices:
            raise ProviderError(f"OpenAI returned no choices. Full API response: {response}")

        text = response.choices[0].message.content or ""
        logger.info(f"OpenAI response length: {len(text)} chars")
        return text
