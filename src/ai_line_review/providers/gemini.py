# src/ai_line_review/providers/gemini.py
import logging
import httpx
from .base import LLMProvider, ProviderError


logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    name = "gemini"
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        max_output_tokens: int = 1500,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    async def generate(self, prompt: str) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.API_URL.format(model=self.model)}?key={self.api_key}",
                json={
                    "contents": [{
                        "parts": [{"text": prompt}]
                    }],
                    "generationConfig": {
                        "temperature": self.temperature,
                        "maxOutputTokens": self.max_output_tokens,
                    },
                },
                timeout=60.0
            )
            response.raise_for_status()

        data = response.json()
        candidates = data.get("candidates")
        if candidates is None:
            raise ProviderError(f"Invalid Gemini response format: {data}")
        if not candidates:
            return ""

        parts = candidates[0].get("content", {}).get("parts") or [{}]
        text = parts[0].get("text") or ""
        logger.info(f"Gemini response length: {len(text)} chars")
        return text
