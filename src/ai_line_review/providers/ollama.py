# src/ai_line_review/providers/ollama.py
import logging
import httpx
from .base import LLMProvider, ProviderError


logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(
        self,
        endpoint: str = "http://localhost:11434",
        model: str = "codellama",
        temperature: float = 0.3,
        num_predict: int = 1500,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.num_predict = num_predict

    async def generate(self, prompt: str) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.endpoint}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "stream": False,
                    "options": {
                        "temperature": self.temperature,
                        "num_predict": self.num_predict,
                    },
                },
                timeout=120.0,
            )
            response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ProviderError(f"Invalid Ollama response format: {data}")

        text = data.get("response") or ""
        logger.info(f"Ollama response length: {len(text)} chars")
        return text
