"""Title generation through an OpenAI-compatible chat completions API."""

from openai import AsyncOpenAI

from ..models import Prompt
from ..utils import get_logger
from .base import GeneratorSettings


class OpenAIGenerator:
    """Chat completions backend (OpenAI or any compatible base URL)."""

    def __init__(self, settings: GeneratorSettings):
        self.settings = settings
        self.client = AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        self.logger = get_logger()

    async def generate_title(self, prompt: Prompt) -> str:
        response = await self.client.chat.completions.create(
            model=self.settings.model,
            messages=[
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return response.choices[0].message.content or ""

    async def is_healthy(self) -> bool:
        try:
            await self.client.models.retrieve(self.settings.model)
        except Exception as e:  # noqa: BLE001
            self.logger.debug(f"OpenAI health check failed: {e}")
            return False
        return True
