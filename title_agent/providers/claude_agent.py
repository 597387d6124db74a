"""Title generation through the Claude Agent SDK."""

import asyncio
from typing import List

from claude_agent_sdk import (
    ClaudeSDKClient,
    ClaudeAgentOptions,
    AssistantMessage,
    TextBlock,
    ResultMessage,
)

from ..models import Prompt
from ..utils import get_logger
from .base import GenerationBackendError, GeneratorSettings


HEALTH_CHECK_PROMPT = Prompt(
    system='You are a test assistant. Reply with "OK".',
    user="test",
)


class ClaudeAgentGenerator:
    """
    Single-turn, tool-less Claude agent used as a text generator.

    The SDK drives the Claude Code CLI, which handles its own credentials,
    so no API key is required here.
    """

    def __init__(self, settings: GeneratorSettings):
        self.settings = settings
        self.logger = get_logger()

    def _options(self, system_prompt: str) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            system_prompt=system_prompt,
            model=self.settings.model,
            allowed_tools=[],
            max_turns=1,
        )

    async def _collect(self, prompt: Prompt) -> str:
        parts: List[str] = []

        async with ClaudeSDKClient(options=self._options(prompt.system)) as client:
            await client.query(prompt.user)

            async for message in client.receive_response():
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            parts.append(block.text)

                elif isinstance(message, ResultMessage):
                    self.logger.debug(f"Claude agent finished in {message.duration_ms}ms")
                    if message.is_error:
                        raise GenerationBackendError(f"Claude agent returned an error: {message.result}")

        return "".join(parts)

    async def generate_title(self, prompt: Prompt) -> str:
        return await asyncio.wait_for(self._collect(prompt), timeout=self.settings.timeout)

    async def is_healthy(self) -> bool:
        try:
            text = await self.generate_title(HEALTH_CHECK_PROMPT)
        except Exception as e:  # noqa: BLE001
            self.logger.debug(f"Claude agent health check failed: {e}")
            return False
        return "ok" in text.lower()
