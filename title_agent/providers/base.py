"""Interface every title generation backend implements."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from ..models import Prompt


class GenerationBackendError(Exception):
    """Backend answered, but with an error or nothing usable."""
    pass


@dataclass(frozen=True)
class GeneratorSettings:
    """Backend-independent settings passed to provider factories."""
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.3
    max_tokens: int = 500
    timeout: float = 60.0  # seconds per call


@runtime_checkable
class TitleGenerator(Protocol):
    """Produces raw text for a prompt. May raise on transport failure."""

    async def generate_title(self, prompt: Prompt) -> str:
        ...

    async def is_healthy(self) -> bool:
        ...
