"""Provider registry and an explicitly owned instance cache."""

import os
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from .base import GeneratorSettings, TitleGenerator
from .claude_agent import ClaudeAgentGenerator
from .openai_chat import OpenAIGenerator


DEFAULT_PROVIDER = "claude-agent"
DEFAULT_CACHE_TTL = 5 * 60  # seconds


@dataclass(frozen=True)
class ProviderInfo:
    """Metadata and constructor for one backend."""
    name: str
    default_model: Optional[str]
    api_key_env: Optional[str]
    factory: Callable[[GeneratorSettings], TitleGenerator]
    requires_api_key: bool = True


PROVIDERS: Dict[str, ProviderInfo] = {
    "claude-agent": ProviderInfo(
        name="Claude Agent SDK",
        default_model=None,  # CLI default
        api_key_env="ANTHROPIC_API_KEY",
        factory=ClaudeAgentGenerator,
        requires_api_key=False,
    ),
    "openai": ProviderInfo(
        name="OpenAI",
        default_model="gpt-4o-mini",
        api_key_env="OPENAI_API_KEY",
        factory=OpenAIGenerator,
    ),
}


class ProviderCache:
    """
    Generator instances keyed by configuration, each with an expiry.

    Owned by the caller; nothing here is process-wide.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[TitleGenerator, float]] = {}

    def get(self, key: Hashable) -> Optional[TitleGenerator]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        instance, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return instance

    def put(self, key: Hashable, instance: TitleGenerator):
        self._entries[key] = (instance, self._clock() + self.ttl_seconds)

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def supported_providers() -> List[str]:
    """Names accepted by create_generator."""
    return list(PROVIDERS)


def get_provider_info(name: str) -> ProviderInfo:
    info = PROVIDERS.get(name)
    if info is None:
        raise ValueError(
            f"Unsupported provider: {name}. Supported: {', '.join(supported_providers())}"
        )
    return info


def create_generator(
    name: str,
    settings: Optional[GeneratorSettings] = None,
    cache: Optional[ProviderCache] = None
) -> TitleGenerator:
    """
    Create (or reuse) a generator for a registered provider.

    Args:
        name: Registry key, e.g. "claude-agent" or "openai"
        settings: Backend settings; model and API key fall back to the
            provider defaults and its environment variable
        cache: Optional cache to look up / store the instance

    Returns:
        TitleGenerator instance

    Raises:
        ValueError: unknown provider or missing API key
    """
    info = get_provider_info(name)
    settings = settings or GeneratorSettings()

    api_key = settings.api_key
    if not api_key and info.api_key_env:
        api_key = os.environ.get(info.api_key_env)
    if info.requires_api_key and not api_key:
        raise ValueError(f"API key required for {name}. Set {info.api_key_env} environment variable.")

    resolved = replace(settings, model=settings.model or info.default_model, api_key=api_key)
    key = (name, resolved.model, resolved.base_url, resolved.temperature, resolved.max_tokens)

    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    instance = info.factory(resolved)
    if cache is not None:
        cache.put(key, instance)
    return instance
