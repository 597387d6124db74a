"""Title generation backends."""

from .base import GenerationBackendError, GeneratorSettings, TitleGenerator
from .claude_agent import ClaudeAgentGenerator
from .openai_chat import OpenAIGenerator
from .registry import (
    DEFAULT_PROVIDER,
    PROVIDERS,
    ProviderCache,
    ProviderInfo,
    create_generator,
    get_provider_info,
    supported_providers,
)

__all__ = [
    "GenerationBackendError",
    "GeneratorSettings",
    "TitleGenerator",
    "ClaudeAgentGenerator",
    "OpenAIGenerator",
    "DEFAULT_PROVIDER",
    "PROVIDERS",
    "ProviderCache",
    "ProviderInfo",
    "create_generator",
    "get_provider_info",
    "supported_providers",
]
