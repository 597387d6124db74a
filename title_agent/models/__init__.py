"""Data models for PR title processing."""

from .commit import DEFAULT_TYPES, ConventionalCommit, ValidationOptions, ValidationResult
from .generation import (
    Prompt,
    TitleGenerationOptions,
    TitleGenerationRequest,
    TitleGenerationResponse,
)
from .processing import (
    ActionTaken,
    OperationMode,
    PRComment,
    PRContext,
    PRInfo,
    ProcessingResult,
    ProcessingState,
)

__all__ = [
    "DEFAULT_TYPES",
    "ConventionalCommit",
    "ValidationOptions",
    "ValidationResult",
    "Prompt",
    "TitleGenerationOptions",
    "TitleGenerationRequest",
    "TitleGenerationResponse",
    "ActionTaken",
    "OperationMode",
    "PRComment",
    "PRContext",
    "PRInfo",
    "ProcessingResult",
    "ProcessingState",
]
