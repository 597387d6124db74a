"""Data models exchanged with the title generation backends."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .commit import DEFAULT_TYPES


@dataclass(frozen=True)
class TitleGenerationOptions:
    """Per-call generation options."""
    include_scope: bool = False
    preferred_types: Tuple[str, ...] = DEFAULT_TYPES
    max_length: int = 72
    match_language: bool = True


@dataclass(frozen=True)
class TitleGenerationRequest:
    """Everything the backend gets to see about a PR."""
    original_title: str
    pr_description: Optional[str] = None
    pr_body: Optional[str] = None
    diff_content: Optional[str] = None
    changed_files: Tuple[str, ...] = ()
    options: TitleGenerationOptions = field(default_factory=TitleGenerationOptions)


@dataclass(frozen=True)
class TitleGenerationResponse:
    """Parsed backend answer."""
    suggestions: Tuple[str, ...]
    reasoning: str
    confidence: float  # 0.0 - 1.0


@dataclass(frozen=True)
class Prompt:
    """System instruction plus user message sent to a backend."""
    system: str
    user: str
