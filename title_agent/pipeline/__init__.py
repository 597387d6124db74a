"""Suggestion pipeline for PR titles."""

from .prompts import build_prompt, build_system_prompt, build_user_prompt, render_template
from .suggestions import GenerationError, SuggestionPipeline

__all__ = [
    "build_prompt",
    "build_system_prompt",
    "build_user_prompt",
    "render_template",
    "GenerationError",
    "SuggestionPipeline",
]
