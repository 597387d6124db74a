"""PR title processing.

This module provides:
- TitleProcessor: decides skip / generate / act for a single PR
- format_suggestion_comment: Markdown body posted in suggest mode
"""

from .comments import format_suggestion_comment
from .processor import TitleProcessor

__all__ = [
    "TitleProcessor",
    "format_suggestion_comment",
]
