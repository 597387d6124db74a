"""Data models for processing a single PR title."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OperationMode(Enum):
    """What to do with the generated suggestions."""
    AUTO = "auto"         # Rewrite the PR title
    SUGGEST = "suggest"   # Post a comment with candidates


class ActionTaken(Enum):
    """Terminal action of one processing run."""
    UPDATED = "updated"
    COMMENTED = "commented"
    SKIPPED = "skipped"
    ERROR = "error"


class ProcessingState(Enum):
    """States of the title processor."""
    IDLE = "idle"
    EVALUATING = "evaluating"
    SKIPPED = "skipped"
    GENERATING = "generating"
    ACTING = "acting"
    UPDATED = "updated"
    COMMENTED = "commented"
    FAILED = "failed"


@dataclass(frozen=True)
class PRContext:
    """Snapshot of the PR being processed."""
    number: int
    title: str
    body: Optional[str] = None
    is_draft: bool = False
    changed_files: Tuple[str, ...] = ()
    diff_content: str = ""


@dataclass(frozen=True)
class PRInfo:
    """PR metadata as reported by the source host."""
    number: int
    title: str
    body: Optional[str]
    author: str
    head_ref: str
    base_ref: str
    labels: Tuple[str, ...] = ()
    is_draft: bool = False


@dataclass(frozen=True)
class PRComment:
    """A comment created on a PR."""
    id: int
    body: str
    author: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one processing run. Built once, never mutated."""
    is_conventional: bool
    suggestions: Tuple[str, ...]
    reasoning: str
    action_taken: ActionTaken
    error_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.action_taken is ActionTaken.ERROR
