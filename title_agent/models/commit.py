"""Data models for Conventional Commits parsing and validation."""

from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_TYPES: Tuple[str, ...] = (
    "feat",      # A new feature
    "fix",       # A bug fix
    "docs",      # Documentation only changes
    "style",     # Formatting, no code change
    "refactor",  # Neither fixes a bug nor adds a feature
    "perf",      # Performance improvement
    "test",      # Adding or correcting tests
    "build",     # Build system or external dependencies
    "ci",        # CI configuration
    "chore",     # Other changes that don't modify src or test files
    "revert",    # Reverts a previous commit
)


@dataclass(frozen=True)
class ConventionalCommit:
    """A successfully parsed `type(scope)!: description` title."""
    type: str
    description: str
    scope: Optional[str] = None
    breaking: bool = False
    body: Optional[str] = None
    footer: Optional[str] = None

    @property
    def header(self) -> str:
        """Rebuild the first line from the parsed parts."""
        scope = f"({self.scope})" if self.scope else ""
        marker = "!" if self.breaking else ""
        return f"{self.type}{scope}{marker}: {self.description}"


@dataclass(frozen=True)
class ValidationOptions:
    """Rules a title is checked against."""
    allowed_types: Tuple[str, ...] = DEFAULT_TYPES
    require_scope: bool = False
    max_length: int = 72
    min_description_length: int = 3

    # Style rules, off by default
    forbid_trailing_period: bool = False
    require_lowercase_description: bool = False

    def __post_init__(self):
        # Accept any iterable (lists from config parsing) but store a tuple
        object.__setattr__(self, "allowed_types", tuple(self.allowed_types))

    def is_allowed_type(self, commit_type: str) -> bool:
        return self.canonical_type(commit_type) is not None

    def canonical_type(self, commit_type: str) -> Optional[str]:
        """Return the allowed type matching `commit_type` case-insensitively."""
        folded = commit_type.casefold()
        for allowed in self.allowed_types:
            if allowed.casefold() == folded:
                return allowed
        return None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one title against one set of options."""
    is_valid: bool
    errors: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()
    parsed: Optional[ConventionalCommit] = None
