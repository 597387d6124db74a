"""Configuration for the PR title agent."""

import json
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .models import (
    DEFAULT_TYPES,
    OperationMode,
    TitleGenerationOptions,
    ValidationOptions,
)
from .providers import DEFAULT_PROVIDER


@dataclass
class ConfigIssue:
    """One invalid or missing setting."""
    field: str
    message: str


class ConfigurationError(Exception):
    """Raised before processing starts when the configuration is unusable."""

    def __init__(self, issues: List[ConfigIssue]):
        self.issues = issues
        details = "\n".join(f"- {issue.field}: {issue.message}" for issue in issues)
        super().__init__(f"Configuration errors:\n{details}")


def _input(env: Mapping[str, str], name: str) -> Optional[str]:
    """Read an action input (`INPUT_MAX-LENGTH` or `INPUT_MAX_LENGTH`)."""
    key = f"INPUT_{name.upper()}"
    for candidate in (key, key.replace("-", "_")):
        value = env.get(candidate)
        if value is not None and value.strip():
            return value.strip()
    return None


def _bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _pr_number_from_event(env: Mapping[str, str]) -> int:
    """Read the PR number from the webhook payload GitHub Actions provides."""
    path = env.get("GITHUB_EVENT_PATH")
    if not path or not os.path.isfile(path):
        return 0
    try:
        with open(path, encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, ValueError):
        return 0
    pull_request = event.get("pull_request") or {}
    return int(pull_request.get("number") or 0)


@dataclass
class ActionConfig:
    """Configuration for one title processing run."""

    # GitHub settings
    github_token: Optional[str] = None
    repo: str = ""
    pr_number: int = 0

    # Generation backend
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    max_retries: int = 3
    retry_delay: float = 1.0  # seconds, multiplied by attempt number

    # Behavior
    mode: OperationMode = OperationMode.SUGGEST
    validation_options: ValidationOptions = field(default_factory=ValidationOptions)
    include_scope: bool = False
    skip_if_conventional: bool = False
    match_language: bool = True
    check_permissions: bool = True  # Fall back to suggest mode without write access

    # Templates
    custom_prompt: Optional[str] = None
    comment_template: Optional[str] = None

    debug: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ActionConfig":
        """Create config from action inputs and environment variables."""
        env = os.environ if env is None else env

        mode_input = (_input(env, "mode") or "suggest").lower()
        mode = OperationMode.AUTO if mode_input == "auto" else OperationMode.SUGGEST

        types_input = _input(env, "allowed-types")
        if types_input:
            allowed_types = tuple(t.strip() for t in types_input.split(",") if t.strip())
        else:
            allowed_types = DEFAULT_TYPES

        defaults = ValidationOptions()
        validation_options = ValidationOptions(
            allowed_types=allowed_types,
            require_scope=_bool(_input(env, "require-scope"), defaults.require_scope),
            max_length=_int(_input(env, "max-length"), defaults.max_length),
            min_description_length=_int(
                _input(env, "min-description-length"), defaults.min_description_length
            ),
        )

        pr_number = _int(env.get("PR_NUMBER"), 0) or _pr_number_from_event(env)

        return cls(
            github_token=_input(env, "github-token") or env.get("GITHUB_TOKEN"),
            repo=env.get("GITHUB_REPOSITORY", ""),
            pr_number=pr_number,
            provider=_input(env, "provider") or env.get("AI_PROVIDER") or DEFAULT_PROVIDER,
            model=_input(env, "model"),
            max_retries=_int(_input(env, "max-retries"), 3),
            retry_delay=_float(_input(env, "retry-delay"), 1.0),
            mode=mode,
            validation_options=validation_options,
            include_scope=_bool(_input(env, "include-scope"), False),
            skip_if_conventional=_bool(_input(env, "skip-if-conventional"), False),
            match_language=_bool(_input(env, "match-language"), True),
            check_permissions=_bool(_input(env, "check-permissions"), True),
            custom_prompt=_input(env, "custom-prompt"),
            comment_template=_input(env, "comment-template"),
            debug=_bool(_input(env, "debug"), False),
        )

    def validate(self, require_github: bool = True):
        """
        Check the configuration.

        Args:
            require_github: Also require token, repository and PR number

        Raises:
            ConfigurationError: listing every problem found
        """
        issues = []

        if require_github:
            if not self.github_token:
                issues.append(ConfigIssue("github-token", "github-token is required"))
            if not self.repo:
                issues.append(ConfigIssue("repository", "Set GITHUB_REPOSITORY or pass --repo"))
            if self.pr_number <= 0:
                issues.append(ConfigIssue("pr-number", "Set PR_NUMBER or pass --pr-number"))

        if not self.validation_options.allowed_types:
            issues.append(ConfigIssue("allowed-types", "At least one commit type must be allowed"))
        if self.validation_options.max_length < 10:
            issues.append(ConfigIssue("max-length", "Maximum length should be at least 10 characters"))
        if self.validation_options.min_description_length < 0:
            issues.append(ConfigIssue("min-description-length", "Must not be negative"))
        if self.max_retries < 0:
            issues.append(ConfigIssue("max-retries", "Must not be negative"))
        if self.retry_delay < 0:
            issues.append(ConfigIssue("retry-delay", "Must not be negative"))

        if issues:
            raise ConfigurationError(issues)

    def generation_options(self) -> TitleGenerationOptions:
        """Per-call generation options derived from this config."""
        return TitleGenerationOptions(
            include_scope=self.include_scope,
            preferred_types=self.validation_options.allowed_types,
            max_length=self.validation_options.max_length,
            match_language=self.match_language,
        )
