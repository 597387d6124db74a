"""Tools for the PR title agent."""

from .conventional import (
    DEFAULT_OPTIONS,
    FORMAT_ERROR,
    generate_suggestions,
    infer_type,
    is_conventional_title,
    parse_conventional_commit,
    validate_title,
)
from .json_extractor import extract_json
from .github_tool import GitHubTool, SourceHost, SourceHostError
from .action_outputs import build_action_outputs, format_outputs, write_action_outputs

__all__ = [
    "DEFAULT_OPTIONS",
    "FORMAT_ERROR",
    "generate_suggestions",
    "infer_type",
    "is_conventional_title",
    "parse_conventional_commit",
    "validate_title",
    "extract_json",
    "GitHubTool",
    "SourceHost",
    "SourceHostError",
    "build_action_outputs",
    "format_outputs",
    "write_action_outputs",
]
