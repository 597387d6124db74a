"""Conventional Commits grammar: parse, validate and repair PR titles.

Grammar of the first line:

    type(scope)!: description

Parsing is permissive (any word characters as type, case preserved);
policy such as the allowed type set is enforced by validation only.
Every function here is total over strings and never raises.
"""

import re
from typing import List, Optional, Tuple

from ..models import ConventionalCommit, ValidationOptions, ValidationResult


DEFAULT_OPTIONS = ValidationOptions()

FORMAT_ERROR = "Title does not follow Conventional Commits format"

HEADER_PATTERN = re.compile(
    r"^(?P<type>\w+)"
    r"(?:\((?P<scope>[^()\r\n]+)\))?"
    r"(?P<breaking>!)?"
    r": (?P<description>.*\S.*)$"
)

BREAKING_FOOTER_PATTERN = re.compile(r"^\s*BREAKING[ -]CHANGE:")

# Scanned in order, first hit wins
KEYWORD_TYPES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("fix", "bug"), "fix"),
    (("add", "implement", "new"), "feat"),
    (("refactor",), "refactor"),
    (("test",), "test"),
    (("doc",), "docs"),
)
FALLBACK_TYPE = "feat"

SCOPE_PLACEHOLDER = "scope"
EMPTY_TITLE_PLACEHOLDER = "describe the change"


def _split_header(title: str) -> Tuple[str, List[str]]:
    lines = title.strip().splitlines()
    if not lines:
        return "", []
    return lines[0].strip(), lines[1:]


def parse_conventional_commit(title: str) -> Optional[ConventionalCommit]:
    """
    Parse a title into its Conventional Commits parts.

    Args:
        title: PR title, optionally followed by body/footer lines

    Returns:
        ConventionalCommit, or None if the first line does not match
    """
    if not title:
        return None

    header, rest = _split_header(title)
    match = HEADER_PATTERN.match(header)
    if not match:
        return None

    scope = match.group("scope")
    scope = scope.strip() if scope else None

    footer_index = next(
        (i for i, line in enumerate(rest) if BREAKING_FOOTER_PATTERN.match(line)),
        None,
    )
    if footer_index is None:
        body_lines, footer_lines = rest, []
    else:
        body_lines, footer_lines = rest[:footer_index], rest[footer_index:]

    body = "\n".join(body_lines).strip() or None
    footer = "\n".join(footer_lines).strip() or None

    return ConventionalCommit(
        type=match.group("type"),
        scope=scope or None,
        breaking=bool(match.group("breaking")) or footer is not None,
        description=match.group("description").strip(),
        body=body,
        footer=footer,
    )


def validate_title(
    title: str,
    options: ValidationOptions = DEFAULT_OPTIONS
) -> ValidationResult:
    """
    Validate a title against Conventional Commits and the configured rules.

    All rule violations are collected; validation never stops at the first.

    Args:
        title: PR title to check
        options: Validation rules

    Returns:
        ValidationResult (suggestions only populated when invalid)
    """
    parsed = parse_conventional_commit(title)

    if parsed is None:
        return ValidationResult(
            is_valid=False,
            errors=(FORMAT_ERROR,),
            suggestions=tuple(generate_suggestions(title, options)),
        )

    errors = []

    if not options.is_allowed_type(parsed.type):
        errors.append(
            f"Invalid commit type '{parsed.type}'. "
            f"Allowed types: {', '.join(options.allowed_types)}"
        )

    if options.require_scope and not parsed.scope:
        errors.append("Scope is required but missing")

    # A breaking footer adds `!` to the rebuilt header, so count it here too
    header_length = max(len(_split_header(title)[0]), len(parsed.header))
    if header_length > options.max_length:
        errors.append(
            f"Title is {header_length} characters long, "
            f"exceeding the maximum of {options.max_length}"
        )

    if len(parsed.description) < options.min_description_length:
        errors.append(
            f"Description is too short (minimum {options.min_description_length} characters)"
        )

    if options.forbid_trailing_period and parsed.description.endswith("."):
        errors.append("Description should not end with a period")

    if options.require_lowercase_description and parsed.description[0] != parsed.description[0].lower():
        errors.append("Description should start with a lowercase letter")

    if errors:
        suggestions = tuple(generate_suggestions(title, options))
    else:
        suggestions = ()

    return ValidationResult(
        is_valid=not errors,
        errors=tuple(errors),
        suggestions=suggestions,
        parsed=parsed,
    )


def is_conventional_title(
    title: str,
    options: ValidationOptions = DEFAULT_OPTIONS
) -> bool:
    """Check whether a title already passes validation."""
    return validate_title(title, options).is_valid


def infer_type(text: str, options: ValidationOptions = DEFAULT_OPTIONS) -> str:
    """Guess a commit type from keywords in free text."""
    lowered = text.casefold()
    for keywords, commit_type in KEYWORD_TYPES:
        if any(keyword in lowered for keyword in keywords):
            return _allowed_or_first(commit_type, options)
    return _allowed_or_first(FALLBACK_TYPE, options)


def _allowed_or_first(commit_type: str, options: ValidationOptions) -> str:
    canonical = options.canonical_type(commit_type)
    if canonical:
        return canonical
    if options.allowed_types:
        return options.allowed_types[0]
    return commit_type


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:max(limit, 1)].rstrip()


def generate_suggestions(
    title: str,
    options: ValidationOptions = DEFAULT_OPTIONS
) -> List[str]:
    """
    Build repaired candidate titles without any model.

    Args:
        title: Original (possibly non-conventional) title
        options: Validation rules the candidates should satisfy

    Returns:
        At least one candidate title
    """
    parsed = parse_conventional_commit(title)
    if parsed is not None:
        return [_repair(parsed, options)]

    header = _split_header(title or "")[0]
    if not header:
        return [f"{infer_type('', options)}: {EMPTY_TITLE_PLACEHOLDER}"]

    commit_type = infer_type(header, options)
    return [_truncate(f"{commit_type}: {header.lower()}", options.max_length)]


def _repair(parsed: ConventionalCommit, options: ValidationOptions) -> str:
    commit_type = options.canonical_type(parsed.type) or infer_type(parsed.description, options)
    scope = parsed.scope
    if options.require_scope and not scope:
        scope = SCOPE_PLACEHOLDER

    description = parsed.description
    if options.forbid_trailing_period:
        description = description.rstrip(".") or description
    if options.require_lowercase_description:
        description = description[0].lower() + description[1:]

    prefix = ConventionalCommit(
        type=commit_type,
        scope=scope,
        breaking=parsed.breaking,
        description="",
    ).header
    description = _truncate(description, options.max_length - len(prefix))

    return prefix + description
