"""Recover a JSON payload from free-form model output.

Models wrap JSON in markdown fences, preface it with prose, assign it to a
variable, append commentary or get cut off at the token limit. The
strategies below run in order, each one only when the previous could not
produce something parseable:

    fence strip -> assignment strip -> slice from first bracket
    -> tolerant parse -> nesting scan -> truncation scan

If nothing parses the input is returned unchanged and the caller decides
what "could not recover" means.
"""

import json
import re
from typing import Any, List, Optional

import json5


FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
ASSIGNMENT_PATTERN = re.compile(r"^\s*(?:const|let|var)\s+\w+\s*=\s*([\s\S]*)", re.IGNORECASE)

# Blind truncation only looks at this many trailing characters
TRUNCATION_WINDOW = 1000


def strip_code_fence(text: str) -> str:
    """Return the contents of the first ``` fence, or the text as-is."""
    match = FENCE_PATTERN.search(text)
    return match.group(1) if match else text


def strip_assignment(text: str) -> str:
    """Drop a leading `const/let/var NAME =` and a trailing `;`."""
    match = ASSIGNMENT_PATTERN.match(text)
    if not match:
        return text
    value = match.group(1).strip()
    if value.endswith(";"):
        value = value[:-1]
    return value


def slice_from_first_bracket(text: str) -> Optional[str]:
    """Discard everything before the first `{` or `[`; None if neither occurs."""
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        return None
    return text[min(starts):]


def tolerant_parse(text: str) -> Optional[str]:
    """
    Parse with trailing commas and comments allowed.

    Returns:
        Canonical JSON for the parsed value, or None if it does not parse
    """
    try:
        value: Any = json5.loads(text)
    except (ValueError, TypeError, RecursionError):
        return None
    return json.dumps(value, indent=2, ensure_ascii=False)


def balanced_end_offsets(text: str) -> List[int]:
    """
    Offsets just past every point where bracket depth returns to zero.

    Only the bracket kind of the first character is counted. Brackets inside
    double-quoted strings are ignored, escapes included.
    """
    if not text or text[0] not in "{[":
        return []

    open_char = text[0]
    close_char = "}" if open_char == "{" else "]"

    offsets = []
    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text):
        if in_string:
            if escape_next:
                escape_next = False
            elif char == "\\":
                escape_next = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                offsets.append(i + 1)

    return offsets


def _nesting_scan(content: str) -> Optional[str]:
    for end in reversed(balanced_end_offsets(content)):
        parsed = tolerant_parse(content[:end])
        if parsed is not None:
            return parsed
    return None


def _truncation_scan(content: str) -> Optional[str]:
    close_char = "}" if content[0] == "{" else "]"
    lower_bound = max(0, len(content) - TRUNCATION_WINDOW)
    for end in range(len(content) - 1, lower_bound - 1, -1):
        candidate = content[:end]
        # A value opened by content[0] can only end with the matching bracket
        if candidate.rstrip()[-1:] != close_char:
            continue
        parsed = tolerant_parse(candidate)
        if parsed is not None:
            return parsed
    return None


def extract_json(text: str) -> str:
    """
    Best-effort extraction of the JSON payload inside `text`.

    Args:
        text: Raw model output

    Returns:
        Canonical JSON string if anything could be recovered, else `text`
    """
    content = strip_assignment(strip_code_fence(text.strip()))

    content = slice_from_first_bracket(content)
    if content is None:
        return text

    for strategy in (tolerant_parse, _nesting_scan, _truncation_scan):
        recovered = strategy(content)
        if recovered is not None:
            return recovered

    return text
