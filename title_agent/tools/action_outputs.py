"""GitHub Actions step outputs for a processing result."""

import json
import os
import uuid
from typing import Dict, Optional

from ..models import ProcessingResult


def build_action_outputs(result: ProcessingResult, original_title: str) -> Dict[str, str]:
    """
    Flatten a result into the action's key/value outputs.

    Args:
        result: Result of the processing run
        original_title: PR title before processing

    Returns:
        Output name -> string value (error-message only when set)
    """
    outputs = {
        "is-conventional": "true" if result.is_conventional else "false",
        "suggested-titles": json.dumps(list(result.suggestions), ensure_ascii=False),
        "original-title": original_title,
        "action-taken": result.action_taken.value,
    }
    if result.error_message:
        outputs["error-message"] = result.error_message
    return outputs


def format_outputs(outputs: Dict[str, str]) -> str:
    """Render outputs in the `$GITHUB_OUTPUT` file syntax."""
    lines = []
    for name, value in outputs.items():
        if "\n" in value or "\r" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            lines.append(f"{name}<<{delimiter}")
            lines.append(value)
            lines.append(delimiter)
        else:
            lines.append(f"{name}={value}")
    return "\n".join(lines) + "\n"


def write_action_outputs(outputs: Dict[str, str], path: Optional[str] = None) -> bool:
    """
    Append outputs to the step output file.

    Args:
        outputs: Output name -> value
        path: Output file (defaults to $GITHUB_OUTPUT)

    Returns:
        False if there is no output file to write to
    """
    path = path or os.environ.get("GITHUB_OUTPUT")
    if not path:
        return False

    with open(path, "a", encoding="utf-8") as f:
        f.write(format_outputs(outputs))
    return True
