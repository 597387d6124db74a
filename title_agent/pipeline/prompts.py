"""Prompts for Conventional Commits title generation."""

import re
from typing import Dict, Optional

from ..models import Prompt, TitleGenerationRequest


MAX_PR_BODY_SIZE = 1500
MAX_DIFF_SIZE = 2000
MAX_CHANGED_FILES = 20

LANGUAGE_MATCH_INSTRUCTION = (
    "Match the language of the original PR title and description. Write the "
    "description part in that language while keeping type and scope in English."
)
LANGUAGE_ENGLISH_INSTRUCTION = "Always respond in English."

SYSTEM_PROMPT = """
You are an expert at creating Conventional Commits titles for Pull Requests.

## Task
Analyze a PR title and content, then suggest 1-3 improved titles that follow the Conventional Commits standard.

## Rules
1. **Format**: `type(scope): description`
2. **Allowed types**: {{allowedTypes}}
3. **Scope**: {{scopeRule}} a scope in parentheses
4. **Description**: lowercase, no period, max {{maxLength}} chars total
5. Be specific and descriptive
6. Focus on WHAT changed, not HOW
7. **Language**: {{languageInstruction}}

## Response Format
Return ONLY a JSON object with this exact structure:
{
  "suggestions": ["title1", "title2", "title3"],
  "reasoning": "explanation of why these titles are better",
  "confidence": 0.9
}

Do not wrap the JSON in markdown and do not add any other text.
""".strip()

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, variables: Dict[str, object]) -> str:
    """Replace `{{name}}` placeholders; unknown names are left in place."""
    def substitute(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        value = variables[key]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(substitute, template)


def build_system_prompt(
    request: TitleGenerationRequest,
    custom_prompt: Optional[str] = None
) -> str:
    """
    Build the system instruction for a request.

    Args:
        request: Generation request (its options drive the rules)
        custom_prompt: Optional template replacing the built-in one

    Returns:
        System prompt text
    """
    options = request.options
    variables = {
        "allowedTypes": ", ".join(options.preferred_types),
        "scopeRule": "MUST include" if options.include_scope else "MAY include",
        "maxLength": options.max_length,
        "languageInstruction": (
            LANGUAGE_MATCH_INSTRUCTION if options.match_language else LANGUAGE_ENGLISH_INSTRUCTION
        ),
    }
    return render_template(custom_prompt or SYSTEM_PROMPT, variables)


def _excerpt(text: str, limit: int) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def build_user_prompt(request: TitleGenerationRequest) -> str:
    """Build the user message describing the PR."""
    parts = [f'## Original PR Title\n"{request.original_title}"']

    if request.pr_description and request.pr_description.strip():
        parts.append(f"## PR Description\n{_excerpt(request.pr_description, MAX_PR_BODY_SIZE)}")

    # Body is only shown when it adds something beyond the description
    if request.pr_body and request.pr_body.strip() and request.pr_body != request.pr_description:
        parts.append(f"## PR Body\n{_excerpt(request.pr_body, MAX_PR_BODY_SIZE)}")

    if request.diff_content and request.diff_content.strip():
        parts.append(f"## Code Changes (diff)\n{_excerpt(request.diff_content, MAX_DIFF_SIZE)}")

    if request.changed_files:
        files = "\n".join(f"- {path}" for path in request.changed_files[:MAX_CHANGED_FILES])
        parts.append(f"## Changed Files\n{files}")

    parts.append("Generate improved Conventional Commits titles for this PR.")
    return "\n\n".join(parts)


def build_prompt(
    request: TitleGenerationRequest,
    custom_prompt: Optional[str] = None
) -> Prompt:
    """Build the full prompt pair for a request."""
    return Prompt(
        system=build_system_prompt(request, custom_prompt),
        user=build_user_prompt(request),
    )
