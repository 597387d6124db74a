"""Markdown bodies for PR comments."""

from typing import Optional, Sequence


HOW_TO_APPLY = [
    "### How to Apply",
    "",
    "1. Click the **Edit** button next to the PR title",
    "2. Copy one of the suggested titles above",
    "3. Save the changes",
]

FOOTER = "_This comment was generated automatically to keep PR titles consistent with Conventional Commits._"


def format_suggestion_list(suggestions: Sequence[str]) -> str:
    """Numbered list of backticked titles."""
    return "\n".join(f"{i}. `{title}`" for i, title in enumerate(suggestions, start=1))


def render_template(template: str, current_title: str, suggestions: Sequence[str], reasoning: str) -> str:
    """Fill `${currentTitle}`, `${suggestions}` and `${reasoning}` in a custom template."""
    return (
        template
        .replace("${currentTitle}", current_title)
        .replace("${suggestions}", format_suggestion_list(suggestions))
        .replace("${reasoning}", reasoning or "")
    )


def format_suggestion_comment(
    current_title: str,
    suggestions: Sequence[str],
    reasoning: Optional[str] = None,
    template: Optional[str] = None
) -> str:
    """
    Build the comment posted in suggest mode.

    Args:
        current_title: Title as it is now
        suggestions: Candidate titles, best first
        reasoning: Model explanation (section omitted when empty)
        template: Optional custom template overriding the default layout

    Returns:
        Markdown comment body
    """
    if template:
        return render_template(template, current_title, suggestions, reasoning or "")

    lines = [
        "## PR Title Suggestions",
        "",
        f"The current title `{current_title}` doesn't follow the "
        "[Conventional Commits](https://www.conventionalcommits.org/) format.",
        "",
        "### Suggested Titles",
        "",
    ]
    for i, title in enumerate(suggestions, start=1):
        marker = " **(recommended)**" if i == 1 else ""
        lines.append(f"{i}. `{title}`{marker}")
    lines.append("")

    if reasoning:
        lines.extend(["### Reasoning", "", f"> {reasoning}", ""])

    lines.extend(["---", ""])
    lines.extend(HOW_TO_APPLY)
    lines.extend(["", FOOTER])

    return "\n".join(lines)
