"""Shared fakes for the generation backend and the source host.

Only external boundaries are faked; everything else runs for real.
"""

import json
from typing import List, Optional

import pytest

from title_agent.models import PRComment, PRContext, PRInfo, Prompt


def json_answer(suggestions, reasoning="Describes the change", confidence=0.9) -> str:
    return json.dumps({
        "suggestions": suggestions,
        "reasoning": reasoning,
        "confidence": confidence,
    })


class FakeGenerator:
    """Replays scripted answers; an Exception entry is raised instead of returned."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: List[Prompt] = []
        self.healthy = True

    async def generate_title(self, prompt: Prompt) -> str:
        self.prompts.append(prompt)
        # Last answer repeats once the script runs out
        answer = self.answers[min(len(self.prompts), len(self.answers)) - 1]
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def is_healthy(self) -> bool:
        return self.healthy


class FakeSourceHost:
    """Records mutating calls instead of talking to GitHub."""

    def __init__(
        self,
        can_write: bool = True,
        update_error: Optional[Exception] = None,
        comment_error: Optional[Exception] = None
    ):
        self.can_write = can_write
        self.update_error = update_error
        self.comment_error = comment_error
        self.updates = []
        self.comments = []
        self.permission_checks = 0

    async def get_pr_info(self, pr_number: int) -> PRInfo:
        return PRInfo(
            number=pr_number,
            title="Add login page",
            body=None,
            author="octocat",
            head_ref="feature/login",
            base_ref="main",
        )

    async def get_pr_context(self, pr_number: int) -> PRContext:
        return PRContext(number=pr_number, title="Add login page")

    async def update_title(self, pr_number: int, new_title: str) -> None:
        if self.update_error:
            raise self.update_error
        self.updates.append((pr_number, new_title))

    async def create_comment(self, pr_number: int, body: str) -> PRComment:
        if self.comment_error:
            raise self.comment_error
        self.comments.append((pr_number, body))
        return PRComment(id=len(self.comments), body=body, author="title-bot")

    async def check_write_permission(self) -> bool:
        self.permission_checks += 1
        return self.can_write

    @property
    def mutations(self) -> int:
        return len(self.updates) + len(self.comments)


class SleepRecorder:
    """Stands in for asyncio.sleep and keeps the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float):
        self.delays.append(delay)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()
