"""GitHub API wrapper for PR title operations."""

import os
from typing import Dict, List, Optional, Protocol

from github import Github, GithubException
from github.PullRequest import PullRequest

from ..models import PRComment, PRContext, PRInfo
from ..utils import get_logger


MAX_DIFF_FILES = 5
MAX_DIFF_SIZE = 3000


class SourceHostError(Exception):
    """A call to the source-control host failed."""
    pass


class SourceHost(Protocol):
    """Source-control capability used by the title processor."""

    async def get_pr_info(self, pr_number: int) -> PRInfo:
        ...

    async def get_pr_context(self, pr_number: int) -> PRContext:
        ...

    async def update_title(self, pr_number: int, new_title: str) -> None:
        ...

    async def create_comment(self, pr_number: int, body: str) -> PRComment:
        ...

    async def check_write_permission(self) -> bool:
        ...


class GitHubTool:
    """
    GitHub API wrapper for PR title operations.

    Handles:
    - Fetching PR metadata, changed files and a compact diff
    - Updating the PR title
    - Posting issue comments
    - Checking whether the token may write to the repository
    """

    def __init__(self, repo: str, token: Optional[str] = None):
        """
        Initialize GitHub tool.

        Args:
            repo: Repository in format "owner/repo"
            token: GitHub token (defaults to GITHUB_TOKEN env var)
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ValueError("GitHub token required. Set GITHUB_TOKEN env var or pass token parameter.")

        self.gh = Github(self.token)
        self.repo = self.gh.get_repo(repo)
        self.logger = get_logger()
        self._pulls: Dict[int, PullRequest] = {}

    def _pull(self, pr_number: int) -> PullRequest:
        """Get a pull request object (cached per number)."""
        if pr_number not in self._pulls:
            self._pulls[pr_number] = self.repo.get_pull(pr_number)
        return self._pulls[pr_number]

    async def get_pr_info(self, pr_number: int) -> PRInfo:
        try:
            pr = self._pull(pr_number)
            return PRInfo(
                number=pr.number,
                title=pr.title,
                body=pr.body,
                author=pr.user.login if pr.user else "unknown",
                head_ref=pr.head.ref,
                base_ref=pr.base.ref,
                labels=tuple(label.name for label in pr.labels),
                is_draft=bool(pr.draft),
            )
        except GithubException as e:
            raise SourceHostError(f"Failed to get PR info: {e}") from e

    def get_changed_files(self, pr_number: int) -> List[str]:
        """Get list of files changed in a PR."""
        return [f.filename for f in self._pull(pr_number).get_files()]

    def get_diff(self, pr_number: int, max_files: int = MAX_DIFF_FILES, max_size: int = MAX_DIFF_SIZE) -> str:
        """
        Build a compact diff from the per-file patches of a PR.

        Args:
            pr_number: Pull request number
            max_files: Only the first N files are included
            max_size: Result is cut to this many characters

        Returns:
            Diff text (possibly empty)
        """
        diff_parts = []
        for file in list(self._pull(pr_number).get_files())[:max_files]:
            diff_parts.append(f"--- {file.filename}\n{file.patch or ''}")

        return "\n\n".join(diff_parts)[:max_size]

    async def get_pr_context(self, pr_number: int) -> PRContext:
        """
        Collect the snapshot the title processor works on.

        Changed files and diff are best effort; failures only leave them empty.
        """
        info = await self.get_pr_info(pr_number)

        changed_files: List[str] = []
        diff_content = ""
        try:
            changed_files = self.get_changed_files(pr_number)
            self.logger.debug(f"Found {len(changed_files)} changed files")
            if changed_files:
                diff_content = self.get_diff(pr_number)
        except GithubException as e:
            self.logger.warning(f"Failed to get PR changes: {e}")

        return PRContext(
            number=info.number,
            title=info.title,
            body=info.body,
            is_draft=info.is_draft,
            changed_files=tuple(changed_files),
            diff_content=diff_content,
        )

    async def update_title(self, pr_number: int, new_title: str) -> None:
        try:
            self._pull(pr_number).edit(title=new_title)
        except GithubException as e:
            raise SourceHostError(f"GitHub API error: {e}") from e

    async def create_comment(self, pr_number: int, body: str) -> PRComment:
        try:
            comment = self._pull(pr_number).create_issue_comment(body)
        except GithubException as e:
            raise SourceHostError(f"GitHub API error: {e}") from e

        return PRComment(
            id=comment.id,
            body=comment.body or "",
            author=comment.user.login if comment.user else "unknown",
            created_at=comment.created_at.isoformat() if comment.created_at else None,
        )

    async def check_write_permission(self) -> bool:
        """True if the token can push to (or administer) the repository."""
        try:
            permissions = self.repo.permissions
        except GithubException as e:
            self.logger.warning(f"Permission check failed: {e}")
            return False

        if permissions is None:
            return False
        return bool(
            getattr(permissions, "admin", False)
            or getattr(permissions, "maintain", False)
            or getattr(permissions, "push", False)
        )
