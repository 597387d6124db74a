"""Title processor: decide skip / generate / act for one PR."""

from typing import Optional, Sequence

from ..config import ActionConfig
from ..models import (
    ActionTaken,
    OperationMode,
    PRContext,
    ProcessingResult,
    ProcessingState,
    TitleGenerationRequest,
    TitleGenerationResponse,
)
from ..pipeline import GenerationError, SuggestionPipeline
from ..pipeline.prompts import MAX_CHANGED_FILES
from ..tools import SourceHost, validate_title
from ..utils import get_logger
from .comments import format_suggestion_comment


class TitleProcessor:
    """
    Processes the title of a single PR.

    States:
        idle -> evaluating -> skipped
                           -> generating -> acting -> updated | commented
        any of evaluating/generating/acting -> failed

    At most one mutating call (title update or comment) is made per
    process() call. Build a new processor for every PR event.
    """

    def __init__(
        self,
        config: ActionConfig,
        pipeline: SuggestionPipeline,
        source_host: SourceHost
    ):
        """
        Initialize the processor.

        Args:
            config: Run configuration
            pipeline: Suggestion pipeline wrapping the generation backend
            source_host: Source-control capability (GitHubTool in production)
        """
        self.config = config
        self.pipeline = pipeline
        self.source_host = source_host
        self.logger = get_logger()

        self.state = ProcessingState.IDLE
        self._mode: Optional[OperationMode] = None

    def _transition(self, state: ProcessingState):
        self.logger.debug(f"Processing state: {self.state.value} -> {state.value}")
        self.state = state

    async def resolve_mode(self) -> OperationMode:
        """
        Decide the operation mode once per run.

        Auto mode falls back to suggest mode when the token cannot write.
        """
        if self._mode is not None:
            return self._mode

        mode = self.config.mode
        if mode is OperationMode.AUTO and self.config.check_permissions:
            try:
                can_write = await self.source_host.check_write_permission()
            except Exception as e:  # noqa: BLE001
                self.logger.warning(f"Permission check failed: {e}")
                can_write = False

            if not can_write:
                self.logger.warning("Insufficient permissions for auto mode, falling back to suggest mode")
                mode = OperationMode.SUGGEST

        self._mode = mode
        return mode

    async def process(self, pr: PRContext) -> ProcessingResult:
        """
        Run the title processing for one PR.

        Args:
            pr: Snapshot of the PR

        Returns:
            ProcessingResult describing the single action taken
        """
        self._transition(ProcessingState.EVALUATING)
        if pr.is_draft:
            self.logger.debug(f"PR #{pr.number} is a draft")

        validation = validate_title(pr.title, self.config.validation_options)
        is_conventional = validation.is_valid
        self.logger.info(f"Current title is {'conventional' if is_conventional else 'not conventional'}")
        if validation.errors:
            self.logger.debug(f"Validation errors: {', '.join(validation.errors)}")

        if is_conventional and self.config.skip_if_conventional:
            self.logger.info("Skipping: title is already conventional and skip-if-conventional is enabled")
            self._transition(ProcessingState.SKIPPED)
            return ProcessingResult(
                is_conventional=True,
                suggestions=(),
                reasoning="Title is already conventional",
                action_taken=ActionTaken.SKIPPED,
            )

        self._transition(ProcessingState.GENERATING)
        self.logger.info("Generating title suggestions...")
        try:
            response = await self.pipeline.generate_suggestions(self._build_request(pr))
        except GenerationError as e:
            self.logger.error(str(e))
            return self._failure(is_conventional, (), "", str(e))

        if not response.suggestions:
            self.logger.warning("No title suggestions generated")
            return self._failure(
                is_conventional,
                (),
                "No suggestions could be generated",
                "No title suggestions could be generated",
            )

        self._transition(ProcessingState.ACTING)
        mode = await self.resolve_mode()
        if mode is OperationMode.AUTO:
            return await self._handle_auto_mode(pr, response, is_conventional)
        return await self._handle_suggest_mode(pr, response, is_conventional)

    def _build_request(self, pr: PRContext) -> TitleGenerationRequest:
        return TitleGenerationRequest(
            original_title=pr.title,
            pr_body=pr.body or None,
            diff_content=pr.diff_content or None,
            changed_files=tuple(pr.changed_files[:MAX_CHANGED_FILES]),
            options=self.config.generation_options(),
        )

    async def _handle_auto_mode(
        self,
        pr: PRContext,
        response: TitleGenerationResponse,
        is_conventional: bool
    ) -> ProcessingResult:
        best = response.suggestions[0]
        self.logger.info(f'Auto mode: updating PR #{pr.number} title "{pr.title}" -> "{best}"')

        try:
            await self.source_host.update_title(pr.number, best)
        except Exception as e:  # noqa: BLE001
            message = f"Failed to update PR title: {e}"
            self.logger.warning(message)
            return self._failure(is_conventional, response.suggestions, response.reasoning, message)

        self._transition(ProcessingState.UPDATED)
        return ProcessingResult(
            is_conventional=is_conventional,
            suggestions=response.suggestions,
            reasoning=response.reasoning,
            action_taken=ActionTaken.UPDATED,
        )

    async def _handle_suggest_mode(
        self,
        pr: PRContext,
        response: TitleGenerationResponse,
        is_conventional: bool
    ) -> ProcessingResult:
        body = format_suggestion_comment(
            pr.title,
            response.suggestions,
            response.reasoning,
            template=self.config.comment_template,
        )

        try:
            await self.source_host.create_comment(pr.number, body)
        except Exception as e:  # noqa: BLE001
            message = f"Failed to create comment: {e}"
            self.logger.warning(message)
            return self._failure(is_conventional, response.suggestions, response.reasoning, message)

        self.logger.info(f"Added comment with {len(response.suggestions)} title suggestions")
        self._transition(ProcessingState.COMMENTED)
        return ProcessingResult(
            is_conventional=is_conventional,
            suggestions=response.suggestions,
            reasoning=response.reasoning,
            action_taken=ActionTaken.COMMENTED,
        )

    def _failure(
        self,
        is_conventional: bool,
        suggestions: Sequence[str],
        reasoning: str,
        message: str
    ) -> ProcessingResult:
        self._transition(ProcessingState.FAILED)
        return ProcessingResult(
            is_conventional=is_conventional,
            suggestions=tuple(suggestions),
            reasoning=reasoning,
            action_taken=ActionTaken.ERROR,
            error_message=message,
        )
