"""Suggestion pipeline: prompt the backend, retry, and parse its answer."""

import asyncio
import json
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..models import (
    Prompt,
    TitleGenerationRequest,
    TitleGenerationResponse,
    ValidationOptions,
)
from ..providers import GenerationBackendError, TitleGenerator
from ..tools.conventional import generate_suggestions as heuristic_suggestions
from ..tools.json_extractor import extract_json
from ..utils import get_logger
from .prompts import build_prompt


DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds, multiplied by the attempt number

DEFAULT_REASONING = "AI generated suggestions based on PR content"
DEFAULT_CONFIDENCE = 0.8
FALLBACK_REASONING = "AI response could not be parsed as JSON, extracted suggestions from text"
FALLBACK_CONFIDENCE = 0.5
MAX_SUGGESTION_LINE = 100

FENCE_MARKERS = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)
SUGGESTION_LINE = re.compile(r"^\w+(?:\([^)]+\))?!?: .+$")


class GenerationError(Exception):
    """Title generation kept failing after all retries."""
    pass


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _clamp_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, float(value)))


class SuggestionPipeline:
    """
    Turns a TitleGenerationRequest into a TitleGenerationResponse.

    Handles:
    - Prompt construction
    - Retrying the backend with linear backoff
    - Parsing unreliable model output (JSON, recovered JSON, or plain lines)

    Build one per run; the retry state is not meant to be shared.
    """

    def __init__(
        self,
        generator: TitleGenerator,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        custom_prompt: Optional[str] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the pipeline.

        Args:
            generator: Backend producing raw text for a prompt
            max_retries: Retries after the first failed call
            retry_delay: Base delay in seconds between attempts
            custom_prompt: Optional system prompt template
            sleep: Coroutine used to wait between attempts
        """
        self.generator = generator
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.custom_prompt = custom_prompt
        self._sleep = sleep
        self.logger = get_logger()

    async def generate_suggestions(self, request: TitleGenerationRequest) -> TitleGenerationResponse:
        """
        Ask the backend for title suggestions.

        Args:
            request: PR data and generation options

        Returns:
            Parsed response (degraded confidence when parsing fell back)

        Raises:
            GenerationError: the backend failed on every attempt
        """
        prompt = build_prompt(request, self.custom_prompt)
        self.logger.debug(f"System prompt: {prompt.system}")
        self.logger.debug(f"User prompt: {prompt.user}")

        text = await self._generate_with_retry(prompt)
        self.logger.debug(f"Raw response: {text}")

        return self.parse_response(text, request)

    async def is_healthy(self) -> bool:
        """Check whether the backend answers at all."""
        try:
            return await self.generator.is_healthy()
        except Exception as e:  # noqa: BLE001
            self.logger.warning(f"Health check failed: {e}")
            return False

    async def _generate_with_retry(self, prompt: Prompt) -> str:
        attempts = self.max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                text = await self.generator.generate_title(prompt)
                if not text or not text.strip():
                    raise GenerationBackendError("Backend returned an empty response")
                return text
            except Exception as e:  # noqa: BLE001
                last_error = e
                self.logger.warning(f"Attempt {attempt}/{attempts} failed: {e}")
                if attempt < attempts:
                    delay = attempt * self.retry_delay
                    self.logger.debug(f"Retrying in {delay:.1f}s")
                    await self._sleep(delay)

        raise GenerationError(
            f"Title generation failed after {attempts} attempts: {last_error}"
        ) from last_error

    def parse_response(self, text: str, request: TitleGenerationRequest) -> TitleGenerationResponse:
        """
        Parse raw model output into a response.

        Tries plain JSON, then recovered JSON, then scans lines for
        conventional titles.
        """
        payload = _load_object(FENCE_MARKERS.sub("", text).strip())
        if payload is None:
            payload = _load_object(extract_json(text))

        if payload is None:
            self.logger.warning("Response is not JSON, falling back to line scan")
            return TitleGenerationResponse(
                suggestions=tuple(self.extract_suggestions_from_text(text, request)),
                reasoning=FALLBACK_REASONING,
                confidence=FALLBACK_CONFIDENCE,
            )

        raw = payload.get("suggestions")
        if isinstance(raw, str):
            raw = [raw]
        elif not isinstance(raw, list):
            raw = []
        suggestions = tuple(s.strip() for s in raw if isinstance(s, str) and s.strip())

        if not suggestions:
            self.logger.warning("Response has no usable suggestions, falling back to line scan")
            return TitleGenerationResponse(
                suggestions=tuple(self.extract_suggestions_from_text(text, request)),
                reasoning=FALLBACK_REASONING,
                confidence=FALLBACK_CONFIDENCE,
            )

        reasoning = payload.get("reasoning")
        if not isinstance(reasoning, str) or not reasoning.strip():
            reasoning = DEFAULT_REASONING

        return TitleGenerationResponse(
            suggestions=suggestions,
            reasoning=reasoning,
            confidence=_clamp_confidence(payload.get("confidence")),
        )

    def extract_suggestions_from_text(self, text: str, request: TitleGenerationRequest) -> List[str]:
        """Collect lines that look like conventional titles."""
        suggestions = []
        for line in text.splitlines():
            candidate = line.strip()
            if SUGGESTION_LINE.match(candidate) and len(candidate) <= MAX_SUGGESTION_LINE:
                suggestions.append(candidate)

        if suggestions:
            return suggestions

        options = request.options
        return heuristic_suggestions(
            request.original_title,
            ValidationOptions(
                allowed_types=options.preferred_types,
                require_scope=options.include_scope,
                max_length=options.max_length,
            ),
        )[:1]
