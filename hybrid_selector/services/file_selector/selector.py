"""
AI-guided file selector.

Tier 3 of hybrid selection: asks a fast model to choose the files that best
evidence each course criterion, then validates its answer against the real
file list.
"""

import asyncio
import logging
import time

from anthropic import APIError

from hybrid_selector.config.settings import Settings
from hybrid_selector.core.types import TokenUsage
from hybrid_selector.services.file_selector.constants import (
    MOCK_CONFIDENCE,
    NO_VALID_FILES_CONFIDENCE,
    PARSE_FAILURE_CONFIDENCE,
    REQUEST_FAILURE_CONFIDENCE,
    SYSTEM_PROMPT,
)
from hybrid_selector.services.file_selector.fallback import (
    filter_candidates,
    pattern_fallback,
    smart_mock_selection,
)
from hybrid_selector.services.file_selector.parser import parse_response
from hybrid_selector.services.file_selector.prompts import build_selection_prompt
from hybrid_selector.services.file_selector.types import (
    AISelectionInput,
    AISelectionResult,
    ParseFailure,
)
from hybrid_selector.services.llm import AnthropicLanguageModel, LanguageModel

logger = logging.getLogger(__name__)

# Token figures reported by mock selections
MOCK_TOKEN_USAGE = TokenUsage(prompt_tokens=800, completion_tokens=150)


class AIGuidedSelector:
    """
    Select evaluation files with a language model.

    Never raises for model or parsing problems: every failure is answered
    with a deterministic pattern-based selection whose reasoning records
    what went wrong and whose confidence is at most 0.3.

    Runs in mock mode (no network) when AI_MOCK_MODE is set, or when no API
    key is configured and no model was injected.
    """

    def __init__(
        self,
        settings: Settings,
        language_model: LanguageModel | None = None,
    ) -> None:
        self.settings = settings
        self.mock_mode = settings.ai_mock_mode or (
            language_model is None and not settings.anthropic_api_key
        )
        if language_model is None and not self.mock_mode:
            language_model = AnthropicLanguageModel(settings.anthropic_api_key)
        self.language_model = language_model

    async def select_files(self, input_data: AISelectionInput) -> AISelectionResult:
        """
        Select files for evaluation against the course criteria.

        Args:
            input_data: Repository, course, criteria, and file list

        Returns:
            AISelectionResult; used_fallback is True when patterns chose the files
        """
        start = time.perf_counter()
        candidates = filter_candidates(input_data.files)

        if self.mock_mode or self.language_model is None:
            return self._mock_selection(input_data, candidates, start)

        prompt = build_selection_prompt(
            input_data, candidates, max_prompt_files=self.settings.ai_max_candidate_files
        )
        timeout = self.settings.ai_selection_timeout_seconds

        try:
            completion = await asyncio.wait_for(
                self.language_model.complete(
                    prompt,
                    model=self.settings.file_selection_model,
                    max_tokens=self.settings.file_selection_max_tokens,
                    temperature=self.settings.file_selection_temperature,
                    system=SYSTEM_PROMPT,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"AI file selection timed out after {timeout}s for {input_data.repo_url}"
            )
            return self._fallback(
                candidates,
                input_data.max_files,
                f"AI request failed: timed out after {timeout}s. Used fallback selection.",
                REQUEST_FAILURE_CONFIDENCE,
                start,
            )
        except APIError as e:
            logger.warning(f"AI file selection API error for {input_data.repo_url}: {e}")
            return self._fallback(
                candidates,
                input_data.max_files,
                f"AI request failed: {e}. Used fallback selection.",
                REQUEST_FAILURE_CONFIDENCE,
                start,
            )
        except Exception as e:
            logger.warning(
                f"AI file selection failed for {input_data.repo_url}: {type(e).__name__}: {e}"
            )
            return self._fallback(
                candidates,
                input_data.max_files,
                f"AI request failed: {type(e).__name__}: {e}. Used fallback selection.",
                REQUEST_FAILURE_CONFIDENCE,
                start,
            )

        parsed = parse_response(completion.text, candidates)

        if isinstance(parsed, ParseFailure):
            logger.warning(f"AI response parsing failed: {parsed.reason}")
            return self._fallback(
                candidates,
                input_data.max_files,
                f"AI parsing failed: {parsed.reason}. Used fallback selection.",
                PARSE_FAILURE_CONFIDENCE,
                start,
                completion.token_usage,
            )

        if not parsed.files:
            logger.warning("No valid files found in AI response, falling back to basic selection")
            return self._fallback(
                candidates,
                input_data.max_files,
                "AI selection failed, used fallback pattern-based selection",
                NO_VALID_FILES_CONFIDENCE,
                start,
                completion.token_usage,
            )

        selected = parsed.files[: input_data.max_files]
        logger.info(
            f"AI selected {len(selected)} files for {input_data.course_id} "
            f"(confidence {parsed.confidence:.2f})"
        )
        return AISelectionResult(
            selected_files=selected,
            reasoning=parsed.reasoning,
            confidence=parsed.confidence,
            method="ai_guided",
            token_usage=completion.token_usage,
            processing_time=_elapsed_ms(start),
        )

    def _mock_selection(
        self,
        input_data: AISelectionInput,
        candidates: list[str],
        start: float,
    ) -> AISelectionResult:
        """Course-aware selection without calling a model."""
        selected = smart_mock_selection(candidates, input_data.course_id, input_data.max_files)
        criteria_names = ", ".join(c.name for c in input_data.criteria)
        return AISelectionResult(
            selected_files=selected,
            reasoning=(
                f"Mock AI selection for {input_data.course_id} course. "
                f"Selected {len(selected)} files based on criteria: {criteria_names}."
            ),
            confidence=MOCK_CONFIDENCE,
            method="ai_guided",
            token_usage=MOCK_TOKEN_USAGE,
            processing_time=_elapsed_ms(start),
        )

    def _fallback(
        self,
        candidates: list[str],
        max_files: int,
        reasoning: str,
        confidence: float,
        start: float,
        token_usage: TokenUsage | None = None,
    ) -> AISelectionResult:
        return AISelectionResult(
            selected_files=pattern_fallback(candidates, max_files),
            reasoning=reasoning,
            confidence=confidence,
            method="pattern_fallback",
            token_usage=token_usage or TokenUsage(),
            processing_time=_elapsed_ms(start),
            used_fallback=True,
        )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
