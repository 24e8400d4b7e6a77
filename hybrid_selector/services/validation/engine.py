"""
Validation engine.

Critiques a file selection by path names only and applies the resulting
suggestions. The heuristic critique always runs; a model critique is merged
in when AI validation is enabled and a model is available.
"""

import asyncio
import logging
import time

from anthropic import APIError

from hybrid_selector.config.courses import course_type_for
from hybrid_selector.config.settings import Settings
from hybrid_selector.core.types import TokenUsage
from hybrid_selector.services.file_filters import (
    is_large_dependency_file,
    is_noise_path,
    is_selectable,
)
from hybrid_selector.services.file_selector.types import ParseFailure
from hybrid_selector.services.llm import LanguageModel
from hybrid_selector.services.validation.constants import (
    DEFAULT_ESSENTIAL_KEYWORDS,
    ESSENTIAL_KEYWORDS,
    HEURISTIC_CONFIDENCE_FACTOR,
    MAX_HEURISTIC_CONFIDENCE,
    MIN_HEURISTIC_CONFIDENCE,
    VALIDATION_MAX_TOKENS,
    VALIDATION_SYSTEM_PROMPT,
)
from hybrid_selector.services.validation.parser import parse_validation_response
from hybrid_selector.services.validation.prompts import build_validation_prompt
from hybrid_selector.services.validation.types import (
    ParsedCritique,
    ValidationChange,
    ValidationRequest,
    ValidationResult,
    ValidationSuggestions,
)

logger = logging.getLogger(__name__)


def essential_keywords_for(course_id: str) -> list[str]:
    """Keywords a complete selection should cover for a course."""
    return ESSENTIAL_KEYWORDS.get(course_type_for(course_id), DEFAULT_ESSENTIAL_KEYWORDS)


class ValidationEngine:
    """
    Validate and improve file selections.

    Usage:
        engine = ValidationEngine(settings)
        validation = await engine.validate_selection(request)
        improved, changes = engine.apply_validation_suggestions(
            request.selected_files, request.all_files, validation, max_files=25
        )
    """

    def __init__(
        self,
        settings: Settings,
        language_model: LanguageModel | None = None,
    ) -> None:
        self.settings = settings
        use_model = settings.enable_ai_validation and not settings.ai_mock_mode
        self.language_model = language_model if use_model else None

    async def validate_selection(self, request: ValidationRequest) -> ValidationResult:
        """
        Critique a selection.

        Never raises for model problems: a failed model critique leaves the
        heuristic result in place.
        """
        start = time.perf_counter()
        result = self.heuristic_critique(request)

        if self.language_model is not None:
            result = await self._with_model_critique(request, result)

        result.processing_time = (time.perf_counter() - start) * 1000
        logger.info(
            f"Validation for {request.course_id}: "
            f"{len(result.suggestions.missing_critical)} missing critical, "
            f"{len(result.suggestions.redundant_files)} redundant "
            f"(confidence {result.confidence:.2f})"
        )
        return result

    def heuristic_critique(self, request: ValidationRequest) -> ValidationResult:
        """
        Check a selection for missing essentials and redundant files.

        An essential keyword absent from every selected path flags the
        shallowest usable repository file containing it as missing-critical.
        Noise paths and large dependency files in the selection are redundant.
        """
        selected_lower = [f.lower() for f in request.selected_files]
        missing_critical: list[str] = []

        for keyword in essential_keywords_for(request.course_id):
            needle = keyword.lower()
            if any(needle in path for path in selected_lower):
                continue
            matches = [
                f for f in request.all_files if needle in f.lower() and is_selectable(f)
            ]
            if matches:
                found = min(matches, key=lambda p: p.count("/"))
                if found not in missing_critical:
                    missing_critical.append(found)

        redundant_files: list[str] = []
        for path in request.selected_files:
            if (is_noise_path(path) or is_large_dependency_file(path)) and (
                path not in redundant_files
            ):
                redundant_files.append(path)

        if redundant_files:
            logger.debug(f"Validation identified redundant files: {', '.join(redundant_files)}")

        issues = len(missing_critical) + len(redundant_files)
        confidence = max(
            MIN_HEURISTIC_CONFIDENCE,
            min(
                MAX_HEURISTIC_CONFIDENCE,
                HEURISTIC_CONFIDENCE_FACTOR * len(request.selected_files) / max(1, issues),
            ),
        )

        return ValidationResult(
            is_valid=issues == 0,
            confidence=confidence,
            suggestions=ValidationSuggestions(
                missing_critical=missing_critical,
                redundant_files=redundant_files,
            ),
            reasoning=(
                f"Heuristic validation: {len(missing_critical)} missing critical files, "
                f"{len(redundant_files)} redundant files identified."
            ),
        )

    async def _with_model_critique(
        self,
        request: ValidationRequest,
        heuristic: ValidationResult,
    ) -> ValidationResult:
        """Ask the model for a critique and merge it with the heuristic one."""
        if self.language_model is None:
            return heuristic
        timeout = self.settings.ai_selection_timeout_seconds

        try:
            completion = await asyncio.wait_for(
                self.language_model.complete(
                    build_validation_prompt(request),
                    model=self.settings.file_selection_model,
                    max_tokens=VALIDATION_MAX_TOKENS,
                    temperature=self.settings.file_selection_temperature,
                    system=VALIDATION_SYSTEM_PROMPT,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"AI validation timed out after {timeout}s, using heuristic result")
            return heuristic
        except APIError as e:
            logger.warning(f"AI validation failed, using heuristic result: {e}")
            return heuristic

        parsed = parse_validation_response(completion.text)
        if isinstance(parsed, ParseFailure):
            logger.warning(f"Failed to parse AI validation response: {parsed.reason}")
            heuristic.token_usage = completion.token_usage
            return heuristic

        return _merge_critiques(request, heuristic, parsed, completion.token_usage)

    def apply_validation_suggestions(
        self,
        selection: list[str],
        all_files: list[str],
        validation: ValidationResult,
        max_files: int,
    ) -> tuple[list[str], list[ValidationChange]]:
        """
        Apply validation suggestions to a selection.

        Order: remove redundant files, add missing-critical files while under
        max_files, then add recommended files while capacity remains. Running
        removal first makes re-validating a validated selection a no-op.

        Returns:
            Tuple of (improved selection, changes in the order applied)
        """
        available = set(all_files)
        improved = list(dict.fromkeys(selection))
        changes: list[ValidationChange] = []

        redundant = set(validation.suggestions.redundant_files)
        for path in [f for f in improved if f in redundant]:
            improved.remove(path)
            changes.append(
                ValidationChange(
                    action="remove",
                    file=path,
                    reason="Redundant file identified by validation",
                    importance="optional",
                )
            )

        for path in validation.suggestions.missing_critical:
            if len(improved) >= max_files:
                break
            if path in available and path not in improved:
                improved.append(path)
                changes.append(
                    ValidationChange(
                        action="add",
                        file=path,
                        reason="Critical file identified by validation",
                        importance="critical",
                    )
                )

        for path in validation.suggestions.additional_recommended:
            if len(improved) >= max_files:
                break
            if path in available and path not in improved:
                improved.append(path)
                changes.append(
                    ValidationChange(
                        action="add",
                        file=path,
                        reason="Recommended file identified by validation",
                        importance="important",
                    )
                )

        return improved, changes


def _merge_critiques(
    request: ValidationRequest,
    heuristic: ValidationResult,
    critique: ParsedCritique,
    token_usage: TokenUsage,
) -> ValidationResult:
    """
    Union the model's suggestions into the heuristic ones.

    Model suggestions survive only when they name real, usable repository
    files: additions must not already be selected and removals must be.
    """
    available = set(request.all_files)
    selected = set(request.selected_files)

    def usable_addition(path: str) -> bool:
        return path in available and path not in selected and is_selectable(path)

    missing_critical = list(heuristic.suggestions.missing_critical)
    for path in critique.suggestions.missing_critical:
        if usable_addition(path) and path not in missing_critical:
            missing_critical.append(path)

    redundant_files = list(heuristic.suggestions.redundant_files)
    for path in critique.suggestions.redundant_files:
        if path in selected and path not in redundant_files:
            redundant_files.append(path)

    additional_recommended: list[str] = []
    for path in critique.suggestions.additional_recommended:
        if (
            usable_addition(path)
            and path not in missing_critical
            and path not in additional_recommended
        ):
            additional_recommended.append(path)

    return ValidationResult(
        is_valid=heuristic.is_valid and critique.is_valid,
        confidence=(heuristic.confidence + critique.confidence) / 2,
        suggestions=ValidationSuggestions(
            missing_critical=missing_critical,
            redundant_files=redundant_files,
            additional_recommended=additional_recommended,
        ),
        reasoning=f"{heuristic.reasoning} AI review: {critique.reasoning}",
        token_usage=token_usage,
        ai_reviewed=True,
    )
