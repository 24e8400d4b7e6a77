"""
Hybrid file selector.

Three-tier selection of the files an evaluator should read:
- Tier 1: intelligent cache (signature similarity)
- Tier 2: repository fingerprinting (criterion mapping or semantic analysis)
- Tier 3: AI-guided selection merged with tier-2 criterion coverage

Tier-1 and tier-3 answers pass through validation; every answer passes
through finalization, which guarantees a non-empty, capped, de-duplicated
subset of the input that includes the README when one exists.
"""

import logging
import re
import time
from dataclasses import dataclass

from hybrid_selector.config.courses import course_type_for
from hybrid_selector.config.settings import Settings
from hybrid_selector.core.exceptions import EmptyFileListError
from hybrid_selector.core.types import TokenUsage
from hybrid_selector.services.cache import IntelligentCache, StrategyPerformance
from hybrid_selector.services.file_filters import find_readme, is_readme, is_selectable
from hybrid_selector.services.file_selector import AIGuidedSelector, AISelectionInput
from hybrid_selector.services.fingerprinter import RepositoryFingerprinter
from hybrid_selector.services.hybrid.constants import (
    CRITERION_SELECTION_CONFIDENCE,
    ESSENTIAL_FALLBACK_PATTERNS,
    ESSENTIAL_FILES_PER_PATTERN,
    FALLBACK_MAX_CONFIDENCE,
    FALLBACK_MIN_CONFIDENCE,
    VALIDATION_CONFIDENCE_BONUS,
)
from hybrid_selector.services.hybrid.types import (
    HybridSelectionRequest,
    HybridSelectionResult,
    PerformanceStats,
    SelectionMethod,
    TierTimings,
    TierUsed,
)
from hybrid_selector.services.llm import AnthropicLanguageModel, LanguageModel
from hybrid_selector.services.validation import (
    ValidationChange,
    ValidationEngine,
    ValidationRequest,
)

logger = logging.getLogger(__name__)


@dataclass
class _FingerprintOutcome:
    selected_files: list[str]
    confidence: float
    reasoning: str
    criterion_driven: bool


@dataclass
class _ValidationOutcome:
    selected_files: list[str]
    changes: list[ValidationChange]
    applied: bool
    token_usage: TokenUsage


class HybridSelector:
    """
    Orchestrate cache, fingerprinting, and AI selection for one process.

    All collaborators are injectable; anything not supplied is built from
    settings. A language model is created only when an API key is configured
    and mock mode is off.

    Usage:
        selector = HybridSelector(settings)
        result = await selector.select_files(request)
    """

    def __init__(
        self,
        settings: Settings,
        cache: IntelligentCache | None = None,
        fingerprinter: RepositoryFingerprinter | None = None,
        ai_selector: AIGuidedSelector | None = None,
        validation_engine: ValidationEngine | None = None,
        language_model: LanguageModel | None = None,
    ) -> None:
        self.settings = settings
        if language_model is None and settings.ai_available:
            language_model = AnthropicLanguageModel(settings.anthropic_api_key)

        self.cache = cache or IntelligentCache.from_settings(settings)
        self.fingerprinter = fingerprinter or RepositoryFingerprinter()
        self.ai_selector = ai_selector or AIGuidedSelector(settings, language_model)
        self.validation_engine = validation_engine or ValidationEngine(settings, language_model)

        self._tier_counts: dict[int, int] = {1: 0, 2: 0, 3: 0}
        self._fallback_count = 0
        self._total_processing_time = 0.0
        self._total_tokens = 0

    async def select_files(self, request: HybridSelectionRequest) -> HybridSelectionResult:
        """
        Select evaluation files for a repository.

        Args:
            request: Repository files, course, and criteria

        Returns:
            HybridSelectionResult from the first tier that produced an answer

        Raises:
            EmptyFileListError: If request.files is empty
        """
        if not request.files:
            raise EmptyFileListError(request.repo_url)

        start = time.perf_counter()
        timings = TierTimings()
        files = list(dict.fromkeys(request.files))
        max_files = max(1, request.max_files or self.settings.max_files_per_evaluation)

        logger.info(
            f"Hybrid selection for {request.repo_url} ({request.course_id}): "
            f"{len(files)} files, {len(request.criteria)} criteria, max {max_files}"
        )

        signature = self.fingerprinter.signature_generator.generate(files)

        # TIER 1: Intelligent caching
        if self.settings.enable_intelligent_caching:
            tier_start = time.perf_counter()
            hit = await self.cache.find_similar(signature, request.course_id, request.criteria)
            timings.tier1_time = _elapsed_ms(tier_start)

            if hit:
                validation = await self._validate(
                    request, files, hit.selected_files, "cache", hit.confidence, max_files, timings
                )
                selected = finalize_selection(validation.selected_files, files, max_files)
                await self.cache.refresh(hit, selected)
                logger.info(f"Tier 1 (cache) answered with {len(selected)} files")
                return self._finish(
                    start,
                    timings,
                    selected_files=selected,
                    method="cache",
                    confidence=_bump(hit.confidence, validation.applied),
                    reasoning=_with_changes(hit.reasoning, validation),
                    tier_used=1,
                    cache_hit=True,
                    validation_applied=validation.applied,
                    token_usage=validation.token_usage,
                )
            logger.info("Tier 1 (cache) miss, proceeding to tier 2")

        # TIER 2: Repository fingerprinting
        tier_start = time.perf_counter()
        fingerprint = self._fingerprint(request, files, max_files)
        timings.tier2_time = _elapsed_ms(tier_start)

        if (
            fingerprint is not None
            and not fingerprint.criterion_driven
            and fingerprint.confidence >= self.settings.fingerprint_confidence_threshold
        ):
            logger.info(
                f"Tier 2 (fingerprint) answered with confidence {fingerprint.confidence:.2f}"
            )
            return self._finish(
                start,
                timings,
                selected_files=finalize_selection(fingerprint.selected_files, files, max_files),
                method="fingerprint",
                confidence=fingerprint.confidence,
                reasoning=fingerprint.reasoning,
                tier_used=2,
            )

        # TIER 3: AI-guided selection
        failure = "AI-guided selection disabled"
        ai_tokens = TokenUsage()
        if self.settings.enable_ai_guided_selection:
            tier_start = time.perf_counter()
            try:
                ai_result = await self.ai_selector.select_files(
                    AISelectionInput(
                        repo_url=request.repo_url,
                        course_id=request.course_id,
                        course_name=request.course_name,
                        criteria=request.criteria,
                        files=files,
                        max_files=max_files,
                    )
                )
            except Exception as e:
                logger.warning(f"Tier 3 (AI-guided) raised, using fallback: {e}")
                ai_result = None
                failure = f"AI-guided selection error: {e}"
            timings.tier3_time = _elapsed_ms(tier_start)

            if ai_result is not None and ai_result.used_fallback:
                ai_tokens = ai_result.token_usage
                failure = ai_result.reasoning
                logger.warning(f"Tier 3 (AI-guided) degraded to pattern fallback: {failure}")
            elif ai_result is not None:
                tier2_files = fingerprint.selected_files if fingerprint else []
                merged = _merge(ai_result.selected_files, tier2_files, max_files)
                validation = await self._validate(
                    request,
                    files,
                    merged,
                    "ai_guided",
                    ai_result.confidence,
                    max_files,
                    timings,
                )
                selected = finalize_selection(validation.selected_files, files, max_files)
                confidence = _bump(ai_result.confidence, validation.applied)
                reasoning = ai_result.reasoning
                if fingerprint and fingerprint.criterion_driven:
                    reasoning = f"{reasoning} Merged with criterion coverage from fingerprinting."

                if (
                    self.settings.enable_intelligent_caching
                    and confidence >= self.settings.cache_write_confidence_threshold
                ):
                    await self.cache.put(
                        signature,
                        request.course_id,
                        selected,
                        StrategyPerformance(
                            accuracy=confidence,
                            processing_time=_elapsed_ms(start),
                            evaluation_quality=confidence,
                        ),
                    )

                logger.info(
                    f"Tier 3 (AI-guided) answered with {len(selected)} files, "
                    f"confidence {confidence:.2f}"
                )
                return self._finish(
                    start,
                    timings,
                    selected_files=selected,
                    method="ai_guided",
                    confidence=confidence,
                    reasoning=_with_changes(reasoning, validation),
                    tier_used=3,
                    validation_applied=validation.applied,
                    token_usage=ai_result.token_usage + validation.token_usage,
                )

        # FALLBACK: best available tier-2 result
        if fingerprint is not None and fingerprint.selected_files:
            fallback_files = fingerprint.selected_files
            fallback_confidence = fingerprint.confidence
            detail = fingerprint.reasoning
        else:
            fallback_files = minimal_essential_selection(files, max_files)
            fallback_confidence = FALLBACK_MAX_CONFIDENCE
            detail = "Used minimal essential-pattern selection."

        logger.warning(f"All hybrid tiers failed for {request.repo_url}, using fallback: {failure}")
        return self._finish(
            start,
            timings,
            selected_files=finalize_selection(fallback_files, files, max_files),
            method="fingerprint",
            confidence=min(
                FALLBACK_MAX_CONFIDENCE, max(FALLBACK_MIN_CONFIDENCE, fallback_confidence)
            ),
            reasoning=(
                f"All hybrid tiers failed ({failure}), used fallback fingerprinting. {detail}"
            ),
            tier_used=2,
            fallback_used=True,
            token_usage=ai_tokens,
        )

    def _fingerprint(
        self,
        request: HybridSelectionRequest,
        files: list[str],
        max_files: int,
    ) -> _FingerprintOutcome | None:
        """Run tier 2. Returns None if fingerprinting failed."""
        try:
            analysis = self.fingerprinter.analyze_repository(files)
            repo_type = analysis.type_result.type
            detected = analysis.type_result.confidence

            if request.criteria:
                selected = self.fingerprinter.select_files_by_criteria(
                    files, request.course_id, request.criteria, max_files
                )
                confidence = CRITERION_SELECTION_CONFIDENCE
                basis = "course criteria"
            else:
                selected = self.fingerprinter.select_files(
                    files,
                    course_type_for(request.course_id),
                    max_files,
                    repo_type=repo_type,
                    confidence=detected,
                )
                confidence = detected
                basis = "pattern matching"
        except Exception as e:
            logger.warning(f"Tier 2 (fingerprint) failed for {request.repo_url}: {e}")
            return None

        selected = selected[:max_files]
        return _FingerprintOutcome(
            selected_files=selected,
            confidence=confidence,
            reasoning=(
                f"Repository fingerprinting detected {repo_type} project with "
                f"{detected:.2f} confidence. Selected {len(selected)} files based on {basis}."
            ),
            criterion_driven=bool(request.criteria),
        )

    async def _validate(
        self,
        request: HybridSelectionRequest,
        files: list[str],
        selection: list[str],
        method: str,
        confidence: float,
        max_files: int,
        timings: TierTimings,
    ) -> _ValidationOutcome:
        """Validate a selection and apply the suggestions. Failures leave it unchanged."""
        validation_start = time.perf_counter()
        try:
            validation = await self.validation_engine.validate_selection(
                ValidationRequest(
                    all_files=files,
                    selected_files=selection,
                    course_id=request.course_id,
                    course_name=request.course_name,
                    repo_url=request.repo_url,
                    selection_method=method,
                    confidence=confidence,
                )
            )
            improved, changes = self.validation_engine.apply_validation_suggestions(
                selection, files, validation, max_files
            )
        except Exception as e:
            logger.warning(f"Validation failed, keeping unvalidated selection: {e}")
            timings.validation_time = _elapsed_ms(validation_start)
            return _ValidationOutcome(selection, [], False, TokenUsage())

        timings.validation_time = _elapsed_ms(validation_start)
        if changes:
            logger.info(f"Validation applied {len(changes)} changes")
        return _ValidationOutcome(improved, changes, True, validation.token_usage)

    def _finish(
        self,
        start: float,
        timings: TierTimings,
        *,
        selected_files: list[str],
        method: SelectionMethod,
        confidence: float,
        reasoning: str,
        tier_used: TierUsed,
        cache_hit: bool = False,
        validation_applied: bool = False,
        fallback_used: bool = False,
        token_usage: TokenUsage | None = None,
    ) -> HybridSelectionResult:
        result = HybridSelectionResult(
            selected_files=selected_files,
            method=method,
            confidence=max(0.0, min(1.0, confidence)),
            reasoning=reasoning,
            tier_used=tier_used,
            cache_hit=cache_hit,
            validation_applied=validation_applied,
            fallback_used=fallback_used,
            token_usage=token_usage or TokenUsage(),
            processing_time=_elapsed_ms(start),
            performance=timings,
        )

        self._tier_counts[result.tier_used] += 1
        if result.fallback_used:
            self._fallback_count += 1
        self._total_processing_time += result.processing_time
        self._total_tokens += result.token_usage.total_tokens
        return result

    def performance_stats(self) -> PerformanceStats:
        """Tier usage shares and averages over every selection so far."""
        total = sum(self._tier_counts.values())
        if total == 0:
            return PerformanceStats()

        return PerformanceStats(
            total_selections=total,
            tier1_usage=self._tier_counts[1] / total,
            tier2_usage=self._tier_counts[2] / total,
            tier3_usage=self._tier_counts[3] / total,
            fallback_rate=self._fallback_count / total,
            average_processing_time=self._total_processing_time / total,
            average_token_usage=self._total_tokens / total,
            cache_hit_rate=self._tier_counts[1] / total,
        )


def finalize_selection(selection: list[str], files: list[str], max_files: int) -> list[str]:
    """
    Enforce the output guarantees on a selection.

    - Only paths from files, each once, in selection order
    - No large dependency or noise files
    - The repository README, if one exists, is always included
    - At most max_files and at least one path
    """
    available = set(files)
    selected: list[str] = []
    seen: set[str] = set()
    for path in selection:
        if path in available and path not in seen and is_selectable(path):
            selected.append(path)
            seen.add(path)

    selected = selected[:max_files]

    # Nothing usable survived: rebuild from essentials before the README check
    if not selected:
        selected = minimal_essential_selection(files, max_files)

    readme = find_readme([f for f in files if is_selectable(f)])
    if readme and not any(is_readme(f) for f in selected):
        selected = [readme] + selected[: max_files - 1]

    if not selected:
        usable = [f for f in files if is_selectable(f)]
        selected = usable[:1] or files[:1]

    return selected


def minimal_essential_selection(files: list[str], max_files: int) -> list[str]:
    """Pick a few README, dependency, Docker, and source files by pattern."""
    selected: list[str] = []
    seen: set[str] = set()
    usable = [f for f in files if is_selectable(f)]

    for pattern in ESSENTIAL_FALLBACK_PATTERNS:
        regex = re.compile(pattern, re.IGNORECASE)
        matches = [f for f in usable if regex.search(f) and f not in seen]
        for path in matches[:ESSENTIAL_FILES_PER_PATTERN]:
            selected.append(path)
            seen.add(path)
        if len(selected) >= max_files:
            break

    return selected[:max_files]


def _merge(primary: list[str], secondary: list[str], max_files: int) -> list[str]:
    """Primary paths first, then secondary paths not yet present, capped."""
    return list(dict.fromkeys(primary + secondary))[:max_files]


def _bump(confidence: float, validation_applied: bool) -> float:
    if not validation_applied:
        return confidence
    return min(1.0, confidence + VALIDATION_CONFIDENCE_BONUS)


def _with_changes(reasoning: str, validation: _ValidationOutcome) -> str:
    """Append the validation changelog to a reasoning string."""
    if not validation.applied:
        return reasoning
    if not validation.changes:
        return f"{reasoning} Validation: no changes."
    changelog = "; ".join(
        f"{'added' if c.action == 'add' else 'removed'} {c.file} ({c.reason})"
        for c in validation.changes
    )
    return f"{reasoning} Validation: {changelog}."


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
