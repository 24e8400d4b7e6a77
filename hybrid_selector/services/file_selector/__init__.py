"""
AI file selector package for tier 3 of hybrid selection.

This package uses a fast Claude model to choose the files that best evidence
a course's criteria, with deterministic pattern fallbacks.

Module structure:
- selector.py: Main AIGuidedSelector class
- types.py: Data types (AISelectionInput, AISelectionResult, ParseResult)
- constants.py: Configuration and pattern constants
- prompts.py: Prompt builder for AI selection
- fallback.py: Pattern fallback and mock selection
- parser.py: Response parsing and path repair
"""

from hybrid_selector.services.file_selector.constants import (
    FALLBACK_PATTERNS,
    MAX_PROMPT_FILES,
    SYSTEM_PROMPT,
)
from hybrid_selector.services.file_selector.fallback import (
    filter_candidates,
    pattern_fallback,
    smart_mock_selection,
)
from hybrid_selector.services.file_selector.parser import (
    clamp_confidence,
    parse_response,
    repair_path,
)
from hybrid_selector.services.file_selector.prompts import build_selection_prompt
from hybrid_selector.services.file_selector.selector import AIGuidedSelector
from hybrid_selector.services.file_selector.types import (
    AISelectionInput,
    AISelectionResult,
    ParsedSelection,
    ParseFailure,
    ParseResult,
)

__all__ = [
    # Main class
    "AIGuidedSelector",
    # Types
    "AISelectionInput",
    "AISelectionResult",
    "ParsedSelection",
    "ParseFailure",
    "ParseResult",
    # Constants
    "FALLBACK_PATTERNS",
    "MAX_PROMPT_FILES",
    "SYSTEM_PROMPT",
    # Utilities
    "build_selection_prompt",
    "clamp_confidence",
    "filter_candidates",
    "parse_response",
    "pattern_fallback",
    "repair_path",
    "smart_mock_selection",
]
