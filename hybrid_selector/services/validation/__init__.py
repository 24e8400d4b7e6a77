"""
Validation package for checking and improving file selections.

Module structure:
- engine.py: Main ValidationEngine class (critique + apply suggestions)
- types.py: Data types (ValidationRequest, ValidationResult, ValidationChange)
- constants.py: Essential keywords, course contexts, confidence bounds
- prompts.py: Prompt builder for the model critique
- parser.py: Model critique parsing
"""

from hybrid_selector.services.validation.constants import (
    DEFAULT_ESSENTIAL_KEYWORDS,
    ESSENTIAL_KEYWORDS,
)
from hybrid_selector.services.validation.engine import ValidationEngine, essential_keywords_for
from hybrid_selector.services.validation.parser import parse_validation_response
from hybrid_selector.services.validation.prompts import build_validation_prompt, get_course_context
from hybrid_selector.services.validation.types import (
    ParsedCritique,
    ValidationChange,
    ValidationRequest,
    ValidationResult,
    ValidationSuggestions,
)

__all__ = [
    # Main class
    "ValidationEngine",
    # Types
    "ParsedCritique",
    "ValidationChange",
    "ValidationRequest",
    "ValidationResult",
    "ValidationSuggestions",
    # Constants
    "DEFAULT_ESSENTIAL_KEYWORDS",
    "ESSENTIAL_KEYWORDS",
    # Utilities
    "build_validation_prompt",
    "essential_keywords_for",
    "get_course_context",
    "parse_validation_response",
]
