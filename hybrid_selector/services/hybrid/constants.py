"""
Hybrid selection policy constants.

These confidence figures are fixed policy values, not measurements.
"""

# Criterion-driven tier-2 selections are trusted but always refined by tier 3
CRITERION_SELECTION_CONFIDENCE = 0.95

# Added to the confidence of a result whose validation pass completed
VALIDATION_CONFIDENCE_BONUS = 0.1

# Fallback results report confidence inside this range
FALLBACK_MIN_CONFIDENCE = 0.1
FALLBACK_MAX_CONFIDENCE = 0.3

# Minimal essential selection: up to ESSENTIAL_FILES_PER_PATTERN matches each
ESSENTIAL_FALLBACK_PATTERNS = [
    r"README\.(md|txt)$",
    r"requirements\.txt$",
    r"package\.json$",
    r"Dockerfile$",
    r"\.py$",
    r"\.ipynb$",
]
ESSENTIAL_FILES_PER_PATTERN = 3
