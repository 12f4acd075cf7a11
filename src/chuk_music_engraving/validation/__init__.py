"""
Validation - non-raising structural checks on a score.
"""

from chuk_music_engraving.validation.validator import (
    ScoreValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_score,
)

__all__ = [
    "ScoreValidator",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate_score",
]
