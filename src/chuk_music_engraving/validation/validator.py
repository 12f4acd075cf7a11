"""
Score Validator - structural checks on a parsed score.

Validates:
- The score has measures and no measure is empty
- Element durations are positive
- Measure contents fill the time signature
- Chords have notes
- Element ids are unique

Validation never raises: layout still runs on an inconsistent score, so
problems are reported here rather than rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_music_engraving.models.score import Chord, Measure, Rest, Score

# Tolerance when comparing summed float durations
_DURATION_TOLERANCE = 1e-6


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Layout output will be misleading
    WARNING = "warning"  # Legal but unusual
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    location: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code}: {self.message}{location}"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "location": self.location,
        }


class ValidationResult:
    """Result of validating a score."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add_error(self, code: str, message: str, location: str | None = None) -> None:
        """Add an error issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.ERROR, code, message, location))

    def add_warning(self, code: str, message: str, location: str | None = None) -> None:
        """Add a warning issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.WARNING, code, message, location))

    def add_info(self, code: str, message: str, location: str | None = None) -> None:
        """Add an info issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.INFO, code, message, location))

    @property
    def is_valid(self) -> bool:
        """Return True if no errors (warnings/info are OK)."""
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def codes(self) -> list[str]:
        """Issue codes in the order they were found."""
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {"valid": self.is_valid, "issues": [i.to_dict() for i in self.issues]}

    def __bool__(self) -> bool:
        """Boolean conversion returns is_valid."""
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


class ScoreValidator:
    """Validates score structure against its time signature."""

    def validate(self, score: Score) -> ValidationResult:
        """
        Validate a score.

        Args:
            score: The score to validate

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()

        if not score.measures:
            result.add_warning("NO_MEASURES", "Score has no measures", "measures")
            return result

        for measure in score.measures:
            self._validate_measure(measure, score, result)

        self._validate_ids(score, result)
        return result

    def _validate_measure(self, measure: Measure, score: Score, result: ValidationResult) -> None:
        """Validate element durations and measure fill."""
        location = f"measures/{measure.number}"

        if not measure.elements:
            result.add_warning("EMPTY_MEASURE", f"Measure {measure.number} is empty", location)
            return

        for element in measure.elements:
            if element.duration <= 0:
                result.add_error(
                    "NON_POSITIVE_DURATION",
                    f"Element '{element.id}' has duration {element.duration}",
                    f"{location}/{element.id}",
                )
            if isinstance(element, Chord) and not element.notes:
                result.add_error(
                    "EMPTY_CHORD",
                    f"Chord '{element.id}' has no notes",
                    f"{location}/{element.id}",
                )

        # A single whole-measure rest fills any meter
        if len(measure.elements) == 1:
            only = measure.elements[0]
            if isinstance(only, Rest) and only.is_whole_measure:
                return

        expected = score.time_signature.beats_per_measure
        actual = measure.total_duration
        if actual > expected + _DURATION_TOLERANCE:
            result.add_error(
                "MEASURE_OVERFULL",
                f"Measure {measure.number} has {actual:g} beats, "
                f"{score.time_signature} allows {expected:g}",
                location,
            )
        elif actual < expected - _DURATION_TOLERANCE:
            result.add_warning(
                "MEASURE_UNDERFULL",
                f"Measure {measure.number} has {actual:g} beats, "
                f"{score.time_signature} expects {expected:g}",
                location,
            )

    def _validate_ids(self, score: Score, result: ValidationResult) -> None:
        """Check for duplicate element ids, including chord members."""
        seen: set[str] = set()
        for measure, element in score.iter_elements():
            ids = [element.id]
            if isinstance(element, Chord):
                ids.extend(note.id for note in element.notes)
            for element_id in ids:
                if element_id in seen:
                    result.add_error(
                        "DUPLICATE_ID",
                        f"Duplicate element id: {element_id}",
                        f"measures/{measure.number}/{element_id}",
                    )
                seen.add(element_id)


def validate_score(score: Score) -> ValidationResult:
    """Validate a score with a default validator."""
    return ScoreValidator().validate(score)
