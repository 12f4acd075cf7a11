"""
Tests for the score validator.

Tests cover:
- ValidationResult bookkeeping
- Measure, duration, chord and id checks
"""

from chuk_music_engraving.core import TimeSignature
from chuk_music_engraving.models import Chord
from chuk_music_engraving.validation import (
    ScoreValidator,
    ValidationResult,
    ValidationSeverity,
    validate_score,
)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_is_valid(self):
        """No issues means valid."""
        result = ValidationResult()
        assert result.is_valid is True
        assert bool(result) is True
        assert "no issues" in str(result)

    def test_warnings_keep_valid(self):
        """Warnings and info do not invalidate."""
        result = ValidationResult()
        result.add_warning("W", "warn")
        result.add_info("I", "info")
        assert result.is_valid is True
        assert len(result.warnings) == 1
        assert result.errors == []

    def test_error_invalidates(self):
        """Any error invalidates."""
        result = ValidationResult()
        result.add_error("E", "broken", "measures/1")
        assert result.is_valid is False
        assert str(result) == "[ERROR] E: broken at measures/1"

    def test_to_dict(self):
        """Serialized result lists its issues."""
        result = ValidationResult()
        result.add_warning("W", "warn", "here")
        data = result.to_dict()
        assert data["valid"] is True
        assert data["issues"] == [
            {"severity": "warning", "code": "W", "message": "warn", "location": "here"}
        ]


class TestScoreValidator:
    """Tests for ScoreValidator checks."""

    def test_valid_score(self, make_note, make_score):
        """Full measures with unique ids pass."""
        score = make_score([make_note("C4", 2.0), make_note("E4", 2.0)])
        assert ScoreValidator().validate(score).issues == []

    def test_no_measures(self, make_score):
        """A score without measures is flagged."""
        result = validate_score(make_score())
        assert result.codes() == ["NO_MEASURES"]
        assert result.is_valid is True

    def test_empty_measure(self, make_note, make_score):
        """Empty measures are warnings."""
        result = validate_score(make_score([make_note("C4", 4.0)], []))
        assert result.codes() == ["EMPTY_MEASURE"]
        assert result.issues[0].location == "measures/2"

    def test_non_positive_duration(self, make_note, make_score):
        """Zero durations are errors."""
        score = make_score([make_note("C4", 0.0, id="z"), make_note("D4", 4.0)])
        result = validate_score(score)
        assert "NON_POSITIVE_DURATION" in result.codes()
        assert result.is_valid is False

    def test_overfull_measure(self, make_note, make_score):
        """More beats than the meter allows is an error."""
        score = make_score([make_note("C4", 2.0), make_note("D4", 2.0), make_note("E4", 1.0)])
        result = validate_score(score)
        assert result.codes() == ["MEASURE_OVERFULL"]
        assert result.errors[0].severity == ValidationSeverity.ERROR

    def test_underfull_measure(self, make_note, make_score):
        """Fewer beats than the meter is a warning."""
        result = validate_score(make_score([make_note("C4", 1.0)]))
        assert result.codes() == ["MEASURE_UNDERFULL"]
        assert result.is_valid is True

    def test_compound_meter(self, make_note, make_score):
        """Six eighths fill 6/8."""
        notes = [make_note("C5", 0.5) for _ in range(6)]
        assert validate_score(make_score(notes, time_signature=TimeSignature(6, 8))).issues == []

    def test_float_sums_tolerated(self, make_note, make_score):
        """Triplet-style float sums still fill the measure."""
        notes = [make_note("C5", 1 / 3) for _ in range(12)]
        assert validate_score(make_score(notes)).issues == []

    def test_whole_measure_rest(self, make_rest, make_score):
        """A whole-measure rest fills any meter."""
        rest = make_rest(4.0, is_whole_measure=True)
        score = make_score([rest], time_signature=TimeSignature(3, 4))
        assert validate_score(score).issues == []

    def test_empty_chord(self, make_score):
        """Chords without notes are errors."""
        score = make_score([Chord(id="ch", duration=4.0)])
        assert validate_score(score).codes() == ["EMPTY_CHORD"]

    def test_duplicate_ids(self, make_note, make_score):
        """Duplicate ids across measures are errors."""
        score = make_score([make_note("C4", 4.0, id="x")], [make_note("D4", 4.0, id="x")])
        result = validate_score(score)
        assert result.codes() == ["DUPLICATE_ID"]
        assert result.issues[0].location == "measures/2/x"

    def test_duplicate_chord_note_ids(self, make_note, make_score):
        """Chord member ids share the id space."""
        chord = Chord(id="ch", duration=4.0, notes=(make_note("C4", 4.0, id="ch"),))
        assert validate_score(make_score([chord])).codes() == ["DUPLICATE_ID"]

    def test_never_raises(self, make_note, make_score):
        """Several problems are all reported together."""
        score = make_score(
            [make_note("C4", -1.0, id="a"), make_note("D4", 9.0, id="a")],
            [],
        )
        codes = validate_score(score).codes()
        assert set(codes) == {
            "NON_POSITIVE_DURATION",
            "MEASURE_OVERFULL",
            "EMPTY_MEASURE",
            "DUPLICATE_ID",
        }
