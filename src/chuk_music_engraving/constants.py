"""
Constants and enums for the engraving system.

No magic strings - use enums for constrained values. Glyph selection for
these symbols belongs to the renderer; the engine only carries the names.
"""

from enum import Enum


class BarlineType(str, Enum):
    """Barline drawn at the end of a measure."""

    SINGLE = "single"
    DOUBLE = "double"
    FINAL = "final"
    REPEAT_LEFT = "repeat_left"
    REPEAT_RIGHT = "repeat_right"
    REPEAT_BOTH = "repeat_both"


class AccidentalType(str, Enum):
    """Accidental glyph attached to a notehead."""

    DOUBLE_FLAT = "double_flat"
    FLAT = "flat"
    NATURAL = "natural"
    SHARP = "sharp"
    DOUBLE_SHARP = "double_sharp"

    @property
    def alteration(self) -> int:
        """Semitone alteration implied by this accidental."""
        return _ACCIDENTAL_ALTERATIONS[self]

    @classmethod
    def from_alteration(cls, alteration: int) -> "AccidentalType | None":
        """Accidental for a non-zero alteration, None for naturals."""
        for accidental, value in _ACCIDENTAL_ALTERATIONS.items():
            if value == alteration and accidental is not cls.NATURAL:
                return accidental
        return None


_ACCIDENTAL_ALTERATIONS: dict[AccidentalType, int] = {
    AccidentalType.DOUBLE_FLAT: -2,
    AccidentalType.FLAT: -1,
    AccidentalType.NATURAL: 0,
    AccidentalType.SHARP: 1,
    AccidentalType.DOUBLE_SHARP: 2,
}


class ArticulationType(str, Enum):
    """Articulation marks placed above or below a note."""

    STACCATO = "staccato"
    STACCATISSIMO = "staccatissimo"
    ACCENT = "accent"
    TENUTO = "tenuto"
    MARCATO = "marcato"
    FERMATA = "fermata"


class DynamicType(str, Enum):
    """Dynamic markings."""

    PP = "pp"
    P = "p"
    MP = "mp"
    MF = "mf"
    F = "f"
    FF = "ff"
    SF = "sf"
    FP = "fp"


class OrnamentType(str, Enum):
    """Ornament markings."""

    TRILL = "trill"
    MORDENT = "mordent"
    INVERTED_MORDENT = "inverted_mordent"
    TURN = "turn"
    INVERTED_TURN = "inverted_turn"


class NoteState(str, Enum):
    """
    Visual state for interactive feedback.

    The renderer maps these to colors; the engine passes them through.
    """

    NORMAL = "normal"  # Default appearance
    HIGHLIGHTED = "highlighted"  # Currently selected or being worked on
    CORRECT = "correct"  # Sung/played correctly
    INCORRECT = "incorrect"  # Mistake
    UPCOMING = "upcoming"  # Next note to play
    PASSED = "passed"  # Already played in sequence


class NoteheadKind(str, Enum):
    """Notehead shape selected by duration."""

    WHOLE = "whole"
    HALF = "half"
    BLACK = "black"


class FractionalBeamSide(str, Enum):
    """Direction a fractional (stub) beam points from its stem."""

    LEFT = "left"
    RIGHT = "right"


# Staff geometry
STAFF_LINES = 5
TOP_LINE_POSITION = 8  # Staff position of the top line
MIDDLE_LINE_POSITION = 4  # Staff position of the middle line
BOTTOM_LINE_POSITION = 0  # Staff position of the bottom line


class ErrorMessages:
    """Standardized error messages."""

    INVALID_PITCH = "Invalid pitch: '{pitch}'. Expected format like 'C4', 'F#5' or 'Bb3'."
    INVALID_ALTERATION = "Alteration must be between -2 and 2, got {alteration}"
    INVALID_SPELLING = "Sharp-spelled note {note} cannot take alteration {alteration}"
    INVALID_TIME_SIGNATURE = "Invalid time signature format: {notation}"
    INVALID_KEY = "Unknown key signature: '{key}'."
    INVALID_CLEF = "Unknown clef: '{clef}'."
    NO_SUCH_PRESET = "Layout preset '{name}' not found."
