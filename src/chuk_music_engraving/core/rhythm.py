"""
Rhythm primitives - durations and time signatures.

Durations are floats in beat units where a quarter note is 1.0. The helper
functions answer the notation questions a renderer asks about a duration:
does it need a stem, how many flags, which notehead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from chuk_music_engraving.constants import ErrorMessages, NoteheadKind


class Duration:
    """Canonical duration values in beats (quarter = 1.0)."""

    DOUBLE_WHOLE: ClassVar[float] = 8.0
    WHOLE: ClassVar[float] = 4.0  # Semibreve
    HALF: ClassVar[float] = 2.0  # Minim
    QUARTER: ClassVar[float] = 1.0  # Crotchet
    EIGHTH: ClassVar[float] = 0.5  # Quaver
    SIXTEENTH: ClassVar[float] = 0.25  # Semiquaver
    THIRTY_SECOND: ClassVar[float] = 0.125  # Demisemiquaver
    SIXTY_FOURTH: ClassVar[float] = 0.0625  # Hemidemisemiquaver


# Flag thresholds: (minimum duration, flag count), checked in order
_FLAG_THRESHOLDS: list[tuple[float, int]] = [
    (Duration.QUARTER, 0),
    (Duration.EIGHTH, 1),
    (Duration.SIXTEENTH, 2),
    (Duration.THIRTY_SECOND, 3),
    (Duration.SIXTY_FOURTH, 4),
]


def needs_stem(duration: float) -> bool:
    """Everything shorter than a whole note has a stem."""
    return duration < Duration.WHOLE


def should_beam(duration: float) -> bool:
    """Durations shorter than the quarter-note beat are beamed."""
    return duration < Duration.QUARTER


def needs_flag(duration: float) -> bool:
    """Unbeamed notes shorter than a quarter carry flags."""
    return should_beam(duration)


def number_of_flags(duration: float) -> int:
    """
    Number of flags (or beam lines) for a duration.

    Eighth = 1, sixteenth = 2, 32nd = 3, 64th = 4, anything shorter = 5.
    """
    for threshold, flags in _FLAG_THRESHOLDS:
        if duration >= threshold:
            return flags
    return 5


def dotted_duration(base: float, dots: int = 1) -> float:
    """
    Length of a dotted note.

    Each dot adds half of the previous addition:
    1 dot = base * 1.5, 2 dots = base * 1.75.
    """
    return base * (2 - 2.0**-dots)


def notehead_kind(duration: float) -> NoteheadKind:
    """Notehead shape for a duration."""
    if duration >= Duration.WHOLE:
        return NoteheadKind.WHOLE
    if duration >= Duration.HALF:
        return NoteheadKind.HALF
    return NoteheadKind.BLACK


class DurationType(Enum):
    """
    Named duration buckets with their beam counts.

    Values are beats (quarter = 1.0).
    """

    DOUBLE_WHOLE = 8.0
    WHOLE = 4.0
    HALF = 2.0
    QUARTER = 1.0
    EIGHTH = 0.5
    SIXTEENTH = 0.25
    THIRTY_SECOND = 0.125
    SIXTY_FOURTH = 0.0625
    ONE_TWENTY_EIGHTH = 0.03125

    @property
    def beats(self) -> float:
        return float(self.value)

    @property
    def beam_count(self) -> int:
        """Number of beams or flags this bucket is drawn with."""
        if self is DurationType.ONE_TWENTY_EIGHTH:
            return 5
        return number_of_flags(self.value)

    @property
    def has_stem(self) -> bool:
        return needs_stem(self.value)

    @classmethod
    def from_beats(cls, beats: float) -> DurationType:
        """Largest bucket that does not exceed the given duration."""
        for member in cls:
            if beats >= member.value:
                return member
        return cls.ONE_TWENTY_EIGHTH


@dataclass(frozen=True)
class TimeSignature:
    """
    A time signature as written: numerator over denominator.

    Examples:
        TimeSignature(4, 4) = common time
        TimeSignature(6, 8) = compound duple
    """

    numerator: int
    denominator: int

    COMMON_TIME: ClassVar[TimeSignature]  # 4/4
    CUT_TIME: ClassVar[TimeSignature]  # 2/2
    WALTZ: ClassVar[TimeSignature]  # 3/4
    SIX_EIGHT: ClassVar[TimeSignature]  # 6/8

    def __post_init__(self) -> None:
        if self.numerator <= 0:
            raise ValueError(f"Numerator must be positive, got {self.numerator}")
        if self.denominator <= 0:
            raise ValueError(f"Denominator must be positive, got {self.denominator}")

    @property
    def beats_per_measure(self) -> float:
        """Measure length in quarter-note beats."""
        return self.numerator * (4 / self.denominator)

    @property
    def is_compound(self) -> bool:
        """Compound meters group eighths in threes (6/8, 9/8, 12/8)."""
        return self.numerator in (6, 9, 12) and self.denominator == 8

    @property
    def is_common(self) -> bool:
        return self.numerator == 4 and self.denominator == 4

    @property
    def is_cut(self) -> bool:
        return self.numerator == 2 and self.denominator == 2

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    @classmethod
    def parse(cls, notation: str) -> TimeSignature:
        """
        Parse a time signature from notation like '4/4', '3/4', '6/8'.

        Raises:
            ValueError: If the notation is malformed
        """
        parts = notation.split("/") if isinstance(notation, str) else []
        if len(parts) != 2:
            raise ValueError(ErrorMessages.INVALID_TIME_SIGNATURE.format(notation=notation))
        try:
            return cls(int(parts[0]), int(parts[1]))
        except ValueError as e:
            raise ValueError(ErrorMessages.INVALID_TIME_SIGNATURE.format(notation=notation)) from e


TimeSignature.COMMON_TIME = TimeSignature(4, 4)
TimeSignature.CUT_TIME = TimeSignature(2, 2)
TimeSignature.WALTZ = TimeSignature(3, 4)
TimeSignature.SIX_EIGHT = TimeSignature(6, 8)
