"""
Pitch primitives - NoteName, ClefType and Pitch.

Pitch carries two independent measures:
- MIDI number, counted in semitones (chromatic)
- Staff position, counted in letter names (diatonic)

Vertical placement uses the diatonic count, so C4 and C#4 sit on the same
line and only the accidental differs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar

from chuk_music_engraving.constants import AccidentalType, ErrorMessages

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]

# Letter class (0-6, C-B) of each chromatic note name
_DIATONIC_STEPS: list[int] = [0, 0, 1, 1, 2, 3, 3, 4, 4, 5, 5, 6]

_NATURAL_LETTERS = "CDEFGAB"

# Semitones above C of each natural letter, by letter class
_NATURAL_SEMITONES: list[int] = [0, 2, 4, 5, 7, 9, 11]

_ALTERATION_SUFFIXES: dict[int, str] = {-2: "bb", -1: "b", 0: "", 1: "#", 2: "##"}

_PITCH_PATTERN = re.compile(r"^\s*([A-Ga-g])(##|#|bb|b)?(-?\d+)\s*$")


class NoteName(IntEnum):
    """
    The 12 chromatic note names, spelled with sharps.

    The value is the semitone offset above C. Flats are expressed as a
    natural letter plus a negative alteration on the Pitch.
    """

    C = 0
    Cs = 1  # C#
    D = 2
    Ds = 3  # D#
    E = 4
    F = 5
    Fs = 6  # F#
    G = 7
    Gs = 8  # G#
    A = 9
    As = 10  # A#
    B = 11

    @property
    def semitone(self) -> int:
        """Semitones above C."""
        return int(self.value)

    @property
    def is_natural(self) -> bool:
        return self.semitone == _NATURAL_SEMITONES[self.diatonic_step]

    @property
    def diatonic_step(self) -> int:
        """Letter class 0-6 (C=0 ... B=6), shared by C and C#."""
        return _DIATONIC_STEPS[self.value]

    def spell(self) -> str:
        """Human-readable name ('C', 'C#', ...)."""
        return _SHARP_NAMES[self.value]

    @classmethod
    def from_letter(cls, letter: str) -> NoteName:
        """Natural note name for a letter A-G (case-insensitive)."""
        letter = letter.strip().upper()
        if len(letter) != 1 or letter not in _NATURAL_LETTERS:
            raise ValueError(f"Unknown note letter: {letter}")
        return cls[letter]


class ClefType(str, Enum):
    """
    Clefs supported by the layout engine.

    The offset moves staff positions so that every clef shares the
    treble-relative vertical scale used by the renderer.
    """

    TREBLE = "treble"
    BASS = "bass"
    ALTO = "alto"
    TENOR = "tenor"
    PERCUSSION = "percussion"

    @property
    def offset(self) -> int:
        """Staff-position offset added to the treble-relative position."""
        return _CLEF_OFFSETS[self]


_CLEF_OFFSETS: dict[ClefType, int] = {
    ClefType.TREBLE: 0,
    ClefType.BASS: 12,
    ClefType.ALTO: 6,
    ClefType.TENOR: 8,
    ClefType.PERCUSSION: 0,  # Unused: percussion is pinned to the centre line
}

PERCUSSION_STAFF_POSITION = 4


@dataclass(frozen=True)
class Pitch:
    """
    A concrete pitch: note name, octave and alteration.

    Middle C is Pitch(NoteName.C, 4). Alteration is in semitones:
    -2 double flat, -1 flat, 0 natural, 1 sharp, 2 double sharp.
    Sharp-spelled names such as NoteName.Cs take no further alteration.

    Immutable and hashable.
    """

    note: NoteName
    octave: int
    alteration: int = 0

    MIDDLE_C: ClassVar[Pitch]

    def __post_init__(self) -> None:
        if not -2 <= self.alteration <= 2:
            raise ValueError(ErrorMessages.INVALID_ALTERATION.format(alteration=self.alteration))
        if self.alteration and not self.note.is_natural:
            message = ErrorMessages.INVALID_SPELLING.format(
                note=self.note.spell(), alteration=self.alteration
            )
            raise ValueError(message)

    @property
    def midi_pitch(self) -> int:
        """MIDI note number (C4 = 60)."""
        return (self.octave + 1) * 12 + self.note.semitone + self.alteration

    @property
    def diatonic_step(self) -> int:
        """Letter class 0-6 of the note name."""
        return self.note.diatonic_step

    def staff_position(self, clef: ClefType = ClefType.TREBLE) -> int:
        """
        Vertical position in diatonic steps.

        Position 0 is C4 in treble clef; each unit is one line or space.

        Args:
            clef: Clef the staff is read in

        Returns:
            Staff position (percussion clef always returns the centre line)
        """
        if clef is ClefType.PERCUSSION:
            return PERCUSSION_STAFF_POSITION
        return (self.octave - 4) * 7 + self.diatonic_step + clef.offset

    @property
    def chromatic_offset(self) -> int:
        """Semitones above the natural letter, counting a sharp-spelled name."""
        natural = _NATURAL_SEMITONES[self.diatonic_step]
        return self.note.semitone - natural + self.alteration

    @property
    def accidental(self) -> AccidentalType | None:
        """Accidental implied by the spelling (None when natural)."""
        return AccidentalType.from_alteration(self.chromatic_offset)

    def spell(self) -> str:
        """Spell as '<letter>[accidental]<octave>', e.g. 'F#5' or 'Bb3'."""
        return f"{self.note.spell()}{_ALTERATION_SUFFIXES[self.alteration]}{self.octave}"

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """
        Parse a pitch from a string like 'C4', 'F#5', 'Bb3', 'Ebb2'.

        The letter is kept natural and the accidental becomes the alteration,
        so 'Bb3' is Pitch(NoteName.B, 3, -1).

        Raises:
            ValueError: If the value is not a valid pitch string
        """
        if not isinstance(text, str):
            raise ValueError(ErrorMessages.INVALID_PITCH.format(pitch=text))
        match = _PITCH_PATTERN.match(text)
        if match is None:
            raise ValueError(ErrorMessages.INVALID_PITCH.format(pitch=text))

        letter, suffix, octave = match.groups()
        alteration = {"#": 1, "##": 2, "b": -1, "bb": -2}.get(suffix or "", 0)
        return cls(NoteName.from_letter(letter), int(octave), alteration)

    def __str__(self) -> str:
        return self.spell()


Pitch.MIDDLE_C = Pitch(NoteName.C, 4)


def midi_pitch(pitch: Pitch) -> int:
    """MIDI note number of a pitch (C4 = 60, A4 = 69)."""
    return pitch.midi_pitch


def diatonic_step(note: NoteName) -> int:
    """Letter class 0-6 of a chromatic note name."""
    return note.diatonic_step


def staff_position(pitch: Pitch, clef: ClefType = ClefType.TREBLE) -> int:
    """Staff position of a pitch read in the given clef."""
    return pitch.staff_position(clef)
