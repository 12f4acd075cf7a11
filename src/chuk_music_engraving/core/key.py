"""
Key signature primitives.

Only the information the layout needs: how many accidentals the signature
draws, whether they are sharps or flats, and where they sit on the staff.
"""

from __future__ import annotations

from enum import Enum

from chuk_music_engraving.constants import AccidentalType, ErrorMessages

# Treble-relative staff positions in the order accidentals are written
_SHARP_POSITIONS: list[int] = [8, 5, 9, 6, 3, 7, 4]  # F C G D A E B
_FLAT_POSITIONS: list[int] = [4, 7, 3, 6, 2, 5, 1]  # B E A D G C F


class KeySignature(str, Enum):
    """The fifteen major key signatures (relative minors share them)."""

    C_MAJOR = "C"
    G_MAJOR = "G"
    D_MAJOR = "D"
    A_MAJOR = "A"
    E_MAJOR = "E"
    B_MAJOR = "B"
    F_SHARP_MAJOR = "F#"
    C_SHARP_MAJOR = "C#"
    F_MAJOR = "F"
    B_FLAT_MAJOR = "Bb"
    E_FLAT_MAJOR = "Eb"
    A_FLAT_MAJOR = "Ab"
    D_FLAT_MAJOR = "Db"
    G_FLAT_MAJOR = "Gb"
    C_FLAT_MAJOR = "Cb"

    @property
    def accidentals(self) -> int:
        """Number of accidentals in the signature."""
        return _SIGNATURES[self][0]

    @property
    def is_sharp(self) -> bool:
        """True for sharp keys (C major counts as sharp, with zero sharps)."""
        return _SIGNATURES[self][1]

    @property
    def accidental_type(self) -> AccidentalType:
        return AccidentalType.SHARP if self.is_sharp else AccidentalType.FLAT

    def accidental_positions(self) -> list[int]:
        """Treble-relative staff positions of the signature accidentals, in writing order."""
        positions = _SHARP_POSITIONS if self.is_sharp else _FLAT_POSITIONS
        return positions[: self.accidentals]

    @classmethod
    def parse(cls, name: str) -> KeySignature:
        """
        Parse a key name: 'G', 'G major', 'E_minor', 'Bb', 'f#_MAJOR'.

        Minor keys resolve to their relative major.

        Raises:
            ValueError: If the key is not recognised
        """
        if not isinstance(name, str):
            raise ValueError(ErrorMessages.INVALID_KEY.format(key=name))
        normalized = name.strip().replace(" ", "_").upper()
        if normalized in _KEY_ALIASES:
            return _KEY_ALIASES[normalized]
        raise ValueError(ErrorMessages.INVALID_KEY.format(key=name))


_SIGNATURES: dict[KeySignature, tuple[int, bool]] = {
    KeySignature.C_MAJOR: (0, True),
    KeySignature.G_MAJOR: (1, True),
    KeySignature.D_MAJOR: (2, True),
    KeySignature.A_MAJOR: (3, True),
    KeySignature.E_MAJOR: (4, True),
    KeySignature.B_MAJOR: (5, True),
    KeySignature.F_SHARP_MAJOR: (6, True),
    KeySignature.C_SHARP_MAJOR: (7, True),
    KeySignature.F_MAJOR: (1, False),
    KeySignature.B_FLAT_MAJOR: (2, False),
    KeySignature.E_FLAT_MAJOR: (3, False),
    KeySignature.A_FLAT_MAJOR: (4, False),
    KeySignature.D_FLAT_MAJOR: (5, False),
    KeySignature.G_FLAT_MAJOR: (6, False),
    KeySignature.C_FLAT_MAJOR: (7, False),
}

# Relative minor of each major key
_RELATIVE_MINORS: dict[KeySignature, str] = {
    KeySignature.C_MAJOR: "A",
    KeySignature.G_MAJOR: "E",
    KeySignature.D_MAJOR: "B",
    KeySignature.A_MAJOR: "F#",
    KeySignature.E_MAJOR: "C#",
    KeySignature.B_MAJOR: "G#",
    KeySignature.F_SHARP_MAJOR: "D#",
    KeySignature.C_SHARP_MAJOR: "A#",
    KeySignature.F_MAJOR: "D",
    KeySignature.B_FLAT_MAJOR: "G",
    KeySignature.E_FLAT_MAJOR: "C",
    KeySignature.A_FLAT_MAJOR: "F",
    KeySignature.D_FLAT_MAJOR: "Bb",
    KeySignature.G_FLAT_MAJOR: "Eb",
    KeySignature.C_FLAT_MAJOR: "Ab",
}


def _build_aliases() -> dict[str, KeySignature]:
    aliases: dict[str, KeySignature] = {}
    for key in KeySignature:
        tonic = key.value.upper()
        aliases[tonic] = key
        aliases[f"{tonic}_MAJOR"] = key
        aliases[key.name] = key
        aliases[f"{_RELATIVE_MINORS[key].upper()}_MINOR"] = key
    return aliases


_KEY_ALIASES: dict[str, KeySignature] = _build_aliases()
