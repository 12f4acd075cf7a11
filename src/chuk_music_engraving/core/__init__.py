"""
Core notation primitives.

These are the value types and pure queries everything else composes on:
- NoteName: The 12 chromatic note names (sharp spelling)
- ClefType: Clefs and their staff-position offsets
- Pitch: Note name + octave + alteration (MIDI number, staff position)
- Duration: Canonical beat values and stem/flag/beam rules
- TimeSignature: Numerator/denominator, simple vs compound
- KeySignature: Accidental count and placement
"""

from chuk_music_engraving.core.key import KeySignature
from chuk_music_engraving.core.pitch import (
    ClefType,
    NoteName,
    Pitch,
    diatonic_step,
    midi_pitch,
    staff_position,
)
from chuk_music_engraving.core.rhythm import (
    Duration,
    DurationType,
    TimeSignature,
    dotted_duration,
    needs_flag,
    needs_stem,
    notehead_kind,
    number_of_flags,
    should_beam,
)

__all__ = [
    # Pitch
    "NoteName",
    "ClefType",
    "Pitch",
    "midi_pitch",
    "diatonic_step",
    "staff_position",
    # Rhythm
    "Duration",
    "DurationType",
    "TimeSignature",
    "needs_stem",
    "needs_flag",
    "should_beam",
    "number_of_flags",
    "dotted_duration",
    "notehead_kind",
    # Key
    "KeySignature",
]
