"""
Pydantic models for the engraving system.

This module provides:
- Score, Measure: The symbolic input
- Note, Chord, Rest: Element variants (tagged by `type`)
- LayoutResult, MeasureLayout: The resolved geometry
- NoteLayout, ChordLayout, RestLayout: Element layout variants
- BeamLayout, BeamSegmentLayout: Beam geometry per group
"""

from chuk_music_engraving.models.layout import (
    BeamLayout,
    BeamSegmentLayout,
    ChordLayout,
    ElementLayout,
    LayoutResult,
    MeasureLayout,
    NoteLayout,
    RestLayout,
)
from chuk_music_engraving.models.score import (
    Chord,
    Measure,
    MusicElement,
    Note,
    Rest,
    Score,
)

__all__ = [
    # Score
    "Score",
    "Measure",
    "MusicElement",
    "Note",
    "Chord",
    "Rest",
    # Layout
    "LayoutResult",
    "MeasureLayout",
    "ElementLayout",
    "NoteLayout",
    "ChordLayout",
    "RestLayout",
    "BeamLayout",
    "BeamSegmentLayout",
]
