"""
Score model - the symbolic input to layout.

A Score contains:
- Global context (clef, key signature, time signature, tempo)
- Measures, each an ordered list of elements
- Elements: a closed variant over Note, Chord and Rest

Elements are a tagged union discriminated by their `type` field, so a
serialized element always says which variant it is. Everything is frozen:
layout produces a separate LayoutResult and never mutates the score.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chuk_music_engraving.constants import (
    AccidentalType,
    ArticulationType,
    BarlineType,
    DynamicType,
    NoteState,
    OrnamentType,
)
from chuk_music_engraving.core.key import KeySignature
from chuk_music_engraving.core.pitch import ClefType, Pitch
from chuk_music_engraving.core.rhythm import TimeSignature


class Note(BaseModel):
    """A single pitched note."""

    type: Literal["note"] = "note"
    id: str = Field(..., description="Stable element identifier")
    duration: float = Field(..., description="Duration in beats (quarter = 1.0)")
    onset: float | None = Field(None, description="Intended onset in beats within the measure")
    position_x: float | None = Field(None, description="Horizontal position, filled by layout")

    pitch: Pitch = Field(..., description="Sounding pitch")
    accidental: AccidentalType | None = Field(None, description="Accidental to draw")
    dotted: bool = Field(False, description="Single augmentation dot")
    double_dotted: bool = Field(False, description="Two augmentation dots")
    tied: bool = Field(False, description="Tied to the next note")
    slurred: bool = Field(False, description="Slur continues to the next note")
    beam_group: int | None = Field(None, description="Explicit beam group from the source")
    articulations: tuple[ArticulationType, ...] = Field(default=(), description="Articulations")
    dynamic: DynamicType | None = Field(None, description="Dynamic marking")
    ornament: OrnamentType | None = Field(None, description="Ornament marking")
    voice: int = Field(1, ge=1, description="Voice number")
    finger: int | None = Field(None, ge=1, le=5, description="Fingering 1-5")
    grace: bool = Field(False, description="Grace note")
    state: NoteState = Field(NoteState.NORMAL, description="Visual feedback state")

    model_config = {"frozen": True}

    def staff_position(self, clef: ClefType = ClefType.TREBLE) -> int:
        """Staff position of this note's pitch in the given clef."""
        return self.pitch.staff_position(clef)


class Chord(BaseModel):
    """Several notes sounding together with one stem."""

    type: Literal["chord"] = "chord"
    id: str = Field(..., description="Stable element identifier")
    duration: float = Field(..., description="Duration in beats (quarter = 1.0)")
    onset: float | None = Field(None, description="Intended onset in beats within the measure")
    position_x: float | None = Field(None, description="Horizontal position, filled by layout")

    notes: tuple[Note, ...] = Field(default=(), description="Constituent notes")
    arpeggio: bool = Field(False, description="Rolled chord")

    model_config = {"frozen": True}


class Rest(BaseModel):
    """A silence."""

    type: Literal["rest"] = "rest"
    id: str = Field(..., description="Stable element identifier")
    duration: float = Field(..., description="Duration in beats (quarter = 1.0)")
    onset: float | None = Field(None, description="Intended onset in beats within the measure")
    position_x: float | None = Field(None, description="Horizontal position, filled by layout")

    is_whole_measure: bool = Field(False, description="Whole-measure rest")

    model_config = {"frozen": True}


MusicElement = Annotated[Note | Chord | Rest, Field(discriminator="type")]


class Measure(BaseModel):
    """A single bar: ordered elements and the barline that closes it."""

    number: int = Field(..., description="Measure number (1-based)")
    elements: tuple[MusicElement, ...] = Field(default=(), description="Elements in onset order")
    barline: BarlineType = Field(BarlineType.SINGLE, description="Closing barline")

    model_config = {"frozen": True}

    @property
    def total_duration(self) -> float:
        """Sum of element durations in beats."""
        return sum(element.duration for element in self.elements)


class Score(BaseModel):
    """
    A complete single-staff score.

    This is the central input model. It is built once from an external
    description and laid out as many times as needed.
    """

    id: str = Field(..., description="Score identifier")
    title: str = Field("", description="Score title")
    composer: str | None = Field(None, description="Composer")
    measures: tuple[Measure, ...] = Field(default=(), description="Measures in order")
    clef: ClefType = Field(ClefType.TREBLE, description="Clef")
    key_signature: KeySignature = Field(KeySignature.C_MAJOR, description="Key signature")
    time_signature: TimeSignature = Field(
        default_factory=lambda: TimeSignature.COMMON_TIME, description="Time signature"
    )
    tempo: int | None = Field(None, gt=0, description="Tempo in BPM")

    model_config = {"frozen": True}

    def iter_elements(self):
        """Yield (measure, element) pairs in score order."""
        for measure in self.measures:
            for element in measure.elements:
                yield measure, element

    def element_count(self) -> int:
        """Total number of top-level elements."""
        return sum(len(measure.elements) for measure in self.measures)

    def with_positions(self, positions: dict[str, float]) -> Score:
        """
        Return a copy with `position_x` filled in from an id → x mapping.

        Elements whose id is missing from the mapping keep their value.
        """
        measures = tuple(
            measure.model_copy(
                update={
                    "elements": tuple(
                        element.model_copy(update={"position_x": positions[element.id]})
                        if element.id in positions
                        else element
                        for element in measure.elements
                    )
                }
            )
            for measure in self.measures
        )
        return self.model_copy(update={"measures": measures})
