"""
Layout model - the resolved geometry handed to a renderer.

A LayoutResult mirrors the score: measures containing element layouts.
Every coordinate is absolute, in the same unit as the staff space, with Y
growing downward from the top staff line. A renderer reads these fields and
draws; it never needs to reason about pitch or rhythm.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from chuk_music_engraving.constants import (
    AccidentalType,
    ArticulationType,
    BarlineType,
    DynamicType,
    FractionalBeamSide,
    NoteState,
    OrnamentType,
)


class NoteLayout(BaseModel):
    """Resolved geometry for a single note (standalone or inside a chord)."""

    type: Literal["note"] = "note"
    id: str
    x: float
    y: float
    staff_position: int
    midi_pitch: int  # Sounding pitch; ties need it equal
    duration: float
    stem_up: bool
    has_stem: bool = True
    flag_count: int = 0
    ledger_line_count: int = 0
    ledger_lines_above: bool = False
    accidental: AccidentalType | None = None
    articulations: tuple[ArticulationType, ...] = ()
    dynamic: DynamicType | None = None
    ornament: OrnamentType | None = None
    dotted: bool = False
    double_dotted: bool = False
    tied: bool = False
    slurred: bool = False
    beam_group: int | None = None
    state: NoteState = NoteState.NORMAL
    offset_for_second: bool = False

    model_config = {"frozen": True}


class ChordLayout(BaseModel):
    """Resolved geometry for a chord: one stem, noteheads sorted bottom to top."""

    type: Literal["chord"] = "chord"
    id: str
    x: float
    duration: float
    notes: tuple[NoteLayout, ...] = ()
    stem_up: bool = True
    arpeggio: bool = False

    model_config = {"frozen": True}

    @property
    def offset_notes(self) -> list[NoteLayout]:
        """Noteheads displaced sideways to clear a second."""
        return [note for note in self.notes if note.offset_for_second]


class RestLayout(BaseModel):
    """Resolved geometry for a rest, always on the staff centre."""

    type: Literal["rest"] = "rest"
    id: str
    x: float
    y: float
    duration: float
    is_whole_measure: bool = False

    model_config = {"frozen": True}


ElementLayout = Annotated[NoteLayout | ChordLayout | RestLayout, Field(discriminator="type")]


class BeamSegmentLayout(BaseModel):
    """One resolved beam line: a full segment or a fractional stub."""

    level: int = Field(..., ge=1, description="1 = primary beam")
    start_x: float
    end_x: float
    fractional_side: FractionalBeamSide | None = None

    model_config = {"frozen": True}


class BeamLayout(BaseModel):
    """
    A beam joining two or more notes.

    `start_x`/`end_x` are the noteheads of the first and last member;
    `left_x`/`right_x` are their stem attachment points, where the primary
    beam sits at `left_y`/`right_y`. Secondary lines stack from the primary
    beam by `level_spacing` per level, toward the noteheads.
    """

    group_id: int
    element_ids: tuple[str, ...]
    start_x: float
    end_x: float
    beam_level: int = Field(..., ge=1, description="Number of beam lines (1 = eighths)")
    stem_up: bool
    left_x: float
    right_x: float
    left_y: float
    right_y: float
    thickness: float = Field(..., ge=0, description="Beam line thickness")
    level_spacing: float = Field(..., ge=0, description="Distance between beam lines")
    segments: tuple[BeamSegmentLayout, ...] = ()

    model_config = {"frozen": True}

    @property
    def slope(self) -> float:
        """Change in Y per unit of X along the primary beam."""
        if self.right_x == self.left_x:
            return 0.0
        return (self.right_y - self.left_y) / (self.right_x - self.left_x)

    @property
    def is_horizontal(self) -> bool:
        return self.left_y == self.right_y

    def interpolate_y(self, x: float) -> float:
        """Y of the primary beam at `x`, where a stem at that X ends."""
        return self.left_y + self.slope * (x - self.left_x)

    def level_offset(self, level: int) -> float:
        """Vertical offset of beam line `level` from the primary beam."""
        if level <= 1:
            return 0.0
        offset = (level - 1) * self.level_spacing
        return offset if self.stem_up else -offset


class MeasureLayout(BaseModel):
    """Resolved geometry for one measure."""

    number: int
    elements: tuple[ElementLayout, ...] = ()
    start_x: float
    end_x: float  # Barline X
    width: float
    barline: BarlineType = BarlineType.SINGLE
    beams: tuple[BeamLayout, ...] = ()

    model_config = {"frozen": True}


class LayoutResult(BaseModel):
    """
    Complete layout of a score.

    Pure function of the score and the layout parameters; recompute it
    whenever either changes.
    """

    measures: tuple[MeasureLayout, ...] = ()
    total_width: float
    staff_height: float
    header_width: float
    staff_space: float

    model_config = {"frozen": True}

    def iter_elements(self) -> Iterator[ElementLayout]:
        """All top-level element layouts in score order."""
        for measure in self.measures:
            yield from measure.elements

    def iter_notes(self) -> Iterator[NoteLayout]:
        """All note layouts, including noteheads inside chords."""
        for element in self.iter_elements():
            if isinstance(element, NoteLayout):
                yield element
            elif isinstance(element, ChordLayout):
                yield from element.notes

    def find(self, element_id: str) -> NoteLayout | ChordLayout | RestLayout | None:
        """Look up an element layout (or chord notehead) by id."""
        for element in self.iter_elements():
            if element.id == element_id:
                return element
            if isinstance(element, ChordLayout):
                for note in element.notes:
                    if note.id == element_id:
                        return note
        return None

    def all_beams(self) -> list[BeamLayout]:
        """Beams across every measure."""
        return [beam for measure in self.measures for beam in measure.beams]

    def positions(self) -> dict[str, float]:
        """Element id → X for every top-level element."""
        return {element.id: element.x for element in self.iter_elements()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return self.model_dump(mode="json")
