"""
Score layout engine - turns a Score into absolute geometry.

The engine walks measures left to right with a running X cursor:

    header (clef, key, time) → measure gap → elements → measure gap → barline

Horizontal space per element grows logarithmically with duration. Vertical
placement comes from the diatonic staff position. Stem direction, ledger
lines, chord second-offsets and beam groups are resolved here so the
renderer only has to draw.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from chuk_music_engraving.beaming import assign_beam_groups, beam_segments, collect_beam_groups
from chuk_music_engraving.constants import (
    BOTTOM_LINE_POSITION,
    MIDDLE_LINE_POSITION,
    STAFF_LINES,
    TOP_LINE_POSITION,
    FractionalBeamSide,
)
from chuk_music_engraving.core.pitch import ClefType
from chuk_music_engraving.core.rhythm import needs_stem, number_of_flags
from chuk_music_engraving.layout.params import LayoutParams
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
from chuk_music_engraving.models.score import Chord, Measure, MusicElement, Note, Rest, Score

logger = logging.getLogger(__name__)

# Stem attachment as a fraction of the notehead width
STEM_UP_ATTACH = 0.92
STEM_DOWN_ATTACH = 0.08

# Steepest beam, in staff spaces from end to end
MAX_BEAM_RISE = 1.0


def stem_up_for_position(staff_position: float) -> bool:
    """Notes on or below the middle line take an upward stem."""
    return staff_position <= MIDDLE_LINE_POSITION


def ledger_line_count(staff_position: int) -> int:
    """
    Number of ledger lines a notehead at this position needs.

    Zero inside the staff (positions 0-8).
    """
    if staff_position < BOTTOM_LINE_POSITION:
        return (BOTTOM_LINE_POSITION - staff_position + 1) // 2
    if staff_position > TOP_LINE_POSITION:
        return (staff_position - TOP_LINE_POSITION + 1) // 2
    return 0


def beam_rise(
    first_position: int,
    last_position: int,
    count: int,
    staff_space: float,
) -> float:
    """
    Vertical rise of a beam from its first to its last stem.

    The contour (staff steps per member) is clamped to one staff space either
    way. Positive when the melody rises, in output units.
    """
    if count < 2:
        return 0.0
    contour = (last_position - first_position) / count
    contour = max(-MAX_BEAM_RISE, min(MAX_BEAM_RISE, contour))
    return contour * staff_space


def adjust_seconds(
    notes: Sequence[NoteLayout],
    stem_up: bool,
    offset: float,
) -> list[NoteLayout]:
    """
    Displace noteheads that sit a second apart in a chord.

    Notes are sorted bottom to top. A note one step above its neighbour is
    moved to the side opposite the stem, unless the neighbour was itself
    moved, so offsets alternate and never occur twice in a row.

    Args:
        notes: Chord noteheads, all at the chord X
        stem_up: Chord stem direction
        offset: Horizontal displacement (one notehead width)

    Returns:
        Adjusted noteheads sorted by staff position
    """
    ordered = sorted(notes, key=lambda n: n.staff_position)
    shift = offset if stem_up else -offset
    adjusted: list[NoteLayout] = []
    previous_offset = False

    for i, note in enumerate(ordered):
        is_second = i > 0 and note.staff_position - ordered[i - 1].staff_position == 1
        if is_second and not previous_offset:
            adjusted.append(
                note.model_copy(update={"x": note.x + shift, "offset_for_second": True})
            )
            previous_offset = True
        else:
            adjusted.append(note.model_copy(update={"offset_for_second": False}))
            previous_offset = False

    return adjusted


class ScoreLayoutEngine:
    """
    Calculates positions for every element of a score.

    Stateless apart from its immutable parameters; the same engine can lay
    out any number of scores.
    """

    def __init__(self, params: LayoutParams | None = None):
        """
        Initialize the engine.

        Args:
            params: Layout parameters (defaults used if None)
        """
        self.params = params or LayoutParams()

    @property
    def staff_space(self) -> float:
        return self.params.staff_space

    def layout_score(self, score: Score) -> LayoutResult:
        """
        Lay out a complete score.

        Args:
            score: The score to lay out (not modified)

        Returns:
            LayoutResult with absolute geometry
        """
        header_width = self.header_width(score)
        current_x = header_width
        measures: list[MeasureLayout] = []

        for measure in score.measures:
            measure_layout = self.layout_measure(measure, score, current_x)
            measures.append(measure_layout)
            current_x += measure_layout.width

        logger.debug(
            "Laid out score %s: %d measures, width %.2f",
            score.id,
            len(measures),
            current_x,
        )

        return LayoutResult(
            measures=tuple(measures),
            total_width=current_x,
            staff_height=self.staff_space * (STAFF_LINES - 1),
            header_width=header_width,
            staff_space=self.staff_space,
        )

    def header_width(self, score: Score) -> float:
        """Width of clef, key signature and time signature before the first measure."""
        p = self.params
        width = p.clef_width
        width += p.key_signature_gap
        width += score.key_signature.accidentals * p.key_accidental_width
        width += p.time_signature_gap
        width += p.time_signature_width
        width += p.measure_gap
        return p.scaled(width)

    def layout_measure(self, measure: Measure, score: Score, start_x: float) -> MeasureLayout:
        """
        Lay out one measure starting at `start_x`.

        Elements are ordered by onset (stable, missing onsets count as 0)
        and beamed according to the score's time signature.
        """
        gap = self.params.scaled(self.params.measure_gap)
        current_x = start_x + gap

        ordered = sorted(measure.elements, key=lambda e: e.onset or 0.0)
        beam_assignment = assign_beam_groups(ordered, score.time_signature)

        layouts: list[ElementLayout] = []
        for index, element in enumerate(ordered):
            layouts.append(
                self.layout_element(element, score.clef, current_x, beam_assignment.get(index))
            )
            current_x += self.element_width(element)

        beams = self._layout_beams(ordered, layouts, beam_assignment)
        barline_x = current_x + gap

        return MeasureLayout(
            number=measure.number,
            elements=tuple(layouts),
            start_x=start_x,
            end_x=barline_x,
            width=barline_x - start_x,
            barline=measure.barline,
            beams=tuple(beams),
        )

    def layout_element(
        self,
        element: MusicElement,
        clef: ClefType,
        x: float,
        beam_group: int | None = None,
    ) -> ElementLayout:
        """Dispatch on the element variant."""
        if isinstance(element, Note):
            return self.layout_note(element, clef, x, beam_group)
        if isinstance(element, Chord):
            return self.layout_chord(element, clef, x)
        if isinstance(element, Rest):
            return self.layout_rest(element, x)
        raise TypeError(f"Unknown element type: {type(element).__name__}")

    def layout_note(
        self,
        note: Note,
        clef: ClefType,
        x: float,
        beam_group: int | None = None,
    ) -> NoteLayout:
        """Lay out a single note at `x`."""
        position = note.staff_position(clef)
        ledger_lines = ledger_line_count(position)

        return NoteLayout(
            id=note.id,
            x=x,
            y=self.y_for_position(position),
            staff_position=position,
            midi_pitch=note.pitch.midi_pitch,
            duration=note.duration,
            stem_up=stem_up_for_position(position),
            has_stem=needs_stem(note.duration),
            flag_count=number_of_flags(note.duration),
            ledger_line_count=ledger_lines,
            ledger_lines_above=position > TOP_LINE_POSITION,
            accidental=note.accidental,
            articulations=note.articulations,
            dynamic=note.dynamic,
            ornament=note.ornament,
            dotted=note.dotted,
            double_dotted=note.double_dotted,
            tied=note.tied,
            slurred=note.slurred,
            beam_group=beam_group,
            state=note.state,
        )

    def layout_chord(self, chord: Chord, clef: ClefType, x: float) -> ChordLayout:
        """
        Lay out a chord at `x`.

        One stem direction from the plain average staff position; noteheads
        a second apart are displaced to the side opposite the stem.
        """
        notes = [self.layout_note(note, clef, x) for note in chord.notes]

        if notes:
            average = sum(n.staff_position for n in notes) / len(notes)
            stem_up = stem_up_for_position(average)
        else:
            stem_up = True

        adjusted = adjust_seconds(notes, stem_up, self.params.scaled(self.params.note_width))

        return ChordLayout(
            id=chord.id,
            x=x,
            duration=chord.duration,
            notes=tuple(adjusted),
            stem_up=stem_up,
            arpeggio=chord.arpeggio,
        )

    def layout_rest(self, rest: Rest, x: float) -> RestLayout:
        """Lay out a rest at `x`, centred on the staff."""
        return RestLayout(
            id=rest.id,
            x=x,
            y=self.y_for_position(MIDDLE_LINE_POSITION),
            duration=rest.duration,
            is_whole_measure=rest.is_whole_measure,
        )

    def y_for_position(self, staff_position: int) -> float:
        """Y from the top line (position 8) downward, half a staff space per step."""
        return (TOP_LINE_POSITION - staff_position) * self.staff_space / 2

    def element_width(self, element: MusicElement) -> float:
        """
        Horizontal space taken by an element.

        Grows with log2(duration + 1) so long notes get more room without
        linear blow-up. Non-positive durations take no space.
        """
        if element.duration <= 0:
            return 0.0
        base_width = self.params.scaled(self.params.minimum_note_spacing)
        duration_factor = math.log2(element.duration + 1) / 2 + 0.5
        return base_width * duration_factor

    def _layout_beams(
        self,
        elements: Sequence[MusicElement],
        layouts: Sequence[ElementLayout],
        assignment: dict[int, int],
    ) -> list[BeamLayout]:
        """
        Beam geometry for each group in the measure.

        Stems attach at the right edge of the notehead when up and the left
        edge when down. The primary beam sits one stem length (plus one
        level spacing per extra beam line) from the outer noteheads and
        follows their contour.
        """
        p = self.params
        notehead = p.scaled(p.note_width)
        beams = []

        for group in collect_beam_groups(elements, assignment):
            # Only single notes are beamable
            members = [layouts[i] for i in group.indices]
            first, last = members[0], members[-1]
            average = sum(m.staff_position for m in members) / len(members)
            stem_up = stem_up_for_position(average)

            attach = notehead * (STEM_UP_ATTACH if stem_up else STEM_DOWN_ATTACH)
            stem = p.scaled(p.stem_length + (group.beam_level - 1) * p.beam_spacing)
            middle_y = (first.y + last.y) / 2
            base_y = middle_y - stem if stem_up else middle_y + stem
            rise = beam_rise(
                first.staff_position, last.staff_position, len(members), self.staff_space
            )

            stem_xs = [m.x + attach for m in members]
            segments = []
            for segment in beam_segments([m.duration for m in members]):
                stem_x = stem_xs[segment.start]
                if segment.fractional_side is FractionalBeamSide.LEFT:
                    start_x, end_x = stem_x - notehead, stem_x
                elif segment.fractional_side is FractionalBeamSide.RIGHT:
                    start_x, end_x = stem_x, stem_x + notehead
                else:
                    start_x, end_x = stem_x, stem_xs[segment.end]
                segments.append(
                    BeamSegmentLayout(
                        level=segment.level,
                        start_x=start_x,
                        end_x=end_x,
                        fractional_side=segment.fractional_side,
                    )
                )

            beams.append(
                BeamLayout(
                    group_id=group.group_id,
                    element_ids=tuple(m.id for m in members),
                    start_x=first.x,
                    end_x=last.x,
                    beam_level=group.beam_level,
                    stem_up=stem_up,
                    left_x=stem_xs[0],
                    right_x=stem_xs[-1],
                    left_y=base_y + rise / 2,
                    right_y=base_y - rise / 2,
                    thickness=p.scaled(p.beam_thickness),
                    level_spacing=p.scaled(p.beam_spacing),
                    segments=tuple(segments),
                )
            )
        return beams


def layout_score(score: Score, params: LayoutParams | None = None) -> LayoutResult:
    """Lay out a score with the given (or default) parameters."""
    return ScoreLayoutEngine(params).layout_score(score)
