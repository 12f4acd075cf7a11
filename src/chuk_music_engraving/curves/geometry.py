"""
Curve geometry - ties, slurs and phrase marks as cubic Bézier shapes.

A curve is described by two endpoints, two control points at 1/3 and 2/3
of the span, and a height that depends on the curve kind. The renderable
shape is a closed, tapered region: an outer curve and a reversed inner
curve offset by half the curve thickness, thicker in the middle than at
the ends.

Y grows downward, so an upward curve has a negative height.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from chuk_music_engraving.models.layout import LayoutResult, NoteLayout

# Standard dimensions relative to the staff space
CURVE_THICKNESS = 0.15
MIN_CURVE_LENGTH = 2.0

# Bézier control point placement
CONTROL_POINT_X_OFFSET = 1 / 3
CONTROL_POINT_Y_FACTOR = 1.5

# Anchor offsets from the notehead centre
TIE_X_OFFSET = 0.5
TIE_Y_OFFSET = 0.25
SLUR_X_OFFSET = 0.3
SLUR_Y_OFFSET = 0.5


class CurveKind(str, Enum):
    """Kinds of curve, each with its own height."""

    TIE = "tie"
    SLUR = "slur"
    PHRASE = "phrase"

    @property
    def height_factor(self) -> float:
        """Curve height in staff spaces."""
        return _HEIGHT_FACTORS[self]


_HEIGHT_FACTORS: dict[CurveKind, float] = {
    CurveKind.TIE: 0.4,
    CurveKind.SLUR: 0.6,
    CurveKind.PHRASE: 0.8,
}


@dataclass(frozen=True)
class Point:
    """A 2D point in layout units."""

    x: float
    y: float

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class CubicBezier:
    """One cubic Bézier segment."""

    start: Point
    control1: Point
    control2: Point
    end: Point

    def point_at(self, t: float) -> Point:
        """Evaluate the curve at parameter t in [0, 1]."""
        u = 1 - t
        a, b, c, d = u**3, 3 * u**2 * t, 3 * u * t**2, t**3
        return Point(
            a * self.start.x + b * self.control1.x + c * self.control2.x + d * self.end.x,
            a * self.start.y + b * self.control1.y + c * self.control2.y + d * self.end.y,
        )


@dataclass(frozen=True)
class CurveGeometry:
    """
    Resolved geometry of a tie, slur or phrase mark.

    `outer` and `inner` together form the closed tapered outline; the
    inner segment runs from end back to start.
    """

    kind: CurveKind
    curve_up: bool
    start: Point
    end: Point
    control1: Point
    control2: Point
    apex: Point
    height: float
    thickness: float

    @property
    def length(self) -> float:
        return self.end.x - self.start.x

    @property
    def centerline(self) -> CubicBezier:
        """The untapered centre curve."""
        return CubicBezier(self.start, self.control1, self.control2, self.end)

    @property
    def outer(self) -> CubicBezier:
        half = self.thickness / 2
        return CubicBezier(
            self.start,
            self.control1.offset(dy=-half),
            self.control2.offset(dy=-half),
            self.end,
        )

    @property
    def inner(self) -> CubicBezier:
        half = self.thickness / 2
        return CubicBezier(
            self.end,
            self.control2.offset(dy=half),
            self.control1.offset(dy=half),
            self.start,
        )

    def outline(self) -> tuple[CubicBezier, CubicBezier]:
        """Closed path: outer start→end, then inner end→start."""
        return self.outer, self.inner

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        d = asdict(self)
        d["kind"] = self.kind.value
        d["outline"] = [asdict(segment) for segment in self.outline()]
        return d


def compute_curve(
    start: Point,
    end: Point,
    kind: CurveKind = CurveKind.SLUR,
    curve_up: bool = True,
    staff_space: float = 8.0,
) -> CurveGeometry | None:
    """
    Compute the Bézier geometry between two anchors.

    Args:
        start: Left anchor
        end: Right anchor
        kind: Tie, slur or phrase (sets the height)
        curve_up: Bow upward (toward smaller Y)
        staff_space: Staff space in layout units

    Returns:
        CurveGeometry, or None if the span is shorter than the minimum
        curve length (nothing should be drawn)
    """
    if staff_space <= 0:
        raise ValueError(f"Staff space must be positive, got {staff_space}")

    length = end.x - start.x
    if length < staff_space * MIN_CURVE_LENGTH:
        return None

    height = staff_space * kind.height_factor * (-1 if curve_up else 1)

    control1 = Point(
        start.x + length * CONTROL_POINT_X_OFFSET,
        start.y + height * CONTROL_POINT_Y_FACTOR,
    )
    control2 = Point(
        end.x - length * CONTROL_POINT_X_OFFSET,
        end.y + height * CONTROL_POINT_Y_FACTOR,
    )
    apex = Point(start.x + length / 2, (start.y + end.y) / 2 + height)

    return CurveGeometry(
        kind=kind,
        curve_up=curve_up,
        start=start,
        end=end,
        control1=control1,
        control2=control2,
        apex=apex,
        height=height,
        thickness=staff_space * CURVE_THICKNESS,
    )


def curve_direction(stem_up: bool) -> bool:
    """Curves bow away from the stems."""
    return not stem_up


def optimal_curve_direction(stems_up: Iterable[bool]) -> bool:
    """
    Curve direction for a group of notes: opposite the majority stem.

    Ties go up when stems down are at least as many as stems up; an
    empty group curves up.
    """
    stems = list(stems_up)
    if not stems:
        return True
    up = sum(1 for s in stems if s)
    down = len(stems) - up
    return down >= up


def tie_between(
    first: NoteLayout,
    second: NoteLayout,
    staff_space: float,
    curve_up: bool | None = None,
) -> CurveGeometry | None:
    """
    Tie from one notehead to the next notehead of the same pitch.

    Starts at the right edge of the first notehead and ends at the left
    edge of the second; both ends share the first note's Y, nudged away
    from the stem.
    """
    if curve_up is None:
        curve_up = curve_direction(first.stem_up)

    y_offset = -staff_space * TIE_Y_OFFSET if curve_up else staff_space * TIE_Y_OFFSET
    y = first.y + y_offset

    return compute_curve(
        Point(first.x + staff_space * TIE_X_OFFSET, y),
        Point(second.x - staff_space * TIE_X_OFFSET, y),
        CurveKind.TIE,
        curve_up,
        staff_space,
    )


def slur_over(
    notes: Sequence[NoteLayout],
    staff_space: float,
    kind: CurveKind = CurveKind.SLUR,
    curve_up: bool | None = None,
) -> CurveGeometry | None:
    """
    Slur (or phrase mark) across two or more notes.

    The anchor Y is the extreme Y over every connected note (highest when
    curving up, lowest when curving down), so the curve clears the
    intermediate noteheads.
    """
    if len(notes) < 2:
        return None

    first, last = notes[0], notes[-1]
    if curve_up is None:
        curve_up = optimal_curve_direction(n.stem_up for n in notes)

    if curve_up:
        extreme_y = min(n.y for n in notes)
        y = extreme_y - staff_space * SLUR_Y_OFFSET
    else:
        extreme_y = max(n.y for n in notes)
        y = extreme_y + staff_space * SLUR_Y_OFFSET

    return compute_curve(
        Point(first.x + staff_space * SLUR_X_OFFSET, y),
        Point(last.x + staff_space * SLUR_X_OFFSET, y),
        kind,
        curve_up,
        staff_space,
    )


def curves_for_layout(
    result: LayoutResult,
    phrase_threshold: int | None = None,
) -> list[CurveGeometry]:
    """
    Ties and slurs implied by the note flags of a laid-out score.

    A tied note connects to the next note when both have the same sounding
    pitch. A run of slurred notes is slurred through to the note after the
    run. Rests and chords interrupt runs.

    Args:
        result: Layout to read anchors from
        phrase_threshold: Slurs over at least this many notes become
            phrase marks (None keeps every run a slur)

    Returns:
        Curves in score order (spans too short to draw are skipped)
    """
    staff_space = result.staff_space
    curves: list[CurveGeometry] = []
    previous: NoteLayout | None = None
    run: list[NoteLayout] = []

    def close_run() -> None:
        if len(run) >= 2:
            kind = CurveKind.SLUR
            if phrase_threshold is not None and len(run) >= phrase_threshold:
                kind = CurveKind.PHRASE
            curve = slur_over(run, staff_space, kind)
            if curve is not None:
                curves.append(curve)
        run.clear()

    for element in result.iter_elements():
        if not isinstance(element, NoteLayout):
            close_run()
            previous = None
            continue

        same_pitch = previous is not None and previous.midi_pitch == element.midi_pitch
        if previous is not None and previous.tied and same_pitch:
            tie = tie_between(previous, element, staff_space)
            if tie is not None:
                curves.append(tie)

        if run:
            run.append(element)
            if not element.slurred:
                close_run()
        elif element.slurred:
            run.append(element)

        previous = element

    close_run()
    return curves
