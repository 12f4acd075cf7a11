"""
Beaming engine - groups short notes under shared beams.

Rules:
- Only notes shorter than a beat (eighths and shorter) are beamed
- Rests, chords and notes of a beat or longer break the beam
- A beam never crosses a beat boundary:
  - Simple time (2/4, 3/4, 4/4): boundaries every quarter
  - Compound time (6/8, 9/8, 12/8): boundaries every dotted quarter
- A lone eligible note keeps its flag (groups of one are discarded)
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_music_engraving.constants import FractionalBeamSide
from chuk_music_engraving.core.rhythm import TimeSignature, number_of_flags, should_beam
from chuk_music_engraving.models.score import MusicElement, Note

# Absorbs float drift when locating beat boundaries
_EPSILON = 1e-9


@dataclass(frozen=True)
class BeamGroup:
    """
    A set of element indices joined by one beam.

    Indices refer to the element list the assignment was computed on.
    """

    group_id: int
    indices: tuple[int, ...]
    beam_level: int  # 1 = eighth, 2 = sixteenth, 3 = 32nd, 4 = 64th

    @property
    def size(self) -> int:
        return len(self.indices)

    @property
    def is_valid(self) -> bool:
        """A beam needs at least two notes."""
        return self.size >= 2


def beats_per_beam_group(time_signature: TimeSignature) -> float:
    """
    Length of one beaming window in quarter-note beats.

    Compound meters group by the dotted quarter (1.5), everything else by
    the quarter (1.0).
    """
    if time_signature.is_compound:
        return 1.5
    return 1.0


def _is_beamable(element: MusicElement) -> bool:
    return isinstance(element, Note) and 0 < element.duration and should_beam(element.duration)


def assign_beam_groups(
    elements: Sequence[MusicElement],
    time_signature: TimeSignature = TimeSignature.COMMON_TIME,
) -> dict[int, int]:
    """
    Assign beam groups to a measure's elements.

    Args:
        elements: Elements in onset order
        time_signature: Meter that defines the beat boundaries

    Returns:
        Map of element index to beam group id, only for elements in a
        group of two or more
    """
    window = beats_per_beam_group(time_signature)
    assignment: dict[int, int] = {}
    group_id = 0
    group_open = False
    group_window = -1
    current_beat = 0.0

    for index, element in enumerate(elements):
        duration = element.duration

        if _is_beamable(element):
            beat_in_group = current_beat % window
            element_window = math.floor((current_beat + _EPSILON) / window)
            crosses_boundary = beat_in_group + duration > window + _EPSILON

            if not group_open or crosses_boundary or element_window != group_window:
                if group_open:
                    group_id += 1
                group_open = True
                group_window = element_window

            assignment[index] = group_id
        elif group_open:
            # Anything unbeamable closes the open group
            group_id += 1
            group_open = False

        current_beat += max(duration, 0.0)

    counts = Counter(assignment.values())
    return {index: gid for index, gid in assignment.items() if counts[gid] >= 2}


def collect_beam_groups(
    elements: Sequence[MusicElement],
    assignment: dict[int, int],
) -> list[BeamGroup]:
    """
    Turn an index → group mapping into BeamGroup objects, ordered by group id.

    The beam level of a group comes from its shortest member.
    """
    by_group: dict[int, list[int]] = {}
    for index, gid in assignment.items():
        by_group.setdefault(gid, []).append(index)

    groups = []
    for gid in sorted(by_group):
        indices = tuple(sorted(by_group[gid]))
        shortest = min(elements[i].duration for i in indices)
        groups.append(BeamGroup(gid, indices, max(number_of_flags(shortest), 1)))
    return groups


@dataclass(frozen=True)
class BeamSegment:
    """
    One beam line between members of a group.

    Indices are positions within the group (0 = first member). A fractional
    segment covers a single member and points to `side`.
    """

    level: int  # 1 = primary beam
    start: int
    end: int
    fractional_side: FractionalBeamSide | None = None

    @property
    def is_fractional(self) -> bool:
        return self.fractional_side is not None


def _fractional_side(durations: Sequence[float], index: int) -> FractionalBeamSide:
    """
    Side of a stub beam on member `index`.

    Group ends point inward. Inside the group the stub points right when the
    note is shorter than its predecessor (dotted rhythms), otherwise left.
    """
    if index == 0:
        return FractionalBeamSide.RIGHT
    if index == len(durations) - 1:
        return FractionalBeamSide.LEFT
    if durations[index] < durations[index - 1]:
        return FractionalBeamSide.RIGHT
    return FractionalBeamSide.LEFT


def beam_segments(durations: Sequence[float]) -> list[BeamSegment]:
    """
    Beam lines for a group with the given member durations.

    The primary beam spans every member. Each further level covers the runs
    of consecutive members that need that many beams; a run of one becomes a
    fractional stub.

    Args:
        durations: Member durations in group order

    Returns:
        Segments ordered by level, then by start index
    """
    if not durations:
        return []

    segments = [BeamSegment(1, 0, len(durations) - 1)]
    flags = [number_of_flags(duration) for duration in durations]

    for level in range(2, max(flags) + 1):
        run_start: int | None = None
        for index, count in enumerate([*flags, 0]):
            if count >= level:
                if run_start is None:
                    run_start = index
                continue
            if run_start is None:
                continue
            run_end = index - 1
            if run_start == run_end:
                side = _fractional_side(durations, run_start)
                segments.append(BeamSegment(level, run_start, run_start, side))
            else:
                segments.append(BeamSegment(level, run_start, run_end))
            run_start = None

    return segments
