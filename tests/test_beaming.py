"""
Tests for the beaming engine.

Tests cover:
- Beat-window grouping in simple and compound time
- Interruption by rests, chords and long notes
- Groups of one keep their flags
- BeamGroup collection and beam levels
- Beam segments: secondary lines and fractional stubs
"""

from chuk_music_engraving.beaming import (
    BeamGroup,
    BeamSegment,
    assign_beam_groups,
    beam_segments,
    beats_per_beam_group,
    collect_beam_groups,
)
from chuk_music_engraving.constants import FractionalBeamSide
from chuk_music_engraving.core import TimeSignature


def _groups(assignment: dict[int, int]) -> list[list[int]]:
    """Group indices by group id, ordered by first index."""
    by_group: dict[int, list[int]] = {}
    for index, gid in sorted(assignment.items()):
        by_group.setdefault(gid, []).append(index)
    return list(by_group.values())


class TestBeatsPerBeamGroup:
    """Tests for the beaming window."""

    def test_simple_time(self):
        """Simple meters beam by the quarter."""
        assert beats_per_beam_group(TimeSignature(4, 4)) == 1.0
        assert beats_per_beam_group(TimeSignature(3, 4)) == 1.0
        assert beats_per_beam_group(TimeSignature(2, 2)) == 1.0

    def test_compound_time(self):
        """Compound meters beam by the dotted quarter."""
        assert beats_per_beam_group(TimeSignature(6, 8)) == 1.5
        assert beats_per_beam_group(TimeSignature(12, 8)) == 1.5


class TestAssignBeamGroups:
    """Tests for assign_beam_groups."""

    def test_four_eighths_in_common_time(self, make_note):
        """Four eighths in 4/4 form two groups of two."""
        notes = [make_note(p, 0.5) for p in ["C4", "D4", "E4", "F4"]]
        assignment = assign_beam_groups(notes, TimeSignature.COMMON_TIME)
        assert _groups(assignment) == [[0, 1], [2, 3]]

    def test_eight_eighths_fill_four_beats(self, make_note):
        """A full measure of eighths gives one group per beat."""
        notes = [make_note("G4", 0.5) for _ in range(8)]
        assignment = assign_beam_groups(notes)
        assert _groups(assignment) == [[0, 1], [2, 3], [4, 5], [6, 7]]

    def test_compound_time_groups_in_threes(self, make_note):
        """Six eighths in 6/8 form two groups of three."""
        notes = [make_note("A4", 0.5) for _ in range(6)]
        assignment = assign_beam_groups(notes, TimeSignature.SIX_EIGHT)
        assert _groups(assignment) == [[0, 1, 2], [3, 4, 5]]

    def test_sixteenths_share_one_beat(self, make_note):
        """Four sixteenths fill one beat and one group."""
        notes = [make_note("E5", 0.25) for _ in range(4)]
        assert _groups(assign_beam_groups(notes)) == [[0, 1, 2, 3]]

    def test_mixed_values_within_beat(self, make_note):
        """An eighth and two sixteenths beam together."""
        notes = [make_note("C5", 0.5), make_note("D5", 0.25), make_note("E5", 0.25)]
        assert _groups(assign_beam_groups(notes)) == [[0, 1, 2]]

    def test_dotted_eighth_and_sixteenth(self, make_note):
        """A dotted-eighth/sixteenth pair beams within its beat."""
        notes = [make_note("C5", 0.75), make_note("D5", 0.25)]
        assert _groups(assign_beam_groups(notes)) == [[0, 1]]

    def test_quarter_breaks_beam(self, make_note):
        """Lone eighths around a quarter keep their flags."""
        notes = [make_note("C4", 0.5), make_note("D4", 1.0), make_note("E4", 0.5)]
        assert assign_beam_groups(notes) == {}

    def test_rest_breaks_beam(self, make_note, make_rest):
        """A rest closes the open group."""
        elements = [
            make_note("C4", 0.5),
            make_rest(0.5),
            make_note("E4", 0.5),
            make_note("F4", 0.5),
        ]
        assignment = assign_beam_groups(elements)
        assert _groups(assignment) == [[2, 3]]
        assert 0 not in assignment

    def test_chord_breaks_beam(self, make_note, make_chord):
        """Chords are not beamed."""
        elements = [make_note("C4", 0.5), make_chord(["C4", "E4"], 0.5)]
        assert assign_beam_groups(elements) == {}

    def test_zero_duration_never_beamed(self, make_note):
        """Notes without duration neither beam nor join a group."""
        elements = [make_note("C4", 0.0), make_note("D4", 0.0)]
        assert assign_beam_groups(elements) == {}

    def test_group_ids_distinct(self, make_note):
        """Separate groups never share an id."""
        notes = [make_note("C4", 0.5) for _ in range(4)]
        assignment = assign_beam_groups(notes)
        assert assignment[0] == assignment[1]
        assert assignment[2] == assignment[3]
        assert assignment[0] != assignment[2]

    def test_empty_measure(self):
        """No elements, no groups."""
        assert assign_beam_groups([]) == {}


class TestCollectBeamGroups:
    """Tests for collect_beam_groups and BeamGroup."""

    def test_collects_in_order(self, make_note):
        """Groups come out ordered with sorted indices."""
        notes = [make_note("C4", 0.5) for _ in range(4)]
        groups = collect_beam_groups(notes, assign_beam_groups(notes))
        assert [g.indices for g in groups] == [(0, 1), (2, 3)]
        assert all(g.is_valid for g in groups)

    def test_beam_level_from_shortest(self, make_note):
        """The shortest member sets the number of beam lines."""
        notes = [make_note("C5", 0.5), make_note("D5", 0.25), make_note("E5", 0.25)]
        groups = collect_beam_groups(notes, assign_beam_groups(notes))
        assert len(groups) == 1
        assert groups[0].beam_level == 2

    def test_single_member_invalid(self):
        """A beam needs two notes."""
        group = BeamGroup(group_id=0, indices=(3,), beam_level=1)
        assert group.size == 1
        assert group.is_valid is False


class TestBeamSegments:
    """Tests for beam_segments."""

    def test_eighths_have_primary_only(self):
        """Eighths need a single beam across the group."""
        assert beam_segments([0.5, 0.5]) == [BeamSegment(1, 0, 1)]

    def test_sixteenths_get_full_secondary(self):
        """Four sixteenths carry two full-length beams."""
        segments = beam_segments([0.25] * 4)
        assert segments == [BeamSegment(1, 0, 3), BeamSegment(2, 0, 3)]
        assert not any(s.is_fractional for s in segments)

    def test_dotted_eighth_sixteenth(self):
        """The trailing sixteenth gets a stub pointing back to the dotted eighth."""
        segments = beam_segments([0.75, 0.25])
        assert segments[0] == BeamSegment(1, 0, 1)
        stub = segments[1]
        assert stub.level == 2
        assert (stub.start, stub.end) == (1, 1)
        assert stub.is_fractional
        assert stub.fractional_side == FractionalBeamSide.LEFT

    def test_leading_sixteenth_points_right(self):
        """A sixteenth opening the group points into it."""
        stub = beam_segments([0.25, 0.75])[1]
        assert stub.fractional_side == FractionalBeamSide.RIGHT

    def test_inner_stub_follows_rhythm(self):
        """An inner stub points right after a longer note, left otherwise."""
        after_longer = beam_segments([0.375, 0.125, 0.25, 0.25])
        stubs = [s for s in after_longer if s.is_fractional]
        assert [(s.level, s.start, s.fractional_side) for s in stubs] == [
            (3, 1, FractionalBeamSide.RIGHT)
        ]

    def test_broken_secondary(self):
        """An eighth in the middle splits the secondary beam."""
        segments = beam_segments([0.25, 0.25, 0.5, 0.25, 0.25])
        assert [s for s in segments if s.level == 2] == [
            BeamSegment(2, 0, 1),
            BeamSegment(2, 3, 4),
        ]

    def test_empty(self):
        """No members, no segments."""
        assert beam_segments([]) == []
