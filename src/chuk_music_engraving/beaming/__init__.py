"""
Beaming - partitions a measure's short notes into beam groups.

Grouping respects the beat boundaries of the time signature. The layout
engine runs this once per measure and attaches the result to note layouts.
"""

from chuk_music_engraving.beaming.engine import (
    BeamGroup,
    BeamSegment,
    assign_beam_groups,
    beam_segments,
    beats_per_beam_group,
    collect_beam_groups,
)

__all__ = [
    "BeamGroup",
    "BeamSegment",
    "assign_beam_groups",
    "beam_segments",
    "beats_per_beam_group",
    "collect_beam_groups",
]
