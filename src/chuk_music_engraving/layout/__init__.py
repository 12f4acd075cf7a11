"""
Layout - absolute geometry for a score.

The pipeline:
    Score → per-measure beam assignment → element layouts → LayoutResult
"""

from chuk_music_engraving.layout.engine import (
    ScoreLayoutEngine,
    adjust_seconds,
    beam_rise,
    layout_score,
    ledger_line_count,
    stem_up_for_position,
)
from chuk_music_engraving.layout.params import LayoutParams

__all__ = [
    "LayoutParams",
    "ScoreLayoutEngine",
    "layout_score",
    "adjust_seconds",
    "beam_rise",
    "ledger_line_count",
    "stem_up_for_position",
]
