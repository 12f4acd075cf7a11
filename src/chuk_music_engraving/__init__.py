"""
CHUK Music Engraving - turns a symbolic score into engraving geometry.

    Score description (JSON/YAML) → Score → LayoutResult → curves
"""

from chuk_music_engraving.layout import LayoutParams, ScoreLayoutEngine, layout_score
from chuk_music_engraving.models import LayoutResult, Score
from chuk_music_engraving.parser import ScoreParser, load_score

__version__ = "0.1.0"

__all__ = [
    "LayoutParams",
    "LayoutResult",
    "Score",
    "ScoreLayoutEngine",
    "ScoreParser",
    "layout_score",
    "load_score",
]
