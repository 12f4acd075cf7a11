"""
Score description I/O.

Reads the declarative (JSON/YAML) score description into a Score and
writes it back. Malformed values fall back to defaults instead of raising.
"""

from chuk_music_engraving.parser.score_parser import (
    IdSource,
    ScoreParser,
    load_score,
    parse_barline,
    parse_clef,
    parse_key_signature,
    parse_pitch,
    parse_time_signature,
)

__all__ = [
    "IdSource",
    "ScoreParser",
    "load_score",
    "parse_pitch",
    "parse_clef",
    "parse_key_signature",
    "parse_time_signature",
    "parse_barline",
]
