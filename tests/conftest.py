"""
Pytest configuration and shared fixtures.
"""

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from chuk_music_engraving.core import ClefType, KeySignature, Pitch, TimeSignature
from chuk_music_engraving.layout import LayoutParams
from chuk_music_engraving.models import Chord, Measure, Note, Rest, Score


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """Factory for notes from a pitch string: make_note('E4', 0.5, id='n1')."""
    counter = iter(range(10_000))

    def _make(pitch: str = "C4", duration: float = 1.0, **kwargs) -> Note:
        kwargs.setdefault("id", f"n{next(counter)}")
        parsed = Pitch.parse(pitch)
        kwargs.setdefault("accidental", parsed.accidental)
        return Note(pitch=parsed, duration=duration, **kwargs)

    return _make


@pytest.fixture
def make_rest() -> Callable[..., Rest]:
    """Factory for rests."""
    counter = iter(range(10_000))

    def _make(duration: float = 1.0, **kwargs) -> Rest:
        kwargs.setdefault("id", f"r{next(counter)}")
        return Rest(duration=duration, **kwargs)

    return _make


@pytest.fixture
def make_chord(make_note) -> Callable[..., Chord]:
    """Factory for chords from pitch strings."""
    counter = iter(range(10_000))

    def _make(pitches: list[str], duration: float = 1.0, **kwargs) -> Chord:
        kwargs.setdefault("id", f"c{next(counter)}")
        notes = tuple(make_note(p, duration) for p in pitches)
        return Chord(notes=notes, duration=duration, **kwargs)

    return _make


@pytest.fixture
def make_score() -> Callable[..., Score]:
    """Factory wrapping element lists into a score, one list per measure."""

    def _make(
        *measures: list,
        clef: ClefType = ClefType.TREBLE,
        key: KeySignature = KeySignature.C_MAJOR,
        time_signature: TimeSignature = TimeSignature.COMMON_TIME,
    ) -> Score:
        return Score(
            id="test-score",
            measures=tuple(
                Measure(number=i + 1, elements=tuple(elements))
                for i, elements in enumerate(measures)
            ),
            clef=clef,
            key_signature=key,
            time_signature=time_signature,
        )

    return _make


@pytest.fixture
def four_eighths_score(make_note, make_score) -> Score:
    """One 4/4 measure of C4 D4 E4 F4 eighth notes."""
    notes = [make_note(p, 0.5, id=f"e{i}") for i, p in enumerate(["C4", "D4", "E4", "F4"])]
    return make_score(notes)


@pytest.fixture
def params() -> LayoutParams:
    """Default layout parameters (staff space 8)."""
    return LayoutParams()


@pytest.fixture
def score_description() -> dict:
    """A small score description in the external dict format."""
    return {
        "id": "exercise-1",
        "title": "Scale",
        "clef": "treble",
        "keySignature": "G",
        "timeSignature": "3/4",
        "tempo": 96,
        "measures": [
            {
                "elements": [
                    {"type": "note", "duration": 0.5, "pitch": "G4", "slurred": True},
                    {"type": "note", "duration": 0.5, "pitch": "A4"},
                    {"type": "note", "duration": 1, "pitch": "B4", "articulations": ["staccato"]},
                    {"type": "chord", "duration": 1, "pitches": ["G4", "B4", "D5"]},
                ]
            },
            {
                "barline": "final",
                "elements": [
                    {"type": "note", "duration": 2, "pitch": "F#4", "tied": True},
                    {"type": "rest", "duration": 1},
                ],
            },
        ],
    }
