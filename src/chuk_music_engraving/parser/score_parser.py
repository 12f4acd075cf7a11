"""
Score parser - reads and writes the declarative score description.

The description is a plain dict (from JSON or YAML):

    id: exercise-1
    title: Scale
    clef: treble
    keySignature: G
    timeSignature: 4/4
    measures:
      - barline: single
        elements:
          - {type: note, duration: 0.5, pitch: F#4}
          - {type: chord, duration: 1, pitches: [C4, E4, G4]}
          - {type: rest, duration: 1}

Malformed values never raise: each falls back to a documented default
(C4, treble, C major, 4/4, single barline, normal state, no tempo) and
the fallback is logged. Element ids come from an injected IdSource, so
parsing the same description twice with fresh sources yields identical
scores.
"""

from __future__ import annotations

import itertools
import json
import logging
from typing import Any

import yaml

from chuk_music_engraving.constants import (
    ArticulationType,
    BarlineType,
    DynamicType,
    ErrorMessages,
    NoteState,
    OrnamentType,
)
from chuk_music_engraving.core.key import KeySignature
from chuk_music_engraving.core.pitch import ClefType, Pitch
from chuk_music_engraving.core.rhythm import TimeSignature
from chuk_music_engraving.models.score import Chord, Measure, MusicElement, Note, Rest, Score

logger = logging.getLogger(__name__)

_CLEF_ALIASES: dict[str, ClefType] = {
    "treble": ClefType.TREBLE,
    "g": ClefType.TREBLE,
    "bass": ClefType.BASS,
    "f": ClefType.BASS,
    "alto": ClefType.ALTO,
    "c": ClefType.ALTO,
    "tenor": ClefType.TENOR,
    "percussion": ClefType.PERCUSSION,
}


class IdSource:
    """
    Monotonic element-id generator.

    Produces 'elem_0', 'elem_1', ... Inject a fresh source per parse for
    reproducible ids.
    """

    def __init__(self, prefix: str = "elem", start: int = 0):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


# ============================================
# Value parsing with fallbacks
# ============================================


def _lowered(value: Any) -> str:
    """Normalized enum name; non-strings become '' so they never match."""
    return value.strip().lower() if isinstance(value, str) else ""


def _as_list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    logger.warning("Expected a list of %s, got %r; ignoring it", what, value)
    return []


def _as_mapping(value: Any, what: str) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    logger.warning("Expected a %s mapping, got %r; using an empty one", what, value)
    return {}


def parse_pitch(text: str | None) -> Pitch:
    """Parse a pitch string, falling back to C4."""
    if text is None:
        return Pitch.MIDDLE_C
    try:
        return Pitch.parse(text)
    except ValueError:
        logger.warning("Unparseable pitch %r, using C4", text)
        return Pitch.MIDDLE_C


def parse_clef(name: str | None) -> ClefType:
    """Parse a clef name, falling back to treble."""
    if name is None:
        return ClefType.TREBLE
    clef = _CLEF_ALIASES.get(_lowered(name))
    if clef is None:
        logger.warning("%s Using treble.", ErrorMessages.INVALID_CLEF.format(clef=name))
        return ClefType.TREBLE
    return clef


def parse_key_signature(name: str | None) -> KeySignature:
    """Parse a key name, falling back to C major."""
    try:
        return KeySignature.parse("C" if name is None else name)
    except ValueError:
        logger.warning("Unknown key signature %r, using C major", name)
        return KeySignature.C_MAJOR


def parse_time_signature(notation: str | None) -> TimeSignature:
    """Parse 'N/D', falling back to 4/4."""
    try:
        return TimeSignature.parse("4/4" if notation is None else notation)
    except ValueError:
        logger.warning("Invalid time signature %r, using 4/4", notation)
        return TimeSignature.COMMON_TIME


def parse_barline(name: str | None) -> BarlineType:
    """Parse a barline name, falling back to single."""
    if name is None:
        return BarlineType.SINGLE
    try:
        return BarlineType(_lowered(name))
    except ValueError:
        logger.warning("Unknown barline %r, using single", name)
        return BarlineType.SINGLE


def parse_articulations(names: list[str] | None) -> tuple[ArticulationType, ...]:
    """Parse articulation names, dropping unknown ones."""
    result = []
    for name in _as_list(names, "articulations"):
        try:
            result.append(ArticulationType(_lowered(name)))
        except ValueError:
            logger.warning("Unknown articulation %r dropped", name)
    return tuple(result)


def parse_dynamic(name: str | None) -> DynamicType | None:
    """Parse a dynamic marking; unknown markings become None."""
    if name is None:
        return None
    try:
        return DynamicType(_lowered(name))
    except ValueError:
        logger.warning("Unknown dynamic %r ignored", name)
        return None


def parse_ornament(name: str | None) -> OrnamentType | None:
    """Parse an ornament; unknown ornaments become None."""
    if name is None:
        return None
    try:
        return OrnamentType(_lowered(name))
    except ValueError:
        logger.warning("Unknown ornament %r ignored", name)
        return None


def parse_state(name: str | None) -> NoteState:
    """Parse a feedback state, falling back to normal."""
    if name is None:
        return NoteState.NORMAL
    try:
        return NoteState(_lowered(name))
    except ValueError:
        logger.warning("Unknown note state %r, using normal", name)
        return NoteState.NORMAL


def parse_tempo(value: Any) -> int | None:
    """Tempo in BPM; anything but a positive integer is dropped."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    logger.warning("Invalid tempo %r ignored", value)
    return None


def _parse_text(value: Any, default: str, field: str) -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    logger.warning("Non-text %s %r, using %r", field, value, default)
    return default


def _parse_id(value: Any) -> str | None:
    """Source ids are kept as text; missing or empty ids yield None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value)
    return text or None


def _parse_finger(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5:
        return value
    logger.warning("Invalid fingering %r ignored", value)
    return None


def _parse_voice(value: Any) -> int:
    if value is None:
        return 1
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    logger.warning("Invalid voice %r, using 1", value)
    return 1


def _parse_optional_int(value: Any, field: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Invalid %s %r ignored", field, value)
    return None


def _parse_onset(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid onset %r ignored", value)
        return None


def _parse_duration(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid duration %r, using 0", value)
        return 0.0


# ============================================
# Parser
# ============================================


class ScoreParser:
    """
    Converts between score descriptions (dict/JSON/YAML) and Score models.

    Keys follow the external camelCase format (keySignature, timeSignature,
    doubleDotted, beamGroup, isWholeMeasure).
    """

    def __init__(self, id_source: IdSource | None = None):
        """
        Initialize the parser.

        Args:
            id_source: Element id generator (a fresh IdSource if None)
        """
        self.id_source = id_source or IdSource()

    # ---- reading ----

    def parse_json(self, text: str) -> Score:
        """Parse a JSON score description."""
        return self.parse_dict(json.loads(text))

    def parse_yaml(self, text: str) -> Score:
        """Parse a YAML score description."""
        return self.parse_dict(yaml.safe_load(text) or {})

    def parse_dict(self, data: dict[str, Any]) -> Score:
        """Parse a score description dict into a Score."""
        data = _as_mapping(data, "score")
        time_signature = parse_time_signature(data.get("timeSignature"))
        measures = [
            self._parse_measure(_as_mapping(m, "measure"), index + 1, time_signature)
            for index, m in enumerate(_as_list(data.get("measures"), "measures"))
        ]
        composer = data.get("composer")
        return Score(
            id=_parse_id(data.get("id")) or "score",
            title=_parse_text(data.get("title"), "", "title"),
            composer=None if composer is None else _parse_text(composer, "", "composer"),
            clef=parse_clef(data.get("clef")),
            key_signature=parse_key_signature(data.get("keySignature")),
            time_signature=time_signature,
            tempo=parse_tempo(data.get("tempo")),
            measures=tuple(measures),
        )

    def _parse_measure(
        self, data: dict[str, Any], number: int, time_signature: TimeSignature
    ) -> Measure:
        elements = _as_list(data.get("elements"), "elements")
        return Measure(
            number=_parse_optional_int(data.get("number"), "measure number") or number,
            elements=tuple(
                self._parse_element(_as_mapping(e, "element"), time_signature) for e in elements
            ),
            barline=parse_barline(data.get("barline")),
        )

    def _parse_element(self, data: dict[str, Any], time_signature: TimeSignature) -> MusicElement:
        element_type = _lowered(data.get("type"))
        duration = _parse_duration(data.get("duration", 1.0))
        element_id = _parse_id(data.get("id")) or self.id_source()
        onset = _parse_onset(data.get("onset"))

        if element_type == "note":
            return self._parse_note(data, element_id, duration, onset)

        if element_type == "chord":
            return Chord(
                id=element_id,
                duration=duration,
                onset=onset,
                notes=tuple(
                    self._parse_chord_note(pitch, duration, data)
                    for pitch in _as_list(data.get("pitches"), "pitches")
                ),
                arpeggio=bool(data.get("arpeggio", False)),
            )

        if element_type != "rest":
            logger.warning("Unknown element type %r, using rest", data.get("type"))

        return Rest(
            id=element_id,
            duration=duration,
            onset=onset,
            is_whole_measure=bool(
                data.get("isWholeMeasure", duration >= time_signature.beats_per_measure)
            ),
        )

    def _parse_note(
        self, data: dict[str, Any], element_id: str, duration: float, onset: float | None
    ) -> Note:
        pitch = parse_pitch(data.get("pitch"))
        return Note(
            id=element_id,
            duration=duration,
            onset=onset,
            pitch=pitch,
            accidental=pitch.accidental,
            dotted=bool(data.get("dotted", False)),
            double_dotted=bool(data.get("doubleDotted", False)),
            tied=bool(data.get("tied", False)),
            slurred=bool(data.get("slurred", False)),
            beam_group=_parse_optional_int(data.get("beamGroup"), "beam group"),
            articulations=parse_articulations(data.get("articulations")),
            dynamic=parse_dynamic(data.get("dynamic")),
            ornament=parse_ornament(data.get("ornament")),
            voice=_parse_voice(data.get("voice")),
            finger=_parse_finger(data.get("finger")),
            grace=bool(data.get("grace", False)),
            state=parse_state(data.get("state")),
        )

    def _parse_chord_note(self, text: str, duration: float, chord: dict[str, Any]) -> Note:
        pitch = parse_pitch(text)
        return Note(
            id=self.id_source(),
            duration=duration,
            pitch=pitch,
            accidental=pitch.accidental,
            voice=_parse_voice(chord.get("voice")),
            state=parse_state(chord.get("state")),
        )

    # ---- writing ----

    def to_dict(self, score: Score) -> dict[str, Any]:
        """Convert a Score to its description dict."""
        return {
            "id": score.id,
            "title": score.title,
            "composer": score.composer,
            "clef": score.clef.value,
            "keySignature": score.key_signature.value,
            "timeSignature": str(score.time_signature),
            "tempo": score.tempo,
            "measures": [
                {
                    "number": measure.number,
                    "barline": measure.barline.value,
                    "elements": [self._element_to_dict(e) for e in measure.elements],
                }
                for measure in score.measures
            ],
        }

    def to_json(self, score: Score, indent: int = 2) -> str:
        """Serialize a Score to a JSON description."""
        return json.dumps(self.to_dict(score), indent=indent)

    def to_yaml(self, score: Score) -> str:
        """Serialize a Score to a YAML description."""
        return yaml.safe_dump(self.to_dict(score), sort_keys=False)

    def _element_to_dict(self, element: MusicElement) -> dict[str, Any]:
        d: dict[str, Any] = {"type": element.type, "id": element.id, "duration": element.duration}
        if element.onset is not None:
            d["onset"] = element.onset

        if isinstance(element, Note):
            d.update(
                {
                    "pitch": element.pitch.spell(),
                    "dotted": element.dotted,
                    "doubleDotted": element.double_dotted,
                    "tied": element.tied,
                    "slurred": element.slurred,
                    "articulations": [a.value for a in element.articulations],
                    "state": element.state.value,
                }
            )
            if element.beam_group is not None:
                d["beamGroup"] = element.beam_group
            if element.dynamic is not None:
                d["dynamic"] = element.dynamic.value
            if element.ornament is not None:
                d["ornament"] = element.ornament.value
            if element.voice != 1:
                d["voice"] = element.voice
            if element.finger is not None:
                d["finger"] = element.finger
            if element.grace:
                d["grace"] = True
        elif isinstance(element, Chord):
            d["pitches"] = [note.pitch.spell() for note in element.notes]
            d["arpeggio"] = element.arpeggio
        elif isinstance(element, Rest):
            d["isWholeMeasure"] = element.is_whole_measure

        return d


def load_score(path: str, id_source: IdSource | None = None) -> Score:
    """
    Load a score description file (.json, .yaml or .yml).

    Raises:
        OSError: If the file cannot be read
    """
    parser = ScoreParser(id_source)
    with open(path) as f:
        text = f.read()
    if path.endswith((".yaml", ".yml")):
        return parser.parse_yaml(text)
    return parser.parse_json(text)
