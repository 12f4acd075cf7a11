#!/usr/bin/env python3
"""
Example: Laying Out an Exercise.

Loads a YAML score description, lays it out at two staff sizes, and
prints what a renderer would draw: note positions, beams and curves.

Usage:
    python examples/layout_exercise.py
"""

from pathlib import Path

from chuk_music_engraving.config import LayoutConfigLoader
from chuk_music_engraving.curves import curves_for_layout
from chuk_music_engraving.layout import ScoreLayoutEngine
from chuk_music_engraving.models import ChordLayout, NoteLayout, RestLayout
from chuk_music_engraving.parser import load_score
from chuk_music_engraving.validation import ScoreValidator


def main() -> None:
    """Demonstrate score layout."""
    print("CHUK Music Engraving Demo")
    print("=" * 40)
    print()

    score = load_score(str(Path(__file__).parent / "exercise.yaml"))
    print(f"Score: {score.title} ({score.key_signature.value}, {score.time_signature})")
    print(f"  {len(score.measures)} measures, {score.element_count()} elements")
    print()

    # Validate first
    print(ScoreValidator().validate(score))
    print()

    loader = LayoutConfigLoader()
    print("Presets:", ", ".join(p.name for p in loader.list_presets()))
    print()

    for preset in ("default", "spacious"):
        params = loader.get_params(preset)
        result = ScoreLayoutEngine(params).layout_score(score)
        print(f"Layout ({preset}, staff space {params.staff_space}):")
        print(f"  Total width: {result.total_width:.1f}, header: {result.header_width:.1f}")

        for measure in result.measures:
            print(f"  Measure {measure.number} [{measure.start_x:.1f} - {measure.end_x:.1f}]")
            for element in measure.elements:
                if isinstance(element, NoteLayout):
                    stem = "up" if element.stem_up else "down"
                    print(
                        f"    note  x={element.x:6.1f} y={element.y:5.1f} "
                        f"pos={element.staff_position:3d} stem={stem} beam={element.beam_group}"
                    )
                elif isinstance(element, ChordLayout):
                    positions = [n.staff_position for n in element.notes]
                    print(f"    chord x={element.x:6.1f} positions={positions}")
                elif isinstance(element, RestLayout):
                    print(f"    rest  x={element.x:6.1f}")
            for beam in measure.beams:
                print(
                    f"    beam  {beam.element_ids} level={beam.beam_level} "
                    f"y={beam.left_y:.1f}..{beam.right_y:.1f} segments={len(beam.segments)}"
                )

        for curve in curves_for_layout(result):
            print(
                f"  {curve.kind.value}: ({curve.start.x:.1f}, {curve.start.y:.1f}) -> "
                f"({curve.end.x:.1f}, {curve.end.y:.1f})"
            )
        print()


if __name__ == "__main__":
    main()
