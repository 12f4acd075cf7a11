"""
Curves - tie, slur and phrase-mark geometry.

Consumes note layouts as anchors and produces Bézier control points; the
renderer fills the tapered outline.
"""

from chuk_music_engraving.curves.geometry import (
    CURVE_THICKNESS,
    MIN_CURVE_LENGTH,
    CubicBezier,
    CurveGeometry,
    CurveKind,
    Point,
    compute_curve,
    curve_direction,
    curves_for_layout,
    optimal_curve_direction,
    slur_over,
    tie_between,
)

__all__ = [
    "CURVE_THICKNESS",
    "MIN_CURVE_LENGTH",
    "CurveKind",
    "Point",
    "CubicBezier",
    "CurveGeometry",
    "compute_curve",
    "curve_direction",
    "optimal_curve_direction",
    "tie_between",
    "slur_over",
    "curves_for_layout",
]
