#!/usr/bin/env python3
"""
Command-line entry point for the engraving engine.

Subcommands:
    layout SCORE    Lay out a score file and print the geometry as JSON
    validate SCORE  Check a score file and print the issues as JSON
"""

import argparse
import json
import logging
import sys

import yaml

from chuk_music_engraving.config import LayoutConfigLoader
from chuk_music_engraving.constants import ErrorMessages
from chuk_music_engraving.curves import curves_for_layout
from chuk_music_engraving.layout import ScoreLayoutEngine
from chuk_music_engraving.parser import load_score
from chuk_music_engraving.validation import ScoreValidator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with the layout and validate subcommands."""
    parser = argparse.ArgumentParser(description="CHUK Music Engraving")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout = subparsers.add_parser("layout", help="Lay out a score file")
    layout.add_argument("score", help="Score description (.json, .yaml or .yml)")
    layout.add_argument(
        "--staff-space",
        type=float,
        default=None,
        help="Staff space in output units (overrides the preset)",
    )
    layout.add_argument(
        "--preset",
        default="default",
        help="Layout preset name (default: default)",
    )
    layout.add_argument(
        "--curves",
        action="store_true",
        help="Include tie and slur geometry",
    )

    validate = subparsers.add_parser("validate", help="Validate a score file")
    validate.add_argument("score", help="Score description (.json, .yaml or .yml)")

    return parser


def run_layout(args: argparse.Namespace) -> int:
    """Lay out a score file and print the result."""
    params = LayoutConfigLoader().get_params(args.preset)
    if params is None:
        logger.error(ErrorMessages.NO_SUCH_PRESET.format(name=args.preset))
        return 1

    try:
        if args.staff_space is not None:
            params = params.with_staff_space(args.staff_space)
        score = load_score(args.score)
    except (OSError, ValueError, yaml.YAMLError):
        logger.exception("Failed to load %s", args.score)
        return 1

    result = ScoreLayoutEngine(params).layout_score(score)
    output = result.to_dict()
    if args.curves:
        output["curves"] = [curve.to_dict() for curve in curves_for_layout(result)]

    print(json.dumps(output, indent=2))
    return 0


def run_validate(args: argparse.Namespace) -> int:
    """Validate a score file and print the issues."""
    try:
        score = load_score(args.score)
    except (OSError, ValueError, yaml.YAMLError):
        logger.exception("Failed to load %s", args.score)
        return 1

    result = ScoreValidator().validate(score)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.is_valid else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "layout":
        return run_layout(args)
    return run_validate(args)


if __name__ == "__main__":
    sys.exit(main())
