"""
Tests for the command-line entry point.
"""

import json

import pytest

from chuk_music_engraving.cli import build_parser, main


@pytest.fixture
def score_file(temp_dir, score_description):
    """Score description written to a JSON file."""
    path = temp_dir / "score.json"
    path.write_text(json.dumps(score_description))
    return path


class TestArguments:
    """Tests for argument parsing."""

    def test_layout_defaults(self):
        """Layout defaults to the default preset without curves."""
        args = build_parser().parse_args(["layout", "x.json"])
        assert args.command == "layout"
        assert args.preset == "default"
        assert args.staff_space is None
        assert args.curves is False

    def test_command_required(self):
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestLayoutCommand:
    """Tests for the layout subcommand."""

    def test_prints_layout(self, score_file, capsys):
        """Layout JSON goes to stdout."""
        assert main(["layout", str(score_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["measures"]) == 2
        assert data["staff_space"] == 8.0
        assert "curves" not in data

    def test_staff_space_override(self, score_file, capsys):
        """--staff-space overrides the preset."""
        assert main(["layout", str(score_file), "--preset", "compact", "--staff-space", "10"]) == 0
        assert json.loads(capsys.readouterr().out)["staff_space"] == 10.0

    def test_curves(self, score_file, capsys):
        """--curves adds tie and slur geometry."""
        assert main(["layout", str(score_file), "--curves"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert isinstance(data["curves"], list)

    def test_unknown_preset(self, score_file):
        """Unknown presets fail."""
        assert main(["layout", str(score_file), "--preset", "nope"]) == 1

    def test_invalid_staff_space(self, score_file):
        """A non-positive staff space fails."""
        assert main(["layout", str(score_file), "--staff-space", "0"]) == 1

    def test_missing_file(self, temp_dir):
        """Unreadable files fail."""
        assert main(["layout", str(temp_dir / "missing.json")]) == 1


class TestValidateCommand:
    """Tests for the validate subcommand."""

    def test_valid_score(self, score_file, capsys):
        """A clean score exits 0."""
        assert main(["validate", str(score_file)]) == 0
        assert json.loads(capsys.readouterr().out)["valid"] is True

    def test_invalid_score(self, temp_dir, capsys):
        """Errors exit 1 and are printed."""
        path = temp_dir / "bad.yaml"
        path.write_text(
            "timeSignature: 2/4\n"
            "measures:\n"
            "  - elements:\n"
            "      - {type: note, duration: 4, pitch: C4}\n"
        )
        assert main(["validate", str(path)]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["issues"][0]["code"] == "MEASURE_OVERFULL"
