"""Tests for the command line interface."""

import json

import pytest

from temperament.main import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["table"])
        assert args.preset == "equal"
        assert args.file is None
        assert args.radius == 1

    def test_file_and_preset_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--file", "x.json", "--preset", "equal", "table"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """Tests for the CLI subcommands."""

    def test_presets(self, capsys):
        assert main(["presets"]) == 0
        out = capsys.readouterr().out.split()
        assert "equal" in out
        assert "quarterCommaMeantone" in out
        assert "pythagoreanD" in out

    def test_table(self, capsys):
        assert main(["table", "--radius", "0"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Equal temperament (A4 = 440.00 Hz)"
        assert len(lines) == 2 + 12
        assert lines[2].startswith("C4")
        assert "261.626 Hz" in lines[2]

    def test_pitch(self, capsys):
        assert main(["pitch", "A", "5"]) == 0
        assert capsys.readouterr().out.strip() == "A5: 880.000 Hz"

    def test_identify(self, capsys):
        assert main(["identify", "440", "466.164"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "440.000 Hz → A (+0.0¢)"
        assert lines[1] == "466.164 Hz → B♭ (+0.0¢)"

    def test_reference_pitch_override(self, capsys):
        assert main(["--reference-pitch", "432", "pitch", "A", "4"]) == 0
        assert capsys.readouterr().out.strip() == "A4: 432.000 Hz"

    def test_export(self, capsys):
        assert main(["--preset", "quarterCommaMeantone", "export"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["name"] == "Quarter-comma meantone"
        assert all(base == "A" for base, _ in document["notes"].values())
        assert document["notes"]["C"][1] == pytest.approx(-889.8)

    def test_midi(self, capsys):
        assert main(["--preset", "quarterCommaMeantone", "midi", "C", "5", "--channel", "2"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 9
        assert lines[2].startswith("control_change channel=2 control=6 value=48")
        assert lines[6].startswith("pitchwheel channel=2 pitch=17")
        assert lines[7].startswith("note_on channel=2 note=72 velocity=100")
        assert lines[8].startswith("note_off channel=2 note=72")

    def test_midi_output_file(self, tmp_path, capsys):
        path = tmp_path / "a4.mid"
        assert main(["midi", "A", "4", "--output", str(path)]) == 0
        assert capsys.readouterr().out.strip() == f"Wrote 9 messages to {path}"
        assert path.stat().st_size > 0

    def test_midi_channel_out_of_range(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["midi", "A", "4", "--channel", "16"])

    def test_file(self, tmp_path, capsys, sample_data):
        sample_data["notes"]["C{sharp}"] = ["C", 100]
        path = tmp_path / "sample.json"
        path.write_text(json.dumps(sample_data), encoding="utf-8")
        assert main(["--file", str(path), "pitch", "C{sharp}", "4"]) == 0
        assert capsys.readouterr().out.startswith("C♯4: 277.183 Hz")


class TestErrors:
    """Errors are reported on stderr with exit status 1."""

    def test_unknown_note(self, capsys):
        assert main(["pitch", "H", "4"]) == 1
        assert capsys.readouterr().err.strip() == "Error: Note 'H' is not defined"

    def test_invalid_reference_pitch(self, capsys):
        assert main(["--reference-pitch", "-1", "table"]) == 1
        assert "Pitch must be positive" in capsys.readouterr().err

    def test_identify_infinite_pitch(self, capsys):
        assert main(["identify", "inf"]) == 1
        assert "Pitch must be positive" in capsys.readouterr().err

    def test_unknown_preset(self, capsys):
        assert main(["--preset", "nope", "table"]) == 1
        assert "Unknown preset 'nope'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--file", str(tmp_path / "missing.json"), "table"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_invalid_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"name": "Bad"}', encoding="utf-8")
        assert main(["--file", str(path), "table"]) == 1
        assert "Incorrect temperament format" in capsys.readouterr().err
