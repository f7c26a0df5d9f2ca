"""Tests for the command-line interface."""

import io
import json

import pytest

from noteorganizer.cli import build_parser, main

MEETING_NOTES = "meeting with marketing team\nsarah discussed q1 results\nbudget increased by 15%"
PROCESS_NOTES = "first user enters email\nthen creates password\nfinally account activated"


@pytest.fixture
def notes_file(tmp_path):
    def _write(text):
        path = tmp_path / "notes.txt"
        path.write_text(text)
        return str(path)

    return _write


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["process"])
        assert args.source == "-"
        assert args.mode == "auto"
        assert not args.local_only

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestProcessCommand:
    def test_organize(self, notes_file, capsys):
        exit_code = main(["process", notes_file(MEETING_NOTES), "--mode", "organize"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("# Meeting with marketing team\n")
        assert "- Sarah" in out

    def test_html(self, notes_file, capsys):
        main(["process", notes_file(MEETING_NOTES), "--mode", "organize", "--html"])
        assert "<h1>Meeting with marketing team</h1>" in capsys.readouterr().out

    def test_visualize(self, notes_file, capsys):
        exit_code = main(["process", notes_file(PROCESS_NOTES), "--mode", "visualize", "--local-only"])

        assert exit_code == 0
        assert capsys.readouterr().out.startswith("flowchart TD\n")

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(MEETING_NOTES))

        assert main(["process", "--mode", "organize"]) == 0
        assert "Sarah" in capsys.readouterr().out

    def test_short_input_fails(self, notes_file, capsys):
        assert main(["process", notes_file("hi")]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_file_fails(self, tmp_path):
        assert main(["process", str(tmp_path / "nope.txt")]) == 1


class TestAnalyzeCommand:
    def test_prints_json(self, notes_file, capsys):
        assert main(["analyze", notes_file(MEETING_NOTES)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["note_category"] == "meeting"
        assert data["diagram_kind"] == "none"
        assert data["should_visualize"] is False
        assert data["tone"] == "neutral"
