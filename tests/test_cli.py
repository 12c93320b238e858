"""Tests for the command-line front end."""

import json
import shutil
from pathlib import Path

import pytest

from tabmarkup.cli import NO_DIAGRAM, main

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"


@pytest.fixture
def song_path(tmp_path: Path) -> Path:
    """Copy road_song.json into a scratch directory."""
    path = tmp_path / "road_song.json"
    shutil.copy(TESTDATA_DIR / "road_song.json", path)
    return path


class TestCommands:
    """Each subcommand writes its output to stdout."""

    def test_html(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """html renders chord spans and tab containers."""
        assert main(["html", str(song_path)]) == 0
        out = capsys.readouterr().out
        assert '<span class="tab">' in out
        assert '<span class="chord-root">G</span><span class="chord-bass">/B</span>' in out
        assert "[ch]" not in out

    def test_chordpro(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """chordpro exports header and inline chords."""
        assert main(["chordpro", str(song_path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("{title: Road Song}\n{artist: The Band}\n{capo: 3}\n{key: Am}\n")
        assert "  Walking [Am]down the [F]road\n" in out

    def test_chordpro_transposed(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Transposition moves the chords and the key."""
        assert main(["chordpro", str(song_path), "--transpose", "2"]) == 0
        out = capsys.readouterr().out
        assert "{key: Bm}\n" in out
        assert "  Walking [Bm]down the [G]road\n" in out
        assert "[A/C#]" in out

    def test_transpose(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """transpose rewrites chord tags in the raw markup."""
        assert main(["transpose", str(song_path), "1", "--flats"]) == 0
        out = capsys.readouterr().out
        assert "[tab][ch]Bbm[/ch]  [ch]Gb[/ch]" in out
        assert "  Walking down the road[/tab]" in out

    def test_diagram_for_chord(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """diagram prints one block per variant."""
        assert main(["diagram", str(song_path), "--chord", "C"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == ["C (1/1)", "x     o   o", "==========="]

    def test_diagram_missing(self, song_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Chords without a usable variant say so."""
        assert main(["diagram", str(song_path)]) == 0
        out = capsys.readouterr().out
        assert f"G/B (1/1)\n{NO_DIAGRAM}" in out
        assert out.endswith(f"G\n{NO_DIAGRAM}\n")

    def test_output_file(self, song_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """-o writes to a file instead of stdout."""
        target = tmp_path / "song.cho"
        assert main(["-o", str(target), "chordpro", str(song_path)]) == 0
        assert capsys.readouterr().out == ""
        assert target.read_text().startswith("{title: Road Song}")


class TestErrors:
    """Failures exit with status 1."""

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An unreadable file is reported."""
        assert main(["html", str(tmp_path / "nope.json")]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_bad_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Invalid JSON is reported."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert main(["html", str(path)]) == 1
        assert "not valid JSON" in capsys.readouterr().err

    def test_not_utf8(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Undecodable bytes are reported like bad JSON."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{")
        assert main(["html", str(path)]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert "not valid UTF-8" in err

    def test_missing_tab(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A payload without a tab is reported."""
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"song_name": "x"}))
        assert main(["chordpro", str(path)]) == 1
        assert "tab" in capsys.readouterr().err

    def test_conflicting_spelling(self, song_path: Path) -> None:
        """--flats and --sharps cannot be combined."""
        with pytest.raises(SystemExit) as excinfo:
            main(["transpose", str(song_path), "1", "--flats", "--sharps"])
        assert excinfo.value.code == 2
