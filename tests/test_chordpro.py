"""Tests for ChordPro export and import."""

import logging

import pytest

from tabmarkup.errors import InvalidChordProDirective
from tabmarkup.markup.chordpro import (
    ChordProBlank,
    ChordProComment,
    ChordProLine,
    ChordProSegment,
    format_chordpro,
    parse_chordpro,
    parse_directive,
    parse_line,
    song_to_chordpro,
    to_chordpro,
)
from tabmarkup.models import ChordToken
from tabmarkup.song import SongDetail

TAB = (
    "[Intro]\n"
    "[tab][ch]Am[/ch]  [ch]F/[/ch]  [ch]C[/ch]  [ch]G/B[/ch][/tab]\n"
    "\n"
    "[Verse 1]\n"
    "[tab]          [ch]Am[/ch]       [ch]F[/ch]\n"
    "  Walking down the road[/tab]\n"
    "[tab]        [ch]C[/ch]       [ch]G[/ch]\n"
    "Nothing left[/tab]\n"
    "(repeat 2x)\n"
    "\n"
)


@pytest.fixture
def song() -> SongDetail:
    return SongDetail(
        song_name="Road Song",
        artist_name="The Band",
        tab=TAB,
        capo=3,
        tuning="E A D G B E",
        difficulty="novice",
        key="Am",
    )


class TestToChordPro:
    """Export of scraped songs."""

    def test_full_export(self, song: SongDetail) -> None:
        """The whole song exports to the expected text."""
        expected = (
            "{title: Road Song}\n"
            "{artist: The Band}\n"
            "{capo: 3}\n"
            "{key: Am}\n"
            "{comment: Difficulty: novice}\n"
            "{comment: Tuning: E A D G B E}\n"
            "\n"
            "{comment: Intro}\n"
            "[Am]  [F]  [C]  [G/B]\n"
            "\n"
            "{comment: Verse 1}\n"
            "  Walking [Am]down the [F]road\n"
            "Nothing [C]left    [G]\n"
            "{comment: (repeat 2x)}\n"
        )
        assert to_chordpro(song) == expected

    def test_minimal_metadata(self) -> None:
        """Capo, key and comments are only emitted when present."""
        song = SongDetail(song_name="T", artist_name="A", tab="la la", capo=0)
        assert to_chordpro(song) == "{title: T}\n{artist: A}\nla la\n"

    def test_chord_before_its_syllable(self) -> None:
        """A chord over the middle of a word is placed inside the word."""
        song = SongDetail(song_name="", artist_name="", tab="  [ch]D[/ch]\nbeautiful")
        assert to_chordpro(song) == "be[D]autiful\n"

    def test_untagged_chord_line(self) -> None:
        """Plain chord lines without tags are still recognized."""
        song = SongDetail(song_name="", artist_name="", tab="G    D\nHello you")
        assert to_chordpro(song) == "[G]Hello[D] you\n"

    def test_bare_chord_word_in_lyric_stays_text(self) -> None:
        """A bare 'Am' inside a lyric line is a word, not a chord."""
        song = SongDetail(song_name="", artist_name="", tab="Am I wrong")
        assert to_chordpro(song) == "Am I wrong\n"

    def test_inline_tag_in_lyric_line(self) -> None:
        """Tagged chords inside lyric text become inline chords."""
        song = SongDetail(song_name="", artist_name="", tab="Ride [ch]E7[/ch]on home")
        assert to_chordpro(song) == "Ride [E7]on home\n"

    def test_malformed_tag_kept_as_text(self) -> None:
        """A tag with no root is left in the lyric as plain text."""
        song = SongDetail(song_name="", artist_name="", tab="[ch]N.C.[/ch] stop")
        assert to_chordpro(song) == "[ch]N.C.[/ch] stop\n"


class TestParseDirective:
    """Directive parsing."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("{title: Hello}", ("title", "Hello")),
            ("{t:Hello}", ("title", "Hello")),
            ("{ artist : The Band }", ("artist", "The Band")),
            ("{capo: 2}", ("capo", 2)),
            ("{c: Chorus}", ("comment", "Chorus")),
            ("{Key: Em}", ("key", "Em")),
        ],
    )
    def test_supported(self, line: str, expected: tuple[str, str | int]) -> None:
        """Known directives and short forms are canonicalized."""
        assert parse_directive(line) == expected

    @pytest.mark.parametrize(
        "line",
        ["{start_of_chorus}", "{tempo: 120}", "{capo: two}", "{capo: --2}", "{capo: ²}", "{capo: -1}", "title: x"],
    )
    def test_invalid(self, line: str) -> None:
        """Unknown names, bad capo values and non-directives raise."""
        with pytest.raises(InvalidChordProDirective):
            parse_directive(line)


class TestParseLine:
    """Inline chord parsing."""

    def test_leading_lyric(self) -> None:
        """Text before the first chord has no chord."""
        line = parse_line("Hello [G]world")
        assert line.segments == (
            ChordProSegment(chord=None, lyric="Hello "),
            ChordProSegment(chord=ChordToken(root="G"), lyric="world"),
        )

    def test_chord_only(self) -> None:
        """Consecutive chords get empty or spacing lyrics."""
        line = parse_line("[Am]  [G/B]")
        assert [s.chord.name for s in line.segments if s.chord] == ["Am", "G/B"]
        assert line.lyrics == "  "

    def test_non_chord_brackets_are_lyrics(self) -> None:
        """Brackets without a root stay in the text."""
        line = parse_line("[x2] again")
        assert line.segments == (ChordProSegment(chord=None, lyric="[x2] again"),)


class TestParseChordPro:
    """Whole-document import."""

    def test_metadata_and_body(self) -> None:
        """Directives fill metadata, comments and lines fill the body."""
        text = "{title: Hi}\n{artist: Me}\n{capo: 1}\n{comment: Verse}\n[C]la\n\n"
        song = parse_chordpro(text)
        assert (song.title, song.artist, song.capo, song.key) == ("Hi", "Me", 1, None)
        assert song.body == (
            ChordProComment(text="Verse"),
            ChordProLine(segments=(ChordProSegment(chord=ChordToken(root="C"), lyric="la"),)),
            ChordProBlank(),
        )

    def test_unknown_directive_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown directives are logged and skipped."""
        with caplog.at_level(logging.DEBUG, logger="tabmarkup.markup.chordpro"):
            song = parse_chordpro("{title: A}\n{start_of_chorus}\n[G]la\n{end_of_chorus}\n")
        assert song.title == "A"
        assert len(song.body) == 1
        assert "start_of_chorus" in caplog.text

    @pytest.mark.parametrize("value", ["high", "--2", "²"])
    def test_invalid_capo_dropped(self, value: str) -> None:
        """A capo that is not an integer does not stop parsing."""
        song = parse_chordpro(f"{{capo: {value}}}\nla\n")
        assert song.capo is None
        assert len(song.body) == 1


class TestRoundTrip:
    """Export, import and re-export."""

    def test_reproduces_song_fields(self, song: SongDetail) -> None:
        """Import of the export gives back title, artist, capo and lines."""
        parsed = parse_chordpro(to_chordpro(song))
        expected = song_to_chordpro(song)
        assert parsed.title == song.song_name
        assert parsed.artist == song.artist_name
        assert parsed.capo == song.capo
        assert parsed.body == expected.body

    def test_names_are_trimmed(self) -> None:
        """Padding around title and artist does not survive export."""
        song = SongDetail.from_dict({"song_name": "Song ", "artist_name": " Band", "tab": "la"})
        assert (song.song_name, song.artist_name) == ("Song", "Band")
        text = to_chordpro(SongDetail(song_name="Song ", artist_name=" Band\t", tab="la"))
        assert text == "{title: Song}\n{artist: Band}\nla\n"
        assert parse_chordpro(text).title == "Song"

    def test_directive_shaped_lyric(self) -> None:
        """A lyric line in braces is exported as a comment, not a directive."""
        text = to_chordpro(SongDetail(song_name="", artist_name="", tab="{x2}\nla"))
        assert text == "{comment: {x2}}\nla\n"
        parsed = parse_chordpro(text)
        assert parsed.body[0] == ChordProComment(text="{x2}")
        assert parsed.body[1].lyrics == "la"

    def test_text_is_stable(self, song: SongDetail) -> None:
        """Re-emitting parsed output gives identical text."""
        text = to_chordpro(song)
        assert format_chordpro(parse_chordpro(text)) == text

    @pytest.mark.parametrize(
        "tab",
        [
            "",
            "just words",
            "[ch]A/[/ch]\n[ch]C#m/Eb[/ch]  x",
            "[Chorus]\n[Bridge]\n[ch]G[/ch]\n  ah [x2]",
            "      [ch]D[/ch]\nhi",
            "{x2}\nla",
            "  {Chorus} ",
        ],
    )
    def test_stable_for_edge_cases(self, tab: str) -> None:
        """Stability holds for sparse and odd tabs."""
        text = to_chordpro(SongDetail(song_name="s", artist_name="", tab=tab))
        assert format_chordpro(parse_chordpro(text)) == text
