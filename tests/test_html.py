"""Tests for HTML rendering of tab markup."""

import re

import pytest

from tabmarkup.markup.html import render_chord, render_html
from tabmarkup.models import ChordToken

ROOT = '<span class="chord-root">{}</span>'
QUALITY = '<span class="chord-quality">{}</span>'
BASS = '<span class="chord-bass">/{}</span>'


def chord_html(root: str, quality: str = "", bass: str | None = None) -> str:
    inner = ROOT.format(root)
    if quality:
        inner += QUALITY.format(quality)
    if bass:
        inner += BASS.format(bass)
    return f'<span class="chord">{inner}</span>'


def visible_text(rendered: str) -> str:
    """Strip tags and decode the entities render_html emits."""
    text = rendered.replace("<br/>", "\n")
    text = re.sub(r"<[^>]+>", "", text)
    return text.replace("&nbsp;", " ").replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


class TestRenderChord:
    """Chord span structure."""

    def test_plain_major(self) -> None:
        """Empty quality and no bass omit both spans."""
        assert render_chord(ChordToken(root="C")) == chord_html("C")

    def test_full_chord(self) -> None:
        """Root, quality and bass each get a span."""
        token = ChordToken(root="C#", quality="m", bass="Eb")
        assert render_chord(token) == chord_html("C#", "m", "Eb")


class TestRenderHtmlChords:
    """Chord tag replacement."""

    def test_single_chord(self) -> None:
        """A lone tag becomes a chord span."""
        assert render_html("[ch]G7/B[/ch]") == chord_html("G", "7", "B")

    def test_trailing_slash_dropped(self) -> None:
        """Scraped trailing slashes do not show up."""
        assert render_html("[ch]Am/[/ch]") == chord_html("A", "m")

    def test_tags_in_order(self) -> None:
        """Output order matches input order."""
        rendered = render_html("[ch]Am[/ch] [ch]F[/ch] [ch]C[/ch]")
        assert rendered == "&nbsp;".join([chord_html("A", "m"), chord_html("F"), chord_html("C")])

    def test_malformed_tag_passes_through(self) -> None:
        """A tag without a root is rendered as literal text."""
        assert render_html("[ch]N.C.[/ch]") == "[ch]N.C.[/ch]"

    def test_malformed_tag_is_escaped(self) -> None:
        """Literal passthrough is still escaped."""
        assert render_html("[ch]<b>[/ch]") == "[ch]&lt;b&gt;[/ch]"

    def test_unterminated_tag_is_text(self) -> None:
        """An open tag without a close tag is literal."""
        assert render_html("[ch]G") == "[ch]G"


class TestRenderHtmlTabBlocks:
    """Tab wrapper replacement."""

    def test_tab_block_becomes_container(self) -> None:
        """[tab]...[/tab] becomes a span that keeps its content."""
        rendered = render_html("[tab][ch]D[/ch]\nla[/tab]")
        assert rendered == f'<span class="tab">{chord_html("D")}<br/>la</span>'

    def test_multiple_blocks(self) -> None:
        """Each block gets its own container."""
        rendered = render_html("[tab]a[/tab]\n[tab]b[/tab]")
        assert rendered == '<span class="tab">a</span><br/><span class="tab">b</span>'

    def test_unbalanced_close_is_text(self) -> None:
        """A stray close tag is literal text."""
        assert render_html("a[/tab]") == "a[/tab]"


class TestRenderHtmlWhitespace:
    """Whitespace is kept column for column."""

    def test_spaces_become_nbsp(self) -> None:
        """Every space is non-breaking."""
        assert render_html("a  b") == "a&nbsp;&nbsp;b"
        assert " " not in render_html("   many   spaces   here ")

    def test_newlines(self) -> None:
        """All newline styles become line breaks."""
        assert render_html("a\r\nb\rc\nd") == "a<br/>b<br/>c<br/>d"

    def test_tab_character_expands_to_stop(self) -> None:
        """A tab fills up to the next multiple of 8 columns."""
        assert render_html("ab\tc") == "ab" + "&nbsp;" * 6 + "c"

    def test_tab_stop_counts_chord_names(self) -> None:
        """Chord names occupy their columns when computing tab stops."""
        rendered = render_html("[ch]Am7[/ch]\tx")
        assert rendered == chord_html("A", "m7") + "&nbsp;" * 5 + "x"

    def test_html_special_chars_escaped(self) -> None:
        """Lyrics cannot inject markup."""
        assert render_html("<script>&") == "&lt;script&gt;&amp;"

    @pytest.mark.parametrize(
        "line",
        [
            "Hello   world",
            "   leading",
            "[ch]G[/ch]      [ch]C/[/ch]    [ch]D7/F#[/ch]",
            "[tab][ch]Em[/ch]   [ch]C[/ch]\nI was   here[/tab]",
        ],
    )
    def test_visible_columns_preserved(self, line: str) -> None:
        """Rendered text has the same columns as the display text."""
        expected = (
            line.replace("[tab]", "")
            .replace("[/tab]", "")
            .replace("[ch]C/[/ch]", "C")
            .replace("[ch]", "")
            .replace("[/ch]", "")
        )
        assert visible_text(render_html(line)) == expected
