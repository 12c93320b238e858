"""HTML rendering of raw tab markup.

Guitar tabs align chords over lyrics by column, so the rendered HTML must
not let the browser collapse whitespace: every space becomes ``&nbsp;``,
tab characters expand to the next tab stop, and newlines become ``<br/>``.
"""

from __future__ import annotations

import html
import logging

from tabmarkup.errors import MalformedChordError
from tabmarkup.markup.chord_tag import CH_TAG_RE, TAB_BLOCK_RE, extract_chord
from tabmarkup.models import ChordToken

logger = logging.getLogger(__name__)

TAB_WIDTH = 8

CHORD_CLASS = "chord"
ROOT_CLASS = "chord-root"
QUALITY_CLASS = "chord-quality"
BASS_CLASS = "chord-bass"
TAB_CLASS = "tab"

NBSP = "&nbsp;"
LINE_BREAK = "<br/>"


def render_chord(token: ChordToken) -> str:
    """Render one chord token as nested spans.

    Examples
    --------
    >>> render_chord(ChordToken(root="A", quality="m"))
    '<span class="chord"><span class="chord-root">A</span><span class="chord-quality">m</span></span>'
    """
    parts = [f'<span class="{ROOT_CLASS}">{html.escape(token.root)}</span>']
    if token.quality:
        parts.append(f'<span class="{QUALITY_CLASS}">{html.escape(token.quality)}</span>')
    if token.bass:
        parts.append(f'<span class="{BASS_CLASS}">/{html.escape(token.bass)}</span>')
    return f'<span class="{CHORD_CLASS}">{"".join(parts)}</span>'


def _render_literal(text: str, column: int) -> tuple[str, int]:
    """Escape plain text, keeping every column visible.

    Returns the rendered HTML and the column after the text.
    """
    out: list[str] = []
    for char in text:
        if char == "\n":
            out.append(LINE_BREAK)
            column = 0
        elif char == " ":
            out.append(NBSP)
            column += 1
        elif char == "\t":
            width = TAB_WIDTH - column % TAB_WIDTH
            out.append(NBSP * width)
            column += width
        else:
            out.append(html.escape(char, quote=False))
            column += 1
    return "".join(out), column


def _render_inline(text: str, column: int) -> tuple[str, int]:
    """Render text that may contain chord tags but no tab blocks."""
    out: list[str] = []
    pos = 0
    for match in CH_TAG_RE.finditer(text):
        rendered, column = _render_literal(text[pos : match.start()], column)
        out.append(rendered)
        try:
            token = extract_chord(match.group(1))
        except MalformedChordError as exc:
            logger.debug("Rendering chord tag as text: %s", exc)
            rendered, column = _render_literal(match.group(0), column)
            out.append(rendered)
        else:
            out.append(render_chord(token))
            column += len(token.name)
        pos = match.end()
    rendered, column = _render_literal(text[pos:], column)
    out.append(rendered)
    return "".join(out), column


def render_html(tab_text: str) -> str:
    """Render raw tab markup as HTML.

    Parameters
    ----------
    tab_text : str
        Raw tab body with ``[ch]...[/ch]`` and ``[tab]...[/tab]`` markup.
        Already-rendered HTML is not accepted.

    Returns
    -------
    str
        HTML where chords are ``<span class="chord">`` elements, tab
        blocks are ``<span class="tab">`` containers and all whitespace
        is non-breaking. Malformed or unbalanced tags appear as text.

    Examples
    --------
    >>> render_html("[ch]G[/ch]  x")
    '<span class="chord"><span class="chord-root">G</span></span>&nbsp;&nbsp;x'
    """
    text = tab_text.replace("\r\n", "\n").replace("\r", "\n")

    out: list[str] = []
    column = 0
    pos = 0
    for match in TAB_BLOCK_RE.finditer(text):
        rendered, column = _render_inline(text[pos : match.start()], column)
        out.append(rendered)
        rendered, column = _render_inline(match.group(1), column)
        out.append(f'<span class="{TAB_CLASS}">{rendered}</span>')
        pos = match.end()
    rendered, _ = _render_inline(text[pos:], column)
    out.append(rendered)
    return "".join(out)
