"""Column-aware scanning of one tab line.

Chord tags are resolved while scanning: ``[ch]G7/B[/ch]`` occupies the
four display columns of ``G7/B``, exactly as a reader sees it above the
lyric. Columns of every later token are counted on that display text.
"""

from __future__ import annotations

import logging
import re

from tabmarkup.markup.chord_tag import CH_TAG_RE, try_extract_chord
from tabmarkup.tab_parser.chord_detector import classify_word
from tabmarkup.tab_parser.models import Token

logger = logging.getLogger(__name__)

RUN_RE = re.compile(r"\S+")


def scan_line(line: str) -> tuple[str, list[Token]]:
    """Resolve chord tags in a line and split it into classified tokens.

    Parameters
    ----------
    line : str
        One raw line without its newline.

    Returns
    -------
    tuple[str, list[Token]]
        The display text and its tokens in column order. Tagged chords are
        ``kind="chord", tagged=True``. A malformed tag stays in the display
        text verbatim and is scanned like any other text.

    Examples
    --------
    >>> display, tokens = scan_line("  [ch]Am[/ch]   [ch]C/[/ch]  la")
    >>> display
    '  Am   C  la'
    >>> [(t.text, t.start, t.kind, t.tagged) for t in tokens]
    [('Am', 2, 'chord', True), ('C', 7, 'chord', True), ('la', 10, 'word', False)]
    """
    display: list[str] = []
    tokens: list[Token] = []
    column = 0
    pos = 0

    for match in CH_TAG_RE.finditer(line):
        column = _scan_text(line[pos : match.start()], column, display, tokens)
        pos = match.end()
        chord = try_extract_chord(match.group(1))
        if chord is None:
            logger.debug("Keeping malformed chord tag as text: %r", match.group(0))
            column = _scan_text(match.group(0), column, display, tokens)
            continue
        name = chord.name
        display.append(name)
        tokens.append(
            Token(text=name, start=column, end=column + len(name), kind="chord", chord=chord, tagged=True)
        )
        column += len(name)

    _scan_text(line[pos:], column, display, tokens)
    return "".join(display), tokens


def _scan_text(text: str, column: int, display: list[str], tokens: list[Token]) -> int:
    # Tag-free text starting at display column ``column``
    display.append(text)
    for run in RUN_RE.finditer(text):
        kind, chord = classify_word(run.group())
        tokens.append(
            Token(
                text=run.group(),
                start=column + run.start(),
                end=column + run.end(),
                kind=kind,
                chord=chord,
            )
        )
    return column + len(text)
