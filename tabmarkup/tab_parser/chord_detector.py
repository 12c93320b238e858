"""Recognition of untagged chord symbols.

Most scraped tabs tag every chord, but older submissions and hand-edited
lines carry bare symbols such as ``Am   G/B``. A bare run counts as a chord
only if it passes a cheap shape check and pychord can build it. The root
must be upper case, so lyric words like "a" or "am" never qualify.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from tabmarkup.converter import from_pychord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabmarkup.models import ChordToken
    from tabmarkup.tab_parser.models import Token, TokenKind

logger = logging.getLogger(__name__)

MAX_CHORD_LENGTH = 15

# Share of chord runs a line needs (with no words at all) to be a chord line
CHORD_LINE_THRESHOLD = 0.6

# Shape check only; pychord has the final say
CHORD_SYMBOL_RE = re.compile(
    r"[A-G][#b]?"
    r"(?:maj|mM|m|M|dim|aug|sus[24]?|add[29]|[0-9]|[#b-](?=[0-9]))*"
    r"(?:/[A-G][#b]?)?"
)


def parse_chord(text: str) -> ChordToken | None:
    """Return the chord a bare run spells, or None.

    Examples
    --------
    >>> parse_chord("Gm7").quality
    'm7'
    >>> parse_chord("Be") is None
    True
    """
    if not text or len(text) > MAX_CHORD_LENGTH:
        return None
    if CHORD_SYMBOL_RE.fullmatch(text) is None:
        return None
    try:
        return from_pychord(text)
    except ValueError as exc:
        logger.debug("pychord rejected %r: %s", text, exc)
        return None


def is_chord(text: str) -> bool:
    return parse_chord(text) is not None


def classify_word(text: str) -> tuple[TokenKind, ChordToken | None]:
    """Kind of one bare whitespace-delimited run, plus its chord if any."""
    chord = parse_chord(text)
    if chord is not None:
        return "chord", chord
    if not any(char.isalnum() for char in text):
        return "punct", None
    if any(char.isalpha() for char in text):
        return "word", None
    return "other", None


def is_chord_line(tokens: Sequence[Token]) -> bool:
    """Whether a line's tokens make it a line of chords.

    Any word disqualifies the line; otherwise most runs must be chords, so
    a stray "|" or "%" between chords is tolerated.
    """
    if not tokens or any(token.kind == "word" for token in tokens):
        return False
    chords = sum(1 for token in tokens if token.kind == "chord")
    return chords > 0 and chords / len(tokens) >= CHORD_LINE_THRESHOLD
