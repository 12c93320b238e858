"""Chord tag scanning and chord token extraction.

Scraped tab bodies mark chords as ``[ch]Am7[/ch]`` and wrap chord/lyric
sections in ``[tab]...[/tab]``. This module finds chord tags and splits
their interiors into root, quality and bass.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tabmarkup.errors import MalformedChordError
from tabmarkup.models import ChordToken

if TYPE_CHECKING:
    from collections.abc import Iterator

# A chord tag never spans lines or nests brackets
CH_TAG_RE = re.compile(r"\[ch\]([^\[\]\n]*)\[/ch\]")

TAB_BLOCK_RE = re.compile(r"\[tab\](.*?)\[/tab\]", re.DOTALL)
TAB_TAG_RE = re.compile(r"\[/?tab\]")

# Root or bass note: one letter with an optional accidental
NOTE_RE = re.compile(r"[A-G][#b]?")


def extract_chord(raw: str) -> ChordToken:
    """Split a chord tag interior into root, quality and bass.

    Parameters
    ----------
    raw : str
        The text between ``[ch]`` and ``[/ch]``.

    Returns
    -------
    ChordToken
        The decomposed chord.

    Raises
    ------
    MalformedChordError
        If the text does not start with a valid root note.

    Examples
    --------
    >>> extract_chord("G7/B")
    ChordToken(root='G', quality='7', bass='B', raw_text='G7/B')
    >>> extract_chord("A/").bass is None
    True
    >>> extract_chord("C#m/Eb").name
    'C#m/Eb'
    """
    text = raw.strip()
    match = NOTE_RE.match(text)
    if match is None:
        msg = f"Chord tag has no root note: {raw!r}"
        raise MalformedChordError(msg)

    root = match.group(0)
    rest = text[match.end() :]

    slash = rest.find("/")
    if slash == -1:
        return ChordToken(root=root, quality=rest, bass=None, raw_text=raw)

    quality = rest[:slash]

    # Only "/<note>" is a bass; a bare trailing "/" (or "//", "/x") is a
    # scraping artifact and is dropped with everything after it
    bass_match = NOTE_RE.match(rest, slash + 1)
    bass = bass_match.group(0) if bass_match else None

    return ChordToken(root=root, quality=quality, bass=bass, raw_text=raw)


def try_extract_chord(raw: str) -> ChordToken | None:
    """Like :func:`extract_chord` but return None for malformed input."""
    try:
        return extract_chord(raw)
    except MalformedChordError:
        return None


def iter_chord_tokens(tab_text: str) -> Iterator[ChordToken]:
    """Yield the well-formed chord tokens of a tab in order of appearance.

    Malformed tags are skipped.
    """
    for match in CH_TAG_RE.finditer(tab_text):
        token = try_extract_chord(match.group(1))
        if token is not None:
            yield token


def chord_names(tab_text: str) -> list[str]:
    """Return the distinct normalized chord names of a tab, first-seen order.

    Examples
    --------
    >>> chord_names("[ch]G[/ch] [ch]C/[/ch] [ch]G[/ch]")
    ['G', 'C']
    """
    seen: dict[str, None] = {}
    for token in iter_chord_tokens(tab_text):
        seen.setdefault(token.name, None)
    return list(seen)
