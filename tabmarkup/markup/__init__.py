"""Normalization of scraped tab markup.

Chord tags are split into root/quality/bass and rendered as HTML spans,
exported to ChordPro, or transposed, always without touching the column
layout of the surrounding text.
"""

from tabmarkup.markup.chord_tag import (
    chord_names,
    extract_chord,
    iter_chord_tokens,
    try_extract_chord,
)
from tabmarkup.markup.chordpro import (
    ChordProBlank,
    ChordProComment,
    ChordProItem,
    ChordProLine,
    ChordProSegment,
    ChordProSong,
    format_chordpro,
    parse_chordpro,
    parse_directive,
    song_to_chordpro,
    to_chordpro,
)
from tabmarkup.markup.html import render_chord, render_html
from tabmarkup.markup.transpose import transpose_markup

__all__ = [
    "ChordProBlank",
    "ChordProComment",
    "ChordProItem",
    "ChordProLine",
    "ChordProSegment",
    "ChordProSong",
    "chord_names",
    "extract_chord",
    "format_chordpro",
    "iter_chord_tokens",
    "parse_chordpro",
    "parse_directive",
    "render_chord",
    "render_html",
    "song_to_chordpro",
    "to_chordpro",
    "transpose_markup",
    "try_extract_chord",
]
