"""Tab markup normalization and chord diagram library.

This library turns raw tab text scraped from a guitar-tab site into
displayable output: HTML with chord spans, ChordPro text, transposed
markup, and chord finger-position diagrams. Every operation is a pure
function of its input.

Examples
--------
>>> from tabmarkup import extract_chord, build_diagram, render_html

>>> extract_chord("C#m/Eb").bass
'Eb'

>>> render_html("[ch]Am[/ch] la")
'<span class="chord"><span class="chord-root">A</span><span class="chord-quality">m</span></span>&nbsp;la'

>>> build_diagram([0, 2, 2, 1, 0, 0]).window_start
0
"""

from tabmarkup.diagram import (
    ChordDiagram,
    ChordShape,
    build_diagram,
    build_diagrams,
    parse_applicature,
)
from tabmarkup.errors import (
    EmptyChordError,
    InvalidChordProDirective,
    MalformedChordError,
    SongFormatError,
    TabMarkupError,
)
from tabmarkup.markup import (
    ChordProSong,
    chord_names,
    extract_chord,
    format_chordpro,
    parse_chordpro,
    render_html,
    to_chordpro,
    transpose_markup,
)
from tabmarkup.models import ChordToken
from tabmarkup.pitch_class import transpose_note, transpose_token
from tabmarkup.song import SongDetail

__version__ = "0.1.0"

__all__ = [
    "ChordDiagram",
    "ChordProSong",
    "ChordShape",
    "ChordToken",
    "EmptyChordError",
    "InvalidChordProDirective",
    "MalformedChordError",
    "SongDetail",
    "SongFormatError",
    "TabMarkupError",
    "build_diagram",
    "build_diagrams",
    "chord_names",
    "extract_chord",
    "format_chordpro",
    "parse_applicature",
    "parse_chordpro",
    "render_html",
    "to_chordpro",
    "transpose_markup",
    "transpose_note",
    "transpose_token",
]
