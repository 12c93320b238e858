"""Tab sheet parser for chord/lyric alignment.

This module parses scraped tab bodies into structured data with section
detection and column-aligned chord+lyric blocks.
"""

from tabmarkup.tab_parser.models import (
    Block,
    ChordLine,
    CommentLine,
    EmptyLine,
    Item,
    LyricLine,
    Section,
    TabSheet,
    Token,
)
from tabmarkup.tab_parser.parser import parse

__all__ = [
    "Block",
    "ChordLine",
    "CommentLine",
    "EmptyLine",
    "Item",
    "LyricLine",
    "Section",
    "TabSheet",
    "Token",
    "parse",
]
