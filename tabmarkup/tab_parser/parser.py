"""Split a scraped tab body into sections of aligned lines.

``[tab]`` wrappers are dropped, ``[Header]`` lines open sections, and a
chord line directly above a plain lyric line is paired into a
:class:`Block` so the chords can later be placed at their lyric columns.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal, NamedTuple

from tabmarkup.markup.chord_tag import TAB_TAG_RE
from tabmarkup.tab_parser.chord_detector import is_chord_line
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
from tabmarkup.tab_parser.tokenizer import scan_line

if TYPE_CHECKING:
    from collections.abc import Iterator

# [Verse 1], [Chorus]; never a bare [ch]/[tab] marker
SECTION_HEADER_RE = re.compile(r"^\s*\[(?!/?(?:ch|tab)\])([^\[\]]+)\]\s*$")

# (repeat 2x), (let ring)
COMMENT_RE = re.compile(r"^\s*\(.*\)\s*$")

LineType = Literal["chord", "lyric", "empty", "comment", "section_header"]


class _Scanned(NamedTuple):
    display: str
    tokens: list[Token]
    kind: LineType


def preprocess(text: str) -> list[str]:
    """Normalize newlines, drop ``[tab]`` wrappers and split into lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return TAB_TAG_RE.sub("", text).split("\n")


def extract_section_name(line: str) -> str | None:
    """Return the name of a ``[Header]`` line, or None.

    Examples
    --------
    >>> extract_section_name(" [Pre-Chorus] ")
    'Pre-Chorus'
    >>> extract_section_name("[ch]G[/ch]") is None
    True
    """
    match = SECTION_HEADER_RE.match(line)
    return match.group(1).strip() if match else None


def _line_type(line: str, tokens: list[Token]) -> LineType:
    if not tokens:
        return "empty"
    if SECTION_HEADER_RE.match(line):
        return "section_header"
    if COMMENT_RE.match(line):
        return "comment"
    return "chord" if is_chord_line(tokens) else "lyric"


def classify_line(line: str) -> LineType:
    """Classify one raw line.

    Examples
    --------
    >>> classify_line("[ch]Am[/ch]  [ch]G/B[/ch]")
    'chord'
    >>> classify_line("Ride [ch]E7[/ch]on home")
    'lyric'
    >>> classify_line("[Outro]")
    'section_header'
    """
    return _line_type(line, scan_line(line)[1])


def _scan(line: str) -> _Scanned:
    display, tokens = scan_line(line)
    return _Scanned(display, tokens, _line_type(line, tokens))


def _pair(chords: _Scanned, lyric: _Scanned) -> Block:
    width = max(len(chords.display), len(lyric.display))
    return Block(
        chord_raw=chords.display.ljust(width),
        lyric_raw=lyric.display.ljust(width),
        width=width,
        chord_tokens=tuple(chords.tokens),
        lyric_tokens=tuple(lyric.tokens),
    )


def create_block(chord_line: str, lyric_line: str) -> Block:
    """Pair a raw chord line with the raw lyric line below it."""
    return _pair(_scan(chord_line), _scan(lyric_line))


def _pairs_with(line: _Scanned) -> bool:
    # A lyric line carrying its own tagged chords is already aligned
    return line.kind == "lyric" and not any(t.kind == "chord" for t in line.tokens)


def parse_items(lines: list[str]) -> list[Item]:
    """Turn the lines of one section into items."""
    scanned = [_scan(line) for line in lines]
    items: list[Item] = []
    i = 0
    while i < len(scanned):
        line = scanned[i]
        below = scanned[i + 1] if i + 1 < len(scanned) else None
        if line.kind == "chord" and below is not None and _pairs_with(below):
            items.append(_pair(line, below))
            i += 2
            continue

        if line.kind == "empty":
            items.append(EmptyLine())
        elif line.kind == "comment":
            items.append(CommentLine(raw=line.display))
        elif line.kind == "chord":
            items.append(ChordLine(raw=line.display, tokens=tuple(line.tokens)))
        else:
            items.append(LyricLine(raw=line.display, tokens=tuple(line.tokens)))
        i += 1
    return items


def _split_sections(lines: list[str]) -> Iterator[tuple[str | None, list[str]]]:
    name: str | None = None
    body: list[str] = []
    for line in lines:
        header = extract_section_name(line)
        if header is None:
            body.append(line)
            continue
        if body or name is not None:
            yield name, body
        name, body = header, []
    if body or name is not None:
        yield name, body


def parse(text: str) -> TabSheet:
    """Parse a raw tab body.

    Lines above the first header form a section named None; a header with
    no lines under it still yields an (empty) section.

    Examples
    --------
    >>> sheet = parse("[Verse]\\n[tab]  [ch]Am[/ch]    [ch]C[/ch]\\nWalking home[/tab]")
    >>> [s.name for s in sheet.sections]
    ['Verse']
    >>> type(sheet.sections[0].items[0]).__name__
    'Block'
    """
    sections = tuple(
        Section(name=name, items=tuple(parse_items(body)))
        for name, body in _split_sections(preprocess(text))
    )
    return TabSheet(sections=sections, raw=text)
