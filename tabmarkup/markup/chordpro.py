"""ChordPro export and import.

Export places each chord as ``[name]`` at the column where it stood above
the lyric, so the chord precedes the syllable it annotates. Import reads
the same subset back: title, artist, capo and key directives, comments,
and lines with inline chords. The emitted text is canonical:
``format_chordpro(parse_chordpro(text)) == text`` for anything
:func:`to_chordpro` produces.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tabmarkup.errors import InvalidChordProDirective
from tabmarkup.markup.chord_tag import try_extract_chord
from tabmarkup.tab_parser import (
    Block,
    ChordLine,
    CommentLine,
    EmptyLine,
    Item,
    LyricLine,
    Token,
    parse,
)

if TYPE_CHECKING:
    from tabmarkup.models import ChordToken
    from tabmarkup.song import SongDetail

logger = logging.getLogger(__name__)

DIRECTIVE_RE = re.compile(r"^\{\s*([A-Za-z_]+)\s*(?::\s*(.*?))?\s*\}$")
INLINE_CHORD_RE = re.compile(r"\[([^\[\]]*)\]")

# Supported directive names (and short forms) to their canonical name
DIRECTIVES: dict[str, str] = {
    "title": "title",
    "t": "title",
    "artist": "artist",
    "capo": "capo",
    "key": "key",
    "comment": "comment",
    "c": "comment",
}


@dataclass(frozen=True)
class ChordProSegment:
    """A lyric fragment, optionally preceded by a chord."""

    chord: ChordToken | None
    lyric: str


@dataclass(frozen=True)
class ChordProLine:
    """A body line with inline chords."""

    segments: tuple[ChordProSegment, ...]

    @property
    def lyrics(self) -> str:
        return "".join(segment.lyric for segment in self.segments)

    @property
    def chords(self) -> tuple[ChordToken, ...]:
        return tuple(s.chord for s in self.segments if s.chord is not None)


@dataclass(frozen=True)
class ChordProComment:
    """A ``{comment: ...}`` body line."""

    text: str


@dataclass(frozen=True)
class ChordProBlank:
    """An empty body line."""

    pass


ChordProItem = ChordProLine | ChordProComment | ChordProBlank


@dataclass(frozen=True)
class ChordProSong:
    """A song in the ChordPro subset this module reads and writes.

    Parameters
    ----------
    title : str
        Song title, "" when absent.
    artist : str
        Artist name, "" when absent.
    capo : int | None
        Capo fret.
    key : str | None
        Song key.
    body : tuple[ChordProItem, ...]
        Body lines in order.
    """

    title: str = ""
    artist: str = ""
    capo: int | None = None
    key: str | None = None
    body: tuple[ChordProItem, ...] = ()


# ----------------------------
# Export
# ----------------------------


def _split_at_chords(text: str, chords: list[Token]) -> tuple[ChordProSegment, ...]:
    """Cut ``text`` at each chord column; chords must be sorted by start."""
    if not chords:
        return (ChordProSegment(chord=None, lyric=text),)

    # A chord that sits past the end of the lyric keeps its column
    text = text.ljust(chords[-1].start)

    segments: list[ChordProSegment] = []
    if chords[0].start > 0:
        segments.append(ChordProSegment(chord=None, lyric=text[: chords[0].start]))
    for i, token in enumerate(chords):
        end = chords[i + 1].start if i + 1 < len(chords) else len(text)
        segments.append(ChordProSegment(chord=token.chord, lyric=text[token.start : end]))
    return tuple(segments)


def _inline_segments(display: str, tokens: tuple[Token, ...], tagged_only: bool) -> tuple[ChordProSegment, ...]:
    """Replace chord tokens of a single line by inline chords."""
    chords = [
        t
        for t in tokens
        if t.kind == "chord" and t.chord is not None and (t.tagged or not tagged_only)
    ]
    if not chords:
        return (ChordProSegment(chord=None, lyric=display.rstrip()),)

    segments: list[ChordProSegment] = []
    if chords[0].start > 0:
        segments.append(ChordProSegment(chord=None, lyric=display[: chords[0].start]))
    for i, token in enumerate(chords):
        end = chords[i + 1].start if i + 1 < len(chords) else len(display)
        lyric = display[token.end : end]
        if i + 1 == len(chords):
            lyric = lyric.rstrip()
        segments.append(ChordProSegment(chord=token.chord, lyric=lyric))
    return tuple(segments)


def _item_to_chordpro(item: Item) -> ChordProItem:
    if isinstance(item, Block):
        chords = sorted(
            (t for t in item.chord_tokens if t.kind == "chord" and t.chord is not None),
            key=lambda t: t.start,
        )
        return ChordProLine(segments=_split_at_chords(item.lyric_raw.rstrip(), chords))
    if isinstance(item, ChordLine):
        return ChordProLine(segments=_inline_segments(item.raw, item.tokens, tagged_only=False))
    if isinstance(item, LyricLine):
        # Bare words like "Am" in a lyric are lyrics; only tagged chords move inline
        return ChordProLine(segments=_inline_segments(item.raw, item.tokens, tagged_only=True))
    if isinstance(item, CommentLine):
        return ChordProComment(text=item.raw.strip())
    if isinstance(item, EmptyLine):
        return ChordProBlank()
    msg = f"Unsupported tab item: {item!r}"
    raise TypeError(msg)


def _trim_blanks(items: list[ChordProItem]) -> list[ChordProItem]:
    start = 0
    end = len(items)
    while start < end and isinstance(items[start], ChordProBlank):
        start += 1
    while end > start and isinstance(items[end - 1], ChordProBlank):
        end -= 1
    return items[start:end]


def song_to_chordpro(song: SongDetail) -> ChordProSong:
    """Convert a scraped song into a :class:`ChordProSong`.

    Section headers become comments, a chord line above a lyric line is
    merged into one line of inline chords, and difficulty and tuning are
    emitted as comments ahead of the body.
    """
    aux: list[ChordProItem] = []
    if song.difficulty:
        aux.append(ChordProComment(text=f"Difficulty: {song.difficulty}"))
    if song.tuning:
        aux.append(ChordProComment(text=f"Tuning: {song.tuning}"))

    tab_items: list[ChordProItem] = []
    for section in parse(song.tab).sections:
        if section.name is not None:
            tab_items.append(ChordProComment(text=section.name))
        tab_items.extend(_item_to_chordpro(item) for item in section.items)
    tab_items = _trim_blanks(tab_items)

    body = aux + ([ChordProBlank()] if aux and tab_items else []) + tab_items
    return ChordProSong(
        title=song.song_name.strip(),
        artist=song.artist_name.strip(),
        capo=song.capo or None,
        key=song.key,
        body=tuple(body),
    )


def format_line(line: ChordProLine) -> str:
    """Format one body line with its chords inline.

    Examples
    --------
    >>> from tabmarkup.models import ChordToken
    >>> format_line(ChordProLine(segments=(
    ...     ChordProSegment(chord=None, lyric="Hello "),
    ...     ChordProSegment(chord=ChordToken(root="G"), lyric="world"),
    ... )))
    'Hello [G]world'
    """
    return "".join(
        (f"[{segment.chord.name}]" if segment.chord is not None else "") + segment.lyric
        for segment in line.segments
    )


def _body_line(text: str) -> str:
    # A lyric shaped like {x2} would read back as a directive
    stripped = text.strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        return f"{{comment: {stripped}}}"
    return text


def format_chordpro(song: ChordProSong) -> str:
    """Emit canonical ChordPro text, ending with a single newline."""
    lines: list[str] = []
    if song.title.strip():
        lines.append(f"{{title: {song.title.strip()}}}")
    if song.artist.strip():
        lines.append(f"{{artist: {song.artist.strip()}}}")
    if song.capo:
        lines.append(f"{{capo: {song.capo}}}")
    if song.key:
        lines.append(f"{{key: {song.key}}}")

    for item in song.body:
        if isinstance(item, ChordProComment):
            lines.append(f"{{comment: {item.text}}}")
        elif isinstance(item, ChordProBlank):
            lines.append("")
        else:
            lines.append(_body_line(format_line(item)))

    return "\n".join(lines) + "\n"


def to_chordpro(song: SongDetail) -> str:
    """Export a scraped song as ChordPro text.

    Examples
    --------
    >>> from tabmarkup.song import SongDetail
    >>> song = SongDetail(
    ...     song_name="Song", artist_name="Band", capo=2,
    ...     tab="[tab][ch]G[/ch]     [ch]C/[/ch]\\nHello world[/tab]",
    ... )
    >>> print(to_chordpro(song), end="")
    {title: Song}
    {artist: Band}
    {capo: 2}
    [G]Hello [C]world
    """
    return format_chordpro(song_to_chordpro(song))


# ----------------------------
# Import
# ----------------------------


def parse_directive(line: str) -> tuple[str, str | int]:
    """Parse a ``{name: value}`` line into its canonical name and value.

    The value of ``capo`` is returned as an int, every other value as a
    stripped string.

    Raises
    ------
    InvalidChordProDirective
        If the line is not a directive, the name is not supported, or a
        capo value is not a non-negative integer.

    Examples
    --------
    >>> parse_directive("{t: Hello}")
    ('title', 'Hello')
    """
    match = DIRECTIVE_RE.match(line.strip())
    if match is None:
        msg = f"Not a directive: {line!r}"
        raise InvalidChordProDirective(msg)

    name = DIRECTIVES.get(match.group(1).lower())
    if name is None:
        msg = f"Unsupported directive: {match.group(1)!r}"
        raise InvalidChordProDirective(msg)

    value = (match.group(2) or "").strip()
    if name != "capo":
        return name, value
    try:
        capo = int(value)
    except ValueError as exc:
        msg = f"Capo is not an integer: {value!r}"
        raise InvalidChordProDirective(msg) from exc
    if capo < 0:
        msg = f"Capo is negative: {value!r}"
        raise InvalidChordProDirective(msg)
    return name, capo


def parse_line(line: str) -> ChordProLine:
    """Split a body line into segments at its inline chords.

    Brackets whose content is not a chord are kept as lyric text.

    Examples
    --------
    >>> [(s.chord and s.chord.name, s.lyric) for s in parse_line("[Am/]Hi [x2]").segments]
    [('Am', 'Hi [x2]')]
    """
    segments: list[ChordProSegment] = []
    chord: ChordToken | None = None
    pos = 0
    for match in INLINE_CHORD_RE.finditer(line):
        token = try_extract_chord(match.group(1))
        if token is None:
            continue
        lyric = line[pos : match.start()]
        if chord is not None or lyric:
            segments.append(ChordProSegment(chord=chord, lyric=lyric))
        chord = token
        pos = match.end()

    rest = line[pos:]
    if chord is not None or rest or not segments:
        segments.append(ChordProSegment(chord=chord, lyric=rest))
    return ChordProLine(segments=tuple(segments))


def parse_chordpro(text: str) -> ChordProSong:
    """Parse ChordPro text.

    Unsupported directives are logged and dropped; parsing continues.

    Parameters
    ----------
    text : str
        ChordPro source.

    Returns
    -------
    ChordProSong
        The parsed song.
    """
    metadata: dict[str, str] = {}
    capo: int | None = None
    body: list[ChordProItem] = []

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            body.append(ChordProBlank())
            continue

        if stripped.startswith("{") and stripped.endswith("}"):
            try:
                name, value = parse_directive(stripped)
            except InvalidChordProDirective as exc:
                logger.debug("Dropping directive line: %s", exc)
                continue
            if isinstance(value, int):
                capo = value or None
            elif name == "comment":
                body.append(ChordProComment(text=value))
            else:
                metadata[name] = value
            continue

        body.append(parse_line(line))

    return ChordProSong(
        title=metadata.get("title", ""),
        artist=metadata.get("artist", ""),
        capo=capo,
        key=metadata.get("key") or None,
        body=tuple(body),
    )
