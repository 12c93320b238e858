"""Line-level structure of a scraped tab body.

Every column in these models is a column of the *display* text: the line
as a reader sees it, with each ``[ch]...[/ch]`` tag replaced by the chord
name it shows. Chord lines and lyric lines are aligned on those columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from tabmarkup.models import ChordToken


TokenKind = Literal["chord", "word", "punct", "other"]


@dataclass(frozen=True)
class Token:
    """A whitespace-delimited run of display text.

    Parameters
    ----------
    text : str
        The run as displayed (a chord tag shows its normalized name).
    start, end : int
        Display columns, end exclusive.
    kind : TokenKind
        "chord" for tagged chords and for bare words pychord accepts.
    chord : ChordToken | None
        The chord when ``kind`` is "chord".
    tagged : bool
        Whether the chord came from a ``[ch]`` tag. Only tagged chords are
        trusted inside lyric lines.

    Examples
    --------
    >>> Token(text="G7/B", start=4, end=8, kind="chord", tagged=True).end
    8
    """

    text: str
    start: int
    end: int
    kind: TokenKind
    chord: ChordToken | None = None
    tagged: bool = False


@dataclass(frozen=True)
class Block:
    """A chord line and the lyric line under it, padded to one width."""

    chord_raw: str
    lyric_raw: str
    width: int
    chord_tokens: tuple[Token, ...]
    lyric_tokens: tuple[Token, ...]


@dataclass(frozen=True)
class ChordLine:
    """Chords with nothing to sit on, such as an intro riff."""

    raw: str
    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class LyricLine:
    """Text, possibly with tagged chords inside it."""

    raw: str
    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class EmptyLine:
    pass


@dataclass(frozen=True)
class CommentLine:
    """A parenthesized instruction such as "(repeat 2x)"."""

    raw: str


Item = Block | ChordLine | LyricLine | EmptyLine | CommentLine


@dataclass(frozen=True)
class Section:
    # name is None for the lines above the first [Header]
    name: str | None
    items: tuple[Item, ...]


@dataclass(frozen=True)
class TabSheet:
    sections: tuple[Section, ...]
    raw: str
