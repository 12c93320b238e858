"""Scraped song payload.

The scrape collaborator hands over one JSON object per song: the raw tab
body plus metadata and the applicature table. :class:`SongDetail` is the
immutable in-memory form of that object.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tabmarkup.diagram import ChordDiagram, ChordShape, build_diagrams, parse_applicature
from tabmarkup.errors import SongFormatError
from tabmarkup.markup.chord_tag import chord_names


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        msg = f"Song field {key!r} is not an integer: {value!r}"
        raise SongFormatError(msg) from exc


@dataclass(frozen=True)
class SongDetail:
    """One scraped song.

    Parameters
    ----------
    song_name : str
        Song title.
    artist_name : str
        Artist name.
    tab : str
        Raw tab body with ``[ch]``/``[tab]`` markup.
    capo : int | None
        Capo fret, None when not given.
    tuning : str | None
        Tuning as displayed by the source (e.g., "E A D G B E").
    difficulty : str | None
        Difficulty as displayed by the source.
    key : str | None
        Song key (the source's "tonality").
    applicature : dict[str, tuple[ChordShape, ...]]
        Variants per chord name.
    """

    song_name: str
    artist_name: str
    tab: str
    capo: int | None = None
    tuning: str | None = None
    difficulty: str | None = None
    key: str | None = None
    version: int = 1
    type: str = ""
    rating: float = 0.0
    tab_url: str = ""
    applicature: dict[str, tuple[ChordShape, ...]] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SongDetail:
        """Build a song from its scraped JSON object.

        Both the combined ``applicature`` form and the split
        ``chords``/``fingers_for_strings`` form are accepted.

        Raises
        ------
        SongFormatError
            If ``tab`` is missing or a field has the wrong type.
        """
        if not isinstance(data, Mapping):
            msg = f"Song payload must be an object, got {type(data).__name__}"
            raise SongFormatError(msg)

        tab = data.get("tab")
        if not isinstance(tab, str):
            msg = "Song payload has no 'tab' text"
            raise SongFormatError(msg)

        applicature = data.get("applicature")
        if applicature is None:
            applicature = data.get("chords") or {}
        fingers = data.get("fingers_for_strings")

        try:
            rating = float(data.get("rating") or 0.0)
        except (TypeError, ValueError) as exc:
            msg = f"Song field 'rating' is not a number: {data.get('rating')!r}"
            raise SongFormatError(msg) from exc

        return cls(
            song_name=_optional_str(data.get("song_name") or data.get("song")) or "",
            artist_name=_optional_str(data.get("artist_name")) or "",
            tab=tab,
            capo=_optional_int(data, "capo"),
            tuning=_optional_str(data.get("tuning")),
            difficulty=_optional_str(data.get("difficulty")),
            key=_optional_str(data.get("key") or data.get("tonality_name")),
            version=_optional_int(data, "version") or 1,
            type=str(data.get("type") or ""),
            rating=rating,
            tab_url=str(data.get("tab_url") or ""),
            applicature=parse_applicature(applicature, fingers if isinstance(fingers, Mapping) else None),
        )

    def chord_names(self) -> list[str]:
        """Distinct chord names used by the tab, first-seen order."""
        return chord_names(self.tab)

    def diagrams(self, name: str) -> list[ChordDiagram | None]:
        """Diagrams for every variant of ``name``; empty when unknown."""
        return build_diagrams(self.applicature.get(name, ()))
