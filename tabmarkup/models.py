"""Chord token model shared by the markup and ChordPro modules.

A token is the root/quality/bass decomposition of one chord name as it
appears inside a ``[ch]...[/ch]`` tag or a ChordPro ``[...]`` marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChordToken:
    """One recognized chord occurrence.

    Parameters
    ----------
    root : str
        The root note (e.g., "C", "F#", "Bb").
    quality : str
        Everything between the root and the bass separator, as written
        (e.g., "m", "7", "maj7"). Empty for a plain major chord. Never
        contains "/".
    bass : str | None
        The bass note of a slash chord, or None.
    raw_text : str
        The text the token was parsed from. Not part of equality.

    Examples
    --------
    >>> token = ChordToken(root="G", quality="7", bass="B")
    >>> token.name
    'G7/B'
    """

    root: str
    quality: str = ""
    bass: str | None = None
    raw_text: str = field(default="", compare=False)

    @property
    def name(self) -> str:
        """Return the normalized chord name (root + quality + optional /bass)."""
        result = f"{self.root}{self.quality}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def transpose(self, semitones: int, prefer_flats: bool | None = None) -> ChordToken:
        """Return a copy shifted by ``semitones``; the quality is unchanged."""
        from tabmarkup.pitch_class import transpose_token

        return transpose_token(self, semitones, prefer_flats=prefer_flats)

    def __str__(self) -> str:
        return self.name
