"""Validation of bare chord symbols with pychord.

A ``[ch]`` tag already says "this is a chord", so tagged names are split
by :func:`tabmarkup.markup.extract_chord` without further checks. A word
in an untagged chord line has no such marker and must be a chord pychord
can build before it is treated as one.
"""

from tabmarkup.models import ChordToken


def from_pychord(symbol: str) -> ChordToken:
    """Build a :class:`ChordToken` from a bare symbol such as ``"F#m7/A"``.

    Raises
    ------
    ValueError
        If pychord cannot build a chord from ``symbol``.

    Examples
    --------
    >>> token = from_pychord("Ebmaj7/G")
    >>> token.root, token.quality, token.bass
    ('Eb', 'maj7', 'G')
    """
    from pychord import Chord as PyChord

    chord = PyChord(symbol)
    return ChordToken(
        root=chord.root,
        quality=str(chord.quality),
        bass=chord.on or None,
        raw_text=symbol,
    )
