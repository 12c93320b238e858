"""Pitch class table and chord transposition.

Transposition is index arithmetic modulo 12 over a fixed table of pitch
classes rooted at A. Only note names change: a token's quality is copied
through untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tabmarkup.models import ChordToken

# Pitch classes (0-11, where A=0) as (sharp spelling, flat spelling)
PITCH_CLASSES: tuple[tuple[str, str], ...] = (
    ("A", "A"),
    ("A#", "Bb"),
    ("B", "B"),
    ("C", "C"),
    ("C#", "Db"),
    ("D", "D"),
    ("D#", "Eb"),
    ("E", "E"),
    ("F", "F"),
    ("F#", "Gb"),
    ("G", "G"),
    ("G#", "Ab"),
)

# Note name to pitch class, including the enharmonic spellings scraped
# tabs occasionally use
NOTE_TO_PC: dict[str, int] = {
    "A": 0,
    "A#": 1,
    "Bb": 1,
    "B": 2,
    "Cb": 2,
    "B#": 3,
    "C": 3,
    "C#": 4,
    "Db": 4,
    "D": 5,
    "D#": 6,
    "Eb": 6,
    "E": 7,
    "Fb": 7,
    "E#": 8,
    "F": 8,
    "F#": 9,
    "Gb": 9,
    "G": 10,
    "G#": 11,
    "Ab": 11,
}


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11, where A=0).

    Parameters
    ----------
    note : str
        Note name (e.g., "A", "F#", "Bb").

    Returns
    -------
    int
        Pitch class index into ``PITCH_CLASSES``.

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("A")
    0
    >>> note_to_pc("C")
    3
    >>> note_to_pc("Bb")
    1
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def transpose_note(note: str, semitones: int, prefer_flats: bool | None = None) -> str:
    """Transpose a single note name by a number of semitones.

    Parameters
    ----------
    note : str
        The note to transpose.
    semitones : int
        Number of semitones to transpose (positive = up).
    prefer_flats : bool | None
        Force flat (True) or sharp (False) spelling. None keeps the
        spelling family of the input: flats stay flats, everything else
        is spelled with sharps.

    Returns
    -------
    str
        The transposed note name.

    Examples
    --------
    >>> transpose_note("A", 2)
    'B'
    >>> transpose_note("G", 1)
    'G#'
    >>> transpose_note("Bb", 2)
    'C'
    >>> transpose_note("Eb", 1)
    'E'
    >>> transpose_note("Eb", -1)
    'D'
    >>> transpose_note("Ab", 1)
    'A'
    >>> transpose_note("Db", 5)
    'Gb'
    """
    if prefer_flats is None:
        prefer_flats = note.endswith("b")
    pc = (note_to_pc(note) + semitones) % 12
    sharp, flat = PITCH_CLASSES[pc]
    return flat if prefer_flats else sharp


def transpose_token(
    token: ChordToken, semitones: int, prefer_flats: bool | None = None
) -> ChordToken:
    """Transpose a chord token by a number of semitones.

    Parameters
    ----------
    token : ChordToken
        The chord to transpose.
    semitones : int
        Number of semitones to transpose (positive = up).
    prefer_flats : bool | None
        Spelling preference, see :func:`transpose_note`. When None, the
        root decides the spelling of both root and bass.

    Returns
    -------
    ChordToken
        Transposed chord. ``raw_text`` is set to the new name.

    Examples
    --------
    >>> from tabmarkup.models import ChordToken
    >>> transpose_token(ChordToken(root="C", quality="m7"), 2).name
    'Dm7'
    >>> transpose_token(ChordToken(root="G", quality="", bass="B"), -2).name
    'F/A'
    """
    from tabmarkup.models import ChordToken as ChordTokenModel

    if prefer_flats is None:
        prefer_flats = token.root.endswith("b")

    new_root = transpose_note(token.root, semitones, prefer_flats)
    new_bass = None
    if token.bass:
        new_bass = transpose_note(token.bass, semitones, prefer_flats)

    raw_text = f"{new_root}{token.quality}" + (f"/{new_bass}" if new_bass else "")
    return ChordTokenModel(
        root=new_root, quality=token.quality, bass=new_bass, raw_text=raw_text
    )
