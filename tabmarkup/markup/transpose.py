"""Transposition of raw tab markup."""

from __future__ import annotations

import logging
import re

from tabmarkup.errors import MalformedChordError
from tabmarkup.markup.chord_tag import CH_TAG_RE, extract_chord

logger = logging.getLogger(__name__)


def transpose_markup(
    tab_text: str, semitones: int, prefer_flats: bool | None = None
) -> str:
    """Rewrite every chord tag of a tab, shifted by ``semitones``.

    Parameters
    ----------
    tab_text : str
        Raw tab body with ``[ch]...[/ch]`` markup.
    semitones : int
        Number of semitones to transpose (positive = up).
    prefer_flats : bool | None
        Spelling preference passed to :meth:`ChordToken.transpose`.

    Returns
    -------
    str
        The tab with normalized, transposed chord names inside the tags.
        Malformed tags and all other text are left untouched.

    Examples
    --------
    >>> transpose_markup("[ch]Am/[/ch] [ch]G7/B[/ch]", 2)
    '[ch]Bm[/ch] [ch]A7/C#[/ch]'
    """
    if semitones % 12 == 0 and prefer_flats is None:
        return tab_text

    def replace(match: re.Match[str]) -> str:
        try:
            token = extract_chord(match.group(1))
        except MalformedChordError as exc:
            logger.debug("Leaving chord tag untransposed: %s", exc)
            return match.group(0)
        return f"[ch]{token.transpose(semitones, prefer_flats).name}[/ch]"

    return CH_TAG_RE.sub(replace, tab_text)
