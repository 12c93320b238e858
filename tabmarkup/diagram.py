"""Chord diagram derivation from applicature data.

An applicature variant lists one fret value per string, low E first. A
diagram shows a fixed window of ``WINDOW_ROWS`` frets. Open strings are
drawn at the nut and never move the window: it starts at the nut when
every fretted note fits there, and otherwise at the lowest fretted note.
Notes more than ``WINDOW_ROWS - 1`` frets above the window start are
clipped rather than widening the diagram.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tabmarkup.errors import EmptyChordError, SongFormatError

logger = logging.getLogger(__name__)

STRING_COUNT = 6
WINDOW_ROWS = 6

# Sentinel fret value for a string that is not played
MUTED = -1

MUTED_LABEL = "x"
OPEN_LABEL = "o"
THUMB_LABEL = "T"
FINGER_LABELS = frozenset({"1", "2", "3", "4", THUMB_LABEL})


@dataclass(frozen=True)
class ChordShape:
    """One applicature variant of a chord.

    Parameters
    ----------
    frets : tuple[int, ...]
        Fret per string, low E first; ``MUTED`` for unplayed strings.
    fingers : tuple[int | str, ...] | None
        Per-string finger data as supplied by the source, or None.
    """

    frets: tuple[int, ...]
    fingers: tuple[int | str, ...] | None = None


@dataclass(frozen=True)
class ChordDiagram:
    """Finger-position diagram for one chord variant.

    Parameters
    ----------
    frets : tuple[int, ...]
        The variant the diagram was built from (sentinels normalized).
    min_fret : int | None
        Lowest fretted (non-open) position, None if nothing is fretted.
    max_fret : int | None
        Highest fretted position, None if nothing is fretted.
    window_start : int
        0 (the nut) when ``max_fret`` fits in the first ``WINDOW_ROWS``
        frets, otherwise ``min_fret``.
    first_fret : int
        Fret number shown on the top row of the grid.
    grid : tuple[tuple[bool, ...], ...]
        ``grid[string][row]`` is True when the string is pressed at fret
        ``first_fret + row``.
    finger_labels : tuple[str, ...]
        Per string: "x" muted, "o" open, a source finger label ("1"-"4",
        "T") for a fretted string, or "" when the source gave none.
    """

    frets: tuple[int, ...]
    min_fret: int | None
    max_fret: int | None
    window_start: int
    first_fret: int
    grid: tuple[tuple[bool, ...], ...]
    finger_labels: tuple[str, ...]

    @property
    def clipped(self) -> bool:
        """True when a fretted note lies above the window."""
        return self.max_fret is not None and self.max_fret >= self.first_fret + WINDOW_ROWS

    def fret_rows(self) -> dict[int, tuple[int, ...]]:
        """Return the window as fret number -> per-string 0/1 flags.

        Examples
        --------
        >>> diagram = build_diagram([-1, 3, 2, 0, 1, 0])
        >>> diagram.fret_rows()[2]
        (0, 0, 1, 0, 0, 0)
        """
        return {
            self.first_fret + row: tuple(int(string[row]) for string in self.grid)
            for row in range(WINDOW_ROWS)
        }

    def to_text(self) -> str:
        """Render the diagram as fixed-width text, low E on the left."""
        width = STRING_COUNT * 2 - 1
        header = " ".join(
            label if label in (MUTED_LABEL, OPEN_LABEL) else " " for label in self.finger_labels
        )
        lines = [header.rstrip(), ("=" if self.first_fret == 1 else "-") * width]
        for row in range(WINDOW_ROWS):
            cells = []
            for string, pressed in enumerate(self.grid):
                if pressed[row]:
                    cells.append(self.finger_labels[string] or "*")
                else:
                    cells.append("|")
            line = " ".join(cells)
            if row == 0 and self.first_fret > 1:
                line = f"{line}  {self.first_fret}fr"
            lines.append(line)
        return "\n".join(lines)


def _normalize_fret(value: Any) -> int:
    if value is None:
        return MUTED
    fret = int(value)
    return MUTED if fret < 0 else fret


def finger_label(value: Any) -> str:
    """Map one source finger value to a diagram label.

    Returns "" for "no finger" values (0, "", None) and for values that
    are not a known finger, so labels are never invented.

    Examples
    --------
    >>> finger_label(2)
    '2'
    >>> finger_label(5)
    'T'
    >>> finger_label(0)
    ''
    """
    if value is None:
        return ""
    label = str(value).strip().upper()
    if label == "5":
        return THUMB_LABEL
    if label in FINGER_LABELS:
        return label
    if label not in ("", "0", MUTED_LABEL.upper(), OPEN_LABEL.upper()):
        logger.debug("Ignoring unknown finger value %r", value)
    return ""


def build_diagram(
    positions: Sequence[int | None], fingers: Sequence[int | str | None] | None = None
) -> ChordDiagram:
    """Build the diagram for one applicature variant.

    Parameters
    ----------
    positions : Sequence[int | None]
        Exactly ``STRING_COUNT`` fret values; negative values and None
        mean the string is not played, 0 is an open string.
    fingers : Sequence[int | str | None] | None
        Optional per-string finger data from the source.

    Returns
    -------
    ChordDiagram
        The derived diagram.

    Raises
    ------
    ValueError
        If ``positions`` or ``fingers`` does not have one entry per string.
    EmptyChordError
        If no string is played.

    Examples
    --------
    >>> diagram = build_diagram([0, 2, 2, 1, 0, 0])
    >>> diagram.min_fret, diagram.max_fret, diagram.window_start
    (1, 2, 0)
    >>> diagram.finger_labels
    ('o', '', '', '', 'o', 'o')
    """
    if len(positions) != STRING_COUNT:
        msg = f"Expected {STRING_COUNT} fret positions, got {len(positions)}"
        raise ValueError(msg)
    if fingers is not None and len(fingers) != STRING_COUNT:
        msg = f"Expected {STRING_COUNT} finger values, got {len(fingers)}"
        raise ValueError(msg)

    frets = tuple(_normalize_fret(value) for value in positions)
    played = [fret for fret in frets if fret != MUTED]
    if not played:
        msg = f"Chord variant has no played string: {list(positions)}"
        raise EmptyChordError(msg)

    fretted = [fret for fret in played if fret > 0]
    min_fret = min(fretted) if fretted else None
    max_fret = max(fretted) if fretted else None

    if max_fret is None or max_fret <= WINDOW_ROWS:
        window_start = 0
    else:
        window_start = min_fret
    first_fret = max(1, window_start)

    grid = tuple(
        tuple(fret == first_fret + row for row in range(WINDOW_ROWS)) for fret in frets
    )

    source = [finger_label(value) for value in fingers] if fingers is not None else [""] * STRING_COUNT
    labels = []
    for fret, label in zip(frets, source):
        if fret == MUTED:
            labels.append(MUTED_LABEL)
        elif fret == 0:
            labels.append(OPEN_LABEL)
        else:
            labels.append(label)

    return ChordDiagram(
        frets=frets,
        min_fret=min_fret,
        max_fret=max_fret,
        window_start=window_start,
        first_fret=first_fret,
        grid=grid,
        finger_labels=tuple(labels),
    )


def build_diagrams(shapes: Iterable[ChordShape]) -> list[ChordDiagram | None]:
    """Build one diagram per variant; None marks "no diagram available"."""
    diagrams: list[ChordDiagram | None] = []
    for shape in shapes:
        try:
            diagrams.append(build_diagram(shape.frets, shape.fingers))
        except EmptyChordError as exc:
            logger.debug("No diagram for variant: %s", exc)
            diagrams.append(None)
    return diagrams


def _fret_key(key: Any) -> int | None:
    try:
        return int(key)
    except (TypeError, ValueError):
        return None


def _frets_from_rows(rows: Mapping[Any, Any], fingers: Any) -> list[int]:
    """Fret per string from a ``{fret: per-string flags}`` mapping.

    A string flagged on several frets sounds the highest of them. A string
    flagged nowhere is open, unless its finger value is "x".
    """
    frets = [0] * STRING_COUNT
    for key, flags in rows.items():
        if not isinstance(flags, Sequence) or isinstance(flags, str) or len(flags) != STRING_COUNT:
            msg = f"Fret row {key!r} needs {STRING_COUNT} string flags: {flags!r}"
            raise SongFormatError(msg)
        fret = _fret_key(key)
        for string, flag in enumerate(flags):
            if flag and fret is not None and fret > frets[string]:
                frets[string] = fret

    if isinstance(fingers, Sequence) and not isinstance(fingers, str) and len(fingers) == STRING_COUNT:
        for string, value in enumerate(fingers):
            if frets[string] == 0 and str(value).strip().lower() == MUTED_LABEL:
                frets[string] = MUTED
    return frets


def parse_shape(data: Any, fingers: Any = None) -> ChordShape:
    """Read one applicature variant.

    ``data`` takes one of three forms:

    * ``{"frets": [...], "fingers": [...]}``;
    * a bare list of frets, with ``fingers`` supplying the finger data;
    * a fret-row mapping ``{"1": [0, 0, 0, 0, 1, 0], "2": [...]}`` giving
      per-string pressed flags for each fret, again with ``fingers``
      alongside.

    Examples
    --------
    >>> shape = parse_shape(
    ...     {"1": [0, 0, 0, 0, 1, 0], "2": [0, 0, 1, 1, 0, 0]},
    ...     ["x", "0", "2", "3", "1", "0"],
    ... )
    >>> shape.frets
    (-1, 0, 2, 2, 1, 0)
    """
    if isinstance(data, Mapping):
        if "frets" in data:
            fingers = data.get("fingers", fingers)
            data = data["frets"]
        elif data and all(_fret_key(key) is not None for key in data):
            data = _frets_from_rows(data, fingers)
        else:
            data = None
    if not isinstance(data, Sequence) or isinstance(data, str):
        msg = f"Applicature variant has no fret list: {data!r}"
        raise SongFormatError(msg)
    try:
        frets = tuple(_normalize_fret(value) for value in data)
    except (TypeError, ValueError) as exc:
        msg = f"Applicature frets are not integers: {data!r}"
        raise SongFormatError(msg) from exc
    if len(frets) != STRING_COUNT:
        msg = f"Applicature variant needs {STRING_COUNT} frets, got {len(frets)}"
        raise SongFormatError(msg)
    if fingers is not None and (not isinstance(fingers, Sequence) or isinstance(fingers, str)):
        msg = f"Applicature fingers are not a list: {fingers!r}"
        raise SongFormatError(msg)
    if fingers is not None and len(fingers) != STRING_COUNT:
        msg = f"Applicature variant needs {STRING_COUNT} finger values, got {len(fingers)}"
        raise SongFormatError(msg)
    return ChordShape(frets=frets, fingers=tuple(fingers) if fingers is not None else None)


def parse_applicature(
    data: Mapping[str, Any], fingers_for_strings: Mapping[str, Any] | None = None
) -> dict[str, tuple[ChordShape, ...]]:
    """Read a chord name -> variants table from scraped JSON.

    Parameters
    ----------
    data : Mapping[str, Any]
        Chord name to a list of variants (see :func:`parse_shape`).
    fingers_for_strings : Mapping[str, Any] | None
        Optional chord name to per-variant finger lists, for payloads that
        keep fingers apart from frets.

    Returns
    -------
    dict[str, tuple[ChordShape, ...]]
        Variants per chord name, in source order.

    Raises
    ------
    SongFormatError
        If the table or one of its variants is malformed.
    """
    if not isinstance(data, Mapping):
        msg = f"Applicature must be a mapping, got {type(data).__name__}"
        raise SongFormatError(msg)

    fingers_for_strings = fingers_for_strings or {}
    table: dict[str, tuple[ChordShape, ...]] = {}
    for name, variants in data.items():
        if not isinstance(variants, Sequence) or isinstance(variants, str):
            msg = f"Applicature for {name!r} must be a list of variants"
            raise SongFormatError(msg)
        finger_sets = list(fingers_for_strings.get(name) or [])
        table[name] = tuple(
            parse_shape(variant, finger_sets[i] if i < len(finger_sets) else None)
            for i, variant in enumerate(variants)
        )
    return table
