"""Command-line front end over scraped song JSON files.

Usage:
    tabmarkup html SONG.json
    tabmarkup chordpro SONG.json [--transpose N] [--flats | --sharps]
    tabmarkup diagram SONG.json [--chord NAME]
    tabmarkup transpose SONG.json N [--flats | --sharps]

Use ``-`` as SONG.json to read from stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from tabmarkup.errors import SongFormatError
from tabmarkup.markup import render_html, to_chordpro, transpose_markup, try_extract_chord
from tabmarkup.song import SongDetail

logger = logging.getLogger(__name__)

NO_DIAGRAM = "(no diagram available)"


def load_song(path: str) -> SongDetail:
    """Load a song from a JSON file, or stdin when ``path`` is "-".

    Raises
    ------
    SongFormatError
        If the file is not UTF-8 JSON or not a song payload.
    """
    try:
        text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path}: not valid UTF-8 ({exc})"
        raise SongFormatError(msg) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{path}: not valid JSON ({exc})"
        raise SongFormatError(msg) from exc
    return SongDetail.from_dict(data)


def transpose_song(song: SongDetail, semitones: int, prefer_flats: bool | None) -> SongDetail:
    """Transpose a song's tab and key; the applicature is left as is."""
    if semitones == 0 and prefer_flats is None:
        return song
    key = song.key
    token = try_extract_chord(key) if key else None
    if token is not None:
        key = token.transpose(semitones, prefer_flats).name
    return replace(song, tab=transpose_markup(song.tab, semitones, prefer_flats), key=key)


def render_diagrams(song: SongDetail, chord: str | None = None) -> str:
    """Render text diagrams for one chord or every chord of the song."""
    names = [chord] if chord else song.chord_names()
    blocks: list[str] = []
    for name in names:
        diagrams = song.diagrams(name)
        if not diagrams:
            blocks.append(f"{name}\n{NO_DIAGRAM}")
            continue
        for i, diagram in enumerate(diagrams, 1):
            body = diagram.to_text() if diagram is not None else NO_DIAGRAM
            blocks.append(f"{name} ({i}/{len(diagrams)})\n{body}")
    return "\n\n".join(blocks) + "\n" if blocks else ""


def _spelling(args: argparse.Namespace) -> bool | None:
    if args.flats:
        return True
    if args.sharps:
        return False
    return None


def _add_spelling_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--flats", action="store_true", help="Spell transposed notes with flats")
    group.add_argument("--sharps", action="store_true", help="Spell transposed notes with sharps")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tabmarkup",
        description="Render scraped guitar tabs as HTML, ChordPro or chord diagrams",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log recovered errors")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write output to this file instead of stdout",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    html_parser = subparsers.add_parser("html", help="Render the tab as HTML")
    html_parser.add_argument("song", help="Song JSON file, or - for stdin")

    chordpro_parser = subparsers.add_parser("chordpro", help="Export the song as ChordPro")
    chordpro_parser.add_argument("song", help="Song JSON file, or - for stdin")
    chordpro_parser.add_argument(
        "--transpose", type=int, default=0, help="Semitones to transpose (default: 0)"
    )
    _add_spelling_options(chordpro_parser)

    diagram_parser = subparsers.add_parser("diagram", help="Print chord diagrams")
    diagram_parser.add_argument("song", help="Song JSON file, or - for stdin")
    diagram_parser.add_argument("--chord", default=None, help="Only this chord name")

    transpose_parser = subparsers.add_parser("transpose", help="Transpose the raw tab markup")
    transpose_parser.add_argument("song", help="Song JSON file, or - for stdin")
    transpose_parser.add_argument("semitones", type=int, help="Semitones to transpose")
    _add_spelling_options(transpose_parser)

    return parser


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return its output text."""
    song = load_song(args.song)

    if args.command == "html":
        return render_html(song.tab) + "\n"
    if args.command == "chordpro":
        return to_chordpro(transpose_song(song, args.transpose, _spelling(args)))
    if args.command == "diagram":
        return render_diagrams(song, args.chord)
    if args.command == "transpose":
        tab = transpose_markup(song.tab, args.semitones, _spelling(args))
        return tab if tab.endswith("\n") else tab + "\n"

    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = run(args)
    except (OSError, SongFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.output is not None:
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
