"""Error types raised by tabmarkup.

All errors derive from ``ValueError`` so callers that only care about
"bad input" can catch a single builtin. None of them is fatal to a render
pass: each has a documented fallback at the call site that recovers it.
"""


class TabMarkupError(ValueError):
    """Base class for all tabmarkup errors."""


class MalformedChordError(TabMarkupError):
    """A chord tag interior does not start with a valid root note.

    Renderers recover by passing the tag through as literal text.
    """


class EmptyChordError(TabMarkupError):
    """A chord variant has no playable string, so no diagram can be drawn."""


class InvalidChordProDirective(TabMarkupError):
    """A ChordPro directive line is unknown or carries an unusable value."""


class SongFormatError(TabMarkupError):
    """A scraped song payload is missing required fields or is malformed."""
