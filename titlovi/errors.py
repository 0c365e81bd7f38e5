"""Exception types raised by titlovi.

WHY: Speech recognition output is noisy, so data-quality problems are
repaired in place and never raised. The only errors that surface are
caller mistakes: impossible layout budgets, unknown format names, and
transcription input that cannot be read at all.

RULES:
- Every error subclasses TitloviError and ValueError, so callers that
  already catch ValueError keep working.
"""


class TitloviError(Exception):
    """Base class for all titlovi errors."""


class InvalidLayoutError(TitloviError, ValueError):
    """Raised for a non-positive line/char budget or an unknown aspect ratio."""


class UnknownFormatError(TitloviError, ValueError):
    """Raised when a subtitle format name is not registered."""


class TranscriptionInputError(TitloviError, ValueError):
    """Raised when transcription JSON cannot be parsed or fails validation."""
