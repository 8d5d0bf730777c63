"""
Exception hierarchy for PreviewKit.

Errors fall into four groups: configuration problems detected before any
frame is processed, sequencing violations of the sprite sheet manager's
state machine, data errors coming from a misbehaving collaborator, and
persistence failures while writing sheets and the cue index.
"""


class PreviewKitError(Exception):
    """Base class for all PreviewKit errors."""


class ConfigurationError(PreviewKitError, ValueError):
    """Invalid configuration (grid shape, tile bound, image format, ...)."""


class InvalidTimeBase(ConfigurationError):
    """A rational time base with a zero or non-integer component."""


class SequencingError(PreviewKitError):
    """An operation was called in a state that does not allow it."""


class AlreadyInitialized(SequencingError):
    """initialize() was called more than once."""


class InvalidState(SequencingError):
    """An operation was called outside of its required manager state."""


class DurationBeforeLastSample(SequencingError):
    """The total duration ends before the last accepted sample."""


class NonMonotonicTimestamp(SequencingError):
    """A sample timestamp precedes the previously accepted sample."""


class SizeMismatch(PreviewKitError):
    """An image does not match the resolved tile size."""


class SheetFull(PreviewKitError):
    """place() was called on a sprite sheet with no free slot."""


class PersistenceError(PreviewKitError):
    """Writing a sprite sheet or the cue index failed."""


class DecodeError(PreviewKitError):
    """The video input could not be opened or yielded no frames."""


class DownloadError(PreviewKitError):
    """A remote video input could not be fetched."""
