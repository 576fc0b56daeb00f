from __future__ import annotations


class MantaError(Exception):
    """Base class for errors raised by manta."""


class TerminalError(MantaError):
    """The controlling terminal is missing or cannot be configured."""


class SoundError(MantaError):
    """The audio output could not be initialised or the clip could not be loaded."""


class NotificationError(MantaError):
    """A desktop notification could not be shown."""
