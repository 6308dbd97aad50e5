"""Errors raised while controlling the media player."""


class PlayerError(Exception):
    """Base exception for player control errors.

    `kind` discriminates the failure so callers don't have to match on the
    message text.
    """

    kind = "player"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(PlayerError):
    """Caller passed a disallowed field name or malformed value."""

    kind = "invalid_input"


class InsufficientSelectorError(InvalidInputError):
    """A selection command got no usable name, artist or album."""

    kind = "insufficient_selector"


class NoActiveTrackError(PlayerError):
    """Metadata fetch found nothing playing."""

    kind = "no_active_track"


class BridgeError(PlayerError):
    """osascript reported a failure."""

    kind = "bridge"

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode
