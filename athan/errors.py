# athan/errors.py

class AthanError(Exception):
    """Base class for all errors raised by the prayer-time core."""


class ComputationError(AthanError):
    """
    Raised when a date/coordinate combination has no valid solar solution,
    e.g. the sun never reaches the requested depression angle (polar day or night).
    This is the only failure that should ever reach the user.
    """

    def __init__(self, event, latitude=None, date=None, message=None):
        self.event = event
        self.latitude = latitude
        self.date = date
        if message is None:
            message = f"No solar solution for '{event}'"
            if latitude is not None:
                message += f" at latitude {latitude}"
            if date is not None:
                message += f" on {date}"
        super().__init__(message)


class NetworkError(AthanError):
    """Connectivity failure, non-success HTTP status or malformed body from the remote API."""


class StaleQueryError(AthanError):
    """A remote fetch finished after its caller switched to another location; the caller should discard it."""


class CacheError(AthanError):
    """Read/write failure on the persistent month-times store. Treated as a cache miss."""


class ConfigurationError(AthanError):
    """Malformed stored settings. Logged and repaired with defaults, never surfaced."""
