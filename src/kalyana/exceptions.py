"""Error types shared across kalyana modules.

Every error raised across a module boundary derives from KalyanaError so
the CLI and the UI can catch one family of exceptions.
"""


class KalyanaError(Exception):
    """Base class for kalyana errors."""


class ConfigurationError(KalyanaError):
    """Required runtime configuration is missing or invalid."""


class UpstreamError(KalyanaError):
    """The upstream model API failed or returned a non-success status.

    Attributes:
        status: HTTP status to relay to the caller
        message: Human-readable error message
    """

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(message)


class GatewayFailure(KalyanaError):
    """A gateway call was rejected or did not return a success status."""

    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        super().__init__(f"[{status}] {message}" if status else message)


class SessionError(KalyanaError):
    """An operation was not valid for the current session state."""


class EmptyInput(SessionError):
    """submit() was called with blank text."""


class RequestInFlight(SessionError):
    """An operation was attempted while a gateway request is outstanding."""
