"""Console error taxonomy — each maps to an HTTP status and a user-facing message."""


class ConsoleError(Exception):
    """Base class for failures surfaced as ``{success: false, message}``."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationMissing(ConsoleError):
    """No access credential was supplied."""

    status_code = 401
    default_message = "Access token is required"


class AuthenticationInvalid(ConsoleError):
    """The credential was rejected by the Remote File Service or failed verification."""

    status_code = 401
    default_message = "Access token is invalid or expired"


class ValidationFailure(ConsoleError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(ConsoleError):
    """Missing record or file; surfaced as a generic failure."""

    status_code = 500
    default_message = "Resource not found"


class NetworkOrServiceFailure(ConsoleError):
    """Transport error or unexpected response from an upstream service."""

    status_code = 502
    default_message = "Remote service is not reachable"
