"""Exception classes for gobeat.

Every error a command can hit derives from GobeatError so the CLI can
report it as a single ``Error: <message>`` line. Filesystem failures are
left as plain OSError.
"""

from __future__ import annotations

from typing import Optional


class GobeatError(Exception):
    """Base class for all gobeat errors."""


class ConfigurationError(GobeatError):
    """Raised when the local configuration cannot be used."""


class SettingsFileError(ConfigurationError):
    """Raised when the settings file exists but cannot be parsed."""


class UserLookupError(ConfigurationError):
    """Raised when the current OS user name cannot be determined."""


class InvalidURLError(ConfigurationError):
    """Raised when the configured target is not a parseable URL."""


class UsageError(GobeatError):
    """Raised when a command is invoked with missing arguments."""


class ResultPostError(GobeatError):
    """Error while posting a result to the target server.

    Raised when the server answers with anything other than 200 or 201.
    """

    def __init__(self, code: int, message: str, response_text: str = "") -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code, or 0 when no response was received
            message: Human-readable error message
            response_text: Raw response body for debugging
        """
        super().__init__(message)
        self.code: int = code
        self.message: str = message
        self.response_text: str = response_text

    @classmethod
    def from_status(cls, status_code: int, response_text: str = "") -> ResultPostError:
        """Create an error for an unexpected HTTP status code."""
        return cls(status_code, f"on request: got code {status_code}", response_text)


class NetworkError(ResultPostError):
    """Raised when a network issue prevents reaching the target server."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class EmptyURLError(ResultPostError):
    """Raised when a post is attempted without a destination."""

    def __init__(self) -> None:
        super().__init__(0, "cannot post with empty URL")
