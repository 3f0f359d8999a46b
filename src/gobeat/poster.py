"""Posting match results to the target server."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Final, Union

import requests
from requests.exceptions import RequestException

from gobeat.constants import SUCCESS_STATUS_CODES
from gobeat.errors import EmptyURLError, NetworkError, ResultPostError
from gobeat.settings import GobeatSettings

logger: Final = logging.getLogger(__name__)

Destination = Union[str, urllib.parse.ParseResult, None]


def format_result(settings: GobeatSettings, opponent: str, score: str) -> str:
    """Build the plain-text body sent to the server."""
    return f"{settings.user} beat {opponent} at {settings.game} with score {score}"


def _destination_url(destination: Destination) -> str:
    if destination is None:
        return ""
    if isinstance(destination, urllib.parse.ParseResult):
        return destination.geturl()
    return destination


class ResultPoster:
    """Sends a single result to the configured server.

    No retries are attempted. With the default ``timeout`` of None the
    request waits on the transport's own limits.
    """

    def __init__(self, settings: GobeatSettings, timeout: float | None = None) -> None:
        """Initialize the poster.

        Args:
            settings: Settings providing the user and game names
            timeout: Optional timeout for the HTTP request in seconds
        """
        self.settings = settings
        self.timeout = timeout

    def post(self, destination: Destination, opponent: str, score: str) -> None:
        """POST a result to ``destination``.

        Args:
            destination: Target URL, as text or already parsed
            opponent: Name of the beaten opponent
            score: Free-form score string

        Raises:
            EmptyURLError: If no destination is given
            NetworkError: When the server cannot be reached
            ResultPostError: When the server answers with a non-success status
        """
        url = _destination_url(destination)
        if not url:
            raise EmptyURLError()

        body = format_result(self.settings, opponent, score)
        logger.debug("POST %s: %s", url, body)

        try:
            resp = requests.post(url, data=body.encode("utf-8"), timeout=self.timeout)
        except RequestException as exc:
            logger.warning("Result post network error: %s", exc)
            raise NetworkError(str(exc), exc) from exc

        if resp.status_code not in SUCCESS_STATUS_CODES:
            logger.error("Result post failed: HTTP %s from %s", resp.status_code, url)
            raise ResultPostError.from_status(resp.status_code, resp.text)

        logger.debug("Result accepted: HTTP %s", resp.status_code)


def post_result(
    settings: GobeatSettings, destination: Destination, opponent: str, score: str
) -> None:
    """Post a match result using a one-off :class:`ResultPoster`."""
    ResultPoster(settings).post(destination, opponent, score)
