"""Persisted gobeat settings stored as JSON in the user's home directory."""

from __future__ import annotations

import getpass
import logging
import os
import urllib.parse
from pathlib import Path
from typing import Any, Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gobeat.constants import DEFAULT_GAME, SETTINGS_FILE_NAME, SETTINGS_PATH_ENV
from gobeat.errors import InvalidURLError, SettingsFileError, UserLookupError
from gobeat.utils import atomic_write_text

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)


class GobeatSettings(BaseModel):
    """Settings for reporting results.

    Instances are immutable; commands derive updated copies with
    ``model_copy(update=...)`` and hand them to :func:`save_settings`.
    """

    model_config = ConfigDict(frozen=True)

    target_url: str = Field("", description="URL results are posted to; empty when unset")
    user: str = Field("", description="Name reported as the winner")
    game: str = Field("", description="Game being played (e.g. ping pong)")

    @field_validator("target_url", "user", "game", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


def settings_path() -> Path:
    """Return the settings file location.

    ``GOBEAT_SETTINGS`` wins when set; otherwise ``~/.gobeat``.
    """
    env_path = os.environ.get(SETTINGS_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / SETTINGS_FILE_NAME


def current_username() -> str:
    """Look up the name of the user running the process.

    Raises:
        UserLookupError: If the platform cannot report a user name
    """
    try:
        name = getpass.getuser()
    except (OSError, KeyError) as exc:
        raise UserLookupError(f"unable to determine current user: {exc}") from exc
    if not name:
        raise UserLookupError("unable to determine current user")
    return name


def apply_defaults(settings: GobeatSettings) -> GobeatSettings:
    """Fill empty ``user`` and ``game`` fields.

    Applying this twice gives the same result as applying it once.

    Args:
        settings: Settings that may have empty fields

    Returns:
        Settings with ``user`` and ``game`` populated
    """
    update: dict[str, str] = {}
    if not settings.user:
        update["user"] = current_username()
    if not settings.game:
        update["game"] = DEFAULT_GAME
    if not update:
        return settings
    return settings.model_copy(update=update)


def load_settings(path: Path | None = None) -> GobeatSettings:
    """Load settings from disk.

    A missing file is not an error: fresh settings with defaults are
    returned and nothing is written.

    Args:
        path: Settings file (defaults to :func:`settings_path`)

    Returns:
        Settings with defaults applied

    Raises:
        SettingsFileError: If the file is not a valid settings document
        UserLookupError: If the default user cannot be determined
        OSError: If the file exists but cannot be read
    """
    path = path or settings_path()
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No settings at %s, using defaults", path)
        return apply_defaults(GobeatSettings())

    try:
        settings = GobeatSettings.model_validate_json(raw)
    except ValidationError as err:
        logger.debug("Settings validation failed for %s:\n%s", path, err)
        first = err.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        detail = f"{where}: {first['msg']}" if where else first["msg"]
        raise SettingsFileError(f"invalid settings file {path}: {detail}") from err

    logger.debug("Loaded settings from %s", path)
    return apply_defaults(settings)


def save_settings(settings: GobeatSettings, path: Path | None = None) -> GobeatSettings:
    """Write settings to disk atomically.

    Empty ``user`` or ``game`` fields are filled before writing, so the
    file never holds them empty.

    Args:
        settings: Settings to persist
        path: Settings file (defaults to :func:`settings_path`)

    Returns:
        The settings as written
    """
    path = path or settings_path()
    settings = apply_defaults(settings)
    atomic_write_text(path, settings.model_dump_json(indent=2) + "\n")
    logger.debug("Saved settings to %s", path)
    return settings


def resolve_url(settings: GobeatSettings) -> urllib.parse.ParseResult:
    """Parse the configured target URL.

    Only syntax is checked; scheme and reachability are left to the
    actual request.

    Raises:
        InvalidURLError: If ``target_url`` is malformed
    """
    try:
        parsed = urllib.parse.urlparse(settings.target_url)
        # Accessing port validates it
        _ = parsed.port
    except ValueError as exc:
        raise InvalidURLError(f"parse {settings.target_url!r}: {exc}") from exc
    return parsed
