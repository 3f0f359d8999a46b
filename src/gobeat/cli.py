"""gobeat command-line interface.

This module provides the ``gobeat`` commands for configuring the result
server and the reporting user, and for posting match results.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer

from gobeat import __version__
from gobeat.errors import GobeatError, UsageError
from gobeat.poster import post_result
from gobeat.settings import (
    GobeatSettings,
    load_settings,
    resolve_url,
    save_settings,
    settings_path,
)

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(
    help="gobeat Tweets scores of game matches from an account configured server-side.",
    add_completion=False,
)

logger: Final = logging.getLogger(__name__)  # Will be "gobeat.cli"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gobeat {__version__}")
        raise typer.Exit()


# Global options
SETTINGS_OPTION = typer.Option(
    None, "--settings", dir_okay=False, help="Settings file (default: ~/.gobeat)"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
VERSION_OPTION = typer.Option(
    False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
)

# Command arguments
URL_ARGUMENT = typer.Argument(None, help="New target URL; omit to show the current one")
USERNAME_ARGUMENT = typer.Argument(None, help="New user name; omit to show the current one")
OPPONENT_ARGUMENT = typer.Argument(None, help="Name of the beaten opponent")
SCORE_ARGUMENT = typer.Argument(None, help="Final score, e.g. 21-15")


@dataclass
class CliState:
    """Where this invocation's settings live.

    Commands load the settings themselves, so help and usage errors never
    touch the settings file.
    """

    path: Path

    def load(self) -> GobeatSettings:
        return load_settings(self.path)


@contextmanager
def _report_errors() -> Iterator[None]:
    """Turn gobeat and filesystem errors into ``Error: ...`` and exit 1."""
    try:
        yield
    except (GobeatError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(
    ctx: typer.Context,
    settings_file: Path | None = SETTINGS_OPTION,
    debug: bool = DEBUG_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    """gobeat Tweets scores of game matches from an account configured server-side."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    ctx.obj = CliState(path=settings_file or settings_path())


# ───────────────────────── commands ──────────────────────────────────────────
@app.command("target")
def target(ctx: typer.Context, url: str | None = URL_ARGUMENT) -> None:
    """Set the URL of the server that gobeat talks to."""
    state: CliState = ctx.obj
    with _report_errors():
        settings = state.load()
        if url is None:
            typer.echo(f"Current target: {settings.target_url}")
            return

        updated = settings.model_copy(update={"target_url": url})
        parsed = resolve_url(updated)
        typer.echo(f"Set target to {parsed.geturl()}")
        save_settings(updated, state.path)


@app.command("user")
def user(ctx: typer.Context, username: str | None = USERNAME_ARGUMENT) -> None:
    """Set the current user."""
    state: CliState = ctx.obj
    with _report_errors():
        settings = state.load()
        if username is None:
            typer.echo(f"Current user: {settings.user}")
            return

        # An empty name falls back to the OS user
        saved = save_settings(settings.model_copy(update={"user": username}), state.path)
        typer.echo(f"Set user to {saved.user}")


@app.command("result")
def result(
    ctx: typer.Context,
    opponent: str | None = OPPONENT_ARGUMENT,
    score: str | None = SCORE_ARGUMENT,
) -> None:
    """Send a result to be tweeted."""
    state: CliState = ctx.obj
    with _report_errors():
        if opponent is None or score is None:
            raise UsageError("missing opponent name and score.")
        settings = state.load()
        destination = resolve_url(settings)
        post_result(settings, destination, opponent, score)
    typer.echo("Successfully posted result. Congratulations!")


# Short aliases
app.command("t", hidden=True)(target)
app.command("u", hidden=True)(user)
app.command("r", hidden=True)(result)


def main() -> None:
    app(prog_name="gobeat")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
