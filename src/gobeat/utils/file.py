"""File utility functions."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file by renaming a sibling temp file over it.

    Readers see either the old content or the new content, never a
    truncated file. The temp file is removed if anything fails before
    the rename.

    Args:
        path: Destination file
        text: Content to write (UTF-8)
        mode: Permission bits for the resulting file
    """
    ensure_directory_exists(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s via %s", path, tmp.name)
