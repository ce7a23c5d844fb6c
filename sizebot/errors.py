"""sizebot.errors

Exceptions that abort a comparison run.

Stages raise these; only the CLI decides how each one maps to an exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SizeBotError(Exception):
    """Base class for all comparison failures."""


class ConfigError(SizeBotError):
    """Static configuration is missing or invalid."""


class MissingRevisionMetadata(SizeBotError):
    """A build tree has no readable commit marker."""

    def __init__(self, marker: Union[str, Path], reason: str = "") -> None:
        self.marker = Path(marker)
        msg = (
            f"Failed to read build artifacts ({self.marker}). It's possible a build "
            "configuration has changed upstream. Try pulling the latest changes "
            "from the main branch."
        )
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class MissingCriticalArtifact(SizeBotError):
    """An always-critical artifact was not built on either side."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            "Missing expected bundle. If this was an intentional change to the "
            "build configuration, update the always-critical paths accordingly: "
            f"{path}"
        )


class ArtifactReadError(SizeBotError):
    """An artifact exists but could not be read."""

    def __init__(self, path: Union[str, Path], side: Optional[str] = None, reason: str = "") -> None:
        self.path = str(path)
        self.side = side
        where = f" ({side})" if side else ""
        super().__init__(f"Failed to measure artifact{where}: {self.path}" + (f": {reason}" if reason else ""))
