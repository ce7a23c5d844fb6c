"""sizebot.io.layout

Filesystem layout of a comparison: two build trees, each carrying a one-line
commit marker file next to its artifacts.

    <base_dir>/COMMIT_SHA
    <base_dir>/**/*.js
    <head_dir>/COMMIT_SHA
    <head_dir>/**/*.js
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from sizebot.domain import Side
from sizebot.errors import MissingRevisionMetadata


DEFAULT_COMMIT_MARKER = "COMMIT_SHA"


@dataclass(frozen=True)
class BuildPaths:
    base_dir: Path
    head_dir: Path
    commit_marker: str = DEFAULT_COMMIT_MARKER

    def tree(self, side: Side) -> Path:
        return self.base_dir if side is Side.BASE else self.head_dir

    def artifact(self, side: Side, rel_path: str) -> Path:
        return self.tree(side) / rel_path

    def marker(self, side: Side) -> Path:
        return self.tree(side) / self.commit_marker


def read_commit_marker(path: Union[str, Path]) -> str:
    """Return the trimmed contents of a commit marker file.

    Raises :class:`MissingRevisionMetadata` when the file is missing,
    unreadable or empty.
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MissingRevisionMetadata(p, reason=type(e).__name__) from e

    sha = text.strip()
    if not sha:
        raise MissingRevisionMetadata(p, reason="empty marker")
    return sha
