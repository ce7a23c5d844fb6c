"""pipeline.locate

Artifact discovery for one build tree.

Both trees go through :func:`locate_artifacts` with the same extension, so the
matching rule is identical on each side.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Set, Tuple

from sizebot.io.layout import BuildPaths

logger = logging.getLogger(__name__)


def _normalize_extension(extension: str) -> str:
    ext = str(extension or "").strip()
    if not ext:
        raise ValueError("extension must not be empty")
    return ext if ext.startswith(".") else f".{ext}"


def locate_artifacts(tree: Path, extension: str = ".js") -> Set[str]:
    """Return POSIX-style paths (relative to *tree*) of every file ending in *extension*.

    A tree that does not exist yields an empty set; the commit marker check
    is what reports a missing build.
    """

    root = Path(tree)
    ext = _normalize_extension(extension)
    if not root.is_dir():
        logger.debug("Artifact tree %s does not exist", root)
        return set()

    found: Set[str] = set()
    for p in root.rglob(f"*{ext}"):
        if p.is_file():
            found.add(p.relative_to(root).as_posix())

    logger.debug("Located %d %s artifacts under %s", len(found), ext, root)
    return found


def locate_both(paths: BuildPaths, extension: str = ".js") -> Tuple[Set[str], Set[str]]:
    """Return (base_paths, head_paths)."""

    base = locate_artifacts(paths.base_dir, extension)
    head = locate_artifacts(paths.head_dir, extension)
    logger.info("Located %d base and %d head artifacts", len(base), len(head))
    return base, head
