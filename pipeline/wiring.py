"""pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load environment variables (including a local ``.env`` file)
- resolve configuration
- choose the comment sink
- build the high-level pipeline facade object
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .config import SizeBotConfig, load_config
from .emit import CommentSink, FileSink, GitHubCommentSink, StdoutSink
from .pipeline import SizeBotPipeline

logger = logging.getLogger(__name__)


SINK_CHOICES = ("stdout", "file", "github")


def load_environment(dotenv_path: Optional[Path] = None) -> None:
    """Load ``.env`` into ``os.environ`` without overriding values already set."""

    p = Path(dotenv_path) if dotenv_path is not None else Path.cwd() / ".env"
    if p.exists():
        load_dotenv(p, override=False)
        logger.debug("Loaded environment from %s", p)


def build_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SizeBotConfig:
    return load_config(config_path=config_path, env=os.environ, overrides=overrides)


def build_sink(kind: str, *, out_path: Optional[Path] = None) -> CommentSink:
    if kind == "stdout":
        return StdoutSink()
    if kind == "file":
        if out_path is None:
            raise ValueError("file sink requires an output path")
        return FileSink(out_path)
    if kind == "github":
        return GitHubCommentSink()
    raise ValueError(f"Unknown sink {kind!r} (expected one of {', '.join(SINK_CHOICES)})")


def build_pipeline() -> SizeBotPipeline:
    return SizeBotPipeline()
