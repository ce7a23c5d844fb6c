"""pipeline.emit

Comment sinks: where the final message goes.

A sink is any callable taking the message text. The pipeline never knows
which one it was given.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from sizebot.io.fs import write_text_atomic
from tools.github.api import post_issue_comment
from tools.github.types import GitHubConfig

logger = logging.getLogger(__name__)


CommentSink = Callable[[str], None]


class StdoutSink:
    def __call__(self, message: str) -> None:
        print(message, end="" if message.endswith("\n") else "\n")


class FileSink:
    """Write the message to *path* (atomically)."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __call__(self, message: str) -> None:
        write_text_atomic(self.path, message)
        logger.info("Wrote comment to %s", self.path)


class GitHubCommentSink:
    """Post the message as a pull-request comment."""

    def __init__(self, cfg: Optional[GitHubConfig] = None) -> None:
        self.cfg = cfg if cfg is not None else GitHubConfig.from_env()

    def __call__(self, message: str) -> None:
        payload = post_issue_comment(self.cfg, message)
        logger.info(
            "Posted comment %s on %s#%d",
            payload.get("id") if isinstance(payload, dict) else "?",
            self.cfg.repository,
            self.cfg.pr_number,
        )
