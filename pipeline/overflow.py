"""pipeline.overflow

Keep the emitted comment under the platform's size ceiling.

GitHub issue comments are limited to 65536 characters. When the rendered
report is longer, the full text is written to a side artifact and a short
pointer message is emitted instead, so report size alone never fails a run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sizebot.io.fs import write_text_atomic

logger = logging.getLogger(__name__)


GITHUB_COMMENT_MAX_CHARS = 65536
DEFAULT_FALLBACK_FILENAME = "sizebot-message.md"


@dataclass(frozen=True)
class Emission:
    message: str
    fallback_path: Optional[Path] = None

    @property
    def overflowed(self) -> bool:
        return self.fallback_path is not None


def pointer_message(fallback_name: str, job_url: Optional[str] = None) -> str:
    job = f"The [CI job]({job_url})" if job_url else "The CI job"
    return (
        "The size diff is too large to display in a single comment. "
        f"{job} contains an artifact called '{fallback_name}' with the full message."
    )


def handle_overflow(
    text: str,
    *,
    fallback_path: Path,
    max_chars: int = GITHUB_COMMENT_MAX_CHARS,
    job_url: Optional[str] = None,
) -> Emission:
    """Return what to emit for *text*.

    Text of exactly ``max_chars`` characters is emitted unchanged.
    """

    if len(text) <= max_chars:
        return Emission(message=text)

    out = write_text_atomic(Path(fallback_path), text)
    logger.warning(
        "Report is %d characters (limit %d); full text written to %s",
        len(text),
        max_chars,
        out,
    )
    return Emission(message=pointer_message(out.name, job_url), fallback_path=out)
