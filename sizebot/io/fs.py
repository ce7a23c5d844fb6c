"""sizebot.io.fs

Writers for the files a run leaves behind for CI to upload: the overflow
message, the record exports and the comment file.

Each writer fills a sibling temp file and renames it over the target, so an
uploader or a rerun never picks up half a report.
"""

from __future__ import annotations

import csv
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence, TextIO


@contextmanager
def _replacing(path: Path, *, newline: str = "") -> Iterator[TextIO]:
    """Yield a UTF-8 handle whose contents replace *path* on a clean exit."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, staged = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}-", suffix=".part")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline=newline) as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staged, target)
    except BaseException:
        Path(staged).unlink(missing_ok=True)
        raise


def write_text_atomic(path: Path, text: str) -> Path:
    with _replacing(path) as f:
        f.write(text)
    return Path(path)


def write_json_atomic(path: Path, data: Any) -> Path:
    """Sorted keys, two-space indent and a trailing newline, so exports diff cleanly."""

    with _replacing(path) as f:
        f.write(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))
        f.write("\n")
    return Path(path)


def write_csv_atomic(path: Path, rows: Sequence[Mapping[str, Any]], *, fieldnames: Sequence[str]) -> Path:
    """Write *rows* under a fixed header; keys outside *fieldnames* are dropped."""

    with _replacing(path) as f:
        writer = csv.DictWriter(f, fieldnames=list(fieldnames), extrasaction="ignore", restval="")
        writer.writeheader()
        writer.writerows(rows)
    return Path(path)
