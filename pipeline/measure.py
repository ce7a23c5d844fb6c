"""pipeline.measure

Per-artifact size measurement.

Each artifact/side pair yields exactly one of three outcomes:

* present: ``Measurement.present(size, compressed_size)``
* absent:  ``Measurement.absent()``; the file is not in that tree
* failure: :class:`~sizebot.errors.ArtifactReadError` is raised

Only "no such file" means absent; any other stat or read failure on the path is
raised.

Measurements have no cross-artifact dependency, so :func:`measure_all` fans
them out over a bounded thread pool and collects the results into a mapping
keyed by path.
"""

from __future__ import annotations

import gzip
import logging
import stat
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, Tuple

from sizebot.domain import Measurement, Side
from sizebot.errors import ArtifactReadError
from sizebot.io.layout import BuildPaths

logger = logging.getLogger(__name__)


DEFAULT_WORKERS = 8

# zlib maximum.
GZIP_LEVEL = 9


def compressed_size(data: bytes, *, level: int = GZIP_LEVEL) -> int:
    """Size in bytes of *data* after gzip compression."""

    return len(gzip.compress(data, compresslevel=level, mtime=0))


def measure_file(path: Path, *, side: Side = Side.HEAD) -> Measurement:
    p = Path(path)
    try:
        st = p.stat()
    except (FileNotFoundError, NotADirectoryError):
        return Measurement.absent()
    except OSError as e:
        raise ArtifactReadError(p, side.value, str(e)) from e
    if not stat.S_ISREG(st.st_mode):
        return Measurement.absent()

    try:
        data = p.read_bytes()
    except OSError as e:
        raise ArtifactReadError(p, side.value, str(e)) from e

    return Measurement.present(len(data), compressed_size(data))


Measurer = Callable[[Path, Side], Measurement]


def measure_artifact(path: Path, side: Side) -> Measurement:
    return measure_file(path, side=side)


def measure_all(
    paths: BuildPaths,
    rel_paths: Iterable[str],
    *,
    workers: int = DEFAULT_WORKERS,
    measurer: Measurer = measure_artifact,
) -> Dict[str, Tuple[Measurement, Measurement]]:
    """Measure every path on both sides.

    Returns ``{rel_path: (base_measurement, head_measurement)}``. The first
    :class:`ArtifactReadError` raised by any worker propagates to the caller.
    """

    ordered = sorted(set(rel_paths))
    if workers < 1:
        raise ValueError(f"workers must be >= 1 (got {workers})")

    def _one(rel: str) -> Tuple[str, Tuple[Measurement, Measurement]]:
        base = measurer(paths.artifact(Side.BASE, rel), Side.BASE)
        head = measurer(paths.artifact(Side.HEAD, rel), Side.HEAD)
        return rel, (base, head)

    out: Dict[str, Tuple[Measurement, Measurement]] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in submission order and re-raises worker exceptions.
        for rel, pair in executor.map(_one, ordered):
            out[rel] = pair

    logger.info("Measured %d artifacts with %d workers", len(out), workers)
    return out
