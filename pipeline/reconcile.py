"""pipeline.reconcile

Merge per-side measurements into one :class:`ArtifactRecord` per path.

Rules
-----
* both sides present: ratios are ``(head - base) / base``, computed
  independently for raw and compressed sizes (a zero base counts as new).
* head only: base sizes are 0 and both ratios are ``NEW_FILE_RATIO``.
* base only: head sizes are 0 and both ratios are ``DELETED_RATIO``.
* absent on both sides: no record. That can only happen when a caller asks
  about a path neither locator pass produced.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from sizebot.domain import (
    DELETED_RATIO,
    NEW_FILE_RATIO,
    ArtifactRecord,
    Measurement,
    change_ratio,
)

logger = logging.getLogger(__name__)


def reconcile_one(path: str, base: Measurement, head: Measurement) -> Optional[ArtifactRecord]:
    if base.is_present and head.is_present:
        return ArtifactRecord(
            path=path,
            base_size=base.size,
            head_size=head.size,
            base_compressed_size=base.compressed_size,
            head_compressed_size=head.compressed_size,
            size_change_ratio=change_ratio(base.size, head.size),
            compressed_change_ratio=change_ratio(base.compressed_size, head.compressed_size),
        )
    if head.is_present:
        return ArtifactRecord(
            path=path,
            base_size=0,
            head_size=head.size,
            base_compressed_size=0,
            head_compressed_size=head.compressed_size,
            size_change_ratio=NEW_FILE_RATIO,
            compressed_change_ratio=NEW_FILE_RATIO,
        )
    if base.is_present:
        return ArtifactRecord(
            path=path,
            base_size=base.size,
            head_size=0,
            base_compressed_size=base.compressed_size,
            head_compressed_size=0,
            size_change_ratio=DELETED_RATIO,
            compressed_change_ratio=DELETED_RATIO,
        )
    return None


def reconcile(measurements: Mapping[str, Tuple[Measurement, Measurement]]) -> List[ArtifactRecord]:
    """Return records ordered by path."""

    records: List[ArtifactRecord] = []
    skipped = 0
    for path in sorted(measurements):
        base, head = measurements[path]
        rec = reconcile_one(path, base, head)
        if rec is None:
            skipped += 1
            continue
        records.append(rec)

    if skipped:
        logger.debug("Skipped %d paths absent from both trees", skipped)
    logger.info("Reconciled %d artifact records", len(records))
    return records


def index_by_path(records: List[ArtifactRecord]) -> Dict[str, ArtifactRecord]:
    return {r.path: r for r in records}
