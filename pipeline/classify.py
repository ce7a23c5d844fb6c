"""pipeline.classify

Split reconciled records into the two report sections.

critical
    Every always-critical path first, in declared order and regardless of
    its change, then every other record whose ratio magnitude exceeds
    ``critical_threshold`` (or is a sentinel), largest ratio first.

significant
    Every record (always-critical ones included) whose ratio magnitude
    exceeds ``significance_threshold`` (or is a sentinel), largest ratio first.

Sorting is stable, so records with equal ratios keep their input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from sizebot.domain import ArtifactRecord, ThresholdConfig, is_sentinel
from sizebot.errors import MissingCriticalArtifact

from .reconcile import index_by_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    critical: Tuple[ArtifactRecord, ...]
    significant: Tuple[ArtifactRecord, ...]


def exceeds(ratio: float, threshold: float) -> bool:
    return is_sentinel(ratio) or abs(ratio) > threshold


def sort_by_ratio_desc(records: Sequence[ArtifactRecord]) -> List[ArtifactRecord]:
    # NEW_FILE_RATIO is +inf so it sorts first; DELETED_RATIO (-1) is the
    # smallest possible ratio so deletions sort last.
    return sorted(records, key=lambda r: r.size_change_ratio, reverse=True)


def classify(records: Sequence[ArtifactRecord], thresholds: ThresholdConfig) -> Classification:
    by_path = index_by_path(list(records))
    pinned = set(thresholds.always_critical_paths)

    critical: List[ArtifactRecord] = []
    for path in thresholds.always_critical_paths:
        rec = by_path.get(path)
        if rec is None:
            raise MissingCriticalArtifact(path)
        critical.append(rec)

    ranked = sort_by_ratio_desc(records)
    significant: List[ArtifactRecord] = []
    for rec in ranked:
        if rec.path not in pinned and exceeds(rec.size_change_ratio, thresholds.critical_threshold):
            critical.append(rec)
        if exceeds(rec.size_change_ratio, thresholds.significance_threshold):
            significant.append(rec)

    logger.info(
        "Classified %d records: %d critical (%d pinned), %d significant",
        len(records),
        len(critical),
        len(thresholds.always_critical_paths),
        len(significant),
    )
    return Classification(critical=tuple(critical), significant=tuple(significant))
