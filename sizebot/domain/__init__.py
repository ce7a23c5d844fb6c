"""sizebot.domain

Canonical data contracts shared by every stage of a size comparison.
"""

from __future__ import annotations

from .artifact import (
    DELETED_RATIO,
    NEW_FILE_RATIO,
    ArtifactRecord,
    Measurement,
    MeasurementStatus,
    Side,
    ThresholdConfig,
    change_ratio,
    is_sentinel,
)

__all__ = [
    "DELETED_RATIO",
    "NEW_FILE_RATIO",
    "ArtifactRecord",
    "Measurement",
    "MeasurementStatus",
    "Side",
    "ThresholdConfig",
    "change_ratio",
    "is_sentinel",
]
