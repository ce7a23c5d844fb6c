"""sizebot.domain.artifact

Artifact measurement and comparison records.

Ratios use two sentinel values instead of a separate status field:

* ``NEW_FILE_RATIO`` (``+inf``): the artifact exists only in the head build.
* ``DELETED_RATIO`` (``-1.0``): the artifact exists only in the base build.

``-1.0`` is also the smallest ratio a real shrink can approach, so sorting by
ratio descending naturally puts new files first and deletions last.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


NEW_FILE_RATIO = math.inf
DELETED_RATIO = -1.0


class Side(str, Enum):
    BASE = "base"
    HEAD = "head"


class MeasurementStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True)
class Measurement:
    """Raw and compressed size of one artifact on one side.

    An ``ABSENT`` measurement is a normal outcome (the artifact was not built
    on that side), not an error. Read failures are raised, never encoded here.
    """

    status: MeasurementStatus
    size: int = 0
    compressed_size: int = 0

    @classmethod
    def present(cls, size: int, compressed_size: int) -> "Measurement":
        return cls(MeasurementStatus.PRESENT, int(size), int(compressed_size))

    @classmethod
    def absent(cls) -> "Measurement":
        return cls(MeasurementStatus.ABSENT)

    @property
    def is_present(self) -> bool:
        return self.status is MeasurementStatus.PRESENT


def change_ratio(base: int, head: int) -> float:
    """Relative change from *base* to *head*.

    A zero base is treated as a new file so the division is always defined.
    """

    if base <= 0:
        return NEW_FILE_RATIO
    return (head - base) / base


def is_sentinel(ratio: float) -> bool:
    return ratio == NEW_FILE_RATIO or ratio == DELETED_RATIO


@dataclass(frozen=True)
class ArtifactRecord:
    path: str
    base_size: int
    head_size: int
    base_compressed_size: int
    head_compressed_size: int
    size_change_ratio: float
    compressed_change_ratio: float

    @property
    def is_new(self) -> bool:
        return self.size_change_ratio == NEW_FILE_RATIO

    @property
    def is_deleted(self) -> bool:
        return self.size_change_ratio == DELETED_RATIO


@dataclass(frozen=True)
class ThresholdConfig:
    """Classification thresholds.

    ``always_critical_paths`` is ordered: those rows are rendered first, in
    exactly this order, on every run.
    """

    critical_threshold: float = 0.02
    significance_threshold: float = 0.002
    always_critical_paths: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store an immutable tuple.
        object.__setattr__(self, "always_critical_paths", tuple(self.always_critical_paths))
