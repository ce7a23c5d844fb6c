"""pipeline.report.format

Pure number formatters. Precision and units are parameters, never module state.
"""

from __future__ import annotations

from sizebot.domain import DELETED_RATIO, NEW_FILE_RATIO


# Display rounding only. Inclusion in the report is decided by the thresholds
# in ThresholdConfig, not by this value.
EQUALITY_EPSILON = 0.0001


def format_kilobytes(num_bytes: int, *, digits: int = 2, unit: str = "kB") -> str:
    """``1234`` -> ``"1.23 kB"`` (decimal kilobytes, thousands separated)."""

    return f"{num_bytes / 1000:,.{digits}f} {unit}"


def format_percent(ratio: float, *, digits: int = 2) -> str:
    """``0.05`` -> ``"+5.00%"``; negative values keep their minus sign."""

    return f"{ratio * 100:+,.{digits}f}%"


def format_change(
    ratio: float,
    *,
    digits: int = 2,
    epsilon: float = EQUALITY_EPSILON,
) -> str:
    if ratio == NEW_FILE_RATIO:
        return "New file"
    if ratio == DELETED_RATIO:
        return "Deleted"
    if abs(ratio) < epsilon:
        return "="
    return format_percent(ratio, digits=digits)


def format_threshold_percent(threshold: float) -> str:
    """``0.02`` -> ``"2%"``, ``0.002`` -> ``"0.2%"``."""

    # round() drops float noise such as 0.2000000000000004.
    return f"{round(threshold * 100, 10):g}%"
