"""pipeline.exports

Tabular export of the full reconciled record set.

The comment only shows the rows that crossed a threshold; these files keep
every record for later inspection. Sentinel ratios are written as the strings
``"new"`` and ``"deleted"`` so the JSON stays strictly valid (no Infinity).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from sizebot.domain import DELETED_RATIO, NEW_FILE_RATIO, ArtifactRecord
from sizebot.io.fs import write_csv_atomic, write_json_atomic


RECORDS_SCHEMA_V1 = "size_records_v1"

RECORD_FIELDS = [
    "path",
    "base_size",
    "head_size",
    "size_change_ratio",
    "base_compressed_size",
    "head_compressed_size",
    "compressed_change_ratio",
]


def _ratio_out(ratio: float) -> Union[float, str]:
    if ratio == NEW_FILE_RATIO:
        return "new"
    if ratio == DELETED_RATIO:
        return "deleted"
    return ratio


def record_to_row(rec: ArtifactRecord) -> Dict[str, Any]:
    return {
        "path": rec.path,
        "base_size": rec.base_size,
        "head_size": rec.head_size,
        "size_change_ratio": _ratio_out(rec.size_change_ratio),
        "base_compressed_size": rec.base_compressed_size,
        "head_compressed_size": rec.head_compressed_size,
        "compressed_change_ratio": _ratio_out(rec.compressed_change_ratio),
    }


def write_record_exports(
    out_dir: Path,
    records: Sequence[ArtifactRecord],
    *,
    base_sha: str,
    head_sha: str,
    out_basename: str = "size_records",
) -> Dict[str, str]:
    """Write ``<out_basename>.csv`` and ``<out_basename>.json`` under *out_dir*."""

    rows: List[Dict[str, Any]] = [record_to_row(r) for r in sorted(records, key=lambda r: r.path)]

    out_csv = Path(out_dir) / f"{out_basename}.csv"
    out_json = Path(out_dir) / f"{out_basename}.json"

    write_csv_atomic(out_csv, rows, fieldnames=RECORD_FIELDS)
    write_json_atomic(
        out_json,
        {
            "schema_version": RECORDS_SCHEMA_V1,
            "base_sha": base_sha,
            "head_sha": head_sha,
            "records": rows,
        },
    )
    return {"out_csv": str(out_csv), "out_json": str(out_json)}
