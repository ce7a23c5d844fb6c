from __future__ import annotations

"""cli.commands.compare

Size comparison command.

Reads the two build trees, renders the report and hands it to the selected
sink. Exit codes:

  0 = report emitted, run skipped, or revision metadata missing (warned)
  1 = fatal comparison error (missing critical bundle, unreadable artifact)
  2 = configuration error
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pipeline.pipeline import CompareRequest, Stage
from pipeline.wiring import build_config, build_pipeline, build_sink
from sizebot.errors import ConfigError, MissingRevisionMetadata, SizeBotError

logger = logging.getLogger(__name__)


_OVERRIDE_FLAGS = (
    "base_dir",
    "head_dir",
    "extension",
    "commit_marker",
    "critical_threshold",
    "significance_threshold",
    "always_critical_paths",
    "max_message_chars",
    "workers",
)


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in _OVERRIDE_FLAGS:
        val = getattr(args, name, None)
        if val is not None:
            out[name] = val
    return out


def read_changed_files(path: Optional[str]) -> Optional[List[str]]:
    if not path:
        return None
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read --changed-files {p}: {e}") from e
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def run_compare(args: argparse.Namespace) -> int:
    try:
        cfg = build_config(
            config_path=Path(args.config) if getattr(args, "config", None) else None,
            overrides=_overrides_from_args(args),
        )
        sink = build_sink(
            str(getattr(args, "sink", "stdout")),
            out_path=Path(args.comment_out) if getattr(args, "comment_out", None) else None,
        )
        req = CompareRequest(
            config=cfg,
            out_dir=Path(getattr(args, "out_dir", None) or "."),
            export_records=bool(getattr(args, "export_records", False)),
            changed_files=read_changed_files(getattr(args, "changed_files", None)),
            job_url=cfg.job_url(),
        )
    except (ConfigError, ValueError) as e:
        print(f"❌ Configuration error: {e}")
        return 2

    try:
        result = build_pipeline().compare(req, sink=sink)
    except MissingRevisionMetadata as e:
        logger.warning("%s", e)
        print(f"⚠️ {e}")
        return 0
    except ConfigError as e:
        print(f"❌ Configuration error: {e}")
        return 2
    except SizeBotError as e:
        print(f"❌ Size comparison failed: {e}")
        return 1

    if result.stage is Stage.SKIPPED:
        print("⏭️ Only ignored paths changed; size comparison skipped.")
        return 0

    crit = len(result.classification.critical) if result.classification else 0
    sig = len(result.classification.significant) if result.classification else 0
    print(f"\n✅ Size comparison {result.base_sha}...{result.head_sha}")
    print(f"  artifacts   : {len(result.records)}")
    print(f"  critical    : {crit}")
    print(f"  significant : {sig}")
    if result.emission is not None and result.emission.overflowed:
        print(f"  fallback    : {result.emission.fallback_path}")
    for key in ("out_csv", "out_json"):
        if key in result.exports:
            print(f"  {key:<11} : {result.exports[key]}")
    return 0
