"""pipeline.pipeline

The size comparison run, end to end, plus a small facade object for callers.

A run moves through these stages and stops at the first failure::

    located -> measured -> reconciled -> classified -> rendered -> emitted

Nothing is handed to the comment sink until the final stage, so a failed run
never produces a partial report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from sizebot.domain import ArtifactRecord, Side
from sizebot.io.layout import read_commit_marker

from .classify import Classification, classify
from .config import SizeBotConfig
from .emit import CommentSink
from .exports import write_record_exports
from .locate import locate_both
from .measure import Measurer, measure_artifact, measure_all
from .overflow import Emission, handle_overflow
from .reconcile import reconcile
from .report.render_md import ReportHeader, render_report_markdown

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    LOCATED = "located"
    MEASURED = "measured"
    RECONCILED = "reconciled"
    CLASSIFIED = "classified"
    RENDERED = "rendered"
    EMITTED = "emitted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CompareRequest:
    config: SizeBotConfig = field(default_factory=SizeBotConfig)

    # where the overflow fallback and record exports are written
    out_dir: Path = Path(".")
    export_records: bool = False

    # files changed by the pull request; None means "unknown, never skip"
    changed_files: Optional[Sequence[str]] = None

    # interpolated into the overflow pointer message only
    job_url: Optional[str] = None


@dataclass(frozen=True)
class CompareResult:
    stage: Stage
    base_sha: str = ""
    head_sha: str = ""
    records: Tuple[ArtifactRecord, ...] = ()
    classification: Optional[Classification] = None
    report: str = ""
    emission: Optional[Emission] = None
    exports: Dict[str, str] = field(default_factory=dict)


def only_ignored_changes(changed_files: Optional[Sequence[str]], prefixes: Sequence[str]) -> bool:
    """True when every changed file lies under one of *prefixes*.

    Unknown or empty change lists never count as ignorable.
    """

    files = [str(f).strip() for f in (changed_files or []) if str(f).strip()]
    if not files or not prefixes:
        return False
    return all(any(f.startswith(p) for p in prefixes) for f in files)


def run_size_comparison(
    req: CompareRequest,
    *,
    sink: CommentSink,
    measurer: Measurer = measure_artifact,
) -> CompareResult:
    """Compare the base and head build trees and emit the report to *sink*.

    Raises
    ------
    MissingRevisionMetadata
        Either tree has no readable commit marker.
    MissingCriticalArtifact
        An always-critical path was built on neither side.
    ArtifactReadError
        An artifact exists but could not be read.
    """

    cfg = req.config
    paths = cfg.build_paths

    head_sha = read_commit_marker(paths.marker(Side.HEAD))
    base_sha = read_commit_marker(paths.marker(Side.BASE))

    if only_ignored_changes(req.changed_files, cfg.skip_if_only_changed):
        logger.info("All changed files are under %s; skipping size comparison", list(cfg.skip_if_only_changed))
        return CompareResult(stage=Stage.SKIPPED, base_sha=base_sha, head_sha=head_sha)

    base_paths, head_paths = locate_both(paths, cfg.extension)
    logger.debug("stage=%s", Stage.LOCATED.value)

    measurements = measure_all(paths, base_paths | head_paths, workers=cfg.workers, measurer=measurer)
    logger.debug("stage=%s", Stage.MEASURED.value)

    records = tuple(reconcile(measurements))
    logger.debug("stage=%s", Stage.RECONCILED.value)

    classification = classify(records, cfg.thresholds)
    logger.debug("stage=%s", Stage.CLASSIFIED.value)

    header = ReportHeader(
        base_sha=base_sha,
        head_sha=head_sha,
        diff_view_url_template=cfg.diff_view_url_template,
    )
    report = render_report_markdown(
        header=header,
        thresholds=cfg.thresholds,
        critical=classification.critical,
        significant=classification.significant,
    )
    logger.debug("stage=%s", Stage.RENDERED.value)

    out_dir = Path(req.out_dir)
    exports: Dict[str, str] = {}
    if req.export_records:
        exports = write_record_exports(out_dir, records, base_sha=base_sha, head_sha=head_sha)

    emission = handle_overflow(
        report,
        fallback_path=out_dir / cfg.fallback_filename,
        max_chars=cfg.max_message_chars,
        job_url=req.job_url,
    )
    sink(emission.message)
    logger.debug("stage=%s", Stage.EMITTED.value)

    return CompareResult(
        stage=Stage.EMITTED,
        base_sha=base_sha,
        head_sha=head_sha,
        records=records,
        classification=classification,
        report=report,
        emission=emission,
        exports=exports,
    )


class SizeBotPipeline:
    """High-level facade over the comparison run.

    Callers should build this via :func:`pipeline.wiring.build_pipeline`
    rather than importing the stage modules directly.
    """

    def __init__(
        self,
        *,
        compare_fn: Callable[..., CompareResult] = run_size_comparison,
        measurer: Measurer = measure_artifact,
    ) -> None:
        self._compare_fn = compare_fn
        self._measurer = measurer

    def compare(self, req: CompareRequest, *, sink: CommentSink) -> CompareResult:
        return self._compare_fn(req, sink=sink, measurer=self._measurer)
