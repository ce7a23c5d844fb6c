from __future__ import annotations

import argparse

from pipeline.wiring import SINK_CHOICES


def add_compare_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags for the size comparison.

    Every threshold/layout flag defaults to None so that, when omitted, the
    value falls through to SIZEBOT_* environment variables, then the JSON
    config file, then the built-in defaults.
    """

    # Build trees
    parser.add_argument("--base-dir", dest="base_dir", default=None, help="Base build tree (default: base-build).")
    parser.add_argument("--head-dir", dest="head_dir", default=None, help="Head build tree (default: build).")
    parser.add_argument(
        "--extension",
        default=None,
        help="Artifact file extension to compare (default: .js).",
    )
    parser.add_argument(
        "--commit-marker",
        dest="commit_marker",
        default=None,
        help="Name of the one-line commit id file inside each tree (default: COMMIT_SHA).",
    )

    # Classification
    parser.add_argument(
        "--critical-threshold",
        dest="critical_threshold",
        type=float,
        default=None,
        help="Ratio above which a change is critical (default: 0.02).",
    )
    parser.add_argument(
        "--significance-threshold",
        dest="significance_threshold",
        type=float,
        default=None,
        help="Ratio above which a change is listed in the expanded section (default: 0.002).",
    )
    parser.add_argument(
        "--always-critical",
        dest="always_critical_paths",
        default=None,
        help=(
            "Comma-separated artifact paths always shown first in the critical section, "
            "in the given order. Overrides the built-in production bundle list."
        ),
    )

    # Output
    parser.add_argument(
        "--sink",
        choices=list(SINK_CHOICES),
        default="stdout",
        help="Where to deliver the comment (default: stdout).",
    )
    parser.add_argument(
        "--comment-out",
        dest="comment_out",
        default=None,
        help="(--sink file) Path to write the comment to.",
    )
    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        default=".",
        help="Directory for the overflow fallback artifact and record exports (default: current directory).",
    )
    parser.add_argument(
        "--export-records",
        dest="export_records",
        action="store_true",
        help="Also write every reconciled record to size_records.csv/.json under --out-dir.",
    )
    parser.add_argument(
        "--max-message-chars",
        dest="max_message_chars",
        type=int,
        default=None,
        help="Comment size ceiling before falling back to an artifact (default: 65536).",
    )

    # Run control
    parser.add_argument(
        "--changed-files",
        dest="changed_files",
        default=None,
        help=(
            "File listing the paths changed by the pull request, one per line. When every "
            "path is under a skip prefix (default: packages/react-devtools) the run is skipped."
        ),
    )
    parser.add_argument("--workers", type=int, default=None, help="Measurement thread pool size (default: 8).")
    parser.add_argument("--config", default=None, help="Optional JSON config file.")
    parser.add_argument("--env-file", dest="env_file", default=None, help="Optional .env file (default: ./.env).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
