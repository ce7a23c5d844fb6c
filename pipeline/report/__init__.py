"""pipeline.report

Formatting and markdown rendering for size comparison reports.

This package contains formatting logic only (no file I/O).
"""

from __future__ import annotations

from .format import format_change, format_kilobytes, format_threshold_percent
from .render_md import ReportHeader, render_report_markdown, render_row

__all__ = [
    "ReportHeader",
    "format_change",
    "format_kilobytes",
    "format_threshold_percent",
    "render_report_markdown",
    "render_row",
]
