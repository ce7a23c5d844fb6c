"""pipeline.report.render_md

Markdown rendering for the size comparison comment.

Layout::

    Comparing: <base>...<head>

    ## Critical size changes
    <threshold line>
    <table of critical rows>

    ## Significant size changes
    <threshold line>
    <collapsed table of significant rows, or a placeholder>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import quote

from sizebot.domain import ArtifactRecord, ThresholdConfig

from .format import format_change, format_kilobytes, format_threshold_percent


NO_SIGNIFICANT_CHANGES = "(No significant changes)"

TABLE_HEADER = (
    "| Name | +/- | Base | Current | +/- gzip | Base gzip | Current gzip |\n"
    "| ---- | --- | ---- | ------- | -------- | --------- | ------------ |"
)


@dataclass(frozen=True)
class ReportHeader:
    base_sha: str
    head_sha: str
    # str.format template with {base_sha}, {head_sha} and {path}; empty means no links.
    diff_view_url_template: str = ""

    def diff_view_url(self, path: str) -> Optional[str]:
        """Return the viewer link for ``path``, with the path percent-encoded."""

        if not self.diff_view_url_template:
            return None
        return self.diff_view_url_template.format(
            base_sha=self.base_sha, head_sha=self.head_sha, path=quote(path, safe="/")
        )


def render_row(rec: ArtifactRecord, header: ReportHeader) -> str:
    url = header.diff_view_url(rec.path)
    if url:
        label = rec.path.replace("[", "\\[").replace("]", "\\]")
        name = f"[{label}]({url})"
    else:
        name = f"`{rec.path}`"
    cells = [
        f"| {name}",
        f"**{format_change(rec.size_change_ratio)}**",
        format_kilobytes(rec.base_size),
        format_kilobytes(rec.head_size),
        format_change(rec.compressed_change_ratio),
        format_kilobytes(rec.base_compressed_size),
        format_kilobytes(rec.head_compressed_size),
    ]
    return " | ".join(cells)


def render_report_markdown(
    *,
    header: ReportHeader,
    thresholds: ThresholdConfig,
    critical: Sequence[ArtifactRecord],
    significant: Sequence[ArtifactRecord],
) -> str:
    """Render both sections into one markdown document.

    The output depends only on the arguments, so identical inputs produce
    byte-identical text.
    """

    crit_pct = format_threshold_percent(thresholds.critical_threshold)
    sig_pct = format_threshold_percent(thresholds.significance_threshold)

    lines: List[str] = []
    lines.append(f"Comparing: {header.base_sha}...{header.head_sha}")
    lines.append("")
    lines.append("## Critical size changes")
    lines.append("")
    lines.append(
        f"Includes critical production bundles, as well as any change greater than {crit_pct}:"
    )
    lines.append("")
    lines.append(TABLE_HEADER)
    lines.extend(render_row(r, header) for r in critical)
    lines.append("")
    lines.append("## Significant size changes")
    lines.append("")
    lines.append(f"Includes any change greater than {sig_pct}:")
    lines.append("")

    if significant:
        lines.append("<details>")
        lines.append("<summary>Expand to show</summary>")
        lines.append("")
        lines.append(TABLE_HEADER)
        lines.extend(render_row(r, header) for r in significant)
        lines.append("</details>")
    else:
        lines.append(NO_SIGNIFICANT_CHANGES)

    return "\n".join(lines) + "\n"
