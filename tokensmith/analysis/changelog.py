"""Markdown changelog rendered from an analysis report."""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional, Sequence, Tuple

from ..rendering import render_template
from .report import AnalysisReport
from .tokens import RenameEntry

PLATFORM_LABELS = {
    "web": "Web (SCSS + TypeScript)",
    "ios": "iOS (Swift)",
    "android": "Android (Kotlin)",
}

# Entries listed per section before collapsing into "+N more".
SECTION_LIMIT = 10


def format_date(day: Date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


def _individual_renames(report: AnalysisReport) -> List[Tuple[str, RenameEntry]]:
    grouped = {
        old_name
        for families in report.family_renames.values()
        for family in families
        for old_name, _new_name in family.members
    }
    return [
        (filename, rename)
        for filename, renames in report.renames.items()
        for rename in renames
        if rename.old_name not in grouped
    ]


def render_changelog(
    report: AnalysisReport,
    platforms: Sequence[str],
    *,
    day: Optional[Date] = None,
) -> str:
    """Return the changelog Markdown, or an empty string when nothing was generated."""

    if not report.files:
        return ""
    text = render_template(
        "changelog.md.j2",
        report=report,
        date=format_date(day or Date.today()),
        platforms=[PLATFORM_LABELS.get(platform, platform) for platform in platforms],
        individual_renames=_individual_renames(report),
        impacts=[impact for impact in report.impacts if impact.affected_semantics],
        unused=[result for result in report.unused if result.unused_in_figma or result.orphaned_primitives],
        line_counts={file.filename: len(file.content.split("\n")) for file in report.files},
        limit=SECTION_LIMIT,
    )
    return text.rstrip("\n") + "\n"


__all__ = ["PLATFORM_LABELS", "SECTION_LIMIT", "format_date", "render_changelog"]
