"""Aggregate analysis of generated files against their reference sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import GeneratedFile
from .diff import (
    DiffLine,
    DiffSummary,
    TokenModification,
    compute_diff,
    diff_stats,
    extract_added_tokens,
    extract_deprecations,
    extract_modified_tokens,
)
from .tokens import (
    DependencyEntry,
    FamilyRename,
    ImpactEntry,
    PlatformMismatch,
    RenameEntry,
    TokenCoverage,
    build_dependency_map,
    compute_impact,
    compute_token_coverage,
    detect_family_renames,
    detect_renames,
    validate_cross_platform,
)
from .unused import UnusedTokenResult, detect_unused_tokens

LOGGER = get_logger("analysis")


@dataclass
class AnalysisReport:
    """Everything derived from diffing generated files against references."""

    files: List[GeneratedFile]
    diffs: Dict[str, List[DiffLine]] = field(default_factory=dict)
    added: Dict[str, List[str]] = field(default_factory=dict)
    deprecations: Dict[str, List[str]] = field(default_factory=dict)
    modifications: Dict[str, List[TokenModification]] = field(default_factory=dict)
    renames: Dict[str, List[RenameEntry]] = field(default_factory=dict)
    family_renames: Dict[str, List[FamilyRename]] = field(default_factory=dict)
    coverage: Dict[str, TokenCoverage] = field(default_factory=dict)
    mismatches: List[PlatformMismatch] = field(default_factory=list)
    impacts: List[ImpactEntry] = field(default_factory=list)
    unused: List[UnusedTokenResult] = field(default_factory=list)

    def stats(self, filename: str) -> DiffSummary:
        return diff_stats(self.diffs.get(filename, []), self.modifications.get(filename, []))

    @property
    def has_changes(self) -> bool:
        return any(line.type != "equal" for lines in self.diffs.values() for line in lines)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary (diff lines are reduced to their counts)."""

        return {
            "stats": {
                filename: {
                    "added": summary.added,
                    "removed": summary.removed,
                    "unchanged": summary.unchanged,
                    "modified": summary.modified,
                }
                for filename, summary in ((name, self.stats(name)) for name in self.diffs)
            },
            "added": {name: list(tokens) for name, tokens in self.added.items()},
            "deprecations": {name: list(tokens) for name, tokens in self.deprecations.items()},
            "modifications": {
                name: [{"name": m.name, "old_value": m.old_value, "new_value": m.new_value} for m in mods]
                for name, mods in self.modifications.items()
            },
            "renames": {
                name: [{"old_name": r.old_name, "new_name": r.new_name, "value": r.value} for r in entries]
                for name, entries in self.renames.items()
            },
            "family_renames": {
                name: [
                    {
                        "old_prefix": family.old_prefix,
                        "new_prefix": family.new_prefix,
                        "count": family.count,
                        "members": [list(member) for member in family.members],
                    }
                    for family in families
                ]
                for name, families in self.family_renames.items()
            },
            "coverage": {
                name: {
                    "total": cov.total,
                    "covered": cov.covered,
                    "orphaned": list(cov.orphaned),
                    "unimplemented": list(cov.unimplemented),
                    "coverage_percent": cov.coverage_percent,
                }
                for name, cov in self.coverage.items()
            },
            "mismatches": [
                {
                    "token_name": mismatch.token_name,
                    "values": [
                        {"platform": v.platform, "raw_value": v.raw_value, "normalized_hex": v.normalized_hex}
                        for v in mismatch.values
                    ],
                }
                for mismatch in self.mismatches
            ],
            "impacts": [
                {
                    "primitive_name": impact.primitive_name,
                    "change_type": impact.change_type,
                    "affected_semantics": list(impact.affected_semantics),
                }
                for impact in self.impacts
            ],
            "unused": [
                {
                    "filename": result.filename,
                    "unused_in_figma": list(result.unused_in_figma),
                    "orphaned_primitives": list(result.orphaned_primitives),
                    "total_generated": result.total_generated,
                    "total_reference": result.total_reference,
                }
                for result in self.unused
            ],
        }


def analyze(
    files: Sequence[GeneratedFile],
    light: Optional[Mapping[str, Any]] = None,
    dark: Optional[Mapping[str, Any]] = None,
) -> AnalysisReport:
    """Diff each file that carries ``reference_content`` and derive token changes.

    Cross-platform validation looks at every file. Impact analysis needs the
    normalized ``light`` tree to map primitives to the semantics using them;
    orphan detection also counts primitives only ``dark`` points at.
    """

    diffs = {
        file.filename: compute_diff(file.reference_content, file.content)
        for file in files
        if file.reference_content
    }
    LOGGER.debug("Diffed %d file(s) against references", len(diffs))

    modifications = extract_modified_tokens(diffs)
    deprecations = extract_deprecations(diffs)
    renames = detect_renames(diffs)
    impacts: List[ImpactEntry] = []
    dependencies: Optional[List[DependencyEntry]] = None
    if light is not None:
        light_dependencies = build_dependency_map(light)
        impacts = compute_impact(light_dependencies, modifications, renames, deprecations)
        dependencies = light_dependencies + (build_dependency_map(dark) if dark is not None else [])

    return AnalysisReport(
        files=list(files),
        diffs=diffs,
        added=extract_added_tokens(diffs),
        deprecations=deprecations,
        modifications=modifications,
        renames=renames,
        family_renames=detect_family_renames(renames),
        coverage=compute_token_coverage(files),
        mismatches=validate_cross_platform(files),
        impacts=impacts,
        unused=detect_unused_tokens(files, dependencies),
    )


__all__ = ["AnalysisReport", "analyze"]
