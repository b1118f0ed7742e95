"""Diffs, coverage, lint and changelogs for generated token files."""

from __future__ import annotations

from .changelog import render_changelog
from .contrast import (
    ContrastPair,
    ContrastResult,
    ContrastSummary,
    check_contrast,
    detect_pairings,
    extract_semantic_colors,
    validate_palette,
)
from .diff import DiffLine, compute_diff, diff_stats, filter_diff_lines
from .lint import (
    DuplicateGroup,
    LintResult,
    NamingRule,
    custom_rule,
    detect_duplicate_values,
    get_rule_set,
    lint_summary,
    lint_token_names,
)
from .report import AnalysisReport, analyze
from .unused import UnusedTokenResult, detect_unused_tokens, unused_summary

__all__ = [
    "AnalysisReport",
    "ContrastPair",
    "ContrastResult",
    "ContrastSummary",
    "DiffLine",
    "DuplicateGroup",
    "LintResult",
    "NamingRule",
    "UnusedTokenResult",
    "analyze",
    "check_contrast",
    "compute_diff",
    "custom_rule",
    "detect_duplicate_values",
    "detect_pairings",
    "detect_unused_tokens",
    "diff_stats",
    "extract_semantic_colors",
    "filter_diff_lines",
    "get_rule_set",
    "lint_summary",
    "lint_token_names",
    "render_changelog",
    "unused_summary",
    "validate_palette",
]
