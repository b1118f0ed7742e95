"""Tests for unused and orphaned token detection."""

from __future__ import annotations

from datetime import date

from tokensmith.analysis import analyze, render_changelog
from tokensmith.analysis.tokens import build_dependency_map
from tokensmith.analysis.unused import detect_unused_tokens, unused_summary
from tokensmith.models import GeneratedFile
from tests._fixtures.tokens import dark_tree, light_tree

GENERATED = "$grey-0: #ffffff;\n$grey-50: #f2f2f2;\n$grey-750: #1d1d1d;\n$red-500: #ff0000;\n"
REFERENCE = "$grey-50: #f2f2f2;\n$grey-900: #000000;\n"


def _files() -> list[GeneratedFile]:
    return [
        GeneratedFile("Primitives.scss", GENERATED, "scss", "web", REFERENCE),
        GeneratedFile("Spacing.scss", "$spacing-4: 4px;\n", "scss", "web"),
    ]


def test_reference_tokens_missing_from_output_are_unused() -> None:
    results = detect_unused_tokens(_files())

    assert len(results) == 1
    assert results[0].filename == "Primitives.scss"
    assert results[0].unused_in_figma == ["grey-900"]
    assert results[0].orphaned_primitives == []
    assert results[0].total_generated == 4
    assert results[0].total_reference == 2


def test_primitives_without_semantic_users_are_orphaned() -> None:
    dependencies = build_dependency_map(light_tree()) + build_dependency_map(dark_tree())

    results = detect_unused_tokens(_files(), dependencies)

    assert results[0].orphaned_primitives == ["red-500"]
    assert unused_summary(results) == {"unused": 1, "orphaned": 1}


def test_dark_only_primitives_need_the_dark_tree() -> None:
    light_only = detect_unused_tokens(_files(), build_dependency_map(light_tree()))

    assert light_only[0].orphaned_primitives == ["grey-0", "red-500"]


def test_flat_string_semantics_are_not_orphans() -> None:
    generated = 'static let grey50 = "#F2F2F2"\nstatic let fillPrimaryLight = "#F2F2F2"\n'
    files = [GeneratedFile("Colors.swift", generated, "swift", "ios", "static let grey50 = 1\n")]

    results = detect_unused_tokens(files, build_dependency_map(light_tree()))

    assert results[0].orphaned_primitives == []


def test_analyze_reports_unused_tokens_and_changelog_lists_them() -> None:
    report = analyze(_files(), light_tree(), dark_tree())

    assert report.unused[0].orphaned_primitives == ["red-500"]
    assert report.to_dict()["unused"][0]["unused_in_figma"] == ["grey-900"]
    text = render_changelog(report, ["web"], day=date(2026, 10, 19))
    assert "### Unused tokens" in text
    assert "- Primitives.scss: 1 not in Figma · 1 orphaned primitives" in text.split("\n")
