"""Tests for coverage, rename, cross-platform and impact analysis."""

from __future__ import annotations

import pytest

from tokensmith.analysis import analyze
from tokensmith.analysis.diff import DiffLine, TokenModification, compute_diff
from tokensmith.analysis.tokens import (
    RenameEntry,
    build_dependency_map,
    compute_impact,
    compute_token_coverage,
    detect_family_renames,
    detect_renames,
    normalize_hex_value,
    validate_cross_platform,
)
from tokensmith.models import GeneratedFile
from tests._fixtures.tokens import light_tree


def test_coverage_compares_declared_names() -> None:
    files = [
        GeneratedFile("Primitives.scss", "$aa: 1;\n$bb: 2;\n", "scss", "web", "$aa: 1;\n$cc: 3;\n"),
        GeneratedFile("Colors.scss", "$xx: 1;\n", "scss", "web"),
    ]

    coverage = compute_token_coverage(files)

    assert list(coverage) == ["Primitives.scss"]
    entry = coverage["Primitives.scss"]
    assert (entry.total, entry.covered) == (3, 1)
    assert entry.orphaned == ["cc"]
    assert entry.unimplemented == ["bb"]
    assert entry.coverage_percent == pytest.approx(100 / 3)


def test_coverage_of_empty_files_is_complete() -> None:
    coverage = compute_token_coverage([GeneratedFile("Colors.scss", "\n", "scss", "web", "// nothing\n")])

    assert coverage["Colors.scss"].coverage_percent == 100.0


def test_detect_renames_pairs_values_and_skips_zero() -> None:
    diffs = {
        "Colors.scss": [
            DiffLine("remove", "$old-brand: #0066FF;"),
            DiffLine("add", "$new-brand: #0066ff;"),
            DiffLine("remove", "$zero: 0;"),
            DiffLine("add", "$nil: 0;"),
        ]
    }

    renames = detect_renames(diffs)

    assert renames == {"Colors.scss": [RenameEntry("old-brand", "new-brand", "#0066ff")]}


def test_rename_prefers_longest_shared_prefix() -> None:
    diffs = {
        "Primitives.scss": [
            DiffLine("remove", "$grey-old: #111111;"),
            DiffLine("add", "$blue-new: #111111;"),
            DiffLine("add", "$grey-new: #111111;"),
        ]
    }

    assert detect_renames(diffs)["Primitives.scss"][0].new_name == "grey-new"


def test_family_renames_need_three_members() -> None:
    entries = [RenameEntry(f"fuchsia-{step}", f"pink-{step}", f"#0000{step}") for step in (100, 200, 300)]

    families = detect_family_renames({"Primitives.scss": entries})
    too_few = detect_family_renames({"Primitives.scss": entries[:2]})

    family = families["Primitives.scss"][0]
    assert (family.old_prefix, family.new_prefix, family.count) == ("fuchsia", "pink", 3)
    assert too_few == {}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Color(hex: 0x1D1D1D80)", "#1d1d1d"),
        ("Color(0x801D1D1D)", "#1d1d1d"),
        ("'#1D1D1D'", "#1d1d1d"),
        ("#fff", "#ffffff"),
        ("Primitives.grey750", None),
        ("Color(light: .grey50, dark: .grey750)", None),
        ("4px", None),
    ],
)
def test_normalize_hex_value(raw: str, expected: str | None) -> None:
    assert normalize_hex_value(raw) == expected


def test_cross_platform_mismatch_detected_by_normalized_name() -> None:
    files = [
        GeneratedFile("Primitives.scss", "$grey750: #ffffff;\n", "scss", "web"),
        GeneratedFile("Colors.swift", "  static let grey750 = Color(hex: 0x000000)\n", "swift", "ios"),
        GeneratedFile("Color.kt", "    val blue500 = Color(0xFF0066FF)\n", "kotlin", "android"),
    ]

    mismatches = validate_cross_platform(files)

    assert [mismatch.token_name for mismatch in mismatches] == ["grey750"]
    assert {value.platform: value.normalized_hex for value in mismatches[0].values} == {
        "web": "#ffffff",
        "ios": "#000000",
    }


def test_impact_follows_removed_family_to_semantics() -> None:
    dependencies = build_dependency_map(light_tree())

    impacts = compute_impact(dependencies, {}, {}, {"Primitives.scss": ["Grey"]})

    assert [(impact.primitive_name, impact.change_type, impact.affected_semantics) for impact in impacts] == [
        ("Colour/Grey/50", "removed", ["Fill/Standard/Primary"]),
        ("Colour/Grey/750", "removed", ["Text/Primary"]),
    ]


def test_later_change_kinds_win() -> None:
    dependencies = build_dependency_map(light_tree())
    modifications = {"Primitives.scss": [TokenModification("500", "#0066ff", "#0055ee")]}

    impacts = compute_impact(dependencies, modifications, {}, {"Primitives.scss": ["500"]})

    assert [(impact.primitive_name, impact.change_type) for impact in impacts] == [("Colour/Blue/500", "removed")]


def test_analyze_builds_full_report() -> None:
    reference = "$grey-750: #1d1d1d;\n$grey-50: #f2f2f2;\n"
    generated = "$grey-750: #1e1e1e;\n$grey-50: #f2f2f2;\n"
    files = [
        GeneratedFile("Primitives.scss", generated, "scss", "web", reference),
        GeneratedFile("Spacing.scss", "$spacing-4: 4px;\n", "scss", "web"),
    ]

    report = analyze(files, light_tree())

    assert list(report.diffs) == ["Primitives.scss"]
    assert report.has_changes
    assert report.stats("Primitives.scss").modified == 1
    payload = report.to_dict()
    assert payload["stats"]["Primitives.scss"] == {"added": 1, "removed": 1, "unchanged": 1, "modified": 1}
    assert payload["modifications"]["Primitives.scss"][0]["new_value"] == "#1e1e1e"
    assert payload["coverage"]["Primitives.scss"]["coverage_percent"] == 100.0


def test_analyze_without_references_has_no_changes() -> None:
    report = analyze([GeneratedFile("Spacing.scss", "$spacing-4: 4px;\n", "scss", "web")])

    assert report.diffs == {}
    assert not report.has_changes
    assert compute_diff("", "") == []
