"""Tests for reference/generated line diffs and token extraction."""

from __future__ import annotations

from tokensmith.analysis.diff import (
    SEPARATOR,
    DiffLine,
    compute_diff,
    diff_stats,
    extract_added_tokens,
    extract_deprecations,
    extract_modified_tokens,
    extract_token_name,
    extract_token_name_value,
    filter_diff_lines,
)


def test_compute_diff_reports_replacements_as_remove_then_add() -> None:
    lines = compute_diff("a\nb\nc\n", "a\nx\nc\n")

    assert lines == [
        DiffLine("equal", "a", 1, 1),
        DiffLine("remove", "b", old_line=2),
        DiffLine("add", "x", new_line=2),
        DiffLine("equal", "c", 3, 3),
    ]
    stats = diff_stats(lines)
    assert (stats.added, stats.removed, stats.unchanged, stats.modified) == (1, 1, 2, 0)


def test_identical_inputs_produce_only_equal_lines() -> None:
    lines = compute_diff("$a: 1;\n", "$a: 1;\n")

    assert [line.type for line in lines] == ["equal"]


def test_filter_diff_lines_inserts_separators_between_windows() -> None:
    old = "\n".join(f"line{index}" for index in range(10))
    new = old.replace("line1", "changed1").replace("line8", "changed8")

    filtered = filter_diff_lines(compute_diff(old, new), context=1)

    assert filtered[4] == SEPARATOR
    assert filtered.count(SEPARATOR) == 1
    assert [line.text for line in filtered[:4]] == ["line0", "line1", "changed1", "line2"]
    assert [line.text for line in filtered[5:]] == ["line7", "line8", "changed8", "line9"]


def test_extract_token_name_value_understands_each_platform() -> None:
    assert extract_token_name_value("$grey-750: #1d1d1d;") == ("grey-750", "#1d1d1d")
    assert extract_token_name_value("    --fill-primary: var(--grey-50);") == ("fill-primary", "var(--grey-50)")
    assert extract_token_name_value("export const GREY_750 = '#1d1d1d';") == ("GREY_750", "#1d1d1d")
    assert extract_token_name_value("  static let grey750 = Color(hex: 0x1D1D1D)") == (
        "grey750",
        "Color(hex: 0x1D1D1D)",
    )
    assert extract_token_name_value("    val grey750 = Color(0xFF1D1D1D)") == ("grey750", "Color(0xFF1D1D1D)")
    assert extract_token_name_value("// grey") is None
    assert extract_token_name("export const GREY_750: string = '#1d1d1d';") == "GREY_750"


def test_token_level_changes_are_split_by_kind() -> None:
    reference = "$grey-750: #1d1d1d;\n$grey-900: #000000;\n$grey-50: #f2f2f2;\n"
    generated = "$grey-750: #1e1e1e;\n$grey-50: #f2f2f2;\n$blue-500: #0066ff;\n"
    diffs = {"Primitives.scss": compute_diff(reference, generated)}

    modified = extract_modified_tokens(diffs)
    added = extract_added_tokens(diffs)
    removed = extract_deprecations(diffs)

    assert [(m.name, m.old_value, m.new_value) for m in modified["Primitives.scss"]] == [
        ("grey-750", "#1d1d1d", "#1e1e1e")
    ]
    assert added == {"Primitives.scss": ["blue-500"]}
    assert removed == {"Primitives.scss": ["grey-900"]}
