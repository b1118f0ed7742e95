"""Tests for the spacing scale emitter."""

from __future__ import annotations

from typing import Any, Dict

from tokensmith.emitters.spacing import SpacingEmitter, collect_spacing_entries
from tests._fixtures.context import by_name, lines_of, make_context


def test_spacing_entries_come_from_integer_group_sorted_by_value(values: Dict[str, Any]) -> None:
    entries = collect_spacing_entries(values)

    assert [entry.css_var for entry in entries] == [
        "--spacing-neg-4",
        "--spacing-0",
        "--spacing-4",
        "--spacing-50",
        "--spacing-max",
    ]


def test_spacing_ignores_missing_integer_group() -> None:
    assert collect_spacing_entries({"Corner": {}}) == []
    assert SpacingEmitter().emit(make_context(values={})) == []


def test_spacing_scss_pairs_variables_with_custom_properties() -> None:
    files = by_name(SpacingEmitter().emit(make_context()))

    scss = lines_of(files["Spacing.scss"])
    ts = lines_of(files["Spacing.ts"])

    assert "$spacing-4: 4px;" in scss
    assert "$spacing-neg-4: -4px;" in scss
    assert "$spacing-max: 999px;" in scss
    assert "  --spacing-4: #{$spacing-4}; // 4px" in scss
    assert "export const SPACING_4 = '4px' as const;" in ts
    assert "export const SPACING_NEG_4 = '-4px' as const;" in ts
