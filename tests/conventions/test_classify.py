"""Tests for routing reference files to detector roles."""

from __future__ import annotations

from tokensmith.conventions.classify import (
    classify_kotlin_reference,
    classify_kotlin_typography_reference,
    classify_reference_files,
    classify_web_color_files,
)
from tests._fixtures.references import KOTLIN_MULTI, MIXED_SWIFT_COLORS, SCSS_TYPOGRAPHY, UNDERSCORE_SCSS


def test_web_files_split_into_primitive_and_semantic_roles() -> None:
    roles = classify_web_color_files(
        [
            ("tokens/_Colors.scss", "$fill-primary: var(--fill-primary);"),
            ("tokens/_Base.scss", "$grey-750: #1d1d1d;"),
            ("Primitives.ts", "export const GREY_750 = '#1d1d1d';"),
            ("Colors.ts", "export const FILL_PRIMARY = 'var(--fill-primary)';"),
        ]
    )

    assert roles["web-colors-scss"].startswith("$fill-primary")
    assert roles["web-primitives-scss"].startswith("$grey-750")
    assert roles["web-primitives-ts"].startswith("export const GREY_750")
    assert roles["web-colors-ts"].startswith("export const FILL_PRIMARY")


def test_classify_reference_files_routes_by_extension_and_name() -> None:
    roles, warnings = classify_reference_files(
        [
            ("Primitives.scss", UNDERSCORE_SCSS),
            ("Typography.scss", SCSS_TYPOGRAPHY),
            ("Colors.swift", MIXED_SWIFT_COLORS),
            ("RColors.kt", KOTLIN_MULTI),
            ("TypographyTokens.kt", "object TypographyTokens { val body = TextStyle() }"),
            ("notes.txt", "hello"),
        ]
    )

    assert sorted(roles) == [
        "android-colors-kotlin",
        "android-typography-kotlin",
        "ios-colors-swift",
        "web-primitives-scss",
        "web-typography-scss",
    ]
    assert roles["ios-colors-swift"] == MIXED_SWIFT_COLORS
    assert warnings == ["Unrecognised reference file type: notes.txt"]


def test_kotlin_reference_without_known_pattern_warns() -> None:
    content = "class Theme {\n    val accent = Color(0xFF000000)\n}\n"

    info = classify_kotlin_reference([("Theme.kt", content)])

    assert not info.has_primitives
    assert not info.has_semantics
    assert info.warning is not None
    assert "class RFillColors" in info.warning


def test_kotlin_reference_reports_semantic_categories() -> None:
    info = classify_kotlin_reference([("RColors.kt", KOTLIN_MULTI)])

    assert info.has_semantics
    assert info.semantic_categories == ("fill", "text")
    assert info.warning is None


def test_kotlin_typography_enum_accessor_scope() -> None:
    content = (
        "enum class RTypo {\n"
        "    Body;\n"
        "    val style get() = MaterialTheme.typography.bodyLarge\n"
        "}\n"
    )

    scope = classify_kotlin_typography_reference("RTypo.kt", content)

    assert scope.generate_accessor
    assert not scope.generate_definition
    assert scope.accessor_class_name == "RTypo"
    assert scope.accessor_container_ref == "typography"
    assert scope.accessor_filename == "RTypo.kt"


def test_kotlin_typography_definition_scope() -> None:
    content = "object AppTypography {\n    val body = TextStyle(fontSize = 16.sp)\n}\n"

    scope = classify_kotlin_typography_reference("AppTypography.kt", content)

    assert scope.generate_definition
    assert scope.definition_filename == "AppTypography.kt"
