"""Tests for typography convention heuristics."""

from __future__ import annotations

from tokensmith.conventions import BEST_PRACTICE_TYPOGRAPHY
from tokensmith.conventions.typography import (
    detect_kotlin_typography,
    detect_scss_typography,
    detect_swift_typography,
    detect_ts_typography,
    detect_typography_conventions,
)
from tests._fixtures.references import SCSS_TYPOGRAPHY, TS_TYPOGRAPHY


def test_scss_typography_prefixes_and_units() -> None:
    scss = detect_scss_typography(SCSS_TYPOGRAPHY)

    assert scss.var_prefix == "$type-"
    assert scss.mixin_prefix == "typo-"
    assert scss.has_mixins
    assert scss.two_tier
    assert scss.size_unit == "rem"
    assert scss.height_unit == "rem"
    assert not scss.has_css_custom_properties
    assert not scss.includes_font_family


def test_ts_typography_naming_and_interface() -> None:
    ts = detect_ts_typography(TS_TYPOGRAPHY)

    assert ts.naming_case == "SCREAMING_SNAKE"
    assert ts.const_prefix == "FONT_"
    assert ts.has_interface
    assert ts.interface_name == "FontToken"
    assert ts.value_format == "number"


def test_swift_enum_typography_with_data_struct() -> None:
    content = (
        "import SwiftUI\n"
        "\n"
        "enum AppFont {\n"
        "    case bodyRegular\n"
        "    case caption\n"
        "    var fontData: FontData { FontData(size: 17, weight: .regular) }\n"
        "}\n"
        "\n"
        "struct FontData {\n"
        "    let size: CGFloat\n"
        "    let weight: Font.Weight\n"
        "}\n"
    )

    swift = detect_swift_typography(content)

    assert swift.architecture == "enum"
    assert swift.type_name == "AppFont"
    assert swift.data_struct_name == "FontData"
    assert swift.data_struct_props == ("size", "weight")
    assert swift.ui_framework == "swiftui"
    assert swift.name_map == {"bodyregular": "bodyRegular", "caption": "caption"}


def test_kotlin_immutable_class_typography() -> None:
    content = (
        "package com.acme.type\n"
        "\n"
        "@Immutable\n"
        "class AppTypography internal constructor(\n"
        "    val body_regular: TextStyle,\n"
        "    val caption_regular: TextStyle,\n"
        ")\n"
    )

    kotlin = detect_kotlin_typography(content)

    assert kotlin.architecture == "class"
    assert kotlin.class_name == "AppTypography"
    assert kotlin.package_name == "com.acme.type"
    assert kotlin.naming_style == "snake_case"
    assert kotlin.is_immutable
    assert kotlin.name_map["body_regular"] == "body_regular"


def test_platforms_without_references_keep_defaults() -> None:
    conventions = detect_typography_conventions({"web-typography-ts": TS_TYPOGRAPHY})

    assert conventions.ts.const_prefix == "FONT_"
    assert conventions.scss == BEST_PRACTICE_TYPOGRAPHY.scss
    assert conventions.kotlin == BEST_PRACTICE_TYPOGRAPHY.kotlin
    assert detect_typography_conventions({}) == BEST_PRACTICE_TYPOGRAPHY
