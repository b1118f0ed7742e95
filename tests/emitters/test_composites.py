"""Tests for shadow, border, opacity, radius, gradient and motion emitters."""

from __future__ import annotations

from typing import Any, Dict

from tokensmith.conventions import DetectedConventions, KotlinConventions
from tokensmith.emitters import Emitter
from tokensmith.emitters.border import BorderEmitter
from tokensmith.emitters.gradient import GradientEmitter
from tokensmith.emitters.motion import MotionEmitter, collect_motion_tokens, parse_cubic_bezier, to_milliseconds
from tokensmith.emitters.opacity import OpacityEmitter, collect_opacity_entries, normalize_opacity
from tokensmith.emitters.radius import RadiusEmitter, collect_radius_entries
from tokensmith.emitters.shadow import ShadowEmitter
from tokensmith.models import GeneratedFile
from tests._fixtures.context import by_name, lines_of, make_context
from tests._fixtures.tokens import values_tree

ALL_PLATFORMS = ("web", "ios", "android")


def _files(emitter: Emitter, **kwargs: Any) -> Dict[str, GeneratedFile]:
    return by_name(emitter.emit(make_context(platforms=ALL_PLATFORMS, **kwargs)))


def test_opacity_reads_only_opacity_paths() -> None:
    entries = collect_opacity_entries(values_tree())

    assert [(entry.name, entry.value) for entry in entries] == [("elevation-level1-opacity", 0.5)]
    assert normalize_opacity(0.3) == 0.3


def test_opacity_renders_each_platform() -> None:
    files = _files(OpacityEmitter())

    assert "$elevation-level1-opacity: 0.5;" in lines_of(files["Opacity.scss"])
    assert "  public static let elevationLevel1Opacity: Double = 0.5" in lines_of(files["Opacity.swift"])
    assert "    val elevationLevel1Opacity = 0.5f" in lines_of(files["Opacity.kt"])


def test_shadow_renders_first_layer() -> None:
    files = _files(ShadowEmitter())

    assert "$shadow-elevation-low: 0px 2px 4px 0px #00000033;" in lines_of(files["Shadows.scss"])
    assert (
        "  static let elevationLow = ShadowToken(color: Color(hex: 0x00000033), radius: 4, x: 0, y: 2)"
        in lines_of(files["Shadows.swift"])
    )
    assert (
        "    val ElevationLow = ShadowSpec(elevation = 4.dp, color = Color(0x33000000))"
        in lines_of(files["Shadows.kt"])
    )


def test_border_renders_stroke_specs() -> None:
    files = _files(BorderEmitter())

    assert "$border-border-default: 1px solid #d9d9d9;" in lines_of(files["Borders.scss"])
    assert "    val borderDefault = BorderStroke(1.dp, Color(0xFFD9D9D9))" in lines_of(files["Borders.kt"])
    assert "Borders.swift" in files


def test_radius_collects_corner_values_in_order() -> None:
    entries = collect_radius_entries(values_tree())

    assert [(entry.name, entry.value) for entry in entries] == [("corner-small", 4), ("corner-large", 16)]


def test_radius_renders_each_platform() -> None:
    files = _files(RadiusEmitter())

    assert "$radius-corner-small: 4px;" in lines_of(files["Radius.scss"])
    assert "  --radius-corner-small: #{$radius-corner-small};" in lines_of(files["Radius.scss"])
    assert "  public static let cornerSmall: CGFloat = 4" in lines_of(files["CornerRadius.swift"])
    assert "    val CornerSmall = 4.dp" in lines_of(files["CornerRadius.kt"])


def test_gradient_renders_linear_stops() -> None:
    files = _files(GradientEmitter())

    assert (
        "$gradient-gradient-brand: linear-gradient(180deg, #0066ff 0%, #00ccff 100%);"
        in lines_of(files["_Gradients.scss"])
    )
    assert {"GradientTokens.swift", "GradientTokens.kt"} <= set(files)


def test_motion_durations_and_easings() -> None:
    tokens = collect_motion_tokens(values_tree())

    assert [(entry.name, entry.value_ms) for entry in tokens.durations] == [("motion-duration-fast", 150)]
    assert [entry.cubic_bezier for entry in tokens.easings] == [(0.4, 0.0, 0.2, 1.0)]
    assert len(tokens) == 2


def test_motion_renders_each_platform() -> None:
    files = _files(MotionEmitter())

    scss = lines_of(files["Motion.scss"])
    swift = lines_of(files["MotionTokens.swift"])
    kotlin = lines_of(files["MotionTokens.kt"])

    assert "$duration-motion-duration-fast: 150ms;" in scss
    assert "$easing-motion-easing-standard: cubic-bezier(0.4, 0, 0.2, 1);" in scss
    assert "  public static let durationFast: TimeInterval = 0.15" in swift
    assert "  public static let easingStandard: Animation = .timingCurve(0.4, 0, 0.2, 1)" in swift
    assert "    val DurationFast = 150" in kotlin
    assert "    val EasingStandard = CubicBezierEasing(0.4f, 0f, 0.2f, 1f)" in kotlin


def test_motion_helpers() -> None:
    assert to_milliseconds(0.3) == 300
    assert to_milliseconds(250) == 250
    assert parse_cubic_bezier("ease-in") is None


def test_composites_follow_requested_platforms() -> None:
    files = ShadowEmitter().emit(make_context(platforms=("ios",)))

    assert [file.filename for file in files] == ["Shadows.swift"]
    assert files[0].platform == "ios"


def test_composites_without_entries_emit_nothing() -> None:
    assert ShadowEmitter().emit(make_context(platforms=ALL_PLATFORMS, values={})) == []


def test_kotlin_composites_mark_default_package() -> None:
    default = _files(OpacityEmitter())["Opacity.kt"]
    custom = OpacityEmitter().emit(
        make_context(
            platforms=("android",),
            conventions=DetectedConventions(kotlin=KotlinConventions(kotlin_package="com.acme.ui")),
        )
    )[0]

    assert "package com.example.design // TODO: update to your package name" in lines_of(default)
    assert "package com.acme.ui" in lines_of(custom)
