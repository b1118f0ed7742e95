"""Typography.swift: a SwiftUI style struct, or a UIKit/SwiftUI font enum."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ...conventions import SwiftTypography
from ..base import EmitContext, render_lines
from ..formatting import fmt_number
from .parsing import TypographyEntry, TypographyValue, group_entries, resolve_name_from_map

SWIFT_WEIGHTS = {
    100: ".ultraLight",
    200: ".thin",
    300: ".light",
    400: ".regular",
    500: ".medium",
    600: ".semibold",
    700: ".bold",
    800: ".heavy",
    900: ".black",
}

# (minimum font size, Dynamic Type text style), largest first.
_TEXT_STYLES = (
    (34, ".largeTitle"),
    (28, ".title"),
    (22, ".title2"),
    (20, ".title3"),
    (17, ".body"),
    (15, ".subheadline"),
    (13, ".footnote"),
    (12, ".caption"),
)

_DEFAULT_DATA_PROPS = ("fontWeight", "size", "lineHeight")

_DYNAMIC_STEPS = (
    (".extraSmall", "max(minFontSize, standardFontSize + (FontConstants.subtractingRatio * 3))"),
    (".small", "max(minFontSize, standardFontSize + (FontConstants.subtractingRatio * 2))"),
    (".medium", "max(minFontSize, standardFontSize + (FontConstants.subtractingRatio * 1))"),
    (".large", "standardFontSize"),
    (".extraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 1))"),
    (".extraExtraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 1.5))"),
    (".extraExtraExtraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 2))"),
    (".accessibilityMedium", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 3))"),
    (".accessibilityLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 3.5))"),
    (".accessibilityExtraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 4))"),
    (".accessibilityExtraExtraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 4.5))"),
    (".accessibilityExtraExtraExtraLarge", "min(maxFontSize, standardFontSize + (FontConstants.addingRatio * 5))"),
)


def swift_weight(weight: float) -> str:
    return SWIFT_WEIGHTS.get(weight, ".regular")


def swift_text_style(font_size: float) -> str:
    for minimum, style in _TEXT_STYLES:
        if font_size >= minimum:
            return style
    return ".caption2"


def data_struct_args(value: TypographyValue, props: Sequence[str], wrap_fn: Optional[str] = None) -> str:
    def wrap(number: float) -> str:
        return f"{wrap_fn}({fmt_number(number)})" if wrap_fn else fmt_number(number)

    args: List[str] = []
    for prop in props:
        if prop == "fontWeight":
            args.append(f"fontWeight: {swift_weight(value.font_weight)}")
        elif prop in ("size", "fontSize"):
            args.append(f"{prop}: {wrap(value.font_size)}")
        elif prop == "lineHeight":
            args.append(f"lineHeight: {wrap(value.line_height)}")
        elif prop in ("tracking", "letterSpacing"):
            args.append(f"{prop}: {fmt_number(value.letter_spacing)}")
    return ", ".join(args)


def _font_expression(value: TypographyValue) -> str:
    weight = swift_weight(value.font_weight)
    size = fmt_number(value.font_size)
    if value.font_family.lower().startswith("sf pro"):
        return f"Font.system(size: {size}, weight: {weight}, design: .default)"
    return (
        f'Font.custom("{value.font_family}", size: {size}, '
        f"relativeTo: {swift_text_style(value.font_size)}).weight({weight})"
    )


def _struct_style(entries: List[TypographyEntry], conventions: SwiftTypography) -> List[str]:
    type_name = conventions.type_name
    tracking = conventions.includes_tracking
    described = "its tracking and line-spacing values" if tracking else "its line-spacing value"
    lines = [
        "import SwiftUI",
        "",
        "// MARK: - Typography Style",
        f"/// Bundles a SwiftUI Font with {described}.",
        '/// Apply with: Text("…").typography(.bodyR)',
        f"public struct {type_name} {{",
        "  public let font: Font",
    ]
    if tracking:
        lines.extend(['  /// Letter-spacing in points (Figma "letterSpacing" value).', "  public let tracking: CGFloat"])
    lines.extend(["  /// Extra space added between lines: lineHeight − fontSize.", "  public let lineSpacing: CGFloat", ""])
    params = "font: Font, tracking: CGFloat = 0, lineSpacing: CGFloat = 0" if tracking else "font: Font, lineSpacing: CGFloat = 0"
    lines.extend([f"  public init({params}) {{", "    self.font = font"])
    if tracking:
        lines.append("    self.tracking = tracking")
    lines.extend(["    self.lineSpacing = lineSpacing", "  }", "}", ""])

    lines.extend(
        [
            "// MARK: - Typography Modifier",
            "private struct TypographyModifier: ViewModifier {",
            f"  let style: {type_name}",
            "",
            "  func body(content: Content) -> some View {",
            "    content",
            "      .font(style.font)",
        ]
    )
    if tracking:
        lines.append("      .tracking(style.tracking)")
    lines.extend(
        [
            "      .lineSpacing(style.lineSpacing)",
            "  }",
            "}",
            "",
            "public extension View {",
            '  /// Apply a Figma text style. Example: Text("Hello").typography(.bodyR)',
            f"  func typography(_ style: {type_name}) -> some View {{",
            "    modifier(TypographyModifier(style: style))",
            "  }",
            "}",
            "",
            "// MARK: - Typography Tokens",
            "// Note: SF Pro is the iOS system font — Font.system() is correct and preferred.",
            "// relativeTo: maps to a Dynamic Type text style so fonts scale with accessibility settings.",
            "// lineSpacing = Figma lineHeight − fontSize (approximation for SwiftUI lineSpacing).",
            f"public extension {type_name} {{",
        ]
    )

    for label, group in group_entries(entries).items():
        lines.append(f"  // {label}")
        for entry in group:
            value = entry.value
            name = resolve_name_from_map(entry.short_key, conventions.name_map)
            line_spacing = fmt_number(max(0, value.line_height - value.font_size))
            font = _font_expression(value)
            if tracking and value.letter_spacing != 0:
                lines.append(
                    f"  static let {name} = {type_name}(font: {font}, "
                    f"tracking: {fmt_number(value.letter_spacing)}, lineSpacing: {line_spacing})"
                )
            else:
                lines.append(f"  static let {name} = {type_name}(font: {font}, lineSpacing: {line_spacing})")
    lines.extend(["}", ""])
    return lines


def _dynamic_type_method(method: str) -> List[str]:
    lines = [
        "",
        f"    public static func {method}(_ standardFontSize: CGFloat, fmax: CGFloat = .infinity, fmin: CGFloat = 11) -> CGFloat {{",
        "",
        "        var contentSize: UIContentSizeCategory = .large",
        "        if UIAccessibility.isLargerTextEnabled {",
        "            contentSize = UIApplication.shared.preferredContentSizeCategory",
        "        }",
        "",
        "        let minFontSize = standardFontSize < fmin ? standardFontSize : fmin",
        "        let maxFontSize = standardFontSize > fmax ? standardFontSize : fmax",
        "        switch contentSize {",
    ]
    for case, expression in _DYNAMIC_STEPS:
        lines.extend([f"        case {case}:", f"            return {expression}"])
    lines.extend(["        default:", "            return standardFontSize", "        }", "    }"])
    return lines


def _enum_style(entries: List[TypographyEntry], conventions: SwiftTypography) -> List[str]:
    type_name = conventions.type_name
    framework = conventions.ui_framework
    uikit = framework in ("uikit", "both")
    lines: List[str] = []
    if uikit:
        lines.extend(["import Foundation", "import UIKit"])
    if framework in ("swiftui", "both"):
        lines.append("import SwiftUI")
    lines.append("")

    groups = group_entries(entries)
    lines.append(f"public enum {type_name}: String {{")
    for group in groups.values():
        lines.append("")
        lines.extend(f"    case {resolve_name_from_map(entry.short_key, conventions.name_map)}" for entry in group)
    lines.extend(["", "}", ""])

    if conventions.uses_dynamic_type_scaling:
        lines.extend(
            [
                "struct FontConstants {",
                "",
                "    static let addingRatio: CGFloat = 1.5",
                "    static let subtractingRatio: CGFloat = -1.0",
                "",
                "}",
                "",
            ]
        )

    struct_name = conventions.data_struct_name or "FontData"
    props = list(conventions.data_struct_props) or list(_DEFAULT_DATA_PROPS)
    method = conventions.dynamic_type_method_name
    wrap_fn = f"{type_name}.{method}" if conventions.uses_dynamic_type_scaling and method else None

    lines.extend([f"extension {type_name} {{", "", f"    var fontData: {struct_name} {{", "", "        switch self {"])
    for group in groups.values():
        lines.append("")
        for entry in group:
            name = resolve_name_from_map(entry.short_key, conventions.name_map)
            lines.append(f"        case .{name}:")
            lines.append(f"            return {struct_name}({data_struct_args(entry.value, props, wrap_fn)})")
    lines.extend(["", "        }", "", "    }"])
    if conventions.uses_dynamic_type_scaling and method:
        lines.extend(_dynamic_type_method(method))
    lines.extend(["", "}", ""])

    if uikit:
        lines.extend(
            [
                f"extension {type_name} {{",
                "",
                "    public var font: UIFont {",
                "        return UIFont.systemFont(ofSize: fontData.size, weight: fontData.fontWeight)",
                "    }",
            ]
        )
        if framework == "both":
            lines.extend(["", "    public var suiFont: Font {", "        return Font(font)", "    }"])
        lines.extend(["", "}", ""])

    weight_type = "UIFont.Weight" if uikit else "Font.Weight"
    lines.extend([f"public struct {struct_name} {{", ""])
    for prop in props:
        lines.append(f"    let {prop}: {weight_type if prop == 'fontWeight' else 'CGFloat'}")
    lines.extend(["", "}", ""])
    return lines


def render_typography_swift(entries: List[TypographyEntry], context: EmitContext) -> str:
    conventions = context.conventions.typography.swift
    lines = context.header("Typography.swift", "//", "ios-typography-swift")
    if conventions.architecture == "enum":
        lines.extend(_enum_style(entries, conventions))
    else:
        lines.extend(_struct_style(entries, conventions))
    return render_lines(lines)


__all__ = ["SWIFT_WEIGHTS", "data_struct_args", "render_typography_swift", "swift_text_style", "swift_weight"]
