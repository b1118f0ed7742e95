"""Swift colour emitter: Colors.swift in extension or enum containers."""

from __future__ import annotations

from typing import List

from ..conventions import SwiftConventions
from ..conventions.references import bug_warning_block, detect_swift_bugs
from ..models import GeneratedFile
from ..tokens.colors import figma_to_string_hex, figma_to_swift_hex
from .base import EmitContext, Emitter, render_lines
from .formatting import capitalize, to_camel
from .palette import Palette, PrimitiveEntry, SemanticEntry, collect_palette


def hex_color_init(indent: str = "  ") -> List[str]:
    """``Color(hex:)`` initializer block, indented with ``indent``."""

    i1, i2, i3 = indent, indent * 2, indent * 3
    return [
        "// MARK: - Hex Color Init",
        "private extension Color {",
        f"{i1}init(hex: UInt64) {{",
        f"{i2}let hasAlpha = hex > 0xFFFFFF",
        f"{i2}let r, g, b, a: Double",
        f"{i2}if hasAlpha {{",
        f"{i3}r = Double((hex >> 24) & 0xFF) / 255",
        f"{i3}g = Double((hex >> 16) & 0xFF) / 255",
        f"{i3}b = Double((hex >>  8) & 0xFF) / 255",
        f"{i3}a = Double( hex        & 0xFF) / 255",
        f"{i2}}} else {{",
        f"{i3}r = Double((hex >> 16) & 0xFF) / 255",
        f"{i3}g = Double((hex >>  8) & 0xFF) / 255",
        f"{i3}b = Double( hex        & 0xFF) / 255",
        f"{i3}a = 1.0",
        f"{i2}}}",
        f"{i2}self.init(.sRGB, red: r, green: g, blue: b, opacity: a)",
        f"{i1}}}",
        "}",
        "",
    ]


def _dynamic_init(indent: str) -> List[str]:
    i1, i2, i3 = indent, indent * 2, indent * 3
    return [
        "// MARK: - Dynamic Color Init",
        "private extension Color {",
        f"{i1}init(light: Color, dark: Color) {{",
        f"{i2}#if canImport(UIKit)",
        f"{i2}self.init(uiColor: UIColor {{ trait in",
        f"{i3}trait.userInterfaceStyle == .dark ? UIColor(dark) : UIColor(light)",
        f"{i2}}})",
        f"{i2}#else",
        f"{i2}self = light",
        f"{i2}#endif",
        f"{i1}}}",
        "}",
        "",
    ]


def _join(words: List[str], naming_case: str) -> str:
    if naming_case == "snake":
        return "_".join(words)
    return to_camel(words)


def primitive_swift_name(entry: PrimitiveEntry, conventions: SwiftConventions) -> str:
    """``Colour/Grey/750`` -> ``grey750`` (or ``grey_750``)."""
    return _join(entry.words, conventions.naming_case)


def semantic_swift_name(entry: SemanticEntry, conventions: SwiftConventions) -> str:
    return _join(entry.words, conventions.naming_case)


def _keyword(conventions: SwiftConventions) -> str:
    return "var" if conventions.use_computed_var else "let"


def _primitive_literal(entry: PrimitiveEntry, conventions: SwiftConventions) -> str:
    color = entry.color
    if conventions.primitive_format == "stringHex":
        return f'"{figma_to_string_hex(color.components, color.alpha)}"'
    return f"Color(hex: {figma_to_swift_hex(color.components, color.alpha)})"


def _string_hex(entry: PrimitiveEntry) -> str:
    return f'"{figma_to_string_hex(entry.color.components, entry.color.alpha)}"'


def _preamble(context: EmitContext, imports: List[str]) -> List[str]:
    lines = context.header("Colors.swift", "//", "ios-colors-swift")
    reference = context.reference("ios-colors-swift")
    if reference:
        lines.extend(bug_warning_block(detect_swift_bugs(reference), "//"))
    for module in imports:
        lines.append(f"import {module}")
    lines.append("")
    return lines


def _render_extension_style(palette: Palette, context: EmitContext) -> List[str]:
    conventions = context.conventions.swift
    keyword = _keyword(conventions)
    indent = conventions.indent
    lines = _preamble(context, ["SwiftUI"])
    lines.extend(hex_color_init(indent))

    lines.extend(["// MARK: - Primitives", "public extension Color {"])
    for family, entries in palette.families():
        lines.append(f"{indent}// {family}")
        for entry in entries:
            name = primitive_swift_name(entry, conventions)
            lines.append(f"{indent}static {keyword} {name} = Color(hex: {figma_to_swift_hex(entry.color.components, entry.color.alpha)})")
    lines.extend(["}", ""])

    groups = palette.categories()
    if not groups:
        return lines

    lines.extend(_dynamic_init(indent))
    lines.extend(["// MARK: - Semantic Colors", "public extension Color {"])
    for category, entries in groups:
        lines.append(f"{indent}// {capitalize(category)}")
        for entry in entries:
            name = semantic_swift_name(entry, conventions)
            light = primitive_swift_name(entry.light, conventions)
            if entry.is_static:
                lines.append(f"{indent}static {keyword} {name} = Color.{light}")
            else:
                dark = primitive_swift_name(entry.dark, conventions)
                lines.append(f"{indent}static {keyword} {name} = Color(light: .{light}, dark: .{dark})")
    lines.extend(["}", ""])
    return lines


def _api_tier(palette: Palette, conventions: SwiftConventions) -> List[str]:
    """``ColorStyle``-style surface exposing SwiftUI colours over the hex enums."""

    i1 = conventions.indent
    i2 = i1 * 2
    i3 = i1 * 3
    api = conventions.api_enum_name
    prim = conventions.primitive_enum_name
    lines = [
        f"public enum {api} {{",
        f"{i1}static func suiColor(_ light: String, _ dark: String) -> Color {{",
        f"{i2}Color(UIColor {{ trait in",
        f"{i3}trait.userInterfaceStyle == .dark ? colorFromHex(dark) : colorFromHex(light)",
        f"{i2}}})",
        f"{i1}}}",
        "",
        f"{i1}static func colorFromHex(_ hex: String) -> UIColor {{",
        f'{i2}let digits = hex.trimmingCharacters(in: CharacterSet(charactersIn: "#"))',
        f"{i2}var value: UInt64 = 0",
        f"{i2}Scanner(string: digits).scanHexInt64(&value)",
        f"{i2}let hasAlpha = digits.count == 8",
        f"{i2}let r = CGFloat((value >> (hasAlpha ? 24 : 16)) & 0xFF) / 255",
        f"{i2}let g = CGFloat((value >> (hasAlpha ? 16 : 8)) & 0xFF) / 255",
        f"{i2}let b = CGFloat((value >> (hasAlpha ? 8 : 0)) & 0xFF) / 255",
        f"{i2}let a = hasAlpha ? CGFloat(value & 0xFF) / 255 : 1",
        f"{i2}return UIColor(red: r, green: g, blue: b, alpha: a)",
        f"{i1}}}",
        "}",
        "",
        f"public extension {api} {{",
    ]
    for category, entries in palette.categories():
        lines.append(f"{i1}// {capitalize(category)}")
        for entry in entries:
            name = semantic_swift_name(entry, conventions)
            light = primitive_swift_name(entry.light, conventions)
            dark = light if entry.is_static else primitive_swift_name(entry.dark, conventions)
            lines.append(f"{i1}static var {name}: Color = suiColor({prim}.{light}, {prim}.{dark})")
    lines.extend(["}", ""])
    return lines


def _render_enum_style(palette: Palette, context: EmitContext) -> List[str]:
    conventions = context.conventions.swift
    keyword = _keyword(conventions)
    indent = conventions.indent
    lines = _preamble(context, list(conventions.imports) or ["SwiftUI"])
    string_primitives = conventions.primitive_format == "stringHex"
    # Dynamic semantics need Color-typed primitives to reference.
    flat = conventions.semantic_format == "flatLightDark" or string_primitives
    if not string_primitives:
        lines.extend(hex_color_init(indent))
    if not flat:
        lines.extend(_dynamic_init(indent))

    access = f"{conventions.primitive_access} " if conventions.primitive_access else ""
    prim = conventions.primitive_enum_name
    lines.append(f"{access}enum {prim} {{")
    for family, entries in palette.families():
        lines.append(f"{indent}// {family}")
        for entry in entries:
            lines.append(
                f"{indent}static {keyword} {primitive_swift_name(entry, conventions)} = {_primitive_literal(entry, conventions)}"
            )
    lines.extend(["}", ""])

    groups = palette.categories()
    if not groups:
        return lines

    lines.append(f"enum {conventions.semantic_enum_name} {{")
    for category, entries in groups:
        lines.append(f"{indent}// {capitalize(category)}")
        for entry in entries:
            name = semantic_swift_name(entry, conventions)
            if flat:
                if entry.is_static:
                    lines.append(f"{indent}static {keyword} {name} = {_string_hex(entry.light)}")
                else:
                    lines.append(f"{indent}static {keyword} {name}Light = {_string_hex(entry.light)}")
                    lines.append(f"{indent}static {keyword} {name}Dark = {_string_hex(entry.dark)}")
                continue
            light = primitive_swift_name(entry.light, conventions)
            if entry.is_static:
                lines.append(f"{indent}static {keyword} {name} = {prim}.{light}")
            else:
                dark = primitive_swift_name(entry.dark, conventions)
                lines.append(f"{indent}static {keyword} {name} = Color(light: {prim}.{light}, dark: {prim}.{dark})")
    lines.extend(["}", ""])

    if conventions.generate_api_tier:
        lines.extend(_api_tier(palette, conventions))
    return lines


def render_colors_swift(palette: Palette, context: EmitContext) -> str:
    if context.conventions.swift.container_style == "enum":
        return render_lines(_render_enum_style(palette, context))
    return render_lines(_render_extension_style(palette, context))


class SwiftEmitter(Emitter):
    name = "swift"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("ios")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        palette = collect_palette(context.light, context.dark, context.primitives)
        if not palette.primitives:
            return []
        return [GeneratedFile("Colors.swift", render_colors_swift(palette, context), "swift", "ios")]


__all__ = ["SwiftEmitter", "hex_color_init", "primitive_swift_name", "render_colors_swift", "semantic_swift_name"]
