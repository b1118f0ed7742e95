"""Border tokens from ``border`` leaves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from ..tokens.colors import figma_to_kotlin_hex, figma_to_swift_hex
from ..tokens.nodes import BorderNode, ColorValue
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, css_root_block, kotlin_package_line
from .formatting import extract_numeric_key, fmt_number, path_to_kebab, to_camel
from .swift import hex_color_init


@dataclass(frozen=True)
class BorderEntry:
    name: str
    width: float
    style: str
    color: ColorValue
    sort_key: int


def collect_border_entries(tree: Any) -> List[BorderEntry]:
    entries: List[BorderEntry] = []
    for path, node in iter_tokens(tree):
        if not isinstance(node, BorderNode) or node.color is None:
            continue
        sort_key = extract_numeric_key(path[-1]) if path else 0
        entries.append(BorderEntry(path_to_kebab(path), node.width, node.style, node.color, sort_key))
    return sorted(entries, key=lambda entry: (entry.sort_key, entry.name))


class BorderEmitter(CompositeEmitter[BorderEntry]):
    name = "border"
    scss_filename = "Borders.scss"
    swift_filename = "Borders.swift"
    kotlin_filename = "Borders.kt"

    def collect(self, tree: Any) -> List[BorderEntry]:
        return collect_border_entries(tree)

    def render_scss(self, entries: List[BorderEntry], context: EmitContext) -> List[str]:
        lines = [
            f"$border-{entry.name}: {fmt_number(entry.width)}px {entry.style} {entry.color.css};"
            for entry in entries
        ]
        lines.append("")
        lines.extend(css_root_block([f"border-{entry.name}" for entry in entries]))
        return lines

    def render_swift(self, entries: List[BorderEntry], context: EmitContext) -> List[str]:
        lines = [
            "import SwiftUI",
            "",
            "public struct BorderToken {",
            "  public let width: CGFloat",
            "  public let color: Color",
            "}",
            "",
            "public extension BorderToken {",
        ]
        for entry in entries:
            color = figma_to_swift_hex(entry.color.components, entry.color.alpha)
            lines.append(
                f"  static let {to_camel(entry.name.split('-'))} = "
                f"BorderToken(width: {fmt_number(entry.width)}, color: Color(hex: {color}))"
            )
        lines.extend(["}", ""])
        lines.extend(hex_color_init())
        return lines

    def render_kotlin(self, entries: List[BorderEntry], context: EmitContext) -> List[str]:
        lines = [
            kotlin_package_line(context),
            "",
            "import androidx.compose.foundation.BorderStroke",
            "import androidx.compose.ui.graphics.Color",
            "import androidx.compose.ui.unit.dp",
            "",
            "object Borders {",
        ]
        for entry in entries:
            color = figma_to_kotlin_hex(entry.color.components, entry.color.alpha)
            lines.append(
                f"    val {to_camel(entry.name.split('-'))} = BorderStroke({fmt_number(entry.width)}.dp, Color({color}))"
            )
        lines.extend(["}", ""])
        return lines


__all__ = ["BorderEmitter", "BorderEntry", "collect_border_entries"]
