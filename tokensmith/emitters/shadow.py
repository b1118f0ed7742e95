"""Elevation tokens from ``shadow`` leaves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from ..tokens.colors import figma_to_kotlin_hex, figma_to_swift_hex
from ..tokens.nodes import ShadowLayer, ShadowNode
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, css_root_block, kotlin_package_line
from .formatting import extract_numeric_key, fmt_number, path_to_kebab, to_camel, to_pascal
from .swift import hex_color_init


@dataclass(frozen=True)
class ShadowEntry:
    name: str
    layer: ShadowLayer
    sort_key: int

    @property
    def css(self) -> str:
        layer = self.layer
        return (
            f"{fmt_number(layer.offset_x)}px {fmt_number(layer.offset_y)}px "
            f"{fmt_number(layer.blur)}px {fmt_number(layer.spread)}px {layer.color.css}"
        )


def collect_shadow_entries(tree: Any) -> List[ShadowEntry]:
    """First layer of every shadow token, ordered by the number in its last segment."""

    entries: List[ShadowEntry] = []
    for path, node in iter_tokens(tree):
        if not isinstance(node, ShadowNode) or not node.layers:
            continue
        sort_key = extract_numeric_key(path[-1]) if path else 0
        entries.append(ShadowEntry(path_to_kebab(path), node.layers[0], sort_key))
    return sorted(entries, key=lambda entry: (entry.sort_key, entry.name))


class ShadowEmitter(CompositeEmitter[ShadowEntry]):
    name = "shadow"
    scss_filename = "Shadows.scss"
    swift_filename = "Shadows.swift"
    kotlin_filename = "Shadows.kt"

    def collect(self, tree: Any) -> List[ShadowEntry]:
        return collect_shadow_entries(tree)

    def render_scss(self, entries: List[ShadowEntry], context: EmitContext) -> List[str]:
        lines = [f"$shadow-{entry.name}: {entry.css};" for entry in entries]
        lines.append("")
        lines.extend(css_root_block([f"shadow-{entry.name}" for entry in entries]))
        return lines

    def render_swift(self, entries: List[ShadowEntry], context: EmitContext) -> List[str]:
        lines = [
            "import SwiftUI",
            "",
            "public struct ShadowToken {",
            "  public let color: Color",
            "  public let radius: CGFloat",
            "  public let x: CGFloat",
            "  public let y: CGFloat",
            "}",
            "",
            "public extension ShadowToken {",
        ]
        for entry in entries:
            layer = entry.layer
            color = figma_to_swift_hex(layer.color.components, layer.color.alpha)
            lines.append(
                f"  static let {to_camel(entry.name.split('-'))} = ShadowToken(color: Color(hex: {color}), "
                f"radius: {fmt_number(layer.blur)}, x: {fmt_number(layer.offset_x)}, y: {fmt_number(layer.offset_y)})"
            )
        lines.extend(["}", ""])
        lines.extend(hex_color_init())
        return lines

    def render_kotlin(self, entries: List[ShadowEntry], context: EmitContext) -> List[str]:
        lines = [
            kotlin_package_line(context),
            "",
            "import androidx.compose.ui.graphics.Color",
            "import androidx.compose.ui.unit.Dp",
            "import androidx.compose.ui.unit.dp",
            "",
            "data class ShadowSpec(",
            "    val elevation: Dp,",
            "    val color: Color,",
            ")",
            "",
            "object Shadows {",
        ]
        for entry in entries:
            layer = entry.layer
            color = figma_to_kotlin_hex(layer.color.components, layer.color.alpha)
            lines.append(
                f"    val {to_pascal(entry.name.split('-'))} = "
                f"ShadowSpec(elevation = {fmt_number(layer.blur)}.dp, color = Color({color}))"
            )
        lines.extend(["}", ""])
        return lines


__all__ = ["ShadowEmitter", "ShadowEntry", "collect_shadow_entries"]
