"""Corner-radius tokens: numeric leaves under a radius/corner/round path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from ..tokens.nodes import DimensionNode, NumberNode
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, css_root_block, kotlin_package_line, path_has
from .formatting import extract_numeric_key, fmt_number, path_to_kebab, to_camel, to_pascal
from .opacity import is_opacity_path

RADIUS_KEYWORDS = ("radius", "corner", "round")


@dataclass(frozen=True)
class RadiusEntry:
    name: str
    value: float
    sort_key: float


def collect_radius_entries(tree: Any) -> List[RadiusEntry]:
    entries: List[RadiusEntry] = []
    for path, node in iter_tokens(tree):
        if not isinstance(node, (NumberNode, DimensionNode)) or node.value is None:
            continue
        if not path_has(path, *RADIUS_KEYWORDS) or is_opacity_path(path):
            continue
        sort_key = extract_numeric_key(path[-1]) if path else node.value
        entries.append(RadiusEntry(path_to_kebab(path), node.value, sort_key))
    return sorted(entries, key=lambda entry: (entry.sort_key, entry.value))


class RadiusEmitter(CompositeEmitter[RadiusEntry]):
    name = "radius"
    scss_filename = "Radius.scss"
    swift_filename = "CornerRadius.swift"
    kotlin_filename = "CornerRadius.kt"

    def collect(self, tree: Any) -> List[RadiusEntry]:
        return collect_radius_entries(tree)

    def render_scss(self, entries: List[RadiusEntry], context: EmitContext) -> List[str]:
        lines = ["// Corner radius scale — SCSS variables"]
        lines.extend(f"$radius-{entry.name}: {fmt_number(entry.value)}px;" for entry in entries)
        lines.append("")
        lines.extend(css_root_block([f"radius-{entry.name}" for entry in entries]))
        return lines

    def render_swift(self, entries: List[RadiusEntry], context: EmitContext) -> List[str]:
        lines = ["import CoreGraphics", "", "public enum CornerRadius {"]
        lines.extend(
            f"  public static let {to_camel(entry.name.split('-'))}: CGFloat = {fmt_number(entry.value)}"
            for entry in entries
        )
        lines.extend(["}", ""])
        return lines

    def render_kotlin(self, entries: List[RadiusEntry], context: EmitContext) -> List[str]:
        lines = [
            kotlin_package_line(context),
            "",
            "import androidx.compose.ui.unit.dp",
            "",
            "object CornerRadius {",
        ]
        lines.extend(
            f"    val {to_pascal(entry.name.split('-'))} = {fmt_number(entry.value)}.dp" for entry in entries
        )
        lines.extend(["}", ""])
        return lines


__all__ = ["RADIUS_KEYWORDS", "RadiusEmitter", "RadiusEntry", "collect_radius_entries"]
