"""Opacity tokens: numeric leaves whose path mentions "opacity".

The type alone is not enough because opacity values share ``number`` with
the spacing scale; the path decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from ..tokens.nodes import NumberNode
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, css_root_block, kotlin_package_line
from .formatting import fmt_number, path_to_kebab, rounded, to_camel


def is_opacity_path(path: Sequence[str]) -> bool:
    return any("opacity" in segment.lower() for segment in path)


def normalize_opacity(value: float) -> float:
    """Scale 0-100 percentages down to 0-1."""
    return value / 100 if value > 1 else value


@dataclass(frozen=True)
class OpacityEntry:
    name: str
    value: float

    @property
    def camel(self) -> str:
        return to_camel(self.name.split("-"))


def collect_opacity_entries(tree: Any) -> List[OpacityEntry]:
    entries: List[OpacityEntry] = []
    for path, node in iter_tokens(tree):
        if not isinstance(node, NumberNode) or node.value is None or not is_opacity_path(path):
            continue
        entries.append(OpacityEntry(path_to_kebab(path), normalize_opacity(node.value)))
    # Sort on the unrounded value; round only for display.
    entries.sort(key=lambda entry: entry.value)
    return [OpacityEntry(entry.name, rounded(entry.value, 3)) for entry in entries]


class OpacityEmitter(CompositeEmitter[OpacityEntry]):
    name = "opacity"
    scss_filename = "Opacity.scss"
    swift_filename = "Opacity.swift"
    kotlin_filename = "Opacity.kt"

    def collect(self, tree: Any) -> List[OpacityEntry]:
        return collect_opacity_entries(tree)

    def render_scss(self, entries: List[OpacityEntry], context: EmitContext) -> List[str]:
        lines = [f"${entry.name}: {fmt_number(entry.value)};" for entry in entries]
        lines.append("")
        lines.extend(css_root_block([entry.name for entry in entries]))
        return lines

    def render_swift(self, entries: List[OpacityEntry], context: EmitContext) -> List[str]:
        lines = ["import Foundation", "", "public enum Opacity {"]
        lines.extend(f"  public static let {entry.camel}: Double = {fmt_number(entry.value)}" for entry in entries)
        lines.extend(["}", ""])
        return lines

    def render_kotlin(self, entries: List[OpacityEntry], context: EmitContext) -> List[str]:
        lines = [kotlin_package_line(context), "", "object Opacity {"]
        lines.extend(f"    val {entry.camel} = {fmt_number(entry.value)}f" for entry in entries)
        lines.extend(["}", ""])
        return lines


__all__ = ["OpacityEmitter", "OpacityEntry", "collect_opacity_entries", "is_opacity_path", "normalize_opacity"]
