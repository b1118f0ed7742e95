"""Gradient tokens from ``gradient`` leaves with at least two stops."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from ..tokens.colors import figma_to_kotlin_hex, figma_to_swift_hex
from ..tokens.nodes import GradientNode, GradientStop
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, kotlin_package_line
from .formatting import fmt_number, path_to_kebab, to_camel, to_pascal
from .swift import hex_color_init

# CSS angle -> (start, end) unit points for SwiftUI.
_SWIFT_POINTS = {
    0: (".bottom", ".top"),
    90: (".leading", ".trailing"),
    180: (".top", ".bottom"),
}


@dataclass(frozen=True)
class GradientEntry:
    name: str
    gradient_type: str
    angle: float
    stops: Tuple[GradientStop, ...]

    @property
    def words(self) -> List[str]:
        return self.name.split("-")


def collect_gradient_entries(tree: Any) -> List[GradientEntry]:
    """Gradients in document order; fewer than two usable stops is not a gradient."""

    return [
        GradientEntry(path_to_kebab(path), node.gradient_type, node.angle, node.stops)
        for path, node in iter_tokens(tree)
        if isinstance(node, GradientNode) and len(node.stops) >= 2
    ]


def css_stop(stop: GradientStop) -> str:
    return f"{stop.color.css} {stop.position * 100:.0f}%"


def swift_points(angle: float) -> Tuple[str, str]:
    return _SWIFT_POINTS.get(int(angle), (".trailing", ".leading"))


class GradientEmitter(CompositeEmitter[GradientEntry]):
    name = "gradient"
    scss_filename = "_Gradients.scss"
    swift_filename = "GradientTokens.swift"
    kotlin_filename = "GradientTokens.kt"

    def collect(self, tree: Any) -> List[GradientEntry]:
        return collect_gradient_entries(tree)

    def render_scss(self, entries: List[GradientEntry], context: EmitContext) -> List[str]:
        lines = []
        for entry in entries:
            stops = ", ".join(css_stop(stop) for stop in entry.stops)
            if entry.gradient_type == "radial":
                lines.append(f"$gradient-{entry.name}: radial-gradient({stops});")
            else:
                lines.append(f"$gradient-{entry.name}: linear-gradient({fmt_number(entry.angle)}deg, {stops});")
        lines.append("")
        return lines

    def render_swift(self, entries: List[GradientEntry], context: EmitContext) -> List[str]:
        lines = ["import SwiftUI", "", "public enum GradientTokens {"]
        for entry in entries:
            start, end = swift_points(entry.angle)
            stops = ",\n            ".join(
                f".init(color: Color(hex: {figma_to_swift_hex(stop.color.components, stop.color.alpha)}), "
                f"location: {stop.position:.2f})"
                for stop in entry.stops
            )
            lines.extend(
                [
                    f"    static let {to_camel(entry.words)} = LinearGradient(",
                    "        stops: [",
                    f"            {stops}",
                    "        ],",
                    f"        startPoint: {start},",
                    f"        endPoint: {end}",
                    "    )",
                    "",
                ]
            )
        lines.extend(["}", ""])
        lines.extend(hex_color_init())
        return lines

    def render_kotlin(self, entries: List[GradientEntry], context: EmitContext) -> List[str]:
        lines = [
            kotlin_package_line(context),
            "",
            "import androidx.compose.ui.graphics.Brush",
            "import androidx.compose.ui.graphics.Color",
            "",
            "object GradientTokens {",
        ]
        for entry in entries:
            stops = ",\n            ".join(
                f"{stop.position:.2f}f to Color({figma_to_kotlin_hex(stop.color.components, stop.color.alpha)})"
                for stop in entry.stops
            )
            brush = "radialGradient" if entry.gradient_type == "radial" else "linearGradient"
            lines.extend(
                [
                    f"    val {to_pascal(entry.words)} = Brush.{brush}(",
                    "        colorStops = arrayOf(",
                    f"            {stops}",
                    "        )",
                    "    )",
                    "",
                ]
            )
        lines.extend(["}", ""])
        return lines


__all__ = ["GradientEmitter", "GradientEntry", "collect_gradient_entries", "css_stop"]
