"""Motion tokens: durations and easings under a motion-flavoured path."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..tokens.nodes import NumberNode, StringNode, ValueNode
from ..tokens.walker import iter_tokens
from .base import EmitContext
from .composite import CompositeEmitter, css_root_block, kotlin_package_line, path_has
from .formatting import extract_numeric_key, fmt_number, path_to_kebab, path_to_pascal
from .opacity import is_opacity_path

MOTION_KEYWORDS = ("duration", "delay", "easing", "transition", "animation", "motion")

_CUBIC_BEZIER = re.compile(
    r"cubic-bezier\s*\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*\)",
    re.IGNORECASE,
)

Bezier = Tuple[float, float, float, float]


def parse_cubic_bezier(text: str) -> Optional[Bezier]:
    match = _CUBIC_BEZIER.search(text)
    if not match:
        return None
    x1, y1, x2, y2 = (float(group) for group in match.groups())
    return x1, y1, x2, y2


def to_milliseconds(value: float) -> float:
    """Values under 10 are taken to be seconds."""
    return value * 1000 if 0 <= value < 10 else value


@dataclass(frozen=True)
class DurationEntry:
    name: str
    short_name: str
    value_ms: int
    sort_key: float


@dataclass(frozen=True)
class EasingEntry:
    name: str
    short_name: str
    value: str
    cubic_bezier: Optional[Bezier]
    sort_key: int


@dataclass(frozen=True)
class MotionTokens:
    durations: Tuple[DurationEntry, ...] = ()
    easings: Tuple[EasingEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.durations) + len(self.easings)


def _short_name(path: Sequence[str]) -> str:
    return path_to_pascal([path[-1]])


def _easing_text(node: Any) -> Optional[str]:
    if isinstance(node, StringNode):
        return node.value
    if isinstance(node, ValueNode) and node.type == "cubic-bezier":
        value = node.value
        if isinstance(value, (list, tuple)) and len(value) == 4:
            return "cubic-bezier(" + ", ".join(fmt_number(float(part)) for part in value) + ")"
        if isinstance(value, str):
            return value
    return None


def collect_motion_tokens(tree: Any) -> MotionTokens:
    durations: List[DurationEntry] = []
    easings: List[EasingEntry] = []
    for path, node in iter_tokens(tree):
        if not path or not path_has(path, *MOTION_KEYWORDS) or is_opacity_path(path):
            continue
        name = path_to_kebab(path)
        if isinstance(node, NumberNode) and node.value is not None:
            value_ms = to_milliseconds(node.value)
            sort_key = extract_numeric_key(path[-1])
            durations.append(DurationEntry(name, _short_name(path), int(round(value_ms)), sort_key))
            continue
        text = _easing_text(node)
        if text:
            easings.append(
                EasingEntry(name, _short_name(path), text, parse_cubic_bezier(text), extract_numeric_key(path[-1]))
            )
    durations.sort(key=lambda entry: (entry.sort_key, entry.value_ms))
    easings.sort(key=lambda entry: (entry.sort_key, entry.name))
    return MotionTokens(tuple(durations), tuple(easings))


class MotionEmitter(CompositeEmitter[MotionTokens]):
    name = "motion"
    scss_filename = "Motion.scss"
    swift_filename = "MotionTokens.swift"
    kotlin_filename = "MotionTokens.kt"

    def collect(self, tree: Any) -> List[MotionTokens]:
        tokens = collect_motion_tokens(tree)
        return [tokens] if len(tokens) else []

    def count(self, context: EmitContext) -> int:
        return len(collect_motion_tokens(context.values))

    def render_scss(self, entries: List[MotionTokens], context: EmitContext) -> List[str]:
        tokens = entries[0]
        lines = ["// Duration (ms)"]
        lines.extend(f"$duration-{entry.name}: {entry.value_ms}ms;" for entry in tokens.durations)
        if tokens.durations:
            lines.append("")
        if tokens.easings:
            lines.append("// Easing")
            lines.extend(f"$easing-{entry.name}: {entry.value};" for entry in tokens.easings)
            lines.append("")
        names = [f"duration-{entry.name}" for entry in tokens.durations]
        names.extend(f"easing-{entry.name}" for entry in tokens.easings)
        lines.extend(css_root_block(names))
        return lines

    def render_swift(self, entries: List[MotionTokens], context: EmitContext) -> List[str]:
        tokens = entries[0]
        lines = ["import SwiftUI", "", "public enum MotionTokens {"]
        for entry in tokens.durations:
            lines.append(f"  public static let duration{entry.short_name}: TimeInterval = {entry.value_ms / 1000:.2f}")
        for entry in tokens.easings:
            if entry.cubic_bezier:
                args = ", ".join(fmt_number(part) for part in entry.cubic_bezier)
                lines.append(f"  public static let easing{entry.short_name}: Animation = .timingCurve({args})")
            else:
                lines.append(f'  public static let easing{entry.short_name}: String = "{entry.value}"')
        lines.extend(["}", ""])
        return lines

    def render_kotlin(self, entries: List[MotionTokens], context: EmitContext) -> List[str]:
        tokens = entries[0]
        lines = [
            kotlin_package_line(context),
            "",
            "import androidx.compose.animation.core.CubicBezierEasing",
            "",
            "object MotionTokens {",
        ]
        lines.extend(f"    val Duration{entry.short_name} = {entry.value_ms}" for entry in tokens.durations)
        for entry in tokens.easings:
            if entry.cubic_bezier:
                args = ", ".join(f"{fmt_number(part)}f" for part in entry.cubic_bezier)
                lines.append(f"    val Easing{entry.short_name} = CubicBezierEasing({args})")
            else:
                lines.append(f'    val Easing{entry.short_name} = "{entry.value}"')
        lines.extend(["}", ""])
        return lines


__all__ = [
    "DurationEntry",
    "EasingEntry",
    "MOTION_KEYWORDS",
    "MotionEmitter",
    "MotionTokens",
    "collect_motion_tokens",
    "parse_cubic_bezier",
    "to_milliseconds",
]
