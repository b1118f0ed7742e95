"""Spacing scale from the ``Integer`` section of the values export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from ..models import GeneratedFile
from .base import EmitContext, Emitter, render_lines
from .formatting import apply_case, fmt_number

# Integer/999 is the clip value, not a step.
MAX_KEY = "999"


@dataclass(frozen=True)
class SpacingEntry:
    key: str
    raw_value: float
    css_var: str

    @property
    def px_value(self) -> str:
        return f"{fmt_number(self.raw_value)}px"

    @property
    def scss_var(self) -> str:
        return "$" + self.css_var[2:]

    def ts_name(self, naming_case: str) -> str:
        return apply_case(self.css_var[2:].split("-"), naming_case)


def collect_spacing_entries(values: Mapping[str, Any]) -> List[SpacingEntry]:
    """Numeric leaves directly under ``Integer``, ordered by value.

    Negative values get a ``neg`` segment: ``-4`` becomes ``--spacing-neg-4``.
    """

    integers = values.get("Integer") if isinstance(values, Mapping) else None
    if not isinstance(integers, Mapping):
        return []

    entries: List[SpacingEntry] = []
    for key, token in integers.items():
        if str(key).startswith("$") or "opacity" in str(key).lower() or not isinstance(token, Mapping):
            continue
        raw = token.get("$value")
        if token.get("$type") != "number" or isinstance(raw, bool) or not isinstance(raw, (int, float)):
            continue
        if key == MAX_KEY:
            css_var = "--spacing-max"
        elif raw < 0:
            css_var = f"--spacing-neg-{fmt_number(abs(raw))}"
        else:
            css_var = f"--spacing-{fmt_number(raw)}"
        entries.append(SpacingEntry(str(key), raw, css_var))
    return sorted(entries, key=lambda entry: entry.raw_value)


def render_spacing_scss(entries: List[SpacingEntry], context: EmitContext) -> str:
    lines = context.header("Spacing.scss")
    lines.append("// Spacing scale — SCSS variables")
    for entry in entries:
        lines.append(f"{entry.scss_var}: {entry.px_value};")
    lines.append("")
    lines.append("// Spacing scale — CSS custom properties (for JS access and runtime use)")
    lines.append(":root {")
    for entry in entries:
        lines.append(f"  {entry.css_var}: #{{{entry.scss_var}}}; // {entry.px_value}")
    lines.extend(["}", ""])
    return render_lines(lines)


def render_spacing_ts(entries: List[SpacingEntry], context: EmitContext) -> str:
    naming_case = context.conventions.web.ts_naming_case
    lines = context.header("Spacing.ts")
    lines.append("// Spacing scale (px)")
    for entry in entries:
        lines.append(f"export const {entry.ts_name(naming_case)} = '{entry.px_value}' as const;")
    lines.append("")
    return render_lines(lines)


class SpacingEmitter(Emitter):
    name = "spacing"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("web")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        entries = collect_spacing_entries(context.values)
        if not entries:
            return []
        return [
            GeneratedFile("Spacing.scss", render_spacing_scss(entries, context), "scss", "web"),
            GeneratedFile("Spacing.ts", render_spacing_ts(entries, context), "typescript", "web"),
        ]


__all__ = ["SpacingEmitter", "SpacingEntry", "collect_spacing_entries", "render_spacing_scss", "render_spacing_ts"]
