"""TypeScript colour emitter: Primitives.ts and Colors.ts."""

from __future__ import annotations

import re
from typing import List

from ..conventions import WebConventions
from ..conventions.references import create_new_detector, detect_renames, family_markers, new_token_comment
from ..models import GeneratedFile
from ..tokens.colors import apply_hex_case
from .base import EmitContext, Emitter, render_lines
from .formatting import apply_case, capitalize
from .palette import Palette, PrimitiveEntry, SemanticEntry, collect_palette


def ts_name(name: str, naming_case: str) -> str:
    """``grey-750`` -> ``GREY_750`` for screaming snake, ``grey750`` for camel, ..."""
    return apply_case(re.split(r"[-_]", name), naming_case)


def primitive_ts_name(entry: PrimitiveEntry, conventions: WebConventions) -> str:
    return ts_name(entry.kebab(), conventions.ts_naming_case)


def render_primitives_ts(palette: Palette, context: EmitContext) -> str:
    conventions = context.conventions.web
    reference = context.reference("web-primitives-ts")
    renames = detect_renames(reference)
    is_new = create_new_detector(reference)
    annotation = ": string" if conventions.has_type_annotations else ""
    suffix = " as const" if conventions.ts_uses_as_const else ""

    lines = context.header("Primitives.ts", "//", "web-primitives-ts")
    for family, entries in palette.families():
        lines.extend(family_markers(family, renames, is_new, "//"))
        lines.append(f"// {capitalize(family)} color family")
        for entry in entries:
            value = apply_hex_case(entry.color.css, conventions.ts_hex_casing)
            lines.append(
                f"{conventions.ts_prefix}{primitive_ts_name(entry, conventions)}{annotation} = '{value}'{suffix};"
            )
        lines.append("")
    return render_lines(lines)


def _semantic_line(entry: SemanticEntry, conventions: WebConventions) -> str:
    name = entry.name(conventions.separator)
    annotation = ": string " if conventions.has_type_annotations else " "
    suffix = " as const" if conventions.ts_uses_as_const else ""
    light = f"PRIMITIVES.{primitive_ts_name(entry.light, conventions)}"
    if entry.is_static:
        value = f"var(--{name}, ${{{light}}})"
    else:
        dark = f"PRIMITIVES.{primitive_ts_name(entry.dark, conventions)}"
        value = f"var(--{name}, light-dark(${{{light}}}, ${{{dark}}}))"
    return f"{conventions.ts_prefix}{ts_name(name, conventions.ts_naming_case)}{annotation}= `{value}`{suffix};"


def render_colors_ts(palette: Palette, context: EmitContext) -> str:
    conventions = context.conventions.web
    is_new = create_new_detector(context.reference("web-colors-ts"))

    lines = ["import * as PRIMITIVES from './Primitives';", ""]
    lines.extend(context.header("Colors.ts", "//", "web-colors-ts"))
    for category, entries in palette.categories():
        lines.append(f"// {capitalize(category)} colors")
        for entry in entries:
            if is_new(ts_name(entry.name(conventions.separator), conventions.ts_naming_case)):
                lines.extend(new_token_comment("//"))
            lines.append(_semantic_line(entry, conventions))
        lines.append("")
    return render_lines(lines)


class TypeScriptEmitter(Emitter):
    name = "typescript"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("web")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        palette = collect_palette(context.light, context.dark, context.primitives)
        if not palette.primitives:
            return []
        return [
            GeneratedFile("Primitives.ts", render_primitives_ts(palette, context), "typescript", "web"),
            GeneratedFile("Colors.ts", render_colors_ts(palette, context), "typescript", "web"),
        ]


__all__ = ["TypeScriptEmitter", "primitive_ts_name", "render_colors_ts", "render_primitives_ts", "ts_name"]
