"""Pure CSS custom-property emitter: primitives.css, colors.css, spacing.css."""

from __future__ import annotations

from typing import List

from ..conventions.references import create_new_detector, detect_renames, family_markers
from ..models import GeneratedFile
from .base import EmitContext, Emitter, render_lines
from .formatting import capitalize
from .palette import Palette, PrimitiveEntry, collect_palette
from .spacing import SpacingEntry, collect_spacing_entries


def css_var(entry: PrimitiveEntry) -> str:
    return "--" + entry.kebab()


def _css_header(context: EmitContext, filename: str) -> List[str]:
    return [line + " */" if line else line for line in context.header(filename, "/*")]


def _open_layer(context: EmitContext, lines: List[str]) -> str:
    """``@layer tokens`` wraps everything in best-practice mode; returns the indent."""

    if context.best_practices:
        lines.append("@layer tokens {")
        return "  "
    return ""


def render_primitives_css(palette: Palette, context: EmitContext) -> str:
    reference = context.reference("web-primitives-scss")
    renames = detect_renames(reference)
    is_new = create_new_detector(reference)

    lines = _css_header(context, "primitives.css")
    indent = _open_layer(context, lines)
    lines.append(f"{indent}:root {{")
    for family, entries in palette.families():
        for comment in family_markers(family, renames, is_new, "/*"):
            lines.append(f"{indent}  {comment}")
        lines.append(f"{indent}  /* {family} */")
        for entry in entries:
            lines.append(f"{indent}  {css_var(entry)}: {entry.color.css};")
    lines.append(f"{indent}}}")
    if indent:
        lines.append("}")
    lines.append("")
    return render_lines(lines)


def render_colors_css(palette: Palette, context: EmitContext) -> str:
    """Media-query structure when detected, otherwise ``light-dark()``."""

    lines = _css_header(context, "colors.css")
    groups = palette.categories()
    indent = _open_layer(context, lines)

    if context.conventions.web.scss_color_structure == "media-query":
        lines.append(f"{indent}:root {{")
        for category, entries in groups:
            lines.append(f"{indent}  /* {capitalize(category)} */")
            for entry in entries:
                lines.append(f"{indent}  --{entry.name()}: var({css_var(entry.light)});")
        lines.extend([f"{indent}}}", ""])
        lines.append(f"{indent}@media (prefers-color-scheme: dark) {{")
        lines.append(f"{indent}  :root {{")
        for _category, entries in groups:
            for entry in entries:
                if not entry.is_static:
                    lines.append(f"{indent}    --{entry.name()}: var({css_var(entry.dark)});")
        lines.extend([f"{indent}  }}", f"{indent}}}"])
    else:
        lines.extend([f"{indent}:root {{", f"{indent}  color-scheme: light dark;", ""])
        for category, entries in groups:
            lines.append(f"{indent}  /* {capitalize(category)} */")
            for entry in entries:
                light = f"var({css_var(entry.light)})"
                if entry.is_static:
                    lines.append(f"{indent}  --{entry.name()}: {light};")
                else:
                    dark = f"var({css_var(entry.dark)})"
                    lines.append(f"{indent}  --{entry.name()}: light-dark({light}, {dark});")
        lines.append(f"{indent}}}")
    if indent:
        lines.append("}")
    lines.append("")
    return render_lines(lines)


def render_spacing_css(entries: List[SpacingEntry], context: EmitContext) -> str:
    lines = _css_header(context, "spacing.css")
    indent = _open_layer(context, lines)
    lines.append(f"{indent}:root {{")
    for entry in entries:
        lines.append(f"{indent}  {entry.css_var}: {entry.px_value};")
    lines.append(f"{indent}}}")
    if indent:
        lines.append("}")
    lines.append("")
    return render_lines(lines)


class CssEmitter(Emitter):
    name = "css"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("web")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        files: List[GeneratedFile] = []
        palette = collect_palette(context.light, context.dark, context.primitives)
        if palette.primitives:
            files.append(GeneratedFile("primitives.css", render_primitives_css(palette, context), "css", "web"))
            files.append(GeneratedFile("colors.css", render_colors_css(palette, context), "css", "web"))
        spacing = collect_spacing_entries(context.values)
        if spacing:
            files.append(GeneratedFile("spacing.css", render_spacing_css(spacing, context), "css", "web"))
        return files


__all__ = ["CssEmitter", "css_var", "render_colors_css", "render_primitives_css", "render_spacing_css"]
