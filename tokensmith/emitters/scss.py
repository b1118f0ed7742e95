"""SCSS colour emitter: Primitives.scss and Colors.scss."""

from __future__ import annotations

from typing import List

from ..conventions import WebConventions
from ..models import GeneratedFile
from .base import EmitContext, Emitter, render_lines
from .formatting import capitalize
from .palette import Palette, PrimitiveEntry, SemanticEntry, collect_palette


def scss_var(entry: PrimitiveEntry, conventions: WebConventions) -> str:
    """``Colour/Grey_Alpha/750_69`` -> ``$grey-alpha-750-69`` (separator per convention)."""
    return conventions.scss_prefix + entry.kebab(conventions.separator)


def import_line(conventions: WebConventions) -> str:
    suffix = conventions.import_suffix
    if conventions.import_style == "use":
        return f"@use './Primitives{suffix}' as *;"
    return f"@import './Primitives{suffix}';"


def render_primitives_scss(palette: Palette, context: EmitContext) -> str:
    conventions = context.conventions.web
    lines = context.header("Primitives.scss", "//", "web-primitives-scss")
    for family, entries in palette.families():
        lines.append(f"// {family}")
        for entry in entries:
            lines.append(f"{scss_var(entry, conventions)}: {entry.color.css};")
        lines.append("")
    return render_lines(lines)


class _Token:
    __slots__ = ("css_var", "scss_var", "light", "dark", "is_static")

    def __init__(self, entry: SemanticEntry, conventions: WebConventions) -> None:
        name = entry.name(conventions.separator)
        self.css_var = f"--{name}"
        self.scss_var = f"{conventions.scss_prefix}{name}"
        self.light = scss_var(entry.light, conventions)
        self.dark = scss_var(entry.dark, conventions)
        self.is_static = entry.is_static


def _modern(groups: List, lines: List[str]) -> None:
    lines.append("// @property typed declarations — enables CSS transitions on color tokens")
    lines.append("// and provides browser DevTools type info. Requires: color-scheme: light dark.")
    for category, tokens in groups:
        lines.append(f"// {capitalize(category)} colors")
        for token in tokens:
            lines.extend(
                [
                    f"@property {token.css_var} {{",
                    "  syntax: '<color>';",
                    "  inherits: true;",
                    "  initial-value: transparent;",
                    "}",
                ]
            )
        lines.append("")

    lines.extend([":root {", "  color-scheme: light dark;", ""])
    for category, tokens in groups:
        lines.append(f"  // {capitalize(category)} colors")
        for token in tokens:
            if token.is_static:
                lines.append(f"  {token.css_var}: #{{{token.light}}};")
            else:
                lines.append(f"  {token.css_var}: light-dark(#{{{token.light}}}, #{{{token.dark}}});")
        lines.append("")
    lines.extend(["}", ""])

    lines.append("// SCSS variable aliases — reference in .scss files; compile to var(--token-name)")
    _aliases(groups, lines)


def _inline(groups: List, lines: List[str]) -> None:
    for category, tokens in groups:
        lines.append(f"// {capitalize(category)} colors")
        for token in tokens:
            if token.is_static:
                lines.append(f"{token.scss_var}: var({token.css_var}, {token.light});")
            else:
                lines.append(
                    f"{token.scss_var}: var({token.css_var}, light-dark({token.light}, {token.dark}));"
                )
        lines.append("")


def _media_query(groups: List, lines: List[str]) -> None:
    lines.append(":root {")
    for category, tokens in groups:
        lines.append(f"  // {capitalize(category)} colors")
        for token in tokens:
            lines.append(f"  {token.css_var}: #{{{token.light}}};")
        lines.append("")
    lines.extend(["}", ""])

    lines.extend(["@media (prefers-color-scheme: dark) {", "  :root {"])
    for _category, tokens in groups:
        for token in tokens:
            if not token.is_static:
                lines.append(f"    {token.css_var}: #{{{token.dark}}};")
    lines.extend(["  }", "}", ""])

    lines.append("// SCSS variable aliases")
    _aliases(groups, lines)


def _aliases(groups: List, lines: List[str]) -> None:
    for category, tokens in groups:
        lines.append(f"// {capitalize(category)} colors")
        for token in tokens:
            lines.append(f"{token.scss_var}: var({token.css_var});")
        lines.append("")


_STRUCTURES = {"modern": _modern, "inline": _inline, "media-query": _media_query}


def render_colors_scss(palette: Palette, context: EmitContext) -> str:
    """Semantic tokens in the detected structure (``modern`` when unknown)."""

    conventions = context.conventions.web
    lines = [import_line(conventions), ""]
    lines.extend(context.header("Colors.scss", "//", "web-colors-scss"))
    groups = [
        (category, [_Token(entry, conventions) for entry in entries])
        for category, entries in palette.categories()
    ]
    _STRUCTURES.get(conventions.scss_color_structure, _modern)(groups, lines)
    return render_lines(lines)


class ScssEmitter(Emitter):
    name = "scss"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("web")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        palette = collect_palette(context.light, context.dark, context.primitives)
        if not palette.primitives:
            return []
        return [
            GeneratedFile("Primitives.scss", render_primitives_scss(palette, context), "scss", "web"),
            GeneratedFile("Colors.scss", render_colors_scss(palette, context), "scss", "web"),
        ]


__all__ = ["ScssEmitter", "import_line", "render_colors_scss", "render_primitives_scss", "scss_var"]
