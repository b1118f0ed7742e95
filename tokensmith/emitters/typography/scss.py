"""Typography.scss: custom properties plus one mixin per style, or a two-tier scale."""

from __future__ import annotations

from typing import List

from ...conventions import ScssTypography
from ..base import EmitContext, render_lines
from ..formatting import fmt_number
from .parsing import TypographyEntry, group_entries, px_to_em, px_to_rem, unitless_line_height


def scss_size_key(key: str) -> str:
    """First two kebab segments: ``body-r-bold`` -> ``body-r``."""
    return "-".join(key.split("-")[:2])


class _Units:
    def __init__(self, conventions: ScssTypography) -> None:
        self.conventions = conventions

    def size(self, px: float) -> str:
        return px_to_rem(px) if self.conventions.size_unit == "rem" else f"{fmt_number(px)}px"

    def height(self, line_height: float, font_size: float) -> str:
        if self.conventions.height_unit == "rem":
            return px_to_rem(line_height)
        return unitless_line_height(line_height, font_size)

    def spacing(self, letter_spacing: float, font_size: float) -> str:
        if self.conventions.spacing_unit == "em":
            return px_to_em(letter_spacing, font_size)
        return f"{fmt_number(letter_spacing)}px"


def _two_tier(entries: List[TypographyEntry], conventions: ScssTypography, units: _Units) -> List[str]:
    prefix = conventions.var_prefix.lstrip("$")
    lines: List[str] = []
    weights = sorted({entry.value.font_weight for entry in entries})
    if conventions.includes_font_weight and weights:
        lines.append("// Font weights")
        lines.extend(f"${prefix}weight-{fmt_number(weight)}: {fmt_number(weight)};" for weight in weights)
        lines.append("")

    lines.append("// Font sizes, line heights, and letter spacings")
    emitted = set()
    for entry in entries:
        size_key = scss_size_key(entry.full_key)
        if size_key in emitted:
            continue
        emitted.add(size_key)
        value = entry.value
        size = units.size(value.font_size)
        comment = ""
        if value.font_size:
            comment = f" // {size}"
            if conventions.size_unit == "rem":
                comment += f" * 16 = {fmt_number(value.font_size)}px"
        lines.append(f"${prefix}{size_key}-size: {size};{comment}")
        lines.append(f"${prefix}{size_key}-height: {units.height(value.line_height, value.font_size)};")
        lines.append(f"${prefix}{size_key}-spacing: {units.spacing(value.letter_spacing, value.font_size)};")
        lines.append("")

    if conventions.has_mixins:
        lines.append("// Typography mixins for easy usage")
        for entry in entries:
            size_key = scss_size_key(entry.full_key)
            lines.append(f"@mixin {conventions.mixin_prefix}{entry.full_key} {{")
            if conventions.includes_font_family:
                lines.append(f"  font-family: '{entry.value.font_family}', sans-serif;")
            lines.append(f"  font-size: ${prefix}{size_key}-size;")
            lines.append(f"  line-height: ${prefix}{size_key}-height;")
            lines.append(f"  letter-spacing: ${prefix}{size_key}-spacing;")
            lines.extend(["}", ""])
    return lines


def _single_tier(entries: List[TypographyEntry], conventions: ScssTypography, units: _Units) -> List[str]:
    mixin = conventions.mixin_prefix
    lines = [f"// Usage: @include {mixin}{{name}}; e.g. @include {mixin}body-r;", ""]

    if conventions.has_css_custom_properties:
        lines.append("// CSS custom properties — for runtime / JS access")
        lines.append(":root {")
        for entry in entries:
            key, value = entry.full_key, entry.value
            if conventions.includes_font_family:
                lines.append(f"  --{mixin}{key}-family: '{value.font_family}', sans-serif;")
            lines.append(f"  --{mixin}{key}-size: {units.size(value.font_size)};")
            lines.append(f"  --{mixin}{key}-weight: {fmt_number(value.font_weight)};")
            lines.append(f"  --{mixin}{key}-line-height: {units.height(value.line_height, value.font_size)};")
            lines.append(
                f"  --{mixin}{key}-letter-spacing: {units.spacing(value.letter_spacing, value.font_size)};"
            )
        lines.extend(["}", ""])

    if conventions.has_mixins:
        for label, group in group_entries(entries).items():
            lines.append(f"// {label}")
            for entry in group:
                value = entry.value
                lines.append(f"@mixin {mixin}{entry.full_key} {{")
                if conventions.includes_font_family:
                    lines.append(f"  font-family: '{value.font_family}', sans-serif;")
                lines.append(f"  font-size: {units.size(value.font_size)};")
                lines.append(f"  font-weight: {fmt_number(value.font_weight)};")
                lines.append(f"  line-height: {units.height(value.line_height, value.font_size)};")
                lines.append(f"  letter-spacing: {units.spacing(value.letter_spacing, value.font_size)};")
                lines.append("}")
            lines.append("")
    return lines


def render_typography_scss(entries: List[TypographyEntry], context: EmitContext) -> str:
    conventions = context.conventions.typography.scss
    units = _Units(conventions)
    lines = context.header("Typography.scss", "//", "web-typography-scss")
    if conventions.two_tier:
        lines.extend(_two_tier(entries, conventions, units))
    else:
        lines.extend(_single_tier(entries, conventions, units))
    return render_lines(lines)


__all__ = ["render_typography_scss", "scss_size_key"]
