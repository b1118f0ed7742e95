"""Typography.ts: typed style objects, or a two-tier const scale."""

from __future__ import annotations

import re
from typing import List

from ...conventions import TsTypography
from ..base import EmitContext, render_lines
from ..formatting import fmt_number, kebab_to_camel, rounded
from .parsing import TypographyEntry, group_entries, px_to_em, px_to_rem


def screaming_name(key: str, prefix: str) -> str:
    return prefix + key.upper().replace("-", "_")


def semantic_screaming_name(key: str, prefix: str) -> str:
    """Drops the trailing regular-weight marker: ``body-r`` -> ``BODY``."""
    return prefix + re.sub(r"-r$", "", key).replace("-", "_").upper()


def const_name(entry: TypographyEntry, conventions: TsTypography) -> str:
    if conventions.naming_case == "SCREAMING_SNAKE":
        return screaming_name(entry.full_key, conventions.const_prefix)
    if not conventions.const_prefix:
        return kebab_to_camel(entry.full_key)
    return kebab_to_camel(f"{conventions.const_prefix}-{entry.full_key}")


def _two_tier(entries: List[TypographyEntry], conventions: TsTypography) -> List[str]:
    prefix = conventions.const_prefix
    lines: List[str] = []
    if conventions.export_weights:
        for weight in sorted({entry.value.font_weight for entry in entries}):
            lines.append(f"export const {prefix}WEIGHT_{fmt_number(weight)} = {fmt_number(weight)};")
        lines.append("")

    for entry in entries:
        value = entry.value
        lines.append(f"const {screaming_name(entry.full_key, prefix)} = {{")
        if conventions.includes_font_family:
            lines.append(f"  fontFamily: '{value.font_family}',")
        if conventions.value_format == "string":
            lines.append(f"  fontSize: '{px_to_rem(value.font_size)}',")
            lines.append(f"  lineHeight: '{px_to_rem(value.line_height)}',")
            lines.append(f"  letterSpacing: '{fmt_number(value.letter_spacing)}px',")
        else:
            lines.append(f"  fontSize: {fmt_number(value.font_size)},")
            lines.append(f"  lineHeight: {fmt_number(value.line_height)},")
            lines.append(f"  letterSpacing: {fmt_number(value.letter_spacing)},")
        lines.append("};")
    lines.append("")

    lines.append("// Typography objects with descriptive names for easy usage")
    for entry in entries:
        lines.append(
            f"export const {semantic_screaming_name(entry.full_key, prefix)} = {screaming_name(entry.full_key, prefix)};"
        )
    return lines


def _interface(conventions: TsTypography) -> List[str]:
    lines = [f"export interface {conventions.interface_name} {{"]
    if conventions.includes_font_family:
        lines.append("  fontFamily: string;")
    lines.extend(
        [
            "  fontSize: number; // px (raw Figma value)",
            '  fontSizeRem: string; // e.g. "1rem"',
            "  fontWeight: number;",
            "  lineHeight: number; // px (raw Figma value)",
            "  lineHeightUnitless: number; // e.g. 1.5",
            "  letterSpacing: number; // px (raw Figma value)",
            '  letterSpacingEm: string; // e.g. "0.0313em"',
            "}",
            "",
        ]
    )
    return lines


def _objects(entries: List[TypographyEntry], conventions: TsTypography) -> List[str]:
    typed = conventions.has_interface and bool(conventions.interface_name)
    lines = _interface(conventions) if typed else []
    annotation = f": {conventions.interface_name}" if typed else ""
    for label, group in group_entries(entries).items():
        lines.append(f"// {label}")
        for entry in group:
            value = entry.value
            unitless = 1 if value.font_size == 0 else rounded(value.line_height / value.font_size, 4)
            lines.append(f"export const {const_name(entry, conventions)}{annotation} = {{")
            if conventions.includes_font_family:
                lines.append(f"  fontFamily: '{value.font_family}',")
            lines.extend(
                [
                    f"  fontSize: {fmt_number(value.font_size)},",
                    f"  fontSizeRem: '{px_to_rem(value.font_size)}',",
                    f"  fontWeight: {fmt_number(value.font_weight)},",
                    f"  lineHeight: {fmt_number(value.line_height)},",
                    f"  lineHeightUnitless: {fmt_number(unitless)},",
                    f"  letterSpacing: {fmt_number(value.letter_spacing)},",
                    f"  letterSpacingEm: '{px_to_em(value.letter_spacing, value.font_size)}',",
                    "} as const;",
                ]
            )
        lines.append("")
    return lines


def render_typography_ts(entries: List[TypographyEntry], context: EmitContext) -> str:
    conventions = context.conventions.typography.ts
    lines = context.header("Typography.ts", "//", "web-typography-ts")
    if conventions.two_tier:
        lines.extend(_two_tier(entries, conventions))
    else:
        lines.extend(_objects(entries, conventions))
    return render_lines(lines)


__all__ = ["const_name", "render_typography_ts", "screaming_name", "semantic_screaming_name"]
