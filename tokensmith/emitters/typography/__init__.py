"""Typography emitter: routes parsed text styles to each platform renderer."""

from __future__ import annotations

from typing import List

from ...models import GeneratedFile, GenerateWarning
from ..base import EmitContext, Emitter
from .kotlin import render_typography_kotlin
from .parsing import (
    ParsedTypography,
    TypographyEntry,
    count_typography_styles,
    normalize_font_weight,
    parse_typography,
    style_name_to_key,
    web_entries,
)
from .scss import render_typography_scss
from .swift import render_typography_swift
from .typescript import render_typography_ts


class TypographyEmitter(Emitter):
    name = "typography"

    def supports(self, context: EmitContext) -> bool:
        return context.typography is not None and any(
            context.wants(platform, "typography") for platform in ("web", "ios", "android")
        )

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        entries = list(parse_typography(context.typography).entries)
        if not entries:
            return []

        files: List[GeneratedFile] = []
        if context.wants("web", "typography"):
            web = web_entries(entries)
            if web:
                files.append(GeneratedFile("Typography.scss", render_typography_scss(web, context), "scss", "web"))
                files.append(GeneratedFile("Typography.ts", render_typography_ts(web, context), "typescript", "web"))
        if context.wants("ios", "typography"):
            ios = [entry for entry in entries if entry.target_platform == "ios"]
            if ios:
                files.append(GeneratedFile("Typography.swift", render_typography_swift(ios, context), "swift", "ios"))
        if context.wants("android", "typography"):
            android = [entry for entry in entries if entry.target_platform == "android"]
            if android:
                files.extend(render_typography_kotlin(android, context))
        return files

    def warnings(self, context: EmitContext) -> List[GenerateWarning]:
        fallbacks = parse_typography(context.typography).weight_fallbacks
        if not fallbacks:
            return []
        return [
            GenerateWarning(
                kind="typography-weight",
                message=(
                    f"{len(fallbacks)} typography style(s) had a non-numeric font weight; "
                    "a name lookup or the 400 default was used."
                ),
                details=list(fallbacks),
            )
        ]


__all__ = [
    "ParsedTypography",
    "TypographyEmitter",
    "TypographyEntry",
    "count_typography_styles",
    "normalize_font_weight",
    "parse_typography",
    "style_name_to_key",
]
