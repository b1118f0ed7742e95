"""Helpers for building emitter contexts in tests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from tokensmith.conventions import DetectedConventions, detect_conventions
from tokensmith.emitters import EmitContext
from tokensmith.models import CATEGORIES, GeneratedFile

from tests._fixtures.tokens import dark_tree, light_tree, values_tree

FIXED_TIMESTAMP = "2026-10-19T12:00:00+00:00"


def make_context(
    *,
    platforms: Iterable[str] = ("web",),
    categories: Iterable[str] = CATEGORIES,
    light: Optional[Mapping[str, Any]] = None,
    dark: Optional[Mapping[str, Any]] = None,
    values: Optional[Mapping[str, Any]] = None,
    typography: Optional[Mapping[str, Any]] = None,
    references: Optional[Dict[str, str]] = None,
    conventions: Optional[DetectedConventions] = None,
) -> EmitContext:
    """Context over the sample exports; passing references switches to match-existing."""

    refs = references or {}
    if conventions is None:
        conventions = detect_conventions(refs, best_practices=not refs)
    return EmitContext(
        light=light if light is not None else light_tree(),
        dark=dark if dark is not None else dark_tree(),
        conventions=conventions,
        values=values if values is not None else values_tree(),
        typography=typography,
        platforms=tuple(platforms),
        categories=tuple(categories),
        references=refs,
        generated_at=FIXED_TIMESTAMP,
    )


def by_name(files: Iterable[GeneratedFile]) -> Dict[str, GeneratedFile]:
    return {file.filename: file for file in files}


def lines_of(file: GeneratedFile) -> List[str]:
    return file.content.split("\n")
