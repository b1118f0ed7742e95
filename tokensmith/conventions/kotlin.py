"""Kotlin (Jetpack Compose) colour-file convention heuristics."""

from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .base import BEST_PRACTICE_KOTLIN, DEFAULT_KOTLIN_PACKAGE, Detection, KotlinConventions, majority

_PASCAL_VAL = re.compile(r"\b(?:val|var)\s+[A-Z][a-zA-Z0-9]+\s*(?:=|by\s)")
_CAMEL_VAL = re.compile(r"\b(?:val|var)\s+[a-z][a-zA-Z0-9]+\s*(?:=|by\s)")
_OBJECT = re.compile(r"\bobject\s+(\w+)\s*\{")
_PACKAGE = re.compile(r"^package\s+([\w.]+)", re.MULTILINE)
_PALETTE_OBJECT = re.compile(r"\bobject\s+\w+Palette\s*\{")
_COLORS_CLASS = re.compile(r"\bclass\s+(\w+?)Colors\b")
_PREFIX_SPLIT = re.compile(r"^([A-Z]+)(?=[A-Z][a-z])")
_PARAMETERIZED_FACTORY = re.compile(r"\bfun\s+\w+(?:Dark|Light)Colors\s*\(\s*\n\s*\w+\s*:\s*Color")

KNOWN_CATEGORIES = ("Fill", "Text", "Icon", "Background", "Stroke", "Border", "Surface")


def extract_kotlin_color_class_info(reference: str) -> Tuple[str, List[str]]:
    """Return the shared class prefix and the lowercase categories of ``class <Prefix><Cat>Colors``."""

    prefixes: Counter = Counter()
    categories: List[str] = []
    for stem in _COLORS_CLASS.findall(reference):
        prefix, category = "", stem
        for known in KNOWN_CATEGORIES:
            if stem.endswith(known) and len(stem) > len(known):
                prefix, category = stem[: -len(known)], known
                break
        else:
            match = _PREFIX_SPLIT.match(stem)
            if match:
                prefix, category = match.group(1), stem[len(match.group(1)):]
        if not prefix:
            # Plain "FillColors" style classes carry no prefix and are not a pattern.
            continue
        prefixes[prefix] += 1
        lowered = category.lower()
        if lowered not in categories:
            categories.append(lowered)
    if not prefixes:
        return "R", []
    return prefixes.most_common(1)[0][0], categories


def detect_naming_case(reference: str) -> Detection:
    counts = {
        "camel": len(_CAMEL_VAL.findall(reference)),
        "pascal": len(_PASCAL_VAL.findall(reference)),
    }
    if counts["pascal"] > counts["camel"]:
        total = counts["pascal"] + counts["camel"]
        return Detection("pascal", counts["pascal"] / total, total)
    return majority(counts, "camel")


def detect_object_name(reference: str) -> Detection:
    match = _OBJECT.search(reference)
    if not match:
        return Detection(BEST_PRACTICE_KOTLIN.object_name)
    return Detection(match.group(1), 1.0, 1)


def detect_package(reference: str) -> Detection:
    match = _PACKAGE.search(reference)
    if not match:
        return Detection(DEFAULT_KOTLIN_PACKAGE)
    return Detection(match.group(1), 1.0, 1)


def detect_kotlin_conventions(
    reference: Optional[str],
) -> Tuple[KotlinConventions, Dict[str, Detection]]:
    if not reference:
        return BEST_PRACTICE_KOTLIN, {}

    prefix, categories = extract_kotlin_color_class_info(reference)
    multi_file = bool(categories)
    dimensions = {
        "kotlin.naming_case": detect_naming_case(reference),
        "kotlin.object_name": detect_object_name(reference),
        "kotlin.package": detect_package(reference),
        "kotlin.architecture": Detection("multi-file", 1.0, len(categories)) if multi_file else Detection("single"),
    }
    conventions = KotlinConventions(
        naming_case=dimensions["kotlin.naming_case"].value,
        object_name=dimensions["kotlin.object_name"].value,
        kotlin_package=dimensions["kotlin.package"].value,
        architecture=dimensions["kotlin.architecture"].value,
        primitive_style="palette-objects" if _PALETTE_OBJECT.search(reference) else "object",
        semantic_categories=tuple(categories),
        class_prefix=prefix if multi_file else "",
        uses_composition_local="compositionLocalOf" in reference,
        uses_enum=bool(re.search(rf"\benum\s+class\s+{re.escape(prefix)}\w+Color\b", reference)),
        uses_mutable_state="mutableStateOf" in reference,
        uses_internal_set=bool(re.search(r"\binternal\s+set\b", reference)),
        uses_copy_method=bool(re.search(r"\bfun\s+copy\(", reference)),
        uses_parameterized_factories=bool(_PARAMETERIZED_FACTORY.search(reference)),
    )
    return conventions, dimensions


__all__ = [
    "KNOWN_CATEGORIES",
    "detect_kotlin_conventions",
    "detect_naming_case",
    "detect_object_name",
    "detect_package",
    "extract_kotlin_color_class_info",
]
