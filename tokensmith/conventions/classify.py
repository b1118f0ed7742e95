"""Route uploaded reference files to the roles the detectors expect."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, Iterable, List, Optional, Tuple

from .base import KotlinTypographyScope
from .kotlin import extract_kotlin_color_class_info

RefEntry = Tuple[str, str]

_PRIMITIVE_MARKER = re.compile(r"\$[\w-]+-\d+:|--[\w-]+-\d+:|_[A-Z]+_\d+\s*=")
_PRIMITIVE_CONST = re.compile(r"export\s+const\s+[A-Z]+_\d+")


def _extension(filename: str) -> str:
    return PurePath(filename).suffix.lower().lstrip(".")


def classify_web_color_files(entries: Iterable[RefEntry]) -> Dict[str, str]:
    """Split SCSS/CSS/TS colour files into primitives vs semantic colour roles.

    Later files win when two land on the same role.
    """

    roles: Dict[str, str] = {}
    for filename, content in entries:
        ext = _extension(filename)
        is_primitive = bool(
            _PRIMITIVE_MARKER.search(content)
            or _PRIMITIVE_CONST.search(content)
            or "primitive" in filename.lower()
        )
        if ext in ("scss", "css"):
            roles["web-primitives-scss" if is_primitive else "web-colors-scss"] = content
        elif ext == "ts":
            roles["web-primitives-ts" if is_primitive else "web-colors-ts"] = content
    return roles


def classify_web_typography_files(entries: Iterable[RefEntry]) -> Dict[str, str]:
    roles: Dict[str, str] = {}
    for filename, content in entries:
        ext = _extension(filename)
        if ext in ("scss", "css"):
            roles["web-typography-scss"] = content
        elif ext == "ts":
            roles["web-typography-ts"] = content
    return roles


@dataclass(frozen=True)
class KotlinReferenceInfo:
    has_primitives: bool = False
    has_semantics: bool = False
    semantic_categories: Tuple[str, ...] = ()
    warning: Optional[str] = None


def classify_kotlin_reference(entries: Iterable[RefEntry]) -> KotlinReferenceInfo:
    """Report which colour tiers the Kotlin reference files cover."""

    items = list(entries)
    if not items:
        return KotlinReferenceInfo()
    has_primitives = False
    has_semantics = False
    for _filename, content in items:
        if (
            re.search(r"\bobject\s+\w+Palette\b", content)
            or re.search(r"^val\s+\w+\s*=\s*Color\(", content, re.MULTILINE)
            or re.search(r"\bobject\s+(?:Primitives|.*Primitives)\s*\{", content)
        ):
            has_primitives = True
        if re.search(r"\bobject\s+(?:Light|Dark)ColorTokens\b", content):
            has_semantics = True

    combined = "\n".join(content for _filename, content in items)
    prefix, categories = extract_kotlin_color_class_info(combined)
    if categories:
        has_semantics = True

    warning = None
    if re.search(r"\bColor\s*\(", combined) and not has_semantics and not has_primitives:
        warning = (
            "Kotlin reference files were uploaded but no color class pattern was detected. "
            f"Expected a naming convention like `class {prefix}FillColors`, `class {prefix}TextColors`, etc. "
            "Check that your reference file uses a consistent `class <Prefix><Category>Colors` naming pattern."
        )
    unique: List[str] = []
    for category in categories:
        if category not in unique:
            unique.append(category)
    return KotlinReferenceInfo(has_primitives, has_semantics, tuple(unique), warning)


def classify_kotlin_typography_reference(filename: str, content: str) -> KotlinTypographyScope:
    """Decide whether a Kotlin typography file is the style definition or an enum accessor."""

    if re.search(r"\benum\s+class\s+\w+", content) and "MaterialTheme" in content:
        enum_match = re.search(r"\benum\s+class\s+(\w+)", content)
        container = re.search(r"MaterialTheme\.(\w+)\.", content)
        return KotlinTypographyScope(
            generate_definition=False,
            generate_accessor=True,
            accessor_class_name=enum_match.group(1) if enum_match else None,
            accessor_container_ref=container.group(1) if container else None,
            accessor_filename=filename,
        )
    is_definition = (
        re.search(r"\bclass\s+\w+", content)
        and (re.search(r"@Immutable\b", content) or re.search(r"internal\s+constructor", content))
    ) or (re.search(r"\bobject\s+\w+", content) and re.search(r"\bTextStyle\s*\(", content))
    if is_definition:
        return KotlinTypographyScope(definition_filename=filename)
    return KotlinTypographyScope()


def _is_typography_file(filename: str) -> bool:
    return "typo" in PurePath(filename).name.lower()


def classify_reference_files(entries: Iterable[RefEntry]) -> Tuple[Dict[str, str], List[str]]:
    """Assign a reference role to each ``(filename, content)`` pair.

    Filenames mentioning "typo" feed the typography roles; everything else is
    treated as a colour file. Returns the roles plus any classification warnings.
    """

    items = list(entries)
    web_colors = [(name, text) for name, text in items if _extension(name) in ("scss", "css", "ts") and not _is_typography_file(name)]
    web_typography = [(name, text) for name, text in items if _extension(name) in ("scss", "css", "ts") and _is_typography_file(name)]
    kotlin_colors = [(name, text) for name, text in items if _extension(name) == "kt" and not _is_typography_file(name)]

    roles = classify_web_color_files(web_colors)
    roles.update(classify_web_typography_files(web_typography))
    warnings: List[str] = []
    for filename, content in items:
        ext = _extension(filename)
        typography = _is_typography_file(filename)
        if ext == "swift":
            roles["ios-typography-swift" if typography else "ios-colors-swift"] = content
        elif ext == "kt":
            roles["android-typography-kotlin" if typography else "android-colors-kotlin"] = content
        elif ext not in ("scss", "css", "ts"):
            warnings.append(f"Unrecognised reference file type: {filename}")

    info = classify_kotlin_reference(kotlin_colors)
    if info.warning:
        warnings.append(info.warning)
    return roles, warnings


__all__ = [
    "KotlinReferenceInfo",
    "RefEntry",
    "classify_kotlin_reference",
    "classify_kotlin_typography_reference",
    "classify_reference_files",
    "classify_web_color_files",
    "classify_web_typography_files",
]
