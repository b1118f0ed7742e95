"""Web (SCSS + TypeScript) convention heuristics."""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Tuple

from .base import BEST_PRACTICE_WEB, Detection, WebConventions, majority

_HYPHEN_VAR = re.compile(r"\$\w+-\w+")
_UNDERSCORE_VAR = re.compile(r"\$\w+_\w+")
_SCREAMING_CONST = re.compile(r"export\s+const\s+[A-Z][A-Z0-9_]+\s*[:=]")
_CAMEL_CONST = re.compile(r"export\s+const\s+[a-z][a-zA-Z0-9]+\s*[:=]")
_PASCAL_CONST = re.compile(r"export\s+const\s+[A-Z][a-zA-Z0-9]+[a-z][a-zA-Z0-9]*\s*[:=]")
_ANNOTATED_CONST = re.compile(r"export\s+const\s+\w+\s*:\s*string\s*=")
_PLAIN_CONST = re.compile(r"export\s+const\s+\w+\s*=")
_QUOTED_HEX = re.compile(r"['\"`]#([0-9a-fA-F]{3,8})['\"`]")
_AS_CONST_LINE = re.compile(r"^\s*export\s+const\s.*\bas\s+const\s*;?\s*$", re.MULTILINE)
_EXPORT_LINE = re.compile(r"^\s*export\s+const\s", re.MULTILINE)
_USE_RULE = re.compile(r"@use\s")
_IMPORT_RULE = re.compile(r"@import\s")
_PRIMITIVES_IMPORT = re.compile(r"@(?:use|import)\s+['\"]\./_?Primitives(\.scss)?['\"]")

WEB_ROLES = ("web-primitives-scss", "web-colors-scss", "web-primitives-ts", "web-colors-ts")


def detect_separator(scss: Optional[str]) -> Detection:
    if not scss:
        return Detection(BEST_PRACTICE_WEB.scss_separator)
    counts = {
        "hyphen": len(_HYPHEN_VAR.findall(scss)),
        "underscore": len(_UNDERSCORE_VAR.findall(scss)),
    }
    return majority(counts, "hyphen")


def detect_ts_naming_case(ts: Optional[str]) -> Detection:
    """Screaming snake beats Pascal beats camel on equal counts."""

    if not ts:
        return Detection(BEST_PRACTICE_WEB.ts_naming_case)
    counts = {
        "screaming_snake": len(_SCREAMING_CONST.findall(ts)),
        "pascal": len(_PASCAL_CONST.findall(ts)),
        "camel": len(_CAMEL_CONST.findall(ts)),
    }
    return majority(counts, "screaming_snake")


def detect_hex_casing(text: Optional[str]) -> Detection:
    if not text:
        return Detection(BEST_PRACTICE_WEB.ts_hex_casing)
    counts = {"lower": 0, "upper": 0}
    for digits in _QUOTED_HEX.findall(text):
        has_upper = any(ch in "ABCDEF" for ch in digits)
        has_lower = any(ch in "abcdef" for ch in digits)
        if has_upper and not has_lower:
            counts["upper"] += 1
        elif has_lower and not has_upper:
            counts["lower"] += 1
    return majority(counts, "lower")


def detect_import_style(scss: Optional[str]) -> Detection:
    # No signal at all means the legacy rule, unlike the no-reference default.
    if not scss:
        return Detection("import")
    uses = len(_USE_RULE.findall(scss))
    imports = len(_IMPORT_RULE.findall(scss))
    # Any @use means the file is on the module system.
    if uses:
        return Detection("use", 1.0, uses + imports)
    if imports:
        return Detection("import", 1.0, imports)
    return Detection("import")


def detect_import_suffix(scss: Optional[str]) -> Detection:
    if not scss:
        return Detection("")
    match = _PRIMITIVES_IMPORT.search(scss)
    if not match:
        return Detection("")
    return Detection(match.group(1) or "", 1.0, 1)


def detect_scss_structure(scss: Optional[str]) -> Detection:
    if not scss:
        return Detection("inline")
    has_root = ":root" in scss
    if has_root and "prefers-color-scheme: dark" in scss:
        return Detection("media-query", 1.0, 1)
    if "light-dark(" in scss and not has_root:
        return Detection("inline", 1.0, 1)
    if has_root:
        return Detection("modern", 1.0, 1)
    return Detection("inline")


def detect_type_annotations(ts: Optional[str]) -> Detection:
    if not ts:
        return Detection(False)
    annotated = len(_ANNOTATED_CONST.findall(ts))
    plain = len(_PLAIN_CONST.findall(ts))
    if annotated:
        return Detection(True, 1.0, annotated + plain)
    if plain:
        return Detection(False, 1.0, plain)
    return Detection(False)


def detect_as_const(ts: Optional[str]) -> Detection:
    if not ts:
        return Detection(False)
    exports = len(_EXPORT_LINE.findall(ts))
    if exports == 0:
        return Detection(False)
    with_marker = len(_AS_CONST_LINE.findall(ts))
    without = max(0, exports - with_marker)
    winner = with_marker > without
    return Detection(winner, max(with_marker, without) / exports, exports)


def _join(*texts: Optional[str]) -> Optional[str]:
    joined = "\n".join(text for text in texts if text)
    return joined or None


def detect_web_conventions(
    references: Mapping[str, str],
) -> Tuple[WebConventions, Dict[str, Detection]]:
    """Infer web conventions from whichever web reference roles are present."""

    if not any(references.get(role) for role in WEB_ROLES):
        return BEST_PRACTICE_WEB, {}

    all_scss = _join(references.get("web-primitives-scss"), references.get("web-colors-scss"))
    all_ts = _join(references.get("web-primitives-ts"), references.get("web-colors-ts"))

    dimensions = {
        "web.separator": detect_separator(all_scss),
        "web.ts_naming_case": detect_ts_naming_case(all_ts),
        "web.import_style": detect_import_style(all_scss),
        "web.import_suffix": detect_import_suffix(all_scss),
        "web.scss_structure": detect_scss_structure(references.get("web-colors-scss")),
        "web.type_annotations": detect_type_annotations(all_ts),
        "web.hex_casing": detect_hex_casing(references.get("web-primitives-ts") or all_ts),
        "web.as_const": detect_as_const(all_ts),
    }
    conventions = WebConventions(
        scss_separator=dimensions["web.separator"].value,
        ts_naming_case=dimensions["web.ts_naming_case"].value,
        import_style=dimensions["web.import_style"].value,
        import_suffix=dimensions["web.import_suffix"].value,
        has_type_annotations=dimensions["web.type_annotations"].value,
        scss_color_structure=dimensions["web.scss_structure"].value,
        ts_hex_casing=dimensions["web.hex_casing"].value,
        ts_uses_as_const=dimensions["web.as_const"].value,
    )
    return conventions, dimensions


__all__ = [
    "WEB_ROLES",
    "detect_as_const",
    "detect_hex_casing",
    "detect_import_style",
    "detect_import_suffix",
    "detect_scss_structure",
    "detect_separator",
    "detect_ts_naming_case",
    "detect_type_annotations",
    "detect_web_conventions",
]
