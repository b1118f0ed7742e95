"""Swift colour-file convention heuristics."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .base import BEST_PRACTICE_SWIFT, Detection, SwiftConventions, majority

_STATIC_VAR = re.compile(r"static\s+var\s+\w+")
_STATIC_LET = re.compile(r"static\s+let\s+\w+")
_SNAKE_MEMBER = re.compile(r"static\s+(?:let|var)\s+[a-z]+_[a-z]")
_CAMEL_MEMBER = re.compile(r"static\s+(?:let|var)\s+[a-z][a-zA-Z0-9]+[A-Z]")
_ENUM_DECL = re.compile(r"^\s*(?:(fileprivate|private|public|internal)\s+)?enum\s+(\w+)\s*(?::\s*[\w, ]+)?\{", re.MULTILINE)
_EXTENSION_DECL = re.compile(r"\bextension\s+(?:Color|UIColor)\s*\{")
_STRING_HEX = re.compile(r"static\s+(?:let|var)\s+\w+\s*(?::\s*String\s*)?=\s*\"#?[0-9A-Fa-f]{6,8}\"")
_NUMERIC_HEX = re.compile(r"Color\(hex:\s*0x[0-9A-Fa-f]+\)")
_FLAT_LIGHT = re.compile(r"static\s+(?:let|var)\s+\w+Light\s*(?::\s*String\s*)?=")
_FLAT_DARK = re.compile(r"static\s+(?:let|var)\s+\w+Dark\s*(?::\s*String\s*)?=")
_INDENTED_STATIC = re.compile(r"^([ \t]+)(?:public\s+|private\s+|fileprivate\s+)?static\s", re.MULTILINE)
_IMPORT = re.compile(r"^import\s+(\w+)", re.MULTILINE)


def detect_binding_keyword(reference: str) -> Detection:
    """``static var`` only wins when the file never uses ``static let``."""

    has_var = bool(_STATIC_VAR.search(reference))
    has_let = bool(_STATIC_LET.search(reference))
    if not has_var and not has_let:
        return Detection(False)
    return Detection(has_var and not has_let, 1.0, int(has_var) + int(has_let))


def detect_naming_case(reference: str) -> Detection:
    counts = {
        "camel": len(_CAMEL_MEMBER.findall(reference)),
        "snake": len(_SNAKE_MEMBER.findall(reference)),
    }
    if counts["snake"] > counts["camel"]:
        total = counts["snake"] + counts["camel"]
        return Detection("snake", counts["snake"] / total, total)
    return majority(counts, "camel")


def detect_indent(reference: str) -> Detection:
    indents = [match.group(1) for match in _INDENTED_STATIC.finditer(reference)]
    if not indents:
        return Detection(BEST_PRACTICE_SWIFT.indent)
    counts: Dict[str, int] = {}
    for indent in indents:
        counts[indent] = counts.get(indent, 0) + 1
    return majority(counts, indents[0])


def detect_container(reference: str) -> Tuple[Detection, List[Tuple[str, str]]]:
    enums = [(match.group(1) or "", match.group(2)) for match in _ENUM_DECL.finditer(reference)]
    extensions = len(_EXTENSION_DECL.findall(reference))
    counts = {"extension": extensions, "enum": len(enums)}
    if not enums and not extensions:
        return Detection(BEST_PRACTICE_SWIFT.container_style), enums
    if enums and not extensions:
        return Detection("enum", 1.0, len(enums)), enums
    return majority(counts, "extension"), enums


def detect_primitive_format(reference: str) -> Detection:
    counts = {
        "colorHex": len(_NUMERIC_HEX.findall(reference)),
        "stringHex": len(_STRING_HEX.findall(reference)),
    }
    return majority(counts, BEST_PRACTICE_SWIFT.primitive_format)


def detect_semantic_format(reference: str) -> Detection:
    light = len(_FLAT_LIGHT.findall(reference))
    dark = len(_FLAT_DARK.findall(reference))
    if light and dark:
        return Detection("flatLightDark", 1.0, light + dark)
    return Detection(BEST_PRACTICE_SWIFT.semantic_format)


def detect_imports(reference: str) -> Tuple[str, ...]:
    imports: List[str] = []
    for name in _IMPORT.findall(reference):
        if name not in imports:
            imports.append(name)
    return tuple(imports) or BEST_PRACTICE_SWIFT.imports


def detect_swift_conventions(
    reference: Optional[str],
) -> Tuple[SwiftConventions, Dict[str, Detection]]:
    if not reference:
        return BEST_PRACTICE_SWIFT, {}

    container, enums = detect_container(reference)
    dimensions = {
        "swift.naming_case": detect_naming_case(reference),
        "swift.computed_var": detect_binding_keyword(reference),
        "swift.container": container,
        "swift.primitive_format": detect_primitive_format(reference),
        "swift.semantic_format": detect_semantic_format(reference),
        "swift.indent": detect_indent(reference),
    }

    primitive_enum = enums[0] if enums else ("", BEST_PRACTICE_SWIFT.primitive_enum_name)
    semantic_enum = enums[1][1] if len(enums) > 1 else BEST_PRACTICE_SWIFT.semantic_enum_name
    api_enum = enums[2][1] if len(enums) > 2 else BEST_PRACTICE_SWIFT.api_enum_name
    container_style = container.value
    semantic_format = dimensions["swift.semantic_format"].value

    conventions = SwiftConventions(
        naming_case=dimensions["swift.naming_case"].value,
        use_computed_var=dimensions["swift.computed_var"].value,
        container_style=container_style,
        primitive_format=dimensions["swift.primitive_format"].value,
        semantic_format=semantic_format,
        primitive_enum_name=primitive_enum[1],
        primitive_access=primitive_enum[0],
        semantic_enum_name=semantic_enum,
        api_enum_name=api_enum,
        generate_api_tier=container_style == "enum" and semantic_format == "flatLightDark",
        indent=dimensions["swift.indent"].value,
        imports=detect_imports(reference),
    )
    return conventions, dimensions


__all__ = [
    "detect_binding_keyword",
    "detect_container",
    "detect_imports",
    "detect_indent",
    "detect_naming_case",
    "detect_primitive_format",
    "detect_semantic_format",
    "detect_swift_conventions",
]
