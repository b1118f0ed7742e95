"""Typography convention heuristics for SCSS, TypeScript, Swift and Kotlin references."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence

from .base import (
    BEST_PRACTICE_TYPOGRAPHY,
    DEFAULT_KOTLIN_PACKAGE,
    KotlinTypography,
    KotlinTypographyScope,
    ScssTypography,
    SwiftTypography,
    TsTypography,
    TypographyConventions,
)
from .classify import classify_kotlin_typography_reference
from .references import detect_kotlin_typography_bugs

_SCSS_VAR_LINE = re.compile(r"^\$[\w-]+:\s")
_SCSS_VAR_PREFIX = re.compile(r"^\$([\w-]+?)-(?:size|height|spacing|weight)")
_MIXIN_LINE = re.compile(r"^@mixin\s+([\w-]+)")


def _common_mixin_prefix(names: Sequence[str]) -> str:
    """Longest hyphen-aligned prefix shared by every mixin name."""

    if not names:
        return "font-"
    prefix = ""
    for segment in names[0].split("-"):
        candidate = f"{prefix}{segment}-"
        if all(name.startswith(candidate) for name in names):
            prefix = candidate
        else:
            break
    return prefix or "font-"


def detect_scss_typography(content: str) -> ScssTypography:
    lines = content.split("\n")
    var_lines = [line for line in lines if _SCSS_VAR_LINE.match(line.strip())]
    first_var = var_lines[0].strip() if var_lines else ""
    prefix_match = _SCSS_VAR_PREFIX.match(first_var)
    mixin_names = [m.group(1) for m in (_MIXIN_LINE.match(line.strip()) for line in lines) if m]
    has_mixins = bool(mixin_names)

    return ScssTypography(
        var_prefix=f"${prefix_match.group(1)}-" if prefix_match else "$font-",
        has_css_custom_properties=any(":root" in line or "--" in line for line in lines),
        has_mixins=has_mixins,
        mixin_prefix=_common_mixin_prefix(mixin_names),
        includes_font_family=any(
            "font-family" in line and not line.strip().startswith("//") for line in lines
        ),
        includes_font_weight=any("weight" in line for line in var_lines),
        size_unit="rem" if any(re.search(r"size.*rem", line) for line in var_lines) else "px",
        height_unit="rem" if any(re.search(r"height.*rem", line) for line in var_lines) else "unitless",
        spacing_unit="em"
        if any(re.search(r"spacing.*em", line) and "rem" not in line for line in var_lines)
        else "px",
        two_tier=bool(var_lines) and has_mixins,
    )


def detect_ts_typography(content: str) -> TsTypography:
    lines = content.split("\n")
    exports = [line for line in lines if re.match(r"^export\s+const\s", line.strip())]
    private = [
        line
        for line in lines
        if re.match(r"^const\s+[A-Z]", line.strip()) and not line.strip().startswith("export")
    ]
    screaming = any(re.search(r"export\s+const\s+[A-Z_]+\s", line) for line in exports)
    prefix_match = re.search(r"export\s+const\s+([A-Z]+_)", exports[0].strip()) if exports else None
    interface_line = next(
        (line for line in lines if re.match(r"^(export\s+)?interface\s", line.strip())), None
    )
    interface_match = re.search(r"interface\s+(\w+)", interface_line) if interface_line else None

    return TsTypography(
        naming_case="SCREAMING_SNAKE" if screaming else "camelCase",
        const_prefix=prefix_match.group(1) if prefix_match else "FONT_",
        includes_font_family=any(
            "fontFamily" in line and not line.strip().startswith("//") for line in lines
        ),
        has_interface=interface_line is not None,
        interface_name=interface_match.group(1) if interface_match else None,
        value_format="string" if any(re.search(r"fontSize:\s*'", line) for line in lines) else "number",
        two_tier=bool(private) and any(re.search(r"=\s+[A-Z_]+\s*;", line) for line in exports),
        export_weights=any("WEIGHT" in line for line in exports),
    )


def _swift_data_struct_props(lines: Sequence[str], struct_name: str) -> List[str]:
    props: List[str] = []
    inside = False
    depth = 0
    for line in lines:
        if f"struct {struct_name}" in line:
            inside = True
            depth = 0
        if not inside:
            continue
        depth += line.count("{") - line.count("}")
        match = re.search(r"\b(?:let|var)\s+(\w+)\s*:", line)
        if match:
            props.append(match.group(1))
        if depth <= 0 and "}" in line:
            break
    return props


def detect_swift_typography(content: str) -> SwiftTypography:
    lines = content.split("\n")
    enum_line = next((line for line in lines if re.match(r"^\s*(?:public\s+)?enum\s+\w+", line)), None)
    enum_match = re.search(r"enum\s+(\w+)", enum_line) if enum_line else None
    has_cases = any(re.match(r"^\s*case\s+\w+", line) for line in lines)
    is_enum = enum_match is not None and has_cases
    struct_line = next(
        (
            line
            for line in lines
            if re.match(r"^\s*(?:public\s+)?struct\s+\w+", line) and "ViewModifier" not in line
        ),
        None,
    )
    struct_match = re.search(r"struct\s+(\w+)", struct_line) if struct_line else None
    type_match = enum_match if is_enum else struct_match
    type_name = type_match.group(1) if type_match else "TypographyStyle"

    data_struct: Optional[str] = None
    data_props: List[str] = []
    if is_enum:
        returned = re.search(r"var\s+fontData\s*:\s*(\w+)", content)
        if returned:
            data_struct = returned.group(1)
        else:
            for line in lines:
                found = re.match(r"^\s*(?:public\s+)?struct\s+(\w+)", line)
                if found and found.group(1) != type_name and not re.search(r"ViewModifier|Constants", line):
                    data_struct = found.group(1)
                    break
        if data_struct:
            data_props = _swift_data_struct_props(lines, data_struct)

    has_uikit = any(re.search(r"\bUIFont\b|\bimport\s+UIKit\b", line) for line in lines)
    has_swiftui = any(re.search(r"\bimport\s+SwiftUI\b|\bFont\.system\b|\bFont\.custom\b", line) for line in lines)
    if has_uikit and has_swiftui:
        framework = "both"
    elif has_uikit:
        framework = "uikit"
    else:
        framework = "swiftui"

    dynamic_scaling = False
    dynamic_method: Optional[str] = None
    method_match = re.search(r"\bstatic\s+func\s+(\w+)\s*\(\s*_\s+\w+\s*:\s*CGFloat", content)
    if method_match:
        candidate = method_match.group(1)
        content_size = re.search(r"UIContentSizeCategory|preferredContentSizeCategory", content)
        called = re.search(rf"{re.escape(type_name)}\.{candidate}\(|self\.{candidate}\(", content)
        if content_size or called:
            dynamic_scaling = True
            dynamic_method = candidate

    name_map: Dict[str, str] = {}
    member = re.compile(r"^\s*case\s+(\w+)" if is_enum else r"^\s*static\s+let\s+(\w+)")
    for line in lines:
        found = member.match(line)
        if found:
            name_map[found.group(1).lower()] = found.group(1)

    return SwiftTypography(
        architecture="enum" if is_enum else "struct",
        type_name=type_name,
        data_struct_name=data_struct,
        data_struct_props=tuple(data_props),
        ui_framework=framework,
        includes_tracking=any(
            re.search(r"\btracking\b|\bletterSpacing\b", line, re.IGNORECASE)
            and not line.strip().startswith("//")
            for line in lines
        ),
        uses_dynamic_type_scaling=dynamic_scaling,
        dynamic_type_method_name=dynamic_method,
        name_map=name_map,
    )


def detect_kotlin_typography(
    content: str,
    scope: Optional[KotlinTypographyScope] = None,
) -> KotlinTypography:
    lines = content.split("\n")
    package_line = next((line for line in lines if re.match(r"^\s*package\s+", line)), None)
    package_match = re.search(r"package\s+([\w.]+)", package_line) if package_line else None
    is_immutable = any(re.match(r"^\s*@Immutable\b", line) for line in lines)

    class_line = next(
        (
            line
            for line in lines
            if re.match(r"^\s*class\s+\w+.*constructor", line) or re.match(r"^\s*class\s+\w+\s*\(", line)
        ),
        None,
    )
    class_match = re.search(r"class\s+(\w+)", class_line) if class_line else None
    object_line = next((line for line in lines if re.match(r"^\s*(?:internal\s+)?object\s+\w+", line)), None)
    object_match = re.search(r"object\s+(\w+)", object_line) if object_line else None
    has_companion = any("companion object" in line for line in lines)
    top_level_vals = [
        line
        for line in lines
        if re.match(r"^\s*val\s+\w+", line.strip()) and not re.match(r"^\s*(?:internal\s+)?object", line.strip())
    ]

    architecture = "object"
    container = "TypographyTokens"
    class_name: Optional[str] = None
    if class_match and (is_immutable or re.search(r"internal\s+constructor", content)):
        architecture = "class"
        class_name = container = class_match.group(1)
    elif object_match:
        container = object_match.group(1)
    elif has_companion:
        architecture = "companion"
    elif top_level_vals:
        architecture = "top-level"

    snake_vals = sum(1 for line in lines if re.match(r"^\s*val\s+[a-z]+_[a-z]", line))
    camel_vals = sum(1 for line in lines if re.match(r"^\s*val\s+[a-z]+[A-Z]", line))

    data_class_line = next((line for line in lines if re.match(r"^\s*data\s+class\s+", line)), None)
    data_class_match = re.search(r"data\s+class\s+(\w+)", data_class_line) if data_class_line else None
    data_class = data_class_match.group(1) if data_class_match else None
    data_props: List[str] = []
    if data_class and data_class_line:
        params = re.search(r"\((.*)\)", data_class_line)
        for segment in (params.group(1) if params else "").split(","):
            prop = re.search(r"val\s+(\w+)", segment)
            if prop:
                data_props.append(prop.group(1))

    name_map: Dict[str, str] = {}
    for line in lines:
        found = re.match(r"^\s*val\s+(\w+)\s*[=:]", line)
        if found:
            name_map[found.group(1).lower()] = found.group(1)

    return KotlinTypography(
        architecture=architecture,
        container_name=container,
        class_name=class_name,
        package_name=package_match.group(1) if package_match else DEFAULT_KOTLIN_PACKAGE,
        uses_text_style=any(re.search(r"\bTextStyle\s*\(", line) for line in lines),
        custom_data_class=data_class,
        data_class_props=tuple(data_props),
        includes_m3_builder=any(re.search(r"\bTypography\s*\(", line) or "MaterialTheme" in line for line in lines),
        includes_line_height_style=any(re.search(r"\bLineHeightStyle\s*\(", line) for line in lines),
        naming_style="snake_case" if snake_vals > camel_vals else "camelCase",
        is_immutable=is_immutable,
        name_map=name_map,
        bug_warnings=tuple(detect_kotlin_typography_bugs(content)),
        scope=scope or KotlinTypographyScope(),
    )


def detect_typography_conventions(references: Mapping[str, str]) -> TypographyConventions:
    """Per-platform detection; platforms without a reference keep the defaults."""

    scss_ref = references.get("web-typography-scss")
    ts_ref = references.get("web-typography-ts")
    swift_ref = references.get("ios-typography-swift")
    kotlin_ref = references.get("android-typography-kotlin")
    if not any((scss_ref, ts_ref, swift_ref, kotlin_ref)):
        return BEST_PRACTICE_TYPOGRAPHY

    kotlin = BEST_PRACTICE_TYPOGRAPHY.kotlin
    if kotlin_ref:
        scope = classify_kotlin_typography_reference("Typography.kt", kotlin_ref)
        kotlin = detect_kotlin_typography(kotlin_ref, scope)
    return TypographyConventions(
        scss=detect_scss_typography(scss_ref) if scss_ref else BEST_PRACTICE_TYPOGRAPHY.scss,
        ts=detect_ts_typography(ts_ref) if ts_ref else BEST_PRACTICE_TYPOGRAPHY.ts,
        swift=detect_swift_typography(swift_ref) if swift_ref else BEST_PRACTICE_TYPOGRAPHY.swift,
        kotlin=kotlin,
    )


__all__ = [
    "detect_kotlin_typography",
    "detect_scss_typography",
    "detect_swift_typography",
    "detect_ts_typography",
    "detect_typography_conventions",
]
