"""Typography.kt for Compose: object, companion, top-level or immutable class.

An optional accessor enum (``LocalTypography.kt``) maps each style to
``MaterialTheme.<container>.<name>`` when the reference code uses one.
"""

from __future__ import annotations

import re
from typing import List

from ...conventions import DEFAULT_KOTLIN_PACKAGE, KotlinTypography
from ...conventions.references import bug_warning_block
from ...models import GeneratedFile
from ..base import EmitContext, render_lines
from ..formatting import fmt_number
from .parsing import TypographyEntry, TypographyValue, group_entries, resolve_name_from_map

KOTLIN_WEIGHTS = {
    100: "FontWeight.Thin",
    200: "FontWeight.ExtraLight",
    300: "FontWeight.Light",
    400: "FontWeight.Normal",
    500: "FontWeight.Medium",
    600: "FontWeight.SemiBold",
    700: "FontWeight.Bold",
    800: "FontWeight.ExtraBold",
    900: "FontWeight.Black",
}

_LAST_SEGMENT = re.compile(r"\.\w+$")

_M3_ROLES = (
    ("displayLarge", "xlargeTitleR"),
    ("headlineLarge", "largeTitleR"),
    ("titleLarge", "title1R"),
    ("bodyLarge", "bodyR"),
    ("bodyMedium", "subheadR"),
    ("bodySmall", "footnoteR"),
    ("labelSmall", "captionR"),
)


def kotlin_weight(weight: float) -> str:
    return KOTLIN_WEIGHTS.get(weight, "FontWeight.Normal")


def letter_spacing_sp(value: float) -> str:
    return "0.sp" if value == 0 else f"({fmt_number(value)}).sp"


def data_class_args(value: TypographyValue, props: List[str]) -> str:
    args: List[str] = []
    for prop in props:
        if prop == "fontWeight":
            args.append(f"fontWeight = {kotlin_weight(value.font_weight)}")
        elif prop == "fontSize":
            args.append(f"fontSize = {fmt_number(value.font_size)}f")
        elif prop == "lineHeight":
            args.append(f"lineHeight = {fmt_number(value.line_height)}f")
        elif prop == "letterSpacing":
            args.append(f"letterSpacing = {fmt_number(value.letter_spacing)}f")
    return ", ".join(args)


def _name(entry: TypographyEntry, conventions: KotlinTypography) -> str:
    return resolve_name_from_map(entry.short_key, conventions.name_map, conventions.naming_style)


def _with_commas(items: List[str]) -> List[str]:
    return [item + ("," if index < len(items) - 1 else "") for index, item in enumerate(items)]


def _definition(entries: List[TypographyEntry], conventions: KotlinTypography, context: EmitContext, filename: str) -> List[str]:
    has_reference = bool(conventions.name_map)
    lines = context.header(filename, "//", "android-typography-kotlin")
    lines.extend(bug_warning_block(conventions.bug_warnings, "//"))
    todo = " // TODO: update to your package name"
    default_package = conventions.package_name == DEFAULT_KOTLIN_PACKAGE
    lines.extend([f"package {conventions.package_name}{todo if not has_reference and default_package else ''}", ""])

    text_style = conventions.uses_text_style or not conventions.custom_data_class
    if conventions.includes_m3_builder:
        lines.append("import androidx.compose.material3.Typography")
    if text_style:
        lines.extend(["import androidx.compose.ui.text.TextStyle", "import androidx.compose.ui.text.font.FontFamily"])
    lines.append("import androidx.compose.ui.text.font.FontWeight")
    if text_style:
        lines.append("import androidx.compose.ui.unit.sp")
    lines.append("")

    if not has_reference:
        lines.extend(
            [
                "// TODO: Replace FontFamily.Default with your registered font family.",
                "// Example: val InterVariable = FontFamily(Font(R.font.inter_variable, FontWeight.Normal),",
                "//                                          Font(R.font.inter_variable_medium, FontWeight.Medium),",
                "//                                          Font(R.font.inter_variable_bold, FontWeight.Bold))",
                "",
            ]
        )

    if conventions.custom_data_class:
        props = ", ".join(
            f"val {prop}: FontWeight" if prop == "fontWeight" else f"val {prop}: Float"
            for prop in conventions.data_class_props
        )
        lines.extend([f"data class {conventions.custom_data_class}({props})", ""])

    architecture = conventions.architecture
    if architecture == "object":
        lines.append(f"object {conventions.container_name} {{")
        indent = "    "
    elif architecture == "companion":
        lines.extend([f"class {conventions.container_name} {{", "    companion object {"])
        indent = "        "
    else:
        indent = ""

    family_comment = "" if has_reference else " // TODO: replace with bundled font"
    for label, group in group_entries(entries).items():
        lines.append(f"{indent}// {label}")
        for entry in group:
            name = _name(entry, conventions)
            value = entry.value
            if conventions.custom_data_class:
                args = data_class_args(value, list(conventions.data_class_props))
                lines.append(f"{indent}val {name} = {conventions.custom_data_class}({args})")
                continue
            lines.extend(
                [
                    f"{indent}val {name} = TextStyle(",
                    f"{indent}    fontFamily = FontFamily.Default,{family_comment}",
                    f"{indent}    fontSize = {fmt_number(value.font_size)}.sp,",
                    f"{indent}    fontWeight = {kotlin_weight(value.font_weight)},",
                    f"{indent}    lineHeight = {fmt_number(value.line_height)}.sp,",
                    f"{indent}    letterSpacing = {letter_spacing_sp(value.letter_spacing)},",
                    f"{indent})",
                ]
            )
        lines.append("")

    if architecture == "companion":
        lines.extend(["    }", "}"])
    elif architecture == "object":
        lines.append("}")
    lines.append("")

    if conventions.includes_m3_builder:
        lines.append("// Material3 Typography builder — pass to MaterialTheme(typography = appTypography())")
        lines.append("// TODO: map your token objects to M3 text style roles below.")
        lines.append("fun appTypography() = Typography(")
        for role, token in _M3_ROLES:
            lines.append(f"    // {role:<14} = {conventions.container_name}.{token},")
        lines.extend([")", ""])
    return lines


def _class(entries: List[TypographyEntry], conventions: KotlinTypography, context: EmitContext, filename: str) -> List[str]:
    class_name = conventions.class_name or conventions.container_name
    names = [_name(entry, conventions) for entry in entries]
    lines = context.header(filename, "//", "android-typography-kotlin")
    lines.extend(bug_warning_block(conventions.bug_warnings, "//"))
    lines.extend([f"package {conventions.package_name}", ""])
    if conventions.is_immutable:
        lines.append("import androidx.compose.runtime.Immutable")
    lines.extend(
        [
            "import androidx.compose.ui.text.TextStyle",
            "import androidx.compose.ui.text.font.FontFamily",
            "import androidx.compose.ui.text.font.FontWeight",
        ]
    )
    if conventions.includes_line_height_style:
        lines.append("import androidx.compose.ui.text.style.LineHeightStyle")
    lines.extend(["import androidx.compose.ui.unit.sp", ""])

    if conventions.is_immutable:
        lines.append("@Immutable")
    lines.append(f"class {class_name} internal constructor(")
    lines.extend(_with_commas([f"    val {name}: TextStyle" for name in names]))
    lines.extend([") {", "", "    constructor(", "        defaultFontFamily: FontFamily = FontFamily.Default,", ""])

    for index, (name, entry) in enumerate(zip(names, entries)):
        value = entry.value
        lines.extend(
            [
                f"        {name}: TextStyle = TextStyle(",
                f"            fontWeight = {kotlin_weight(value.font_weight)},",
                f"            fontSize = {fmt_number(value.font_size)}.sp,",
                f"            lineHeight = {fmt_number(value.line_height)}.sp,",
                f"            letterSpacing = {letter_spacing_sp(value.letter_spacing)},",
            ]
        )
        if conventions.includes_line_height_style:
            lines.extend(
                [
                    "            lineHeightStyle = LineHeightStyle(",
                    "                alignment = LineHeightStyle.Alignment.Center,",
                    "                trim = LineHeightStyle.Trim.None",
                    "            )",
                ]
            )
        lines.append("        )" + ("," if index < len(names) - 1 else ""))
    lines.append("    ) : this(")
    lines.extend(_with_commas([f"        {name} = {name}.withDefaultFontFamily(defaultFontFamily)" for name in names]))
    lines.extend(["    )", "", "    fun copy("])
    lines.extend(_with_commas([f"        {name}: TextStyle = this.{name}" for name in names]))
    lines.append(f"    ): {class_name} = {class_name}(")
    lines.extend(_with_commas([f"        {name} = {name}" for name in names]))
    lines.extend(["    )", ""])

    lines.extend(
        [
            "    override fun equals(other: Any?): Boolean {",
            "        if (this === other) return true",
            f"        if (other !is {class_name}) return false",
        ]
    )
    lines.extend(f"        if ({name} != other.{name}) return false" for name in names)
    lines.extend(["        return true", "    }", ""])

    lines.extend(["    override fun hashCode(): Int {", f"        var result = {names[0]}.hashCode()"])
    lines.extend(f"        result = 31 * result + {name}.hashCode()" for name in names[1:])
    lines.extend(["        return result", "    }", ""])

    lines.extend(
        [
            '    override fun toString(): String = ""',
            "}",
            "",
            "private fun TextStyle.withDefaultFontFamily(default: FontFamily): TextStyle {",
            "    return if (fontFamily != null) this else copy(fontFamily = default)",
            "}",
            "",
        ]
    )
    return lines


def _accessor(entries: List[TypographyEntry], conventions: KotlinTypography, context: EmitContext) -> GeneratedFile:
    scope = conventions.scope
    enum_name = scope.accessor_class_name or "LocalTypography"
    container = scope.accessor_container_ref or "LocalTypography"
    filename = scope.accessor_filename or f"{enum_name}.kt"

    lines = context.header(filename, "//")
    lines.extend(
        [
            f"package {conventions.package_name}",
            "",
            "import androidx.compose.material3.MaterialTheme",
            "import androidx.compose.runtime.Composable",
            "import androidx.compose.ui.text.TextStyle",
        ]
    )
    if conventions.package_name != DEFAULT_KOTLIN_PACKAGE:
        parent = _LAST_SEGMENT.sub("", conventions.package_name)
        lines.append(f"import {parent}.{container}")
    lines.append("")

    lines.append(f"enum class {enum_name} {{")
    names: List[str] = []
    for index, group in enumerate(group_entries(entries).values()):
        if index:
            lines.append("")
        for entry in group:
            name = _name(entry, conventions)
            names.append(name)
            lines.append(f"    {name},")
    lines.extend(["    ;", "    val textStyle: TextStyle", "        @Composable", "        get() = when (this) {"])
    for name in names:
        lines.extend([f"            {name} -> {{", f"                MaterialTheme.{container}.{name}", "            }"])
    lines.extend(["        }", "}", ""])
    return GeneratedFile(filename, render_lines(lines), "kotlin", "android")


def render_typography_kotlin(entries: List[TypographyEntry], context: EmitContext) -> List[GeneratedFile]:
    conventions = context.conventions.typography.kotlin
    scope = conventions.scope
    filename: str = scope.definition_filename or "Typography.kt"
    files: List[GeneratedFile] = []
    if scope.generate_definition:
        render = _class if conventions.architecture == "class" else _definition
        definition = render(entries, conventions, context, filename)
        files.append(GeneratedFile(filename, render_lines(definition), "kotlin", "android"))
    if scope.generate_accessor:
        files.append(_accessor(entries, conventions, context))
    if not files:
        lines = _definition(entries, conventions, context, "Typography.kt")
        files.append(GeneratedFile("Typography.kt", render_lines(lines), "kotlin", "android"))
    return files


__all__ = ["KOTLIN_WEIGHTS", "data_class_args", "kotlin_weight", "letter_spacing_sp", "render_typography_kotlin"]
