"""Kotlin colour emitter for Jetpack Compose.

Single-file architecture writes ``Color.kt`` (primitives) and ``Colors.kt``
(light/dark token objects plus Material3 builders). Multi-file architecture,
detected from ``class R<Category>Colors`` in the reference, writes one
``<Prefix><Category>Colors.kt`` per top-level category.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from ..conventions import KotlinConventions
from ..conventions.references import (
    bug_warning_block,
    create_new_detector,
    detect_kotlin_color_bugs,
    detect_renames,
    family_markers,
    new_token_comment,
)
from ..models import GeneratedFile
from ..tokens.colors import figma_to_kotlin_hex
from .base import EmitContext, Emitter, render_lines
from .formatting import capitalize, to_camel, to_pascal
from .palette import Palette, PrimitiveEntry, SemanticEntry, collect_palette

_ROLE = "android-colors-kotlin"

_RUNTIME_IMPORTS = [
    "import androidx.compose.material3.MaterialTheme",
    "import androidx.compose.runtime.Composable",
    "import androidx.compose.runtime.compositionLocalOf",
    "import androidx.compose.runtime.getValue",
    "import androidx.compose.runtime.mutableStateOf",
    "import androidx.compose.runtime.setValue",
    "import androidx.compose.runtime.structuralEqualityPolicy",
]

_M3_ROLES = [
    ("primary", "fillPrimary"),
    ("onPrimary", "textOnPrimary"),
    ("background", "backgroundDefault"),
    ("surface", "backgroundSurface"),
    ("onSurface", "textPrimary"),
    ("outline", "strokeDefault"),
]


def _join(words: List[str], naming_case: str) -> str:
    return to_pascal(words) if naming_case == "pascal" else to_camel(words)


def primitive_kotlin_name(entry: PrimitiveEntry, conventions: KotlinConventions) -> str:
    return _join(entry.words, conventions.naming_case)


def semantic_kotlin_name(entry: SemanticEntry, conventions: KotlinConventions) -> str:
    return _join(entry.words, conventions.naming_case)


def color_literal(entry: PrimitiveEntry) -> str:
    """``Color(0xAARRGGBB)``: Compose reads the alpha byte first."""
    return f"Color({figma_to_kotlin_hex(entry.color.components, entry.color.alpha)})"


class _Renderer:
    def __init__(self, palette: Palette, context: EmitContext) -> None:
        self.palette = palette
        self.context = context
        self.conventions = context.conventions.kotlin
        reference = context.reference(_ROLE)
        self.renames: Dict[str, str] = detect_renames(reference)
        self.is_new: Callable[[str], bool] = create_new_detector(reference)
        self.bugs = detect_kotlin_color_bugs(reference) if reference else []

    def _head(self, filename: str, imports: List[str], bugs: bool = False) -> List[str]:
        lines = self.context.header(filename, "//", _ROLE)
        if bugs:
            lines.extend(bug_warning_block(self.bugs, "//"))
        lines.extend([f"package {self.conventions.kotlin_package}", ""])
        lines.extend(imports)
        lines.append("")
        return lines

    def _markers(self, family: str, indent: str) -> List[str]:
        return [
            f"{indent}{comment}"
            for comment in family_markers(family, self.renames, self.is_new, "//", capitalize(family))
        ]

    def _new(self, name: str, indent: str = "    ") -> List[str]:
        if not self.is_new(name):
            return []
        return [f"{indent}{comment}" for comment in new_token_comment("//")]

    def primitives_object(self) -> List[str]:
        lines = ["// Primitive color palette", f"object {self.conventions.primitives_object} {{"]
        for family, entries in self.palette.families():
            lines.extend(self._markers(family, "    "))
            lines.append(f"    // {capitalize(family)}")
            for entry in entries:
                lines.append(f"    val {primitive_kotlin_name(entry, self.conventions)} = {color_literal(entry)}")
        lines.extend(["}", ""])
        return lines

    def palette_objects(self) -> List[str]:
        lines: List[str] = []
        for family, entries in self.palette.families():
            lines.extend(self._markers(family, ""))
            lines.append(f"object {self._palette_name(family)} {{")
            for entry in entries:
                lines.append(f"    val color{to_pascal(entry.words)} = {color_literal(entry)}")
            lines.extend(["}", ""])
        return lines

    @staticmethod
    def _palette_name(family: str) -> str:
        return to_pascal(family.split("-")) + "Palette"

    def color_kt(self) -> GeneratedFile:
        lines = self._head("Color.kt", ["import androidx.compose.ui.graphics.Color"], bugs=True)
        if self.conventions.architecture == "multi-file" and self.conventions.primitive_style == "palette-objects":
            lines.extend(self.palette_objects())
        else:
            lines.extend(self.primitives_object())
        return GeneratedFile("Color.kt", render_lines(lines), "kotlin", "android")

    def _m3_builder(self, function: str, factory: str, token_object: str) -> List[str]:
        lines = ['@Suppress("UnusedReceiverParameter")', f"fun {function}(): ColorScheme = {factory}("]
        for role, token in _M3_ROLES:
            lines.append(f"    // {role:<17} = {token_object}.{token},")
        lines.extend([")", ""])
        return lines

    def colors_kt(self) -> GeneratedFile:
        conventions = self.conventions
        imports = [
            "import androidx.compose.material3.ColorScheme",
            "import androidx.compose.material3.darkColorScheme",
            "import androidx.compose.material3.lightColorScheme",
            "import androidx.compose.ui.graphics.Color",
        ]
        lines = self._head("Colors.kt", imports)
        prims = conventions.primitives_object
        for title, object_name, dark in (
            ("Light", conventions.light_object, False),
            ("Dark", conventions.dark_object, True),
        ):
            lines.append(f"// {title} theme semantic tokens")
            lines.append(f"object {object_name} {{")
            for entry in self.palette.semantics:
                name = semantic_kotlin_name(entry, conventions)
                primitive = entry.dark if dark and not entry.is_static else entry.light
                lines.extend(self._new(name))
                lines.append(f"    val {name} = {prims}.{primitive_kotlin_name(primitive, conventions)}")
            lines.extend(["}", ""])

        lines.append("// Material3 ColorScheme builders — plug into MaterialTheme")
        lines.append("// TODO: map your semantic tokens to Material3 color roles below.")
        lines.extend(self._m3_builder("lightColors", "lightColorScheme", conventions.light_object))
        lines.extend(self._m3_builder("darkColors", "darkColorScheme", conventions.dark_object))
        return GeneratedFile("Colors.kt", render_lines(lines), "kotlin", "android")

    def _resolve(self, entry: PrimitiveEntry) -> str:
        if self.conventions.primitive_style == "palette-objects":
            return f"{self._palette_name(entry.family)}.color{to_pascal(entry.words)}"
        return f"{self.conventions.primitives_object}.{primitive_kotlin_name(entry, self.conventions)}"

    def _factory(self, category: str, class_name: str, mode: str, entries: List[SemanticEntry]) -> List[str]:
        conventions = self.conventions
        cat = capitalize(category)
        names = [semantic_kotlin_name(entry, conventions) for entry in entries]
        values = [
            self._resolve(entry.dark if mode == "Dark" and not entry.is_static else entry.light)
            for entry in entries
        ]
        lines: List[str] = []
        if conventions.uses_parameterized_factories:
            lines.append(f"fun {category}{mode}Colors(")
            lines.extend(f"    {name}: Color," for name in names)
            lines.append(f"    ): {class_name} = {class_name}(")
            lines.extend(f"    {name} = {name}," for name in names)
            lines.append(")")
            lines.append(f"val {cat}{mode}ColorScheme = {category}{mode}Colors(")
        else:
            lines.append(f"fun {category}{mode}Colors() = {class_name}(")
        for name, value in zip(names, values):
            lines.extend(self._new(name))
            lines.append(f"    {name} = {value},")
        lines.extend([")", ""])
        return lines

    def category_file(self, category: str, entries: List[SemanticEntry]) -> GeneratedFile:
        conventions = self.conventions
        prefix = conventions.class_prefix
        cat = capitalize(category)
        class_name = f"{prefix}{cat}Colors"
        enum_name = f"{prefix}{cat}Color"
        filename = f"{class_name}.kt"
        names = [semantic_kotlin_name(entry, conventions) for entry in entries]

        imports: List[str] = []
        if conventions.uses_composition_local or conventions.uses_mutable_state:
            imports.extend(_RUNTIME_IMPORTS)
        imports.append("import androidx.compose.ui.graphics.Color")
        lines = self._head(filename, imports)

        if conventions.uses_enum:
            lines.append(f"enum class {enum_name} {{")
            lines.extend(f"    {name.upper()}," for name in names)
            lines.extend(["    ;", "    val color: Color", "        @Composable", "        get() = when (this) {"])
            lines.extend(f"            {name.upper()} -> MaterialTheme.Local{cat}Colors.{name}" for name in names)
            lines.extend(["        }", "}", ""])

        if conventions.uses_mutable_state:
            lines.append(f"class {class_name}(")
            lines.extend(f"    {name}: Color," for name in names)
            lines.append(") {")
            for name in names:
                lines.append(f"    var {name} by mutableStateOf({name}, structuralEqualityPolicy())")
                if conventions.uses_internal_set:
                    lines.append("        internal set")
            lines.append("")
            if conventions.uses_copy_method:
                lines.extend(["", "    fun copy("])
                lines.extend(f"        {name}: Color = this.{name}," for name in names)
                lines.append(f"    ): {class_name} = {class_name}(")
                lines.extend(f"        {name} = {name}," for name in names)
                lines.append("    )")
            else:
                lines.append(f"    fun updateFrom(other: {class_name}) {{")
                lines.extend(f"        {name} = other.{name}" for name in names)
                lines.append("    }")
            lines.extend(["}", ""])

        lines.extend(self._factory(category, class_name, "Dark", entries))
        lines.extend(self._factory(category, class_name, "Light", entries))
        if not conventions.uses_parameterized_factories:
            lines.extend(
                [
                    f"val {cat}DarkColorScheme = {category}DarkColors()",
                    f"val {cat}LightColorScheme = {category}LightColors()",
                    "",
                ]
            )

        if conventions.uses_composition_local:
            lines.extend(
                [
                    f"val Local{cat}Color = compositionLocalOf {{ {cat}LightColorScheme }}",
                    "",
                    f"val MaterialTheme.Local{cat}Colors",
                    "    @Composable",
                    f"    get() = Local{cat}Color.current",
                    "",
                ]
            )
        return GeneratedFile(filename, render_lines(lines), "kotlin", "android")

    def category_files(self) -> List[GeneratedFile]:
        grouped: Dict[str, List[SemanticEntry]] = {}
        for entry in self.palette.semantics:
            grouped.setdefault(entry.path[0].lower() if entry.path else "other", []).append(entry)
        return [self.category_file(category, entries) for category, entries in grouped.items()]


def render_kotlin_files(palette: Palette, context: EmitContext) -> List[GeneratedFile]:
    if not palette.primitives:
        return []
    renderer = _Renderer(palette, context)
    files = [renderer.color_kt()]
    if context.conventions.kotlin.architecture == "multi-file":
        files.extend(renderer.category_files())
    elif palette.semantics:
        files.append(renderer.colors_kt())
    return files


class KotlinEmitter(Emitter):
    name = "kotlin"

    def supports(self, context: EmitContext) -> bool:
        return context.wants("android")

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        palette = collect_palette(context.light, context.dark, context.primitives)
        return render_kotlin_files(palette, context)


__all__ = [
    "KotlinEmitter",
    "color_literal",
    "primitive_kotlin_name",
    "render_kotlin_files",
    "semantic_kotlin_name",
]
