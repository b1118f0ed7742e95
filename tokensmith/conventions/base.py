"""Convention descriptors consumed by every emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

DEFAULT_KOTLIN_PACKAGE = "com.example.design"


@dataclass(frozen=True)
class Detection:
    """Outcome of one isolated heuristic.

    ``confidence`` is the winning share of the matched signal, or ``None``
    when the reference text carried no signal for the dimension at all.
    """

    value: Any
    confidence: Optional[float] = None
    evidence: int = 0

    @property
    def has_signal(self) -> bool:
        return self.confidence is not None


def majority(counts: Mapping[str, int], default: str) -> Detection:
    """Pick the key with the highest count; earlier keys win ties."""

    total = sum(counts.values())
    if total == 0:
        return Detection(default, None, 0)
    winner = default
    best = -1
    for key, count in counts.items():
        if count > best:
            winner, best = key, count
    return Detection(winner, best / total, total)


@dataclass(frozen=True)
class WebConventions:
    scss_prefix: str = "$"
    scss_separator: str = "hyphen"
    ts_prefix: str = "export const "
    ts_naming_case: str = "screaming_snake"
    import_style: str = "use"
    import_suffix: str = ""
    has_type_annotations: bool = True
    scss_color_structure: str = "modern"
    ts_hex_casing: str = "lower"
    ts_uses_as_const: bool = False

    @property
    def separator(self) -> str:
        return "_" if self.scss_separator == "underscore" else "-"


@dataclass(frozen=True)
class SwiftConventions:
    naming_case: str = "camel"
    use_computed_var: bool = False
    container_style: str = "extension"
    primitive_format: str = "colorHex"
    semantic_format: str = "dynamic"
    primitive_enum_name: str = "primitiveColorCode"
    primitive_access: str = ""
    semantic_enum_name: str = "ColorCodes"
    api_enum_name: str = "ColorStyle"
    generate_api_tier: bool = False
    indent: str = "  "
    imports: Tuple[str, ...] = ("SwiftUI",)


@dataclass(frozen=True)
class KotlinConventions:
    naming_case: str = "camel"
    object_name: str = "AppColors"
    kotlin_package: str = DEFAULT_KOTLIN_PACKAGE
    architecture: str = "single"
    primitive_style: str = "object"
    semantic_categories: Tuple[str, ...] = ()
    class_prefix: str = ""
    uses_composition_local: bool = False
    uses_enum: bool = False
    uses_mutable_state: bool = False
    uses_internal_set: bool = False
    uses_copy_method: bool = False
    uses_parameterized_factories: bool = False

    @property
    def primitives_object(self) -> str:
        return "Primitives" if self.object_name == "AppColors" else f"{self.object_name}Primitives"

    @property
    def light_object(self) -> str:
        return "LightColorTokens" if self.object_name == "AppColors" else f"{self.object_name}Light"

    @property
    def dark_object(self) -> str:
        return "DarkColorTokens" if self.object_name == "AppColors" else f"{self.object_name}Dark"


@dataclass(frozen=True)
class ScssTypography:
    var_prefix: str = "$typo-"
    has_css_custom_properties: bool = True
    has_mixins: bool = True
    mixin_prefix: str = "typo-"
    includes_font_family: bool = True
    includes_font_weight: bool = True
    size_unit: str = "rem"
    height_unit: str = "unitless"
    spacing_unit: str = "em"
    two_tier: bool = False


@dataclass(frozen=True)
class TsTypography:
    naming_case: str = "camelCase"
    const_prefix: str = "typo"
    includes_font_family: bool = True
    has_interface: bool = True
    interface_name: Optional[str] = "TypographyToken"
    value_format: str = "number"
    two_tier: bool = False
    export_weights: bool = False


@dataclass(frozen=True)
class SwiftTypography:
    architecture: str = "struct"
    type_name: str = "TypographyStyle"
    data_struct_name: Optional[str] = None
    data_struct_props: Tuple[str, ...] = ()
    ui_framework: str = "swiftui"
    includes_tracking: bool = True
    uses_dynamic_type_scaling: bool = False
    dynamic_type_method_name: Optional[str] = None
    name_map: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class KotlinTypographyScope:
    generate_definition: bool = True
    generate_accessor: bool = False
    definition_filename: Optional[str] = None
    accessor_class_name: Optional[str] = None
    accessor_container_ref: Optional[str] = None
    accessor_filename: Optional[str] = None


@dataclass(frozen=True)
class KotlinTypography:
    architecture: str = "object"
    container_name: str = "TypographyTokens"
    class_name: Optional[str] = None
    package_name: str = DEFAULT_KOTLIN_PACKAGE
    uses_text_style: bool = True
    custom_data_class: Optional[str] = None
    data_class_props: Tuple[str, ...] = ()
    includes_m3_builder: bool = True
    includes_line_height_style: bool = False
    naming_style: str = "camelCase"
    is_immutable: bool = False
    name_map: Dict[str, str] = field(default_factory=dict)
    bug_warnings: Tuple[str, ...] = ()
    scope: KotlinTypographyScope = field(default_factory=KotlinTypographyScope)


@dataclass(frozen=True)
class TypographyConventions:
    scss: ScssTypography = field(default_factory=ScssTypography)
    ts: TsTypography = field(default_factory=TsTypography)
    swift: SwiftTypography = field(default_factory=SwiftTypography)
    kotlin: KotlinTypography = field(default_factory=KotlinTypography)


@dataclass(frozen=True)
class DetectedConventions:
    """Immutable convention descriptor for one generation run."""

    web: WebConventions = field(default_factory=WebConventions)
    swift: SwiftConventions = field(default_factory=SwiftConventions)
    kotlin: KotlinConventions = field(default_factory=KotlinConventions)
    typography: TypographyConventions = field(default_factory=TypographyConventions)
    dimensions: Mapping[str, Detection] = field(default_factory=dict)
    best_practices: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", MappingProxyType(dict(self.dimensions)))

    @property
    def mode(self) -> str:
        return "best-practices" if self.best_practices else "match-existing"

    @property
    def confidence(self) -> float:
        """Minimum confidence over dimensions that saw any signal (1.0 if none did)."""
        scores = [item.confidence for item in self.dimensions.values() if item.confidence is not None]
        return min(scores) if scores else 1.0

    def low_confidence(self, threshold: float) -> List[str]:
        return sorted(
            name
            for name, item in self.dimensions.items()
            if item.confidence is not None and item.confidence < threshold
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "confidence": self.confidence,
            "dimensions": {
                name: {"value": item.value, "confidence": item.confidence, "evidence": item.evidence}
                for name, item in sorted(self.dimensions.items())
            },
        }


BEST_PRACTICE_WEB = WebConventions()
BEST_PRACTICE_SWIFT = SwiftConventions()
BEST_PRACTICE_KOTLIN = KotlinConventions()
BEST_PRACTICE_TYPOGRAPHY = TypographyConventions()


__all__ = [
    "BEST_PRACTICE_KOTLIN",
    "BEST_PRACTICE_SWIFT",
    "BEST_PRACTICE_TYPOGRAPHY",
    "BEST_PRACTICE_WEB",
    "DEFAULT_KOTLIN_PACKAGE",
    "Detection",
    "DetectedConventions",
    "KotlinConventions",
    "KotlinTypography",
    "KotlinTypographyScope",
    "ScssTypography",
    "SwiftConventions",
    "SwiftTypography",
    "TsTypography",
    "TypographyConventions",
    "WebConventions",
    "majority",
]
