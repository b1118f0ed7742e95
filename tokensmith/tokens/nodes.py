"""Typed views over canonical token leaves.

The canonical tree is plain JSON in the Figma DTCG shape. :func:`parse_node`
is the one place that inspects those loosely typed leaves; everything
downstream works with the frozen variants defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .colors import figma_to_hex, hex_to_components

ALIAS_EXTENSION = "com.figma.aliasData"

KNOWN_TOKEN_TYPES = frozenset(
    {
        "color",
        "number",
        "shadow",
        "border",
        "typography",
        "gradient",
        "transition",
        "cubic-bezier",
        "duration",
        "dimension",
        "fontFamily",
        "fontWeight",
        "fontSize",
        "lineHeight",
        "letterSpacing",
        "string",
        "boolean",
        "other",
    }
)


@dataclass(frozen=True)
class ColorValue:
    """sRGB colour with 0..1 components and a canonical hex string."""

    components: Tuple[float, float, float]
    alpha: float = 1.0
    hex: Optional[str] = None
    color_space: str = "srgb"

    @property
    def css(self) -> str:
        """Lowercase ``#rrggbb``, or ``#rrggbbaa`` when translucent."""
        alpha = round(self.alpha, 4)
        if alpha < 1:
            return figma_to_hex(self.components, alpha)
        if self.hex and len(self.hex) == 7:
            return self.hex.lower()
        return figma_to_hex(self.components)


@dataclass(frozen=True)
class TokenNode:
    type: str
    raw: Mapping[str, Any] = field(repr=False, compare=False)
    alias_target: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_alias(self) -> bool:
        return self.alias_target is not None


@dataclass(frozen=True)
class ColorNode(TokenNode):
    value: Optional[ColorValue] = None


@dataclass(frozen=True)
class NumberNode(TokenNode):
    value: Optional[float] = None


@dataclass(frozen=True)
class DimensionNode(TokenNode):
    value: Optional[float] = None
    unit: str = "px"


@dataclass(frozen=True)
class ShadowLayer:
    color: ColorValue
    offset_x: float = 0
    offset_y: float = 0
    blur: float = 0
    spread: float = 0


@dataclass(frozen=True)
class ShadowNode(TokenNode):
    layers: Tuple[ShadowLayer, ...] = ()


@dataclass(frozen=True)
class BorderNode(TokenNode):
    color: Optional[ColorValue] = None
    width: float = 1
    style: str = "solid"


@dataclass(frozen=True)
class GradientStop:
    color: ColorValue
    position: float


@dataclass(frozen=True)
class GradientNode(TokenNode):
    stops: Tuple[GradientStop, ...] = ()
    gradient_type: str = "linear"
    angle: float = 180


@dataclass(frozen=True)
class TypographyNode(TokenNode):
    value: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StringNode(TokenNode):
    value: Optional[str] = None


@dataclass(frozen=True)
class BooleanNode(TokenNode):
    value: Optional[bool] = None


@dataclass(frozen=True)
class ValueNode(TokenNode):
    """Known type without a dedicated variant (duration, fontFamily, ...)."""

    value: Any = None


@dataclass(frozen=True)
class UnknownNode(TokenNode):
    value: Any = None


def is_leaf(obj: Any) -> bool:
    """A mapping with a string ``$type`` is a terminal token leaf."""
    return isinstance(obj, Mapping) and isinstance(obj.get("$type"), str)


def alias_target_of(raw: Mapping[str, Any]) -> Optional[str]:
    extensions = raw.get("$extensions")
    if not isinstance(extensions, Mapping):
        return None
    alias = extensions.get(ALIAS_EXTENSION)
    if not isinstance(alias, Mapping):
        return None
    target = alias.get("targetVariableName")
    return target if isinstance(target, str) and target else None


def parse_color_value(value: Any) -> Optional[ColorValue]:
    """Accept ``{components, alpha, hex}``, ``{r, g, b, a}`` or a hex string."""

    if isinstance(value, str):
        parsed = hex_to_components(value)
        if parsed is None:
            return None
        r, g, b, a = parsed
        return ColorValue((r, g, b), a, figma_to_hex((r, g, b)))
    if not isinstance(value, Mapping):
        return None

    components: Optional[Tuple[float, float, float]] = None
    raw_components = value.get("components")
    if isinstance(raw_components, (list, tuple)) and len(raw_components) >= 3:
        try:
            components = (float(raw_components[0]), float(raw_components[1]), float(raw_components[2]))
        except (TypeError, ValueError):
            components = None
    elif all(key in value for key in ("r", "g", "b")):
        try:
            components = (float(value["r"]), float(value["g"]), float(value["b"]))
        except (TypeError, ValueError):
            components = None

    hex_value = value.get("hex") if isinstance(value.get("hex"), str) else None
    if components is None and hex_value:
        parsed = hex_to_components(hex_value)
        if parsed is not None:
            components = parsed[:3]
    if components is None:
        return None

    alpha_raw = value.get("alpha", value.get("a", 1))
    try:
        alpha = float(alpha_raw)
    except (TypeError, ValueError):
        alpha = 1.0
    color_space = value.get("colorSpace") if isinstance(value.get("colorSpace"), str) else "srgb"
    if not hex_value:
        hex_value = figma_to_hex(components)
    return ColorValue(components, alpha, hex_value, color_space)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        for suffix in ("px", "rem", "em", "ms", "s", "%"):
            if text.endswith(suffix):
                text = text[: -len(suffix)]
                break
        try:
            return float(text)
        except ValueError:
            return None
    if isinstance(value, Mapping) and "value" in value:
        return _as_number(value.get("value"))
    return None


def _parse_shadow(value: Any) -> Tuple[ShadowLayer, ...]:
    entries = value if isinstance(value, list) else [value]
    layers: List[ShadowLayer] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        color = parse_color_value(entry.get("color"))
        if color is None:
            continue
        layers.append(
            ShadowLayer(
                color=color,
                offset_x=_as_number(entry.get("offsetX")) or 0,
                offset_y=_as_number(entry.get("offsetY")) or 0,
                blur=_as_number(entry.get("blur")) or 0,
                spread=_as_number(entry.get("spread")) or 0,
            )
        )
    return tuple(layers)


def _parse_gradient(value: Any) -> Tuple[GradientStop, ...]:
    if not isinstance(value, list):
        return ()
    stops: List[GradientStop] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        color = parse_color_value(entry.get("color"))
        position = entry.get("position")
        if color is None or isinstance(position, bool) or not isinstance(position, (int, float)):
            continue
        stops.append(GradientStop(color, float(position)))
    return tuple(stops)


def parse_node(raw: Mapping[str, Any]) -> TokenNode:
    """Turn one canonical leaf into its typed variant.

    Never raises: a payload that does not match its declared type yields
    the variant with an empty value, which emitters skip.
    """

    token_type = raw.get("$type") if isinstance(raw.get("$type"), str) else ""
    value = raw.get("$value")
    description = raw.get("$description") if isinstance(raw.get("$description"), str) else None
    common: Dict[str, Any] = {
        "type": token_type,
        "raw": raw,
        "alias_target": alias_target_of(raw),
        "description": description,
    }

    if token_type not in KNOWN_TOKEN_TYPES:
        return UnknownNode(value=value, **common)
    if token_type == "color":
        return ColorNode(value=parse_color_value(value), **common)
    if token_type == "number":
        return NumberNode(value=_as_number(value), **common)
    if token_type == "dimension":
        unit = "px"
        if isinstance(value, Mapping) and isinstance(value.get("unit"), str):
            unit = value["unit"]
        elif isinstance(value, str) and value.strip().endswith("rem"):
            unit = "rem"
        return DimensionNode(value=_as_number(value), unit=unit, **common)
    if token_type == "shadow":
        return ShadowNode(layers=_parse_shadow(value), **common)
    if token_type == "border":
        if not isinstance(value, Mapping):
            return BorderNode(**common)
        width = _as_number(value.get("width"))
        style = value.get("style") if isinstance(value.get("style"), str) else "solid"
        return BorderNode(
            color=parse_color_value(value.get("color")),
            width=1 if width is None else width,
            style=style,
            **common,
        )
    if token_type == "gradient":
        extensions = raw.get("$extensions") if isinstance(raw.get("$extensions"), Mapping) else {}
        gradient_type = extensions.get("gradientType") if isinstance(extensions.get("gradientType"), str) else "linear"
        angle = extensions.get("angle")
        if isinstance(angle, bool) or not isinstance(angle, (int, float)):
            angle = 180
        return GradientNode(
            stops=_parse_gradient(value),
            gradient_type=gradient_type,
            angle=float(angle),
            **common,
        )
    if token_type == "typography":
        return TypographyNode(value=dict(value) if isinstance(value, Mapping) else {}, **common)
    if token_type == "string":
        return StringNode(value=value if isinstance(value, str) else None, **common)
    if token_type == "boolean":
        return BooleanNode(value=value if isinstance(value, bool) else None, **common)
    return ValueNode(value=value, **common)


__all__ = [
    "ALIAS_EXTENSION",
    "BooleanNode",
    "BorderNode",
    "ColorNode",
    "ColorValue",
    "DimensionNode",
    "GradientNode",
    "GradientStop",
    "KNOWN_TOKEN_TYPES",
    "NumberNode",
    "ShadowLayer",
    "ShadowNode",
    "StringNode",
    "TokenNode",
    "TypographyNode",
    "UnknownNode",
    "ValueNode",
    "alias_target_of",
    "is_leaf",
    "parse_color_value",
    "parse_node",
]
