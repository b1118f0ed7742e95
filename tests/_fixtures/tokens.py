"""Helper utilities for constructing Figma-shaped token exports in tests."""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from tokensmith.tokens.nodes import ALIAS_EXTENSION


def _components(hex_value: str) -> list[float]:
    digits = hex_value.lstrip("#")
    return [int(digits[index : index + 2], 16) / 255 for index in (0, 2, 4)]


def color(hex_value: str, *, alpha: float = 1.0, alias: Optional[str] = None) -> Dict[str, Any]:
    """A ``color`` leaf as Figma exports it, optionally aliasing ``alias``."""

    leaf: Dict[str, Any] = {
        "$type": "color",
        "$value": {
            "colorSpace": "srgb",
            "components": _components(hex_value),
            "alpha": alpha,
            "hex": hex_value.upper(),
        },
    }
    if alias:
        leaf["$extensions"] = {ALIAS_EXTENSION: {"targetVariableName": alias}}
    return leaf


def number(value: float, *, alias: Optional[str] = None) -> Dict[str, Any]:
    leaf: Dict[str, Any] = {"$type": "number", "$value": value}
    if alias:
        leaf["$extensions"] = {ALIAS_EXTENSION: {"targetVariableName": alias}}
    return leaf


def alias(target: str, token_type: str = "color") -> Dict[str, Any]:
    """A leaf that only carries an alias (no resolved value)."""
    return {"$type": token_type, "$extensions": {ALIAS_EXTENSION: {"targetVariableName": target}}}


class TokenTreeBuilder:
    """Utility for assembling nested token trees from slash paths."""

    def __init__(self) -> None:
        self.tree: Dict[str, Any] = {}

    def add(self, path: str, leaf: Dict[str, Any]) -> "TokenTreeBuilder":
        node = self.tree
        *groups, name = path.split("/")
        for group in groups:
            node = node.setdefault(group, {})
        node[name] = leaf
        return self

    def color(self, path: str, hex_value: str, **kwargs: Any) -> "TokenTreeBuilder":
        return self.add(path, color(hex_value, **kwargs))

    def number(self, path: str, value: float, **kwargs: Any) -> "TokenTreeBuilder":
        return self.add(path, number(value, **kwargs))

    def build(self) -> Dict[str, Any]:
        """Return a deep copy so tests can keep mutating the builder."""
        return copy.deepcopy(self.tree)


def light_tree() -> Dict[str, Any]:
    """Light-mode semantics aliasing a small grey/blue palette."""

    return (
        TokenTreeBuilder()
        .color("Fill/Standard/Primary", "#F2F2F2", alias="Colour/Grey/50")
        .color("Text/Primary", "#1D1D1D", alias="Colour/Grey/750")
        .color("Background/Static/Brand", "#0066FF", alias="Colour/Blue/500")
        .color("Stroke/Subtle", "#1D1D1D", alpha=0.5, alias="Colour/Grey_Alpha/750_50")
        .build()
    )


def dark_tree() -> Dict[str, Any]:
    return (
        TokenTreeBuilder()
        .color("Fill/Standard/Primary", "#1D1D1D", alias="Colour/Grey/750")
        .color("Text/Primary", "#FFFFFF", alias="Colour/Grey/0")
        .color("Background/Static/Brand", "#0066FF", alias="Colour/Blue/500")
        .color("Stroke/Subtle", "#1D1D1D", alpha=0.5, alias="Colour/Grey_Alpha/750_50")
        .build()
    )


def values_tree() -> Dict[str, Any]:
    """Spacing, composite and motion tokens in one values export."""

    return (
        TokenTreeBuilder()
        .number("Integer/0", 0)
        .number("Integer/4", 4)
        .number("Integer/50", 50)
        .number("Integer/Neg4", -4)
        .number("Integer/999", 999)
        .number("Elevation/Level1/opacity", 50)
        .add(
            "Elevation/Low",
            {
                "$type": "shadow",
                "$value": {"color": "#00000033", "offsetX": 0, "offsetY": 2, "blur": 4, "spread": 0},
            },
        )
        .add(
            "Border/Default",
            {"$type": "border", "$value": {"color": "#D9D9D9", "width": 1, "style": "solid"}},
        )
        .number("Corner/Small", 4)
        .number("Corner/Large", 16)
        .add(
            "Gradient/Brand",
            {
                "$type": "gradient",
                "$value": [{"color": "#0066FF", "position": 0}, {"color": "#00CCFF", "position": 1}],
            },
        )
        .number("Motion/Duration/Fast", 0.15)
        .add("Motion/Easing/Standard", {"$type": "cubic-bezier", "$value": [0.4, 0, 0.2, 1]})
        .build()
    )


def typography_tree() -> Dict[str, Any]:
    def style(family: str, size: float, weight: Any, line_height: float, spacing: float) -> Dict[str, Any]:
        return {
            "$type": "typography",
            "$value": {
                "fontFamily": family,
                "fontSize": size,
                "fontWeight": weight,
                "lineHeight": line_height,
                "letterSpacing": spacing,
            },
        }

    return {
        "typography": {
            "droid/body/body-R": style("Inter", 16, 400, 24, 0.5),
            "droid/body/body-R (underline)": style("Inter", 16, 400, 24, 0.5),
            "ios/body/body-R": style("SF Pro Text", 17, "Regular", 22, 0),
        }
    }


__all__ = [
    "TokenTreeBuilder",
    "alias",
    "color",
    "dark_tree",
    "light_tree",
    "number",
    "typography_tree",
    "values_tree",
]
