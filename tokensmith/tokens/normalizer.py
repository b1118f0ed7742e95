"""Normalize W3C DTCG and Tokens Studio exports into the Figma DTCG shape."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Mapping, Optional

from ..errors import TokenInputError
from .colors import figma_to_hex, hex_to_components
from .nodes import ALIAS_EXTENSION

_BRACE_ALIAS = re.compile(r"^\{([^}]+)\}$")

_STUDIO_TYPES: Dict[str, str] = {
    "color": "color",
    "sizing": "number",
    "spacing": "number",
    "borderRadius": "number",
    "borderWidth": "number",
    "opacity": "number",
    "dimension": "number",
    "number": "number",
    "fontFamilies": "typography",
    "fontWeights": "typography",
    "fontSizes": "typography",
    "lineHeights": "typography",
    "letterSpacing": "typography",
    "paragraphSpacing": "typography",
    "textDecoration": "typography",
    "textCase": "typography",
    "typography": "typography",
    "boxShadow": "shadow",
    "border": "border",
}

FORMATS = ("figma-dtcg", "w3c-dtcg", "tokens-studio", "unknown")


def _first_token(obj: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(obj, Mapping):
        return None
    if "$type" in obj or "type" in obj:
        return obj
    for key, value in obj.items():
        if str(key).startswith("$"):
            continue
        found = _first_token(value)
        if found is not None:
            return found
    return None


def _has_key_deep(obj: Any, key: str) -> bool:
    if isinstance(obj, Mapping):
        if key in obj:
            return True
        return any(_has_key_deep(value, key) for value in obj.values())
    if isinstance(obj, list):
        return any(_has_key_deep(value, key) for value in obj)
    return False


def detect_format(tree: Mapping[str, Any]) -> str:
    """Classify ``tree`` by sampling its first leaf in depth-first order."""

    sample = _first_token(tree)
    if sample is None:
        return "unknown"
    if "value" in sample and "$value" not in sample:
        return "tokens-studio"
    if "$type" in sample and ("$value" in sample or _has_key_deep(tree, ALIAS_EXTENSION)):
        if _has_key_deep(tree, ALIAS_EXTENSION):
            return "figma-dtcg"
        value = sample.get("$value")
        if isinstance(value, str) and value.startswith("#"):
            return "w3c-dtcg"
        if isinstance(value, Mapping) and ("r" in value or "components" in value):
            return "figma-dtcg"
        return "w3c-dtcg"
    return "unknown"


def _color_from_hex(value: str) -> Optional[Dict[str, Any]]:
    parsed = hex_to_components(value)
    if parsed is None:
        return None
    r, g, b, a = parsed
    return {
        "colorSpace": "srgb",
        "components": [r, g, b],
        "alpha": a,
        "hex": figma_to_hex((r, g, b)),
    }


def _alias_extension(reference: str) -> Dict[str, Any]:
    return {ALIAS_EXTENSION: {"targetVariableName": reference.split(".")[-1]}}


def _normalize_w3c_token(token: Mapping[str, Any]) -> Dict[str, Any]:
    token_type = token["$type"]
    value = token.get("$value")
    result: Dict[str, Any] = {"$type": token_type}

    alias = _BRACE_ALIAS.match(value) if isinstance(value, str) else None
    if alias:
        result["$extensions"] = _alias_extension(alias.group(1))
    else:
        if token_type == "color" and isinstance(value, str):
            color = _color_from_hex(value)
            if color is not None:
                result["$value"] = color
        else:
            result["$value"] = value
        if isinstance(token.get("$extensions"), Mapping):
            result["$extensions"] = dict(token["$extensions"])
    if token.get("$description"):
        result["$description"] = token["$description"]
    return result


def _normalize_w3c(obj: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in obj.items():
        if str(key).startswith("$"):
            result[key] = value
        elif isinstance(value, Mapping) and isinstance(value.get("$type"), str) and (
            "$value" in value or ALIAS_EXTENSION in (value.get("$extensions") or {})
        ):
            result[key] = _normalize_w3c_token(value)
        elif isinstance(value, Mapping):
            result[key] = _normalize_w3c(value)
        else:
            result[key] = value
    return result


def _is_studio_token(obj: Mapping[str, Any]) -> bool:
    return "value" in obj and ("type" in obj or isinstance(obj.get("value"), str))


def _normalize_studio_token(token: Mapping[str, Any]) -> Dict[str, Any]:
    token_type = token.get("type", token.get("$type"))
    value = token.get("value", token.get("$value"))
    result: Dict[str, Any] = {}
    if isinstance(token_type, str):
        result["$type"] = _STUDIO_TYPES.get(token_type, token_type)

    alias = _BRACE_ALIAS.match(value) if isinstance(value, str) else None
    if alias:
        result["$extensions"] = _alias_extension(alias.group(1))
    elif result.get("$type") == "color" and isinstance(value, str):
        color = _color_from_hex(value)
        if color is not None:
            result["$value"] = color
    else:
        result["$value"] = value
    if token.get("description"):
        result["$description"] = token["description"]
    return result


def _normalize_studio(obj: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in obj.items():
        if str(key).startswith("$") or key == "tokenSetOrder":
            continue
        if not isinstance(value, Mapping):
            continue
        if _is_studio_token(value):
            result[key] = _normalize_studio_token(value)
        else:
            result[key] = _normalize_studio(value)
    return result


def normalize(tree: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``tree`` in canonical form; a canonical tree comes back unchanged."""

    fmt = detect_format(tree)
    if fmt == "w3c-dtcg":
        return _normalize_w3c(tree)
    if fmt == "tokens-studio":
        return _normalize_studio(tree)
    return dict(tree)


def load_token_tree(source: Any, *, name: Optional[str] = None) -> Dict[str, Any]:
    """Parse JSON text (or accept a mapping) and normalize it.

    Raises :class:`TokenInputError` when the input is not a JSON object.
    """

    data = source
    if isinstance(source, (bytes, bytearray)):
        source = source.decode("utf-8")
    if isinstance(source, str):
        try:
            data = json.loads(source)
        except json.JSONDecodeError as exc:
            raise TokenInputError(f"Invalid JSON: {exc}", source=name) from exc
    if not isinstance(data, Mapping):
        raise TokenInputError("Token export must be a JSON object", source=name)
    return normalize(data)


__all__ = ["FORMATS", "detect_format", "load_token_tree", "normalize"]
