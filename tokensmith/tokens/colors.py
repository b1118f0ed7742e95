"""Colour value conversions between Figma components and platform literals."""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence, Tuple

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def to_byte(channel: float) -> int:
    """Scale a 0..1 channel to 0..255, rounding half up and clamping."""
    clamped = min(1.0, max(0.0, float(channel)))
    return int(math.floor(clamped * 255 + 0.5))


def _bytes(components: Sequence[float]) -> Tuple[int, int, int]:
    r, g, b = (to_byte(c) for c in list(components)[:3])
    return r, g, b


def figma_to_hex(components: Sequence[float], alpha: float = 1.0) -> str:
    """Return ``#rrggbb`` or, for translucent colours, ``#rrggbbaa`` (lowercase)."""
    r, g, b = _bytes(components)
    if alpha < 1:
        return f"#{r:02x}{g:02x}{b:02x}{to_byte(alpha):02x}"
    return f"#{r:02x}{g:02x}{b:02x}"


def figma_to_kotlin_hex(components: Sequence[float], alpha: float = 1.0) -> str:
    """Compose ``Color(Long)`` literal, alpha byte first: ``0xAARRGGBB``."""
    r, g, b = _bytes(components)
    return f"0x{to_byte(alpha):02X}{r:02X}{g:02X}{b:02X}"


def figma_to_swift_hex(components: Sequence[float], alpha: float = 1.0) -> str:
    """Swift ``UInt64`` literal, alpha byte last and only when translucent."""
    r, g, b = _bytes(components)
    if alpha < 1:
        return f"0x{r:02X}{g:02X}{b:02X}{to_byte(alpha):02X}"
    return f"0x{r:02X}{g:02X}{b:02X}"


def figma_to_string_hex(components: Sequence[float], alpha: float = 1.0) -> str:
    """Quoted-string style hex, ``#RRGGBB`` or ``#RRGGBBAA`` (uppercase)."""
    r, g, b = _bytes(components)
    if alpha < 1:
        return f"#{r:02X}{g:02X}{b:02X}{to_byte(alpha):02X}"
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_components(value: str) -> Optional[Tuple[float, float, float, float]]:
    """Parse a 3, 6 or 8 digit hex string into 0..1 ``(r, g, b, a)``."""
    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r = int(digits[0:2], 16) / 255
    g = int(digits[2:4], 16) / 255
    b = int(digits[4:6], 16) / 255
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return r, g, b, a


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_PATTERN.match(value.strip())) and value.strip().startswith("#")


def apply_hex_case(value: str, casing: str) -> str:
    """Upper- or lower-case the hex digits of ``#...`` literals, keeping the ``#``."""
    if casing == "upper":
        return "#" + value.lstrip("#").upper() if value.startswith("#") else value.upper()
    return value.lower()


__all__ = [
    "apply_hex_case",
    "figma_to_hex",
    "figma_to_kotlin_hex",
    "figma_to_string_hex",
    "figma_to_swift_hex",
    "hex_to_components",
    "is_hex_color",
    "to_byte",
]
