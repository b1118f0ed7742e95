"""APCA contrast validation for foreground/background colour pairs.

Lightness contrast (Lc) follows the APCA-W3 0.0.98G constants. Positive Lc
means dark text on a light background; negative means the reverse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..tokens.colors import figma_to_hex, hex_to_components
from ..tokens.walker import walk_color_tokens

LEVELS = ("pass", "large", "non-text", "fail")

# Absolute Lc thresholds.
THRESHOLD_BODY = 75.0
THRESHOLD_LARGE = 60.0
THRESHOLD_NON_TEXT = 45.0

_MAIN_TRC = 2.4
_COEFFICIENTS = (0.2126729, 0.7151522, 0.0721750)
_NORM_BG = 0.56
_NORM_TXT = 0.57
_REV_TXT = 0.62
_REV_BG = 0.65
_BLACK_THRESHOLD = 0.022
_BLACK_CLAMP = 1.414
_SCALE = 1.14
_LOW_OFFSET = 0.027
_LOW_CLIP = 0.1
_DELTA_Y_MIN = 0.0005

# Smallest regular-weight size each band supports; body-level pairs need no hint.
_MIN_FONT_SIZES: Sequence[Tuple[float, str]] = (
    (THRESHOLD_LARGE, "24px @ weight 400"),
    (THRESHOLD_NON_TEXT, "36px @ weight 400"),
)

_FOREGROUND_PREFIXES = ("text-", "icon-")
_BACKGROUND_PREFIX = "background-"


@dataclass(frozen=True)
class ContrastPair:
    fg_name: str
    bg_name: str
    fg_hex: str
    bg_hex: str


@dataclass(frozen=True)
class ContrastResult:
    pair: ContrastPair
    lc: float
    level: str
    min_font_size: Optional[str] = None

    @property
    def abs_lc(self) -> float:
        return abs(self.lc)


@dataclass
class ContrastSummary:
    results: List[ContrastResult] = field(default_factory=list)

    def count(self, level: str) -> int:
        return sum(1 for result in self.results if result.level == level)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> bool:
        return self.count("fail") > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "pass": self.count("pass"),
            "large": self.count("large"),
            "non_text": self.count("non-text"),
            "fail": self.count("fail"),
            "results": [
                {
                    "fg_name": result.pair.fg_name,
                    "bg_name": result.pair.bg_name,
                    "fg_hex": result.pair.fg_hex,
                    "bg_hex": result.pair.bg_hex,
                    "lc": result.lc,
                    "level": result.level,
                    "min_font_size": result.min_font_size,
                }
                for result in self.results
            ],
        }


def srgb_to_y(hex_value: str) -> float:
    """Screen luminance of an ``#rrggbb`` colour (alpha is ignored)."""

    components = hex_to_components(hex_value)
    if components is None:
        raise ValueError(f"Not a hex colour: {hex_value!r}")
    return sum(coefficient * channel**_MAIN_TRC for coefficient, channel in zip(_COEFFICIENTS, components[:3]))


def _soft_clamp(y: float) -> float:
    return y if y > _BLACK_THRESHOLD else y + (_BLACK_THRESHOLD - y) ** _BLACK_CLAMP


def apca_contrast(text_y: float, background_y: float) -> float:
    text_y = _soft_clamp(text_y)
    background_y = _soft_clamp(background_y)
    if abs(background_y - text_y) < _DELTA_Y_MIN:
        return 0.0
    if background_y > text_y:
        sapc = (background_y**_NORM_BG - text_y**_NORM_TXT) * _SCALE
        output = 0.0 if sapc < _LOW_CLIP else sapc - _LOW_OFFSET
    else:
        sapc = (background_y**_REV_BG - text_y**_REV_TXT) * _SCALE
        output = 0.0 if sapc > -_LOW_CLIP else sapc + _LOW_OFFSET
    return output * 100


def check_contrast(fg_hex: str, bg_hex: str) -> float:
    """Lc of ``fg_hex`` text on ``bg_hex``, rounded to one decimal."""
    return round(apca_contrast(srgb_to_y(fg_hex), srgb_to_y(bg_hex)), 1)


def classify_contrast(abs_lc: float, body: float = THRESHOLD_BODY) -> str:
    if abs_lc >= body:
        return "pass"
    if abs_lc >= THRESHOLD_LARGE:
        return "large"
    if abs_lc >= THRESHOLD_NON_TEXT:
        return "non-text"
    return "fail"


def lookup_min_font(abs_lc: float) -> Optional[str]:
    for threshold, size in _MIN_FONT_SIZES:
        if abs_lc >= threshold:
            return size
    return None


def _doc_name(path: Sequence[str]) -> str:
    return "-".join(
        re.sub(r"\s+", "-", segment.lower()) for segment in path if segment.lower() != "standard"
    )


def extract_semantic_colors(tree: Mapping[str, Any]) -> Dict[str, str]:
    """Kebab token name -> ``#rrggbb`` for every colour leaf with a value.

    ``standard`` segments are dropped, matching the generated token names.
    """

    colors: Dict[str, str] = {}
    for path, node in walk_color_tokens(tree):
        if node.value is None:
            continue
        colors[_doc_name(path)] = figma_to_hex(node.value.components)
    return colors


def detect_pairings(
    colors: Mapping[str, str],
    pairings: Optional[Mapping[str, str]] = None,
) -> List[ContrastPair]:
    """Pairs to check: the configured ones, else every text/icon x background.

    Configured pairs naming unknown tokens are skipped.
    """

    if pairings:
        return [
            ContrastPair(fg, bg, colors[fg], colors[bg])
            for fg, bg in pairings.items()
            if fg in colors and bg in colors
        ]

    foregrounds = [(name, value) for name, value in colors.items() if name.startswith(_FOREGROUND_PREFIXES)]
    backgrounds = [(name, value) for name, value in colors.items() if name.startswith(_BACKGROUND_PREFIX)]
    return [
        ContrastPair(fg_name, bg_name, fg_hex, bg_hex)
        for fg_name, fg_hex in foregrounds
        for bg_name, bg_hex in backgrounds
    ]


def validate_palette(pairs: Sequence[ContrastPair], min_lc: Optional[float] = None) -> ContrastSummary:
    """Score each pair; ``min_lc`` overrides the body threshold for ``pass``."""

    summary = ContrastSummary()
    for pair in pairs:
        lc = check_contrast(pair.fg_hex, pair.bg_hex)
        level = classify_contrast(abs(lc), THRESHOLD_BODY if min_lc is None else min_lc)
        summary.results.append(
            ContrastResult(pair, lc, level, None if level == "pass" else lookup_min_font(abs(lc)))
        )
    return summary


__all__ = [
    "ContrastPair",
    "ContrastResult",
    "ContrastSummary",
    "LEVELS",
    "apca_contrast",
    "check_contrast",
    "classify_contrast",
    "detect_pairings",
    "extract_semantic_colors",
    "lookup_min_font",
    "srgb_to_y",
    "validate_palette",
]
