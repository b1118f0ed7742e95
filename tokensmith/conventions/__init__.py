"""Convention detection over uploaded reference source files."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from ..logging import get_logger
from .base import (
    BEST_PRACTICE_KOTLIN,
    BEST_PRACTICE_SWIFT,
    BEST_PRACTICE_TYPOGRAPHY,
    BEST_PRACTICE_WEB,
    DEFAULT_KOTLIN_PACKAGE,
    DetectedConventions,
    Detection,
    KotlinConventions,
    KotlinTypography,
    KotlinTypographyScope,
    ScssTypography,
    SwiftConventions,
    SwiftTypography,
    TsTypography,
    TypographyConventions,
    WebConventions,
    majority,
)
from .kotlin import detect_kotlin_conventions
from .swift import detect_swift_conventions
from .typography import detect_typography_conventions
from .web import detect_web_conventions

LOGGER = get_logger("conventions")


def detect_conventions(
    references: Optional[Mapping[str, str]] = None,
    best_practices: bool = True,
) -> DetectedConventions:
    """Build the immutable descriptor for one run.

    Best-practice mode, or no reference text at all, yields the fixed
    defaults with no scored dimensions.
    """

    refs = {role: text for role, text in (references or {}).items() if text}
    if best_practices or not refs:
        return DetectedConventions(best_practices=best_practices)

    dimensions: Dict[str, Detection] = {}
    web, web_dims = detect_web_conventions(refs)
    swift, swift_dims = detect_swift_conventions(refs.get("ios-colors-swift"))
    kotlin, kotlin_dims = detect_kotlin_conventions(refs.get("android-colors-kotlin"))
    for part in (web_dims, swift_dims, kotlin_dims):
        dimensions.update(part)

    detected = DetectedConventions(
        web=web,
        swift=swift,
        kotlin=kotlin,
        typography=detect_typography_conventions(refs),
        dimensions=dimensions,
        best_practices=False,
    )
    LOGGER.debug(
        "Detected conventions from %d reference file(s); confidence %.2f",
        len(refs),
        detected.confidence,
    )
    return detected


__all__ = [
    "BEST_PRACTICE_KOTLIN",
    "BEST_PRACTICE_SWIFT",
    "BEST_PRACTICE_TYPOGRAPHY",
    "BEST_PRACTICE_WEB",
    "DEFAULT_KOTLIN_PACKAGE",
    "DetectedConventions",
    "Detection",
    "KotlinConventions",
    "KotlinTypography",
    "KotlinTypographyScope",
    "ScssTypography",
    "SwiftConventions",
    "SwiftTypography",
    "TsTypography",
    "TypographyConventions",
    "WebConventions",
    "detect_conventions",
    "majority",
]
