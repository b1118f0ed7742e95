"""Diagnostics derived from reference files: renames, new tokens and known bugs."""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Sequence

# Old platform family name -> current design-tool family name.
FIGMA_NAME_MAP: Dict[str, str] = {
    "Fuchsia": "Pink",
    "fuchsia": "pink",
    "Purple": "Violet",
    "purple": "violet",
}

NEW_TOKEN_MESSAGE = (
    "NEW: This token was added in Figma design tokens but does not exist in your reference file."
)


def detect_renames(reference: Optional[str]) -> Dict[str, str]:
    """Map lowercase current family name -> old name found in ``reference``."""

    renames: Dict[str, str] = {}
    if not reference:
        return renames
    for old_name, new_name in FIGMA_NAME_MAP.items():
        if re.search(old_name, reference, re.IGNORECASE):
            renames[new_name.lower()] = old_name
    return renames


def rename_comment(old_name: str, new_name: str, style: str) -> List[str]:
    first = (
        f'RENAMED: "{old_name}" in your reference file has been updated to "{new_name}" '
        "in Figma design tokens."
    )
    second = f'Please update your codebase to use "{new_name}" to stay in sync with the design system.'
    if style == "/*":
        return [f"/* {first} */", f"/* {second} */"]
    return [f"{style} {first}", f"{style} {second}"]


def new_token_comment(style: str) -> List[str]:
    if style == "/*":
        return [f"/* {NEW_TOKEN_MESSAGE} */"]
    return [f"{style} {NEW_TOKEN_MESSAGE}"]


def _never_new(_name: str) -> bool:
    return False


def create_new_detector(reference: Optional[str]) -> Callable[[str], bool]:
    """Return a predicate that is true for names absent from ``reference``.

    Hyphens and underscores are ignored on both sides so the check works
    across kebab, snake and camel spellings.
    """

    if not reference:
        return _never_new
    haystack = re.sub(r"[-_]", "", reference.lower())

    def _is_new(name: str) -> bool:
        return re.sub(r"[-_]", "", name.lower()) not in haystack

    return _is_new


def bug_warning_block(warnings: Sequence[str], style: str) -> List[str]:
    if not warnings:
        return []
    if style == "/*":
        lines = ["/* ⚠️  REFERENCE FILE ISSUES DETECTED", " *"]
        lines.extend(f" *  • {warning}" for warning in warnings)
        lines.extend(
            [
                " *",
                " *  Generated output uses correct values from Figma design tokens.",
                " *  Please review and fix the issues in your reference file.",
                " */",
            ]
        )
    else:
        lines = ["// ⚠️  REFERENCE FILE ISSUES DETECTED", "//"]
        lines.extend(f"//  • {warning}" for warning in warnings)
        lines.extend(
            [
                "//",
                "//  Generated output uses correct values from Figma design tokens.",
                "//  Please review and fix the issues in your reference file.",
            ]
        )
    lines.append("")
    return lines


def detect_swift_bugs(reference: str) -> List[str]:
    missing_hash = re.findall(r'=\s*"([0-9A-Fa-f]{6})"', reference)
    if not missing_hash:
        return []
    return [
        f'{len(missing_hash)} hex value(s) missing "#" prefix (e.g., greenElectric = "008001"). '
        'Generated output always includes "#".'
    ]


def detect_kotlin_color_bugs(reference: str) -> List[str]:
    targets = re.findall(r"ICONSTATIC\w+\s*->\s*(\w+)", reference)
    if len(targets) > 1 and len(set(targets)) == 1:
        return [
            f'Static icon/text enum cases all map to "{targets[0]}" — likely a copy-paste bug. '
            "Generated output uses correct Figma mappings."
        ]
    return []


def detect_kotlin_typography_bugs(reference: str) -> List[str]:
    warnings: List[str] = []
    if re.search(r"footnote.*this\.subhead", reference, re.IGNORECASE):
        warnings.append(
            'footnote copy() defaults reference "this.subhead_*" instead of "this.footnote_*" — copy-paste bug.'
        )
    if re.search(r"RLocalTypography|LocalTypography", reference, re.IGNORECASE) and not re.search(
        r"slprice", reference, re.IGNORECASE
    ):
        warnings.append('RLocalTypography is missing "slprice" entries. Generated output includes all tokens.')
    return warnings


def family_markers(
    family: str,
    renames: Dict[str, str],
    is_new: Callable[[str], bool],
    style: str,
    display: Optional[str] = None,
) -> List[str]:
    """Comment lines placed above a primitive family: rename wins over new."""

    old_name = renames.get(family)
    if old_name:
        return rename_comment(old_name, display or family, style)
    if is_new(family):
        return new_token_comment(style)
    return []


__all__ = [
    "FIGMA_NAME_MAP",
    "NEW_TOKEN_MESSAGE",
    "bug_warning_block",
    "create_new_detector",
    "family_markers",
    "detect_kotlin_color_bugs",
    "detect_kotlin_typography_bugs",
    "detect_renames",
    "detect_swift_bugs",
    "new_token_comment",
    "rename_comment",
]
