"""Typography export parsing shared by the per-platform typography renderers.

Figma names styles with slash paths such as ``droid/body/body-R``. The first
segment routes the style: ``droid`` goes to web and Android, ``ios`` to iOS
only, anything else is shared web output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..formatting import capitalize, fmt_number, kebab_to_camel, rounded

SKIP_VARIANT_RE = re.compile(r"\((underline|strikethrough|headline)\)", re.IGNORECASE)

WEIGHT_NAME_MAP: Dict[str, int] = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "extra-light": 200,
    "ultralight": 200,
    "light": 300,
    "regular": 400,
    "normal": 400,
    "book": 400,
    "medium": 500,
    "semibold": 600,
    "semi-bold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "extra-bold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

DEFAULT_WEIGHT = 400

_MODIFIER = re.compile(r"\s*\(([^)]+)\)")
_SEPARATORS = re.compile(r"[\s_]+")
_DASHES = re.compile(r"-+")

_PLATFORM_LABELS = {"android": "Android (droid)", "ios": "iOS", "shared": "Shared"}


@dataclass(frozen=True)
class TypographyValue:
    font_family: str = ""
    font_size: float = 0
    font_weight: float = DEFAULT_WEIGHT
    line_height: float = 0
    letter_spacing: float = 0


@dataclass(frozen=True)
class TypographyEntry:
    """One text style after parsing.

    ``full_key`` keeps the platform prefix (``droid-body-r``); ``short_key``
    drops it (``body-r``).
    """

    full_key: str
    short_key: str
    category: str
    target_platform: str
    value: TypographyValue
    figma_name: str


@dataclass(frozen=True)
class ParsedTypography:
    entries: Tuple[TypographyEntry, ...] = ()
    weight_fallbacks: Tuple[str, ...] = ()


def normalize_font_weight(raw: Any) -> Tuple[float, bool]:
    """Return ``(weight, used_fallback)``.

    Numbers and numeric strings pass through; weight names are looked up;
    anything else becomes 400. A lookup or default counts as a fallback.
    """

    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw > 0:
        return raw, False
    if isinstance(raw, str):
        match = re.match(r"^\s*([0-9]*\.?[0-9]+)", raw)
        if match and float(match.group(1)) > 0:
            number = float(match.group(1))
            return (int(number) if number.is_integer() else number), False
        weight = WEIGHT_NAME_MAP.get(raw.strip().lower())
        if weight:
            return weight, True
    return DEFAULT_WEIGHT, True


def _normalize_part(text: str) -> str:
    text = _SEPARATORS.sub("-", text.lower())
    return _DASHES.sub("-", text).strip("-")


def style_name_to_key(name: str) -> str:
    """``droid/body/body-R (underline)`` -> ``droid-body-r-underline``.

    A segment that repeats its parent's name only contributes its suffix,
    and parenthesised modifiers are appended after the segment.
    """

    parts = name.split("/")
    result: List[str] = []
    for index, part in enumerate(parts):
        modifiers = [
            _DASHES.sub("-", re.sub(r"\s+", "-", match.lower())) for match in _MODIFIER.findall(part)
        ]
        normalized = _normalize_part(_MODIFIER.sub("", part).strip())
        if not normalized:
            result.extend(modifiers)
            continue
        if index > 0 and result:
            previous = _normalize_part(_MODIFIER.sub("", parts[index - 1]).strip())
            if normalized.startswith(previous) and normalized != previous:
                suffix = normalized[len(previous):].lstrip("-")
                if suffix:
                    result.append(suffix)
                result.extend(modifiers)
                continue
        result.append(normalized)
        result.extend(modifiers)
    return "-".join(item for item in result if item)


def extract_category(parts: List[str]) -> str:
    category = parts[1] if len(parts) > 1 else parts[0] if parts else ""
    return _DASHES.sub("-", re.sub(r"\s+", "-", category.lower()))


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    return 0


def _is_typography(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("$type") == "typography"


def typography_section(tree: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """The mapping of style name -> token: ``tree["typography"]`` or the top level."""

    if not isinstance(tree, Mapping):
        return None
    section = tree.get("typography")
    if isinstance(section, Mapping):
        return section
    if any(_is_typography(value) for value in tree.values()):
        return tree
    return None


def parse_entries(section: Mapping[str, Any]) -> ParsedTypography:
    entries: List[TypographyEntry] = []
    fallbacks: List[str] = []
    for name, token in section.items():
        if not _is_typography(token):
            continue
        value = token.get("$value") if isinstance(token.get("$value"), Mapping) else {}
        parts = str(name).split("/")
        prefix = parts[0].lower()
        platform = "ios" if prefix == "ios" else "android" if prefix == "droid" else "shared"
        full_key = style_name_to_key(str(name))
        short_key = full_key
        if platform != "shared" and full_key.startswith(prefix + "-"):
            short_key = full_key[len(prefix) + 1:]

        weight, used_fallback = normalize_font_weight(value.get("fontWeight"))
        if used_fallback:
            fallbacks.append(str(name))
        family = value.get("fontFamily")
        entries.append(
            TypographyEntry(
                full_key=full_key,
                short_key=short_key,
                category=extract_category(parts),
                target_platform=platform,
                value=TypographyValue(
                    font_family=family if isinstance(family, str) else "",
                    font_size=_number(value.get("fontSize")),
                    font_weight=weight,
                    line_height=_number(value.get("lineHeight")),
                    letter_spacing=rounded(_number(value.get("letterSpacing")), 3),
                ),
                figma_name=str(name),
            )
        )
    return ParsedTypography(tuple(entries), tuple(fallbacks))


def parse_typography(tree: Optional[Mapping[str, Any]]) -> ParsedTypography:
    """Parse and drop decoration variants that have no platform equivalent."""

    section = typography_section(tree)
    if section is None:
        return ParsedTypography()
    parsed = parse_entries(section)
    kept = tuple(entry for entry in parsed.entries if not SKIP_VARIANT_RE.search(entry.figma_name))
    return ParsedTypography(kept, parsed.weight_fallbacks)


def count_typography_styles(tree: Optional[Mapping[str, Any]]) -> int:
    section = typography_section(tree)
    if section is None:
        return 0
    return sum(1 for value in section.values() if _is_typography(value))


def web_entries(entries: Iterable[TypographyEntry]) -> List[TypographyEntry]:
    """Android and shared styles; Android ones lose their ``droid-`` prefix."""

    return [
        replace(entry, full_key=entry.short_key) if entry.target_platform == "android" else entry
        for entry in entries
        if entry.target_platform != "ios"
    ]


def px_to_rem(px: float) -> str:
    return f"{fmt_number(rounded(px / 16, 4))}rem"


def unitless_line_height(line_height: float, font_size: float) -> str:
    if font_size == 0:
        return "1"
    return fmt_number(rounded(line_height / font_size, 4))


def px_to_em(letter_spacing: float, font_size: float) -> str:
    if font_size == 0 or letter_spacing == 0:
        return "0"
    return f"{fmt_number(rounded(letter_spacing / font_size, 4))}em"


def resolve_name_from_map(short_key: str, name_map: Mapping[str, str], naming_style: str = "camelCase") -> str:
    camel = kebab_to_camel(short_key)
    mapped = name_map.get(camel.lower())
    if mapped:
        return mapped
    if naming_style == "snake_case":
        return re.sub(r"_(\d)", r"\1", short_key.replace("-", "_"))
    return camel


def group_entries(entries: Iterable[TypographyEntry]) -> Dict[str, List[TypographyEntry]]:
    """Group by ``"<Platform> — <Category>"`` in first-seen order."""

    groups: Dict[str, List[TypographyEntry]] = {}
    for entry in entries:
        label = f"{_PLATFORM_LABELS[entry.target_platform]} — {capitalize(entry.category.replace('-', ' '))}"
        groups.setdefault(label, []).append(entry)
    return groups


__all__ = [
    "DEFAULT_WEIGHT",
    "ParsedTypography",
    "SKIP_VARIANT_RE",
    "TypographyEntry",
    "TypographyValue",
    "WEIGHT_NAME_MAP",
    "count_typography_styles",
    "extract_category",
    "group_entries",
    "normalize_font_weight",
    "parse_entries",
    "parse_typography",
    "px_to_em",
    "px_to_rem",
    "resolve_name_from_map",
    "style_name_to_key",
    "typography_section",
    "unitless_line_height",
    "web_entries",
]
