"""Two-pass primitive/semantic colour collection shared by colour emitters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..tokens.nodes import ColorNode, ColorValue
from ..tokens.walker import TokenPath, get_node_at_path, walk_color_tokens
from .formatting import extract_sort_key, order_categories, path_to_token_name, segment_to_kebab, split_words

_COLOUR_PREFIXES = ("Colour/", "Color/")
_MAX_ALIAS_HOPS = 20


def strip_colour_prefix(figma_name: str) -> str:
    for prefix in _COLOUR_PREFIXES:
        if figma_name.startswith(prefix):
            return figma_name[len(prefix):]
    return figma_name


def is_colour_target(figma_name: str) -> bool:
    """Alias targets under a colour collection, or bare names from brace aliases."""
    return figma_name.startswith(_COLOUR_PREFIXES) or "/" not in figma_name


def extract_family(figma_name: str) -> str:
    """``Colour/Grey_Alpha/750_8`` -> ``grey-alpha``; stops at the first numeric part."""

    top = segment_to_kebab(strip_colour_prefix(figma_name).split("/")[0])
    parts: List[str] = []
    for part in top.split("-"):
        if re.match(r"^\d", part) or part == "other":
            break
        parts.append(part)
    return "-".join(parts) or top


def is_static_path(path: TokenPath) -> bool:
    return any(segment.lower() == "static" for segment in path)


@dataclass(frozen=True)
class PrimitiveEntry:
    figma_name: str
    color: ColorValue
    family: str
    sort_key: int

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(part for part in strip_colour_prefix(self.figma_name).split("/") if part)

    @property
    def words(self) -> List[str]:
        return [word for segment in self.segments for word in split_words(segment)]

    def kebab(self, separator: str = "-") -> str:
        return separator.join(self.words)


@dataclass(frozen=True)
class SemanticEntry:
    path: TokenPath
    light: PrimitiveEntry
    dark: PrimitiveEntry
    is_static: bool

    def name(self, separator: str = "-") -> str:
        return path_to_token_name(self.path, separator)

    @property
    def words(self) -> List[str]:
        return [word for word in self.name("-").split("-") if word]

    @property
    def category(self) -> str:
        words = self.words
        return words[0] if words else ""


@dataclass(frozen=True)
class Palette:
    primitives: Tuple[PrimitiveEntry, ...]
    semantics: Tuple[SemanticEntry, ...]

    def families(self) -> List[Tuple[str, List[PrimitiveEntry]]]:
        """Families alphabetically; members by numeric sort key then name."""

        grouped: Dict[str, List[PrimitiveEntry]] = {}
        for entry in self.primitives:
            grouped.setdefault(entry.family, []).append(entry)
        return [
            (family, sorted(entries, key=lambda item: (item.sort_key, item.kebab())))
            for family, entries in sorted(grouped.items(), key=lambda pair: pair[0].lower())
        ]

    def categories(self) -> List[Tuple[str, List[SemanticEntry]]]:
        grouped: Dict[str, List[SemanticEntry]] = {}
        for entry in self.semantics:
            grouped.setdefault(entry.category, []).append(entry)
        return [(category, grouped[category]) for category in order_categories(grouped)]

    def sorted_primitives(self) -> List[PrimitiveEntry]:
        return [entry for _family, entries in self.families() for entry in entries]


def _entry(figma_name: str, color: ColorValue) -> PrimitiveEntry:
    return PrimitiveEntry(
        figma_name=figma_name,
        color=color,
        family=extract_family(figma_name),
        sort_key=extract_sort_key(figma_name),
    )


def _alias_edges(*trees: Any) -> Dict[str, str]:
    edges: Dict[str, str] = {}
    for tree in trees:
        for path, node in walk_color_tokens(tree):
            if node.alias_target:
                edges.setdefault("/".join(path), node.alias_target)
    return edges


def primitives_from_export(primitives: Mapping[str, Any]) -> Dict[str, PrimitiveEntry]:
    """Authoritative primitive map from a dedicated primitives collection."""

    found: Dict[str, PrimitiveEntry] = {}
    for path, node in walk_color_tokens(primitives):
        if node.value is None:
            continue
        figma_name = "/".join(path)
        found[figma_name] = _entry(figma_name, node.value)
    return found


def primitives_from_aliases(light: Mapping[str, Any], dark: Mapping[str, Any]) -> Dict[str, PrimitiveEntry]:
    """Primitives reconstructed from alias targets; first occurrence wins.

    Targets that are themselves aliased semantic paths are chain links,
    not primitives.
    """

    edges = _alias_edges(light, dark)
    found: Dict[str, PrimitiveEntry] = {}
    for tree in (light, dark):
        for _path, node in walk_color_tokens(tree):
            target = node.alias_target
            if not target or target in found or target in edges or node.value is None:
                continue
            if not is_colour_target(target):
                continue
            found[target] = _entry(target, node.value)
    return found


def _resolve(target: Optional[str], primitives: Mapping[str, PrimitiveEntry], edges: Mapping[str, str]) -> Optional[PrimitiveEntry]:
    seen = set()
    while target and len(seen) < _MAX_ALIAS_HOPS:
        if target in primitives:
            return primitives[target]
        if target in seen:
            return None
        seen.add(target)
        target = edges.get(target)
    return None


def collect_palette(
    light: Mapping[str, Any],
    dark: Mapping[str, Any],
    primitives: Optional[Mapping[str, Any]] = None,
) -> Palette:
    """Collect primitives, then pair each light semantic with its dark twin.

    A dark leaf that is missing or does not resolve to a known primitive
    silently reuses the light primitive. Leaves under a ``static`` segment
    are mode-invariant.
    """

    primitive_map = primitives_from_export(primitives) if primitives else primitives_from_aliases(light, dark)
    edges = _alias_edges(light, dark)

    semantics: List[SemanticEntry] = []
    for path, node in walk_color_tokens(light):
        light_entry = _resolve(node.alias_target, primitive_map, edges)
        if light_entry is None:
            continue
        dark_node = get_node_at_path(dark, path)
        dark_target = dark_node.alias_target if isinstance(dark_node, ColorNode) else None
        dark_entry = _resolve(dark_target, primitive_map, edges) or light_entry
        semantics.append(
            SemanticEntry(path=path, light=light_entry, dark=dark_entry, is_static=is_static_path(path))
        )
    return Palette(primitives=tuple(primitive_map.values()), semantics=tuple(semantics))


__all__ = [
    "Palette",
    "PrimitiveEntry",
    "SemanticEntry",
    "collect_palette",
    "extract_family",
    "is_colour_target",
    "is_static_path",
    "primitives_from_aliases",
    "primitives_from_export",
    "strip_colour_prefix",
]
