"""Token-level analysis: coverage, renames, cross-platform drift and impact."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..models import GeneratedFile
from ..tokens.colors import figma_to_hex, hex_to_components
from ..tokens.walker import walk_color_tokens
from .diff import DiffLine, TokenModification, extract_token_name, extract_token_name_value


@dataclass(frozen=True)
class TokenCoverage:
    total: int
    covered: int
    orphaned: List[str]
    unimplemented: List[str]
    coverage_percent: float


@dataclass(frozen=True)
class PlatformValue:
    platform: str
    raw_value: str
    normalized_hex: str


@dataclass(frozen=True)
class PlatformMismatch:
    token_name: str
    values: List[PlatformValue]


@dataclass(frozen=True)
class RenameEntry:
    old_name: str
    new_name: str
    value: str


@dataclass(frozen=True)
class FamilyRename:
    old_prefix: str
    new_prefix: str
    members: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class DependencyEntry:
    semantic: str
    primitive: str
    hex: str


@dataclass(frozen=True)
class ImpactEntry:
    primitive_name: str
    change_type: str
    affected_semantics: List[str]


# Families need at least this many renamed members to be reported as one move.
FAMILY_RENAME_MIN_MEMBERS = 3


# ----------------------------------------------------------------------
# Coverage


def _declared_names(content: str) -> List[str]:
    names: Dict[str, None] = {}
    for line in content.split("\n"):
        name = extract_token_name(line)
        if name:
            names.setdefault(name)
    return list(names)


def compute_token_coverage(files: Sequence[GeneratedFile]) -> Dict[str, TokenCoverage]:
    """Compare declared token names in each file against its reference."""

    result: Dict[str, TokenCoverage] = {}
    for file in files:
        if not file.reference_content:
            continue
        generated = _declared_names(file.content)
        reference = _declared_names(file.reference_content)
        generated_set, reference_set = set(generated), set(reference)
        covered = [name for name in generated if name in reference_set]
        total = len(generated_set | reference_set)
        result[file.filename] = TokenCoverage(
            total=total,
            covered=len(covered),
            orphaned=[name for name in reference if name not in generated_set],
            unimplemented=[name for name in generated if name not in reference_set],
            coverage_percent=(len(covered) / total) * 100 if total else 100.0,
        )
    return result


# ----------------------------------------------------------------------
# Cross-platform consistency

_SWIFT_HEX = re.compile(r"color\(\s*hex:\s*0x([0-9a-f]{6,8})")
_KOTLIN_HEX = re.compile(r"color\(\s*0x([0-9a-f]{8})")
_WEB_HEX = re.compile(r"#[0-9a-f]{3,8}\b")
# Values that reference other tokens rather than carrying a literal colour.
_INDIRECT_VALUES = (
    re.compile(r"color\(\s*light:"),
    re.compile(r"color\(\s*uicolor\."),
    re.compile(r"^primitives\."),
    re.compile(r"^(lightcolortokens|darkcolortokens)\."),
)


def normalize_token_name(name: str) -> str:
    return re.sub(r"[-_]+", "-", re.sub(r"^[$_-]+", "", name)).lower()


def normalize_hex_value(raw: str) -> Optional[str]:
    """Reduce a Swift, Kotlin or web colour literal to ``#rrggbb``."""

    value = raw.strip().lower()
    if any(pattern.search(value) for pattern in _INDIRECT_VALUES):
        return None

    swift = _SWIFT_HEX.search(value)
    if swift:
        return f"#{swift.group(1)[:6]}"

    kotlin = _KOTLIN_HEX.search(value)
    if kotlin:
        return f"#{kotlin.group(1)[2:]}"

    web = _WEB_HEX.search(value)
    if not web:
        return None
    components = hex_to_components(web.group(0))
    if components is None:
        return None
    return figma_to_hex(components[:3])


def validate_cross_platform(files: Sequence[GeneratedFile]) -> List[PlatformMismatch]:
    """Report tokens whose colour differs between platforms."""

    by_name: Dict[str, Dict[str, PlatformValue]] = {}
    for file in files:
        for line in file.content.split("\n"):
            pair = extract_token_name_value(line)
            if pair is None:
                continue
            name, raw = pair
            normalized = normalize_hex_value(raw)
            if normalized is None:
                continue
            by_name.setdefault(normalize_token_name(name), {})[file.platform] = PlatformValue(
                file.platform, raw, normalized
            )

    mismatches: List[PlatformMismatch] = []
    for token_name, platforms in by_name.items():
        if len(platforms) < 2:
            continue
        if len({value.normalized_hex for value in platforms.values()}) > 1:
            mismatches.append(PlatformMismatch(token_name, list(platforms.values())))
    return mismatches


# ----------------------------------------------------------------------
# Renames


def _common_prefix_length(left: str, right: str) -> int:
    length = 0
    for a, b in zip(left, right):
        if a != b:
            break
        length += 1
    return length


def _common_suffix_length(left: str, right: str) -> int:
    return _common_prefix_length(left[::-1], right[::-1])


def detect_renames(diffs: Mapping[str, Sequence[DiffLine]]) -> Dict[str, List[RenameEntry]]:
    """Pair removed tokens with added tokens that carry the same value.

    Among several candidates the one sharing the longest name prefix wins.
    """

    result: Dict[str, List[RenameEntry]] = {}
    for filename, lines in diffs.items():
        removed: Dict[str, str] = {}
        added: Dict[str, str] = {}
        for line in lines:
            pair = extract_token_name_value(line.text)
            if pair is None or not pair[1] or pair[1] == "0":
                continue
            if line.type == "remove":
                removed[pair[0]] = pair[1].lower()
            elif line.type == "add":
                added[pair[0]] = pair[1].lower()

        added_by_value: Dict[str, List[str]] = {}
        for name, value in added.items():
            if name not in removed:
                added_by_value.setdefault(value, []).append(name)

        found: List[RenameEntry] = []
        for old_name, value in removed.items():
            if old_name in added:
                continue
            candidates = added_by_value.get(value)
            if not candidates:
                continue
            best, best_score = candidates[0], 0
            for candidate in candidates:
                score = _common_prefix_length(candidate, old_name)
                if score > best_score:
                    best, best_score = candidate, score
            found.append(RenameEntry(old_name, best, value))
        if found:
            result[filename] = found
    return result


def detect_family_renames(renames: Mapping[str, Sequence[RenameEntry]]) -> Dict[str, List[FamilyRename]]:
    """Group renames that share an old-prefix -> new-prefix move."""

    result: Dict[str, List[FamilyRename]] = {}
    for filename, entries in renames.items():
        groups: Dict[Tuple[str, str], List[Tuple[str, str]]] = {}
        for entry in entries:
            suffix = _common_suffix_length(entry.old_name, entry.new_name)
            old_prefix = entry.old_name[: len(entry.old_name) - suffix]
            new_prefix = entry.new_name[: len(entry.new_name) - suffix]
            if not old_prefix or not new_prefix:
                continue
            groups.setdefault((old_prefix, new_prefix), []).append((entry.old_name, entry.new_name))
        families = [
            FamilyRename(old_prefix, new_prefix, members)
            for (old_prefix, new_prefix), members in groups.items()
            if len(members) >= FAMILY_RENAME_MIN_MEMBERS
        ]
        if families:
            result[filename] = families
    return result


# ----------------------------------------------------------------------
# Impact


def build_dependency_map(light: Mapping[str, Any]) -> List[DependencyEntry]:
    """Semantic colour -> primitive edges from a normalized light tree."""

    entries: List[DependencyEntry] = []
    for path, node in walk_color_tokens(light):
        if node.alias_target and node.value is not None:
            entries.append(DependencyEntry("/".join(path), node.alias_target, node.value.hex or node.value.css))
    return entries


def _last_segment(path: str) -> str:
    return path.split("/")[-1].lower()


def compute_impact(
    dependencies: Sequence[DependencyEntry],
    modifications: Mapping[str, Sequence[TokenModification]],
    renames: Mapping[str, Sequence[RenameEntry]],
    deprecations: Mapping[str, Sequence[str]],
) -> List[ImpactEntry]:
    """Semantic tokens affected by each modified, renamed or removed primitive.

    Later change kinds win for the same name: removed over renamed over
    modified.
    """

    changes: Dict[str, str] = {}
    for mods in modifications.values():
        for mod in mods:
            changes[mod.name.lower()] = "modified"
    for entries in renames.values():
        for entry in entries:
            changes[entry.old_name.lower()] = "renamed"
    for names in deprecations.values():
        for name in names:
            changes[name.lower()] = "removed"

    grouped: Dict[str, List[str]] = {}
    for dependency in dependencies:
        key = _last_segment(dependency.primitive)
        grouped.setdefault(dependency.primitive, []).append(dependency.semantic)
        if key in changes:
            continue
        for part in dependency.primitive.split("/"):
            if part.lower() in changes:
                changes[key] = changes[part.lower()]
                break

    impacts: List[ImpactEntry] = []
    for primitive, semantics in grouped.items():
        change = changes.get(_last_segment(primitive))
        if change:
            impacts.append(ImpactEntry(primitive, change, semantics))
    return impacts


__all__ = [
    "DependencyEntry",
    "FAMILY_RENAME_MIN_MEMBERS",
    "FamilyRename",
    "ImpactEntry",
    "PlatformMismatch",
    "PlatformValue",
    "RenameEntry",
    "TokenCoverage",
    "build_dependency_map",
    "compute_impact",
    "compute_token_coverage",
    "detect_family_renames",
    "detect_renames",
    "normalize_hex_value",
    "normalize_token_name",
    "validate_cross_platform",
]
