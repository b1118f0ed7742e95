"""Unused token detection: reference tokens Figma dropped and orphaned primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..emitters.palette import strip_colour_prefix
from ..models import GeneratedFile
from .diff import extract_token_name, extract_token_name_value
from .tokens import DependencyEntry, normalize_hex_value


@dataclass(frozen=True)
class UnusedTokenResult:
    filename: str
    unused_in_figma: List[str]
    orphaned_primitives: List[str]
    total_generated: int
    total_reference: int


def _compact(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


def _semantic_keys(path: str) -> List[str]:
    segments = path.split("/")
    # Flat light/dark string semantics also declare literal values.
    return [_compact("".join(segments)), _compact("".join(s for s in segments if s.lower() != "standard"))]


def _declared(content: str) -> Dict[str, None]:
    names: Dict[str, None] = {}
    for line in content.split("\n"):
        name = extract_token_name(line)
        if name:
            names.setdefault(name.lower())
    return names


def _literal_declarations(content: str) -> List[str]:
    """Names declared with a literal colour value, first occurrence order."""

    names: Dict[str, None] = {}
    for line in content.split("\n"):
        pair = extract_token_name_value(line)
        if pair is not None and normalize_hex_value(pair[1]) is not None:
            names.setdefault(pair[0].lower())
    return list(names)


def detect_unused_tokens(
    files: Sequence[GeneratedFile],
    dependencies: Optional[Sequence[DependencyEntry]] = None,
) -> List[UnusedTokenResult]:
    """Per referenced file: reference names missing from the output, and
    literal colour declarations no semantic token points at.

    Orphans are only reported when ``dependencies`` are supplied.
    """

    targets = {_compact(strip_colour_prefix(entry.primitive)) for entry in dependencies or ()}
    semantics = {key for entry in dependencies or () for key in _semantic_keys(entry.semantic)}
    results: List[UnusedTokenResult] = []
    for file in files:
        if not file.reference_content:
            continue
        generated = _declared(file.content)
        reference = _declared(file.reference_content)
        orphaned: List[str] = []
        if dependencies is not None:
            orphaned = [
                name
                for name in _literal_declarations(file.content)
                if _compact(name) not in targets and not _compact(name).startswith(tuple(semantics))
            ]
        results.append(
            UnusedTokenResult(
                filename=file.filename,
                unused_in_figma=[name for name in reference if name not in generated],
                orphaned_primitives=orphaned,
                total_generated=len(generated),
                total_reference=len(reference),
            )
        )
    return results


def unused_summary(results: Sequence[UnusedTokenResult]) -> Dict[str, int]:
    return {
        "unused": sum(len(result.unused_in_figma) for result in results),
        "orphaned": sum(len(result.orphaned_primitives) for result in results),
    }


__all__ = ["UnusedTokenResult", "detect_unused_tokens", "unused_summary"]
