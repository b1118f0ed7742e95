"""Line diffs between reference files and generated output."""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple


@dataclass(frozen=True)
class DiffLine:
    """One line of a reference -> generated diff.

    ``type`` is ``add``, ``remove`` or ``equal`` (``separator`` only appears
    in the output of :func:`filter_diff_lines`). Line numbers are 1-based.
    """

    type: str
    text: str
    old_line: Optional[int] = None
    new_line: Optional[int] = None


@dataclass(frozen=True)
class DiffSummary:
    added: int
    removed: int
    unchanged: int
    modified: int = 0


@dataclass(frozen=True)
class TokenModification:
    name: str
    old_value: str
    new_value: str


SEPARATOR = DiffLine(type="separator", text="")

# Declarations across SCSS, CSS, TypeScript, Swift and Kotlin output.
_TOKEN_VALUE_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"\$([\w-]+)\s*:\s*(.+?)\s*;"),
    re.compile(r"--([\w-]+)\s*:\s*(.+?)\s*;"),
    re.compile(r"export\s+const\s+(\w+)\s*=\s*['\"]?(.+?)['\"]?\s*;?\s*$"),
    re.compile(r"static\s+let\s+(\w+)\s*=\s*(.+)"),
    re.compile(r"\bval\s+(\w+)\s*=\s*(.+)"),
)

TOKEN_NAME_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"\$([a-zA-Z][\w-]+)\s*:"),
    re.compile(r"--([a-zA-Z][\w-]+)\s*:"),
    re.compile(r"export\s+const\s+(\w+)"),
    re.compile(r"static\s+let\s+(\w+)"),
    re.compile(r"\bval\s+(\w+)"),
)


def _split(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def compute_diff(reference: str, generated: str) -> List[DiffLine]:
    """Diff ``reference`` (old) against ``generated`` (new) line by line."""

    old = _split(reference)
    new = _split(generated)
    matcher = difflib.SequenceMatcher(a=old, b=new, autojunk=False)
    lines: List[DiffLine] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            for offset in range(i2 - i1):
                lines.append(DiffLine("equal", old[i1 + offset], i1 + offset + 1, j1 + offset + 1))
            continue
        # Replacements read as removals followed by additions.
        for index in range(i1, i2):
            lines.append(DiffLine("remove", old[index], old_line=index + 1))
        for index in range(j1, j2):
            lines.append(DiffLine("add", new[index], new_line=index + 1))
    return lines


def diff_stats(lines: Sequence[DiffLine], modifications: Sequence[TokenModification] = ()) -> DiffSummary:
    return DiffSummary(
        added=sum(1 for line in lines if line.type == "add"),
        removed=sum(1 for line in lines if line.type == "remove"),
        unchanged=sum(1 for line in lines if line.type == "equal"),
        modified=len(modifications),
    )


def extract_token_name_value(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(name, value)`` for a token declaration line, else ``None``."""

    for pattern in _TOKEN_VALUE_PATTERNS:
        match = pattern.search(line)
        if match:
            return match.group(1), match.group(2).strip()
    return None


def extract_token_name(line: str) -> Optional[str]:
    for pattern in TOKEN_NAME_PATTERNS:
        match = pattern.search(line)
        if match:
            return match.group(1)
    return None


def extract_token_names(lines: Sequence[DiffLine], line_type: str) -> List[str]:
    """Token names declared on ``line_type`` lines, first occurrence order."""

    names: Dict[str, None] = {}
    for line in lines:
        if line.type != line_type:
            continue
        name = extract_token_name(line.text)
        if name:
            names.setdefault(name)
    return list(names)


def _declarations(lines: Sequence[DiffLine], line_type: str) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for line in lines:
        if line.type != line_type:
            continue
        pair = extract_token_name_value(line.text)
        if pair:
            found[pair[0]] = pair[1]
    return found


def extract_modified_tokens(diffs: Mapping[str, Sequence[DiffLine]]) -> Dict[str, List[TokenModification]]:
    """Tokens removed and re-added with a different value, per file."""

    result: Dict[str, List[TokenModification]] = {}
    for filename, lines in diffs.items():
        removed = _declarations(lines, "remove")
        added = _declarations(lines, "add")
        mods = [
            TokenModification(name, old_value, added[name])
            for name, old_value in removed.items()
            if added.get(name) and added[name] != old_value
        ]
        if mods:
            result[filename] = mods
    return result


def _one_sided(lines: Sequence[DiffLine], keep: str, drop: str) -> List[str]:
    dropped: Set[str] = set(extract_token_names(lines, drop))
    return [name for name in extract_token_names(lines, keep) if name not in dropped]


def extract_added_tokens(diffs: Mapping[str, Sequence[DiffLine]]) -> Dict[str, List[str]]:
    result: Dict[str, List[str]] = {}
    for filename, lines in diffs.items():
        names = _one_sided(lines, "add", "remove")
        if names:
            result[filename] = names
    return result


def extract_deprecations(diffs: Mapping[str, Sequence[DiffLine]]) -> Dict[str, List[str]]:
    """Tokens present in the reference that the generated file no longer declares."""

    result: Dict[str, List[str]] = {}
    for filename, lines in diffs.items():
        names = _one_sided(lines, "remove", "add")
        if names:
            result[filename] = names
    return result


def filter_diff_lines(lines: Sequence[DiffLine], context: int = 3) -> List[DiffLine]:
    """Keep changed lines plus ``context`` lines around them.

    Gaps between visible windows are marked with :data:`SEPARATOR`.
    """

    visible: Set[int] = set()
    last = len(lines) - 1
    for index, line in enumerate(lines):
        if line.type != "equal":
            visible.update(range(max(0, index - context), min(last, index + context) + 1))

    output: List[DiffLine] = []
    previous = -1
    for index in sorted(visible):
        if previous >= 0 and index > previous + 1:
            output.append(SEPARATOR)
        output.append(lines[index])
        previous = index
    return output


__all__ = [
    "DiffLine",
    "DiffSummary",
    "SEPARATOR",
    "TOKEN_NAME_PATTERNS",
    "TokenModification",
    "compute_diff",
    "diff_stats",
    "extract_added_tokens",
    "extract_deprecations",
    "extract_modified_tokens",
    "extract_token_name",
    "extract_token_name_value",
    "extract_token_names",
    "filter_diff_lines",
]
