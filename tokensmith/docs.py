"""Token documentation: a JSON manifest and a single-page HTML reference."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .logging import get_logger
from .rendering import render_template
from .tokens.nodes import ColorNode
from .tokens.walker import iter_tokens

LOGGER = get_logger("docs")

# Known types come first in the HTML page; the rest follow alphabetically.
TYPE_ORDER = ("color", "number", "typography", "shadow", "border")


@dataclass(frozen=True)
class TokenDocEntry:
    name: str
    type: str
    value: Any
    alias: Optional[str] = None
    description: Optional[str] = None
    swatch: Optional[str] = None


@dataclass(frozen=True)
class DocsOutput:
    json_text: str
    html_text: str


def extract_doc_entries(tree: Mapping[str, Any]) -> List[TokenDocEntry]:
    """One entry per typed leaf, in document order."""

    entries: List[TokenDocEntry] = []
    for path, node in iter_tokens(tree):
        swatch = node.value.css if isinstance(node, ColorNode) and node.value is not None else None
        entries.append(
            TokenDocEntry(
                name="/".join(path),
                type=node.type,
                value=node.raw.get("$value"),
                alias=node.alias_target,
                description=node.description,
                swatch=swatch,
            )
        )
    return entries


def format_value(entry: TokenDocEntry) -> str:
    value = entry.value
    if entry.type == "color":
        if entry.swatch:
            return entry.swatch
        if isinstance(value, Mapping) and value.get("hex"):
            return str(value["hex"])
    if entry.type == "shadow" and isinstance(value, Mapping):
        parts = [value.get(key, 0) for key in ("offsetX", "offsetY", "blur", "spread")]
        return " ".join(f"{part}px" for part in parts)
    if entry.type == "border" and isinstance(value, Mapping):
        return f"{value.get('width', 0)}px {value.get('style', 'solid')}"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return json.dumps(value)


def _grouped(entries: Sequence[TokenDocEntry]) -> List[Tuple[str, List[TokenDocEntry]]]:
    by_type: Dict[str, List[TokenDocEntry]] = {}
    for entry in entries:
        by_type.setdefault(entry.type, []).append(entry)
    ordered = [token_type for token_type in TYPE_ORDER if token_type in by_type]
    ordered.extend(sorted(token_type for token_type in by_type if token_type not in TYPE_ORDER))
    return [(token_type, by_type[token_type]) for token_type in ordered]


def render_docs_json(entries: Sequence[TokenDocEntry]) -> str:
    payload = [
        {key: value for key, value in asdict(entry).items() if value is not None and key != "swatch"}
        for entry in entries
    ]
    return json.dumps(payload, indent=2) + "\n"


def render_docs_html(entries: Sequence[TokenDocEntry], *, generated_at: str) -> str:
    return render_template(
        "docs.html.j2",
        groups=_grouped(entries),
        total=len(entries),
        generated_at=generated_at,
        format_value=format_value,
    )


def generate_token_docs(tree: Mapping[str, Any], *, generated_at: str) -> DocsOutput:
    entries = extract_doc_entries(tree)
    LOGGER.debug("Documenting %d token(s)", len(entries))
    return DocsOutput(render_docs_json(entries), render_docs_html(entries, generated_at=generated_at))


def write_docs(output: DocsOutput, directory: Path, doc_format: str = "json") -> List[Path]:
    """Write ``tokens.json`` (always) and ``index.html`` (``html`` format)."""

    directory.mkdir(parents=True, exist_ok=True)
    written = [directory / "tokens.json"]
    written[0].write_text(output.json_text, encoding="utf-8")
    if doc_format == "html":
        page = directory / "index.html"
        page.write_text(output.html_text, encoding="utf-8")
        written.append(page)
    return written


__all__ = [
    "DocsOutput",
    "TYPE_ORDER",
    "TokenDocEntry",
    "extract_doc_entries",
    "format_value",
    "generate_token_docs",
    "render_docs_html",
    "render_docs_json",
    "write_docs",
]
