"""Recursive traversal helpers over canonical token trees."""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Iterator, Mapping, MutableMapping, Optional, Sequence, Tuple

from .nodes import KNOWN_TOKEN_TYPES, ColorNode, TokenNode, is_leaf, parse_node

TokenPath = Tuple[str, ...]
Visitor = Callable[[TokenPath, Mapping[str, Any], str], None]


def walk(
    tree: Any,
    visit: Visitor,
    unknown_types: Optional[MutableMapping[str, int]] = None,
    _path: TokenPath = (),
) -> None:
    """Call ``visit(path, leaf, type)`` for every typed leaf under ``tree``.

    Keys starting with ``$`` are metadata and never become path segments.
    Typed leaves are terminal even when they carry nested mappings.
    """

    if not isinstance(tree, Mapping):
        return
    if is_leaf(tree):
        token_type = tree["$type"]
        if unknown_types is not None and token_type not in KNOWN_TOKEN_TYPES:
            unknown_types[token_type] = unknown_types.get(token_type, 0) + 1
        visit(_path, tree, token_type)
        return
    for key, value in tree.items():
        if str(key).startswith("$"):
            continue
        walk(value, visit, unknown_types, _path + (str(key),))


def iter_tokens(tree: Any) -> Iterator[Tuple[TokenPath, TokenNode]]:
    """Yield ``(path, node)`` pairs in document order."""

    collected: list[Tuple[TokenPath, TokenNode]] = []
    walk(tree, lambda path, raw, _type: collected.append((path, parse_node(raw))))
    yield from collected


def walk_color_tokens(tree: Any) -> Iterator[Tuple[TokenPath, ColorNode]]:
    for path, node in iter_tokens(tree):
        if isinstance(node, ColorNode):
            yield path, node


def get_raw_at_path(tree: Any, path: Sequence[str]) -> Optional[Mapping[str, Any]]:
    current = tree
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current if is_leaf(current) else None


def get_node_at_path(tree: Any, path: Sequence[str]) -> Optional[TokenNode]:
    """Return the typed leaf at exactly ``path``, or ``None``."""

    raw = get_raw_at_path(tree, path)
    return parse_node(raw) if raw is not None else None


def collect_unknown_types(tree: Any) -> Counter:
    """Map each unrecognised ``$type`` to the number of leaves using it."""

    unknown: Counter = Counter()
    walk(tree, lambda *_: None, unknown)
    return unknown


__all__ = [
    "TokenPath",
    "collect_unknown_types",
    "get_node_at_path",
    "get_raw_at_path",
    "iter_tokens",
    "walk",
    "walk_color_tokens",
]
