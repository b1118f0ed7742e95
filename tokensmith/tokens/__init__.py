"""Token tree parsing, traversal and alias graph utilities."""

from __future__ import annotations

from .graph import (
    CycleResult,
    CycleWarning,
    TokenGraph,
    build_graph,
    detect_cycles,
    format_cycle_warnings,
    resolve_token,
)
from .nodes import KNOWN_TOKEN_TYPES, ColorValue, TokenNode, parse_node
from .normalizer import detect_format, load_token_tree, normalize
from .walker import collect_unknown_types, get_node_at_path, iter_tokens, walk, walk_color_tokens

__all__ = [
    "ColorValue",
    "CycleResult",
    "CycleWarning",
    "KNOWN_TOKEN_TYPES",
    "TokenGraph",
    "TokenNode",
    "build_graph",
    "collect_unknown_types",
    "detect_cycles",
    "detect_format",
    "format_cycle_warnings",
    "get_node_at_path",
    "iter_tokens",
    "load_token_tree",
    "normalize",
    "parse_node",
    "resolve_token",
    "walk",
    "walk_color_tokens",
]
