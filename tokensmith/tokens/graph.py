"""Alias graph construction, cycle detection and alias resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .nodes import TokenNode, parse_node
from .walker import TokenPath, walk


@dataclass(frozen=True)
class GraphNode:
    path: TokenPath
    node: TokenNode

    @property
    def key(self) -> str:
        return "/".join(self.path)


@dataclass
class TokenGraph:
    """Leaves keyed by slash-joined path plus alias edges source -> target."""

    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CycleResult:
    cycles: List[List[str]]

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)


@dataclass(frozen=True)
class CycleWarning:
    chain: List[str]
    message: str


def build_graph(*trees: Any) -> TokenGraph:
    """Union the leaves of ``trees``; later trees overwrite same-path entries."""

    graph = TokenGraph()
    for tree in trees:

        def _register(path: TokenPath, raw: Any, _type: str) -> None:
            node = parse_node(raw)
            key = "/".join(path)
            graph.nodes[key] = GraphNode(path, node)
            if node.alias_target:
                graph.edges[key] = node.alias_target

        walk(tree, _register)
    return graph


def detect_cycles(graph: TokenGraph) -> CycleResult:
    """Depth-first search from every edge source; each cycle is reported once."""

    cycles: List[List[str]] = []
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    chain: List[str] = []

    def _dfs(node: str) -> None:
        if node in on_stack:
            start = chain.index(node)
            cycles.append(chain[start:] + [node])
            return
        if node in visited:
            return
        visited.add(node)
        on_stack.add(node)
        chain.append(node)
        target = graph.edges.get(node)
        if target:
            _dfs(target)
        on_stack.discard(node)
        chain.pop()

    for source in list(graph.edges):
        if source not in visited:
            _dfs(source)
    return CycleResult(cycles)


def format_cycle_warnings(result: CycleResult) -> List[CycleWarning]:
    return [
        CycleWarning(chain=list(chain), message=f"Circular reference: {' → '.join(chain)}")
        for chain in result.cycles
    ]


def resolve_token(path: str, graph: TokenGraph, max_depth: int = 20) -> Optional[GraphNode]:
    """Follow aliases from ``path`` to a terminal leaf.

    Returns ``None`` for unknown paths, cycles, or chains longer than
    ``max_depth`` hops.
    """

    current = path
    seen: Set[str] = set()
    for _ in range(max_depth):
        if current in seen:
            return None
        seen.add(current)
        entry = graph.nodes.get(current)
        if entry is None:
            return None
        target = graph.edges.get(current)
        if not target:
            return entry
        current = target
    return None


__all__ = [
    "CycleResult",
    "CycleWarning",
    "GraphNode",
    "TokenGraph",
    "build_graph",
    "detect_cycles",
    "format_cycle_warnings",
    "resolve_token",
]
