"""Naming-convention lint and duplicate-value detection for token trees."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..tokens.graph import build_graph, resolve_token
from ..tokens.nodes import ColorNode
from ..tokens.walker import TokenPath, iter_tokens, walk_color_tokens

SEVERITIES = ("error", "warning")


@dataclass(frozen=True)
class NamingRule:
    """One naming constraint; unset fields are not checked."""

    id: str
    severity: str = "error"
    case: Optional[str] = None
    pattern: Optional[str] = None
    prefix: Optional[str] = None
    max_depth: Optional[int] = None


@dataclass(frozen=True)
class LintResult:
    token: str
    rule: str
    message: str
    severity: str


@dataclass(frozen=True)
class DuplicateGroup:
    value: str
    tokens: List[str]


WEB_RULES: Sequence[NamingRule] = (
    NamingRule("web-kebab", case="kebab"),
    NamingRule("web-no-deep", severity="warning", max_depth=5),
)

IOS_RULES: Sequence[NamingRule] = (
    NamingRule("ios-camel", case="camel"),
    NamingRule("ios-no-deep", severity="warning", max_depth=5),
)

ANDROID_RULES: Sequence[NamingRule] = (
    NamingRule("android-camel", case="camel"),
    NamingRule("android-no-deep", severity="warning", max_depth=5),
)

_RULE_SETS: Dict[str, Sequence[NamingRule]] = {
    "web": WEB_RULES,
    "ios": IOS_RULES,
    "android": ANDROID_RULES,
}

CASE_PATTERNS: Dict[str, re.Pattern[str]] = {
    "kebab": re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"),
    "camel": re.compile(r"^[a-z][a-zA-Z0-9]*$"),
    "snake": re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$"),
    "screaming": re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)*$"),
    "pascal": re.compile(r"^[A-Z][a-zA-Z0-9]*$"),
}


def get_rule_set(platform: str) -> List[NamingRule]:
    """Built-in rules for ``platform``; unknown platforms get the web rules."""
    return list(_RULE_SETS.get(platform, WEB_RULES))


def custom_rule(
    *,
    case: Optional[str] = None,
    prefix: Optional[str] = None,
    max_depth: Optional[int] = None,
    pattern: Optional[str] = None,
    severity: str = "error",
) -> Optional[NamingRule]:
    """Build the rule configured under ``lint.naming``; ``None`` when empty."""

    if case is None and prefix is None and max_depth is None and pattern is None:
        return None
    return NamingRule("custom", severity=severity, case=case, pattern=pattern, prefix=prefix, max_depth=max_depth)


def matches_case(name: str, case: str) -> bool:
    pattern = CASE_PATTERNS.get(case)
    return pattern.match(name) is not None if pattern else True


def token_path_to_name(path: TokenPath) -> str:
    return "-".join(
        re.sub(r"\s+", "-", segment.lower()) for segment in path if segment.lower() != "standard"
    )


def _check(rule: NamingRule, name: str, depth: int) -> List[str]:
    messages: List[str] = []
    if rule.case and not matches_case(name, rule.case):
        messages.append(f'Token "{name}" does not match {rule.case} naming convention')
    if rule.pattern and not re.search(rule.pattern, name):
        messages.append(f'Token "{name}" does not match pattern {rule.pattern}')
    if rule.prefix and not name.startswith(rule.prefix):
        messages.append(f'Token "{name}" missing required prefix "{rule.prefix}"')
    if rule.max_depth and depth > rule.max_depth:
        messages.append(f'Token "{name}" exceeds max depth of {rule.max_depth} (actual: {depth})')
    return messages


def lint_token_names(tree: Mapping[str, Any], rules: Sequence[NamingRule]) -> List[LintResult]:
    """Check every leaf's path-derived name against ``rules``."""

    results: List[LintResult] = []
    for path, _node in iter_tokens(tree):
        name = token_path_to_name(path)
        for rule in rules:
            for message in _check(rule, name, len(path)):
                results.append(LintResult(name, rule.id, message, rule.severity))
    return results


def lint_summary(results: Sequence[LintResult]) -> Dict[str, int]:
    return {
        "errors": sum(1 for result in results if result.severity == "error"),
        "warnings": sum(1 for result in results if result.severity == "warning"),
    }


def detect_duplicate_values(
    tokens: Mapping[str, Any],
    all_tokens: Optional[Mapping[str, Any]] = None,
) -> List[DuplicateGroup]:
    """Colour tokens that resolve to the same value, largest groups first.

    Aliases are resolved against ``all_tokens`` (defaults to ``tokens``) so a
    semantic pointing at a primitive groups with the primitive's other users.
    """

    graph = build_graph(all_tokens if all_tokens is not None else tokens)
    by_value: Dict[str, List[str]] = {}
    for path, node in walk_color_tokens(tokens):
        key = "/".join(path)
        resolved = resolve_token(key, graph)
        target = resolved.node if resolved is not None else node
        if isinstance(target, ColorNode) and target.value is not None:
            value = target.value.css
        else:
            value = json.dumps(target.raw.get("$value"), sort_keys=True)
        by_value.setdefault(value, []).append(key)

    groups = [DuplicateGroup(value, names) for value, names in by_value.items() if len(names) >= 2]
    groups.sort(key=lambda group: len(group.tokens), reverse=True)
    return groups


__all__ = [
    "ANDROID_RULES",
    "CASE_PATTERNS",
    "DuplicateGroup",
    "IOS_RULES",
    "LintResult",
    "NamingRule",
    "WEB_RULES",
    "custom_rule",
    "detect_duplicate_values",
    "get_rule_set",
    "lint_summary",
    "lint_token_names",
    "matches_case",
    "token_path_to_name",
]
