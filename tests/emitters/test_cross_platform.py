"""Cross-emitter checks on primitive ordering and semantic references."""

from __future__ import annotations

import re
from typing import List, Set

import pytest

from tokensmith.emitters.kotlin import KotlinEmitter
from tokensmith.emitters.scss import ScssEmitter
from tokensmith.emitters.swift import SwiftEmitter
from tokensmith.emitters.typescript import TypeScriptEmitter
from tests._fixtures.context import by_name, lines_of, make_context
from tests._fixtures.tokens import TokenTreeBuilder, dark_tree, light_tree


def _shuffled_greys() -> dict:
    return (
        TokenTreeBuilder()
        .color("Fill/Primary", "#1D1D1D", alias="Colour/Grey/750")
        .color("Fill/Secondary", "#FFFFFF", alias="Colour/Grey/0")
        .color("Fill/Tertiary", "#F2F2F2", alias="Colour/Grey/50")
        .build()
    )


def _positions(lines: List[str], needles: List[str]) -> List[int]:
    return [next(index for index, line in enumerate(lines) if needle in line) for needle in needles]


@pytest.mark.parametrize(
    ("emitter", "platform", "filename", "needles"),
    [
        (ScssEmitter(), "web", "Primitives.scss", ["$grey-0:", "$grey-50:", "$grey-750:"]),
        (TypeScriptEmitter(), "web", "Primitives.ts", ["GREY_0:", "GREY_50:", "GREY_750:"]),
        (SwiftEmitter(), "ios", "Colors.swift", ["static let grey0 ", "static let grey50 ", "static let grey750 "]),
        (KotlinEmitter(), "android", "Color.kt", ["val grey0 ", "val grey50 ", "val grey750 "]),
    ],
)
def test_primitives_sort_numerically_regardless_of_input_order(emitter, platform, filename, needles) -> None:
    tree = _shuffled_greys()
    context = make_context(platforms=(platform,), light=tree, dark=tree)

    lines = lines_of(by_name(emitter.emit(context))[filename])

    first, second, third = _positions(lines, needles)
    assert first < second < third


def _names(pattern: str, text: str) -> Set[str]:
    return {name for match in re.finditer(pattern, text, re.MULTILINE) for name in match.groups() if name}


def test_every_semantic_reference_is_declared_as_a_primitive() -> None:
    context = make_context(platforms=("web", "ios", "android"), light=light_tree(), dark=dark_tree())

    scss = by_name(ScssEmitter().emit(context))
    ts = by_name(TypeScriptEmitter().emit(context))
    swift = by_name(SwiftEmitter().emit(context))["Colors.swift"].content
    kotlin = by_name(KotlinEmitter().emit(context))

    pairs = [
        (
            _names(r"^\$([\w-]+):", scss["Primitives.scss"].content),
            _names(r"#\{\$([\w-]+)\}", scss["Colors.scss"].content),
        ),
        (
            _names(r"^export const (\w+)", ts["Primitives.ts"].content),
            _names(r"PRIMITIVES\.(\w+)", ts["Colors.ts"].content),
        ),
        (
            _names(r"static let (\w+) = Color\(hex:", swift),
            _names(r"light: \.(\w+), dark: \.(\w+)|= Color\.(\w+)$", swift),
        ),
        (
            _names(r"^\s+val (\w+) = Color\(0x", kotlin["Color.kt"].content),
            _names(r"Primitives\.(\w+)", kotlin["Colors.kt"].content),
        ),
    ]

    for declared, referenced in pairs:
        assert referenced
        assert referenced <= declared, referenced - declared


def test_dark_only_primitives_are_declared() -> None:
    light = TokenTreeBuilder().color("Fill/Primary", "#F2F2F2", alias="Colour/Grey/50").build()
    dark = TokenTreeBuilder().color("Fill/Primary", "#FFFFFF", alias="Colour/Grey/0").build()
    context = make_context(platforms=("web",), light=light, dark=dark)

    files = by_name(ScssEmitter().emit(context))

    assert "  --fill-primary: light-dark(#{$grey-50}, #{$grey-0});" in lines_of(files["Colors.scss"])
    assert "$grey-0: #ffffff;" in lines_of(files["Primitives.scss"])
