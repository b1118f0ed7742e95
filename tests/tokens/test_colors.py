"""Tests for colour literal conversions."""

from __future__ import annotations

import pytest

from tokensmith.tokens.colors import (
    apply_hex_case,
    figma_to_hex,
    figma_to_kotlin_hex,
    figma_to_string_hex,
    figma_to_swift_hex,
    hex_to_components,
    is_hex_color,
    to_byte,
)

GREY_750 = (29 / 255, 29 / 255, 29 / 255)


@pytest.mark.parametrize(
    "channel, expected",
    [(0.0, 0), (0.5, 128), (1.0, 255), (1.2, 255), (-0.3, 0)],
)
def test_to_byte_rounds_half_up_and_clamps(channel: float, expected: int) -> None:
    assert to_byte(channel) == expected


def test_translucent_literals_place_alpha_per_platform() -> None:
    assert figma_to_kotlin_hex(GREY_750, 0.5) == "0x801D1D1D"
    assert figma_to_swift_hex(GREY_750, 0.5) == "0x1D1D1D80"
    assert figma_to_hex(GREY_750, 0.5) == "#1d1d1d80"
    assert figma_to_string_hex(GREY_750, 0.5) == "#1D1D1D80"


def test_opaque_literals() -> None:
    assert figma_to_kotlin_hex(GREY_750) == "0xFF1D1D1D"
    assert figma_to_swift_hex(GREY_750) == "0x1D1D1D"
    assert figma_to_hex(GREY_750) == "#1d1d1d"


def test_hex_to_components_expands_short_form_and_reads_alpha() -> None:
    short = hex_to_components("#fff")
    with_alpha = hex_to_components("00000080")

    assert short == (1.0, 1.0, 1.0, 1.0)
    assert with_alpha is not None
    assert with_alpha[3] == pytest.approx(128 / 255)
    assert hex_to_components("#12345") is None


def test_is_hex_color_requires_hash() -> None:
    assert is_hex_color("#abcdef")
    assert not is_hex_color("abcdef")
    assert not is_hex_color(12)


def test_apply_hex_case() -> None:
    assert apply_hex_case("#abcdef", "upper") == "#ABCDEF"
    assert apply_hex_case("#ABCDEF", "lower") == "#abcdef"
