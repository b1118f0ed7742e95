"""Tests for token export format detection and normalization."""

from __future__ import annotations

import json

import pytest

from tokensmith.errors import TokenInputError
from tokensmith.tokens import detect_format, load_token_tree, normalize
from tokensmith.tokens.nodes import ALIAS_EXTENSION
from tests._fixtures.tokens import light_tree


def test_detect_format_recognises_figma_exports() -> None:
    assert detect_format(light_tree()) == "figma-dtcg"


def test_detect_format_recognises_w3c_and_tokens_studio() -> None:
    w3c = {"color": {"red": {"$type": "color", "$value": "#ff0000"}}}
    studio = {"global": {"red": {"value": "#ff0000", "type": "color"}}}

    assert detect_format(w3c) == "w3c-dtcg"
    assert detect_format(studio) == "tokens-studio"
    assert detect_format({}) == "unknown"


def test_normalize_leaves_figma_tree_unchanged() -> None:
    tree = light_tree()
    assert normalize(tree) == tree


def test_normalize_w3c_converts_hex_and_brace_aliases() -> None:
    tree = {
        "color": {
            "red": {"$type": "color", "$value": "#ff0000", "$description": "Brand red"},
            "danger": {"$type": "color", "$value": "{color.red}"},
        }
    }

    normalized = normalize(tree)
    red = normalized["color"]["red"]
    danger = normalized["color"]["danger"]

    assert red["$value"]["components"] == [1.0, 0.0, 0.0]
    assert red["$value"]["hex"] == "#ff0000"
    assert red["$description"] == "Brand red"
    assert "$value" not in danger
    assert danger["$extensions"][ALIAS_EXTENSION]["targetVariableName"] == "red"


def test_normalize_tokens_studio_maps_types() -> None:
    tree = {
        "global": {
            "red": {"value": "#ff0000", "type": "color"},
            "space": {"value": "8", "type": "spacing"},
            "alias": {"value": "{global.red}", "type": "color"},
        },
        "$themes": [],
    }

    normalized = normalize(tree)
    group = normalized["global"]

    assert "$themes" not in normalized
    assert group["red"]["$type"] == "color"
    assert group["red"]["$value"]["alpha"] == 1.0
    assert group["space"] == {"$type": "number", "$value": "8"}
    assert group["alias"]["$extensions"][ALIAS_EXTENSION]["targetVariableName"] == "red"


def test_load_token_tree_parses_json_text_and_bytes() -> None:
    text = json.dumps(light_tree())

    assert load_token_tree(text) == light_tree()
    assert load_token_tree(text.encode("utf-8")) == light_tree()


def test_load_token_tree_rejects_non_objects() -> None:
    with pytest.raises(TokenInputError) as excinfo:
        load_token_tree("[1, 2, 3]", name="light")

    assert str(excinfo.value) == "light: Token export must be a JSON object"
    assert excinfo.value.source == "light"


def test_load_token_tree_rejects_invalid_json() -> None:
    with pytest.raises(TokenInputError, match="Invalid JSON"):
        load_token_tree("{not json")
