"""Tests for token documentation output."""

from __future__ import annotations

import json
from pathlib import Path

from tokensmith.docs import extract_doc_entries, format_value, generate_token_docs, write_docs
from tests._fixtures.tokens import TokenTreeBuilder, light_tree, values_tree

GENERATED_AT = "2026-10-19T12:00:00+00:00"


def test_entries_carry_type_value_and_alias() -> None:
    entries = {entry.name: entry for entry in extract_doc_entries(light_tree())}

    primary = entries["Text/Primary"]
    assert primary.type == "color"
    assert primary.alias == "Colour/Grey/750"
    assert primary.swatch == "#1d1d1d"
    assert format_value(primary) == "#1d1d1d"


def test_composite_values_are_formatted() -> None:
    entries = {entry.name: entry for entry in extract_doc_entries(values_tree())}

    assert format_value(entries["Elevation/Low"]) == "0px 2px 4px 0px"
    assert format_value(entries["Border/Default"]) == "1px solid"
    assert format_value(entries["Integer/4"]) == "4"


def test_json_manifest_lists_every_token() -> None:
    output = generate_token_docs(light_tree(), generated_at=GENERATED_AT)

    manifest = json.loads(output.json_text)
    assert [entry["name"] for entry in manifest] == [
        "Fill/Standard/Primary",
        "Text/Primary",
        "Background/Static/Brand",
        "Stroke/Subtle",
    ]
    assert manifest[1]["alias"] == "Colour/Grey/750"
    assert "swatch" not in manifest[1]


def test_html_groups_by_type_and_escapes_text() -> None:
    tree = TokenTreeBuilder().color("Text/<em>Bold", "#1D1D1D").number("Integer/4", 4).build()
    tree["Text"]["<em>Bold"]["$description"] = "Use for <strong> emphasis & headings"

    html = generate_token_docs(tree, generated_at=GENERATED_AT).html_text

    assert html.startswith("<!DOCTYPE html>")
    assert f"Generated {GENERATED_AT} · 2 tokens" in html
    assert html.index("color (1)") < html.index("number (1)")
    assert "Text/&lt;em&gt;Bold" in html
    assert "Use for &lt;strong&gt; emphasis &amp; headings" in html
    assert '<span class="swatch" style="background:#1d1d1d"' in html


def test_write_docs_adds_html_page_only_for_html(tmp_path: Path) -> None:
    output = generate_token_docs(light_tree(), generated_at=GENERATED_AT)

    json_only = write_docs(output, tmp_path / "json", "json")
    with_html = write_docs(output, tmp_path / "html", "html")

    assert json_only == [tmp_path / "json" / "tokens.json"]
    assert with_html == [tmp_path / "html" / "tokens.json", tmp_path / "html" / "index.html"]
    assert (tmp_path / "html" / "index.html").read_text(encoding="utf-8") == output.html_text
