"""Tests for tokensmith.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tokensmith.config import CONFIG_FILENAME, TokensmithConfig, load_config, scaffold_config, write_config_scaffold
from tokensmith.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, TokensmithConfig)
    assert config.root == tmp_path.resolve()
    assert config.platforms == ["web"]
    assert config.categories == ["colors", "typography"]
    assert config.best_practices is True
    assert config.references == {}
    assert config.output.directory == tmp_path.resolve() / "tokens-out"
    assert config.output.changelog is False
    assert config.naming.configured is False
    assert config.emitters.enabled == []
    assert config.kotlin_package is None
    assert config.confidence_threshold == 0.7


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / CONFIG_FILENAME
    config_file.write_text(
        """
sources:
  light: "exports/light.json"
  dark: "exports/dark.json"
  values: "exports/values.json"
platforms: [web, ios, android]
categories: [colors]
best_practices: false
confidence_threshold: 0.8
references:
  ios-colors-swift: "App/Colors.swift"
output:
  directory: "generated"
  changelog: yes
lint:
  naming:
    case: kebab
    prefix: "ds-"
    max_depth: 4
emitters:
  enabled: [scss, swift]
kotlin:
  package: "com.acme.tokens"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.sources.light == root / "exports/light.json"
    assert config.sources.dark == root / "exports/dark.json"
    assert config.sources.values == root / "exports/values.json"
    assert config.sources.typography is None
    assert config.platforms == ["web", "ios", "android"]
    assert config.categories == ["colors"]
    assert config.best_practices is False
    assert config.confidence_threshold == 0.8
    assert config.references == {"ios-colors-swift": root / "App/Colors.swift"}
    assert config.output.directory == root / "generated"
    assert config.output.changelog is True
    assert config.naming.configured
    assert (config.naming.case, config.naming.prefix, config.naming.max_depth) == ("kebab", "ds-", 4)
    assert config.emitters.enabled == ["scss", "swift"]
    assert config.kotlin_package == "com.acme.tokens"


def test_load_config_accepts_non_yaml_path_inside_directory(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("platforms: ios\n", encoding="utf-8")

    config = load_config(tmp_path / "light.json")

    assert config.platforms == ["ios"]


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).platforms == ["web"]


@pytest.mark.parametrize(
    "content, message",
    [
        ("- just\n- a list\n", "must contain a mapping"),
        ("platforms: [web, watchos]\n", "Unknown platforms: watchos"),
        ("categories: [motion]\n", "Unknown categories: motion"),
        ("references:\n  web-fonts: a.scss\n", "Unknown reference role 'web-fonts'"),
        ("platforms: [web\n", "Failed to parse"),
        ("lint:\n  contrast:\n    algorithm: wcag2\n", "Unknown contrast algorithms: wcag2"),
        ("docs:\n  format: pdf\n", "Unknown docs formats: pdf"),
    ],
)
def test_load_config_rejects_invalid_content(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_contrast_and_docs_default_to_off_and_json(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.contrast.enabled is False
    assert config.docs.directory == tmp_path.resolve() / "docs"
    assert config.docs.format == "json"


def test_load_config_parses_contrast_and_docs(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        """
lint:
  contrast:
    algorithm: apca
    min_lc: 90
    pairings:
      text-primary: background-base
docs:
  directory: site/tokens
  format: html
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.contrast.enabled is True
    assert config.contrast.min_lc == 90.0
    assert config.contrast.pairings == {"text-primary": "background-base"}
    assert config.docs.directory == tmp_path.resolve() / "site/tokens"
    assert config.docs.format == "html"


def test_bare_contrast_flag_enables_auto_pairing(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("lint:\n  contrast: true\n", encoding="utf-8")

    contrast = load_config(tmp_path).contrast

    assert contrast.enabled is True
    assert contrast.pairings == {}
    assert contrast.min_lc is None


def test_scaffold_round_trips_through_load_config(tmp_path: Path) -> None:
    config_file = write_config_scaffold(tmp_path)

    config = load_config(config_file)

    assert config_file.read_text(encoding="utf-8") == scaffold_config()
    assert config.sources.light == tmp_path.resolve() / "exports/light.json"
    assert config.platforms == ["web", "ios", "android"]
    assert config.naming.case == "kebab"
    assert config.contrast.enabled is True
    assert config.docs.format == "html"


def test_scaffold_never_overwrites(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("platforms: [ios]\n", encoding="utf-8")

    with pytest.raises(FileExistsError, match="already exists"):
        write_config_scaffold(tmp_path)

    assert (tmp_path / CONFIG_FILENAME).read_text(encoding="utf-8") == "platforms: [ios]\n"
