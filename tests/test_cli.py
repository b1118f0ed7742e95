"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tokensmith.cli import _build_parser, _parse_references, main
from tokensmith.config import CONFIG_FILENAME
from tokensmith.logging import configure_logging, get_logger
from tests._fixtures.tokens import TokenTreeBuilder


def _export_args(exports_dir: Path) -> list[str]:
    return [
        "--light",
        str(exports_dir / "light.json"),
        "--dark",
        str(exports_dir / "dark.json"),
        "--values",
        str(exports_dir / "values.json"),
    ]


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.path == "."


def test_cli_collects_repeated_platforms() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["generate", "--light", "l.json", "--dark", "d.json", "--platform", "ios", "--platform", "android"]
    )
    assert args.platforms == ["ios", "android"]
    assert args.match_existing is False
    assert args.out == Path("tokens-out")


def test_cli_rejects_unknown_platform() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["generate", "--light", "l.json", "--dark", "d.json", "--platform", "web3"])


def test_generate_dry_run_lists_files(exports_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["generate", *_export_args(exports_dir), "--dry-run"])

    out = capsys.readouterr().out
    assert out.startswith("Files (dry-run):\n")
    assert "  web/Primitives.scss\n" in out
    assert "  web/Spacing.scss\n" in out


def test_generate_writes_files(
    exports_dir: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)

    main(["generate", *_export_args(exports_dir), "--platform", "ios", "--out", "out"])

    out = capsys.readouterr().out
    assert (tmp_path / "out" / "ios" / "Colors.swift").exists()
    assert "  ✓ out/ios/Colors.swift\n" in out
    assert not (tmp_path / "out" / "web").exists()


def test_generate_reports_bad_reference(exports_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", *_export_args(exports_dir), "--reference", "web-fonts=Fonts.scss"])

    assert excinfo.value.code == 1
    assert "tokensmith generate failed: Unknown reference role 'web-fonts'" in capsys.readouterr().err


def test_generate_reports_missing_export(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--light", str(tmp_path / "nope.json"), "--dark", str(tmp_path / "nope.json")])

    assert excinfo.value.code == 1
    assert "nope.json" in capsys.readouterr().err


def test_parse_references_classifies_bare_paths(tmp_path: Path) -> None:
    primitives = tmp_path / "Primitives.scss"
    primitives.write_text("$grey-750: #1d1d1d;\n", encoding="utf-8")
    swift = tmp_path / "Colors.swift"
    swift.write_text("import SwiftUI\n", encoding="utf-8")
    explicit = tmp_path / "Legacy.swift"
    explicit.write_text("// legacy\n", encoding="utf-8")

    references = _parse_references([str(primitives), str(swift), f"ios-colors-swift={explicit}"])

    assert references == {
        "web-primitives-scss": "$grey-750: #1d1d1d;\n",
        "ios-colors-swift": "// legacy\n",
    }


def test_parse_references_rejects_empty_path() -> None:
    with pytest.raises(ValueError, match="ROLE=PATH or PATH"):
        _parse_references(["ios-colors-swift="])


def test_build_uses_config(
    exports_dir: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        "sources:\n"
        "  light: exports/light.json\n"
        "  dark: exports/dark.json\n"
        "platforms: [android]\n"
        "output:\n"
        "  directory: generated\n",
        encoding="utf-8",
    )

    main(["build", str(tmp_path)])

    assert (tmp_path / "generated" / "android" / "Colors.kt").exists()
    assert "file(s) generated." in capsys.readouterr().out


def test_build_reports_config_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("platforms: [desktop]\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Unknown platforms: desktop" in capsys.readouterr().err


def test_lint_passes_on_kebab_names(exports_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["lint", "--tokens", str(exports_dir / "light.json")])

    assert "0 error(s), 0 warning(s)" in capsys.readouterr().out


def test_lint_fails_on_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    tree = TokenTreeBuilder().color("Brand_Blue", "#0066FF").color("Brand/Blue", "#0066FF").build()
    tokens = tmp_path / "tokens.json"
    tokens.write_text(json.dumps(tree), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["lint", "--tokens", str(tokens), "--duplicates"])

    captured = capsys.readouterr()
    assert excinfo.value.code == 1
    assert "1 error(s), 0 warning(s)" in captured.out
    assert 'Token "brand_blue" does not match kebab naming convention' in captured.out
    assert "Lint failed with errors." in captured.err


def test_lint_contrast_reports_each_pair(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    tree = (
        TokenTreeBuilder()
        .color("Text/Primary", "#000000")
        .color("Background/Base", "#FFFFFF")
        .build()
    )
    tokens = tmp_path / "tokens.json"
    tokens.write_text(json.dumps(tree), encoding="utf-8")

    main(["lint", "--tokens", str(tokens), "--contrast"])

    out = capsys.readouterr().out
    assert "  ✓ text-primary / background-base: Lc 106.0 (pass)" in out
    assert "1 pass, 0 large-only, 0 non-text, 0 fail" in out


def test_lint_contrast_failures_fail_the_run(exports_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["lint", "--tokens", str(exports_dir / "light.json"), "--contrast"])

    captured = capsys.readouterr()
    assert excinfo.value.code == 1
    assert "  ✗ text-primary / background-static-brand: Lc" in captured.out
    assert "Lint failed with errors." in captured.err


def test_lint_uses_configured_contrast_pairings(
    exports_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        "lint:\n  contrast:\n    pairings:\n      text-primary: fill-primary\n",
        encoding="utf-8",
    )

    main(["lint", "--tokens", str(exports_dir / "light.json"), "--config", str(tmp_path)])

    out = capsys.readouterr().out
    assert "text-primary / fill-primary" in out
    assert "background-static-brand" not in out


def test_docs_command_writes_files(
    exports_dir: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        "sources:\n  light: exports/light.json\n  dark: exports/dark.json\n",
        encoding="utf-8",
    )

    main(["docs", str(tmp_path), "--format", "html"])

    assert (tmp_path / "docs" / "tokens.json").exists()
    assert (tmp_path / "docs" / "index.html").exists()
    assert "Documentation generated." in capsys.readouterr().out


def test_log_file_option_records_debug_output(exports_dir: Path, tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("sources:\n  light: exports/light.json\n", encoding="utf-8")
    log_file = tmp_path / "logs" / "tokensmith.log"

    main(["--verbose", "--log-file", str(log_file), "docs", str(tmp_path), "--dry-run"])
    logger = get_logger()
    for handler in list(logger.handlers):
        handler.close()
    configure_logging()

    assert "DEBUG tokensmith.docs: Documenting" in log_file.read_text(encoding="utf-8")


def test_docs_command_reports_missing_sources(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["docs", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "No token sources configured" in capsys.readouterr().err


def test_init_writes_scaffold_once(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["init", str(tmp_path)])

    assert (tmp_path / CONFIG_FILENAME).exists()
    assert "Created" in capsys.readouterr().out

    with pytest.raises(SystemExit) as excinfo:
        main(["init", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "already exists" in capsys.readouterr().err
