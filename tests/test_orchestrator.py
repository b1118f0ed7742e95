"""Tests for tokensmith.orchestrator."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, List

import pytest

from tokensmith.analysis import custom_rule
from tokensmith.config import CONFIG_FILENAME
from tokensmith.emitters import EmitContext, Emitter
from tokensmith.errors import TokenInputError
from tokensmith.models import GeneratedFile, GenerateRequest, GenerateWarning, GenerationResult
from tokensmith.orchestrator import Orchestrator, write_files
from tests._fixtures.tokens import alias, dark_tree, light_tree, typography_tree, values_tree


def _fixed_clock() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _request(**overrides: Any) -> GenerateRequest:
    fields = dict(
        light=light_tree(),
        dark=dark_tree(),
        values=values_tree(),
        typography=typography_tree(),
        platforms=("web", "ios", "android"),
    )
    fields.update(overrides)
    return GenerateRequest(**fields)


class RecordingEmitter(Emitter):
    """Emitter double that records the contexts it was handed."""

    name = "recording"

    def __init__(self) -> None:
        self.contexts: List[EmitContext] = []

    def supports(self, context: EmitContext) -> bool:
        return True

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        self.contexts.append(context)
        return [GeneratedFile("Notes.md", "# notes\n", "markdown", "web")]

    def warnings(self, context: EmitContext) -> List[GenerateWarning]:
        return [GenerateWarning(kind="reference", message="recorded")]


def test_generate_emits_files_for_every_platform() -> None:
    result = Orchestrator(clock=_fixed_clock).generate(_request())

    names = {(file.platform, file.filename) for file in result.files}
    assert ("web", "Primitives.scss") in names
    assert ("web", "Colors.scss") in names
    assert ("web", "Spacing.scss") in names
    assert ("web", "Typography.scss") in names
    assert ("ios", "Colors.swift") in names
    assert ("android", "Colors.kt") in names
    assert all("2026-10-19T12:00:00+00:00" in file.content for file in result.files if file.filename.endswith(".scss"))


def test_generate_reports_stats() -> None:
    result = Orchestrator(clock=_fixed_clock).generate(_request())

    assert result.stats.semantic_colors == 4
    assert result.stats.spacing_steps == 5
    assert result.stats.typography_styles == 3
    assert result.stats.shadow_tokens == 1
    assert result.stats.border_tokens == 1


def test_generate_is_deterministic_for_a_fixed_clock() -> None:
    first = Orchestrator(clock=_fixed_clock).generate(_request())
    second = Orchestrator(clock=_fixed_clock).generate(_request())

    assert [file.content for file in first.files] == [file.content for file in second.files]


def test_generate_differs_only_in_timestamp_between_runs() -> None:
    def later() -> datetime:
        return datetime(2027, 1, 1, tzinfo=UTC)

    def _strip(result: GenerationResult) -> List[str]:
        return [
            "\n".join(line for line in file.content.split("\n") if "Generated:" not in line)
            for file in result.files
        ]

    first = Orchestrator(clock=_fixed_clock).generate(_request())
    second = Orchestrator(clock=later).generate(_request())

    assert _strip(first) == _strip(second)


def test_generate_warns_about_weight_fallbacks_and_missing_typography() -> None:
    orchestrator = Orchestrator(clock=_fixed_clock)

    with_typography = orchestrator.generate(_request())
    without_typography = orchestrator.generate(_request(typography=None))

    assert "typography-weight" in {warning.kind for warning in with_typography.warnings}
    assert "missing-category" in {warning.kind for warning in without_typography.warnings}


def test_generate_reports_cycles_without_failing() -> None:
    light = light_tree()
    light["Loop"] = {"A": alias("Loop/B"), "B": alias("Loop/A")}

    result = Orchestrator(clock=_fixed_clock).generate(_request(light=light))

    cycles = [warning for warning in result.warnings if warning.kind == "cycle"]
    assert len(cycles) == 1
    assert cycles[0].message.startswith("Circular reference: Loop/A")
    assert result.files


def test_generate_counts_unknown_types() -> None:
    values = values_tree()
    values["Mystery"] = {"$type": "mystery", "$value": 1}

    result = Orchestrator(clock=_fixed_clock).generate(_request(values=values))

    unknown = [warning for warning in result.warnings if warning.kind == "unknown-type"]
    assert unknown and unknown[0].details == ["mystery (1)"]


def test_generate_warns_on_references_in_best_practice_mode() -> None:
    request = _request(references={"web-primitives-scss": "$grey-750: #1d1d1d;\n", "web-fonts": "x"})

    result = Orchestrator(clock=_fixed_clock).generate(request)

    reference_warnings = [warning for warning in result.warnings if warning.kind == "reference"]
    assert len(reference_warnings) == 2
    assert reference_warnings[0].details == ["web-fonts"]
    primitives = next(file for file in result.files if file.filename == "Primitives.scss")
    assert primitives.reference_content == "$grey-750: #1d1d1d;\n"


def test_generate_lints_names_when_rule_configured() -> None:
    plain = Orchestrator(clock=_fixed_clock).generate(_request())
    linted = Orchestrator(naming_rule=custom_rule(prefix="ds-"), clock=_fixed_clock).generate(_request())

    assert "lint" not in {warning.kind for warning in plain.warnings}
    lint = next(warning for warning in linted.warnings if warning.kind == "lint")
    assert lint.details


def test_generate_rejects_invalid_trees() -> None:
    with pytest.raises(TokenInputError):
        Orchestrator().generate(_request(light='["not", "an", "object"]'))


def test_emitter_overrides_replace_discovery() -> None:
    recorder = RecordingEmitter()

    result = Orchestrator([recorder], clock=_fixed_clock).generate(_request(kotlin_package="com.acme.tokens"))

    assert [file.filename for file in result.files] == ["Notes.md"]
    assert recorder.contexts[0].generated_at == "2026-10-19T12:00:00+00:00"
    assert recorder.contexts[0].conventions.kotlin.kotlin_package == "com.acme.tokens"
    assert any(warning.message == "recorded" for warning in result.warnings)


def test_enabled_emitters_limit_output() -> None:
    result = Orchestrator(enabled_emitters=["scss"], clock=_fixed_clock).generate(_request())

    assert sorted(file.filename for file in result.files) == ["Colors.scss", "Primitives.scss"]


def test_analyze_diffs_files_with_references() -> None:
    orchestrator = Orchestrator(clock=_fixed_clock)
    request = _request(references={"web-primitives-scss": "$grey-750: #1e1e1e;\n"})
    result = orchestrator.generate(request)

    report = orchestrator.analyze(result, request.light)

    assert list(report.diffs) == ["Primitives.scss"]


def test_write_files_places_output_per_platform(tmp_path: Path) -> None:
    files = [
        GeneratedFile("Colors.scss", "a\n", "scss", "web"),
        GeneratedFile("Colors.swift", "b\n", "swift", "ios"),
    ]

    written = write_files(files, tmp_path / "out")

    assert written == [tmp_path / "out" / "web" / "Colors.scss", tmp_path / "out" / "ios" / "Colors.swift"]
    assert (tmp_path / "out" / "ios" / "Colors.swift").read_text(encoding="utf-8") == "b\n"


def _write_config(root: Path, exports_dir: Path, extra: str = "") -> Path:
    config_file = root / CONFIG_FILENAME
    config_file.write_text(
        f"""
sources:
  light: "{exports_dir.name}/light.json"
  dark: "{exports_dir.name}/dark.json"
  values: "{exports_dir.name}/values.json"
  typography: "{exports_dir.name}/typography.json"
platforms: [web, ios]
{extra}
""",
        encoding="utf-8",
    )
    return config_file


def test_build_writes_files_and_changelog(tmp_path: Path, exports_dir: Path) -> None:
    reference = tmp_path / "Primitives.scss"
    reference.write_text("$grey-750: #1e1e1e;\n", encoding="utf-8")
    config_file = _write_config(
        tmp_path,
        exports_dir,
        "references:\n  web-primitives-scss: Primitives.scss\noutput:\n  changelog: true\n",
    )

    outcome = Orchestrator(clock=_fixed_clock).build(config_file)

    assert outcome.output_dir == tmp_path.resolve() / "tokens-out"
    assert (outcome.output_dir / "web" / "Primitives.scss").exists()
    assert (outcome.output_dir / "ios" / "Colors.swift").exists()
    assert outcome.changelog == outcome.output_dir / "CHANGELOG.md"
    assert outcome.changelog.read_text(encoding="utf-8").startswith("#")


def test_build_dry_run_writes_nothing(tmp_path: Path, exports_dir: Path) -> None:
    config_file = _write_config(tmp_path, exports_dir)

    outcome = Orchestrator(clock=_fixed_clock).build(config_file, dry_run=True)

    assert outcome.written == []
    assert outcome.result.files
    assert not outcome.output_dir.exists()


def test_build_requires_light_and_dark_sources(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("platforms: [web]\n", encoding="utf-8")

    with pytest.raises(FileNotFoundError):
        Orchestrator().build(tmp_path)


def test_build_reads_exports_from_disk(tmp_path: Path, exports_dir: Path) -> None:
    (exports_dir / "light.json").write_text(json.dumps(light_tree()), encoding="utf-8")
    config_file = _write_config(tmp_path, exports_dir)

    outcome = Orchestrator(clock=_fixed_clock).build(config_file, dry_run=True)

    assert outcome.result.stats.semantic_colors == 4


def test_docs_writes_manifest_and_page_from_config(tmp_path: Path, exports_dir: Path) -> None:
    config_file = _write_config(tmp_path, exports_dir, "docs:\n  directory: site\n  format: html\n")

    outcome = Orchestrator(clock=_fixed_clock).docs(config_file)

    assert outcome.output_dir == tmp_path.resolve() / "site"
    assert [path.name for path in outcome.written] == ["tokens.json", "index.html"]
    names = [entry["name"] for entry in json.loads(outcome.written[0].read_text(encoding="utf-8"))]
    assert "Text/Primary" in names
    assert "Integer/4" in names
    assert "Generated 2026-10-19T12:00:00+00:00" in outcome.output.html_text


def test_docs_format_override_and_dry_run(tmp_path: Path, exports_dir: Path) -> None:
    config_file = _write_config(tmp_path, exports_dir, "docs:\n  format: html\n")

    dry = Orchestrator(clock=_fixed_clock).docs(config_file, dry_run=True)
    json_only = Orchestrator(clock=_fixed_clock).docs(config_file, doc_format="json", output_dir=tmp_path / "out")

    assert dry.written == []
    assert not (tmp_path / "docs").exists()
    assert json_only.written == [tmp_path / "out" / "tokens.json"]


def test_docs_requires_sources(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("platforms: [web]\n", encoding="utf-8")

    with pytest.raises(FileNotFoundError, match="No token sources"):
        Orchestrator().docs(tmp_path)


def test_analyze_reports_orphans_against_both_modes() -> None:
    orchestrator = Orchestrator(enabled_emitters=["scss"], clock=_fixed_clock)
    request = _request(references={"web-primitives-scss": "$grey-750: #1d1d1d;\n$grey-900: #000000;\n"})
    result = orchestrator.generate(request)

    report = orchestrator.analyze(result, request.light, request.dark)

    unused = {entry.filename: entry for entry in report.unused}
    assert unused["Primitives.scss"].unused_in_figma == ["grey-900"]
    assert unused["Primitives.scss"].orphaned_primitives == []
