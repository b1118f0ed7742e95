"""Pipeline orchestration for generate/build/analyze flows."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .analysis import (
    AnalysisReport,
    NamingRule,
    analyze,
    custom_rule,
    lint_summary,
    lint_token_names,
    render_changelog,
)
from .config import TokensmithConfig, load_config
from .conventions import DetectedConventions, detect_conventions
from .docs import DocsOutput, generate_token_docs, write_docs
from .emitters import EmitContext, Emitter, discover_emitters
from .emitters.border import collect_border_entries
from .emitters.gradient import collect_gradient_entries
from .emitters.motion import collect_motion_tokens
from .emitters.opacity import collect_opacity_entries
from .emitters.palette import collect_palette
from .emitters.radius import collect_radius_entries
from .emitters.shadow import collect_shadow_entries
from .emitters.spacing import collect_spacing_entries
from .emitters.typography import count_typography_styles
from .logging import get_logger
from .models import (
    REFERENCE_ROLES,
    GeneratedFile,
    GenerateRequest,
    GenerateWarning,
    GenerationResult,
    GenerationStats,
)
from .tokens import build_graph, collect_unknown_types, detect_cycles, format_cycle_warnings, load_token_tree

Clock = Callable[[], datetime]


@dataclass
class BuildOutcome:
    """Result of a config-driven build."""

    output_dir: Path
    written: List[Path]
    result: GenerationResult
    changelog: Optional[Path] = None


@dataclass
class DocsOutcome:
    """Result of documenting the configured token sources."""

    output_dir: Path
    written: List[Path]
    output: DocsOutput


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Orchestrator:
    """Runs one generation request from raw token trees to generated files."""

    def __init__(
        self,
        emitters: Optional[Iterable[Emitter]] = None,
        *,
        enabled_emitters: Optional[Sequence[str]] = None,
        naming_rule: NamingRule | None = None,
        confidence_threshold: float = 0.7,
        clock: Clock | None = None,
    ) -> None:
        self._emitter_overrides = list(emitters) if emitters is not None else None
        self._enabled_emitters = list(enabled_emitters) if enabled_emitters else None
        self.naming_rule = naming_rule
        self.confidence_threshold = confidence_threshold
        self._clock = clock or _utc_now
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: TokensmithConfig, **kwargs: Any) -> "Orchestrator":
        naming = config.naming
        rule = custom_rule(
            case=naming.case,
            prefix=naming.prefix,
            max_depth=naming.max_depth,
            pattern=naming.pattern,
        )
        return cls(
            enabled_emitters=config.emitters.enabled or None,
            naming_rule=rule,
            confidence_threshold=config.confidence_threshold,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Public API

    def generate(self, request: GenerateRequest) -> GenerationResult:
        """Normalize inputs, detect conventions and run every supporting emitter.

        Only structurally invalid trees raise (:class:`TokenInputError`);
        everything else is reported through ``GenerationResult.warnings``.
        """

        light = load_token_tree(request.light, name="light")
        dark = load_token_tree(request.dark, name="dark")
        values = load_token_tree(request.values or {}, name="values")
        typography = load_token_tree(request.typography, name="typography") if request.typography else None
        primitives = load_token_tree(request.primitives, name="primitives") if request.primitives else None

        warnings: List[GenerateWarning] = []
        warnings.extend(self._cycle_warnings(light, dark, values, primitives))
        warnings.extend(self._unknown_type_warnings(light, dark, values))
        warnings.extend(self._reference_warnings(request))

        conventions = self._detect_conventions(request)
        warnings.extend(self._confidence_warnings(conventions))

        context = EmitContext(
            light=light,
            dark=dark,
            conventions=conventions,
            values=values,
            typography=typography,
            primitives=primitives,
            platforms=tuple(request.platforms),
            categories=tuple(request.categories),
            references=dict(request.references),
            generated_at=self._clock().isoformat(),
        )
        warnings.extend(self._missing_category_warnings(context))

        files: List[GeneratedFile] = []
        for emitter in self._select_emitters():
            if not emitter.supports(context):
                continue
            emitted = emitter.emit(context)
            self.logger.debug("Emitter %s produced %d file(s)", emitter.name, len(emitted))
            files.extend(emitted)
            warnings.extend(emitter.warnings(context))

        files = self._attach_references(files, request.references)
        warnings.extend(self._lint_warnings(light, dark, values))

        stats = self._compute_stats(context)
        self.logger.debug(
            "Generated %d file(s) with %d warning(s) (%d primitives, %d semantics)",
            len(files),
            len(warnings),
            stats.primitive_colors,
            stats.semantic_colors,
        )
        return GenerationResult(files=files, warnings=warnings, stats=stats, conventions=conventions)

    def analyze(
        self,
        result: GenerationResult,
        light: Optional[Mapping[str, Any]] = None,
        dark: Optional[Mapping[str, Any]] = None,
    ) -> AnalysisReport:
        """Diff generated files against the references attached to them."""

        normalized = load_token_tree(light, name="light") if light is not None else None
        normalized_dark = load_token_tree(dark, name="dark") if dark is not None else None
        return analyze(result.files, normalized, normalized_dark)

    def build(
        self,
        config_path: Path,
        *,
        dry_run: bool = False,
    ) -> BuildOutcome:
        """Generate from ``.tokensmith.yml`` and write files to the output directory."""

        config = load_config(config_path)
        request = self._request_from_config(config)
        result = self.generate(request)
        output_dir = config.output.directory
        self.logger.info("Generated %d file(s) for %s", len(result.files), ", ".join(config.platforms))

        changelog_text: Optional[str] = None
        if config.output.changelog:
            report = self.analyze(result, request.light, request.dark)
            changelog_text = render_changelog(report, config.platforms)

        if dry_run:
            return BuildOutcome(output_dir=output_dir, written=[], result=result)

        written = write_files(result.files, output_dir)
        changelog_path: Optional[Path] = None
        if changelog_text:
            changelog_path = output_dir / "CHANGELOG.md"
            changelog_path.write_text(changelog_text, encoding="utf-8")
            self.logger.info("Wrote %s", changelog_path)
        return BuildOutcome(output_dir=output_dir, written=written, result=result, changelog=changelog_path)

    def docs(
        self,
        config_path: Path,
        *,
        doc_format: Optional[str] = None,
        output_dir: Optional[Path] = None,
        dry_run: bool = False,
    ) -> DocsOutcome:
        """Document the configured sources as tokens.json (plus index.html for html).

        Light, values, typography and primitives exports are merged top-level
        first to last; the dark export only repeats light names.
        """

        config = load_config(config_path)
        sources = config.sources
        paths = [path for path in (sources.light, sources.values, sources.typography, sources.primitives) if path]
        if not paths:
            raise FileNotFoundError("No token sources configured; set sources in .tokensmith.yml")
        merged: Dict[str, Any] = {}
        for path in paths:
            merged.update(load_token_tree(_read_text(path), name=str(path)))

        output = generate_token_docs(merged, generated_at=self._clock().isoformat())
        directory = output_dir or config.docs.directory
        if dry_run:
            return DocsOutcome(output_dir=directory, written=[], output=output)
        written = write_docs(output, directory, doc_format or config.docs.format)
        self.logger.info("Wrote %d documentation file(s) to %s", len(written), directory)
        return DocsOutcome(output_dir=directory, written=written, output=output)

    # ------------------------------------------------------------------
    # Internals

    def _select_emitters(self) -> List[Emitter]:
        if self._emitter_overrides is not None:
            return list(self._emitter_overrides)
        return discover_emitters(self._enabled_emitters)

    def _detect_conventions(self, request: GenerateRequest) -> DetectedConventions:
        conventions = detect_conventions(request.references, request.best_practices)
        if not request.kotlin_package:
            return conventions
        kotlin = replace(conventions.kotlin, kotlin_package=request.kotlin_package)
        typography = replace(
            conventions.typography,
            kotlin=replace(conventions.typography.kotlin, package_name=request.kotlin_package),
        )
        return replace(conventions, kotlin=kotlin, typography=typography)

    def _cycle_warnings(self, *trees: Optional[Mapping[str, Any]]) -> List[GenerateWarning]:
        graph = build_graph(*(tree for tree in trees if tree))
        warnings: List[GenerateWarning] = []
        for cycle in format_cycle_warnings(detect_cycles(graph)):
            self.logger.warning(cycle.message)
            warnings.append(GenerateWarning(kind="cycle", message=cycle.message, details=list(cycle.chain)))
        return warnings

    def _unknown_type_warnings(self, *trees: Mapping[str, Any]) -> List[GenerateWarning]:
        counts: Dict[str, int] = {}
        for tree in trees:
            for token_type, count in collect_unknown_types(tree).items():
                counts[token_type] = counts.get(token_type, 0) + count
        if not counts:
            return []
        total = sum(counts.values())
        self.logger.warning("Skipped %d token(s) with unknown types", total)
        return [
            GenerateWarning(
                kind="unknown-type",
                message=f"Skipped {total} token(s) with unrecognised $type values",
                details=[f"{token_type} ({count})" for token_type, count in sorted(counts.items())],
            )
        ]

    def _reference_warnings(self, request: GenerateRequest) -> List[GenerateWarning]:
        warnings: List[GenerateWarning] = []
        unknown = sorted(role for role in request.references if role not in REFERENCE_ROLES)
        if unknown:
            warnings.append(
                GenerateWarning(
                    kind="reference",
                    message="Ignored reference files with unknown roles",
                    details=unknown,
                )
            )
        if request.best_practices and request.references:
            warnings.append(
                GenerateWarning(
                    kind="reference",
                    message="Reference files only shape output in match-existing mode; they are used for diffs only",
                )
            )
        return warnings

    def _confidence_warnings(self, conventions: DetectedConventions) -> List[GenerateWarning]:
        weak = conventions.low_confidence(self.confidence_threshold)
        if not weak:
            return []
        message = (
            f"Convention detection confidence {conventions.confidence:.2f} is below "
            f"{self.confidence_threshold:.2f}; using the majority result"
        )
        self.logger.warning(message)
        return [GenerateWarning(kind="low-confidence", message=message, details=weak)]

    @staticmethod
    def _missing_category_warnings(context: EmitContext) -> List[GenerateWarning]:
        warnings: List[GenerateWarning] = []
        wants_typography = any(context.wants(platform, "typography") for platform in context.platforms)
        if wants_typography and count_typography_styles(context.typography) == 0:
            warnings.append(
                GenerateWarning(
                    kind="missing-category",
                    message="Typography was requested but no typography styles were supplied",
                )
            )
        wants_colors = any(context.wants(platform, "colors") for platform in context.platforms)
        if wants_colors and not collect_palette(context.light, context.dark, context.primitives).semantics:
            warnings.append(
                GenerateWarning(
                    kind="missing-category",
                    message="Colors were requested but no semantic colour aliases resolved to a primitive",
                )
            )
        return warnings

    def _lint_warnings(self, *trees: Mapping[str, Any]) -> List[GenerateWarning]:
        if self.naming_rule is None:
            return []
        results = [result for tree in trees for result in lint_token_names(tree, [self.naming_rule])]
        if not results:
            return []
        summary = lint_summary(results)
        self.logger.warning("Naming lint: %d error(s), %d warning(s)", summary["errors"], summary["warnings"])
        return [
            GenerateWarning(
                kind="lint",
                message=f"Naming lint found {summary['errors']} error(s) and {summary['warnings']} warning(s)",
                details=[result.message for result in results],
            )
        ]

    @staticmethod
    def _attach_references(files: Sequence[GeneratedFile], references: Mapping[str, str]) -> List[GeneratedFile]:
        by_filename = {
            filename: references[role]
            for role, filename in REFERENCE_ROLES.items()
            if references.get(role)
        }
        return [file.with_reference(by_filename.get(file.filename)) for file in files]

    @staticmethod
    def _compute_stats(context: EmitContext) -> GenerationStats:
        palette = collect_palette(context.light, context.dark, context.primitives)
        values = context.values
        return GenerationStats(
            primitive_colors=len(palette.primitives),
            semantic_colors=len(palette.semantics),
            spacing_steps=len(collect_spacing_entries(values)),
            typography_styles=count_typography_styles(context.typography),
            shadow_tokens=len(collect_shadow_entries(values)),
            border_tokens=len(collect_border_entries(values)),
            opacity_tokens=len(collect_opacity_entries(values)),
            radius_tokens=len(collect_radius_entries(values)),
            gradient_tokens=len(collect_gradient_entries(values)),
            motion_tokens=len(collect_motion_tokens(values)),
        )

    def _request_from_config(self, config: TokensmithConfig) -> GenerateRequest:
        sources = config.sources
        if sources.light is None or sources.dark is None:
            raise FileNotFoundError("sources.light and sources.dark must be configured")
        references = {role: _read_text(path) for role, path in config.references.items()}
        return GenerateRequest(
            light=load_token_tree(_read_text(sources.light), name=str(sources.light)),
            dark=load_token_tree(_read_text(sources.dark), name=str(sources.dark)),
            values=load_token_tree(_read_text(sources.values), name=str(sources.values)) if sources.values else {},
            typography=(
                load_token_tree(_read_text(sources.typography), name=str(sources.typography))
                if sources.typography
                else None
            ),
            primitives=(
                load_token_tree(_read_text(sources.primitives), name=str(sources.primitives))
                if sources.primitives
                else None
            ),
            platforms=tuple(config.platforms),
            categories=tuple(config.categories),
            best_practices=config.best_practices,
            references=references,
            kotlin_package=config.kotlin_package,
        )


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_files(files: Sequence[GeneratedFile], output_dir: Path) -> List[Path]:
    """Write generated files under ``output_dir``, one level per platform."""

    written: List[Path] = []
    for file in files:
        target = output_dir / file.platform / file.filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content, encoding="utf-8")
        written.append(target)
    return written


__all__ = ["BuildOutcome", "DocsOutcome", "Orchestrator", "write_files"]
