"""Configuration loading for tokensmith (.tokensmith.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import CATEGORIES, PLATFORMS, REFERENCE_ROLES

CONFIG_FILENAME = ".tokensmith.yml"
DEFAULT_OUTPUT_DIR = "tokens-out"
DEFAULT_CONFIDENCE_THRESHOLD = 0.7
DEFAULT_DOCS_DIR = "docs"
DOCS_FORMATS = ("json", "html")
CONTRAST_ALGORITHMS = ("apca",)


@dataclass
class SourcesConfig:
    """Token export paths, resolved against the config file's directory."""

    light: Optional[Path] = None
    dark: Optional[Path] = None
    values: Optional[Path] = None
    typography: Optional[Path] = None
    primitives: Optional[Path] = None


@dataclass
class OutputConfig:
    directory: Path = Path(DEFAULT_OUTPUT_DIR)
    changelog: bool = False


@dataclass
class NamingLintConfig:
    """Custom naming rule applied to every token tree during generation."""

    case: Optional[str] = None
    prefix: Optional[str] = None
    max_depth: Optional[int] = None
    pattern: Optional[str] = None

    @property
    def configured(self) -> bool:
        return any(value is not None for value in (self.case, self.prefix, self.max_depth, self.pattern))


@dataclass
class ContrastLintConfig:
    """APCA contrast checks, enabled by the presence of ``lint.contrast``.

    ``pairings`` maps foreground token names to background token names; when
    empty, every text/icon token is paired with every background token.
    """

    enabled: bool = False
    min_lc: Optional[float] = None
    pairings: Dict[str, str] = field(default_factory=dict)


@dataclass
class DocsConfig:
    directory: Path = Path(DEFAULT_DOCS_DIR)
    format: str = "json"


@dataclass
class EmitterConfig:
    """Emitter enablement; an empty list means every built-in emitter."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class TokensmithConfig:
    """Represents the high-level settings defined in .tokensmith.yml."""

    root: Path
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    platforms: List[str] = field(default_factory=lambda: ["web"])
    categories: List[str] = field(default_factory=lambda: list(CATEGORIES))
    best_practices: bool = True
    references: Dict[str, Path] = field(default_factory=dict)
    output: OutputConfig = field(default_factory=OutputConfig)
    naming: NamingLintConfig = field(default_factory=NamingLintConfig)
    contrast: ContrastLintConfig = field(default_factory=ContrastLintConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    emitters: EmitterConfig = field(default_factory=EmitterConfig)
    kotlin_package: Optional[str] = None
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD


def load_config(config_path: Path) -> TokensmithConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TokensmithConfig(
            root=root,
            output=OutputConfig(directory=root / DEFAULT_OUTPUT_DIR),
            docs=DocsConfig(directory=root / DEFAULT_DOCS_DIR),
        )

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    sources_data = _as_dict(data.get("sources"))
    sources = SourcesConfig(
        light=_as_path(root, sources_data.get("light")),
        dark=_as_path(root, sources_data.get("dark")),
        values=_as_path(root, sources_data.get("values")),
        typography=_as_path(root, sources_data.get("typography")),
        primitives=_as_path(root, sources_data.get("primitives")),
    )

    platforms = _as_str_list(data.get("platforms")) or ["web"]
    _check_choices("platforms", platforms, PLATFORMS)
    categories = _as_str_list(data.get("categories")) or list(CATEGORIES)
    _check_choices("categories", categories, CATEGORIES)

    references: Dict[str, Path] = {}
    for role, value in _as_dict(data.get("references")).items():
        if role not in REFERENCE_ROLES:
            known = ", ".join(sorted(REFERENCE_ROLES))
            raise ConfigError(f"Unknown reference role '{role}' (expected one of: {known})")
        path = _as_path(root, value)
        if path is not None:
            references[str(role)] = path

    output_data = _as_dict(data.get("output"))
    output = OutputConfig(
        directory=_as_path(root, output_data.get("directory")) or root / DEFAULT_OUTPUT_DIR,
        changelog=_as_bool(output_data.get("changelog")) or False,
    )

    lint_data = _as_dict(data.get("lint"))
    naming_data = _as_dict(lint_data.get("naming"))
    naming = NamingLintConfig(
        case=_as_str(naming_data.get("case")),
        prefix=_as_str(naming_data.get("prefix")),
        max_depth=_as_int(naming_data.get("max_depth")),
        pattern=_as_str(naming_data.get("pattern")),
    )

    contrast = _contrast_config(lint_data.get("contrast"))

    docs_data = _as_dict(data.get("docs"))
    docs_format = _as_str(docs_data.get("format")) or "json"
    _check_choices("docs formats", [docs_format], DOCS_FORMATS)
    docs = DocsConfig(
        directory=_as_path(root, docs_data.get("directory")) or root / DEFAULT_DOCS_DIR,
        format=docs_format,
    )

    emitters = EmitterConfig(enabled=_as_str_list(_as_dict(data.get("emitters")).get("enabled")))

    best_practices = _as_bool(data.get("best_practices"))
    threshold = _as_float(data.get("confidence_threshold"))

    return TokensmithConfig(
        root=root,
        sources=sources,
        platforms=platforms,
        categories=categories,
        best_practices=True if best_practices is None else best_practices,
        references=references,
        output=output,
        naming=naming,
        contrast=contrast,
        docs=docs,
        emitters=emitters,
        kotlin_package=_as_str(_as_dict(data.get("kotlin")).get("package")),
        confidence_threshold=DEFAULT_CONFIDENCE_THRESHOLD if threshold is None else threshold,
    )


def _contrast_config(value: Any) -> ContrastLintConfig:
    if value is None or value is False:
        return ContrastLintConfig()
    data = _as_dict(value)
    algorithm = _as_str(data.get("algorithm")) or "apca"
    _check_choices("contrast algorithms", [algorithm], CONTRAST_ALGORITHMS)
    pairings = {str(fg): str(bg) for fg, bg in _as_dict(data.get("pairings")).items() if _as_str(bg)}
    return ContrastLintConfig(enabled=True, min_lc=_as_float(data.get("min_lc")), pairings=pairings)


def scaffold_config() -> str:
    """Starter ``.tokensmith.yml`` contents for ``tokensmith init``."""

    starter = {
        "sources": {
            "light": "exports/light.json",
            "dark": "exports/dark.json",
            "values": "exports/values.json",
            "typography": "exports/typography.json",
        },
        "platforms": list(PLATFORMS),
        "categories": list(CATEGORIES),
        "best_practices": True,
        "output": {"directory": DEFAULT_OUTPUT_DIR, "changelog": False},
        "lint": {
            "naming": {"case": "kebab"},
            "contrast": {"algorithm": "apca", "min_lc": 75},
        },
        "docs": {"directory": DEFAULT_DOCS_DIR, "format": "html"},
    }
    return yaml.safe_dump(starter, sort_keys=False)


def write_config_scaffold(directory: Path) -> Path:
    """Write the starter config into ``directory``; never overwrites."""

    config_file = directory.expanduser().resolve() / CONFIG_FILENAME
    if config_file.exists():
        raise FileExistsError(f"{CONFIG_FILENAME} already exists at {config_file}")
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(scaffold_config(), encoding="utf-8")
    return config_file


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _check_choices(key: str, values: Sequence[str], allowed: Sequence[str]) -> None:
    unknown = [value for value in values if value not in allowed]
    if unknown:
        raise ConfigError(f"Unknown {key}: {', '.join(unknown)} (expected: {', '.join(allowed)})")


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ContrastLintConfig",
    "DocsConfig",
    "EmitterConfig",
    "NamingLintConfig",
    "OutputConfig",
    "SourcesConfig",
    "TokensmithConfig",
    "load_config",
    "scaffold_config",
    "write_config_scaffold",
]
