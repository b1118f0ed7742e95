"""Core data models shared across tokensmith components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

PLATFORMS = ("web", "ios", "android")
CATEGORIES = ("colors", "typography")

# Reference role -> generated filename whose diff it feeds.
REFERENCE_ROLES: Dict[str, str] = {
    "web-primitives-scss": "Primitives.scss",
    "web-colors-scss": "Colors.scss",
    "web-primitives-ts": "Primitives.ts",
    "web-colors-ts": "Colors.ts",
    "ios-colors-swift": "Colors.swift",
    "android-colors-kotlin": "Colors.kt",
    "web-typography-scss": "Typography.scss",
    "web-typography-ts": "Typography.ts",
    "ios-typography-swift": "Typography.swift",
    "android-typography-kotlin": "Typography.kt",
}

WARNING_KINDS = (
    "cycle",
    "lint",
    "missing-category",
    "unknown-type",
    "low-confidence",
    "typography-weight",
    "reference",
)


@dataclass(frozen=True)
class GeneratedFile:
    """A single emitted source artifact."""

    filename: str
    content: str
    format: str
    platform: str
    reference_content: Optional[str] = None

    def with_reference(self, reference: Optional[str]) -> "GeneratedFile":
        return replace(self, reference_content=reference)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "filename": self.filename,
            "content": self.content,
            "format": self.format,
            "platform": self.platform,
        }
        if self.reference_content is not None:
            data["reference_content"] = self.reference_content
        return data


@dataclass(frozen=True)
class GenerateWarning:
    """Non-fatal problem surfaced alongside generated files."""

    kind: str
    message: str
    details: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details is not None:
            data["details"] = list(self.details)
        return data


@dataclass
class GenerationStats:
    """Token counts for a generation run."""

    primitive_colors: int = 0
    semantic_colors: int = 0
    spacing_steps: int = 0
    typography_styles: int = 0
    shadow_tokens: int = 0
    border_tokens: int = 0
    opacity_tokens: int = 0
    radius_tokens: int = 0
    gradient_tokens: int = 0
    motion_tokens: int = 0


@dataclass
class GenerateRequest:
    """Inputs for one generation run.

    Token trees are raw parsed JSON in any supported source format; the
    orchestrator normalizes them. ``references`` maps a role from
    :data:`REFERENCE_ROLES` to the text of an existing source file.
    """

    light: Mapping[str, Any]
    dark: Mapping[str, Any]
    values: Mapping[str, Any] = field(default_factory=dict)
    typography: Optional[Mapping[str, Any]] = None
    primitives: Optional[Mapping[str, Any]] = None
    platforms: Sequence[str] = ("web",)
    categories: Sequence[str] = CATEGORIES
    best_practices: bool = True
    references: Dict[str, str] = field(default_factory=dict)
    kotlin_package: Optional[str] = None


@dataclass
class GenerationResult:
    """Files, warnings and stats produced by a generation run."""

    files: List[GeneratedFile]
    warnings: List[GenerateWarning] = field(default_factory=list)
    stats: GenerationStats = field(default_factory=GenerationStats)
    conventions: Optional[Any] = None

    def file(self, filename: str) -> Optional[GeneratedFile]:
        return next((item for item in self.files if item.filename == filename), None)


__all__ = [
    "CATEGORIES",
    "GenerateRequest",
    "GenerateWarning",
    "GeneratedFile",
    "GenerationResult",
    "GenerationStats",
    "PLATFORMS",
    "REFERENCE_ROLES",
    "WARNING_KINDS",
]
