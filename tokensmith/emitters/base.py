"""Base classes for emitter plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from ..conventions import DetectedConventions
from ..models import CATEGORIES, GeneratedFile, GenerateWarning
from ..rendering import header_lines


@dataclass(frozen=True)
class EmitContext:
    """Everything an emitter may read. Trees are already normalized."""

    light: Mapping[str, Any]
    dark: Mapping[str, Any]
    conventions: DetectedConventions
    values: Mapping[str, Any] = field(default_factory=dict)
    typography: Optional[Mapping[str, Any]] = None
    primitives: Optional[Mapping[str, Any]] = None
    platforms: Tuple[str, ...] = ("web",)
    categories: Tuple[str, ...] = CATEGORIES
    references: Mapping[str, str] = field(default_factory=dict)
    generated_at: str = ""

    @property
    def best_practices(self) -> bool:
        return self.conventions.best_practices

    def wants(self, platform: str, category: str = "colors") -> bool:
        return platform in self.platforms and category in self.categories

    def reference(self, role: str) -> Optional[str]:
        """Reference text for ``role``; always ``None`` in best-practice mode."""
        if self.best_practices:
            return None
        return self.references.get(role) or None

    def header(self, filename: str, comment: str = "//", *roles: str) -> List[str]:
        """Filename comment, generation banner and a trailing blank line."""

        present = [role for role in roles if self.reference(role)]
        lines = [f"{comment} {filename}"]
        lines.extend(
            header_lines(
                comment,
                generated_at=self.generated_at,
                best_practices=self.best_practices,
                references=present,
            )
        )
        lines.append("")
        return lines


def render_lines(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


class Emitter(ABC):
    """Contract for emitters that render token trees into source files."""

    name: str = ""

    @abstractmethod
    def supports(self, context: EmitContext) -> bool:
        """Return True when this emitter has work for the requested platforms."""

    @abstractmethod
    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        """Render files. Must not perform I/O or read the clock."""

    def warnings(self, context: EmitContext) -> List[GenerateWarning]:
        """Non-fatal findings about the inputs this emitter consumed."""
        return []


__all__ = ["EmitContext", "Emitter", "render_lines"]
