"""Shared plumbing for composite-token emitters (shadow, border, radius, ...)."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Generic, List, Sequence, TypeVar

from ..conventions import DEFAULT_KOTLIN_PACKAGE
from ..models import GeneratedFile
from .base import EmitContext, Emitter, render_lines

EntryT = TypeVar("EntryT")


def path_has(path: Sequence[str], *keywords: str) -> bool:
    """True when the space-joined, lowercased path contains any keyword."""
    joined = " ".join(path).lower()
    return any(keyword in joined for keyword in keywords)


def kotlin_package_line(context: EmitContext) -> str:
    package = context.conventions.kotlin.kotlin_package
    if package == DEFAULT_KOTLIN_PACKAGE:
        return f"package {package} // TODO: update to your package name"
    return f"package {package}"


class CompositeEmitter(Emitter, Generic[EntryT]):
    """Collects one composite kind from the values tree and renders it per platform.

    Subclasses implement :meth:`collect` and one renderer per platform; each
    renderer returns the body lines that follow the common file header.
    """

    scss_filename: str = ""
    swift_filename: str = ""
    kotlin_filename: str = ""

    def supports(self, context: EmitContext) -> bool:
        return any(platform in context.platforms for platform in ("web", "ios", "android"))

    @abstractmethod
    def collect(self, tree: Any) -> List[EntryT]:
        """Return the sorted entries found in ``tree``."""

    @abstractmethod
    def render_scss(self, entries: List[EntryT], context: EmitContext) -> List[str]:
        ...

    @abstractmethod
    def render_swift(self, entries: List[EntryT], context: EmitContext) -> List[str]:
        ...

    @abstractmethod
    def render_kotlin(self, entries: List[EntryT], context: EmitContext) -> List[str]:
        ...

    def count(self, context: EmitContext) -> int:
        return len(self.collect(context.values))

    def emit(self, context: EmitContext) -> List[GeneratedFile]:
        entries = self.collect(context.values)
        if not entries:
            return []
        files: List[GeneratedFile] = []
        if "web" in context.platforms:
            files.append(self._file(self.scss_filename, self.render_scss(entries, context), "scss", "web", context))
        if "ios" in context.platforms:
            files.append(self._file(self.swift_filename, self.render_swift(entries, context), "swift", "ios", context))
        if "android" in context.platforms:
            files.append(
                self._file(self.kotlin_filename, self.render_kotlin(entries, context), "kotlin", "android", context)
            )
        return files

    @staticmethod
    def _file(filename: str, body: List[str], fmt: str, platform: str, context: EmitContext) -> GeneratedFile:
        lines = context.header(filename, "//")
        lines.extend(body)
        return GeneratedFile(filename, render_lines(lines), fmt, platform)


def css_root_block(names: Sequence[str]) -> List[str]:
    """``:root`` custom properties mirroring SCSS variables of the same name."""

    lines = [":root {"]
    lines.extend(f"  --{name}: #{{${name}}};" for name in names)
    lines.extend(["}", ""])
    return lines


__all__ = ["CompositeEmitter", "css_root_block", "kotlin_package_line", "path_has"]
