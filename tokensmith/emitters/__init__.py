"""Emitter plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from ..errors import EmitterError
from .base import EmitContext, Emitter
from .border import BorderEmitter
from .css import CssEmitter
from .gradient import GradientEmitter
from .kotlin import KotlinEmitter
from .motion import MotionEmitter
from .opacity import OpacityEmitter
from .radius import RadiusEmitter
from .scss import ScssEmitter
from .shadow import ShadowEmitter
from .spacing import SpacingEmitter
from .swift import SwiftEmitter
from .typescript import TypeScriptEmitter
from .typography import TypographyEmitter

_ENTRY_POINT_GROUP = "tokensmith.emitters"

# Order is output order.
_BUILTIN_FACTORIES: dict[str, Callable[[], Emitter]] = {
    "scss": ScssEmitter,
    "css": CssEmitter,
    "typescript": TypeScriptEmitter,
    "spacing": SpacingEmitter,
    "swift": SwiftEmitter,
    "kotlin": KotlinEmitter,
    "typography": TypographyEmitter,
    "shadow": ShadowEmitter,
    "border": BorderEmitter,
    "opacity": OpacityEmitter,
    "radius": RadiusEmitter,
    "gradient": GradientEmitter,
    "motion": MotionEmitter,
}

BUILTIN_EMITTERS = tuple(_BUILTIN_FACTORIES)


def discover_emitters(enabled: Sequence[str] | None = None) -> List[Emitter]:
    """Return instantiated emitters, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    emitters: List[Emitter] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], Emitter]) -> None:
        nonlocal enabled_set
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, Emitter):
            raise TypeError(f"Emitter factory for '{name}' did not return an Emitter instance")
        emitters.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise EmitterError(f"Failed to load emitter entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Emitter:
            return _coerce_emitter(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown emitters requested: {missing}")

    return emitters


def _coerce_emitter(obj: object) -> Emitter:
    if isinstance(obj, Emitter):
        return obj
    if isinstance(obj, type) and issubclass(obj, Emitter):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Emitter):
            return instance
    raise EmitterError("Emitter entry point must be an Emitter subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_EMITTERS",
    "EmitContext",
    "Emitter",
    "discover_emitters",
]
