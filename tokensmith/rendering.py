"""Jinja2 template environment shared by file headers and reports."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, List, Sequence

from jinja2 import Environment, FileSystemLoader

from .models import REFERENCE_ROLES

TEMPLATES_DIR = Path(__file__).with_name("templates")


@lru_cache(maxsize=None)
def template_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    loader = FileSystemLoader(str(templates_dir))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_template(name: str, **context: Any) -> str:
    return template_environment().get_template(name).render(**context)


def header_lines(
    comment: str,
    *,
    generated_at: str,
    best_practices: bool,
    references: Sequence[str] = (),
) -> List[str]:
    """Banner lines placed under the filename comment of every generated file.

    ``references`` are reference roles; the banner lists their filenames and
    only in match-existing mode.
    """

    filenames = [REFERENCE_ROLES.get(role, role) for role in references] if not best_practices else []
    text = render_template(
        "header.j2",
        comment=comment,
        generated_at=generated_at,
        mode="best-practices" if best_practices else "match-existing",
        references=filenames,
    )
    return text.rstrip("\n").split("\n")


__all__ = ["TEMPLATES_DIR", "header_lines", "render_template", "template_environment"]
