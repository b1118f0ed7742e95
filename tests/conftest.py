from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tests._fixtures.tokens import dark_tree, light_tree, typography_tree, values_tree


@pytest.fixture
def values() -> Dict[str, Any]:
    return values_tree()


@pytest.fixture
def exports_dir(tmp_path: Path) -> Path:
    """Write the sample exports as JSON files under ``tmp_path/exports``."""

    root = tmp_path / "exports"
    root.mkdir()
    for name, tree in (
        ("light.json", light_tree()),
        ("dark.json", dark_tree()),
        ("values.json", values_tree()),
        ("typography.json", typography_tree()),
    ):
        (root / name).write_text(json.dumps(tree), encoding="utf-8")
    return root
