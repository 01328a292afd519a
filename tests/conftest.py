"""Shared pytest fixtures for the modgen test suite.

Provides reusable fixtures for:
- A temporary SvelteKit-style project root and its ``Config``
- A bootstrapped ``ModuleGenerator`` that accepts every plan
- A project that already contains a ``widgets`` module
- Plugin manifest writers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from modgen.config import Config
from modgen.scaffolder import ModuleGenerator


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary front-end project directory (auto-cleanup)."""
    root = tmp_path / "app"
    root.mkdir()
    yield root


@pytest.fixture
def config(project_root: Path) -> Config:
    """Default layout rooted at the temporary project."""
    return Config(root=project_root)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

@pytest.fixture
def generator(config: Config) -> ModuleGenerator:
    """Bootstrapped generator that confirms every plan."""
    gen = ModuleGenerator(config, confirm=lambda plan: True)
    gen.bootstrap()
    return gen


@pytest.fixture
def declining_generator(config: Config) -> ModuleGenerator:
    """Bootstrapped generator whose operator declines every plan."""
    gen = ModuleGenerator(config, confirm=lambda plan: False)
    gen.bootstrap()
    return gen


@pytest.fixture
def widgets(generator: ModuleGenerator) -> ModuleGenerator:
    """Generator over a project that already has the ``widgets`` module."""
    generator.create_module("Widgets")
    return generator


# ---------------------------------------------------------------------------
# Snapshots & manifests
# ---------------------------------------------------------------------------

def snapshot_tree(root: Path) -> dict[str, str]:
    """Map every file under *root* to its content, keyed by posix relative path."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, str]]:
    return snapshot_tree


@pytest.fixture
def write_manifest(config: Config) -> Callable[[str, dict[str, Any]], Path]:
    """Write ``<modules-lib>/<dir>/manifest.json`` and return its path."""

    def _write(directory: str, manifest: dict[str, Any]) -> Path:
        path = config.modules_lib_path / directory / "manifest.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(manifest), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def inventory_manifest() -> dict[str, Any]:
    return {
        "name": "inventory",
        "label": "Inventory",
        "icon": "box",
        "version": "1.0.0",
        "routes": [
            {"path": "/inventory", "entry": "Inventory.svelte", "nav": {"label": "Inventory"}},
            {
                "path": "/admin/settings",
                "entry": "Settings.svelte",
                "nav": {"label": "Inventory Settings", "admin": True},
            },
        ],
    }
