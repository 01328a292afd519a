"""Plugin manifests shipped alongside modules.

A module may carry ``<modules-lib>/<name>/manifest.json`` describing its
routes.  Manifests are only ever read here; routes flagged ``nav.admin`` are
surfaced as admin views under ``/admin/<plugin>/...``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from modgen.utils import print_warning


class NavEntry(BaseModel):
    """Navigation hints for a plugin route."""
    label: str
    icon: Optional[str] = None
    admin: bool = False


class PluginRoute(BaseModel):
    """A route contributed by a plugin."""
    path: str
    entry: str
    nav: Optional[NavEntry] = None


class PluginManifest(BaseModel):
    """Contents of a ``manifest.json``."""
    name: str
    label: str
    icon: str = Field(default="")
    version: str = Field(default="")
    routes: list[PluginRoute] = Field(default_factory=list)


class AdminPlugin(PluginManifest):
    """A plugin together with the subset of its routes shown in admin."""
    admin_routes: list[PluginRoute] = Field(default_factory=list)


def discover_plugins(modules_dir: str | Path) -> list[PluginManifest]:
    """Load every ``*/manifest.json`` under *modules_dir*, sorted by directory.

    Unreadable manifests are reported and skipped.
    """
    base = Path(modules_dir)
    if not base.is_dir():
        return []

    plugins: list[PluginManifest] = []
    for manifest_path in sorted(base.glob("*/manifest.json")):
        try:
            raw = json.loads(manifest_path.read_text(encoding="utf-8"))
            plugins.append(PluginManifest.model_validate(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            print_warning(f"Skipping invalid plugin manifest {manifest_path}: {exc}")
    return plugins


def admin_plugins(plugins: list[PluginManifest]) -> list[AdminPlugin]:
    """Keep plugins that expose at least one admin route."""
    result: list[AdminPlugin] = []
    for plugin in plugins:
        routes = [r for r in plugin.routes if r.nav is not None and r.nav.admin]
        if routes:
            result.append(AdminPlugin(**plugin.model_dump(), admin_routes=routes))
    return result


def to_admin_path(plugin: str, path: str) -> str:
    """Map a plugin route into the admin tree.

    Example::

        to_admin_path("inventory", "/admin/settings") -> "/admin/inventory/settings"
    """
    if path.startswith("/admin"):
        path = path[len("/admin"):]
    return f"/admin/{plugin}{path}"
