"""Planning for the module lifecycle operations.

Every mutating operation is split into a pure planning step and an apply
step.  The functions here take the layout, the loaded registries and the
loaded templates and return a :class:`Plan`: the ordered filesystem effects
plus the complete registry contents to persist afterwards.  Nothing in this
module touches the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

from modgen.config import Config
from modgen.registry import PageEntry, upsert_page

from .templates import PageTemplates, TemplateRenderer, render_template


class ModuleError(Exception):
    """Raised when an operation is rejected before anything is changed."""


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WriteFile:
    """Create *path* with *content* unless it already exists."""

    path: Path
    content: str

    def describe(self) -> str:
        return f"create {self.path}"


@dataclass(frozen=True)
class MovePath:
    """Rename *src* to *dst*; skipped when *src* is absent and not ``required``."""

    src: Path
    dst: Path
    required: bool = True

    def describe(self) -> str:
        suffix = "" if self.required else " (if present)"
        return f"rename {self.src} → {self.dst}{suffix}"


@dataclass(frozen=True)
class RemovePath:
    """Recursively remove *path*; a missing path is not an error."""

    path: Path

    def describe(self) -> str:
        return f"delete {self.path}"


Effect = Union[WriteFile, MovePath, RemovePath]


@dataclass
class Plan:
    """Ordered effects of one operation plus the registry state to persist.

    ``modules`` and ``pages`` hold the full registry contents after the
    operation, or ``None`` when that registry is left unchanged.
    """

    action: str
    effects: list[Effect] = field(default_factory=list)
    modules: list[str] | None = None
    pages: list[PageEntry] | None = None

    def describe(self) -> list[str]:
        return [effect.describe() for effect in self.effects]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PageRequest(BaseModel):
    """Operator input for adding a page to a module."""

    module: str
    page: str
    description: str = Field(default="")
    auth: bool = Field(default=True)
    with_page_server: bool = Field(default=True)
    with_server: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Planning functions
# ---------------------------------------------------------------------------

_SKELETON_PAGES: tuple[tuple[str, str], ...] = (
    ("index", "Index for {module}"),
    ("activity", "Activity for {module}"),
)


def _check_reserved(config: Config, name: str) -> None:
    if name.split("/", 1)[0] == config.admin_dir_name:
        raise ModuleError(f"Module name is reserved: {name}")


def plan_create_module(
    config: Config,
    name: str,
    modules: list[str],
    pages: list[PageEntry],
    renderer: TemplateRenderer,
) -> Plan:
    """Plan the skeleton of a new module.

    Raises:
        ModuleError: If *name* is empty, reserved or already registered.
    """
    if not name:
        raise ModuleError("Module name required")
    _check_reserved(config, name)
    if name in modules:
        raise ModuleError(f"Module already exists: {name}")

    ctx = {"module": name}
    admin = config.admin_dir(name)
    page_file = config.page_file
    targets = [
        (config.route_dir(name) / page_file, "module_index.svelte.j2"),
        (config.route_dir(name, "activity") / page_file, "module_activity.svelte.j2"),
        (admin / "settings" / page_file, "admin_settings.svelte.j2"),
        (admin / "security" / page_file, "admin_security.svelte.j2"),
        (config.definition_file(name), "module_definition.ts.j2"),
    ]
    effects: list[Effect] = [
        WriteFile(path, renderer.render(template, ctx)) for path, template in targets
    ]

    new_pages = pages
    for page, description in _SKELETON_PAGES:
        new_pages = upsert_page(
            new_pages,
            PageEntry(
                module=name,
                page=page,
                path=config.page_path(name, page),
                description=description.format(module=name),
            ),
        )

    return Plan(
        action="create these files",
        effects=effects,
        modules=[*modules, name],
        pages=new_pages,
    )


def rewrite_page_path(config: Config, path: str, old: str, new: str) -> str:
    """Swap the module segment of a registry path.

    Module names may span several segments (``"foo/bar"``).  Only the run of
    segments directly below the routes root is considered.  For a path
    outside the routes root the first run equal to *old* is replaced.  Other
    segments are never rewritten.
    """
    segments = path.split("/")
    old_parts = old.split("/")
    new_parts = new.split("/")
    width = len(old_parts)
    prefix = list(config.routes_prefix)
    n = len(prefix)
    if segments[:n] == prefix and len(segments) > n:
        if segments[n : n + width] == old_parts:
            segments[n : n + width] = new_parts
        return "/".join(segments)
    for index in range(len(segments) - width + 1):
        if segments[index : index + width] == old_parts:
            segments[index : index + width] = new_parts
            break
    return "/".join(segments)


def plan_rename_module(
    config: Config,
    old: str,
    new: str,
    modules: list[str],
    pages: list[PageEntry],
) -> Plan:
    """Plan moving a module's trees and rewriting both registries.

    Raises:
        ModuleError: If *old* is unknown or reserved, or if *new* is empty,
            reserved or already registered.
    """
    if old not in modules:
        raise ModuleError(f"Unknown module: {old}")
    _check_reserved(config, old)
    if not new:
        raise ModuleError("New name required")
    _check_reserved(config, new)
    if new in modules:
        raise ModuleError(f"New module name already exists: {new}")

    effects: list[Effect] = [
        MovePath(config.route_dir(old), config.route_dir(new)),
        MovePath(config.admin_dir(old), config.admin_dir(new), required=False),
        MovePath(config.definition_file(old), config.definition_file(new), required=False),
    ]

    new_pages = [
        page.model_copy(
            update={
                "module": new,
                "path": rewrite_page_path(config, page.path, old, new),
            }
        )
        if page.module == old
        else page
        for page in pages
    ]

    return Plan(
        action="rename these paths",
        effects=effects,
        modules=[m for m in modules if m != old] + [new],
        pages=new_pages,
    )


def plan_delete_module(
    config: Config,
    name: str,
    modules: list[str],
    pages: list[PageEntry],
) -> Plan:
    """Plan removal of every tree the module owns and its registry records.

    Raises:
        ModuleError: If *name* is reserved.
    """
    _check_reserved(config, name)
    effects: list[Effect] = [
        RemovePath(config.route_dir(name)),
        RemovePath(config.admin_dir(name)),
        RemovePath(config.definition_file(name)),
    ]
    return Plan(
        action="delete these paths",
        effects=effects,
        modules=[m for m in modules if m != name],
        pages=[p for p in pages if p.module != name],
    )


def plan_add_page(
    config: Config,
    request: PageRequest,
    modules: list[str],
    pages: list[PageEntry],
    templates: PageTemplates,
) -> Plan:
    """Plan the files and registry record of a single page.

    *request* must already carry normalized ``module`` and ``page`` values.

    Raises:
        ModuleError: If the module is unknown or the page slug is empty.
    """
    if request.module not in modules:
        raise ModuleError(f"Unknown module: {request.module}")
    if not request.page:
        raise ModuleError("Page name required")

    route_dir = config.route_dir(request.module, request.page)
    data = {
        "module": request.module,
        "page": request.page,
        "description": request.description,
        "auth": request.auth,
    }

    effects: list[Effect] = [
        WriteFile(route_dir / config.page_file, render_template(templates.page, data))
    ]
    if request.with_page_server:
        effects.append(
            WriteFile(
                route_dir / config.page_server_file,
                render_template(templates.page_server, data),
            )
        )
    if request.with_server:
        effects.append(
            WriteFile(route_dir / config.server_file, render_template(templates.server, data))
        )

    entry = PageEntry(
        module=request.module,
        page=request.page,
        path=config.page_path(request.module, request.page),
        description=request.description,
        auth=request.auth,
        has_page_server=request.with_page_server,
        has_server=request.with_server,
    )
    return Plan(
        action="create these files",
        effects=effects,
        pages=upsert_page(pages, entry),
    )
