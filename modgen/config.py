"""modgen configuration.

Centralised, typed description of the host project layout.  All settings use a
Pydantic v2 model so the layout is validated at construction time; every
concrete path the scaffolder touches is a derived, read-only property.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Project layout used by the scaffolder.

    ``root`` is the front-end project directory (the tool is normally run from
    it).  The remaining fields are paths relative to ``root`` and the names of
    the files the scaffolder generates.
    """

    root: Path = Field(default_factory=Path.cwd)
    src_dir: str = Field(default="src")
    routes_dir: str = Field(default="routes", description="Relative to src_dir")
    lib_dir: str = Field(default="lib", description="Relative to src_dir")
    admin_dir_name: str = Field(default="admin")
    templates_dir: str = Field(default="templates")

    page_file: str = Field(default="+page.svelte")
    page_server_file: str = Field(default="+page.server.ts")
    server_file: str = Field(default="+server.ts")
    definition_suffix: str = Field(default=".ts")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def src_path(self) -> Path:
        return self.root / self.src_dir

    @property
    def routes_path(self) -> Path:
        """Root of the generated route tree."""
        return self.src_path / self.routes_dir

    @property
    def admin_routes_path(self) -> Path:
        """Root of the mirrored admin route tree."""
        return self.routes_path / self.admin_dir_name

    @property
    def lib_path(self) -> Path:
        return self.src_path / self.lib_dir

    @property
    def modules_lib_path(self) -> Path:
        """Directory holding one definition file per module."""
        return self.lib_path / "modules"

    @property
    def modules_registry_path(self) -> Path:
        """Path to ``modules.json``."""
        return self.lib_path / "modules.json"

    @property
    def pages_registry_path(self) -> Path:
        """Path to ``pages.json``."""
        return self.lib_path / "pages.json"

    @property
    def templates_path(self) -> Path:
        """Directory holding the operator-editable page templates."""
        return self.root / self.templates_dir

    @property
    def page_template_path(self) -> Path:
        return self.templates_path / f"{self.page_file.lstrip('+')}.tpl"

    @property
    def page_server_template_path(self) -> Path:
        return self.templates_path / f"{self.page_server_file.lstrip('+')}.tpl"

    @property
    def server_template_path(self) -> Path:
        return self.templates_path / f"{self.server_file.lstrip('+')}.tpl"

    @property
    def routes_prefix(self) -> tuple[str, ...]:
        """Segments of the routes root relative to ``root``, e.g. ``("src", "routes")``."""
        return PurePosixPath(self.src_dir, self.routes_dir).parts

    # ------------------------------------------------------------------
    # Per-module paths
    # ------------------------------------------------------------------

    def route_dir(self, module: str, page: str | None = None) -> Path:
        """Directory of a module page; ``index`` (or no page) is the module root."""
        base = self.routes_path / module
        if page is None or page == "index":
            return base
        return base.joinpath(*page.split("/"))

    def admin_dir(self, module: str) -> Path:
        return self.admin_routes_path / module

    def definition_file(self, module: str) -> Path:
        return self.modules_lib_path / f"{module}{self.definition_suffix}"

    def page_path(self, module: str, page: str) -> str:
        """Registry ``path`` string for a page, always ``/``-separated.

        Example::

            Config().page_path("widgets", "activity") -> "src/routes/widgets/activity"
        """
        parts = [*self.routes_prefix, module]
        if page != "index":
            parts.extend(page.split("/"))
        return "/".join(parts)
