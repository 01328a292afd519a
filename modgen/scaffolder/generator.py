"""Module lifecycle orchestrator.

Loads the registries, normalizes operator input, builds a plan, asks for
confirmation, then applies the plan and persists the registries.  Registry
writes always come after the filesystem effects, so an I/O failure part way
through leaves files ahead of (create) or behind (delete) the registries;
re-running create or delete converges.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from modgen.config import Config
from modgen.registry import ModuleRegistry, PageEntry, PageRegistry
from modgen.utils import normalize_name, print_plan, print_success, print_warning

from .filesystem import materialize, remove_path, rename_path
from .planner import (
    MovePath,
    Plan,
    PageRequest,
    RemovePath,
    WriteFile,
    plan_add_page,
    plan_create_module,
    plan_delete_module,
    plan_rename_module,
)
from .templates import PageTemplates, TemplateRenderer

ConfirmFn = Callable[[Plan], bool]


class Outcome(str, Enum):
    """How a lifecycle operation ended."""

    APPLIED = "applied"
    CANCELLED = "cancelled"
    NOOP = "noop"


class ModuleGenerator:
    """Creates, renames and deletes modules and adds pages to them.

    Args:
        config: Project layout.
        confirm: Called with the plan after it has been printed; returning
            ``False`` cancels the operation with no side effects.
        renderer: Jinja2 renderer for the module skeleton.
    """

    def __init__(
        self,
        config: Config,
        confirm: ConfirmFn,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.confirm = confirm
        self.renderer = renderer or TemplateRenderer()
        self.modules = ModuleRegistry(config.modules_registry_path)
        self.pages = PageRegistry(config.pages_registry_path)

    # -- Setup -------------------------------------------------------------

    def bootstrap(self) -> None:
        """Create empty registries and default page templates if missing."""
        self.modules.ensure()
        self.pages.ensure()
        PageTemplates.seed(self.config)

    # -- Queries -----------------------------------------------------------

    def list_modules(self) -> list[str]:
        return self.modules.load()

    def list_pages(self, module: str | None = None) -> list[PageEntry]:
        pages = self.pages.load()
        if module is None:
            return pages
        return [p for p in pages if p.module == module]

    # -- Lifecycle operations ----------------------------------------------

    def create_module(self, raw_name: str) -> Outcome:
        """Scaffold a new module and register it with its index and activity pages."""
        plan = plan_create_module(
            self.config,
            normalize_name(raw_name),
            self.modules.load(),
            self.pages.load(),
            self.renderer,
        )
        return self._run(plan, "Module created")

    def rename_module(self, old_name: str, new_raw: str) -> Outcome:
        """Move a module's trees to a new name and rewrite its registry records."""
        plan = plan_rename_module(
            self.config,
            old_name,
            normalize_name(new_raw),
            self.modules.load(),
            self.pages.load(),
        )
        return self._run(plan, "Module renamed")

    def delete_module(self, name: str) -> Outcome:
        """Remove a module's trees and every registry record that refers to it.

        Deleting a module that is not registered is a no-op.
        """
        modules = self.modules.load()
        if name not in modules:
            print_warning(f"Module not registered, nothing to delete: {name}")
            return Outcome.NOOP
        plan = plan_delete_module(self.config, name, modules, self.pages.load())
        return self._run(plan, "Module deleted")

    def add_page(self, request: PageRequest) -> Outcome:
        """Scaffold one page (and optional server files) inside a module."""
        normalized = request.model_copy(
            update={
                "module": normalize_name(request.module),
                "page": normalize_name(request.page),
            }
        )
        plan = plan_add_page(
            self.config,
            normalized,
            self.modules.load(),
            self.pages.load(),
            PageTemplates.load(self.config),
        )
        route_dir = self.config.route_dir(normalized.module, normalized.page)
        return self._run(plan, f"Created page at {route_dir}")

    # -- Plan execution ----------------------------------------------------

    def _run(self, plan: Plan, done_message: str) -> Outcome:
        print_plan(plan.describe())
        if not self.confirm(plan):
            print_warning("Cancelled, nothing changed")
            return Outcome.CANCELLED
        self.apply_plan(plan)
        print_success(done_message)
        return Outcome.APPLIED

    def apply_plan(self, plan: Plan) -> None:
        """Perform the plan's effects in order, then persist the registries.

        Filesystem errors propagate and stop the remaining steps.
        """
        for effect in plan.effects:
            if isinstance(effect, WriteFile):
                materialize(effect.path, effect.content)
            elif isinstance(effect, MovePath):
                if effect.required or effect.src.exists():
                    rename_path(effect.src, effect.dst)
            elif isinstance(effect, RemovePath):
                remove_path(effect.path)
            else:
                raise TypeError(f"Unknown plan effect: {effect!r}")

        if plan.modules is not None:
            self.modules.save(plan.modules)
        if plan.pages is not None:
            self.pages.save(plan.pages)
