"""Interactive command-line front end.

Usage::

    cd my-sveltekit-app
    modgen            # or: python -m modgen.cli

The operator picks one action from a menu; every mutating action previews
its planned changes and asks for confirmation before touching anything.
"""

from __future__ import annotations

import sys

from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from modgen.config import Config
from modgen.plugins import admin_plugins, discover_plugins, to_admin_path
from modgen.registry import RegistryError
from modgen.scaffolder import ModuleError, ModuleGenerator, PageRequest, Plan
from modgen.utils import console, normalize_name, print_error, print_summary_table

ACTIONS: dict[str, str] = {
    "list": "List modules",
    "create": "Create module",
    "rename": "Rename module",
    "delete": "Delete module",
    "addpage": "Add page to module",
}


def confirm_plan(plan: Plan) -> bool:
    """Ask the operator whether to go ahead with *plan*."""
    return Confirm.ask(f"Do you want to {plan.action}?", default=True)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def action_list(generator: ModuleGenerator) -> None:
    modules = generator.list_modules()
    if not modules:
        console.print("(no modules)")
    else:
        pages = generator.list_pages()
        print_summary_table(
            {m: f"{sum(1 for p in pages if p.module == m)} page(s)" for m in modules},
            title="Modules",
        )

    plugins = admin_plugins(discover_plugins(generator.config.modules_lib_path))
    if plugins:
        table = Table(title="Admin views", header_style="bold cyan")
        table.add_column("Plugin")
        table.add_column("Label")
        table.add_column("Path")
        for plugin in plugins:
            for route in plugin.admin_routes:
                label = route.nav.label if route.nav else plugin.label
                table.add_row(
                    escape(plugin.name), escape(label), escape(to_admin_path(plugin.name, route.path))
                )
        console.print(table)


def action_create(generator: ModuleGenerator) -> None:
    raw_name = Prompt.ask("Module name", default="")
    generator.create_module(raw_name.strip())


def _pick_module(generator: ModuleGenerator, message: str, empty_message: str) -> str | None:
    modules = generator.list_modules()
    if not modules:
        print_error(empty_message)
        return None
    return Prompt.ask(message, choices=modules)


def action_rename(generator: ModuleGenerator) -> None:
    old_name = _pick_module(generator, "Select module to rename", "No modules to rename")
    if old_name is None:
        return
    new_raw = Prompt.ask("New module name", default="")
    generator.rename_module(old_name, new_raw.strip())


def action_delete(generator: ModuleGenerator) -> None:
    name = _pick_module(generator, "Select module to delete", "No modules to delete")
    if name is None:
        return
    generator.delete_module(name)


def action_addpage(generator: ModuleGenerator) -> None:
    module = _pick_module(
        generator, "Select module", "No modules found. Create a module first."
    )
    if module is None:
        return
    page = Prompt.ask("Page route (e.g. index, list, [id], settings/advanced)", default="")
    if not normalize_name(page.strip()):
        print_error("Page name required")
        return
    request = PageRequest(
        module=module,
        page=page.strip(),
        description=Prompt.ask("Page description", default=""),
        auth=Confirm.ask("Require authentication?", default=True),
        with_page_server=Confirm.ask(
            f"Create {generator.config.page_server_file}?", default=True
        ),
        with_server=Confirm.ask(f"Create {generator.config.server_file}?", default=False),
    )
    generator.add_page(request)


HANDLERS = {
    "list": action_list,
    "create": action_create,
    "rename": action_rename,
    "delete": action_delete,
    "addpage": action_addpage,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run(config: Config) -> int:
    """Bootstrap the project, run one menu action and return the exit code."""
    generator = ModuleGenerator(config, confirm=confirm_plan)
    generator.bootstrap()

    for key, label in ACTIONS.items():
        console.print(f"  [cyan]{key:<8}[/cyan] {label}")
    action = Prompt.ask("What do you want to do?", choices=list(ACTIONS), default="list")

    try:
        HANDLERS[action](generator)
    except ModuleError as exc:
        print_error(str(exc))
    return 0


def main() -> None:
    """CLI entry point for ``modgen``."""
    try:
        code = run(Config())
    except (RegistryError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
