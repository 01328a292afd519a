"""modgen scaffolder -- generates module and page trees for a SvelteKit app.

Quick usage::

    from modgen.config import Config
    from modgen.scaffolder import ModuleGenerator, PageRequest

    generator = ModuleGenerator(Config(root=project_dir), confirm=lambda plan: True)
    generator.bootstrap()
    generator.create_module("Widgets")
    generator.add_page(PageRequest(module="widgets", page="[id]", description="Detail"))
"""

from modgen.scaffolder.generator import ModuleGenerator, Outcome
from modgen.scaffolder.planner import ModuleError, PageRequest, Plan
from modgen.scaffolder.templates import PageTemplates, TemplateRenderer, render_template

__all__ = [
    "ModuleError",
    "ModuleGenerator",
    "Outcome",
    "PageRequest",
    "PageTemplates",
    "Plan",
    "TemplateRenderer",
    "render_template",
]
