"""Template rendering for module and page scaffolding.

Two kinds of templates are involved:

* The fixed module skeleton (index, activity, admin settings/security pages
  and the module definition file) ships as Jinja2 templates under
  ``modgen/scaffolder/templates/`` and is rendered by :class:`TemplateRenderer`.
* Page templates live in the host project (``templates/*.tpl``) so operators
  can hand-edit them.  They use a deliberately tiny syntax handled by
  :func:`render_template`: ``{{#if key}}...{{/if}}`` blocks and ``{{key}}``
  interpolation with dotted paths.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from modgen.config import Config

from .filesystem import materialize


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Page template syntax
# ---------------------------------------------------------------------------

_IF_BLOCK = re.compile(r"\{\{#if\s+([\w.]+)\}\}([\s\S]*?)\{\{/if\}\}")
_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    value: Any = data
    for part in key.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_template(template: str, data: Mapping[str, Any]) -> str:
    """Render a page template.

    Conditional blocks are resolved first in a single non-nested pass, then
    ``{{key}}`` placeholders are substituted.  Unknown keys render as an
    empty string; this function never raises for missing data.

    Examples::

        render_template("{{#if auth}}X{{/if}}", {"auth": True})  -> "X"
        render_template("{{user.name}}", {"user": {"name": "a"}}) -> "a"
        render_template("{{missing}}", {})                         -> ""
    """
    text = _IF_BLOCK.sub(
        lambda m: m.group(2) if _lookup(data, m.group(1)) else "", template
    )
    return _PLACEHOLDER.sub(lambda m: _to_text(_lookup(data, m.group(1))), text)


# ---------------------------------------------------------------------------
# Built-in page template defaults
# ---------------------------------------------------------------------------

DEFAULT_PAGE_TEMPLATE = """\
<!-- {{description}} -->
<script lang="ts">
  {{#if auth}}
  // Placeholder auth check. Replace with MSAL/Entra logic or a guard in +layout.server.ts
  export const load = async () => {
    // await checkAuth();
  };
  {{/if}}
</script>

<section>
  <h1>{{module}} – {{page}}</h1>
  <p>{{description}}</p>
</section>
"""

DEFAULT_PAGE_SERVER_TEMPLATE = """\
// +page.server.ts for {{module}}/{{page}}
// Add actions or load() here as needed.
import type { Actions, PageServerLoad } from './$types';

export const load: PageServerLoad = async (event) => {
  // Example: enforce auth server-side if needed
  {{#if auth}}// await requireAuth(event.locals);{{/if}}
  return {};
};

export const actions: Actions = {
  default: async (event) => {
    // Handle form actions
    return { success: true };
  }
};
"""

DEFAULT_SERVER_TEMPLATE = """\
// +server.ts for {{module}}/{{page}}
// Add REST endpoints (GET/POST/etc.) here.
import type { RequestHandler } from './$types';

export const GET: RequestHandler = async (event) => {
  {{#if auth}}// await requireAuth(event.locals);{{/if}}
  return new Response(JSON.stringify({ ok: true }), { headers: { 'content-type': 'application/json' } });
};
"""


@dataclass(frozen=True)
class PageTemplates:
    """The three operator-editable page templates, loaded as text."""

    page: str
    page_server: str
    server: str

    @staticmethod
    def _defaults(config: Config) -> dict[Path, str]:
        return {
            config.page_template_path: DEFAULT_PAGE_TEMPLATE,
            config.page_server_template_path: DEFAULT_PAGE_SERVER_TEMPLATE,
            config.server_template_path: DEFAULT_SERVER_TEMPLATE,
        }

    @classmethod
    def seed(cls, config: Config) -> list[Path]:
        """Write the built-in defaults for any template file that is missing.

        Existing files are never overwritten.  Returns the paths written.
        """
        return [
            path for path, text in cls._defaults(config).items() if materialize(path, text)
        ]

    @classmethod
    def load(cls, config: Config) -> "PageTemplates":
        """Read the templates from the project.

        A template file that has not been seeded yet reads as its built-in
        default; nothing is written.
        """
        texts = [
            path.read_text(encoding="utf-8") if path.exists() else default
            for path, default in cls._defaults(config).items()
        ]
        return cls(*texts)


# ---------------------------------------------------------------------------
# TemplateRenderer (module skeleton)
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 templates of the module skeleton.

    Svelte uses ``{#each}`` blocks, so Jinja2 comments are moved to
    ``{##`` / ``##}`` to keep the generated markup intact.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            comment_start_string="{##",
            comment_end_string="##}",
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"module_index.svelte.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

