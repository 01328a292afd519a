"""Shared utility functions for modgen.

Provides identifier normalisation, JSON array I/O, and Rich-based operator
output.  Nothing in here knows about modules or pages; the registries and the
orchestrator build on these helpers.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SPACE_RUN = re.compile(r"[\s_]+")
_UNSAFE_CHAR = re.compile(r"[^a-zA-Z0-9-]")
_DASH_RUN = re.compile(r"-+")


def _kebab(text: str) -> str:
    text = _CAMEL_BOUNDARY.sub(r"\1-\2", text)
    text = _SPACE_RUN.sub("-", text)
    text = _UNSAFE_CHAR.sub("-", text)
    text = _DASH_RUN.sub("-", text)
    return text.lower()


def normalize_name(raw: str) -> str:
    """Convert free-form text to a route-safe slug, keeping ``[param]`` segments.

    The input is split on ``/`` and empty segments are dropped.  Each segment
    is kebab-cased; a segment wrapped in square brackets has its inner text
    kebab-cased and the brackets put back.

    Examples::

        normalize_name("User List")             -> "user-list"
        normalize_name("userProfile")           -> "user-profile"
        normalize_name("Some/[ID Value]/Thing") -> "some/[id-value]/thing"

    An empty result means the input carried nothing usable; callers reject it.
    """
    segments = []
    for part in raw.split("/"):
        if not part:
            continue
        if len(part) >= 2 and part.startswith("[") and part.endswith("]"):
            segments.append(f"[{_kebab(part[1:-1])}]")
        else:
            segments.append(_kebab(part))
    return "/".join(segments)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json_list(path: str | Path) -> list[Any]:
    """Load a JSON file that contains a top-level array.

    Returns an empty list if the file does not exist.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
        TypeError: If the top-level value is not an array.
    """
    file_path = Path(path)
    if not file_path.exists():
        return []
    raw = file_path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError(f"Expected a JSON array in {file_path}, got {type(data).__name__}")
    return data


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed UTF-8 JSON with a trailing newline.

    Parent directories are created automatically.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    file_path.write_text(content + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_plan(lines: Iterable[str], title: str = "Planned changes") -> None:
    """Print the planned filesystem effects as a numbered table."""
    table = Table(title=title, show_header=False, title_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Effect")

    for index, line in enumerate(lines, start=1):
        table.add_row(str(index), escape(line))

    console.print()
    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
