"""Registry stores for modules and pages.

Both registries are JSON arrays persisted as a whole: callers ``load()`` the
full list, change it, and ``save()`` it back.  The module registry is a
sorted, de-duplicated list of names; the page registry keeps write order.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modgen.utils import load_json_list, save_json


class RegistryError(Exception):
    """Raised when a registry file exists but cannot be read as a registry."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Registry {path} is malformed: {message}")


# ---------------------------------------------------------------------------
# Page record
# ---------------------------------------------------------------------------


class PageEntry(BaseModel):
    """One page of a module as recorded in ``pages.json``."""

    model_config = ConfigDict(populate_by_name=True)

    module: str = Field(..., description="Normalized name of the owning module")
    page: str = Field(..., description="Normalized page slug; 'index' is the module root")
    path: str = Field(..., description="Route directory relative to the project root")
    description: str = Field(default="")
    auth: bool = Field(default=False, description="Whether the page is behind an auth gate")
    has_page_server: bool = Field(default=False, alias="hasPageServer")
    has_server: bool = Field(default=False, alias="hasServer")

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.module, self.page, self.path)

    def to_record(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


def upsert_page(pages: list[PageEntry], entry: PageEntry) -> list[PageEntry]:
    """Return *pages* with *entry* replacing the record of the same key.

    An entry with a new key is appended; other records keep their position.
    """
    result = list(pages)
    for index, existing in enumerate(result):
        if existing.key == entry.key:
            result[index] = entry
            return result
    result.append(entry)
    return result


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class _JsonArrayStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load_raw(self) -> list[object]:
        try:
            return load_json_list(self.path)
        except (json.JSONDecodeError, TypeError) as exc:
            raise RegistryError(self.path, str(exc)) from exc

    def ensure(self) -> bool:
        """Create an empty registry file if none exists. Returns ``True`` if created."""
        if self.path.exists():
            return False
        save_json([], self.path)
        return True


class ModuleRegistry(_JsonArrayStore):
    """``modules.json``: the set of module names that exist."""

    def load(self) -> list[str]:
        raw = self._load_raw()
        if not all(isinstance(name, str) for name in raw):
            raise RegistryError(self.path, "module names must be strings")
        return list(raw)

    def save(self, modules: Iterable[str]) -> None:
        save_json(sorted(set(modules)), self.path)


class PageRegistry(_JsonArrayStore):
    """``pages.json``: one record per generated page, in write order."""

    def load(self) -> list[PageEntry]:
        raw = self._load_raw()
        try:
            return [PageEntry.model_validate(record) for record in raw]
        except ValidationError as exc:
            raise RegistryError(self.path, str(exc)) from exc

    def save(self, pages: Iterable[PageEntry]) -> None:
        save_json([page.to_record() for page in pages], self.path)
