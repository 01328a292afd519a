"""Unit tests for the registry stores (modgen.registry)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from modgen.registry import (
    ModuleRegistry,
    PageEntry,
    PageRegistry,
    RegistryError,
    upsert_page,
)

pytestmark = pytest.mark.unit


def _entry(module: str = "widgets", page: str = "index", **kwargs) -> PageEntry:
    path = kwargs.pop("path", f"src/routes/{module}" + ("" if page == "index" else f"/{page}"))
    return PageEntry(module=module, page=page, path=path, **kwargs)


# ---------------------------------------------------------------------------
# ModuleRegistry
# ---------------------------------------------------------------------------


class TestModuleRegistry:
    def test_missing_file_loads_empty(self, tmp_path: Path):
        assert ModuleRegistry(tmp_path / "modules.json").load() == []

    def test_save_sorts_and_dedupes(self, tmp_path: Path):
        registry = ModuleRegistry(tmp_path / "lib" / "modules.json")
        registry.save(["zeta", "alpha", "zeta", "beta"])
        assert registry.load() == ["alpha", "beta", "zeta"]

    def test_file_format(self, tmp_path: Path):
        path = tmp_path / "modules.json"
        ModuleRegistry(path).save(["b", "a"])
        text = path.read_text(encoding="utf-8")
        assert text == '[\n  "a",\n  "b"\n]\n'

    def test_malformed_json_is_fatal(self, tmp_path: Path):
        path = tmp_path / "modules.json"
        path.write_text("[oops", encoding="utf-8")
        with pytest.raises(RegistryError) as exc_info:
            ModuleRegistry(path).load()
        assert exc_info.value.path == path

    def test_non_array_is_fatal(self, tmp_path: Path):
        path = tmp_path / "modules.json"
        path.write_text('{"widgets": true}', encoding="utf-8")
        with pytest.raises(RegistryError):
            ModuleRegistry(path).load()

    def test_non_string_names_are_fatal(self, tmp_path: Path):
        path = tmp_path / "modules.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(RegistryError):
            ModuleRegistry(path).load()

    def test_ensure_creates_once(self, tmp_path: Path):
        registry = ModuleRegistry(tmp_path / "modules.json")
        assert registry.ensure() is True
        registry.save(["widgets"])
        assert registry.ensure() is False
        assert registry.load() == ["widgets"]


# ---------------------------------------------------------------------------
# PageRegistry
# ---------------------------------------------------------------------------


class TestPageRegistry:
    def test_roundtrip_uses_camel_case_keys(self, tmp_path: Path):
        path = tmp_path / "pages.json"
        PageRegistry(path).save([_entry(has_page_server=True)])
        records = json.loads(path.read_text(encoding="utf-8"))
        assert records == [
            {
                "module": "widgets",
                "page": "index",
                "path": "src/routes/widgets",
                "description": "",
                "auth": False,
                "hasPageServer": True,
                "hasServer": False,
            }
        ]
        assert PageRegistry(path).load()[0].has_page_server is True

    def test_preserves_order(self, tmp_path: Path):
        registry = PageRegistry(tmp_path / "pages.json")
        entries = [_entry(page="zz"), _entry(page="aa"), _entry(page="mm")]
        registry.save(entries)
        assert [e.page for e in registry.load()] == ["zz", "aa", "mm"]

    def test_invalid_record_is_fatal(self, tmp_path: Path):
        path = tmp_path / "pages.json"
        path.write_text('[{"module": "widgets"}]', encoding="utf-8")
        with pytest.raises(RegistryError):
            PageRegistry(path).load()

    def test_malformed_json_is_fatal(self, tmp_path: Path):
        path = tmp_path / "pages.json"
        path.write_text("", encoding="utf-8")
        with pytest.raises(RegistryError):
            PageRegistry(path).load()


# ---------------------------------------------------------------------------
# upsert_page
# ---------------------------------------------------------------------------


class TestUpsertPage:
    def test_appends_new_key(self):
        pages = [_entry(page="index")]
        result = upsert_page(pages, _entry(page="activity"))
        assert [p.page for p in result] == ["index", "activity"]

    def test_replaces_in_place(self):
        pages = [_entry(page="a"), _entry(page="b"), _entry(page="c")]
        result = upsert_page(pages, _entry(page="b", description="updated"))
        assert [p.page for p in result] == ["a", "b", "c"]
        assert result[1].description == "updated"

    def test_does_not_mutate_input(self):
        pages = [_entry(page="a")]
        upsert_page(pages, _entry(page="b"))
        assert len(pages) == 1

    def test_key_includes_path(self):
        pages = [_entry(page="a", path="src/routes/widgets/a")]
        result = upsert_page(pages, _entry(page="a", path="elsewhere/a"))
        assert len(result) == 2
