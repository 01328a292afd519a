"""Filesystem primitives used when a plan is applied.

``materialize`` only ever creates files, so re-running a scaffold after a
partial failure fills in what is missing without touching edited files.
``rename_path`` is strict and ``remove_path`` is tolerant: a rename of a
missing source is an error, removing a missing path is a no-op.
"""

from __future__ import annotations

import shutil
from pathlib import Path


def materialize(path: str | Path, content: str) -> bool:
    """Write *content* to *path* unless the file already exists.

    Parent directories are created first.  Returns ``True`` if the file was
    written, ``False`` if it was left untouched.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists():
        return False
    target.write_text(content, encoding="utf-8")
    return True


def rename_path(src: str | Path, dst: str | Path) -> Path:
    """Move a file or directory tree from *src* to *dst*.

    Raises:
        FileNotFoundError: If *src* does not exist.
        FileExistsError: If *dst* already exists.
    """
    source = Path(src)
    target = Path(dst)
    if not source.exists():
        raise FileNotFoundError(f"Cannot rename missing path: {source}")
    if target.exists():
        raise FileExistsError(f"Rename target already exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    return source.rename(target)


def remove_path(path: str | Path) -> bool:
    """Remove a file or a directory tree; missing paths are ignored.

    Returns ``True`` if something was removed.
    """
    target = Path(path)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
        return True
    if target.exists() or target.is_symlink():
        target.unlink()
        return True
    return False
