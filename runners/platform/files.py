"""Filesystem helpers.

These raise ``OSError`` like the stdlib calls they wrap; collaborators turn
that into a ``RunnerError`` at their boundary.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "clear_directory", "copy_file", "copy_tree"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def copy_file(source: Path, target: Path, *, overwrite: bool = True) -> None:
    """Copy a single file, creating the target's parent directories.

    Raises:
        FileExistsError: If ``target`` exists and ``overwrite`` is False.
    """
    if target.exists() and not overwrite:
        raise FileExistsError(f"target exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, target)


def clear_directory(path: Path) -> None:
    """Remove everything inside ``path`` but keep the directory itself."""
    if not path.is_dir():
        return
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def copy_tree(source: Path, target: Path) -> None:
    """Replace the contents of ``target`` with a copy of ``source``."""
    clear_directory(target)
    shutil.copytree(source, target, dirs_exist_ok=True)
