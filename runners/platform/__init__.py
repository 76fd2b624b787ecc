"""Process and filesystem helpers."""

from .files import atomic_write_text, clear_directory, copy_file, copy_tree
from .process import ProcessError, run

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "clear_directory",
    "copy_file",
    "copy_tree",
    "run",
]
