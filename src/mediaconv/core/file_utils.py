"""Filesystem helpers for bulk operations."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def normalize_extension(ext: str) -> str:
    """Lower-case an extension and make sure it starts with a dot."""
    ext = ext.strip().casefold()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


def extension_of(path: Path | str) -> str:
    """Return the normalized extension of a path ("" if it has none)."""
    return normalize_extension(Path(path).suffix)


def find_files_by_extension(
    directory: Path, extensions: Iterable[str], recursive: bool = True
) -> list[Path]:
    """Find files under a directory whose extension is in extensions.

    Hidden directories are skipped.

    Args:
        directory: Directory to search.
        extensions: Extensions to match (case-insensitive, dot optional).
        recursive: Search subdirectories as well.

    Returns:
        Sorted list of matching file paths.
    """
    wanted = {normalize_extension(e) for e in extensions}
    pattern = "**/*" if recursive else "*"
    files = []
    for path in directory.glob(pattern):
        relative = path.relative_to(directory)
        if any(part.startswith(".") for part in relative.parts[:-1]):
            continue
        if path.is_file() and extension_of(path) in wanted:
            files.append(path)
    return sorted(files)


def ensure_parent_dir(path: Path) -> None:
    """Create the parent directory of path if it does not exist."""
    path.parent.mkdir(parents=True, exist_ok=True)
