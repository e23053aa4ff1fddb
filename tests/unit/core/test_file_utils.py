"""Tests for filesystem helpers."""

from pathlib import Path

import pytest

from mediaconv.core import (
    ensure_parent_dir,
    extension_of,
    find_files_by_extension,
    normalize_extension,
)


@pytest.mark.parametrize(
    "value,expected",
    [("mp4", ".mp4"), (".MKV", ".mkv"), (" Png ", ".png"), ("", "")],
)
def test_normalize_extension(value, expected):
    assert normalize_extension(value) == expected


def test_extension_of():
    assert extension_of(Path("/a/b/Movie.MOV")) == ".mov"
    assert extension_of("archive.tar.gz") == ".gz"
    assert extension_of("README") == ""


class TestFindFilesByExtension:
    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        for name in ("b.mp4", "a.MP4", "c.txt", "sub/d.mkv", ".hidden/e.mp4"):
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
        (tmp_path / "dir.mp4").mkdir()
        return tmp_path

    def test_recursive_sorted(self, tree: Path):
        found = find_files_by_extension(tree, ["mp4", ".mkv"])

        assert [p.relative_to(tree).as_posix() for p in found] == [
            "a.MP4",
            "b.mp4",
            "sub/d.mkv",
        ]

    def test_non_recursive(self, tree: Path):
        found = find_files_by_extension(tree, ["mkv"], recursive=False)

        assert found == []


def test_ensure_parent_dir(tmp_path: Path):
    target = tmp_path / "x" / "y" / "out.png"

    ensure_parent_dir(target)
    ensure_parent_dir(target)

    assert target.parent.is_dir()
