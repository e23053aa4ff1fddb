"""Format registry: which extensions belong to which media category.

The registry is an ordered, immutable set of FormatSpecs. An input
extension may belong to exactly one category; overlapping registrations
are rejected when the registry is built so that category resolution never
depends on iteration order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mediaconv.core.file_utils import extension_of, normalize_extension


class Category(Enum):
    """Media category, deciding which tool and option vocabulary apply."""

    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"
    DOCUMENT = "document"


@dataclass(frozen=True)
class FormatSpec:
    """Extensions a category accepts as input and can produce as output."""

    category: Category
    input_extensions: frozenset[str]
    output_extensions: frozenset[str]

    @classmethod
    def create(
        cls,
        category: Category,
        inputs: Iterable[str],
        outputs: Iterable[str],
    ) -> FormatSpec:
        """Build a spec, normalizing every extension."""
        return cls(
            category=category,
            input_extensions=frozenset(normalize_extension(e) for e in inputs),
            output_extensions=frozenset(normalize_extension(e) for e in outputs),
        )


# Output extensions that carry audio only. A video converted to one of
# these has its video stream dropped.
AUDIO_ONLY_EXTENSIONS: frozenset[str] = frozenset(
    {".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a"}
)

VIDEO_FORMATS = FormatSpec.create(
    Category.VIDEO,
    [".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".m4v"],
    [".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".m4v", ".gif"]
    + sorted(AUDIO_ONLY_EXTENSIONS),
)

IMAGE_FORMATS = FormatSpec.create(
    Category.IMAGE,
    [".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tiff", ".svg"],
    [".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tiff", ".pdf"],
)

AUDIO_FORMATS = FormatSpec.create(
    Category.AUDIO,
    [".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma"],
    sorted(AUDIO_ONLY_EXTENSIONS),
)

DOCUMENT_FORMATS = FormatSpec.create(
    Category.DOCUMENT,
    [".md", ".markdown", ".txt", ".rst", ".html", ".docx", ".odt", ".rtf"]
    + [".epub", ".tex"],
    [".pdf", ".txt", ".html", ".docx", ".odt", ".md", ".rst", ".epub"],
)

DEFAULT_FORMAT_SPECS: tuple[FormatSpec, ...] = (
    VIDEO_FORMATS,
    IMAGE_FORMATS,
    AUDIO_FORMATS,
    DOCUMENT_FORMATS,
)


class FormatRegistry:
    """Immutable lookup from extension to category.

    Raises:
        ValueError: At construction, if an input extension is registered
            under more than one category.
    """

    def __init__(self, specs: Iterable[FormatSpec] = DEFAULT_FORMAT_SPECS) -> None:
        self._specs: tuple[FormatSpec, ...] = tuple(specs)
        index: dict[str, Category] = {}
        for spec in self._specs:
            for ext in spec.input_extensions:
                existing = index.get(ext)
                if existing is not None and existing != spec.category:
                    raise ValueError(
                        f"Extension {ext} registered for both "
                        f"{existing.value} and {spec.category.value}"
                    )
                index[ext] = spec.category
        self._by_extension = index
        self._by_category = {spec.category: spec for spec in self._specs}

    @property
    def specs(self) -> tuple[FormatSpec, ...]:
        """All registered specs in registration order."""
        return self._specs

    def resolve(self, extension: str) -> Category | None:
        """Return the category for an input extension, or None if unknown."""
        return self._by_extension.get(normalize_extension(extension))

    def resolve_path(self, path: Path | str) -> Category | None:
        """Return the category for a file path's extension."""
        return self.resolve(extension_of(path))

    def spec_for(self, category: Category) -> FormatSpec | None:
        return self._by_category.get(category)

    def is_supported(self, extension: str) -> bool:
        """Return True if the extension is a registered input extension."""
        return self.resolve(extension) is not None

    def supports_output(self, category: Category, extension: str) -> bool:
        """Return True if category can produce the given output extension."""
        spec = self._by_category.get(category)
        if spec is None:
            return False
        return normalize_extension(extension) in spec.output_extensions

    def output_extensions_for(self, extension: str) -> list[str]:
        """List the output extensions reachable from an input extension."""
        category = self.resolve(extension)
        if category is None:
            return []
        return sorted(self._by_category[category].output_extensions)

    def input_extensions(self, category: Category | None = None) -> list[str]:
        """List registered input extensions, optionally for one category."""
        return sorted(
            ext
            for ext, cat in self._by_extension.items()
            if category is None or cat == category
        )

    def all_input_extensions(self) -> list[str]:
        """List every registered input extension."""
        return self.input_extensions()


_default_registry: FormatRegistry | None = None


def get_default_registry() -> FormatRegistry:
    """Return the registry built from DEFAULT_FORMAT_SPECS."""
    global _default_registry
    if _default_registry is None:
        _default_registry = FormatRegistry()
    return _default_registry


def resolve_category(extension: str) -> Category | None:
    """Resolve an input extension against the default registry."""
    return get_default_registry().resolve(extension)
