"""Extension-to-category registry."""

from mediaconv.formats.registry import (
    AUDIO_ONLY_EXTENSIONS,
    DEFAULT_FORMAT_SPECS,
    Category,
    FormatRegistry,
    FormatSpec,
    get_default_registry,
    resolve_category,
)

__all__ = [
    "AUDIO_ONLY_EXTENSIONS",
    "DEFAULT_FORMAT_SPECS",
    "Category",
    "FormatRegistry",
    "FormatSpec",
    "get_default_registry",
    "resolve_category",
]
