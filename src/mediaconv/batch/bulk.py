"""Directory bulk conversion: one request per convertible file."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from mediaconv.converter.errors import UnsupportedTypeError
from mediaconv.converter.models import ConversionRequest
from mediaconv.core.file_utils import (
    extension_of,
    find_files_by_extension,
    normalize_extension,
)
from mediaconv.formats.registry import FormatRegistry, get_default_registry

logger = logging.getLogger(__name__)


def _deduplicate(output: Path, taken: set[Path]) -> Path:
    """Suffix _1, _2, ... when two inputs (a.mov, a.avi) map to one output."""
    candidate = output
    counter = 1
    while candidate in taken:
        candidate = output.with_name(f"{output.stem}_{counter}{output.suffix}")
        counter += 1
    return candidate


def discover_bulk_requests(
    directory: Path,
    target_format: str,
    output_dir: Path | None = None,
    options: Mapping[str, str] | None = None,
    registry: FormatRegistry | None = None,
    recursive: bool = True,
) -> list[ConversionRequest]:
    """Build a ConversionRequest for every file under directory that can
    be converted to target_format.

    Only registered input extensions are considered. Files already in the
    target format, and files whose category cannot produce it, are skipped.

    Args:
        directory: Directory to scan.
        target_format: Output extension ("mp4" or ".mp4").
        output_dir: Where to write outputs, mirroring the directory layout.
            Outputs go next to their inputs when None.
        options: Option bag applied to every request.
        registry: Format registry; the default table when None.
        recursive: Scan subdirectories as well.

    Returns:
        Requests sorted by input path.

    Raises:
        UnsupportedTypeError: If no registered category can produce
            target_format.
    """
    registry = registry or get_default_registry()
    target_ext = normalize_extension(target_format)
    producing = [
        spec.category
        for spec in registry.specs
        if target_ext in spec.output_extensions
    ]
    if not producing:
        raise UnsupportedTypeError(
            f"No supported conversion produces {target_ext or '(no extension)'}",
            extension=target_ext,
        )

    candidates = []
    for category in producing:
        candidates.extend(registry.input_extensions(category))

    requests = []
    taken: set[Path] = set()
    for path in find_files_by_extension(directory, candidates, recursive=recursive):
        if extension_of(path) == target_ext:
            logger.debug("Skipping %s: already %s", path, target_ext)
            continue
        if output_dir is not None:
            output = (output_dir / path.relative_to(directory)).with_suffix(target_ext)
        else:
            output = path.with_suffix(target_ext)
        output = _deduplicate(output, taken)
        taken.add(output)
        requests.append(ConversionRequest(path, output, dict(options or {})))

    logger.info(
        "Found %d file(s) to convert to %s under %s",
        len(requests),
        target_ext,
        directory,
    )
    return requests
