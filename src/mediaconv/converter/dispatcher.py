"""Conversion dispatcher.

Resolves the input's category, checks that the category's tool was found
at startup, translates the option bag, runs the tool and reports the
outcome as a ConversionResult. Failures never escape as exceptions.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, assert_never

from mediaconv.config.models import ConversionConfig
from mediaconv.converter.errors import ConversionError, UnsupportedTypeError
from mediaconv.converter.invoker import ToolInvoker, prepare_output_dir
from mediaconv.converter.models import (
    BatchRequest,
    ConversionRequest,
    ConversionResult,
    CropRequest,
    FlipRequest,
    FrameRequest,
    ResizeRequest,
    RotateRequest,
)
from mediaconv.converter.options import translate_options
from mediaconv.core.file_utils import extension_of
from mediaconv.formats.registry import Category, FormatRegistry, get_default_registry
from mediaconv.image.processor import ImageProcessor
from mediaconv.logging.context import job_context
from mediaconv.tools.models import ToolRegistry
from mediaconv.tools.requirements import tool_for_category
from mediaconv.video.frames import FrameExtractor

logger = logging.getLogger(__name__)


def get_max_workers() -> int:
    """Calculate maximum worker count (half CPU cores, minimum 1)."""
    cpu_count = os.cpu_count() or 2
    return max(1, cpu_count // 2)


def resolve_worker_count(requested: int | None, config_default: int) -> int:
    """Resolve effective worker count with capping.

    Args:
        requested: Worker count from the caller (None if not specified).
        config_default: Default worker count from configuration.

    Returns:
        Effective worker count, at least 1 and at most get_max_workers().
    """
    max_workers = get_max_workers()
    effective = requested if requested is not None else config_default

    if effective > max_workers:
        logger.warning(
            "Requested %d workers exceeds cap of %d (half of %s cores). Using %d.",
            effective,
            max_workers,
            os.cpu_count(),
            max_workers,
        )
        return max_workers

    return max(1, effective)


def build_command(
    category: Category,
    tool_path: Path,
    input_path: Path,
    output_path: Path,
    tool_args: list[str],
) -> list[str]:
    """Lay out the full argument vector for a category's tool.

    ffmpeg needs -y to overwrite; magick and pandoc overwrite by default.
    """
    if category in (Category.VIDEO, Category.AUDIO):
        return [
            str(tool_path),
            "-hide_banner",
            "-i",
            str(input_path),
            *tool_args,
            "-y",
            str(output_path),
        ]
    if category == Category.IMAGE:
        return [str(tool_path), str(input_path), *tool_args, str(output_path)]
    if category == Category.DOCUMENT:
        return [
            str(tool_path),
            str(input_path),
            "-o",
            str(output_path),
            *tool_args,
        ]
    assert_never(category)


class Converter:
    """Dispatch requests to ffmpeg, magick or pandoc.

    Args:
        tools: Tool registry built at startup.
        config: Conversion defaults (timeout, worker count, image quality).
        registry: Format registry. Defaults to the built-in table.
    """

    def __init__(
        self,
        tools: ToolRegistry,
        config: ConversionConfig | None = None,
        registry: FormatRegistry | None = None,
    ) -> None:
        self.config = config or ConversionConfig()
        self.registry = registry or get_default_registry()
        self.invoker = ToolInvoker(tools, timeout=self.config.timeout_seconds)
        self.images = ImageProcessor(self.invoker, self.registry, self.config)
        self.frames = FrameExtractor(self.invoker, self.registry)

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """Convert one file. Always returns a result, never raises."""
        command: list[str] | None = None
        try:
            category = self._resolve(request)
            tool_path = self.invoker.require(tool_for_category(category))
            tool_args = translate_options(
                category,
                self._with_defaults(category, request),
                extension_of(request.output_path),
            )
            command = build_command(
                category,
                tool_path,
                request.input_path,
                request.output_path,
                tool_args,
            )
            prepare_output_dir(request.output_path.parent)
            output = self.invoker.invoke(tool_path, command[1:])
        except ConversionError as e:
            logger.info(
                "Conversion of %s failed: %s",
                request.input_path,
                e.message,
                extra={"error_kind": e.kind.value},
            )
            return ConversionResult.failed(request, e, command)

        logger.info(
            "Converted %s -> %s",
            request.input_path,
            request.output_path,
            extra={"elapsed_seconds": round(output.elapsed, 3)},
        )
        return ConversionResult.ok(
            request, request.output_path, command, output.elapsed
        )

    def run(self, request: BatchRequest) -> ConversionResult:
        """Execute any request variant."""
        if isinstance(request, ConversionRequest):
            return self.convert(request)
        if isinstance(request, CropRequest):
            return self._capture(request, self.images.crop)
        if isinstance(request, ResizeRequest):
            return self._capture(request, self.images.resize)
        if isinstance(request, RotateRequest):
            return self._capture(request, self.images.rotate)
        if isinstance(request, FlipRequest):
            return self._capture(request, self.images.flip)
        if isinstance(request, FrameRequest):
            return self._capture(request, self.frames.extract_frame)
        assert_never(request)

    def batch_convert(
        self,
        requests: Sequence[ConversionRequest],
        workers: int | None = None,
    ) -> list[ConversionResult]:
        """Convert many files. See run_batch."""
        return self.run_batch(requests, workers)

    def run_batch(
        self,
        requests: Sequence[BatchRequest],
        workers: int | None = None,
    ) -> list[ConversionResult]:
        """Execute requests, one result per request, in request order.

        A failing request does not stop the batch, and earlier outputs are
        left in place. With more than one worker the requests run on a
        bounded thread pool; none depends on another's output.

        Args:
            requests: Requests to execute.
            workers: Worker count; None uses the configured default.

        Returns:
            Results aligned with requests by index.
        """
        effective = resolve_worker_count(workers, self.config.workers)
        total = len(requests)
        logger.info(
            "Running batch of %d request(s) with %d worker(s)", total, effective
        )

        indexed = list(enumerate(requests, start=1))
        if effective == 1 or total <= 1:
            results = [self._run_job(item) for item in indexed]
        else:
            with ThreadPoolExecutor(max_workers=effective) as executor:
                results = list(executor.map(self._run_job, indexed))

        failed = sum(1 for r in results if not r.success)
        logger.info(
            "Batch finished: %d succeeded, %d failed", total - failed, failed
        )
        return results

    def _run_job(self, item: tuple[int, BatchRequest]) -> ConversionResult:
        index, request = item
        with job_context(f"J{index:03d}", request.input_path):
            return self.run(request)

    def _resolve(self, request: ConversionRequest) -> Category:
        input_ext = extension_of(request.input_path)
        category = self.registry.resolve(input_ext)
        if category is None:
            raise UnsupportedTypeError(
                f"Unsupported file type: {input_ext or '(no extension)'}",
                extension=input_ext,
            )
        output_ext = extension_of(request.output_path)
        if not self.registry.supports_output(category, output_ext):
            raise UnsupportedTypeError(
                f"Cannot convert {category.value} {input_ext} to "
                f"{output_ext or '(no extension)'}",
                extension=output_ext,
            )
        return category

    def _with_defaults(
        self, category: Category, request: ConversionRequest
    ) -> dict[str, str]:
        options = dict(request.options)
        if category == Category.IMAGE:
            options.setdefault("quality", str(self.config.image_quality))
        elif category == Category.DOCUMENT:
            options.setdefault("pdf_engine", self.config.pdf_engine)
        return options

    @staticmethod
    def _capture(
        request: BatchRequest, operation: Callable[[Any], list[str]]
    ) -> ConversionResult:
        start = time.monotonic()
        try:
            command = operation(request)
        except ConversionError as e:
            logger.info(
                "%s of %s failed: %s",
                type(request).__name__,
                request.input_path,
                e.message,
                extra={"error_kind": e.kind.value},
            )
            return ConversionResult.failed(request, e)
        return ConversionResult.ok(
            request, request.output_path, command, time.monotonic() - start
        )
