"""Request and result types.

Requests are frozen dataclasses, one per operation. BatchRequest is the
union of all of them; the dispatcher handles every member explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Union

from mediaconv.converter.errors import ConversionError, ErrorKind


def _frozen_options(options: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType({str(k): str(v) for k, v in (options or {}).items()})


def _coerce_paths(request: object) -> None:
    """Accept str paths on frozen requests by converting them to Path."""
    for name in ("input_path", "output_path"):
        object.__setattr__(request, name, Path(getattr(request, name)))


@dataclass(frozen=True)
class ConversionRequest:
    """Convert input_path into output_path's format."""

    input_path: Path
    output_path: Path
    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _coerce_paths(self)
        object.__setattr__(self, "options", _frozen_options(self.options))


@dataclass(frozen=True)
class CropRequest:
    """Cut a width x height region at (x, y) out of an image."""

    input_path: Path
    output_path: Path
    x: int
    y: int
    width: int
    height: int
    quality: int | None = None

    def __post_init__(self) -> None:
        _coerce_paths(self)


@dataclass(frozen=True)
class ResizeRequest:
    """Scale an image to fit width x height.

    With exact=True the aspect ratio is ignored.
    """

    input_path: Path
    output_path: Path
    width: int
    height: int
    quality: int | None = None
    exact: bool = False

    def __post_init__(self) -> None:
        _coerce_paths(self)


@dataclass(frozen=True)
class RotateRequest:
    """Rotate an image clockwise by degrees."""

    input_path: Path
    output_path: Path
    degrees: float
    quality: int | None = None
    background: str = "none"

    def __post_init__(self) -> None:
        _coerce_paths(self)


@dataclass(frozen=True)
class FlipRequest:
    """Mirror an image horizontally (left-right) or vertically."""

    input_path: Path
    output_path: Path
    horizontal: bool = True
    quality: int | None = None

    def __post_init__(self) -> None:
        _coerce_paths(self)


@dataclass(frozen=True)
class FrameRequest:
    """Grab one frame of a video at timestamp into an image file.

    timestamp is seconds ("5", "2.5") or "HH:MM:SS[.fff]". quality is the
    ffmpeg -q:v scale, 1 (best) to 31; other values are ignored.
    """

    input_path: Path
    output_path: Path
    timestamp: str
    width: int | None = None
    height: int | None = None
    quality: int | None = None

    def __post_init__(self) -> None:
        _coerce_paths(self)


BatchRequest = Union[
    ConversionRequest,
    CropRequest,
    ResizeRequest,
    RotateRequest,
    FlipRequest,
    FrameRequest,
]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one request.

    This is a frozen dataclass to keep results immutable once reported.
    """

    success: bool
    """True if the tool ran and exited 0."""

    request: BatchRequest
    """The request this result answers."""

    output_path: Path | None = None
    """Path written on success."""

    error: ConversionError | None = None
    """The failure, when success is False."""

    command: tuple[str, ...] = ()
    """Argument vector that was executed, if the tool was started."""

    elapsed_seconds: float = 0.0

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error else None

    @property
    def message(self) -> str:
        """Human-readable outcome."""
        if self.error is not None:
            return self.error.message
        return f"Wrote {self.output_path}"

    @classmethod
    def ok(
        cls,
        request: BatchRequest,
        output_path: Path,
        command: list[str],
        elapsed: float,
    ) -> ConversionResult:
        return cls(
            success=True,
            request=request,
            output_path=output_path,
            command=tuple(command),
            elapsed_seconds=elapsed,
        )

    @classmethod
    def failed(
        cls,
        request: BatchRequest,
        error: ConversionError,
        command: list[str] | None = None,
    ) -> ConversionResult:
        return cls(
            success=False,
            request=request,
            error=error,
            command=tuple(command or ()),
        )
