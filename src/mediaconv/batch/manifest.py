"""Batch manifest loading and validation.

A manifest is a YAML mapping with an optional worker count and a list of
jobs. Each job's "type" selects the request it becomes:

    workers: 2
    jobs:
      - type: convert
        input: a.mov
        output: a.mp4
        options: {quality: "23"}
      - type: crop
        input: b.png
        output: b_crop.png
        x: 0
        y: 0
        width: 100
        height: 100

Relative paths are resolved against the manifest's directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from mediaconv.converter.models import (
    BatchRequest,
    ConversionRequest,
    CropRequest,
    FlipRequest,
    FrameRequest,
    ResizeRequest,
    RotateRequest,
)


class ManifestError(Exception):
    """The manifest file is unreadable or fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class _JobModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: str = Field(min_length=1)
    output: str = Field(min_length=1)


class ConvertJobModel(_JobModel):
    """Pydantic model for a format conversion job."""

    type: Literal["convert"]
    options: dict[str, str | int | float] = Field(default_factory=dict)


class CropJobModel(_JobModel):
    """Pydantic model for an image crop job."""

    type: Literal["crop"]
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    quality: int | None = None


class ResizeJobModel(_JobModel):
    """Pydantic model for an image resize job."""

    type: Literal["resize"]
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    exact: bool = False
    quality: int | None = None


class RotateJobModel(_JobModel):
    """Pydantic model for an image rotation job."""

    type: Literal["rotate"]
    degrees: float
    background: str = "none"
    quality: int | None = None


class FlipJobModel(_JobModel):
    """Pydantic model for an image mirror job."""

    type: Literal["flip"]
    direction: Literal["horizontal", "vertical"] = "horizontal"
    quality: int | None = None


class FrameJobModel(_JobModel):
    """Pydantic model for a single-frame extraction job."""

    type: Literal["frame"]
    timestamp: str
    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)
    quality: int | None = Field(default=None, ge=1, le=31)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp_to_str(cls, v: Any) -> Any:
        # YAML reads "timestamp: 5" as an int
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


JobModel = Annotated[
    Union[
        ConvertJobModel,
        CropJobModel,
        ResizeJobModel,
        RotateJobModel,
        FlipJobModel,
        FrameJobModel,
    ],
    Field(discriminator="type"),
]


class ManifestModel(BaseModel):
    """Pydantic model for a whole manifest."""

    model_config = ConfigDict(extra="forbid")

    workers: int | None = Field(default=None, ge=1)
    jobs: list[JobModel] = Field(min_length=1)


@dataclass(frozen=True)
class BatchManifest:
    """A validated manifest."""

    workers: int | None
    requests: list[BatchRequest]
    path: Path | None = None


def _resolve(base: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path


def job_to_request(job: Any, base: Path) -> BatchRequest:
    """Convert a validated job model into its request type."""
    input_path = _resolve(base, job.input)
    output_path = _resolve(base, job.output)

    if isinstance(job, ConvertJobModel):
        return ConversionRequest(
            input_path=input_path,
            output_path=output_path,
            options={k: str(v) for k, v in job.options.items()},
        )
    if isinstance(job, CropJobModel):
        return CropRequest(
            input_path=input_path,
            output_path=output_path,
            x=job.x,
            y=job.y,
            width=job.width,
            height=job.height,
            quality=job.quality,
        )
    if isinstance(job, ResizeJobModel):
        return ResizeRequest(
            input_path=input_path,
            output_path=output_path,
            width=job.width,
            height=job.height,
            quality=job.quality,
            exact=job.exact,
        )
    if isinstance(job, RotateJobModel):
        return RotateRequest(
            input_path=input_path,
            output_path=output_path,
            degrees=job.degrees,
            quality=job.quality,
            background=job.background,
        )
    if isinstance(job, FlipJobModel):
        return FlipRequest(
            input_path=input_path,
            output_path=output_path,
            horizontal=job.direction == "horizontal",
            quality=job.quality,
        )
    if isinstance(job, FrameJobModel):
        return FrameRequest(
            input_path=input_path,
            output_path=output_path,
            timestamp=job.timestamp,
            width=job.width,
            height=job.height,
            quality=job.quality,
        )
    raise TypeError(f"Unhandled job model: {type(job).__name__}")


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Return a message naming the first invalid field, and that field."""
    errors = error.errors()
    if not errors:
        return f"Manifest validation failed: {error}", None
    first_error = errors[0]
    loc = ".".join(str(x) for x in first_error.get("loc", []))
    msg = first_error.get("msg", str(error))
    if loc:
        return f"Manifest validation failed: {loc}: {msg}", loc
    return f"Manifest validation failed: {msg}", None


def load_manifest_from_dict(
    data: dict[str, Any], base_dir: Path, path: Path | None = None
) -> BatchManifest:
    """Validate manifest data and build its requests.

    Args:
        data: Parsed manifest mapping.
        base_dir: Directory relative job paths are resolved against.
        path: Manifest file the data came from, if any.

    Raises:
        ManifestError: If the data does not match the manifest schema.
    """
    try:
        model = ManifestModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise ManifestError(message, field=field) from e

    return BatchManifest(
        workers=model.workers,
        requests=[job_to_request(job, base_dir) for job in model.jobs],
        path=path,
    )


def load_manifest(path: Path) -> BatchManifest:
    """Load and validate a manifest from a YAML file.

    Raises:
        ManifestError: If the file cannot be read, is not valid YAML, or
            fails validation.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise ManifestError("Manifest file is empty")
    if not isinstance(data, dict):
        raise ManifestError("Manifest file must be a YAML mapping")

    return load_manifest_from_dict(data, path.parent.resolve(), path)
