"""Conversion requests, option translation and tool invocation.

The dispatcher lives in mediaconv.converter.dispatcher. It depends on the
image and video packages, which in turn use the types exported here.

Example:
    from mediaconv.converter import ConversionRequest
    from mediaconv.converter.dispatcher import Converter
    from mediaconv.tools import detect_all_tools

    converter = Converter(detect_all_tools())
    result = converter.convert(ConversionRequest("a.mov", "a.mp4", {"quality": "23"}))
    if not result.success:
        print(result.error_kind, result.message)
"""

from mediaconv.converter.errors import (
    ConversionError,
    ErrorKind,
    InvalidArgumentError,
    ToolExecutionError,
    ToolMissingError,
    ToolTimeoutError,
    UnsupportedTypeError,
)
from mediaconv.converter.invoker import ToolInvoker
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
from mediaconv.converter.options import (
    resolve_image_quality,
    translate_audio,
    translate_document,
    translate_image,
    translate_options,
    translate_video,
)

__all__ = [
    # Errors
    "ConversionError",
    "ErrorKind",
    "InvalidArgumentError",
    "ToolExecutionError",
    "ToolMissingError",
    "ToolTimeoutError",
    "UnsupportedTypeError",
    # Invoker
    "ToolInvoker",
    # Models
    "BatchRequest",
    "ConversionRequest",
    "ConversionResult",
    "CropRequest",
    "FlipRequest",
    "FrameRequest",
    "ResizeRequest",
    "RotateRequest",
    # Options
    "resolve_image_quality",
    "translate_audio",
    "translate_document",
    "translate_image",
    "translate_options",
    "translate_video",
]
