"""Core utilities package.

Pure helpers with no knowledge of formats or tools: subprocess invocation,
display formatting and filesystem lookups.
"""

from mediaconv.core.file_utils import (
    ensure_parent_dir,
    extension_of,
    find_files_by_extension,
    normalize_extension,
)
from mediaconv.core.formatting import (
    format_duration,
    format_file_size,
    format_timestamp,
)
from mediaconv.core.subprocess_utils import CommandOutput, run_command

__all__ = [
    # File utilities
    "ensure_parent_dir",
    "extension_of",
    "find_files_by_extension",
    "normalize_extension",
    # Formatting
    "format_duration",
    "format_file_size",
    "format_timestamp",
    # Subprocess
    "CommandOutput",
    "run_command",
]
