"""Structured logging for mediaconv.

Text or JSON output, optional rotating log file, and per-job context for
batch runs.
"""

from mediaconv.logging.config import configure_logging
from mediaconv.logging.context import JobContextFilter, get_job_context, job_context
from mediaconv.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "configure_logging",
    "get_job_context",
    "job_context",
]
