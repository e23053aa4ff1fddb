"""Per-job logging context for batch runs.

Batch jobs may run on pool threads; contextvars keep each thread's job id
separate so every record can be attributed to the job that produced it.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_job_input: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_input", default=None
)


@contextmanager
def job_context(
    job_id: str, input_path: Path | str | None = None
) -> Generator[None, None, None]:
    """Attach a job id (e.g. "J003") to log records emitted inside the block.

    The previous context is restored on exit.
    """
    id_token = _job_id.set(job_id)
    input_token = _job_input.set(str(input_path) if input_path is not None else None)
    try:
        yield
    finally:
        _job_id.reset(id_token)
        _job_input.reset(input_token)


def get_job_context() -> tuple[str | None, str | None]:
    """Return (job_id, input_path) for the current context."""
    return _job_id.get(), _job_input.get()


class JobContextFilter(logging.Filter):
    """Inject job context into log records.

    Adds job_id and job_input for the JSON format and a compact job_tag
    such as "[J003] " for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id, job_input = get_job_context()
        record.job_id = job_id
        record.job_input = job_input
        record.job_tag = f"[{job_id}] " if job_id else ""
        return True
