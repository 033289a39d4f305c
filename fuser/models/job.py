"""Fusion job status mirror."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class JobStatus(Enum):
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


# Remote status strings -> JobStatus (queue backends name these differently)
STATUS_ALIASES: dict[str, JobStatus] = {
    "waiting": JobStatus.QUEUED,
    "pending": JobStatus.QUEUED,
    "queued": JobStatus.QUEUED,
    "delayed": JobStatus.QUEUED,
    "active": JobStatus.RUNNING,
    "running": JobStatus.RUNNING,
    "processing": JobStatus.RUNNING,
    "completed": JobStatus.SUCCEEDED,
    "finished": JobStatus.SUCCEEDED,
    "succeeded": JobStatus.SUCCEEDED,
    "success": JobStatus.SUCCEEDED,
    "failed": JobStatus.FAILED,
    "error": JobStatus.FAILED,
}


def parse_status(value: Any) -> JobStatus | None:
    """Map a remote status string to JobStatus. Returns None if unrecognized."""
    if not isinstance(value, str):
        return None
    return STATUS_ALIASES.get(value.strip().lower())


@dataclass(frozen=True)
class FusionJob:
    """Client-side view of a remote job. Rebuilt from every poll response."""

    id: str
    status: JobStatus = JobStatus.QUEUED
    progress: float | None = None
    result_url: str | None = None
    error_message: str | None = None
