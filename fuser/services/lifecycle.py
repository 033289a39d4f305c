"""Job lifecycle controller - submit, poll, finish, one step at a time."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..clients.fusion import FusionClient
from ..errors import ControllerStateError, PollError, RemoteError, SubmissionError
from ..models.job import FusionJob, JobStatus


class ControllerState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Snapshot:
    """Externally observable controller state."""

    state: ControllerState
    job: FusionJob | None = None
    error: RemoteError | None = None


class JobController:
    """
    State machine over a FusionClient.

    The controller owns no timers or threads. The caller drives cadence by
    calling poll() once per tick and must not overlap poll() calls.
    Abandoning a job (cancel, or simply not polling) does not stop it
    remotely.
    """

    def __init__(
        self,
        client: FusionClient,
        on_change: Callable[[Snapshot], None] | None = None,
    ):
        self.client = client
        self.on_change = on_change
        self.last_poll_error: PollError | None = None
        self.history: list[Snapshot] = []
        self._snapshot = Snapshot(ControllerState.IDLE)
        self._record(self._snapshot)

    @property
    def state(self) -> ControllerState:
        return self._snapshot.state

    @property
    def job(self) -> FusionJob | None:
        return self._snapshot.job

    @property
    def error(self) -> RemoteError | None:
        return self._snapshot.error

    @property
    def states(self) -> list[ControllerState]:
        return [snapshot.state for snapshot in self.history]

    @property
    def result_url(self) -> str | None:
        if self.state != ControllerState.SUCCEEDED:
            return None
        return self.job.result_url

    @property
    def error_message(self) -> str | None:
        if self.state != ControllerState.FAILED:
            return None
        if self.error is not None:
            return str(self.error)
        return self.job.error_message if self.job else None

    def submit(self, grid_rows: list[list[dict[str, Any]]], settings: dict[str, Any]) -> Snapshot:
        """Enqueue a job. Submission failures end in FAILED rather than raising."""
        self._require(ControllerState.IDLE, "submit")
        self._transition(Snapshot(ControllerState.SUBMITTING))

        try:
            job_id = self.client.submit(grid_rows, settings)
        except SubmissionError as e:
            return self._transition(Snapshot(ControllerState.FAILED, error=e))

        self.last_poll_error = None
        return self._transition(Snapshot(ControllerState.POLLING, job=FusionJob(id=job_id)))

    def poll(self) -> Snapshot:
        """
        One status request.

        A PollError is stored in last_poll_error and re-raised; the state
        stays POLLING so the caller can decide to retry or abandon.
        """
        self._require(ControllerState.POLLING, "poll")

        try:
            job = self.client.poll(self.job.id)
        except PollError as e:
            self.last_poll_error = e
            raise

        self.last_poll_error = None
        if job.status == JobStatus.QUEUED and self.job.status == JobStatus.QUEUED:
            # Still waiting in the queue: refresh the mirror, nothing new to observe
            self._snapshot = Snapshot(ControllerState.POLLING, job=job)
            return self._snapshot
        if job.status == JobStatus.SUCCEEDED:
            return self._transition(Snapshot(ControllerState.SUCCEEDED, job=job))
        if job.status == JobStatus.FAILED:
            return self._transition(Snapshot(ControllerState.FAILED, job=job))
        return self._transition(Snapshot(ControllerState.POLLING, job=job))

    def cancel(self) -> Snapshot:
        """
        Stop tracking the current job. The remote job keeps running.

        The abandoned job stays readable through `job` until the next submit.
        """
        self._require(ControllerState.POLLING, "cancel")
        return self._transition(Snapshot(ControllerState.IDLE, job=self.job))

    def retry(self) -> Snapshot:
        """Back to IDLE after a failure so submit() can be called again."""
        self._require(ControllerState.FAILED, "retry")
        return self._transition(Snapshot(ControllerState.IDLE))

    def reset(self) -> Snapshot:
        if self.state not in (ControllerState.SUCCEEDED, ControllerState.FAILED):
            raise ControllerStateError(f"Cannot reset while {self.state.value}")
        return self._transition(Snapshot(ControllerState.IDLE))

    def _require(self, state: ControllerState, action: str):
        if self.state != state:
            raise ControllerStateError(
                f"Cannot {action} while {self.state.value} (requires {state.value})"
            )

    def _transition(self, snapshot: Snapshot) -> Snapshot:
        if snapshot != self._snapshot:
            self._snapshot = snapshot
            self._record(snapshot)
        return self._snapshot

    def _record(self, snapshot: Snapshot):
        self.history.append(snapshot)
        if self.on_change:
            self.on_change(snapshot)
