"""Job runner - drives a JobController on a fixed poll interval."""

import time
from typing import Any, Callable

from ..errors import JobTimeoutError, PollError
from .lifecycle import ControllerState, JobController, Snapshot


class FusionRunner:
    """Submit once, then sleep-then-poll until the job is terminal."""

    def __init__(
        self,
        controller: JobController,
        poll_interval: float = 2.0,
        max_attempts: int = 150,
        max_poll_errors: int = 3,
        sleep: Callable[[float], None] | None = None,
    ):
        self.controller = controller
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.max_poll_errors = max_poll_errors
        self.sleep = sleep or time.sleep

    def run(self, grid_rows: list[list[dict[str, Any]]], settings: dict[str, Any]) -> Snapshot:
        """
        Full pipeline: submit -> poll -> return the terminal snapshot.

        Raises:
            PollError: More than max_poll_errors consecutive poll failures
            JobTimeoutError: Job still running after max_attempts polls
        """
        print("Submitting fusion job...", flush=True)
        snapshot = self.controller.submit(grid_rows, settings)
        if snapshot.state == ControllerState.FAILED:
            print(f"  -> FAILED: {snapshot.error}", flush=True)
            return snapshot

        job_id = snapshot.job.id
        print(f"  -> ID: {job_id}", flush=True)

        poll_errors = 0
        for attempt in range(1, self.max_attempts + 1):
            self.sleep(self.poll_interval)

            try:
                snapshot = self.controller.poll()
            except PollError as e:
                poll_errors += 1
                print(f"[Poll {attempt}] error {poll_errors}/{self.max_poll_errors}: {e}", flush=True)
                if poll_errors > self.max_poll_errors:
                    self.controller.cancel()
                    raise
                continue

            poll_errors = 0
            job = snapshot.job
            if snapshot.state == ControllerState.SUCCEEDED:
                print(f"[Poll {attempt}] DONE: {job.result_url}", flush=True)
                return snapshot
            if snapshot.state == ControllerState.FAILED:
                print(f"[Poll {attempt}] ERROR: {job.error_message}", flush=True)
                return snapshot

            progress = f" {job.progress:.0f}%" if job.progress is not None else ""
            print(f"[Poll {attempt}] {job.status.value}{progress}", flush=True)

        self.controller.cancel()
        raise JobTimeoutError(f"Fusion job {job_id} timed out after {self.max_attempts} polls")
