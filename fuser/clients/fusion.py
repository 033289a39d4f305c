"""Fusion job client (remote collage rendering queue)."""

import time
from dataclasses import dataclass
from typing import Any

import requests

from ..config import ALLOWED_UPLOAD_SUFFIXES
from ..errors import PollError, SubmissionError, UnsupportedFileType, UploadError
from ..models.job import FusionJob, JobStatus, parse_status


@dataclass(frozen=True)
class UploadAck:
    """Result of an asset upload."""

    ok: bool
    status_code: int


def _error_detail(response: requests.Response) -> str:
    """Best-effort error text from a non-success response."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        for key in ("error", "message", "errors"):
            if data.get(key):
                value = data[key]
                return "; ".join(value) if isinstance(value, list) else str(value)
    return str(data)[:200]


class FusionClient:
    """Client for the remote fusion queue: enqueue, job status and uploads."""

    MAX_ATTEMPTS = 5

    def __init__(self, base_url: str, api_token: str | None = None, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout

    def _get_headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def _send(self, method: str, path: str, payload: dict | None = None) -> requests.Response:
        """
        Send a JSON request to the fusion service.

        429 responses are retried up to MAX_ATTEMPTS times, waiting 1, 2, 4...
        seconds in between. The last response is returned as-is, so a
        persistent 429 reaches the caller like any other error status.
        """
        url = f"{self.base_url}{path}"
        send = requests.post if method == "POST" else requests.get
        kwargs = {"headers": self._get_headers(), "timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload

        for attempt in range(self.MAX_ATTEMPTS):
            response = send(url, **kwargs)
            if response.status_code != 429 or attempt == self.MAX_ATTEMPTS - 1:
                return response
            time.sleep(2 ** attempt)

    def submit(self, grid_rows: list[list[dict[str, Any]]], settings: dict[str, Any]) -> str:
        """
        Enqueue a fusion job.

        Args:
            grid_rows: Serialized grid (ordered rows of {index, asset})
            settings: Serialized collage settings

        Returns:
            Remote job id

        Raises:
            SubmissionError: Network failure, non-success response or no job id
        """
        payload = {"grid": grid_rows, "settings": settings}

        try:
            response = self._send("POST", "/queue-job", payload)
        except requests.RequestException as e:
            raise SubmissionError(f"Failed to enqueue fusion job: {e}") from e

        if not response.ok:
            raise SubmissionError(
                f"Enqueue failed with status {response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionError(
                "Enqueue returned a non-JSON body", status_code=response.status_code
            ) from e

        job_id = (data.get("id") or data.get("jobId")) if isinstance(data, dict) else None
        if not job_id:
            raise SubmissionError(
                f"Unexpected enqueue response: {data}", status_code=response.status_code
            )
        return str(job_id)

    def poll(self, job_id: str) -> FusionJob:
        """
        Read a job's status. A failed job is a result, not an exception.

        Raises:
            PollError: Network failure, non-success response or unknown status
        """
        try:
            response = self._send("GET", f"/job-progress/{job_id}")
        except requests.RequestException as e:
            raise PollError(f"Failed to poll job {job_id}: {e}") from e

        if not response.ok:
            raise PollError(
                f"Status check for job {job_id} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PollError(
                f"Status for job {job_id} is not JSON", status_code=response.status_code
            ) from e

        return self._parse_job(job_id, data)

    def _parse_job(self, job_id: str, data: Any) -> FusionJob:
        if not isinstance(data, dict):
            raise PollError(f"Unexpected status response for job {job_id}: {data}")

        status = parse_status(data.get("status"))
        if status is None:
            raise PollError(f"Unknown status for job {job_id}: {data.get('status')!r}")

        progress = data.get("progress")
        if progress is not None:
            try:
                progress = max(0.0, min(100.0, float(progress)))
            except (TypeError, ValueError) as e:
                raise PollError(f"Invalid progress for job {job_id}: {progress!r}") from e

        error_message = None
        if status == JobStatus.FAILED:
            errors = data.get("errorMessage") or data.get("errors") or data.get("error")
            if isinstance(errors, list):
                error_message = "; ".join(str(e) for e in errors)
            else:
                error_message = str(errors) if errors else "Unknown error"

        return FusionJob(
            id=job_id,
            status=status,
            progress=progress,
            result_url=data.get("resultUrl") if status == JobStatus.SUCCEEDED else None,
            error_message=error_message,
        )

    def upload_asset(self, filename: str, data: bytes, owner_id: str) -> UploadAck:
        """
        Upload a supplementary asset (an audio track) for an owner.

        The file name suffix is checked before any request is made.

        Raises:
            UnsupportedFileType: Suffix not in ALLOWED_UPLOAD_SUFFIXES
            UploadError: Network failure
        """
        if not filename.lower().endswith(ALLOWED_UPLOAD_SUFFIXES):
            allowed = ", ".join(ALLOWED_UPLOAD_SUFFIXES)
            raise UnsupportedFileType(f"Unsupported file {filename!r}. Allowed: {allowed}")

        url = f"{self.base_url}/audio"
        headers = {}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        files = {"file": (filename, data, "audio/mpeg")}

        try:
            response = requests.post(
                url,
                params={"userId": owner_id},
                files=files,
                headers=headers,
                timeout=60,
            )
        except requests.RequestException as e:
            raise UploadError(f"Failed to upload {filename}: {e}") from e

        return UploadAck(ok=response.ok, status_code=response.status_code)
