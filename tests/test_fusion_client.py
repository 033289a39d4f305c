"""Tests for the fusion job HTTP client."""

import pytest
import requests

from fuser.clients import FusionClient, UploadAck
from fuser.errors import PollError, SubmissionError, UnsupportedFileType, UploadError
from fuser.models import FusionJob, Grid, JobStatus, CollageSettings

from .fakes import FakeResponse

BASE_URL = "https://api.example"


@pytest.fixture
def client() -> FusionClient:
    return FusionClient(BASE_URL, api_token="secret")


class Recorder:
    """Replaces requests.get/post, returning queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestSubmit:
    def test_posts_grid_and_settings(self, client, monkeypatch):
        post = Recorder(FakeResponse(200, {"id": "job-1"}))
        monkeypatch.setattr(requests, "post", post)
        grid_rows = Grid().serialize()
        settings = CollageSettings().to_dict()

        assert client.submit(grid_rows, settings) == "job-1"

        url, kwargs = post.calls[0]
        assert url == f"{BASE_URL}/queue-job"
        assert kwargs["json"] == {"grid": grid_rows, "settings": settings}
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    def test_accepts_job_id_key(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(FakeResponse(201, {"jobId": 42})))
        assert client.submit([], {}) == "42"

    def test_error_status_is_in_message(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(FakeResponse(500, {"error": "queue down"})))
        with pytest.raises(SubmissionError) as exc_info:
            client.submit([], {})
        assert exc_info.value.status_code == 500
        assert "500" in str(exc_info.value)
        assert "queue down" in str(exc_info.value)

    def test_transport_failure(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(requests.ConnectionError("refused")))
        with pytest.raises(SubmissionError) as exc_info:
            client.submit([], {})
        assert exc_info.value.status_code is None

    def test_missing_job_id(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(FakeResponse(200, {"queued": True})))
        with pytest.raises(SubmissionError):
            client.submit([], {})

    def test_retries_rate_limit_with_backoff(self, client, monkeypatch, no_sleep):
        post = Recorder(FakeResponse(429), FakeResponse(429), FakeResponse(200, {"id": "job-9"}))
        monkeypatch.setattr(requests, "post", post)
        assert client.submit([], {}) == "job-9"
        assert no_sleep == [1, 2]

    def test_gives_up_after_repeated_rate_limits(self, client, monkeypatch, no_sleep):
        post = Recorder(*[FakeResponse(429)] * FusionClient.MAX_ATTEMPTS)
        monkeypatch.setattr(requests, "post", post)
        with pytest.raises(SubmissionError) as exc_info:
            client.submit([], {})
        assert exc_info.value.status_code == 429
        assert no_sleep == [1, 2, 4, 8]
        assert len(post.calls) == FusionClient.MAX_ATTEMPTS


class TestPoll:
    def test_running_with_progress(self, client, monkeypatch):
        get = Recorder(FakeResponse(200, {"status": "active", "progress": 40}))
        monkeypatch.setattr(requests, "get", get)

        assert client.poll("job-1") == FusionJob(id="job-1", status=JobStatus.RUNNING, progress=40.0)
        assert get.calls[0][0] == f"{BASE_URL}/job-progress/job-1"

    def test_succeeded(self, client, monkeypatch):
        monkeypatch.setattr(
            requests, "get",
            Recorder(FakeResponse(200, {"status": "completed", "progress": 100, "resultUrl": "https://cdn.example/out.gif"})),
        )
        job = client.poll("job-1")
        assert job.status == JobStatus.SUCCEEDED
        assert job.result_url == "https://cdn.example/out.gif"

    def test_failed_job_is_not_an_exception(self, client, monkeypatch):
        monkeypatch.setattr(
            requests, "get",
            Recorder(FakeResponse(200, {"status": "failed", "errorMessage": "image fetch timed out"})),
        )
        job = client.poll("job-1")
        assert job.status == JobStatus.FAILED
        assert job.error_message == "image fetch timed out"
        assert job.result_url is None

    def test_failed_without_message(self, client, monkeypatch):
        monkeypatch.setattr(requests, "get", Recorder(FakeResponse(200, {"status": "error"})))
        assert client.poll("job-1").error_message == "Unknown error"

    def test_progress_is_clamped(self, client, monkeypatch):
        monkeypatch.setattr(requests, "get", Recorder(FakeResponse(200, {"status": "running", "progress": 140})))
        assert client.poll("job-1").progress == 100.0

    @pytest.mark.parametrize("response", [
        FakeResponse(404, {"error": "no such job"}),
        FakeResponse(200, {"status": "exploded"}),
        FakeResponse(200, None, text="<html>"),
        FakeResponse(200, {"status": "running", "progress": "lots"}),
    ])
    def test_bad_responses_raise_poll_error(self, client, monkeypatch, response):
        monkeypatch.setattr(requests, "get", Recorder(response))
        with pytest.raises(PollError):
            client.poll("job-1")

    def test_transport_failure(self, client, monkeypatch):
        monkeypatch.setattr(requests, "get", Recorder(requests.Timeout("slow")))
        with pytest.raises(PollError):
            client.poll("job-1")

    def test_rate_limited_poll_is_retried_without_body(self, client, monkeypatch, no_sleep):
        get = Recorder(FakeResponse(429), FakeResponse(200, {"status": "queued"}))
        monkeypatch.setattr(requests, "get", get)

        assert client.poll("job-1").status == JobStatus.QUEUED
        assert no_sleep == [1]
        url, kwargs = get.calls[1]
        assert url == f"{BASE_URL}/job-progress/job-1"
        assert "json" not in kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer secret"


class TestUploadAsset:
    def test_wav_rejected_without_network(self, client, monkeypatch):
        post = Recorder()
        monkeypatch.setattr(requests, "post", post)
        with pytest.raises(UnsupportedFileType):
            client.upload_asset("track.wav", b"RIFF", "user-1")
        assert post.calls == []

    def test_mp3_is_sent(self, client, monkeypatch):
        post = Recorder(FakeResponse(200, {}))
        monkeypatch.setattr(requests, "post", post)

        assert client.upload_asset("track.mp3", b"ID3", "user-1") == UploadAck(ok=True, status_code=200)

        url, kwargs = post.calls[0]
        assert url == f"{BASE_URL}/audio"
        assert kwargs["params"] == {"userId": "user-1"}
        assert kwargs["files"]["file"][0] == "track.mp3"

    def test_suffix_check_ignores_case(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(FakeResponse(200, {})))
        assert client.upload_asset("TRACK.MP3", b"ID3", "user-1").ok

    def test_server_rejection_is_a_failed_ack(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(FakeResponse(413)))
        assert client.upload_asset("track.mp3", b"ID3", "user-1") == UploadAck(ok=False, status_code=413)

    def test_transport_failure(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", Recorder(requests.ConnectionError("refused")))
        with pytest.raises(UploadError):
            client.upload_asset("track.mp3", b"ID3", "user-1")
