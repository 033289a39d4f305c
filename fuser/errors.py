"""Error types raised by the fuser package."""


class FuserError(Exception):
    """Base class for fuser errors."""

    pass


class InvalidDimension(FuserError, ValueError):
    """A row, column or border value is outside its allowed range."""

    pass


class OutOfBounds(FuserError, IndexError):
    """A cell position is outside the current grid shape."""

    pass


class UnsupportedFileType(FuserError, ValueError):
    """An upload was rejected by its file name suffix."""

    pass


class InvalidCollageData(FuserError, ValueError):
    """Stored grid or collage data is missing fields or has the wrong shape."""

    pass


class RemoteError(FuserError):
    """A call to the fusion service failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SubmissionError(RemoteError):
    """Failed to enqueue a fusion job."""

    pass


class PollError(RemoteError):
    """Failed to read a fusion job's status."""

    pass


class UploadError(RemoteError):
    """Failed to reach the upload endpoint."""

    pass


class ControllerStateError(FuserError):
    """Operation not allowed in the controller's current state."""

    pass


class JobTimeoutError(FuserError):
    """A fusion job did not finish within the allowed poll attempts."""

    pass
