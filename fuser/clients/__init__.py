"""API clients for external services."""

from .fusion import FusionClient, UploadAck

__all__ = ["FusionClient", "UploadAck"]
