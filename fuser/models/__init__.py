"""Data models."""

from .asset import Asset, AssetVariant, OwnedAsset
from .collage import SavedCollage
from .grid import Cell, Grid
from .job import FusionJob, JobStatus
from .settings import CollageSettings

__all__ = [
    "Asset",
    "AssetVariant",
    "OwnedAsset",
    "Cell",
    "Grid",
    "CollageSettings",
    "FusionJob",
    "JobStatus",
    "SavedCollage",
]
