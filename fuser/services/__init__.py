"""Business logic services."""

from .composition import Composition
from .lifecycle import ControllerState, JobController, Snapshot
from .placement import DragPayload, PlacementProtocol
from .runner import FusionRunner

__all__ = [
    "Composition",
    "ControllerState",
    "DragPayload",
    "FusionRunner",
    "JobController",
    "PlacementProtocol",
    "Snapshot",
]
