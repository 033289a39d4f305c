"""Placement protocol - drag payloads in, grid mutations out."""

import json
from dataclasses import dataclass

from ..models.asset import Asset, AssetVariant, OwnedAsset
from ..models.grid import Grid


@dataclass(frozen=True)
class DragPayload:
    """What a drag carries. Tray drags and in-grid drags use the same shape."""

    image_url: str
    asset_id: str
    motion_tag: str | None = None
    variant: AssetVariant = AssetVariant.MOTION

    def to_asset(self) -> Asset:
        return Asset(
            image_url=self.image_url,
            asset_id=self.asset_id,
            motion_tag=self.motion_tag,
            variant=self.variant,
        )

    def to_transfer(self) -> str:
        """Encode as plain text for a drag-and-drop data transfer."""
        return json.dumps(self.to_asset().to_dict())

    @classmethod
    def from_transfer(cls, text: str) -> "DragPayload":
        try:
            asset = Asset.from_dict(json.loads(text))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid drag payload: {text!r}") from e
        return cls.from_asset(asset)

    @classmethod
    def from_asset(cls, asset: Asset) -> "DragPayload":
        return cls(
            image_url=asset.image_url,
            asset_id=asset.asset_id,
            motion_tag=asset.motion_tag,
            variant=asset.variant,
        )


class PlacementProtocol:
    """
    Turns drag gestures into grid mutations.

    Drops always copy: dragging a cell's content onto another cell leaves
    the source cell as it was. Dropping on an occupied cell overwrites it.
    """

    def __init__(self, grid: Grid):
        self.grid = grid

    def begin_drag(self, source: OwnedAsset, variant: AssetVariant = AssetVariant.MOTION) -> DragPayload:
        return DragPayload(
            image_url=source.image_url(variant),
            asset_id=source.asset_id,
            motion_tag=source.motion_tag,
            variant=variant,
        )

    def drag_from_cell(self, row: int, col: int) -> DragPayload | None:
        """Payload for an asset already in the grid, or None for an empty cell."""
        cell = self.grid.cell(row, col)
        if cell.is_empty:
            return None
        return DragPayload.from_asset(cell.asset)

    def drop_on_cell(self, row: int, col: int, payload: DragPayload | str):
        if isinstance(payload, str):
            payload = DragPayload.from_transfer(payload)
        self.grid.place(row, col, payload.to_asset())

    def click_to_clear(self, row: int, col: int):
        self.grid.clear(row, col)

    def place_next(self, payload: DragPayload) -> tuple[int, int] | None:
        """Tray click: fill the first empty cell in reading order."""
        position = self.grid.first_empty()
        if position is None:
            return None
        self.grid.place(*position, payload.to_asset())
        return position
