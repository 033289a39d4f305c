"""Composition session - one grid and one settings bag kept in lockstep."""

from typing import Any

from ..errors import InvalidDimension
from ..models.collage import SavedCollage
from ..models.grid import Grid
from ..models.settings import CollageSettings
from .placement import PlacementProtocol


class Composition:
    """A user's editing session. Pass it around; there is no global instance."""

    def __init__(self, settings: CollageSettings | None = None, grid: Grid | None = None):
        self.settings = settings or CollageSettings()
        if grid is None:
            grid = Grid(rows=self.settings.rows, columns=self.settings.columns)
        elif (grid.row_count, grid.column_count) != (self.settings.rows, self.settings.columns):
            raise InvalidDimension(
                f"Grid is {grid.row_count}x{grid.column_count} but settings are "
                f"{self.settings.rows}x{self.settings.columns}"
            )
        self.grid = grid
        self.placement = PlacementProtocol(self.grid)

    def set_columns(self, count: int):
        # The setter validates; the grid only resizes if it passed.
        self.settings.columns = count
        self.grid.resize_columns(count)

    def set_rows(self, count: int):
        self.settings.rows = count
        self.grid.resize_rows(count)

    def snapshot(self) -> tuple[list[list[dict[str, Any]]], dict[str, Any]]:
        """Serialized (grid, settings) for a fusion job."""
        return self.grid.serialize(), self.settings.to_dict()

    def to_saved(self, collage_id: str, owner_id: str, hidden: bool = False) -> SavedCollage:
        return SavedCollage(
            id=collage_id,
            owner_id=owner_id,
            settings=CollageSettings.from_dict(self.settings.to_dict()),
            grid=Grid.deserialize(self.grid.serialize()),
            hidden=hidden,
        )

    @classmethod
    def from_saved(cls, collage: SavedCollage) -> "Composition":
        return cls(
            settings=CollageSettings.from_dict(collage.settings.to_dict()),
            grid=Grid.deserialize(collage.grid.serialize()),
        )
