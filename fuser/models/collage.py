"""Saved collage record - the shape the gallery store keeps."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidCollageData, InvalidDimension
from .grid import Grid
from .settings import CollageSettings


@dataclass
class SavedCollage:
    """A collage saved to a user's profile. Hidden collages are owner-only."""

    id: str
    owner_id: str
    settings: CollageSettings = field(default_factory=CollageSettings)
    grid: Grid = field(default_factory=Grid)
    hidden: bool = False

    def set_hidden(self, hidden: bool):
        self.hidden = hidden

    def is_visible_to(self, viewer_is_owner: bool) -> bool:
        return viewer_is_owner or not self.hidden

    def to_record(self) -> dict[str, Any]:
        settings = self.settings.to_dict()
        return {
            "id": self.id,
            "userId": self.owner_id,
            "rows": settings["rows"],
            "columns": settings["columns"],
            "borderWidth": settings["borderWidth"],
            "borderColor": settings["borderColor"],
            "overlay": settings["overlay"],
            "data": self.grid.serialize(),
            "hidden": self.hidden,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "SavedCollage":
        if not isinstance(record, dict):
            raise InvalidCollageData(f"Collage record must be an object, got {type(record).__name__}")
        missing = [key for key in ("id", "userId", "data") if key not in record]
        if missing:
            raise InvalidCollageData(f"Collage record is missing: {', '.join(missing)}")

        settings = CollageSettings.from_dict(record)
        grid = Grid.deserialize(record["data"])
        if (grid.row_count, grid.column_count) != (settings.rows, settings.columns):
            raise InvalidDimension(
                f"Collage {record['id']}: data is {grid.row_count}x{grid.column_count}, "
                f"settings say {settings.rows}x{settings.columns}"
            )
        return cls(
            id=record["id"],
            owner_id=record["userId"],
            settings=settings,
            grid=grid,
            hidden=record.get("hidden", False),
        )
