"""Collage rendering settings."""

import re
from typing import Any

from ..config import (
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_WIDTH,
    DEFAULT_COLUMNS,
    DEFAULT_ROWS,
    MAX_BORDER_WIDTH,
    MAX_COLUMNS,
    MAX_ROWS,
    MIN_BORDER_WIDTH,
    MIN_COLUMNS,
    MIN_ROWS,
)
from .bounds import check_range

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class CollageSettings:
    """Render parameters. Changing columns/rows does NOT resize a grid by itself."""

    def __init__(
        self,
        columns: int = DEFAULT_COLUMNS,
        rows: int = DEFAULT_ROWS,
        border_width: int = DEFAULT_BORDER_WIDTH,
        border_color: str = DEFAULT_BORDER_COLOR,
        overlay_enabled: bool = False,
    ):
        self._columns = check_range("columns", columns, MIN_COLUMNS, MAX_COLUMNS)
        self._rows = check_range("rows", rows, MIN_ROWS, MAX_ROWS)
        self._border_width = check_range(
            "border width", border_width, MIN_BORDER_WIDTH, MAX_BORDER_WIDTH
        )
        self.border_color = border_color
        self.overlay_enabled = bool(overlay_enabled)

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int):
        self._columns = check_range("columns", value, MIN_COLUMNS, MAX_COLUMNS)

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, value: int):
        self._rows = check_range("rows", value, MIN_ROWS, MAX_ROWS)

    @property
    def border_width(self) -> int:
        return self._border_width

    @border_width.setter
    def border_width(self, value: int):
        self._border_width = check_range(
            "border width", value, MIN_BORDER_WIDTH, MAX_BORDER_WIDTH
        )

    @property
    def border_color(self) -> str:
        return self._border_color

    @border_color.setter
    def border_color(self, value: str):
        if not isinstance(value, str) or not _COLOR_RE.match(value):
            raise ValueError(f"Invalid border color: {value!r}. Expected #RGB, #RRGGBB or #RRGGBBAA")
        self._border_color = value

    @property
    def overlay_active(self) -> bool:
        """The logo overlay only renders on multi-row collages."""
        return self.overlay_enabled and self._rows > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": self._columns,
            "rows": self._rows,
            "borderWidth": self._border_width,
            "borderColor": self._border_color,
            "overlay": self.overlay_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollageSettings":
        return cls(
            columns=data.get("columns", DEFAULT_COLUMNS),
            rows=data.get("rows", DEFAULT_ROWS),
            border_width=data.get("borderWidth", DEFAULT_BORDER_WIDTH),
            border_color=data.get("borderColor", DEFAULT_BORDER_COLOR),
            overlay_enabled=data.get("overlay", False),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollageSettings):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"CollageSettings({self.to_dict()})"
