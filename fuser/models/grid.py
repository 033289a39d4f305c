"""Grid model - rectangular rows of placement cells."""

from dataclasses import dataclass
from typing import Any, Iterator

from ..config import DEFAULT_COLUMNS, DEFAULT_ROWS, MAX_COLUMNS, MAX_ROWS, MIN_COLUMNS, MIN_ROWS
from ..errors import InvalidCollageData, InvalidDimension, OutOfBounds
from .asset import Asset
from .bounds import check_range


@dataclass(frozen=True)
class Cell:
    """One grid position. `index` is the column position within its row."""

    index: int
    asset: Asset | None = None

    @property
    def is_empty(self) -> bool:
        return self.asset is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "asset": self.asset.to_dict() if self.asset else None,
        }


def _empty_row(columns: int) -> list[Cell]:
    return [Cell(index=col) for col in range(columns)]


def _check_rows(count: int):
    check_range("row count", count, MIN_ROWS, MAX_ROWS)


def _check_columns(count: int):
    check_range("column count", count, MIN_COLUMNS, MAX_COLUMNS)


class Grid:
    """
    Ordered rows of cells, always rectangular.

    Resizing only appends empty cells or drops trailing ones, so every
    (row, col) still in bounds keeps its asset. Cell indices restart at 0
    on every row.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS):
        _check_rows(rows)
        _check_columns(columns)
        self._rows: list[list[Cell]] = [_empty_row(columns) for _ in range(rows)]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._rows[0])

    @property
    def rows(self) -> list[list[Cell]]:
        """Copy of the rows; cells are immutable."""
        return [list(row) for row in self._rows]

    @property
    def occupied_count(self) -> int:
        return sum(1 for _, _, cell in self.cells() if not cell.is_empty)

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for r, row in enumerate(self._rows):
            for c, cell in enumerate(row):
                yield r, c, cell

    def cell(self, row: int, col: int) -> Cell:
        self._check_position(row, col)
        return self._rows[row][col]

    def first_empty(self) -> tuple[int, int] | None:
        for r, c, cell in self.cells():
            if cell.is_empty:
                return r, c
        return None

    def resize_rows(self, count: int):
        _check_rows(count)
        difference = count - self.row_count
        if difference > 0:
            columns = self.column_count
            self._rows.extend(_empty_row(columns) for _ in range(difference))
        elif difference < 0:
            del self._rows[count:]

    def resize_columns(self, count: int):
        _check_columns(count)
        current = self.column_count
        for row in self._rows:
            if count > current:
                row.extend(Cell(index=col) for col in range(current, count))
            elif count < current:
                del row[count:]

    def place(self, row: int, col: int, asset: Asset):
        self._check_position(row, col)
        self._rows[row][col] = Cell(index=col, asset=asset)

    def clear(self, row: int, col: int):
        self._check_position(row, col)
        self._rows[row][col] = Cell(index=col)

    def serialize(self) -> list[list[dict[str, Any]]]:
        return [[cell.to_dict() for cell in row] for row in self._rows]

    @classmethod
    def deserialize(cls, data: list[list[dict[str, Any]]]) -> "Grid":
        """
        Rebuild a grid from serialized rows.

        Indices are recomputed from column positions, so records saved with
        stale indices still load.

        Raises:
            InvalidDimension: No rows, ragged rows or a shape out of range
            InvalidCollageData: Rows or cells that are not lists/objects, or an
                asset missing its image URL or id
        """
        if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
            raise InvalidCollageData("Grid data must be a list of rows")
        if not data:
            raise InvalidDimension("Grid data has no rows")
        _check_rows(len(data))
        columns = len(data[0])
        _check_columns(columns)
        if any(len(row) != columns for row in data):
            raise InvalidDimension("Grid data rows have unequal lengths")

        grid = cls(rows=len(data), columns=columns)
        for r, row in enumerate(data):
            for c, item in enumerate(row):
                if not isinstance(item, dict):
                    raise InvalidCollageData(f"Cell ({r}, {c}) is not an object: {item!r}")
                asset = item.get("asset")
                if not asset:
                    continue
                try:
                    grid._rows[r][c] = Cell(index=c, asset=Asset.from_dict(asset))
                except (KeyError, TypeError, ValueError) as e:
                    raise InvalidCollageData(f"Cell ({r}, {c}) has an invalid asset: {e!r}") from e
        return grid

    def _check_position(self, row: int, col: int):
        if not (0 <= row < self.row_count and 0 <= col < self.column_count):
            raise OutOfBounds(
                f"Cell ({row}, {col}) outside {self.row_count}x{self.column_count} grid"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"Grid({self.row_count}x{self.column_count}, occupied={self.occupied_count})"
