"""Integer range checks shared by the grid and the settings."""

from ..errors import InvalidDimension


def check_range(name: str, value: int, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidDimension(f"Invalid {name}: {value}. Valid: {low}-{high}")
    return value
