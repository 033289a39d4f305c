"""Tests for the saved collage record."""

import pytest

from fuser.errors import InvalidCollageData, InvalidDimension
from fuser.models import CollageSettings, Grid, SavedCollage

from .fakes import make_asset


def make_collage(hidden: bool = False) -> SavedCollage:
    grid = Grid(rows=2, columns=3)
    grid.place(0, 1, make_asset("mint-3"))
    return SavedCollage(
        id="c-1",
        owner_id="user-1",
        settings=CollageSettings(columns=3, rows=2, border_width=4, border_color="#ffcc00"),
        grid=grid,
        hidden=hidden,
    )


class TestSavedCollage:
    def test_record_keys(self):
        record = make_collage().to_record()
        assert record["id"] == "c-1"
        assert record["userId"] == "user-1"
        assert (record["rows"], record["columns"]) == (2, 3)
        assert record["borderWidth"] == 4
        assert record["borderColor"] == "#ffcc00"
        assert record["overlay"] is False
        assert record["hidden"] is False
        assert record["data"][0][1]["asset"]["mint"] == "mint-3"

    def test_record_round_trip(self):
        collage = make_collage(hidden=True)
        restored = SavedCollage.from_record(collage.to_record())
        assert restored.grid == collage.grid
        assert restored.settings == collage.settings
        assert restored.hidden is True

    def test_dimension_mismatch_rejected(self):
        record = make_collage().to_record()
        record["columns"] = 4
        with pytest.raises(InvalidDimension):
            SavedCollage.from_record(record)

    @pytest.mark.parametrize("key", ["id", "userId", "data"])
    def test_missing_field_is_invalid_data(self, key):
        record = make_collage().to_record()
        del record[key]
        with pytest.raises(InvalidCollageData) as exc_info:
            SavedCollage.from_record(record)
        assert key in str(exc_info.value)

    def test_broken_asset_is_invalid_data(self):
        record = make_collage().to_record()
        del record["data"][0][1]["asset"]["mint"]
        with pytest.raises(InvalidCollageData):
            SavedCollage.from_record(record)

    def test_visibility_toggle(self):
        collage = make_collage()
        assert collage.is_visible_to(viewer_is_owner=False)

        collage.set_hidden(True)
        assert not collage.is_visible_to(viewer_is_owner=False)
        assert collage.is_visible_to(viewer_is_owner=True)
        assert collage.to_record()["hidden"] is True
