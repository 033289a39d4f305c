"""Shared fixtures."""

import pytest

from fuser.models import Asset, OwnedAsset

from .fakes import make_asset


@pytest.fixture
def asset() -> Asset:
    return make_asset()


@pytest.fixture
def owned() -> OwnedAsset:
    return OwnedAsset(
        asset_id="mint-7",
        motion_url="https://cdn.example/mint-7.gif",
        profile_url="https://cdn.example/mint-7.png",
        motion_tag="dance",
    )


@pytest.fixture
def no_sleep(monkeypatch):
    """Record time.sleep calls in the HTTP client instead of sleeping."""
    calls = []
    monkeypatch.setattr("fuser.clients.fusion.time.sleep", calls.append)
    return calls
