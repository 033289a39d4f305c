"""Asset references placed into collage cells."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AssetVariant(Enum):
    MOTION = "motion"
    PROFILE = "profile"


@dataclass(frozen=True)
class Asset:
    """A placed asset: which image, which motion tag, which dino."""

    image_url: str
    asset_id: str
    motion_tag: str | None = None
    variant: AssetVariant = AssetVariant.MOTION

    def to_dict(self) -> dict[str, Any]:
        return {
            "imageURL": self.image_url,
            "motion": self.motion_tag,
            "mint": self.asset_id,
            "variant": self.variant.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Asset":
        return cls(
            image_url=data["imageURL"],
            asset_id=data["mint"],
            motion_tag=data.get("motion") or None,
            variant=AssetVariant(data.get("variant", AssetVariant.MOTION.value)),
        )


@dataclass(frozen=True)
class OwnedAsset:
    """An asset in the user's tray, with both image renderings."""

    asset_id: str
    motion_url: str
    profile_url: str
    motion_tag: str | None = None

    def image_url(self, variant: AssetVariant) -> str:
        if variant == AssetVariant.MOTION:
            return self.motion_url
        return self.profile_url
