"""Domain models for assets."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Optional


class AssetCategory(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 5000
IMAGE_KEY_MAX_LENGTH = 500
OWNER_ID_MAX_LENGTH = 255


@dataclass(slots=True)
class Asset:
    id: str
    owner_id: str
    name: str
    category: AssetCategory
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    image_key: Optional[str] = None


@dataclass(slots=True, frozen=True)
class CallerIdentity:
    """Opaque identity of the authenticated caller."""

    owner_id: str


@dataclass(slots=True)
class AssetCreateInput:
    name: str
    category: AssetCategory
    description: Optional[str] = None
    image_key: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AssetUpdateInput:
    name: str | object = UNSET
    description: Optional[str] | object = UNSET
    category: AssetCategory | object = UNSET
    image_key: Optional[str] | object = UNSET

    def present_fields(self) -> dict[str, object]:
        """Only the fields explicitly supplied by the caller."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not UNSET
        }


@dataclass(slots=True)
class AssetFilters:
    category: Optional[AssetCategory] = None


@dataclass(slots=True)
class Pagination:
    limit: int
    offset: int = 0


@dataclass(slots=True)
class AssetPage:
    """A page of assets plus whether more rows follow it."""

    assets: list[Asset]
    limit: int
    offset: int
    has_more: bool

    @property
    def count(self) -> int:
        return len(self.assets)


@dataclass(slots=True)
class AssetListQuery:
    filters: AssetFilters
    pagination: Pagination
