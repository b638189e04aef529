"""Asset domain exports."""

from .exceptions import AssetError, AssetNotFoundError, AssetValidationError
from .models import Asset, AssetCategory, AssetCreateInput, AssetUpdateInput, CallerIdentity, UNSET

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetCreateInput",
    "AssetError",
    "AssetNotFoundError",
    "AssetUpdateInput",
    "AssetValidationError",
    "CallerIdentity",
    "UNSET",
]
