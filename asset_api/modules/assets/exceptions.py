"""Asset domain specific exceptions."""

from typing import Optional


class AssetError(Exception):
    """Base class for asset domain errors."""


class AssetValidationError(AssetError):
    """Raised when input is malformed, out of bounds or forbidden."""

    def __init__(self, reason: str, field: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field


class AssetNotFoundError(AssetError):
    """Raised when the asset is absent or not owned by the caller."""

    def __init__(self, asset_id: Optional[str] = None) -> None:
        super().__init__("Asset not found")
        self.asset_id = asset_id
