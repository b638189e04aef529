"""Repository protocol for asset persistence."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Optional, Protocol

from .models import Asset, AssetCreateInput, AssetFilters, AssetUpdateInput, Pagination


class AssetRepository(Protocol):
    """Abstract repository interface; every method is a single statement."""

    async def create(self, fields: AssetCreateInput, *, owner_id: str) -> Asset:
        ...

    async def find_by_id(self, asset_id: str) -> Asset | None:
        ...

    def find_by_owner(
        self,
        owner_id: str,
        filters: AssetFilters,
        pagination: Pagination,
    ) -> AsyncIterator[Asset]:
        ...

    async def update(
        self,
        asset_id: str,
        fields: AssetUpdateInput,
        *,
        owner_id: Optional[str] = None,
    ) -> Asset | None:
        ...

    async def delete(self, asset_id: str, *, owner_id: Optional[str] = None) -> bool:
        ...
