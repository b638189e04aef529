"""Domain service implementing the owner-scoped asset use cases."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from asset_api.infrastructure.database.repositories.asset_repository import SqlAssetRepository

from .exceptions import AssetNotFoundError, AssetValidationError
from .guard import ensure_owner, ownership_scope
from .models import (
    Asset,
    AssetCreateInput,
    AssetListQuery,
    AssetPage,
    AssetUpdateInput,
    CallerIdentity,
    Pagination,
)
from .repository import AssetRepository


def parse_asset_id(raw: Optional[str]) -> Optional[str]:
    """Normalise a path id; ``None`` means it cannot name any stored asset."""
    if raw is None or not str(raw).strip():
        raise AssetValidationError("Asset ID is required", "id")
    try:
        return str(uuid.UUID(str(raw).strip()))
    except ValueError:
        return None


class AssetService:
    """Each use case issues exactly one repository call."""

    def __init__(self, repository: AssetRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AssetService":
        return cls(SqlAssetRepository(session))

    async def create_asset(self, caller: CallerIdentity, payload: AssetCreateInput) -> Asset:
        return await self._repository.create(payload, owner_id=caller.owner_id)

    async def get_asset(self, caller: CallerIdentity, asset_id: Optional[str]) -> Asset:
        if asset_id is None:
            raise AssetNotFoundError(asset_id)
        asset = await self._repository.find_by_id(asset_id)
        return ensure_owner(caller, asset, asset_id)

    async def list_assets(self, caller: CallerIdentity, query: AssetListQuery) -> AssetPage:
        limit = query.pagination.limit
        # One extra row tells us whether another page exists.
        lookahead = Pagination(limit=limit + 1, offset=query.pagination.offset)
        assets = [
            asset
            async for asset in self._repository.find_by_owner(caller.owner_id, query.filters, lookahead)
        ]
        return AssetPage(
            assets=assets[:limit],
            limit=limit,
            offset=query.pagination.offset,
            has_more=len(assets) > limit,
        )

    async def update_asset(
        self,
        caller: CallerIdentity,
        asset_id: Optional[str],
        payload: AssetUpdateInput,
    ) -> Asset:
        if asset_id is None:
            raise AssetNotFoundError(asset_id)
        asset = await self._repository.update(
            asset_id, payload, owner_id=ownership_scope(caller)
        )
        return ensure_owner(caller, asset, asset_id)

    async def delete_asset(self, caller: CallerIdentity, asset_id: Optional[str]) -> bool:
        if asset_id is None:
            return False
        return await self._repository.delete(asset_id, owner_id=ownership_scope(caller))


__all__ = ["AssetService", "parse_asset_id"]
