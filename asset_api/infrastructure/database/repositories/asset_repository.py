"""SQLAlchemy implementation of the asset repository."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from asset_api.infrastructure.database.models import Asset as AssetModel, generate_uuid
from asset_api.modules.assets.models import (
    Asset,
    AssetCategory,
    AssetCreateInput,
    AssetFilters,
    AssetUpdateInput,
    Pagination,
)
from asset_api.modules.assets.repository import AssetRepository

assets_table = AssetModel.__table__

# Domain field name -> column name for patchable fields.
_PATCHABLE_COLUMNS = {
    "name": "name",
    "description": "description",
    "category": "category",
    "image_key": "image_key",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAssetRepository(AssetRepository):
    """Asset repository backed by SQLAlchemy core statements."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, fields: AssetCreateInput, *, owner_id: str) -> Asset:
        now = utcnow()
        stmt = (
            insert(assets_table)
            .values(
                id=generate_uuid(),
                owner_id=owner_id,
                name=fields.name,
                description=fields.description,
                category=fields.category.value,
                image_key=fields.image_key,
                created_at=now,
                updated_at=now,
            )
            .returning(*assets_table.c)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.mappings().one())

    async def find_by_id(self, asset_id: str) -> Asset | None:
        stmt = select(assets_table).where(assets_table.c.id == asset_id)
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row else None

    async def find_by_owner(
        self,
        owner_id: str,
        filters: AssetFilters,
        pagination: Pagination,
    ) -> AsyncIterator[Asset]:
        stmt = select(assets_table).where(assets_table.c.owner_id == owner_id)
        if filters.category is not None:
            stmt = stmt.where(assets_table.c.category == filters.category.value)
        stmt = (
            stmt.order_by(assets_table.c.created_at.desc(), assets_table.c.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        result = await self._session.stream(stmt)
        async for row in result.mappings():
            yield self._to_domain(row)

    async def update(
        self,
        asset_id: str,
        fields: AssetUpdateInput,
        *,
        owner_id: Optional[str] = None,
    ) -> Asset | None:
        values: dict[str, Any] = {}
        for field, value in fields.present_fields().items():
            if isinstance(value, AssetCategory):
                value = value.value
            values[_PATCHABLE_COLUMNS[field]] = value
        values["updated_at"] = utcnow()

        stmt = update(assets_table).where(assets_table.c.id == asset_id)
        if owner_id is not None:
            stmt = stmt.where(assets_table.c.owner_id == owner_id)
        stmt = stmt.values(**values).returning(*assets_table.c)

        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        return self._to_domain(row) if row else None

    async def delete(self, asset_id: str, *, owner_id: Optional[str] = None) -> bool:
        stmt = delete(assets_table).where(assets_table.c.id == asset_id)
        if owner_id is not None:
            stmt = stmt.where(assets_table.c.owner_id == owner_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    def _to_domain(row: Mapping[str, Any]) -> Asset:
        return Asset(
            id=str(row["id"]),
            owner_id=row["owner_id"],
            name=row["name"],
            category=AssetCategory(row["category"]),
            description=row["description"],
            image_key=row["image_key"],
            created_at=_as_utc(row["created_at"]),
            updated_at=_as_utc(row["updated_at"]),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
