"""Transport-agnostic request handlers for the asset API.

Every handler runs Parse -> Validate -> Guard -> Execute -> Format and stops
at the first failing stage. A pooled session is borrowed for the execute
stage only and is returned on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from asset_api.core.config import PaginationSettings
from asset_api.core.errors import ErrorOutcome, map_exception
from asset_api.infrastructure.database.session import session_scope
from asset_api.infrastructure.storage import NullObjectStore, ObjectStore
from asset_api.schemas import AssetListResponse, AssetResponse, PaginationInfo

from .activity import (
    ASSET_CREATED,
    ASSET_DELETED,
    ASSET_UPDATED,
    ActivityEvent,
    ActivitySink,
    LoggingActivitySink,
    notify,
)
from .models import Asset, AssetPage, CallerIdentity
from .service import AssetService, parse_asset_id
from .validation import validate_create, validate_list_query, validate_update

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Outcome:
    status_code: int
    data: Any = None
    error: Optional[ErrorOutcome] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: ErrorOutcome) -> "Outcome":
        return cls(status_code=error.status_code, error=error)

    def body(self) -> Optional[dict[str, Any]]:
        if self.error is not None:
            return {"success": False, "error": self.error.to_dict()}
        if self.data is None:
            return None
        return {"success": True, "data": self.data.model_dump(by_alias=True, mode="json")}


class AssetHandlers:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        object_store: ObjectStore | None = None,
        activity_sink: ActivitySink | None = None,
        pagination: PaginationSettings | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._object_store = object_store or NullObjectStore()
        self._activity_sink = activity_sink or LoggingActivitySink()
        self._pagination = pagination or PaginationSettings()

    async def create(self, caller: CallerIdentity, raw: Any) -> Outcome:
        try:
            payload = validate_create(raw, owner_id=caller.owner_id)
            async with session_scope(self._session_factory) as session:
                asset = await AssetService.with_session(session).create_asset(caller, payload)
            data = self._format(asset)
        except Exception as exc:
            return self._failure("create asset", exc)

        logger.info("Asset created: %s", asset.id)
        await notify(self._activity_sink, ActivityEvent(ASSET_CREATED, asset.id, asset.owner_id))
        return Outcome(status_code=201, data=data)

    async def get(self, caller: CallerIdentity, raw_id: Optional[str]) -> Outcome:
        try:
            asset_id = parse_asset_id(raw_id)
            async with session_scope(self._session_factory) as session:
                asset = await AssetService.with_session(session).get_asset(caller, asset_id)
            data = self._format(asset)
        except Exception as exc:
            return self._failure("retrieve asset", exc)
        return Outcome(status_code=200, data=data)

    async def list(self, caller: CallerIdentity, raw_query: Mapping[str, Any]) -> Outcome:
        try:
            query = validate_list_query(
                raw_query,
                default_limit=self._pagination.default_limit,
                max_limit=self._pagination.max_limit,
            )
            async with session_scope(self._session_factory) as session:
                page = await AssetService.with_session(session).list_assets(caller, query)
            data = self._format_page(page)
        except Exception as exc:
            return self._failure("list assets", exc)

        logger.debug("Listed %d assets for owner %s", page.count, caller.owner_id)
        return Outcome(status_code=200, data=data)

    async def update(self, caller: CallerIdentity, raw_id: Optional[str], raw: Any) -> Outcome:
        try:
            asset_id = parse_asset_id(raw_id)
            payload = validate_update(raw)
            async with session_scope(self._session_factory) as session:
                asset = await AssetService.with_session(session).update_asset(
                    caller, asset_id, payload
                )
            data = self._format(asset)
        except Exception as exc:
            return self._failure("update asset", exc)

        logger.info("Asset updated: %s", asset.id)
        await notify(
            self._activity_sink,
            ActivityEvent(
                ASSET_UPDATED,
                asset.id,
                asset.owner_id,
                changed_fields=tuple(payload.present_fields()),
            ),
        )
        return Outcome(status_code=200, data=data)

    async def delete(self, caller: CallerIdentity, raw_id: Optional[str]) -> Outcome:
        try:
            asset_id = parse_asset_id(raw_id)
            async with session_scope(self._session_factory) as session:
                deleted = await AssetService.with_session(session).delete_asset(caller, asset_id)
        except Exception as exc:
            return self._failure("delete asset", exc)

        # Missing, malformed and foreign ids all produce the same result.
        if deleted:
            logger.info("Asset deleted: %s", asset_id)
            await notify(
                self._activity_sink, ActivityEvent(ASSET_DELETED, asset_id, caller.owner_id)
            )
        return Outcome(status_code=204)

    def _locator_for(self, asset: Asset) -> Optional[str]:
        if not asset.image_key:
            return None
        try:
            return self._object_store.locator_for(asset.image_key)
        except Exception as exc:
            # The write is already committed; report it without a locator.
            logger.warning("Failed to sign image locator for asset %s: %s", asset.id, exc)
            return None

    def _format(self, asset: Asset) -> AssetResponse:
        image_url = self._locator_for(asset)
        return AssetResponse(
            id=asset.id,
            owner_id=asset.owner_id,
            name=asset.name,
            description=asset.description,
            category=asset.category.value,
            image_key=asset.image_key,
            image_url=image_url,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
        )

    def _format_page(self, page: AssetPage) -> AssetListResponse:
        return AssetListResponse(
            assets=[self._format(asset) for asset in page.assets],
            pagination=PaginationInfo(
                limit=page.limit,
                offset=page.offset,
                count=page.count,
                has_more=page.has_more,
            ),
        )

    @staticmethod
    def _failure(operation: str, exc: Exception) -> Outcome:
        error = map_exception(exc, operation=operation)
        logger.debug("%s failed: %s (%s)", operation, error.kind.value, error.message)
        return Outcome.failure(error)


__all__ = ["AssetHandlers", "Outcome"]
