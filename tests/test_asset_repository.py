import asyncio
import uuid

import pytest

from asset_api.infrastructure.database.repositories import SqlAssetRepository
from asset_api.infrastructure.database.session import session_scope
from asset_api.modules.assets.models import (
    AssetCategory,
    AssetCreateInput,
    AssetFilters,
    AssetUpdateInput,
    Pagination,
)


async def _create(session_factory, owner_id="u1", **overrides):
    fields = AssetCreateInput(
        name=overrides.pop("name", "Logo"),
        category=overrides.pop("category", AssetCategory.IMAGE),
        **overrides,
    )
    async with session_scope(session_factory) as session:
        return await SqlAssetRepository(session).create(fields, owner_id=owner_id)


async def _collect(session_factory, owner_id, filters=None, pagination=None):
    async with session_scope(session_factory) as session:
        repository = SqlAssetRepository(session)
        return [
            asset
            async for asset in repository.find_by_owner(
                owner_id, filters or AssetFilters(), pagination or Pagination(limit=100)
            )
        ]


async def test_create_assigns_id_and_timestamps(session_factory):
    first = await _create(session_factory, description="mark", image_key="assets/u1/logo.png")
    second = await _create(session_factory)

    assert uuid.UUID(first.id)
    assert first.id != second.id
    assert first.owner_id == "u1"
    assert first.category is AssetCategory.IMAGE
    assert first.description == "mark"
    assert first.image_key == "assets/u1/logo.png"
    assert first.created_at == first.updated_at
    assert first.created_at.tzinfo is not None


async def test_find_by_id_round_trips(session_factory):
    created = await _create(session_factory)
    async with session_scope(session_factory) as session:
        found = await SqlAssetRepository(session).find_by_id(created.id)
        missing = await SqlAssetRepository(session).find_by_id(str(uuid.uuid4()))

    assert found == created
    assert missing is None


async def test_update_patches_only_present_fields(session_factory):
    created = await _create(session_factory, description="keep me", image_key="a/b.png")
    async with session_scope(session_factory) as session:
        updated = await SqlAssetRepository(session).update(
            created.id, AssetUpdateInput(name="New Logo")
        )

    assert updated.name == "New Logo"
    assert updated.description == "keep me"
    assert updated.image_key == "a/b.png"
    assert updated.category is AssetCategory.IMAGE
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.created_at


async def test_update_explicit_none_clears_nullable_fields(session_factory):
    created = await _create(session_factory, description="old", image_key="a/b.png")
    async with session_scope(session_factory) as session:
        updated = await SqlAssetRepository(session).update(
            created.id, AssetUpdateInput(description=None, image_key=None)
        )

    assert updated.description is None
    assert updated.image_key is None
    assert updated.name == "Logo"


async def test_update_with_foreign_owner_scope_touches_nothing(session_factory):
    created = await _create(session_factory, owner_id="u1")
    async with session_scope(session_factory) as session:
        result = await SqlAssetRepository(session).update(
            created.id, AssetUpdateInput(name="Hijacked"), owner_id="u2"
        )
    async with session_scope(session_factory) as session:
        stored = await SqlAssetRepository(session).find_by_id(created.id)

    assert result is None
    assert stored.name == "Logo"


async def test_update_missing_asset_returns_none(session_factory):
    async with session_scope(session_factory) as session:
        result = await SqlAssetRepository(session).update(
            str(uuid.uuid4()), AssetUpdateInput(name="Ghost")
        )
    assert result is None


async def test_delete_reports_whether_a_row_was_removed(session_factory):
    created = await _create(session_factory)
    async with session_scope(session_factory) as session:
        repository = SqlAssetRepository(session)
        assert await repository.delete(created.id, owner_id="u2") is False
        assert await repository.delete(created.id, owner_id="u1") is True
        assert await repository.delete(created.id, owner_id="u1") is False
        assert await repository.find_by_id(created.id) is None


async def test_find_by_owner_filters_orders_and_paginates(session_factory):
    older = await _create(session_factory, name="older", category=AssetCategory.DOCUMENT)
    middle = await _create(session_factory, name="middle")
    newest = await _create(session_factory, name="newest", category=AssetCategory.DOCUMENT)
    await _create(session_factory, owner_id="u2", name="foreign")

    everything = await _collect(session_factory, "u1")
    assert [asset.id for asset in everything] == [newest.id, middle.id, older.id]

    documents = await _collect(
        session_factory, "u1", filters=AssetFilters(category=AssetCategory.DOCUMENT)
    )
    assert [asset.name for asset in documents] == ["newest", "older"]

    second_page = await _collect(session_factory, "u1", pagination=Pagination(limit=1, offset=1))
    assert [asset.id for asset in second_page] == [middle.id]


async def test_find_by_owner_never_returns_foreign_rows(session_factory):
    for index in range(3):
        await _create(session_factory, owner_id="u1", name=f"a{index}")
        await _create(session_factory, owner_id="u2", name=f"b{index}")

    for owner in ("u1", "u2"):
        assets = await _collect(session_factory, owner)
        assert len(assets) == 3
        assert {asset.owner_id for asset in assets} == {owner}


async def test_concurrent_updates_to_different_fields_are_both_kept(session_factory):
    created = await _create(session_factory, description="old")

    async def patch(fields):
        async with session_scope(session_factory) as session:
            return await SqlAssetRepository(session).update(created.id, fields, owner_id="u1")

    await asyncio.gather(
        patch(AssetUpdateInput(name="Renamed")),
        patch(AssetUpdateInput(description="Described")),
    )

    async with session_scope(session_factory) as session:
        stored = await SqlAssetRepository(session).find_by_id(created.id)
    assert stored.name == "Renamed"
    assert stored.description == "Described"


async def test_failed_scope_rolls_back(session_factory):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory) as session:
            await SqlAssetRepository(session).create(
                AssetCreateInput(name="Doomed", category=AssetCategory.OTHER), owner_id="u1"
            )
            raise RuntimeError("boom")

    assert await _collect(session_factory, "u1") == []
