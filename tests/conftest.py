"""Shared fixtures: a throwaway SQLite database per test plus fake collaborators."""

from __future__ import annotations

import pytest

from asset_api.core.config import Settings
from asset_api.infrastructure.database.session import build_engine, build_session_factory, init_db
from asset_api.modules.assets.activity import ActivityEvent
from asset_api.modules.assets.handlers import AssetHandlers
from asset_api.modules.assets.models import CallerIdentity


class FakeObjectStore:
    def __init__(self) -> None:
        self.signed: list[str] = []

    def locator_for(self, image_key: str) -> str:
        self.signed.append(image_key)
        return f"https://objects.test/{image_key}?sig={len(self.signed)}"


class RecordingActivitySink:
    def __init__(self) -> None:
        self.events: list[ActivityEvent] = []

    async def record(self, event: ActivityEvent) -> None:
        self.events.append(event)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'assets.db'}"},
        security={"secret_key": "test-secret-key"},
    )


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def activity_sink() -> RecordingActivitySink:
    return RecordingActivitySink()


@pytest.fixture
def handlers(session_factory, object_store, activity_sink, settings) -> AssetHandlers:
    return AssetHandlers(
        session_factory,
        object_store=object_store,
        activity_sink=activity_sink,
        pagination=settings.pagination,
    )


@pytest.fixture
def alice() -> CallerIdentity:
    return CallerIdentity(owner_id="u1")


@pytest.fixture
def bob() -> CallerIdentity:
    return CallerIdentity(owner_id="u2")
