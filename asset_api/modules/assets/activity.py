"""Activity notifications sent to the append-only event store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)

ASSET_CREATED = "asset.created"
ASSET_UPDATED = "asset.updated"
ASSET_DELETED = "asset.deleted"


@dataclass(slots=True, frozen=True)
class ActivityEvent:
    action: str
    asset_id: str
    owner_id: str
    changed_fields: tuple[str, ...] = ()
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ActivitySink(Protocol):
    async def record(self, event: ActivityEvent) -> None:
        ...


class LoggingActivitySink:
    """Default sink writing activity records to the application log."""

    async def record(self, event: ActivityEvent) -> None:
        logger.info(
            "%s asset=%s owner=%s fields=%s",
            event.action,
            event.asset_id,
            event.owner_id,
            ",".join(event.changed_fields) or "-",
        )


async def notify(sink: ActivitySink, event: ActivityEvent) -> None:
    """Deliver an event; sink failures never affect the request outcome."""
    try:
        await sink.record(event)
    except Exception as exc:
        logger.warning("Failed to record %s for asset %s: %s", event.action, event.asset_id, exc)


__all__ = [
    "ASSET_CREATED",
    "ASSET_UPDATED",
    "ASSET_DELETED",
    "ActivityEvent",
    "ActivitySink",
    "LoggingActivitySink",
    "notify",
]
