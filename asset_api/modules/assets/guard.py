"""Ownership checks binding the caller identity to stored assets.

A denied check is always surfaced as "not found" so a non-owner cannot
confirm that an id exists.
"""

from __future__ import annotations

from enum import Enum

from .exceptions import AssetNotFoundError
from .models import Asset, CallerIdentity


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize(caller: CallerIdentity, stored_owner_id: str) -> Decision:
    if caller.owner_id and caller.owner_id == stored_owner_id:
        return Decision.ALLOW
    return Decision.DENY


def ownership_scope(caller: CallerIdentity) -> str:
    """Owner predicate bound into update and delete statements."""
    return caller.owner_id


def ensure_owner(caller: CallerIdentity, asset: Asset | None, asset_id: str) -> Asset:
    if asset is None or authorize(caller, asset.owner_id) is Decision.DENY:
        raise AssetNotFoundError(asset_id)
    return asset


__all__ = ["Decision", "authorize", "ownership_scope", "ensure_owner"]
