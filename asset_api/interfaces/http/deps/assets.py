"""Asset related dependency providers."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from asset_api.modules.assets.exceptions import AssetValidationError
from asset_api.modules.assets.handlers import AssetHandlers


def get_asset_handlers(request: Request) -> AssetHandlers:
    return request.app.state.asset_handlers


async def read_json_body(request: Request) -> Any:
    """Decode the raw JSON body without imposing a schema on it."""
    raw = await request.body()
    if not raw.strip():
        raise AssetValidationError("Request body is required")
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise AssetValidationError("Invalid JSON in request body") from None


__all__ = [
    "get_asset_handlers",
    "read_json_body",
]
