"""Reusable FastAPI dependencies."""

from .assets import get_asset_handlers, read_json_body

__all__ = [
    "get_asset_handlers",
    "read_json_body",
]
