"""Validation pipeline turning raw request payloads into typed asset inputs.

Checks run in a fixed order and stop at the first violation:

1. required-field presence (create)
2. name length / non-empty
3. description length
4. category membership
5. imageKey well-formedness
6. ownerId presence (update rejects it outright, create requires it to match
   the caller)

In update mode the ownerId rejection runs before anything else so a payload
carrying ``ownerId`` is refused regardless of its other fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from .exceptions import AssetValidationError
from .models import (
    DESCRIPTION_MAX_LENGTH,
    IMAGE_KEY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    AssetCategory,
    AssetCreateInput,
    AssetFilters,
    AssetListQuery,
    AssetUpdateInput,
    Pagination,
)

UPDATABLE_FIELDS = ("name", "description", "category", "imageKey")

class ValidationMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


def validate(
    raw: Any,
    mode: ValidationMode | str,
    *,
    owner_id: Optional[str] = None,
) -> AssetCreateInput | AssetUpdateInput:
    mode = ValidationMode(mode)
    if mode is ValidationMode.CREATE:
        return validate_create(raw, owner_id=owner_id)
    return validate_update(raw)


def validate_create(raw: Any, *, owner_id: Optional[str] = None) -> AssetCreateInput:
    body = _require_mapping(raw)

    for field in ("name", "category"):
        if _is_blank(body.get(field)):
            raise AssetValidationError(f"{field} is required", field)

    name = _check_name(body["name"])
    description = _check_description(body["description"]) if "description" in body else None
    category = _check_category(body["category"])
    image_key = _check_image_key(body["imageKey"]) if "imageKey" in body else None

    if "ownerId" in body and owner_id is not None:
        supplied = body["ownerId"]
        if not isinstance(supplied, str) or supplied.strip() != owner_id:
            raise AssetValidationError("ownerId must match the authenticated caller", "ownerId")

    return AssetCreateInput(
        name=name,
        category=category,
        description=description,
        image_key=image_key,
    )


def validate_update(raw: Any) -> AssetUpdateInput:
    body = _require_mapping(raw)

    if "ownerId" in body:
        raise AssetValidationError("ownerId cannot be changed", "ownerId")

    if not any(field in body for field in UPDATABLE_FIELDS):
        raise AssetValidationError("No fields to update")

    payload = AssetUpdateInput()
    if "name" in body:
        if body["name"] is None:
            raise AssetValidationError("name cannot be empty", "name")
        payload.name = _check_name(body["name"])
    if "description" in body:
        payload.description = _check_description(body["description"])
    if "category" in body:
        if _is_blank(body["category"]):
            raise AssetValidationError("category cannot be empty", "category")
        payload.category = _check_category(body["category"])
    if "imageKey" in body:
        payload.image_key = _check_image_key(body["imageKey"])
    return payload


def validate_list_query(
    raw: Mapping[str, Any],
    *,
    default_limit: int,
    max_limit: int,
) -> AssetListQuery:
    category_raw = raw.get("category")
    category = None if _is_blank(category_raw) else _check_category(category_raw)

    limit = _check_int(raw.get("limit"), "limit", default=default_limit, minimum=1)
    offset = _check_int(raw.get("offset"), "offset", default=0, minimum=0)

    return AssetListQuery(
        filters=AssetFilters(category=category),
        pagination=Pagination(limit=min(limit, max_limit), offset=offset),
    )


def _require_mapping(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise AssetValidationError("Request body must be a JSON object")
    return raw


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_name(value: Any) -> str:
    if not isinstance(value, str):
        raise AssetValidationError("name must be a string", "name")
    name = value.strip()
    if not name:
        raise AssetValidationError("name cannot be empty", "name")
    if len(name) > NAME_MAX_LENGTH:
        raise AssetValidationError(f"name must not exceed {NAME_MAX_LENGTH} characters", "name")
    return name


def _check_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise AssetValidationError("description must be a string", "description")
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise AssetValidationError(
            f"description must not exceed {DESCRIPTION_MAX_LENGTH} characters", "description"
        )
    return description or None


def _check_category(value: Any) -> AssetCategory:
    if not isinstance(value, str):
        raise AssetValidationError("category must be a string", "category")
    try:
        return AssetCategory(value.strip().lower())
    except ValueError:
        raise AssetValidationError(
            f"Invalid category. Must be one of: {', '.join(AssetCategory.values())}",
            "category",
        ) from None


def _check_image_key(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise AssetValidationError("imageKey must be a string", "imageKey")
    key = value.strip()
    if not key:
        return None
    if len(key) > IMAGE_KEY_MAX_LENGTH:
        raise AssetValidationError(
            f"imageKey must not exceed {IMAGE_KEY_MAX_LENGTH} characters", "imageKey"
        )
    if key.startswith("/") or any(segment in ("", "..") for segment in key.split("/")):
        raise AssetValidationError("imageKey is not a valid object key", "imageKey")
    return key


def _check_int(value: Any, field: str, *, default: int, minimum: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise AssetValidationError(f"{field} must be an integer", field)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise AssetValidationError(f"{field} must be an integer", field) from None
    if number < minimum:
        raise AssetValidationError(f"{field} must be at least {minimum}", field)
    return number


__all__ = [
    "UPDATABLE_FIELDS",
    "ValidationMode",
    "validate",
    "validate_create",
    "validate_update",
    "validate_list_query",
]
