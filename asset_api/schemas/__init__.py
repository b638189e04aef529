"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    description: Optional[str] = None
    category: str
    image_key: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PaginationInfo(CamelModel):
    limit: int
    offset: int
    count: int
    has_more: bool


class AssetListResponse(CamelModel):
    assets: list[AssetResponse] = Field(default_factory=list)
    pagination: PaginationInfo


class ErrorDetail(BaseModel):
    kind: str
    message: str
    field: Optional[str] = None
    retryable: bool = False


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class TokenData(BaseModel):
    owner_id: str
