"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, Index, String, Text

from asset_api.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(20), nullable=False, index=True)
    image_key = Column(String(500))
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_assets_owner_created", "owner_id", "created_at"),)
