"""Binary object store adapters."""

from .object_store import NullObjectStore, ObjectStore, S3ObjectStore, build_object_store

__all__ = ["ObjectStore", "NullObjectStore", "S3ObjectStore", "build_object_store"]
