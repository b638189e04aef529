"""Infrastructure adapters (database, object storage)."""
