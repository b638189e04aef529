"""Uniform error outcomes shared by every asset operation.

Exception mapping:
    AssetValidationError            -> ValidationError (400)
    AssetNotFoundError              -> NotFound (404)
    IntegrityError                  -> ValidationError (400), constraint violation
    OperationalError, InterfaceError,
    DisconnectionError, TimeoutError -> PersistenceError (503, retryable)
    other SQLAlchemyError           -> PersistenceError (500)
    anything else                   -> Unexpected (500), logged with traceback
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy import exc as sa_exc

from asset_api.modules.assets.exceptions import AssetNotFoundError, AssetValidationError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFound"
    PERSISTENCE = "PersistenceError"
    UNEXPECTED = "Unexpected"
    UNAUTHORIZED = "Unauthorized"


@dataclass(slots=True, frozen=True)
class ErrorOutcome:
    kind: ErrorKind
    message: str
    field: Optional[str] = None
    retryable: bool = False

    @property
    def status_code(self) -> int:
        if self.kind is ErrorKind.VALIDATION:
            return 400
        if self.kind is ErrorKind.UNAUTHORIZED:
            return 401
        if self.kind is ErrorKind.NOT_FOUND:
            return 404
        if self.kind is ErrorKind.PERSISTENCE and self.retryable:
            return 503
        return 500

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["kind"] = self.kind.value
        return payload


_RETRYABLE_DB_ERRORS = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
)


def map_exception(exc: Exception, *, operation: str = "process request") -> ErrorOutcome:
    if isinstance(exc, AssetValidationError):
        return ErrorOutcome(ErrorKind.VALIDATION, exc.reason, exc.field)

    if isinstance(exc, AssetNotFoundError):
        return ErrorOutcome(ErrorKind.NOT_FOUND, "Asset not found")

    if isinstance(exc, sa_exc.IntegrityError):
        logger.warning("Constraint violation during %s: %s", operation, exc.orig)
        return ErrorOutcome(ErrorKind.VALIDATION, "Request violates a data constraint")

    if isinstance(exc, _RETRYABLE_DB_ERRORS):
        logger.error("Database unavailable during %s: %s", operation, exc)
        return ErrorOutcome(
            ErrorKind.PERSISTENCE, "Database temporarily unavailable", retryable=True
        )

    if isinstance(exc, sa_exc.SQLAlchemyError):
        logger.error("Database error during %s: %s", operation, exc)
        return ErrorOutcome(ErrorKind.PERSISTENCE, "Database error occurred")

    logger.exception("Unexpected error during %s", operation, exc_info=exc)
    return ErrorOutcome(ErrorKind.UNEXPECTED, f"Failed to {operation}")


__all__ = ["ErrorKind", "ErrorOutcome", "map_exception"]
