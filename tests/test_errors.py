import logging

import pytest
from sqlalchemy import exc as sa_exc

from asset_api.core.errors import ErrorKind, ErrorOutcome, map_exception
from asset_api.modules.assets.exceptions import AssetNotFoundError, AssetValidationError


def test_validation_error_keeps_field_and_reason():
    outcome = map_exception(AssetValidationError("name is required", "name"))
    assert outcome == ErrorOutcome(ErrorKind.VALIDATION, "name is required", "name", False)
    assert outcome.status_code == 400


def test_not_found_has_fixed_message():
    outcome = map_exception(AssetNotFoundError("abc"))
    assert outcome.kind is ErrorKind.NOT_FOUND
    assert outcome.message == "Asset not found"
    assert outcome.field is None
    assert outcome.status_code == 404


def test_constraint_violation_becomes_validation_error():
    error = sa_exc.IntegrityError("INSERT INTO assets ...", {}, Exception("NOT NULL constraint failed"))
    outcome = map_exception(error, operation="create asset")
    assert outcome.kind is ErrorKind.VALIDATION
    assert outcome.retryable is False
    assert "INSERT" not in outcome.message


@pytest.mark.parametrize(
    "error",
    [
        sa_exc.OperationalError("SELECT 1", {}, Exception("database is locked")),
        sa_exc.InterfaceError("SELECT 1", {}, Exception("connection closed")),
        sa_exc.DisconnectionError("gone"),
        sa_exc.TimeoutError("QueuePool limit reached"),
    ],
)
def test_connectivity_failures_are_retryable(error):
    outcome = map_exception(error)
    assert outcome.kind is ErrorKind.PERSISTENCE
    assert outcome.retryable is True
    assert outcome.status_code == 503


def test_other_database_errors_are_not_retryable():
    outcome = map_exception(sa_exc.ProgrammingError("SELECT nope", {}, Exception("syntax")))
    assert outcome.kind is ErrorKind.PERSISTENCE
    assert outcome.retryable is False
    assert outcome.status_code == 500
    assert "SELECT" not in outcome.message


def test_unexpected_errors_are_logged_and_hidden(caplog):
    with caplog.at_level(logging.ERROR, logger="asset_api.core.errors"):
        outcome = map_exception(RuntimeError("secret internal id 42"), operation="update asset")
    assert outcome.kind is ErrorKind.UNEXPECTED
    assert outcome.message == "Failed to update asset"
    assert "42" not in outcome.message
    assert outcome.status_code == 500
    assert any(record.exc_info for record in caplog.records)


def test_to_dict_shape():
    payload = ErrorOutcome(ErrorKind.VALIDATION, "bad", "name").to_dict()
    assert payload == {"kind": "ValidationError", "message": "bad", "field": "name", "retryable": False}
