"""Error Hierarchy — status codes, categories, and the REST envelope."""

from users_api.core.errors import (
    ConfigurationError, ErrorCategory, ErrorSeverity, StoreConnectionError,
    StoreOperation, StoreOperationError, UserNotFoundError, UserValidationError,
)


def test_validation_error_is_400():
    err = UserValidationError("Name is required", field="name")
    assert err.http_status == 400
    assert err.field == "name"
    assert err.category is ErrorCategory.VALIDATION


def test_not_found_is_404_and_records_name():
    err = UserNotFoundError("Alice")
    assert err.http_status == 404
    assert err.message == "User not found"
    assert err.context.user_name == "Alice"


def test_store_operation_messages_are_generic():
    messages = {
        op: StoreOperationError(op, cause=RuntimeError("driver detail")).message
        for op in StoreOperation
    }
    assert messages[StoreOperation.FIND] == "Failed to fetch users"
    assert messages[StoreOperation.DECODE] == "Failed to decode users"
    assert messages[StoreOperation.INSERT] == "Failed to create user"
    assert messages[StoreOperation.UPDATE] == "Failed to update user"
    assert messages[StoreOperation.DELETE] == "Failed to delete user"
    assert all("driver detail" not in m for m in messages.values())


def test_store_operation_error_is_500_critical():
    err = StoreOperationError(StoreOperation.INSERT)
    assert err.http_status == 500
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.category is ErrorCategory.DATABASE


def test_timed_out_store_error_uses_timeout_category():
    err = StoreOperationError(StoreOperation.FIND, timed_out=True)
    assert err.category is ErrorCategory.TIMEOUT
    assert err.http_status == 500


def test_to_response_envelope():
    body = UserNotFoundError("Bob").to_response()
    assert set(body) == {"error"}
    assert body["error"]["code"] == "USER_NOT_FOUND"
    assert body["error"]["category"] == "resource_not_found"
    assert body["error"]["severity"] == "error"
    assert "timestamp" in body["error"]


def test_startup_errors_are_critical():
    assert ConfigurationError("missing").severity is ErrorSeverity.CRITICAL
    conn = StoreConnectionError("ping failed")
    assert conn.severity is ErrorSeverity.CRITICAL
    assert "ping failed" in conn.message
