"""Custom exceptions for the flow_redis package.

Transport failures are not wrapped: ``redis.exceptions.RedisError`` and its
subclasses reach the caller unchanged.
"""

from __future__ import annotations


class FlowRedisError(Exception):
    """Base exception for all flow_redis errors."""


class NotInitializedError(FlowRedisError):
    """Raised when an operation runs before the store client is connected."""

    def __init__(self, message: str = "The Redis store client has not been initialized.") -> None:
        super().__init__(message)


class MalformedRecordError(FlowRedisError):
    """Raised when a stored record cannot be parsed into its model."""

    def __init__(self, collection: str, record_id: str, detail: str = "") -> None:
        self.collection = collection
        self.record_id = record_id
        msg = f"Malformed record '{record_id}' in collection '{collection}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class InvalidArgumentError(FlowRedisError):
    """Raised when an operation receives an argument it cannot honour."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Invalid argument for '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
