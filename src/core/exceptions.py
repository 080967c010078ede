"""
Domain exceptions for the market history data-access layer.

A missing marker is reported as ``None`` by the stores, never as an exception.
"""

from typing import Any


class MarketHistoryError(Exception):
    """Base exception for all market history errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for structured output."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(MarketHistoryError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class DuplicateMarketItemError(StorageError):
    """A marker already exists for the world/item pair."""

    def __init__(self, world_id: int, item_id: int):
        super().__init__(
            f"Market item already exists: world={world_id} item={item_id}",
            code="DUPLICATE_MARKET_ITEM",
            details={"world_id": world_id, "item_id": item_id},
        )


# Validation Exceptions
class ValidationError(MarketHistoryError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )

