"""Custom exceptions for the brinestore package."""

from __future__ import annotations


class BrineStoreError(Exception):
    """Base exception for all store errors."""


class StoreIOError(BrineStoreError):
    """Raised when reading or writing the database file fails.

    The underlying ``OSError`` is kept on ``os_error`` and as ``__cause__``.
    """

    def __init__(self, os_error: OSError) -> None:
        self.os_error = os_error
        super().__init__(str(os_error))


class SerializationError(BrineStoreError):
    """Raised when a value or a whole database cannot be encoded or decoded."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ListNotFoundError(BrineStoreError, KeyError):
    """Raised when a list-only operation targets a list that does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"List '{name}' doesn't exist")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"List '{self.name}' doesn't exist"
