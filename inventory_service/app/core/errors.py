"""
Error taxonomy for the inventory core.

Routers map these to HTTP responses:
RecordValidationError -> 409 with the field errors.
CorruptRecord, EncodingError, StorageError -> 500.
A missing record is not an error; repository lookups return None.
"""
from __future__ import annotations


class InventoryError(Exception):
    """Base class for all inventory exceptions."""


class RecordValidationError(InventoryError):
    """Raised when caller input fails the field rules."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(", ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = dict(errors)


class NotFound(InventoryError):
    """Raised at the HTTP boundary when a record is absent."""


class CorruptRecord(InventoryError):
    """Raised when stored bytes do not decode into a server record."""


class EncodingError(InventoryError):
    """Raised when a server record cannot be serialized."""


class StorageError(InventoryError):
    """Raised when a store transaction fails."""


class BucketNotFound(StorageError):
    """Raised when a namespace bucket that is created at startup is missing."""
