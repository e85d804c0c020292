"""Base exceptions shared by the whole package."""

from __future__ import annotations


class AppError(Exception):
    """Root of every error the package raises."""


class StorageError(AppError):
    """The underlying key-value database failed."""