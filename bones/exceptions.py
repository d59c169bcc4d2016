"""Exceptions raised by the domain model and the data-access layer."""

from __future__ import annotations


class BonesError(Exception):
    """Base exception for ordering errors."""

    pass


class DataAccessError(BonesError):
    """Raised when reading or writing the relational store fails.

    The failed transaction has always been rolled back before this is raised.
    The underlying driver error is kept as ``__cause__``.
    """

    def __init__(self, message: str, entity: str | None = None, key: object = None):
        self.entity = entity
        self.key = key
        super().__init__(message)


class OrderClosedError(BonesError):
    """Raised when a persisted or closed order is structurally modified."""

    def __init__(self, message: str = "Order no longer accepts changes"):
        super().__init__(message)
