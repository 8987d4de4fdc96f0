"""
Error values returned by record providers.

Providers return these instead of raising so callers can branch on the type
of failure. Upstream failures from the ledger collaborator are returned as
they are, so they are not part of this hierarchy.
"""

from typing import Optional


class RecordProviderError(Exception):
    """Base exception for record provider failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class RecordNotFoundError(RecordProviderError):
    """No record satisfies the requested amount or constraints."""

    def __init__(self, message: str = "Record not found", cause: Optional[BaseException] = None):
        super().__init__(message, cause)


class UnsupportedOperationError(RecordProviderError, NotImplementedError):
    """The provider has no implementation of the requested search."""


class HeightResolutionError(RecordProviderError):
    """The search height window could not be resolved."""


def is_error(result) -> bool:
    return isinstance(result, BaseException)


def raise_for_result(result):
    """Return result unchanged, or raise it if it is an error value."""
    if isinstance(result, BaseException):
        raise result
    return result
