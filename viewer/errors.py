"""Viewer error classes.

Every failure aborts the whole query; nothing here is retried.
"""

from __future__ import annotations


class ViewerError(Exception):
    """Base error for viewer operations."""

    pass


class EntityReadError(ViewerError):
    """A read against a ledger entity reverted or returned undecodable data."""

    def __init__(self, entity: str, method: str, reason: str) -> None:
        self.entity = entity
        self.method = method
        self.reason = reason
        super().__init__(f"{method} on {entity} failed: {reason}")


class LedgerCallError(EntityReadError):
    """The ledger transport reported a revert for a call."""

    pass


class LedgerUnavailable(ViewerError):
    """The ledger transport failed for a reason other than a revert."""

    def __init__(self, reason: str, entity: str | None = None) -> None:
        self.reason = reason
        self.entity = entity
        target = f" calling {entity}" if entity else ""
        super().__init__(f"ledger unavailable{target}: {reason}")


class UnrecognizedEntity(ViewerError):
    """Identifier does not satisfy any known basket schema probe."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} is not a recognized basket")


class UnsupportedOperation(ViewerError):
    """Basket is recognized but its version lacks the requested feature."""

    def __init__(self, entity: str, operation: str, version: str) -> None:
        self.entity = entity
        self.operation = operation
        self.version = version
        super().__init__(f"{operation} is not supported by {version} basket {entity}")


class InvalidCollateralSet(ViewerError):
    """A basket's referenced collateral set cannot be read."""

    def __init__(self, entity: str, reason: str) -> None:
        self.entity = entity
        self.reason = reason
        super().__init__(f"{entity} is not a readable collateral set: {reason}")


class BatchPartialFailure(ViewerError):
    """One entity in a batch failed, so the whole batch failed.

    Carries the first failure in input order as `cause`.
    """

    def __init__(self, index: int, entity: str, cause: ViewerError) -> None:
        self.index = index
        self.entity = entity
        self.cause = cause
        super().__init__(f"batch aborted at index {index} ({entity}): {cause}")
