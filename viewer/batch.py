"""All-or-nothing batch execution shared by every batch entry point."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from typing import Any, TypeVar

import structlog

from viewer.errors import BatchPartialFailure, ViewerError
from viewer.models.types import normalize_address

logger = structlog.get_logger()

T = TypeVar("T")


def normalize_entities(entities: Sequence[str]) -> list[str]:
    """Validate and normalize a list of entity addresses.

    Runs before any read so a malformed identifier fails the batch
    without touching the ledger.

    Raises:
        ValueError: If any identifier is not a valid address
    """
    return [normalize_address(entity, validate=True) for entity in entities]


def run_batch(
    operation: str,
    calls: Sequence[tuple[Any, ...]],
    read: Callable[..., T],
    *,
    block_number: int | None = None,
) -> list[T]:
    """Run `read(*call)` for every call, in input order.

    The first element of each call tuple is the entity it targets.
    Identical calls are read once and reported at every position.

    Returns:
        One result per call, in input order

    Raises:
        BatchPartialFailure: On the first failing call in input order;
            no partial list is ever returned
    """
    results: list[T] = []
    seen: dict[Hashable, T] = {}
    for index, call in enumerate(calls):
        if call not in seen:
            try:
                seen[call] = read(*call)
            except ViewerError as e:
                logger.warning(
                    "batch_aborted",
                    operation=operation,
                    index=index,
                    entity=call[0],
                    error_type=type(e).__name__,
                    error=str(e),
                    block_number=block_number,
                )
                raise BatchPartialFailure(index, call[0], e) from e
        results.append(seen[call])

    logger.info(
        "batch_completed",
        operation=operation,
        count=len(results),
        unique=len(seen),
        block_number=block_number,
    )
    return results
