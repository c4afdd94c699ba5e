"""Point-in-time view over a ledger transport.

All reads of one query go through a single LedgerSnapshot, so they are
evaluated against the same block even though they are issued one by one.
"""

from __future__ import annotations

from typing import Any

import structlog
from eth_abi.exceptions import DecodingError

from viewer.errors import EntityReadError, LedgerCallError
from viewer.ledger.abi import ContractMethod
from viewer.ledger.transport import BlockRef, LedgerTransport
from viewer.models.types import normalize_address

logger = structlog.get_logger()


class LedgerSnapshot:
    """A ledger transport pinned to one block."""

    def __init__(self, transport: LedgerTransport, block: BlockRef) -> None:
        self.transport = transport
        self.block = block

    @classmethod
    def pin(cls, transport: LedgerTransport) -> LedgerSnapshot:
        """Pin a new snapshot to the transport's latest block."""
        block = transport.latest_block()
        logger.debug("snapshot_pinned", block_number=block.number, timestamp=block.timestamp)
        return cls(transport, block)

    @property
    def as_of(self) -> int:
        """Timestamp of the pinned block, shared by every read-time computation."""
        return self.block.timestamp

    def read(self, entity: str, method: ContractMethod, *args: Any) -> tuple[Any, ...]:
        """Call a view method and decode all of its outputs.

        Raises:
            EntityReadError: If the call reverts, returns nothing or
                returns data that does not decode as the method's outputs
        """
        entity = normalize_address(entity)
        try:
            data = self.transport.call(entity, method.encode_call(*args), self.block.number)
        except LedgerCallError as e:
            raise LedgerCallError(entity, method.signature, e.reason) from e

        if not data:
            raise EntityReadError(entity, method.signature, "empty result")

        try:
            return method.decode_result(data)
        except DecodingError as e:
            raise EntityReadError(entity, method.signature, f"undecodable result: {e}") from e

    def read_one(self, entity: str, method: ContractMethod, *args: Any) -> Any:
        """Call a single-output view method and return its value."""
        (value,) = self.read(entity, method, *args)
        return value

    def probe(self, entity: str, method: ContractMethod, *args: Any) -> bool:
        """True if the entity answers the method with well-formed data.

        Transport failures are not answers and propagate as LedgerUnavailable.
        """
        try:
            self.read(entity, method, *args)
        except EntityReadError:
            return False
        return True
