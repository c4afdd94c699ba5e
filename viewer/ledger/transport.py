"""Ledger read transports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

from viewer.errors import LedgerCallError, LedgerUnavailable

logger = structlog.get_logger()


@dataclass(frozen=True)
class BlockRef:
    """The ledger state a set of reads is pinned to."""

    number: int
    timestamp: int


class LedgerTransport(Protocol):
    """Protocol for ledger read transports.

    This allows swapping between a real RPC-backed transport and an
    in-memory ledger for testing.
    """

    def latest_block(self) -> BlockRef:
        """Return the most recent block the transport can read at."""
        ...

    def call(self, to: str, data: bytes, block_number: int) -> bytes:
        """Execute a read-only call against `to` at `block_number`.

        Args:
            to: Entity address
            data: ABI call data (selector + encoded arguments)
            block_number: Block whose state the call must observe

        Returns:
            Raw return data. Empty bytes when the entity has no code or
            no matching method.

        Raises:
            LedgerCallError: If the call reverted
            LedgerUnavailable: If the transport itself failed
        """
        ...


class Web3Transport:
    """Transport that issues eth_call requests through web3.

    Every call carries an explicit block number, so reads sharing a
    BlockRef observe one ledger state.
    """

    def __init__(self, rpc_url: str, timeout: float = 10.0) -> None:
        """Initialize transport with an HTTP RPC endpoint.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
            timeout: Per-request timeout in seconds
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3Transport. Install with: pip install web3"
            ) from e

        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

    def latest_block(self) -> BlockRef:
        from web3.exceptions import Web3Exception

        try:
            block = self.w3.eth.get_block("latest")
        except (Web3Exception, ValueError, OSError) as e:
            logger.warning("ledger_unavailable", method="eth_getBlockByNumber", error=str(e))
            raise LedgerUnavailable(str(e)) from e
        return BlockRef(number=int(block["number"]), timestamp=int(block["timestamp"]))

    def call(self, to: str, data: bytes, block_number: int) -> bytes:
        from web3 import Web3
        from web3.exceptions import ContractLogicError, Web3Exception

        try:
            result = self.w3.eth.call(
                {"to": Web3.to_checksum_address(to), "data": "0x" + data.hex()},
                block_identifier=block_number,
            )
        except ContractLogicError as e:
            logger.debug(
                "ledger_call_reverted",
                to=to,
                selector="0x" + data[:4].hex(),
                block_number=block_number,
                error=str(e),
            )
            raise LedgerCallError(to, "0x" + data[:4].hex(), str(e)) from e
        except (Web3Exception, ValueError, OSError) as e:
            # JSON-RPC error responses surface as ValueError, connection
            # failures as requests/OSError
            logger.warning(
                "ledger_unavailable",
                method="eth_call",
                to=to,
                block_number=block_number,
                error=str(e),
            )
            raise LedgerUnavailable(str(e), entity=to) from e
        return bytes(result)


__all__ = ["BlockRef", "LedgerTransport", "Web3Transport"]
