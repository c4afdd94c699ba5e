"""Ledger access: method catalogue, transports and pinned snapshots."""

from viewer.ledger.abi import ContractMethod
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.ledger.transport import BlockRef, LedgerTransport, Web3Transport

__all__ = [
    "BlockRef",
    "ContractMethod",
    "LedgerSnapshot",
    "LedgerTransport",
    "Web3Transport",
]
