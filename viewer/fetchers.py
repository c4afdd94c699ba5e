"""Homogeneous batch reads that need no version dispatch.

Tokens, cTokens, oracles and manager modules each answer one standard
view method. Every batch pins its own snapshot and follows the same
all-or-nothing policy as the basket composer.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from viewer.batch import normalize_entities, run_batch
from viewer.ledger import abi
from viewer.ledger.abi import ContractMethod
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.ledger.transport import LedgerTransport
from viewer.models.types import normalize_address


class ManagerKind(str, Enum):
    """Rebalancing manager flavours and the timestamp each one exposes."""

    MACO_V2 = "maco_v2"
    ASSET_PAIR = "asset_pair"

    @property
    def timestamp_method(self) -> ContractMethod:
        return _MANAGER_TIMESTAMP_METHODS[self]


_MANAGER_TIMESTAMP_METHODS = {
    ManagerKind.MACO_V2: abi.LAST_CROSSOVER_CONFIRMATION_TIMESTAMP,
    ManagerKind.ASSET_PAIR: abi.RECENT_INITIAL_PROPOSE_TIMESTAMP,
}


class BatchFetcher:
    """Batch reads over plain token, market, oracle and manager entities.

    Failures raise BatchPartialFailure carrying the first failing entity
    and its cause.
    """

    def __init__(self, transport: LedgerTransport) -> None:
        self.transport = transport

    def _read_all(
        self,
        operation: str,
        entities: Sequence[str],
        method: ContractMethod,
        *args: str,
    ) -> list[int]:
        entities = normalize_entities(entities)
        snapshot = LedgerSnapshot.pin(self.transport)
        return run_batch(
            operation,
            [(entity, *args) for entity in entities],
            lambda entity, *call_args: snapshot.read_one(entity, method, *call_args),
            block_number=snapshot.block.number,
        )

    def batch_balances(self, tokens: Sequence[str], owner: str) -> list[int]:
        """Balance of one owner in every token."""
        owner = normalize_address(owner, validate=True)
        return self._read_all("balances", tokens, abi.BALANCE_OF, owner)

    def batch_supplies(self, tokens: Sequence[str]) -> list[int]:
        return self._read_all("supplies", tokens, abi.TOTAL_SUPPLY)

    def batch_user_balances(self, tokens: Sequence[str], owners: Sequence[str]) -> list[int]:
        """Balances paired index-wise: result[i] = balanceOf(tokens[i], owners[i]).

        Raises:
            ValueError: If tokens and owners differ in length, or any
                address is malformed; no read is issued in either case
        """
        if len(tokens) != len(owners):
            raise ValueError(
                f"tokens and owners must have equal length: {len(tokens)} != {len(owners)}"
            )
        tokens = normalize_entities(tokens)
        owners = normalize_entities(owners)
        snapshot = LedgerSnapshot.pin(self.transport)
        return run_batch(
            "user_balances",
            list(zip(tokens, owners)),
            lambda token, owner: snapshot.read_one(token, abi.BALANCE_OF, owner),
            block_number=snapshot.block.number,
        )

    def batch_oracle_prices(self, oracles: Sequence[str]) -> list[int]:
        return self._read_all("oracle_prices", oracles, abi.ORACLE_READ)

    def batch_exchange_rates(self, ctokens: Sequence[str]) -> list[int]:
        return self._read_all("exchange_rates", ctokens, abi.EXCHANGE_RATE_STORED)

    def batch_manager_timestamps(
        self, managers: Sequence[str], kind: ManagerKind
    ) -> list[int]:
        """Last proposal or crossover timestamp of each manager of one kind."""
        return self._read_all("manager_timestamps", managers, kind.timestamp_method)
