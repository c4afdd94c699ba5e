"""Batch composer: the outward-facing basket query contract.

The composer pins one ledger snapshot per call, resolves each basket's
schema version once, dispatches to that version's accessor and assembles
one normalized record per basket. Either every basket in a call is read
successfully or the call fails.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

import structlog

from viewer.batch import normalize_entities, run_batch
from viewer.config import DEFAULT_VIEWER_CONFIG, ViewerConfig
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.ledger.transport import LedgerTransport
from viewer.models.state import (
    BasketStateAndCollateral,
    CompositeRecord,
    FeeAccrual,
    FeeModuleKind,
    FeeState,
    LifecyclePhase,
    RebalanceDetails,
)
from viewer.models.types import is_null_address, normalize_address
from viewer.readers.accessors import EntityAccessor
from viewer.readers.auction import AuctionStateReader
from viewer.readers.collateral import CollateralSetReader
from viewer.readers.fees import FeeStateReader
from viewer.readers.resolver import VersionResolver

logger = structlog.get_logger()

T = TypeVar("T")


class ReadSession:
    """Readers sharing one pinned snapshot for the duration of one query."""

    def __init__(self, snapshot: LedgerSnapshot, config: ViewerConfig) -> None:
        self.snapshot = snapshot
        self.config = config
        self.resolver = VersionResolver(snapshot, config)
        self.collateral = CollateralSetReader(snapshot)
        self.fees = FeeStateReader(snapshot, config)
        self._accessors: dict[str, EntityAccessor] = {}

    @property
    def as_of(self) -> int:
        return self.snapshot.as_of

    @property
    def block_number(self) -> int:
        return self.snapshot.block.number

    def accessor(self, basket: str) -> EntityAccessor:
        """Accessor for a basket, resolved at most once per session."""
        if basket not in self._accessors:
            self._accessors[basket] = self.resolver.accessor(basket)
        return self._accessors[basket]

    def auction(self, basket: str) -> AuctionStateReader:
        return AuctionStateReader(self.accessor(basket))


class BatchComposer:
    """Assembles composite basket records from one consistent snapshot.

    Usage:
        composer = BatchComposer(Web3Transport("https://..."))
        record = composer.fetch_one(basket)
        records = composer.fetch_many([basket_a, basket_b, basket_a])

    Single-basket entry points raise the underlying ViewerError. Batch
    entry points raise BatchPartialFailure; catch that and inspect its
    `cause` (also chained as `__cause__`) to tell e.g. UnsupportedOperation
    from UnrecognizedEntity:

        try:
            composer.batch_fee_states(baskets)
        except BatchPartialFailure as e:
            if isinstance(e.cause, UnsupportedOperation):
                ...
    """

    def __init__(
        self,
        transport: LedgerTransport,
        config: ViewerConfig = DEFAULT_VIEWER_CONFIG,
    ) -> None:
        self.transport = transport
        self.config = config

    def session(self) -> ReadSession:
        """Pin a new snapshot and build its readers."""
        return ReadSession(LedgerSnapshot.pin(self.transport), self.config)

    def batch(
        self,
        operation: str,
        baskets: Sequence[str],
        read: Callable[[ReadSession, str], T],
    ) -> list[T]:
        """Apply `read` to every basket within one session, all-or-nothing."""
        entities = normalize_entities(baskets)
        session = self.session()
        return run_batch(
            operation,
            [(entity,) for entity in entities],
            lambda basket: read(session, basket),
            block_number=session.block_number,
        )

    # =========================================================================
    # Composite records
    # =========================================================================

    def compose(self, session: ReadSession, basket: str) -> CompositeRecord:
        """Build the full record of one basket within a session."""
        accessor = session.accessor(basket)
        phase, proposal, auction = session.auction(basket).read(basket)
        details = accessor.get_details(basket)
        collateral_set = session.collateral.read(details.current_set)
        fee_module = accessor.get_fee_module_id(basket)

        fee_state = None
        accrued_fees = None
        if fee_module.kind is FeeModuleKind.PERFORMANCE:
            fee_state = session.fees.read(fee_module.address, basket, session.as_of)
            value = session.fees.basket_value(fee_module.address, basket, details, collateral_set)
            accrued_fees = session.fees.accrue(fee_state, value, session.as_of)

        return CompositeRecord(
            basket=basket,
            version=accessor.version,
            phase=phase,
            details=details,
            proposal=proposal,
            auction=auction,
            collateral_set=collateral_set,
            fee_module=fee_module,
            fee_state=fee_state,
            accrued_fees=accrued_fees,
            as_of=session.as_of,
            block_number=session.block_number,
        )

    def fetch_one(self, basket: str) -> CompositeRecord:
        """Read one basket's composite record.

        Raises:
            ValueError: If the identifier is not a valid address
            ViewerError: The underlying failure (not wrapped)
        """
        basket = normalize_address(basket, validate=True)
        session = self.session()
        record = self.compose(session, basket)
        logger.info(
            "record_fetched",
            basket=basket,
            version=record.version.value,
            phase=record.phase.value,
            block_number=session.block_number,
        )
        return record

    def fetch_many(self, baskets: Sequence[str]) -> list[CompositeRecord]:
        """Read composite records for many baskets, in input order.

        Raises:
            BatchPartialFailure: If any basket fails; carries the first
                failure in input order
        """
        return self.batch("fetch_many", baskets, self.compose)

    def fetch_rebalance_details(self, basket: str) -> RebalanceDetails:
        """Proposal, auction and incoming collateral set of one basket."""
        basket = normalize_address(basket, validate=True)
        session = self.session()
        accessor = session.accessor(basket)
        phase, proposal, auction = session.auction(basket).read(basket)

        next_collateral_set = None
        if phase.has_proposal and not is_null_address(proposal.next_collateral_set):
            next_collateral_set = session.collateral.read(proposal.next_collateral_set)

        return RebalanceDetails(
            basket=basket,
            version=accessor.version,
            phase=phase,
            details=accessor.get_details(basket),
            proposal=proposal,
            auction=auction,
            next_collateral_set=next_collateral_set,
        )

    # =========================================================================
    # Fee state
    # =========================================================================

    def _fee_state(self, session: ReadSession, basket: str) -> FeeState:
        fee_module = session.accessor(basket).require_performance_fee_module(basket)
        return session.fees.read(fee_module, basket, session.as_of)

    def _fee_accrual(self, session: ReadSession, basket: str) -> FeeAccrual:
        accessor = session.accessor(basket)
        fee_module = accessor.require_performance_fee_module(basket)
        details = accessor.get_details(basket)
        collateral_set = session.collateral.read(details.current_set)
        state = session.fees.read(fee_module, basket, session.as_of)
        value = session.fees.basket_value(fee_module, basket, details, collateral_set)
        return session.fees.accrue(state, value, session.as_of)

    def fetch_fee_state(self, basket: str) -> FeeState:
        """Performance-fee state of one basket.

        Raises:
            UnsupportedOperation: If the basket has no performance-fee module
        """
        basket = normalize_address(basket, validate=True)
        return self._fee_state(self.session(), basket)

    def batch_fee_states(self, baskets: Sequence[str]) -> list[FeeState]:
        """Performance-fee state of every basket.

        Raises:
            BatchPartialFailure: With cause UnsupportedOperation if any basket
                has no performance-fee module
        """
        return self.batch("fee_states", baskets, self._fee_state)

    def batch_fee_accruals(self, baskets: Sequence[str]) -> tuple[list[int], list[int]]:
        """Accrued (streaming fees, profit fees), all at one timestamp."""
        accruals = self.batch("fee_accruals", baskets, self._fee_accrual)
        return (
            [accrual.streaming_fee for accrual in accruals],
            [accrual.profit_fee for accrual in accruals],
        )

    # =========================================================================
    # Single-field batches
    # =========================================================================

    def batch_rebalance_states(self, baskets: Sequence[str]) -> list[LifecyclePhase]:
        return self.batch(
            "rebalance_states",
            baskets,
            lambda session, basket: session.accessor(basket).get_phase(basket),
        )

    def batch_unit_shares(self, baskets: Sequence[str]) -> list[int]:
        return self.batch(
            "unit_shares",
            baskets,
            lambda session, basket: session.accessor(basket).get_unit_shares(basket),
        )

    def batch_liquidators(self, baskets: Sequence[str]) -> list[str]:
        """Liquidator of every basket; V1 baskets fail with UnsupportedOperation."""
        return self.batch(
            "liquidators",
            baskets,
            lambda session, basket: session.accessor(basket).get_liquidator(basket),
        )

    def batch_state_and_collateral(
        self, baskets: Sequence[str]
    ) -> list[BasketStateAndCollateral]:
        def read(session: ReadSession, basket: str) -> BasketStateAndCollateral:
            accessor = session.accessor(basket)
            return BasketStateAndCollateral(
                collateral_set=accessor.get_collateral_set_id(basket),
                phase=accessor.get_phase(basket),
            )

        return self.batch("state_and_collateral", baskets, read)
