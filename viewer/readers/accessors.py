"""Per-version read adapters for basket entities.

Each basket generation stores the same logical state under different
accessor names. An EntityAccessor knows the exact layout of one
generation; everything above this module works with the normalized
records it returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from viewer.errors import EntityReadError, UnsupportedOperation
from viewer.ledger import abi
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.state import (
    AuctionState,
    BasketDetails,
    FeeModuleKind,
    FeeModuleRef,
    LifecyclePhase,
    ProposalState,
    SchemaVersion,
)
from viewer.models.types import NULL_ADDRESS


class EntityAccessor(ABC):
    """Abstract read adapter for one basket schema version.

    Accessors return raw ledger values. Masking of fields that are not
    meaningful in the current phase is the AuctionStateReader's job.
    """

    version: ClassVar[SchemaVersion]

    def __init__(self, snapshot: LedgerSnapshot) -> None:
        self.snapshot = snapshot

    # --- shared layout ---

    def get_phase(self, basket: str) -> LifecyclePhase:
        code = self.snapshot.read_one(basket, abi.REBALANCE_STATE)
        try:
            return LifecyclePhase.from_code(code)
        except ValueError as e:
            raise EntityReadError(basket, abi.REBALANCE_STATE.signature, str(e)) from e

    def get_collateral_set_id(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.CURRENT_SET)

    def get_next_collateral_set_id(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.NEXT_SET)

    def get_unit_shares(self, basket: str) -> int:
        return self.snapshot.read_one(basket, abi.UNIT_SHARES)

    def get_manager(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.MANAGER)

    def get_proposal_state(self, basket: str) -> ProposalState:
        """Read proposal fields as stored, regardless of phase."""
        params = self._auction_price_parameters(basket)
        return ProposalState(
            next_collateral_set=self.get_next_collateral_set_id(basket),
            auction_price_model=self.get_auction_price_model(basket),
            proposal_start_time=self.get_proposal_start_time(basket),
            auction_time_to_pivot=params[1],
            auction_start_price=params[2],
            auction_pivot_price=params[3],
        )

    def get_auction_state(self, basket: str) -> AuctionState:
        """Read bidding fields as stored, regardless of phase."""
        params = self._auction_price_parameters(basket)
        bidding = self._bidding_parameters(basket)
        return AuctionState(
            starting_units=self.snapshot.read_one(basket, abi.STARTING_CURRENT_SET_AMOUNT),
            auction_start_time=params[0],
            minimum_bid=bidding[0],
            remaining_units=bidding[1],
        )

    def get_details(self, basket: str) -> BasketDetails:
        read = self.snapshot.read_one
        return BasketDetails(
            manager=self.get_manager(basket),
            fee_recipient=self.get_fee_recipient(basket),
            current_set=self.get_collateral_set_id(basket),
            auction_price_model=self.get_auction_price_model(basket),
            name=read(basket, abi.NAME),
            symbol=read(basket, abi.SYMBOL),
            unit_shares=self.get_unit_shares(basket),
            natural_unit=read(basket, abi.NATURAL_UNIT),
            rebalance_interval=read(basket, abi.REBALANCE_INTERVAL),
            entry_fee=self._entry_fee_or_zero(basket),
            rebalance_fee=self._rebalance_fee_or_zero(basket),
            last_rebalance_timestamp=read(basket, abi.LAST_REBALANCE_TIMESTAMP),
            phase=self.get_phase(basket),
        )

    def require_performance_fee_module(self, basket: str) -> str:
        """Address of the attached performance-fee module.

        Raises:
            UnsupportedOperation: If no performance-fee module is attached
        """
        module = self.get_fee_module_id(basket)
        if module.kind is not FeeModuleKind.PERFORMANCE:
            raise UnsupportedOperation(basket, "performance fee state", self.version.value)
        return module.address

    def _auction_price_parameters(self, basket: str) -> list[int]:
        params = self.snapshot.read_one(basket, abi.GET_AUCTION_PRICE_PARAMETERS)
        if len(params) < 4:
            raise EntityReadError(
                basket,
                abi.GET_AUCTION_PRICE_PARAMETERS.signature,
                f"expected 4 values, got {len(params)}",
            )
        return params

    def _bidding_parameters(self, basket: str) -> list[int]:
        bidding = self.snapshot.read_one(basket, abi.GET_BIDDING_PARAMETERS)
        if len(bidding) < 2:
            raise EntityReadError(
                basket,
                abi.GET_BIDDING_PARAMETERS.signature,
                f"expected 2 values, got {len(bidding)}",
            )
        return bidding

    # --- version-specific layout ---

    @abstractmethod
    def get_auction_price_model(self, basket: str) -> str:
        """Module that prices the rebalance auction (library or liquidator)."""
        ...

    @abstractmethod
    def get_proposal_start_time(self, basket: str) -> int: ...

    @abstractmethod
    def get_fee_module_id(self, basket: str) -> FeeModuleRef:
        """Fee module attached to the basket, or the NONE handle."""
        ...

    @abstractmethod
    def get_fee_recipient(self, basket: str) -> str: ...

    @abstractmethod
    def get_liquidator(self, basket: str) -> str: ...

    @abstractmethod
    def get_entry_fee(self, basket: str) -> int: ...

    @abstractmethod
    def get_rebalance_fee(self, basket: str) -> int: ...

    def _entry_fee_or_zero(self, basket: str) -> int:
        return self.get_entry_fee(basket)

    def _rebalance_fee_or_zero(self, basket: str) -> int:
        return self.get_rebalance_fee(basket)


class V1Accessor(EntityAccessor):
    """First-generation baskets: auction library, no fee module."""

    version = SchemaVersion.V1

    def get_auction_price_model(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.AUCTION_LIBRARY)

    def get_proposal_start_time(self, basket: str) -> int:
        return self.snapshot.read_one(basket, abi.PROPOSAL_START_TIME)

    def get_fee_module_id(self, basket: str) -> FeeModuleRef:
        return FeeModuleRef.none()

    def get_fee_recipient(self, basket: str) -> str:
        return NULL_ADDRESS

    def get_liquidator(self, basket: str) -> str:
        raise UnsupportedOperation(basket, "liquidator", self.version.value)

    def get_entry_fee(self, basket: str) -> int:
        raise UnsupportedOperation(basket, "entry fee", self.version.value)

    def get_rebalance_fee(self, basket: str) -> int:
        raise UnsupportedOperation(basket, "rebalance fee", self.version.value)

    def require_performance_fee_module(self, basket: str) -> str:
        raise UnsupportedOperation(basket, "performance fee state", self.version.value)

    # V1 carries no fee fields; its details record reports them as zero.
    def _entry_fee_or_zero(self, basket: str) -> int:
        return 0

    def _rebalance_fee_or_zero(self, basket: str) -> int:
        return 0


class V2Accessor(EntityAccessor):
    """Second-generation baskets: liquidator and a fixed-fee module."""

    version = SchemaVersion.V2
    fee_module_kind: ClassVar[FeeModuleKind] = FeeModuleKind.FIXED

    def get_auction_price_model(self, basket: str) -> str:
        return self.get_liquidator(basket)

    def get_proposal_start_time(self, basket: str) -> int:
        return self.snapshot.read_one(basket, abi.REBALANCE_START_TIME)

    def get_fee_module_id(self, basket: str) -> FeeModuleRef:
        address = self.snapshot.read_one(basket, abi.REBALANCE_FEE_CALCULATOR)
        if address == NULL_ADDRESS:
            return FeeModuleRef.none()
        return FeeModuleRef(address=address, kind=self.fee_module_kind)

    def get_fee_recipient(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.FEE_RECIPIENT)

    def get_liquidator(self, basket: str) -> str:
        return self.snapshot.read_one(basket, abi.LIQUIDATOR)

    def get_entry_fee(self, basket: str) -> int:
        return self.snapshot.read_one(basket, abi.ENTRY_FEE)

    def get_rebalance_fee(self, basket: str) -> int:
        return self.snapshot.read_one(basket, abi.REBALANCE_FEE)


class V3Accessor(V2Accessor):
    """Third-generation baskets: V2 layout with a performance-fee module."""

    version = SchemaVersion.V3
    fee_module_kind = FeeModuleKind.PERFORMANCE


ACCESSORS: dict[SchemaVersion, type[EntityAccessor]] = {
    SchemaVersion.V1: V1Accessor,
    SchemaVersion.V2: V2Accessor,
    SchemaVersion.V3: V3Accessor,
}


def accessor_for(version: SchemaVersion, snapshot: LedgerSnapshot) -> EntityAccessor:
    """Build the accessor for a resolved schema version."""
    return ACCESSORS[version](snapshot)
