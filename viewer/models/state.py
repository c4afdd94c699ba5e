"""Pydantic models for basket read projections.

Every record is built fresh per query and never mutated. Phase-dependent
records expose an explicit `empty()` constructor: callers rely on a fixed
record shape, so fields that are not yet meaningful carry the zero value
rather than being omitted.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from viewer.models.types import NULL_ADDRESS, Address, Uint


class SchemaVersion(str, Enum):
    """Basket schema generation."""

    V1 = "v1"
    V2 = "v2"
    V3 = "v3"


class LifecyclePhase(str, Enum):
    """Position of a basket in its rebalance lifecycle."""

    DEFAULT = "default"
    PROPOSAL = "proposal"
    REBALANCE = "rebalance"
    DRAWDOWN = "drawdown"

    @classmethod
    def from_code(cls, code: int) -> LifecyclePhase:
        """Map the on-ledger uint8 state code to a phase.

        Raises:
            ValueError: If the code is not a known phase
        """
        try:
            return _PHASE_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown lifecycle phase code: {code}") from None

    @property
    def code(self) -> int:
        return _PHASE_CODES[self]

    @property
    def has_proposal(self) -> bool:
        """True once a next collateral set has been proposed."""
        return self is not LifecyclePhase.DEFAULT

    @property
    def has_auction(self) -> bool:
        """True once auction pricing is finalized and bidding is open."""
        return self in (LifecyclePhase.REBALANCE, LifecyclePhase.DRAWDOWN)


_PHASE_CODES = {
    LifecyclePhase.DEFAULT: 0,
    LifecyclePhase.PROPOSAL: 1,
    LifecyclePhase.REBALANCE: 2,
    LifecyclePhase.DRAWDOWN: 3,
}
_PHASE_BY_CODE = {code: phase for phase, code in _PHASE_CODES.items()}


class FeeModuleKind(str, Enum):
    """Kind of fee module attached to a basket."""

    NONE = "none"
    FIXED = "fixed"
    PERFORMANCE = "performance"


class FeeModuleRef(BaseModel):
    """Handle of the fee module attached to a basket."""

    address: Address = NULL_ADDRESS
    kind: FeeModuleKind = FeeModuleKind.NONE

    model_config = {"frozen": True}

    @classmethod
    def none(cls) -> FeeModuleRef:
        return cls(address=NULL_ADDRESS, kind=FeeModuleKind.NONE)


class ProposalState(BaseModel):
    """Parameters of the currently proposed rebalance."""

    next_collateral_set: Address = Field(default=NULL_ADDRESS, alias="nextCollateralSet")
    auction_price_model: Address = Field(default=NULL_ADDRESS, alias="auctionPriceModel")
    proposal_start_time: Uint = Field(default=0, alias="proposalStartTime")
    auction_time_to_pivot: Uint = Field(default=0, alias="auctionTimeToPivot")
    auction_start_price: Uint = Field(default=0, alias="auctionStartPrice")
    auction_pivot_price: Uint = Field(default=0, alias="auctionPivotPrice")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def empty(cls) -> ProposalState:
        """Proposal state of a basket with nothing proposed."""
        return cls(
            next_collateral_set=NULL_ADDRESS,
            auction_price_model=NULL_ADDRESS,
            proposal_start_time=0,
            auction_time_to_pivot=0,
            auction_start_price=0,
            auction_pivot_price=0,
        )


class AuctionState(BaseModel):
    """Bidding parameters of a running rebalance auction."""

    starting_units: Uint = Field(default=0, alias="startingUnits")
    auction_start_time: Uint = Field(default=0, alias="auctionStartTime")
    minimum_bid: Uint = Field(default=0, alias="minimumBid")
    remaining_units: Uint = Field(default=0, alias="remainingUnits")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def empty(cls) -> AuctionState:
        """Auction state of a basket that is not bidding."""
        return cls(starting_units=0, auction_start_time=0, minimum_bid=0, remaining_units=0)


class CollateralSet(BaseModel):
    """Ordered component composition of a collateral set.

    Index i of `components` pairs with index i of `units`.
    """

    address: Address
    components: list[Address]
    units: list[Uint]
    divisor: Uint = Field(gt=0)
    name: str
    symbol: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_parallel(self) -> CollateralSet:
        if len(self.components) != len(self.units):
            raise ValueError(
                f"components/units length mismatch: {len(self.components)} != {len(self.units)}"
            )
        return self


class FeeState(BaseModel):
    """Accrual state of a performance-fee module for one basket."""

    profit_fee_period: Uint = Field(alias="profitFeePeriod")
    high_watermark_reset_period: Uint = Field(alias="highWatermarkResetPeriod")
    profit_fee_percentage: Uint = Field(alias="profitFeePercentage")
    streaming_fee_percentage: Uint = Field(alias="streamingFeePercentage")
    high_watermark: Uint = Field(alias="highWatermark")
    last_profit_fee_timestamp: Uint = Field(alias="lastProfitFeeTimestamp")
    last_streaming_fee_timestamp: Uint = Field(alias="lastStreamingFeeTimestamp")

    model_config = {"frozen": True, "populate_by_name": True}


class FeeAccrual(BaseModel):
    """Fees accrued but not yet booked, as of one timestamp.

    Both amounts are 1e18-scaled fractions of basket value.
    """

    streaming_fee: Uint = Field(alias="streamingFee")
    profit_fee: Uint = Field(alias="profitFee")
    as_of: Uint = Field(alias="asOf")

    model_config = {"frozen": True, "populate_by_name": True}


class BasketDetails(BaseModel):
    """Static configuration and bookkeeping fields of a basket."""

    manager: Address
    fee_recipient: Address = Field(default=NULL_ADDRESS, alias="feeRecipient")
    current_set: Address = Field(alias="currentSet")
    auction_price_model: Address = Field(default=NULL_ADDRESS, alias="auctionPriceModel")
    name: str
    symbol: str
    unit_shares: Uint = Field(alias="unitShares")
    natural_unit: Uint = Field(alias="naturalUnit")
    rebalance_interval: Uint = Field(alias="rebalanceInterval")
    entry_fee: Uint = Field(default=0, alias="entryFee")
    rebalance_fee: Uint = Field(default=0, alias="rebalanceFee")
    last_rebalance_timestamp: Uint = Field(alias="lastRebalanceTimestamp")
    phase: LifecyclePhase

    model_config = {"frozen": True, "populate_by_name": True}


class CompositeRecord(BaseModel):
    """Full normalized state of one basket, read from one ledger snapshot.

    `fee_state` and `accrued_fees` are None exactly when no performance-fee
    module is attached; every other field is always populated.
    """

    basket: Address
    version: SchemaVersion
    phase: LifecyclePhase
    details: BasketDetails
    proposal: ProposalState
    auction: AuctionState
    collateral_set: CollateralSet = Field(alias="collateralSet")
    fee_module: FeeModuleRef = Field(alias="feeModule")
    fee_state: FeeState | None = Field(default=None, alias="feeState")
    accrued_fees: FeeAccrual | None = Field(default=None, alias="accruedFees")
    as_of: Uint = Field(alias="asOf")
    block_number: Uint = Field(alias="blockNumber")

    model_config = {"frozen": True, "populate_by_name": True}


class RebalanceDetails(BaseModel):
    """Rebalance view of a basket: proposal, auction and the incoming set."""

    basket: Address
    version: SchemaVersion
    phase: LifecyclePhase
    details: BasketDetails
    proposal: ProposalState
    auction: AuctionState
    next_collateral_set: CollateralSet | None = Field(default=None, alias="nextCollateralSet")

    model_config = {"frozen": True, "populate_by_name": True}


class BasketStateAndCollateral(BaseModel):
    """Phase and current collateral set of one basket."""

    collateral_set: Address = Field(alias="collateralSet")
    phase: LifecyclePhase

    model_config = {"frozen": True, "populate_by_name": True}


class TradingPoolInfo(BaseModel):
    """Per-pool entry kept by a social trading manager."""

    trader: Address
    allocator: Address
    current_allocation: Uint = Field(alias="currentAllocation")
    new_entry_fee: Uint = Field(alias="newEntryFee")
    fee_update_timestamp: Uint = Field(alias="feeUpdateTimestamp")

    model_config = {"frozen": True, "populate_by_name": True}


class TradingPoolDetails(BaseModel):
    """A trading pool: manager entry plus the basket's composite record."""

    pool: TradingPoolInfo
    record: CompositeRecord

    model_config = {"frozen": True}
