"""Pydantic models for basket read projections."""

from viewer.models.state import (
    AuctionState,
    BasketDetails,
    BasketStateAndCollateral,
    CollateralSet,
    CompositeRecord,
    FeeAccrual,
    FeeModuleKind,
    FeeModuleRef,
    FeeState,
    LifecyclePhase,
    ProposalState,
    RebalanceDetails,
    SchemaVersion,
    TradingPoolDetails,
    TradingPoolInfo,
)
from viewer.models.types import NULL_ADDRESS, Address, Uint, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint",
    "NULL_ADDRESS",
    "normalize_address",
    # Enums
    "SchemaVersion",
    "LifecyclePhase",
    "FeeModuleKind",
    # Records
    "FeeModuleRef",
    "ProposalState",
    "AuctionState",
    "CollateralSet",
    "FeeState",
    "FeeAccrual",
    "BasketDetails",
    "CompositeRecord",
    "RebalanceDetails",
    "BasketStateAndCollateral",
    "TradingPoolInfo",
    "TradingPoolDetails",
]
