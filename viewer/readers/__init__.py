"""Readers that turn raw entity state into normalized records.

Leaves first:
- EntityAccessor (V1/V2/V3): per-version accessor layout
- VersionResolver: capability-probe dispatch to an accessor
- CollateralSetReader: component composition of a collateral set
- FeeStateReader: performance-fee state and read-time accrual
- AuctionStateReader: phase-aware proposal and auction parameters
"""

from viewer.readers.accessors import (
    ACCESSORS,
    EntityAccessor,
    V1Accessor,
    V2Accessor,
    V3Accessor,
    accessor_for,
)
from viewer.readers.auction import AuctionStateReader
from viewer.readers.collateral import CollateralSetReader
from viewer.readers.fees import (
    FeeStateReader,
    accrued_profit_fee,
    accrued_streaming_fee,
)
from viewer.readers.resolver import VersionResolver

__all__ = [
    "ACCESSORS",
    "EntityAccessor",
    "V1Accessor",
    "V2Accessor",
    "V3Accessor",
    "accessor_for",
    "VersionResolver",
    "CollateralSetReader",
    "FeeStateReader",
    "accrued_streaming_fee",
    "accrued_profit_fee",
    "AuctionStateReader",
]
