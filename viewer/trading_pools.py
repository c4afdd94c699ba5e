"""Trading pool reads.

A trading pool is a V2/V3 basket whose manager is a social trading
manager; the manager keeps a per-pool entry with the trader operating
the pool and its pending fee update. Each pool's manager is read from
the pool itself.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from viewer.composer import BatchComposer, ReadSession
from viewer.errors import EntityReadError
from viewer.ledger import abi
from viewer.models.state import TradingPoolDetails, TradingPoolInfo
from viewer.models.types import is_null_address, normalize_address

logger = structlog.get_logger()


def read_pool_info(session: ReadSession, pool: str) -> TradingPoolInfo:
    """Entry kept for `pool` by the pool's own manager.

    Raises:
        EntityReadError: If the manager holds no entry for the pool
    """
    manager = session.accessor(pool).get_manager(pool)
    trader, allocator, current_allocation, new_entry_fee, fee_update_timestamp = (
        session.snapshot.read(manager, abi.POOLS, pool)
    )
    # Unknown pools read back as an all-zero entry
    if is_null_address(trader):
        raise EntityReadError(manager, abi.POOLS.signature, f"no entry for pool {pool}")
    return TradingPoolInfo(
        trader=trader,
        allocator=allocator,
        current_allocation=current_allocation,
        new_entry_fee=new_entry_fee,
        fee_update_timestamp=fee_update_timestamp,
    )


def fetch_trading_pool_details(composer: BatchComposer, pool: str) -> TradingPoolDetails:
    """Manager entry and composite record of one pool, from one snapshot."""
    pool = normalize_address(pool, validate=True)
    session = composer.session()
    details = TradingPoolDetails(
        pool=read_pool_info(session, pool),
        record=composer.compose(session, pool),
    )
    logger.info("trading_pool_fetched", manager=details.record.details.manager, pool=pool)
    return details


def batch_pool_operators(composer: BatchComposer, pools: Sequence[str]) -> list[str]:
    """Trader operating each pool, as recorded by that pool's manager."""
    return composer.batch(
        "pool_operators",
        pools,
        lambda session, pool: read_pool_info(session, pool).trader,
    )


def batch_entry_fees(composer: BatchComposer, pools: Sequence[str]) -> list[int]:
    return composer.batch(
        "entry_fees",
        pools,
        lambda session, pool: session.accessor(pool).get_entry_fee(pool),
    )


def batch_rebalance_fees(composer: BatchComposer, pools: Sequence[str]) -> list[int]:
    return composer.batch(
        "rebalance_fees",
        pools,
        lambda session, pool: session.accessor(pool).get_rebalance_fee(pool),
    )
