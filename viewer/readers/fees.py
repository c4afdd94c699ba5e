"""Performance-fee state reader and read-time fee accrual.

Accrued fees are not stored on the ledger; they are computed from the
module's fee state and an explicit `as_of` timestamp. Callers pass the
same `as_of` for every basket in one query so no two baskets are
accrued against different clocks.
"""

from __future__ import annotations

import structlog

from viewer.config import DEFAULT_VIEWER_CONFIG, ViewerConfig
from viewer.errors import EntityReadError
from viewer.ledger import abi
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.state import BasketDetails, CollateralSet, FeeAccrual, FeeState
from viewer.models.types import NULL_ADDRESS, normalize_address

logger = structlog.get_logger()


def accrued_streaming_fee(percentage: int, elapsed: int, seconds_per_year: int) -> int:
    """Streaming fee accrued over `elapsed` seconds.

    Linear pro-rata of the annual percentage, no compounding.
    Negative elapsed time (clock behind the last accrual) accrues nothing.
    """
    if elapsed <= 0:
        return 0
    return percentage * elapsed // seconds_per_year


def accrued_profit_fee(high_watermark: int, percentage: int, current_value: int) -> int:
    """Profit fee on the value gained above the high watermark.

    Returned as a fixed-point fraction of current value; zero unless
    current value exceeds the watermark.
    """
    if current_value <= high_watermark:
        return 0
    return (current_value - high_watermark) * percentage // current_value


class FeeStateReader:
    """Reads performance-fee module state and computes accruals."""

    def __init__(
        self,
        snapshot: LedgerSnapshot,
        config: ViewerConfig = DEFAULT_VIEWER_CONFIG,
    ) -> None:
        self.snapshot = snapshot
        self.config = config

    def read(self, fee_module: str, basket: str, as_of: int) -> FeeState:
        """Read a basket's fee state from its fee module.

        Args:
            fee_module: Performance-fee module address
            basket: Basket whose state the module tracks
            as_of: Query timestamp; must be the snapshot's timestamp

        Raises:
            ValueError: If as_of differs from the snapshot timestamp
            EntityReadError: If the module does not answer feeState
        """
        self._check_as_of(as_of)
        values = self.snapshot.read(fee_module, abi.FEE_STATE, normalize_address(basket))
        state = FeeState(
            profit_fee_period=values[0],
            high_watermark_reset_period=values[1],
            profit_fee_percentage=values[2],
            streaming_fee_percentage=values[3],
            high_watermark=values[4],
            last_profit_fee_timestamp=values[5],
            last_streaming_fee_timestamp=values[6],
        )
        logger.debug("fee_state_read", fee_module=fee_module, basket=basket, as_of=as_of)
        return state

    def accrue(self, state: FeeState, current_value: int, as_of: int) -> FeeAccrual:
        """Compute (streaming, profit) fees accrued but not yet booked."""
        streaming = accrued_streaming_fee(
            state.streaming_fee_percentage,
            as_of - state.last_streaming_fee_timestamp,
            self.config.seconds_per_year,
        )
        profit = accrued_profit_fee(
            state.high_watermark,
            state.profit_fee_percentage,
            current_value,
        )
        return FeeAccrual(streaming_fee=streaming, profit_fee=profit, as_of=as_of)

    def basket_value(
        self,
        fee_module: str,
        basket: str,
        details: BasketDetails,
        collateral_set: CollateralSet,
    ) -> int:
        """Value of 10^18 basket base units, priced by the module's oracles.

        Raises:
            EntityReadError: If a component has no whitelisted oracle or an
                oracle/component does not answer
        """
        scale = self.config.fee_scale
        whitelist = self.snapshot.read_one(fee_module, abi.ORACLE_WHITE_LIST)

        collateral_value = 0
        for component, units in zip(collateral_set.components, collateral_set.units):
            oracle = self.snapshot.read_one(whitelist, abi.GET_ORACLE_ADDRESS_BY_TOKEN, component)
            if oracle == NULL_ADDRESS:
                raise EntityReadError(
                    whitelist,
                    abi.GET_ORACLE_ADDRESS_BY_TOKEN.signature,
                    f"no oracle for component {component}",
                )
            price = self.snapshot.read_one(oracle, abi.ORACLE_READ)
            decimals = self.snapshot.read_one(component, abi.DECIMALS)
            collateral_value += price * units * scale // (collateral_set.divisor * 10**decimals)

        if details.natural_unit == 0:
            raise EntityReadError(basket, abi.NATURAL_UNIT.signature, "zero natural unit")
        return collateral_value * details.unit_shares // details.natural_unit

    def _check_as_of(self, as_of: int) -> None:
        if as_of != self.snapshot.as_of:
            raise ValueError(
                f"as_of {as_of} does not match snapshot timestamp {self.snapshot.as_of}"
            )
