"""Collateral set reader."""

from __future__ import annotations

import structlog

from viewer.errors import EntityReadError, InvalidCollateralSet
from viewer.ledger import abi
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.state import CollateralSet
from viewer.models.types import is_null_address, normalize_address

logger = structlog.get_logger()


class CollateralSetReader:
    """Reads a collateral set's full composition, or fails.

    Components and units are returned in the order the entity stores
    them, since index i of each list describes the same component.
    """

    def __init__(self, snapshot: LedgerSnapshot) -> None:
        self.snapshot = snapshot

    def read(self, collateral_set: str) -> CollateralSet:
        """Read components, units, divisor, name and symbol.

        Raises:
            InvalidCollateralSet: If the id is not a component-list-bearing
                entity or its composition is inconsistent
        """
        collateral_set = normalize_address(collateral_set)
        if is_null_address(collateral_set):
            raise InvalidCollateralSet(collateral_set, "null address")

        read = self.snapshot.read_one
        try:
            components = read(collateral_set, abi.GET_COMPONENTS)
            units = read(collateral_set, abi.GET_UNITS)
            divisor = read(collateral_set, abi.NATURAL_UNIT)
            name = read(collateral_set, abi.NAME)
            symbol = read(collateral_set, abi.SYMBOL)
        except EntityReadError as e:
            raise InvalidCollateralSet(collateral_set, str(e)) from e

        if len(components) != len(units):
            raise InvalidCollateralSet(
                collateral_set,
                f"{len(components)} components but {len(units)} units",
            )
        if len(set(components)) != len(components):
            raise InvalidCollateralSet(collateral_set, "duplicate components")
        if divisor == 0:
            raise InvalidCollateralSet(collateral_set, "zero divisor")

        logger.debug(
            "collateral_set_read",
            collateral_set=collateral_set,
            component_count=len(components),
        )
        return CollateralSet(
            address=collateral_set,
            components=components,
            units=units,
            divisor=divisor,
            name=name,
            symbol=symbol,
        )
