"""Tests for CollateralSetReader."""

import pytest

from tests.helpers import (
    COLLATERAL_SET,
    EMPTY_ACCOUNT,
    USDC,
    WETH,
    deploy_collateral_set,
)
from viewer.errors import InvalidCollateralSet
from viewer.ledger import abi
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.types import NULL_ADDRESS
from viewer.readers import CollateralSetReader


def read(ledger, collateral_set: str):
    return CollateralSetReader(LedgerSnapshot.pin(ledger)).read(collateral_set)


class TestCollateralSetReader:
    """Tests for CollateralSetReader.read."""

    def test_reads_composition_in_stored_order(self, ledger):
        collateral_set = read(ledger, COLLATERAL_SET)
        assert collateral_set.address == COLLATERAL_SET
        assert collateral_set.components == [WETH, USDC]
        assert collateral_set.units == [10**6, 2_000]
        assert collateral_set.divisor == 10**6
        assert collateral_set.name == "ETH/USDC Set"
        assert collateral_set.symbol == "ETHUSDC"

    def test_reversed_components_keep_their_units(self, ledger):
        deploy_collateral_set(ledger, COLLATERAL_SET, [USDC, WETH], [2_000, 10**6])
        collateral_set = read(ledger, COLLATERAL_SET)
        assert list(zip(collateral_set.components, collateral_set.units)) == [
            (USDC, 2_000),
            (WETH, 10**6),
        ]

    def test_null_address(self, ledger):
        with pytest.raises(InvalidCollateralSet, match="null address"):
            read(ledger, NULL_ADDRESS)

    def test_entity_without_components(self, ledger):
        # A token has no component list
        with pytest.raises(InvalidCollateralSet) as exc_info:
            read(ledger, WETH)
        assert exc_info.value.entity == WETH
        assert isinstance(exc_info.value.__cause__, Exception)

    def test_account_without_code(self, ledger):
        with pytest.raises(InvalidCollateralSet):
            read(ledger, EMPTY_ACCOUNT)

    def test_length_mismatch(self, ledger):
        ledger[COLLATERAL_SET].set(abi.GET_UNITS, [1])
        with pytest.raises(InvalidCollateralSet, match="2 components but 1 units"):
            read(ledger, COLLATERAL_SET)

    def test_duplicate_components(self, ledger):
        deploy_collateral_set(ledger, COLLATERAL_SET, [WETH, WETH], [1, 2])
        with pytest.raises(InvalidCollateralSet, match="duplicate components"):
            read(ledger, COLLATERAL_SET)

    def test_zero_divisor(self, ledger):
        ledger[COLLATERAL_SET].set(abi.NATURAL_UNIT, 0)
        with pytest.raises(InvalidCollateralSet, match="zero divisor"):
            read(ledger, COLLATERAL_SET)

    def test_reverting_accessor(self, ledger):
        ledger[COLLATERAL_SET].revert(abi.GET_UNITS)
        with pytest.raises(InvalidCollateralSet):
            read(ledger, COLLATERAL_SET)
