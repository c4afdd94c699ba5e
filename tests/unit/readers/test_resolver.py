"""Tests for VersionResolver capability probing."""

import pytest

from tests.helpers import BASKET_V1, BASKET_V2, BASKET_V3, EMPTY_ACCOUNT, WETH
from viewer.config import ViewerConfig
from viewer.errors import LedgerUnavailable, UnrecognizedEntity
from viewer.ledger import abi
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.state import SchemaVersion
from viewer.readers import V1Accessor, V2Accessor, V3Accessor, VersionResolver


@pytest.fixture
def resolver(ledger) -> VersionResolver:
    return VersionResolver(LedgerSnapshot.pin(ledger))


class TestResolve:
    """Tests for VersionResolver.resolve."""

    @pytest.mark.parametrize(
        "basket,version",
        [
            (BASKET_V1, SchemaVersion.V1),
            (BASKET_V2, SchemaVersion.V2),
            (BASKET_V3, SchemaVersion.V3),
        ],
    )
    def test_resolves_each_generation(self, resolver, basket, version):
        assert resolver.resolve(basket) is version

    def test_v3_exposing_v1_accessors_is_still_v3(self, ledger, resolver):
        ledger[BASKET_V3].set(abi.AUCTION_LIBRARY, "0x" + "a4" * 20)
        assert resolver.resolve(BASKET_V3) is SchemaVersion.V3

    def test_token_is_unrecognized(self, resolver):
        with pytest.raises(UnrecognizedEntity) as exc_info:
            resolver.resolve(WETH)
        assert exc_info.value.entity == WETH

    def test_account_without_code_is_unrecognized(self, resolver):
        with pytest.raises(UnrecognizedEntity):
            resolver.resolve(EMPTY_ACCOUNT)

    def test_reverting_probe_counts_as_missing(self, ledger, resolver):
        ledger[BASKET_V3].revert(abi.REBALANCE_INDEX)
        assert resolver.resolve(BASKET_V3) is SchemaVersion.V2

    def test_transport_failure_is_not_a_missing_accessor(self, ledger, resolver):
        ledger[BASKET_V3].fail(abi.REBALANCE_INDEX)
        with pytest.raises(LedgerUnavailable):
            resolver.resolve(BASKET_V3)

    def test_probe_answers_are_memoized(self, ledger, resolver):
        resolver.resolve(BASKET_V1)
        calls = ledger.calls_to(BASKET_V1)
        resolver.resolve(BASKET_V1)
        assert ledger.calls_to(BASKET_V1) == calls


class TestProbeConfiguration:
    """Probe tables are injected through ViewerConfig."""

    def test_custom_probe_table(self, ledger):
        config = ViewerConfig(probes=((SchemaVersion.V1, ("rebalanceState",)),))
        resolver = VersionResolver(LedgerSnapshot.pin(ledger), config)
        assert resolver.resolve(BASKET_V3) is SchemaVersion.V1

    def test_unknown_probe_name_rejected(self, ledger):
        config = ViewerConfig(probes=((SchemaVersion.V2, ("notAnAccessor",)),))
        with pytest.raises(ValueError, match="notAnAccessor"):
            VersionResolver(LedgerSnapshot.pin(ledger), config)


class TestAccessor:
    """Tests for VersionResolver.accessor."""

    @pytest.mark.parametrize(
        "basket,accessor_type",
        [(BASKET_V1, V1Accessor), (BASKET_V2, V2Accessor), (BASKET_V3, V3Accessor)],
    )
    def test_builds_matching_accessor(self, resolver, basket, accessor_type):
        assert type(resolver.accessor(basket)) is accessor_type
