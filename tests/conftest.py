"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import FakeLedger, deploy_world
from viewer.composer import BatchComposer
from viewer.fetchers import BatchFetcher


@pytest.fixture
def ledger() -> FakeLedger:
    """A FakeLedger holding the standard world (see deploy_world)."""
    return deploy_world(FakeLedger())


@pytest.fixture
def composer(ledger: FakeLedger) -> BatchComposer:
    return BatchComposer(ledger)


@pytest.fixture
def fetcher(ledger: FakeLedger) -> BatchFetcher:
    return BatchFetcher(ledger)
