"""Basket Viewer - read-only, versioned basket state aggregation."""

from viewer.composer import BatchComposer
from viewer.fetchers import BatchFetcher, ManagerKind
from viewer.ledger import Web3Transport

__version__ = "0.1.0"
__all__ = ["BatchComposer", "BatchFetcher", "ManagerKind", "Web3Transport", "__version__"]
