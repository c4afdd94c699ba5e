"""Schema version resolution by capability probing.

There is no registry of which basket is which generation; the resolver
asks the entity itself. Probes run richest-first so that a V3 basket
exposing V1-compatible accessors is never mistaken for a V1 basket.
"""

from __future__ import annotations

import structlog

from viewer.config import DEFAULT_VIEWER_CONFIG, ViewerConfig
from viewer.errors import UnrecognizedEntity
from viewer.ledger.abi import BASKET_METHODS
from viewer.ledger.snapshot import LedgerSnapshot
from viewer.models.state import SchemaVersion
from viewer.models.types import normalize_address
from viewer.readers.accessors import EntityAccessor, accessor_for

logger = structlog.get_logger()


class VersionResolver:
    """Determines which EntityAccessor applies to a basket.

    Probe answers are memoized per (basket, accessor name); the snapshot
    is immutable, so an answer cannot change within one resolver.
    """

    def __init__(
        self,
        snapshot: LedgerSnapshot,
        config: ViewerConfig = DEFAULT_VIEWER_CONFIG,
    ) -> None:
        """Initialize the resolver.

        Raises:
            ValueError: If the probe table names an unknown basket accessor
        """
        for version, names in config.probes:
            unknown = [name for name in names if name not in BASKET_METHODS]
            if unknown:
                raise ValueError(f"Unknown probe accessors for {version.value}: {unknown}")
        self.snapshot = snapshot
        self.config = config
        self._answers: dict[tuple[str, str], bool] = {}

    def _answers_probe(self, basket: str, name: str) -> bool:
        key = (basket, name)
        if key not in self._answers:
            self._answers[key] = self.snapshot.probe(basket, BASKET_METHODS[name])
        return self._answers[key]

    def resolve(self, basket: str) -> SchemaVersion:
        """Determine the schema version of a basket.

        Raises:
            UnrecognizedEntity: If no version's probes are all answered
            LedgerUnavailable: If the transport fails while probing; an
                outage is never taken as a missing accessor
        """
        basket = normalize_address(basket)
        for version, names in self.config.probes:
            if all(self._answers_probe(basket, name) for name in names):
                logger.debug("entity_resolved", basket=basket, version=version.value)
                return version

        logger.debug("entity_unrecognized", basket=basket)
        raise UnrecognizedEntity(basket)

    def accessor(self, basket: str) -> EntityAccessor:
        """Resolve a basket and build its accessor."""
        return accessor_for(self.resolve(basket), self.snapshot)
