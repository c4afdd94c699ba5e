"""Configuration for the viewer readers."""

from dataclasses import dataclass, field

from viewer.constants import FEE_SCALE, SECONDS_PER_YEAR
from viewer.models.state import SchemaVersion

# Accessor names each basket generation must answer, richest first.
# V3 entities also answer the V2 and V1-compatible probes, so the
# resolution order below is significant.
DEFAULT_PROBES: tuple[tuple[SchemaVersion, tuple[str, ...]], ...] = (
    (
        SchemaVersion.V3,
        ("rebalanceState", "liquidator", "rebalanceFeeCalculator", "rebalanceIndex"),
    ),
    (SchemaVersion.V2, ("rebalanceState", "liquidator", "rebalanceFeeCalculator")),
    (SchemaVersion.V1, ("rebalanceState", "auctionLibrary")),
)


@dataclass(frozen=True)
class ViewerConfig:
    """Centralized configuration for the viewer.

    Passed into readers rather than read from module globals, so tests can
    substitute arbitrary entity layouts.

    Attributes:
        probes: Ordered (version, accessor names) pairs used for capability
            probing. The first version whose accessors all answer wins.
        seconds_per_year: Denominator for annualized streaming fees.
        fee_scale: Fixed-point base of fee percentages and prices (1e18).
    """

    probes: tuple[tuple[SchemaVersion, tuple[str, ...]], ...] = field(
        default=DEFAULT_PROBES
    )
    seconds_per_year: int = SECONDS_PER_YEAR
    fee_scale: int = FEE_SCALE


# Default configuration instance
DEFAULT_VIEWER_CONFIG = ViewerConfig()
