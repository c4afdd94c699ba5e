"""Read-only method catalogue for every ledger entity the viewer reads.

Each accessor is described once by name and ABI types; selectors and
call data are derived from that description.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_utils import function_signature_to_4byte_selector

from viewer.models.types import normalize_address


@dataclass(frozen=True)
class ContractMethod:
    """A view method exposed by a ledger entity."""

    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``balanceOf(address)``."""
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        """4-byte function selector."""
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> bytes:
        """Build call data: selector followed by ABI-encoded arguments."""
        if len(args) != len(self.inputs):
            raise ValueError(
                f"{self.signature} takes {len(self.inputs)} arguments, got {len(args)}"
            )
        return self.selector + encode(list(self.inputs), list(args))

    def decode_result(self, data: bytes) -> tuple[Any, ...]:
        """Decode return data, normalizing addresses to lowercase.

        Raises:
            eth_abi.exceptions.DecodingError: If data does not match the outputs
        """
        values = decode(list(self.outputs), data)
        return tuple(_normalize(abi_type, value) for abi_type, value in zip(self.outputs, values))


def _normalize(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return normalize_address(value)
    if abi_type == "address[]":
        return [normalize_address(v) for v in value]
    if abi_type.endswith("[]"):
        return list(value)
    return value


# =============================================================================
# Baskets (all generations)
# =============================================================================

REBALANCE_STATE = ContractMethod("rebalanceState", outputs=("uint8",))
CURRENT_SET = ContractMethod("currentSet", outputs=("address",))
NEXT_SET = ContractMethod("nextSet", outputs=("address",))
MANAGER = ContractMethod("manager", outputs=("address",))
NAME = ContractMethod("name", outputs=("string",))
SYMBOL = ContractMethod("symbol", outputs=("string",))
UNIT_SHARES = ContractMethod("unitShares", outputs=("uint256",))
NATURAL_UNIT = ContractMethod("naturalUnit", outputs=("uint256",))
REBALANCE_INTERVAL = ContractMethod("rebalanceInterval", outputs=("uint256",))
LAST_REBALANCE_TIMESTAMP = ContractMethod("lastRebalanceTimestamp", outputs=("uint256",))
STARTING_CURRENT_SET_AMOUNT = ContractMethod("startingCurrentSetAmount", outputs=("uint256",))
# [auctionStartTime, auctionTimeToPivot, auctionStartPrice, auctionPivotPrice]
GET_AUCTION_PRICE_PARAMETERS = ContractMethod("getAuctionPriceParameters", outputs=("uint256[]",))
# [minimumBid, remainingCurrentSets]
GET_BIDDING_PARAMETERS = ContractMethod("getBiddingParameters", outputs=("uint256[]",))

# V1 only
AUCTION_LIBRARY = ContractMethod("auctionLibrary", outputs=("address",))
PROPOSAL_START_TIME = ContractMethod("proposalStartTime", outputs=("uint256",))

# V2 and V3
LIQUIDATOR = ContractMethod("liquidator", outputs=("address",))
REBALANCE_START_TIME = ContractMethod("rebalanceStartTime", outputs=("uint256",))
REBALANCE_FEE_CALCULATOR = ContractMethod("rebalanceFeeCalculator", outputs=("address",))
FEE_RECIPIENT = ContractMethod("feeRecipient", outputs=("address",))
ENTRY_FEE = ContractMethod("entryFee", outputs=("uint256",))
REBALANCE_FEE = ContractMethod("rebalanceFee", outputs=("uint256",))

# V3 only
REBALANCE_INDEX = ContractMethod("rebalanceIndex", outputs=("uint256",))

# =============================================================================
# Collateral sets (also answer NATURAL_UNIT, NAME, SYMBOL)
# =============================================================================

GET_COMPONENTS = ContractMethod("getComponents", outputs=("address[]",))
GET_UNITS = ContractMethod("getUnits", outputs=("uint256[]",))

# =============================================================================
# Fee modules, oracles
# =============================================================================

FEE_STATE = ContractMethod(
    "feeState",
    inputs=("address",),
    outputs=(
        "uint256",  # profitFeePeriod
        "uint256",  # highWatermarkResetPeriod
        "uint256",  # profitFeePercentage
        "uint256",  # streamingFeePercentage
        "uint256",  # highWatermark
        "uint256",  # lastProfitFeeTimestamp
        "uint256",  # lastStreamingFeeTimestamp
    ),
)
ORACLE_WHITE_LIST = ContractMethod("oracleWhiteList", outputs=("address",))
GET_ORACLE_ADDRESS_BY_TOKEN = ContractMethod(
    "getOracleAddressByToken", inputs=("address",), outputs=("address",)
)
ORACLE_READ = ContractMethod("read", outputs=("uint256",))

# =============================================================================
# Tokens, markets, managers
# =============================================================================

BALANCE_OF = ContractMethod("balanceOf", inputs=("address",), outputs=("uint256",))
TOTAL_SUPPLY = ContractMethod("totalSupply", outputs=("uint256",))
DECIMALS = ContractMethod("decimals", outputs=("uint8",))
EXCHANGE_RATE_STORED = ContractMethod("exchangeRateStored", outputs=("uint256",))
LAST_CROSSOVER_CONFIRMATION_TIMESTAMP = ContractMethod(
    "lastCrossoverConfirmationTimestamp", outputs=("uint256",)
)
RECENT_INITIAL_PROPOSE_TIMESTAMP = ContractMethod(
    "recentInitialProposeTimestamp", outputs=("uint256",)
)
POOLS = ContractMethod(
    "pools",
    inputs=("address",),
    outputs=("address", "address", "uint256", "uint256", "uint256"),
)

# Zero-argument basket accessors addressable by name (used by version probes)
BASKET_METHODS: dict[str, ContractMethod] = {
    method.name: method
    for method in (
        REBALANCE_STATE,
        CURRENT_SET,
        NEXT_SET,
        MANAGER,
        NAME,
        SYMBOL,
        UNIT_SHARES,
        NATURAL_UNIT,
        REBALANCE_INTERVAL,
        LAST_REBALANCE_TIMESTAMP,
        STARTING_CURRENT_SET_AMOUNT,
        GET_AUCTION_PRICE_PARAMETERS,
        GET_BIDDING_PARAMETERS,
        AUCTION_LIBRARY,
        PROPOSAL_START_TIME,
        LIQUIDATOR,
        REBALANCE_START_TIME,
        REBALANCE_FEE_CALCULATOR,
        FEE_RECIPIENT,
        ENTRY_FEE,
        REBALANCE_FEE,
        REBALANCE_INDEX,
    )
}
