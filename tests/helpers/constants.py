"""Shared address and value constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import WETH, USDC
    # or
    from tests.helpers.constants import WETH, USDC
"""

# =============================================================================
# Collateral components (real mainnet token addresses)
# =============================================================================

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"  # Wrapped Bitcoin (8 decimals)
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Dai Stablecoin (18 decimals)

TOKEN_DECIMALS = {
    WETH: 18,
    USDC: 6,
    WBTC: 8,
    DAI: 18,
}

# =============================================================================
# Fake ledger entities
# =============================================================================

BASKET_V1 = "0x" + "b1" * 20
BASKET_V2 = "0x" + "b2" * 20
BASKET_V3 = "0x" + "b3" * 20
BASKET_V3_B = "0x" + "b4" * 20

COLLATERAL_SET = "0x" + "c1" * 20
COLLATERAL_SET_NEXT = "0x" + "c2" * 20

MANAGER = "0x" + "a1" * 20
TRADING_MANAGER = "0x" + "a2" * 20
TRADING_MANAGER_B = "0x" + "a8" * 20
LIQUIDATOR = "0x" + "a3" * 20
AUCTION_LIBRARY = "0x" + "a4" * 20
FEE_RECIPIENT = "0x" + "a5" * 20

FIXED_FEE_MODULE = "0x" + "f1" * 20
PERFORMANCE_FEE_MODULE = "0x" + "f2" * 20
ORACLE_WHITELIST = "0x" + "e0" * 20
WETH_ORACLE = "0x" + "e1" * 20
USDC_ORACLE = "0x" + "e2" * 20

CDAI = "0x" + "cd" * 20

OWNER_1 = "0x" + "01" * 20
OWNER_2 = "0x" + "02" * 20
TRADER = "0x" + "03" * 20

# Address with no code on the fake ledger
EMPTY_ACCOUNT = "0x" + "de" * 20

# =============================================================================
# Common values
# =============================================================================

ONE = 10**18
GENESIS_TIMESTAMP = 1_600_000_000
GENESIS_BLOCK = 11_000_000

# Standard world (see factories.deploy_world)
WETH_PRICE = 2_000 * ONE
USDC_PRICE = ONE
STREAMING_FEE_PERCENTAGE = 2 * 10**16  # 2% per year
PROFIT_FEE_PERCENTAGE = 10**17  # 10% of gains

MACO_MANAGER = "0x" + "a6" * 20
ASSET_PAIR_MANAGER = "0x" + "a7" * 20
MACO_TIMESTAMP = GENESIS_TIMESTAMP - 3_600
ASSET_PAIR_TIMESTAMP = GENESIS_TIMESTAMP - 7_200

CDAI_EXCHANGE_RATE = 205_000_000_000_000_000_000_000_000


__all__ = [
    "WETH",
    "USDC",
    "WBTC",
    "DAI",
    "TOKEN_DECIMALS",
    "BASKET_V1",
    "BASKET_V2",
    "BASKET_V3",
    "BASKET_V3_B",
    "COLLATERAL_SET",
    "COLLATERAL_SET_NEXT",
    "MANAGER",
    "TRADING_MANAGER",
    "TRADING_MANAGER_B",
    "LIQUIDATOR",
    "AUCTION_LIBRARY",
    "FEE_RECIPIENT",
    "FIXED_FEE_MODULE",
    "PERFORMANCE_FEE_MODULE",
    "ORACLE_WHITELIST",
    "WETH_ORACLE",
    "USDC_ORACLE",
    "CDAI",
    "OWNER_1",
    "OWNER_2",
    "TRADER",
    "EMPTY_ACCOUNT",
    "ONE",
    "GENESIS_TIMESTAMP",
    "GENESIS_BLOCK",
    "WETH_PRICE",
    "USDC_PRICE",
    "STREAMING_FEE_PERCENTAGE",
    "PROFIT_FEE_PERCENTAGE",
    "MACO_MANAGER",
    "ASSET_PAIR_MANAGER",
    "MACO_TIMESTAMP",
    "ASSET_PAIR_TIMESTAMP",
    "CDAI_EXCHANGE_RATE",
]
