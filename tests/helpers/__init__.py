"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Entity addresses and common values
- ledger: In-memory FakeLedger transport
- factories: Functions deploying fake entities onto a FakeLedger
"""

from tests.helpers.constants import (
    ASSET_PAIR_MANAGER,
    ASSET_PAIR_TIMESTAMP,
    AUCTION_LIBRARY,
    BASKET_V1,
    BASKET_V2,
    BASKET_V3,
    BASKET_V3_B,
    CDAI,
    CDAI_EXCHANGE_RATE,
    COLLATERAL_SET,
    COLLATERAL_SET_NEXT,
    DAI,
    EMPTY_ACCOUNT,
    FEE_RECIPIENT,
    FIXED_FEE_MODULE,
    GENESIS_BLOCK,
    GENESIS_TIMESTAMP,
    LIQUIDATOR,
    MACO_MANAGER,
    MACO_TIMESTAMP,
    MANAGER,
    ONE,
    OWNER_1,
    OWNER_2,
    PERFORMANCE_FEE_MODULE,
    PROFIT_FEE_PERCENTAGE,
    STREAMING_FEE_PERCENTAGE,
    TRADER,
    TRADING_MANAGER,
    TRADING_MANAGER_B,
    USDC,
    USDC_ORACLE,
    USDC_PRICE,
    WBTC,
    WETH,
    WETH_ORACLE,
    WETH_PRICE,
)
from tests.helpers.factories import (
    deploy_basket,
    deploy_collateral_set,
    deploy_ctoken,
    deploy_manager,
    deploy_oracle,
    deploy_oracle_whitelist,
    deploy_performance_fee_module,
    deploy_token,
    deploy_trading_manager,
    deploy_world,
    fee_state_values,
    propose,
    settle,
    start_rebalance,
)
from tests.helpers.ledger import FakeContract, FakeLedger

__all__ = [
    # Constants
    "AUCTION_LIBRARY",
    "WETH",
    "USDC",
    "WBTC",
    "DAI",
    "BASKET_V1",
    "BASKET_V2",
    "BASKET_V3",
    "BASKET_V3_B",
    "CDAI",
    "COLLATERAL_SET",
    "COLLATERAL_SET_NEXT",
    "EMPTY_ACCOUNT",
    "FEE_RECIPIENT",
    "FIXED_FEE_MODULE",
    "GENESIS_BLOCK",
    "GENESIS_TIMESTAMP",
    "LIQUIDATOR",
    "MANAGER",
    "ONE",
    "OWNER_1",
    "OWNER_2",
    "PERFORMANCE_FEE_MODULE",
    "TRADER",
    "TRADING_MANAGER",
    "TRADING_MANAGER_B",
    "USDC_ORACLE",
    "WETH_ORACLE",
    "WETH_PRICE",
    "USDC_PRICE",
    "STREAMING_FEE_PERCENTAGE",
    "PROFIT_FEE_PERCENTAGE",
    "MACO_MANAGER",
    "ASSET_PAIR_MANAGER",
    "MACO_TIMESTAMP",
    "ASSET_PAIR_TIMESTAMP",
    "CDAI_EXCHANGE_RATE",
    # Ledger
    "FakeLedger",
    "FakeContract",
    # Factories
    "deploy_basket",
    "deploy_collateral_set",
    "deploy_ctoken",
    "deploy_manager",
    "deploy_oracle",
    "deploy_oracle_whitelist",
    "deploy_performance_fee_module",
    "deploy_token",
    "deploy_trading_manager",
    "deploy_world",
    "fee_state_values",
    "propose",
    "settle",
    "start_rebalance",
]
