"""API endpoints for the basket viewer."""

import asyncio
import os
from collections.abc import Callable
from functools import lru_cache, partial
from typing import TypeVar

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from viewer.composer import BatchComposer
from viewer.constants import MAX_BATCH_SIZE
from viewer.fetchers import BatchFetcher, ManagerKind
from viewer.ledger.transport import LedgerTransport, Web3Transport
from viewer.models.state import CompositeRecord, FeeState
from viewer.models.types import Address, Uint

logger = structlog.get_logger()

router = APIRouter()

T = TypeVar("T")

# Ledger RPC endpoint, configurable via environment variable VIEWER_RPC_URL
RPC_URL = os.environ.get("VIEWER_RPC_URL", "http://localhost:8545")


# =============================================================================
# Request / response bodies
# =============================================================================


class BasketsRequest(BaseModel):
    baskets: list[Address] = Field(max_length=MAX_BATCH_SIZE)


class TokenBalancesRequest(BaseModel):
    tokens: list[Address] = Field(max_length=MAX_BATCH_SIZE)
    owner: Address


class TokensRequest(BaseModel):
    tokens: list[Address] = Field(max_length=MAX_BATCH_SIZE)


class UserBalancesRequest(BaseModel):
    """Parallel token/owner lists, paired index-wise."""

    tokens: list[Address] = Field(max_length=MAX_BATCH_SIZE)
    owners: list[Address] = Field(max_length=MAX_BATCH_SIZE)


class OraclesRequest(BaseModel):
    oracles: list[Address] = Field(max_length=MAX_BATCH_SIZE)


class CTokensRequest(BaseModel):
    ctokens: list[Address] = Field(max_length=MAX_BATCH_SIZE)


class ManagersRequest(BaseModel):
    managers: list[Address] = Field(max_length=MAX_BATCH_SIZE)
    kind: ManagerKind


class ValuesResponse(BaseModel):
    """Integer results in request order, as decimal strings."""

    values: list[Uint]


# =============================================================================
# Dependency providers
# =============================================================================


@lru_cache(maxsize=1)
def get_transport() -> LedgerTransport:
    """Shared ledger transport for the configured RPC endpoint."""
    return Web3Transport(RPC_URL)


def get_composer() -> BatchComposer:
    """Dependency provider for the basket composer.

    Override this in tests to inject a composer over a fake ledger:
        app.dependency_overrides[get_composer] = lambda: composer
    """
    return BatchComposer(get_transport())


def get_fetcher() -> BatchFetcher:
    """Dependency provider for the simple batch fetcher."""
    return BatchFetcher(get_transport())


async def _run(func: Callable[..., T], *args: object) -> T:
    # Ledger reads are blocking; keep them off the event loop
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))


# =============================================================================
# Baskets
# =============================================================================


@router.get("/baskets/{address}")
async def get_basket(
    address: str,
    composer: BatchComposer = Depends(get_composer),
) -> CompositeRecord:
    """Composite record of one basket."""
    logger.info("basket_requested", basket=address)
    return await _run(composer.fetch_one, address)


@router.post("/baskets")
async def get_baskets(
    request: BasketsRequest,
    composer: BatchComposer = Depends(get_composer),
) -> list[CompositeRecord]:
    """Composite records of many baskets, in request order."""
    logger.info("baskets_requested", count=len(request.baskets))
    return await _run(composer.fetch_many, request.baskets)


@router.get("/baskets/{address}/fees")
async def get_basket_fees(
    address: str,
    composer: BatchComposer = Depends(get_composer),
) -> FeeState:
    """Performance-fee state of one basket (409 when it has none)."""
    return await _run(composer.fetch_fee_state, address)


# =============================================================================
# Tokens, oracles, markets, managers
# =============================================================================


@router.post("/tokens/balances")
async def get_token_balances(
    request: TokenBalancesRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_balances, request.tokens, request.owner)
    return ValuesResponse(values=values)


@router.post("/tokens/supplies")
async def get_token_supplies(
    request: TokensRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_supplies, request.tokens)
    return ValuesResponse(values=values)


@router.post("/tokens/user-balances")
async def get_user_balances(
    request: UserBalancesRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_user_balances, request.tokens, request.owners)
    return ValuesResponse(values=values)


@router.post("/oracles/prices")
async def get_oracle_prices(
    request: OraclesRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_oracle_prices, request.oracles)
    return ValuesResponse(values=values)


@router.post("/ctokens/exchange-rates")
async def get_exchange_rates(
    request: CTokensRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_exchange_rates, request.ctokens)
    return ValuesResponse(values=values)


@router.post("/managers/timestamps")
async def get_manager_timestamps(
    request: ManagersRequest,
    fetcher: BatchFetcher = Depends(get_fetcher),
) -> ValuesResponse:
    values = await _run(fetcher.batch_manager_timestamps, request.managers, request.kind)
    return ValuesResponse(values=values)
