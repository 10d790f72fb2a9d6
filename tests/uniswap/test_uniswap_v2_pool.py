import pytest

from ammsync.exceptions import ContractCallError, ContractCallReverted, PoolStateError
from ammsync.uniswap.v2_liquidity_pool import UniswapV2Pool
from ammsync.uniswap.v2_types import UniswapV2PoolState
from tests.fakes import (
    DECIMALS_CALLDATA,
    GET_RESERVES_CALLDATA,
    FakeChainClient,
    make_address,
)

POOL_ADDRESS = make_address(0x2000)
TOKEN_A = make_address(0xA)
TOKEN_B = make_address(0xB)
FACTORY = make_address(0xFAC2)


@pytest.fixture
def pool() -> UniswapV2Pool:
    return UniswapV2Pool(
        address=POOL_ADDRESS.lower(),
        token0=TOKEN_A,
        token1=TOKEN_B,
        factory=FACTORY,
        chain_id=1,
    )


@pytest.fixture
def client() -> FakeChainClient:
    client = FakeChainClient()
    client.set_token(TOKEN_A, decimals=18)
    client.set_token(TOKEN_B, decimals=6)
    client.set_v2_pool(POOL_ADDRESS, reserves0=16_231_137_593_615_000, reserves1=2_571_336)
    return client


def test_pool_attributes(pool: UniswapV2Pool):
    assert pool.address == POOL_ADDRESS
    assert pool.fee == 3000
    assert pool.token0_decimals is None
    assert pool.state == UniswapV2PoolState(
        address=POOL_ADDRESS, block=None, reserves_token0=0, reserves_token1=0
    )
    assert "0.30%" in pool.name


def test_pool_equality(pool: UniswapV2Pool):
    same = UniswapV2Pool(
        address=POOL_ADDRESS, token0=TOKEN_A, token1=TOKEN_B, factory=FACTORY, chain_id=1
    )
    other = UniswapV2Pool(
        address=make_address(0x2001), token0=TOKEN_A, token1=TOKEN_B, factory=FACTORY, chain_id=1
    )

    assert pool == same
    assert pool != other
    assert pool == POOL_ADDRESS.lower()
    assert pool == bytes.fromhex(POOL_ADDRESS[2:])
    assert len({pool, same, other}) == 2
    assert pool < other


async def test_refresh_state(pool: UniswapV2Pool, client: FakeChainClient):
    await pool.refresh_state(client)

    assert pool.token0_decimals == 18
    assert pool.token1_decimals == 6
    assert pool.reserves_token0 == 16_231_137_593_615_000
    assert pool.reserves_token1 == 2_571_336
    assert pool.update_block is None


async def test_refresh_state_at_block(pool: UniswapV2Pool, client: FakeChainClient):
    await pool.refresh_state(client, block_identifier=21_000_000)
    assert pool.update_block == 21_000_000


async def test_refresh_replaces_state(pool: UniswapV2Pool, client: FakeChainClient):
    initial_state = pool.state
    await pool.refresh_state(client)
    assert pool.state is not initial_state
    assert initial_state.reserves_token0 == 0


async def test_get_reserves(pool: UniswapV2Pool, client: FakeChainClient):
    assert await pool.get_reserves(client) == (16_231_137_593_615_000, 2_571_336)


async def test_malformed_reserves_raise_pool_state_error(
    pool: UniswapV2Pool, client: FakeChainClient
):
    client.call_responses[(POOL_ADDRESS, GET_RESERVES_CALLDATA)] = b"\x00" * 16

    with pytest.raises(PoolStateError) as exc_info:
        await pool.refresh_state(client)
    assert exc_info.value.pool == POOL_ADDRESS
    # a failed refresh leaves the previous state in place
    assert pool.reserves_token0 == 0
    assert pool.token0_decimals is None


async def test_oversized_decimals_raise_pool_state_error(
    pool: UniswapV2Pool, client: FakeChainClient
):
    client.call_responses[(TOKEN_A, DECIMALS_CALLDATA)] = (256).to_bytes(32, "big")

    with pytest.raises(PoolStateError):
        await pool.refresh_state(client)


async def test_reverting_pool(pool: UniswapV2Pool, client: FakeChainClient):
    del client.call_responses[(POOL_ADDRESS, GET_RESERVES_CALLDATA)]

    with pytest.raises(ContractCallReverted):
        await pool.refresh_state(client)


async def test_transport_failure_propagates(pool: UniswapV2Pool, client: FakeChainClient):
    client.call_responses[(TOKEN_B, DECIMALS_CALLDATA)] = ContractCallError(address=TOKEN_B)

    with pytest.raises(ContractCallError):
        await pool.refresh_state(client)
