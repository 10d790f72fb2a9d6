import json
import threading

import pytest

from ammsync.checkpoint import load_checkpoint
from ammsync.constants import CHECKPOINT_FILENAME
from ammsync.exceptions import (
    BlockHeightFetchingError,
    ContractCallError,
    LogFetchingError,
    PoolDecodeError,
    WorkerFault,
)
from ammsync.sync.messages import CheckpointWritten, ExchangeSynced
from ammsync.sync.orchestrator import PoolSynchronizer, discover_pools, sync_pools
from ammsync.uniswap.exchange import Exchange
from ammsync.uniswap.v2_liquidity_pool import UniswapV2Pool
from ammsync.uniswap.v3_liquidity_pool import UniswapV3Pool
from tests.conftest import FakeSubscriber
from tests.fakes import (
    GET_RESERVES_CALLDATA,
    FailingHeightClient,
    FakeChainClient,
    make_address,
    v2_pair_created_log,
    v3_pool_created_log,
)

TOKEN_A = make_address(0xA)
TOKEN_B = make_address(0xB)
TOKEN_C = make_address(0xC)
HEIGHT = 250_000


@pytest.fixture
def client(v2_exchange: Exchange, v3_exchange: Exchange) -> FakeChainClient:
    client = FakeChainClient(height=HEIGHT)
    client.set_token(TOKEN_A, decimals=18)
    client.set_token(TOKEN_B, decimals=6)
    client.set_token(TOKEN_C, decimals=8)

    for i, block_number in enumerate([10, 100_000, 180_000, HEIGHT]):
        pair = make_address(0x2000 + i)
        client.logs.append(
            v2_pair_created_log(
                factory=v2_exchange.factory_address,
                token0=TOKEN_A,
                token1=TOKEN_B,
                pair=pair,
                block_number=block_number,
                pair_index=i + 1,
            )
        )
        client.set_v2_pool(pair, reserves0=10**18, reserves1=2 * 10**6)

    for i, block_number in enumerate([50, 199_999, 200_000]):
        pool = make_address(0x3000 + i)
        client.logs.append(
            v3_pool_created_log(
                factory=v3_exchange.factory_address,
                token0=TOKEN_B,
                token1=TOKEN_C,
                fee=3000,
                tick_spacing=60,
                pool=pool,
                block_number=block_number,
            )
        )
        client.set_v3_pool(pool, sqrt_price_x96=2**96, tick=0, liquidity=10**12)

    return client


async def test_discover_pools(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    pools = await discover_pools([v2_exchange, v3_exchange], client)

    assert len(pools) == 7
    assert len([pool for pool in pools if isinstance(pool, UniswapV2Pool)]) == 4
    assert len([pool for pool in pools if isinstance(pool, UniswapV3Pool)]) == 3
    assert client.height_queries == 1
    # discovery does not fetch pool state
    assert client.calls == []


async def test_discover_is_idempotent(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    first = await discover_pools([v2_exchange, v3_exchange], client)
    second = await discover_pools([v3_exchange, v2_exchange], client)
    assert set(first) == set(second)


async def test_height_is_queried_once_for_all_exchanges(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    await discover_pools([v2_exchange, v3_exchange], client)

    assert client.height_queries == 1
    assert max(to_block for _, to_block in client.log_queries) == HEIGHT


async def test_height_failure_fails_the_call(v2_exchange: Exchange):
    client = FailingHeightClient()

    with pytest.raises(BlockHeightFetchingError):
        await discover_pools([v2_exchange], client)
    with pytest.raises(BlockHeightFetchingError):
        await sync_pools([v2_exchange], client)
    assert client.log_queries == []


async def test_no_exchanges(client: FakeChainClient):
    assert await discover_pools([], client) == []


async def test_decode_error_in_one_exchange_fails_discovery(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    client.logs[-1]["data"] = b""

    with pytest.raises(PoolDecodeError):
        await discover_pools([v2_exchange, v3_exchange], client)


async def test_log_error_fails_discovery(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    client.log_errors[200_000] = LogFetchingError(from_block=200_000, to_block=300_000)

    with pytest.raises(LogFetchingError):
        await discover_pools([v2_exchange, v3_exchange], client)


async def test_worker_fault_is_raised_to_caller(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    client.log_errors[0] = TypeError("unexpected response")

    with pytest.raises(WorkerFault) as exc_info:
        await discover_pools([v2_exchange, v3_exchange], client)
    assert isinstance(exc_info.value.fault, TypeError)


async def test_sync_pools_refreshes_state(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    pools = await sync_pools([v2_exchange, v3_exchange], client)

    assert len(pools) == 7
    for pool in pools:
        match pool:
            case UniswapV2Pool():
                assert pool.token0_decimals == 18
                assert pool.reserves_token0 == 10**18
                assert pool.reserves_token1 == 2 * 10**6
            case UniswapV3Pool():
                assert pool.token1_decimals == 8
                assert pool.sqrt_price_x96 == 2**96
                assert pool.liquidity == 10**12
    assert client.height_queries == 1


async def test_sync_pools_skips_unreadable_pool(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    bad_pool = make_address(0x2001)
    del client.call_responses[(bad_pool, GET_RESERVES_CALLDATA)]

    pools = await sync_pools([v2_exchange, v3_exchange], client)

    assert len(pools) == 6
    assert bad_pool not in pools


async def test_sync_pools_infrastructure_error_fails_the_call(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange
):
    bad_pool = make_address(0x2001)
    client.call_responses[(bad_pool, GET_RESERVES_CALLDATA)] = ContractCallError(address=bad_pool)

    with pytest.raises(ContractCallError):
        await sync_pools([v2_exchange, v3_exchange], client)


async def test_sync_pools_writes_checkpoint(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange, tmp_path
):
    checkpoint_path = tmp_path / CHECKPOINT_FILENAME

    class AdvancingClient(FakeChainClient):
        async def current_height(self) -> int:
            height = await super().current_height()
            self.height += 5
            return height

    advancing = AdvancingClient(height=HEIGHT, logs=client.logs)
    advancing.call_responses = client.call_responses

    pools = await sync_pools(
        [v2_exchange, v3_exchange],
        advancing,
        save_checkpoint=True,
        checkpoint_path=checkpoint_path,
    )

    assert advancing.height_queries == 2
    exchanges, checkpoint_pools, block_number = load_checkpoint(checkpoint_path)
    assert block_number == HEIGHT + 5
    assert set(checkpoint_pools) == set(pools)
    assert exchanges == [v2_exchange, v3_exchange]

    contents = json.loads(checkpoint_path.read_text())
    assert contents["block_number"] == HEIGHT + 5
    assert len(contents["pools"]) == len(pools)


async def test_no_checkpoint_unless_requested(
    client: FakeChainClient, v2_exchange: Exchange, tmp_path
):
    checkpoint_path = tmp_path / CHECKPOINT_FILENAME
    await sync_pools([v2_exchange], client, checkpoint_path=checkpoint_path)
    assert not checkpoint_path.exists()
    assert client.height_queries == 1


async def test_no_checkpoint_on_failed_run(
    client: FakeChainClient, v2_exchange: Exchange, tmp_path
):
    checkpoint_path = tmp_path / CHECKPOINT_FILENAME
    client.log_errors[0] = LogFetchingError(from_block=0, to_block=100_000)

    with pytest.raises(LogFetchingError):
        await sync_pools(
            [v2_exchange], client, save_checkpoint=True, checkpoint_path=checkpoint_path
        )
    assert not checkpoint_path.exists()


async def test_custom_checkpoint_sink(client: FakeChainClient, v2_exchange: Exchange):
    written = []

    class RecordingSink:
        def write(self, exchanges, pools, block_number, destination):  # noqa: ANN001
            written.append((exchanges, pools, block_number, destination))

    synchronizer = PoolSynchronizer(client=client, checkpoint_sink=RecordingSink())
    pools = await synchronizer.sync([v2_exchange], save_checkpoint=True)

    ((exchanges, checkpoint_pools, block_number, destination),) = written
    assert exchanges == [v2_exchange]
    assert checkpoint_pools == pools
    assert block_number == HEIGHT
    assert destination == CHECKPOINT_FILENAME


async def test_checkpoint_is_written_off_the_event_loop_thread(
    client: FakeChainClient, v2_exchange: Exchange
):
    writer_threads = []

    class ThreadRecordingSink:
        def write(self, exchanges, pools, block_number, destination):  # noqa: ANN001
            writer_threads.append(threading.current_thread())

    synchronizer = PoolSynchronizer(client=client, checkpoint_sink=ThreadRecordingSink())
    await synchronizer.sync([v2_exchange], save_checkpoint=True)

    (writer_thread,) = writer_threads
    assert writer_thread is not threading.current_thread()


async def test_synchronizer_publishes_progress(
    client: FakeChainClient, v2_exchange: Exchange, v3_exchange: Exchange, tmp_path
):
    synchronizer = PoolSynchronizer(client=client, block_step=50_000)
    subscriber = FakeSubscriber()
    subscriber.subscribe(synchronizer)

    await synchronizer.sync(
        [v2_exchange, v3_exchange],
        save_checkpoint=True,
        checkpoint_path=tmp_path / "checkpoint.json",
    )

    assert all(entry["from"] is synchronizer for entry in subscriber.inbox)
    synced = subscriber.messages_of_type(ExchangeSynced)
    assert {message.exchange.name: message.pool_count for message in synced} == {
        v2_exchange.name: 4,
        v3_exchange.name: 3,
    }
    (checkpoint_message,) = subscriber.messages_of_type(CheckpointWritten)
    assert checkpoint_message.pool_count == 7
    assert max(to_block for _, to_block in client.log_queries) == HEIGHT
    assert len(client.log_queries) == 2 * 6

    synchronizer.unsubscribe(subscriber)
    subscriber.inbox.clear()
    await synchronizer.discover([v2_exchange])
    assert subscriber.inbox == []
