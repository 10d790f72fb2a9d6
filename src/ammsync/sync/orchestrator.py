import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING
from weakref import WeakSet

from ammsync.checkpoint import JsonCheckpointSink
from ammsync.constants import CHECKPOINT_FILENAME, DEFAULT_BLOCK_STEP, POOL_DATA_REQUEST_WEIGHT
from ammsync.logging import logger
from ammsync.sync.crawler import get_all_pools_from_exchange
from ammsync.sync.fetcher import get_all_pool_data
from ammsync.sync.messages import CheckpointWritten, ExchangeSynced
from ammsync.sync.tasks import gather_or_raise
from ammsync.throttle import RequestThrottle
from ammsync.types.aliases import BlockNumber
from ammsync.types.concrete import PublisherMixin, Subscriber
from ammsync.uniswap.exchange import Exchange, Pool

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient, CheckpointSink


class PoolSynchronizer(PublisherMixin):
    """
    Discovers the pools deployed by a set of exchanges, and optionally refreshes their state.

    Each exchange is processed concurrently. All requests made during a single call share one
    `RequestThrottle` built from `requests_per_second_limit` (0 disables throttling).

    Progress is published to subscribers as `ammsync.sync.messages` objects.
    """

    def __init__(
        self,
        client: "ChainClient",
        requests_per_second_limit: int = 0,
        *,
        block_step: int = DEFAULT_BLOCK_STEP,
        checkpoint_sink: "CheckpointSink | None" = None,
    ) -> None:
        self.client = client
        self.requests_per_second_limit = requests_per_second_limit
        self.block_step = block_step
        self.checkpoint_sink = (
            checkpoint_sink if checkpoint_sink is not None else JsonCheckpointSink()
        )
        self._subscribers: WeakSet[Subscriber] = WeakSet()

    async def _start(self) -> tuple[RequestThrottle, BlockNumber]:
        throttle = RequestThrottle(self.requests_per_second_limit)
        current_block = await self.client.current_height()
        logger.debug(f"Synchronizing pools through block {current_block}")
        return throttle, current_block

    async def _discover_exchange(
        self,
        exchange: Exchange,
        current_block: BlockNumber,
        throttle: RequestThrottle,
    ) -> list[Pool]:
        pools = await get_all_pools_from_exchange(
            exchange=exchange,
            client=self.client,
            current_block=current_block,
            throttle=throttle,
            step=self.block_step,
            notify=self._notify_subscribers,
        )
        self._notify_subscribers(ExchangeSynced(exchange=exchange, pool_count=len(pools)))
        return pools

    async def _sync_exchange(
        self,
        exchange: Exchange,
        current_block: BlockNumber,
        throttle: RequestThrottle,
    ) -> list[Pool]:
        pools = await get_all_pools_from_exchange(
            exchange=exchange,
            client=self.client,
            current_block=current_block,
            throttle=throttle,
            step=self.block_step,
            notify=self._notify_subscribers,
        )
        pools = await get_all_pool_data(
            pools=pools,
            exchange=exchange,
            client=self.client,
            throttle=throttle,
            weight=POOL_DATA_REQUEST_WEIGHT,
            notify=self._notify_subscribers,
        )
        self._notify_subscribers(ExchangeSynced(exchange=exchange, pool_count=len(pools)))
        return pools

    async def discover(self, exchanges: Iterable[Exchange]) -> list[Pool]:
        """
        Find every pool created by the exchanges, without retrieving pool state.
        """

        exchanges = list(exchanges)
        throttle, current_block = await self._start()
        results = await gather_or_raise(
            self._discover_exchange(exchange, current_block, throttle) for exchange in exchanges
        )
        return [pool for pools in results for pool in pools]

    async def sync(
        self,
        exchanges: Iterable[Exchange],
        save_checkpoint: bool = False,
        checkpoint_path: Path | str = CHECKPOINT_FILENAME,
    ) -> list[Pool]:
        """
        Find every pool created by the exchanges and refresh its state. Pools with unreadable state
        are left out of the result.

        If `save_checkpoint` is set, the exchanges and pools are written to `checkpoint_path`
        together with the chain height observed after the refresh.
        """

        exchanges = list(exchanges)
        throttle, current_block = await self._start()
        results = await gather_or_raise(
            self._sync_exchange(exchange, current_block, throttle) for exchange in exchanges
        )
        pools = [pool for pools in results for pool in pools]

        if save_checkpoint:
            closing_block = await self.client.current_height()
            await asyncio.to_thread(
                self.checkpoint_sink.write,
                exchanges=exchanges,
                pools=pools,
                block_number=closing_block,
                destination=checkpoint_path,
            )
            self._notify_subscribers(
                CheckpointWritten(
                    path=Path(checkpoint_path),
                    block_number=closing_block,
                    pool_count=len(pools),
                )
            )

        return pools


async def discover_pools(
    exchanges: Iterable[Exchange],
    client: "ChainClient",
    requests_per_second_limit: int = 0,
) -> list[Pool]:
    """
    Find every pool created by the exchanges, without retrieving pool state.
    """

    return await PoolSynchronizer(
        client=client,
        requests_per_second_limit=requests_per_second_limit,
    ).discover(exchanges)


async def sync_pools(
    exchanges: Iterable[Exchange],
    client: "ChainClient",
    requests_per_second_limit: int = 0,
    save_checkpoint: bool = False,
    checkpoint_path: Path | str = CHECKPOINT_FILENAME,
) -> list[Pool]:
    """
    Find every pool created by the exchanges and refresh its state, optionally writing a
    checkpoint.
    """

    return await PoolSynchronizer(
        client=client,
        requests_per_second_limit=requests_per_second_limit,
    ).sync(
        exchanges,
        save_checkpoint=save_checkpoint,
        checkpoint_path=checkpoint_path,
    )
