from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from ammsync.constants import DEFAULT_BLOCK_STEP, LOG_REQUEST_WEIGHT
from ammsync.exceptions import AmmSyncValueError
from ammsync.logging import logger
from ammsync.sync.messages import BlockWindowFetched, CrawlStarted
from ammsync.sync.tasks import gather_or_raise
from ammsync.throttle import RequestThrottle
from ammsync.types.aliases import BlockNumber
from ammsync.types.concrete import AbstractPublisherMessage
from ammsync.uniswap.exchange import Exchange, Pool

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


def block_windows(
    start_block: BlockNumber,
    end_block: BlockNumber,
    step: int = DEFAULT_BLOCK_STEP,
) -> Iterator[tuple[BlockNumber, BlockNumber]]:
    """
    Yield the (from, to) bounds of each window covering `start_block` through `end_block`.

    Adjacent windows share an edge block, e.g. [0, 100_000] and [100_000, 200_000]. The final
    upper edge may exceed `end_block`.
    """

    if step <= 0:
        raise AmmSyncValueError(message=f"Block step must be positive, got {step}.")

    for from_block in range(start_block, end_block + 1, step):
        yield from_block, from_block + step


async def _crawl_window(
    exchange: Exchange,
    client: "ChainClient",
    throttle: RequestThrottle,
    from_block: BlockNumber,
    to_block: BlockNumber,
    head_block: BlockNumber,
    notify: Callable[[AbstractPublisherMessage], None] | None,
) -> list[Pool]:
    await throttle.reserve(LOG_REQUEST_WEIGHT)

    # Queries never extend past the chain head
    query_to_block = min(to_block, head_block)
    logger.debug(f"{exchange.name}: fetching pool creation logs for {from_block}-{query_to_block}")
    logs = await client.get_logs(
        address=exchange.factory_address,
        topic=exchange.pool_created_topic,
        from_block=from_block,
        to_block=query_to_block,
    )

    # The upper edge belongs to the next window
    pools = [
        exchange.decode_pool(log) for log in logs if from_block <= log["blockNumber"] < to_block
    ]

    if notify is not None:
        notify(
            BlockWindowFetched(
                exchange=exchange,
                from_block=from_block,
                to_block=to_block,
                pool_count=len(pools),
            )
        )
    return pools


async def get_all_pools_from_exchange(
    exchange: Exchange,
    client: "ChainClient",
    current_block: BlockNumber,
    throttle: RequestThrottle,
    step: int = DEFAULT_BLOCK_STEP,
    *,
    notify: Callable[[AbstractPublisherMessage], None] | None = None,
) -> list[Pool]:
    """
    Discover every pool created by the exchange's factory from its creation block through
    `current_block`.

    The range is split into windows of `step` blocks which are fetched concurrently. Any window
    failure aborts the crawl: a reported error is raised unchanged, and an unexpected exception is
    raised as `WorkerFault`. Pools are returned empty; call `refresh_state` to populate them.
    """

    windows = list(block_windows(exchange.creation_block, current_block, step))

    logger.debug(
        f"{exchange.name}: crawling blocks {exchange.creation_block}-{current_block} "
        f"in {len(windows)} window(s)"
    )
    if notify is not None:
        notify(
            CrawlStarted(
                exchange=exchange,
                from_block=exchange.creation_block,
                to_block=current_block,
                window_count=len(windows),
            )
        )

    window_pools = await gather_or_raise(
        _crawl_window(
            exchange=exchange,
            client=client,
            throttle=throttle,
            from_block=from_block,
            to_block=to_block,
            head_block=current_block,
            notify=notify,
        )
        for from_block, to_block in windows
    )

    pools = [pool for pools in window_pools for pool in pools]
    logger.info(f"{exchange.name}: found {len(pools)} pools")
    return pools
