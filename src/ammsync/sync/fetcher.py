from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from ammsync.constants import POOL_DATA_REQUEST_WEIGHT
from ammsync.exceptions import ItemError
from ammsync.logging import logger
from ammsync.sync.messages import PoolDataFetchStarted, PoolSkipped, PoolStateRefreshed
from ammsync.throttle import RequestThrottle
from ammsync.types.aliases import Weight
from ammsync.types.concrete import AbstractPublisherMessage
from ammsync.uniswap.exchange import Exchange, Pool

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


async def get_all_pool_data(
    pools: Iterable[Pool],
    exchange: Exchange,
    client: "ChainClient",
    throttle: RequestThrottle,
    weight: Weight = POOL_DATA_REQUEST_WEIGHT,
    *,
    notify: Callable[[AbstractPublisherMessage], None] | None = None,
) -> list[Pool]:
    """
    Refresh the on-chain state of each pool, one at a time.

    A pool that fails with an `ItemError` is left out of the result. Any other exception, including
    an `InfrastructureError`, aborts the pass and propagates.
    """

    pools = list(pools)
    if notify is not None:
        notify(PoolDataFetchStarted(exchange=exchange, pool_count=len(pools)))

    refreshed: list[Pool] = []
    skipped = 0
    for pool in pools:
        await throttle.reserve(weight)
        try:
            await pool.refresh_state(client)
        except ItemError as exc:
            skipped += 1
            logger.debug(f"{exchange.name}: skipping pool {pool.address}: {exc}")
            if notify is not None:
                notify(PoolSkipped(exchange=exchange, pool=pool.address, reason=str(exc)))
            continue

        refreshed.append(pool)
        if notify is not None:
            notify(PoolStateRefreshed(exchange=exchange, pool=pool.address))

    if skipped:
        logger.info(f"{exchange.name}: skipped {skipped} pool(s) with unreadable state")
    return refreshed
