from . import crawler, fetcher, messages, orchestrator
from .crawler import block_windows, get_all_pools_from_exchange
from .fetcher import get_all_pool_data
from .orchestrator import PoolSynchronizer, discover_pools, sync_pools
from .progress import TqdmProgressSubscriber

__all__ = (
    "PoolSynchronizer",
    "TqdmProgressSubscriber",
    "block_windows",
    "crawler",
    "discover_pools",
    "fetcher",
    "get_all_pool_data",
    "get_all_pools_from_exchange",
    "messages",
    "orchestrator",
    "sync_pools",
)
