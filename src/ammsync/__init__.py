from .checksum_cache import get_checksum_address
from .config import settings
from .connection import (
    Web3ChainClient,
    async_connection_manager,
    get_async_web3,
    get_chain_client,
    set_async_web3,
)
from .version import __version__

# isort: split

from . import checkpoint, constants, exceptions, functions, sync, types, uniswap
from .checkpoint import Checkpoint, JsonCheckpointSink, construct_checkpoint, load_checkpoint
from .logging import logger
from .sync import (
    PoolSynchronizer,
    TqdmProgressSubscriber,
    discover_pools,
    get_all_pool_data,
    get_all_pools_from_exchange,
    sync_pools,
)
from .throttle import RequestThrottle
from .uniswap import Exchange, ExchangeVariant, UniswapV2Pool, UniswapV3Pool
from .uniswap.deployments import get_exchange, register_exchange

__all__ = (
    "Checkpoint",
    "Exchange",
    "ExchangeVariant",
    "JsonCheckpointSink",
    "PoolSynchronizer",
    "RequestThrottle",
    "TqdmProgressSubscriber",
    "UniswapV2Pool",
    "UniswapV3Pool",
    "Web3ChainClient",
    "__version__",
    "async_connection_manager",
    "checkpoint",
    "constants",
    "construct_checkpoint",
    "discover_pools",
    "exceptions",
    "functions",
    "get_all_pool_data",
    "get_all_pools_from_exchange",
    "get_async_web3",
    "get_chain_client",
    "get_checksum_address",
    "get_exchange",
    "load_checkpoint",
    "logger",
    "register_exchange",
    "settings",
    "sync",
    "sync_pools",
    "types",
    "uniswap",
)
