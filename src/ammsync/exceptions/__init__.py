from ammsync.exceptions.base import (
    AmmSyncError,
    AmmSyncValueError,
    InfrastructureError,
    ItemError,
)
from ammsync.exceptions.checkpoint import CheckpointError
from ammsync.exceptions.connection import (
    ChainConnectionError,
    ConnectionTimeout,
    Web3ConnectionTimeout,
)
from ammsync.exceptions.exchange import ExchangeAlreadyRegistered, PoolDecodeError, UnknownExchange
from ammsync.exceptions.fetching import (
    BlockHeightFetchingError,
    ContractCallError,
    FetchingError,
    LogFetchingError,
)
from ammsync.exceptions.liquidity_pool import (
    ContractCallReverted,
    LiquidityPoolError,
    PoolStateError,
)
from ammsync.exceptions.sync import WorkerFault

from . import checkpoint, connection, exchange, fetching, liquidity_pool, sync

__all__ = (
    "AmmSyncError",
    "AmmSyncValueError",
    "BlockHeightFetchingError",
    "ChainConnectionError",
    "CheckpointError",
    "ConnectionTimeout",
    "ContractCallError",
    "ContractCallReverted",
    "ExchangeAlreadyRegistered",
    "FetchingError",
    "InfrastructureError",
    "ItemError",
    "LiquidityPoolError",
    "LogFetchingError",
    "PoolDecodeError",
    "PoolStateError",
    "UnknownExchange",
    "Web3ConnectionTimeout",
    "WorkerFault",
    "checkpoint",
    "connection",
    "exchange",
    "fetching",
    "liquidity_pool",
    "sync",
)
