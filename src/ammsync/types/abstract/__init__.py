from .chain_client import ChainClient
from .checkpoint import CheckpointSink
from .deployment import AbstractExchangeDeployment
from .liquidity_pool import AbstractLiquidityPool
from .pool_state import AbstractPoolState

__all__ = (
    "AbstractExchangeDeployment",
    "AbstractLiquidityPool",
    "AbstractPoolState",
    "ChainClient",
    "CheckpointSink",
)
