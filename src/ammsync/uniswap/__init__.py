from . import deployments, exchange
from .exchange import Exchange, Pool
from .types import ExchangeVariant
from .v2_liquidity_pool import UniswapV2Pool
from .v3_liquidity_pool import UniswapV3Pool

__all__ = (
    "Exchange",
    "ExchangeVariant",
    "Pool",
    "UniswapV2Pool",
    "UniswapV3Pool",
    "deployments",
    "exchange",
)
