import enum


class ExchangeVariant(enum.Enum):
    """
    The protocol family of an exchange. Each variant has its own pool creation event and pool type.
    """

    UNISWAP_V2 = "uniswap_v2"  # constant product
    UNISWAP_V3 = "uniswap_v3"  # concentrated liquidity

    @property
    def pool_created_event(self) -> str:
        match self:
            case ExchangeVariant.UNISWAP_V2:
                return "PairCreated(address,address,address,uint256)"
            case ExchangeVariant.UNISWAP_V3:
                return "PoolCreated(address,address,uint24,int24,address)"
