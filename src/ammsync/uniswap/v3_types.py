import dataclasses

from ammsync.types.abstract import AbstractPoolState

type Pip = int  # V3 pool fees are expressed in pips equaling one hundredth of 1 bip
type Liquidity = int
type SqrtPriceX96 = int
type Tick = int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class UniswapV3PoolState(AbstractPoolState):
    liquidity: Liquidity
    sqrt_price_x96: SqrtPriceX96
    tick: Tick
