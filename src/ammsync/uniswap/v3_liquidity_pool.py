from typing import TYPE_CHECKING, ClassVar

import eth_abi.abi
from eth_abi.exceptions import DecodingError
from eth_typing import BlockIdentifier

from ammsync.checksum_cache import get_checksum_address
from ammsync.erc20 import get_token_decimals
from ammsync.exceptions.liquidity_pool import PoolStateError
from ammsync.functions import encode_function_calldata, raw_call
from ammsync.logging import logger
from ammsync.types.abstract import AbstractLiquidityPool
from ammsync.types.aliases import BlockNumber, ChainId
from ammsync.uniswap.types import ExchangeVariant
from ammsync.uniswap.v3_types import Liquidity, Pip, SqrtPriceX96, Tick, UniswapV3PoolState

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


class UniswapV3Pool(AbstractLiquidityPool):
    """
    A concentrated liquidity pool deployed by a Uniswap V3 style factory.

    The fee and tick spacing are immutable and taken from the `PoolCreated` event. The token
    decimals, current price, tick, and in-range liquidity are populated by `refresh_state`.
    """

    variant: ClassVar[ExchangeVariant] = ExchangeVariant.UNISWAP_V3

    # Only the leading price & tick words of slot0 are read. Forks append or resize the trailing
    # fields (e.g. the protocol fee), which would break a full struct decode.
    SLOT0_LEADING_TYPES = ("uint160", "int24")

    def __init__(
        self,
        address: str,
        token0: str,
        token1: str,
        *,
        factory: str,
        chain_id: ChainId,
        fee: Pip,
        tick_spacing: int,
        token0_decimals: int | None = None,
        token1_decimals: int | None = None,
        state: UniswapV3PoolState | None = None,
    ) -> None:
        self.address = get_checksum_address(address)
        self.token0 = get_checksum_address(token0)
        self.token1 = get_checksum_address(token1)
        self.factory = get_checksum_address(factory)
        self.chain_id = chain_id
        self.fee = fee
        self.tick_spacing = tick_spacing
        self.token0_decimals = token0_decimals
        self.token1_decimals = token1_decimals
        self._state = (
            state
            if state is not None
            else UniswapV3PoolState(
                address=self.address,
                block=None,
                liquidity=0,
                sqrt_price_x96=0,
                tick=0,
            )
        )
        self.name = f"{self.token0}-{self.token1} (V3, {self.fee / 10_000:.2f}%)"

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(address={self.address}, token0={self.token0}, token1={self.token1}, fee={self.fee})"  # noqa:E501

    @property
    def liquidity(self) -> Liquidity:
        return self.state.liquidity

    @property
    def sqrt_price_x96(self) -> SqrtPriceX96:
        return self.state.sqrt_price_x96

    @property
    def tick(self) -> Tick:
        return self.state.tick

    @property
    def state(self) -> UniswapV3PoolState:
        return self._state

    @property
    def update_block(self) -> BlockNumber | None:
        return self.state.block

    async def get_mutable_pool_values(
        self,
        client: "ChainClient",
        block_identifier: BlockIdentifier | None = None,
    ) -> tuple[SqrtPriceX96, Tick, Liquidity]:
        slot0 = await client.call(
            address=self.address,
            calldata=encode_function_calldata(
                function_prototype="slot0()",
                function_arguments=None,
            ),
            block_identifier=block_identifier,
        )
        price, tick = eth_abi.abi.decode(types=self.SLOT0_LEADING_TYPES, data=slot0[:64])

        (liquidity,) = await raw_call(
            client=client,
            address=self.address,
            calldata=encode_function_calldata(
                function_prototype="liquidity()",
                function_arguments=None,
            ),
            return_types=["uint128"],
            block_identifier=block_identifier,
        )
        return price, tick, liquidity

    async def refresh_state(
        self,
        client: "ChainClient",
        block_identifier: BlockIdentifier | None = None,
    ) -> None:
        """
        Retrieve the token decimals, slot0 price & tick, and the in-range liquidity at the given
        block (or the latest block), and record them.
        """

        try:
            token0_decimals = await get_token_decimals(client, self.token0, block_identifier)
            token1_decimals = await get_token_decimals(client, self.token1, block_identifier)
            sqrt_price_x96, tick, liquidity = await self.get_mutable_pool_values(
                client, block_identifier
            )
        except DecodingError as exc:
            # Contracts differ slightly across Uniswap V3 forks, so decoding may fail. Catch this
            # here and raise as a pool-specific exception
            raise PoolStateError(self.address) from exc

        self.token0_decimals = token0_decimals
        self.token1_decimals = token1_decimals
        self._state = UniswapV3PoolState(
            address=self.address,
            block=block_identifier if isinstance(block_identifier, int) else None,
            liquidity=liquidity,
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
        )
        logger.debug(f"[{self.address}] sqrt_price_x96={sqrt_price_x96}, tick={tick}")
