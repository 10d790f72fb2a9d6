from typing import TYPE_CHECKING, ClassVar

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
from ammsync.uniswap.v2_types import UniswapV2PoolState

if TYPE_CHECKING:
    from ammsync.types.abstract import ChainClient


class UniswapV2Pool(AbstractLiquidityPool):
    """
    A constant product pool deployed by a Uniswap V2 style factory.

    The pool is created empty from its `PairCreated` event. The token decimals and reserves are
    populated by `refresh_state`.
    """

    variant: ClassVar[ExchangeVariant] = ExchangeVariant.UNISWAP_V2

    def __init__(
        self,
        address: str,
        token0: str,
        token1: str,
        *,
        factory: str,
        chain_id: ChainId,
        fee: int = 3000,
        token0_decimals: int | None = None,
        token1_decimals: int | None = None,
        state: UniswapV2PoolState | None = None,
    ) -> None:
        self.address = get_checksum_address(address)
        self.token0 = get_checksum_address(token0)
        self.token1 = get_checksum_address(token1)
        self.factory = get_checksum_address(factory)
        self.chain_id = chain_id
        self.fee = fee
        self.token0_decimals = token0_decimals
        self.token1_decimals = token1_decimals
        self._state = (
            state
            if state is not None
            else UniswapV2PoolState(
                address=self.address,
                block=None,
                reserves_token0=0,
                reserves_token1=0,
            )
        )
        self.name = f"{self.token0}-{self.token1} (V2, {self.fee / 10_000:.2f}%)"

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(address={self.address}, token0={self.token0}, token1={self.token1})"  # noqa:E501

    @property
    def reserves_token0(self) -> int:
        return self.state.reserves_token0

    @property
    def reserves_token1(self) -> int:
        return self.state.reserves_token1

    @property
    def state(self) -> UniswapV2PoolState:
        return self._state

    @property
    def update_block(self) -> BlockNumber | None:
        return self.state.block

    async def get_reserves(
        self,
        client: "ChainClient",
        block_identifier: BlockIdentifier | None = None,
    ) -> tuple[int, int]:
        reserves_token0, reserves_token1, *_ = await raw_call(
            client=client,
            address=self.address,
            calldata=encode_function_calldata(
                function_prototype="getReserves()",
                function_arguments=None,
            ),
            return_types=["uint112", "uint112", "uint32"],
            block_identifier=block_identifier,
        )
        return reserves_token0, reserves_token1

    async def refresh_state(
        self,
        client: "ChainClient",
        block_identifier: BlockIdentifier | None = None,
    ) -> None:
        """
        Retrieve the token decimals and the reserves at the given block (or the latest block), and
        record them.
        """

        try:
            token0_decimals = await get_token_decimals(client, self.token0, block_identifier)
            token1_decimals = await get_token_decimals(client, self.token1, block_identifier)
            reserves0, reserves1 = await self.get_reserves(client, block_identifier)
        except DecodingError as exc:
            raise PoolStateError(self.address) from exc

        self.token0_decimals = token0_decimals
        self.token1_decimals = token1_decimals
        self._state = UniswapV2PoolState(
            address=self.address,
            block=block_identifier if isinstance(block_identifier, int) else None,
            reserves_token0=reserves0,
            reserves_token1=reserves1,
        )
        logger.debug(f"[{self.address}] reserves {reserves0} / {reserves1}")
