from dataclasses import dataclass

import eth_abi.abi
from eth_abi.exceptions import DecodingError
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3.types import LogReceipt

from ammsync.exceptions import AmmSyncValueError
from ammsync.exceptions.exchange import PoolDecodeError
from ammsync.functions import event_topic, topic_to_address
from ammsync.types.abstract import AbstractExchangeDeployment
from ammsync.types.aliases import BlockNumber
from ammsync.uniswap.types import ExchangeVariant
from ammsync.uniswap.v2_liquidity_pool import UniswapV2Pool
from ammsync.uniswap.v3_liquidity_pool import UniswapV3Pool

type Pool = UniswapV2Pool | UniswapV3Pool


@dataclass(slots=True, frozen=True)
class Exchange(AbstractExchangeDeployment):
    """
    A pool factory and the metadata needed to crawl its pool creation events.
    """

    factory_address: ChecksumAddress
    creation_block: BlockNumber
    variant: ExchangeVariant

    @property
    def pool_created_topic(self) -> HexBytes:
        return event_topic(self.variant.pool_created_event)

    def decode_pool(self, log: LogReceipt) -> Pool:
        """
        Build an empty pool from a pool creation log emitted by this factory.

        Raises `PoolDecodeError` if the log is not a creation event for this variant, or if its
        topics or data are malformed.
        """

        try:
            topics = [HexBytes(topic) for topic in log["topics"]]
            if not topics or topics[0] != self.pool_created_topic:
                raise PoolDecodeError(reason="log is not a pool creation event")

            token0 = topic_to_address(topics[1])
            token1 = topic_to_address(topics[2])
            data = HexBytes(log["data"])

            match self.variant:
                case ExchangeVariant.UNISWAP_V2:
                    pool_address, _ = eth_abi.abi.decode(types=["address", "uint256"], data=data)
                    return UniswapV2Pool(
                        address=pool_address,
                        token0=token0,
                        token1=token1,
                        factory=self.factory_address,
                        chain_id=self.chain_id,
                    )
                case ExchangeVariant.UNISWAP_V3:
                    (fee,) = eth_abi.abi.decode(types=["uint24"], data=topics[3])
                    tick_spacing, pool_address = eth_abi.abi.decode(
                        types=["int24", "address"], data=data
                    )
                    return UniswapV3Pool(
                        address=pool_address,
                        token0=token0,
                        token1=token1,
                        factory=self.factory_address,
                        chain_id=self.chain_id,
                        fee=fee,
                        tick_spacing=tick_spacing,
                    )
        except (DecodingError, AmmSyncValueError, IndexError, KeyError, ValueError) as exc:
            raise PoolDecodeError(reason=str(exc) or exc.__class__.__name__) from exc
